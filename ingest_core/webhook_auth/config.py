"""
Webhook Auth Configuration
==========================
Secret and environment settings, read once at process start.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .signature import MIN_SECRET_LENGTH, REPLAY_WINDOW_SECONDS

SECRET_ENV_VAR = "N8N_WEBHOOK_SECRET"
ENVIRONMENT_ENV_VARS = ("APP_ENV", "NODE_ENV")
DEFAULT_ENVIRONMENT = "development"
PRODUCTION = "production"


@dataclass(frozen=True)
class WebhookAuthConfig:
    """Configuration injected into the webhook gate."""
    secret: Optional[str] = field(default=None, repr=False)
    environment: str = DEFAULT_ENVIRONMENT
    replay_window_seconds: int = REPLAY_WINDOW_SECONDS
    min_secret_length: int = MIN_SECRET_LENGTH

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == PRODUCTION

    @property
    def has_secret(self) -> bool:
        return bool(self.secret)

    @property
    def secret_is_weak(self) -> bool:
        """True when a secret is set but shorter than the recommended length."""
        return self.has_secret and len(self.secret.encode("utf-8")) < self.min_secret_length

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WebhookAuthConfig":
        """
        Load configuration from environment variables.

        N8N_WEBHOOK_SECRET: shared secret (empty means unset)
        APP_ENV / NODE_ENV: environment name, ``production`` enables lockout
        """
        if environ is None:
            environ = os.environ

        secret = environ.get(SECRET_ENV_VAR) or None

        environment = DEFAULT_ENVIRONMENT
        for name in ENVIRONMENT_ENV_VARS:
            if environ.get(name):
                environment = environ[name]
                break

        return cls(secret=secret, environment=environment)
