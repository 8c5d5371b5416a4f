"""
Webhook Gate
============
Decides whether an inbound n8n callback may reach application logic.

Decision order:
1. No secret configured: accept in development, reject (500) in production
2. Weak secret: warn and continue
3. HMAC headers present: timestamp format, replay window, signature
4. Legacy secret present (deprecated): constant-time comparison
5. Nothing present: reject (401)
"""

import re
import time
from typing import Callable, Optional

import structlog

from .config import WebhookAuthConfig
from .headers import SIGNATURE_HEADER, TIMESTAMP_HEADER, classify_credentials
from .models import (
    CredentialSource,
    Credentials,
    RejectReason,
    VerificationResult,
    WebhookRequest,
)
from .signature import secrets_match, timestamp_age, verify_signature

logger = structlog.get_logger(__name__)

_TIMESTAMP_RE = re.compile(r"[0-9]{1,20}")


def parse_timestamp(value: str) -> Optional[int]:
    """Parse a decimal Unix timestamp header; None if malformed."""
    if not _TIMESTAMP_RE.fullmatch(value):
        return None
    return int(value)


class WebhookGate:
    """
    Authentication gate for inbound webhooks.

    Stateless after construction and safe to share between concurrent
    requests. Never raises on malformed client input; every outcome is a
    VerificationResult.
    """

    __slots__ = ("_config", "_secret", "_clock")

    def __init__(
        self,
        config: Optional[WebhookAuthConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        config = config or WebhookAuthConfig.from_env()
        self._config = config
        self._secret = config.secret.encode("utf-8") if config.secret else None
        self._clock = clock

        if self._secret is None:
            if config.is_production:
                logger.error(
                    "webhook_secret_missing_in_production",
                    environment=config.environment,
                )
            else:
                logger.warning(
                    "webhook_auth_disabled",
                    environment=config.environment,
                    reason="no_secret_configured",
                )

    @property
    def config(self) -> WebhookAuthConfig:
        return self._config

    def authorize(
        self,
        request: WebhookRequest,
        now: Optional[int] = None,
    ) -> VerificationResult:
        """
        Authorize one webhook request.

        Args:
            request: Headers and raw body of the inbound request
            now: Current Unix time in seconds (defaults to the gate's clock)

        Returns:
            Accepted or Rejected VerificationResult
        """
        config = self._config

        if self._secret is None:
            if config.is_production:
                return self._rejected(
                    VerificationResult.reject(
                        RejectReason.SERVER_MISCONFIGURED,
                        "Webhook authentication is not configured",
                    )
                )
            logger.warning(
                "webhook_auth_bypassed",
                environment=config.environment,
                reason="no_secret_configured",
            )
            return VerificationResult.accept()

        if config.secret_is_weak:
            logger.warning(
                "webhook_secret_too_short",
                length=len(self._secret),
                recommended=config.min_secret_length,
            )

        credentials = classify_credentials(request.headers)
        if now is None:
            now = int(self._clock())

        source = credentials.source
        if source == CredentialSource.HMAC_HEADERS:
            return self._authorize_hmac(credentials, request.body, now)
        if source in (CredentialSource.LEGACY_HEADER, CredentialSource.LEGACY_BEARER):
            return self._authorize_legacy(credentials)

        return self._rejected(
            VerificationResult.reject(
                RejectReason.MISSING_CREDENTIALS,
                "Unauthorized: Missing webhook authentication",
                hint=f"Send {SIGNATURE_HEADER} and {TIMESTAMP_HEADER} headers",
            )
        )

    def _authorize_hmac(
        self,
        credentials: Credentials,
        body: bytes,
        now: int,
    ) -> VerificationResult:
        source = credentials.source
        timestamp = parse_timestamp(credentials.timestamp)
        if timestamp is None:
            return self._rejected(
                VerificationResult.reject(
                    RejectReason.MALFORMED_TIMESTAMP,
                    "Invalid timestamp format",
                    source=source,
                )
            )

        window = self._config.replay_window_seconds
        age = timestamp_age(timestamp, now)
        if age > window:
            return self._rejected(
                VerificationResult.reject(
                    RejectReason.REPLAY_WINDOW_EXCEEDED,
                    "Webhook timestamp too old (possible replay attack)",
                    max_age=window,
                    source=source,
                ),
                claimed_timestamp=timestamp,
                age=age,
            )

        if not verify_signature(body, timestamp, credentials.signature, self._secret):
            return self._rejected(
                VerificationResult.reject(
                    RejectReason.INVALID_SIGNATURE,
                    "Unauthorized: Invalid webhook signature",
                    source=source,
                ),
                claimed_timestamp=timestamp,
                age=age,
            )

        logger.debug("webhook_authenticated", mode="hmac", age=age)
        return VerificationResult.accept(source)

    def _authorize_legacy(self, credentials: Credentials) -> VerificationResult:
        source = credentials.source
        logger.warning(
            "webhook_legacy_auth_deprecated",
            source=source.value,
            message=f"Shared-secret webhook auth is deprecated, sign requests with "
                    f"{SIGNATURE_HEADER} and {TIMESTAMP_HEADER}",
        )

        if not secrets_match(credentials.legacy_secret, self._secret):
            return self._rejected(
                VerificationResult.reject(
                    RejectReason.INVALID_LEGACY_SECRET,
                    "Unauthorized: Invalid webhook secret",
                    source=source,
                )
            )

        logger.debug("webhook_authenticated", mode="legacy", source=source.value)
        return VerificationResult.accept(source)

    @staticmethod
    def _rejected(result: VerificationResult, **context) -> VerificationResult:
        log = logger.error if result.status_code >= 500 else logger.warning
        log(
            "webhook_rejected",
            reason=result.reason.value,
            status_code=result.status_code,
            source=result.source.value,
            **context,
        )
        return result
