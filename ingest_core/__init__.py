"""
Ingest Core Library
===================
Shared utilities for the content-ingestion services.
"""

__version__ = "0.1.0"

# Webhook Auth
from ingest_core.webhook_auth import (
    compute_signature,
    generate_signature,
    verify_signature,
    create_signed_headers,
    classify_credentials,
    AuthDecision,
    RejectReason,
    CredentialSource,
    VerificationResult,
    WebhookRequest,
    WebhookAuthConfig,
    WebhookGate,
)

# HTTP integration
from ingest_core.errors import WebhookAuthError, install_error_handlers
from ingest_core.middleware import (
    WebhookAuthMiddleware,
    require_webhook_auth,
    protect_webhooks,
)

# Logging
from ingest_core.logging_config import setup_logging

__all__ = [
    "__version__",
    # Webhook Auth
    "compute_signature",
    "generate_signature",
    "verify_signature",
    "create_signed_headers",
    "classify_credentials",
    "AuthDecision",
    "RejectReason",
    "CredentialSource",
    "VerificationResult",
    "WebhookRequest",
    "WebhookAuthConfig",
    "WebhookGate",
    # HTTP
    "WebhookAuthError",
    "install_error_handlers",
    "WebhookAuthMiddleware",
    "require_webhook_auth",
    "protect_webhooks",
    # Logging
    "setup_logging",
]
