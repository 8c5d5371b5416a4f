"""
Webhook Authentication Module
=============================
HMAC-signed n8n callbacks with replay protection and a deprecated
shared-secret fallback.
"""

from .models import (
    AuthDecision,
    RejectReason,
    REJECT_STATUS,
    CredentialSource,
    Credentials,
    WebhookRequest,
    VerificationResult,
)
from .signature import (
    compute_signature,
    generate_signature,
    verify_signature,
    strip_signature_prefix,
    decode_signature,
    check_timestamp_skew,
    timestamp_age,
    secrets_match,
    REPLAY_WINDOW_SECONDS,
    MIN_SECRET_LENGTH,
    SIGNATURE_ALGORITHM,
    SIGNATURE_PREFIX,
)
from .headers import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    LEGACY_SECRET_HEADER,
    AUTHORIZATION_HEADER,
    classify_credentials,
    extract_bearer_token,
    create_signed_headers,
)
from .config import WebhookAuthConfig
from .gate import WebhookGate, parse_timestamp

__all__ = [
    # Models
    "AuthDecision",
    "RejectReason",
    "REJECT_STATUS",
    "CredentialSource",
    "Credentials",
    "WebhookRequest",
    "VerificationResult",
    # Signature
    "compute_signature",
    "generate_signature",
    "verify_signature",
    "strip_signature_prefix",
    "decode_signature",
    "check_timestamp_skew",
    "timestamp_age",
    "secrets_match",
    "REPLAY_WINDOW_SECONDS",
    "MIN_SECRET_LENGTH",
    "SIGNATURE_ALGORITHM",
    "SIGNATURE_PREFIX",
    # Headers
    "SIGNATURE_HEADER",
    "TIMESTAMP_HEADER",
    "LEGACY_SECRET_HEADER",
    "AUTHORIZATION_HEADER",
    "classify_credentials",
    "extract_bearer_token",
    "create_signed_headers",
    # Config
    "WebhookAuthConfig",
    # Gate
    "WebhookGate",
    "parse_timestamp",
]
