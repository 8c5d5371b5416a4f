"""
Webhook Auth Models
===================
Data models and enums for webhook authentication.
"""

from typing import Any, Dict, Mapping, Optional
from dataclasses import dataclass, field
from enum import Enum


class AuthDecision(str, Enum):
    """Gate decision types."""
    ACCEPT = "ACCEPT"
    REJECT = "REJECT"


class RejectReason(str, Enum):
    """Reasons for rejecting a webhook request."""
    SERVER_MISCONFIGURED = "server_misconfigured"
    MALFORMED_TIMESTAMP = "malformed_timestamp"
    REPLAY_WINDOW_EXCEEDED = "replay_window_exceeded"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_LEGACY_SECRET = "invalid_legacy_secret"
    MISSING_CREDENTIALS = "missing_credentials"


REJECT_STATUS: Dict[RejectReason, int] = {
    RejectReason.SERVER_MISCONFIGURED: 500,
    RejectReason.MALFORMED_TIMESTAMP: 400,
    RejectReason.REPLAY_WINDOW_EXCEEDED: 401,
    RejectReason.INVALID_SIGNATURE: 401,
    RejectReason.INVALID_LEGACY_SECRET: 401,
    RejectReason.MISSING_CREDENTIALS: 401,
}


class CredentialSource(str, Enum):
    """Where the credential for a request came from."""
    HMAC_HEADERS = "hmac_headers"
    LEGACY_HEADER = "legacy_header"
    LEGACY_BEARER = "legacy_bearer"
    NONE = "none"


@dataclass(frozen=True)
class Credentials:
    """Credentials found on a request, resolved once per request."""
    source: CredentialSource
    signature: Optional[str] = None
    timestamp: Optional[str] = None
    legacy_secret: Optional[str] = field(default=None, repr=False)

    @property
    def is_legacy(self) -> bool:
        return self.source in (CredentialSource.LEGACY_HEADER, CredentialSource.LEGACY_BEARER)


@dataclass(frozen=True)
class WebhookRequest:
    """An inbound webhook: headers plus the exact raw body bytes that were signed."""
    headers: Mapping[str, str]
    body: bytes = b""


@dataclass(frozen=True)
class VerificationResult:
    """Result of a webhook authentication check."""
    decision: AuthDecision
    reason: Optional[RejectReason] = None
    status_code: int = 200
    message: Optional[str] = None
    hint: Optional[str] = None
    max_age: Optional[int] = None
    source: CredentialSource = CredentialSource.NONE

    @property
    def accepted(self) -> bool:
        return self.decision == AuthDecision.ACCEPT

    @classmethod
    def accept(cls, source: CredentialSource = CredentialSource.NONE) -> "VerificationResult":
        return cls(decision=AuthDecision.ACCEPT, source=source)

    @classmethod
    def reject(
        cls,
        reason: RejectReason,
        message: str,
        *,
        hint: Optional[str] = None,
        max_age: Optional[int] = None,
        source: CredentialSource = CredentialSource.NONE,
    ) -> "VerificationResult":
        return cls(
            decision=AuthDecision.REJECT,
            reason=reason,
            status_code=REJECT_STATUS[reason],
            message=message,
            hint=hint,
            max_age=max_age,
            source=source,
        )

    def to_response_body(self) -> Dict[str, Any]:
        """
        Render the JSON body returned to the sender on rejection.

        Never contains the secret or the expected signature.
        """
        if self.accepted:
            return {"status": "ok"}

        body: Dict[str, Any] = {
            "error": self.message,
            "code": self.reason.value,
        }
        if self.hint:
            body["hint"] = self.hint
        if self.max_age is not None:
            body["maxAge"] = self.max_age
        return body
