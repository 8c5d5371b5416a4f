"""
Header Functions
=================
Functions for classifying inbound webhook credentials and creating signed
headers for senders.
"""

import time
from typing import Dict, Mapping, Optional

from .models import CredentialSource, Credentials
from .signature import BytesLike, SIGNATURE_PREFIX, compute_signature

SIGNATURE_HEADER = "X-Webhook-Signature"
TIMESTAMP_HEADER = "X-Webhook-Timestamp"
LEGACY_SECRET_HEADER = "X-Webhook-Secret"
AUTHORIZATION_HEADER = "Authorization"

BEARER_SCHEME = "bearer"


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup; empty values count as absent."""
    value = headers.get(name)
    if value is None:
        lowered = name.lower()
        for key, candidate in headers.items():
            if key.lower() == lowered:
                value = candidate
                break
    if value is None:
        return None
    value = value.strip()
    return value or None


def extract_bearer_token(value: Optional[str]) -> Optional[str]:
    """
    Extract the token from an ``Authorization: Bearer <token>`` value.

    Returns None for other schemes or an empty token.
    """
    if not value:
        return None
    scheme, _, token = value.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None
    return token.strip() or None


def classify_credentials(headers: Mapping[str, str]) -> Credentials:
    """
    Decide which credential a request carries.

    HMAC headers take precedence: once both are present the legacy headers
    are not looked at. A request with only one of the two HMAC headers is
    classified as carrying no credentials.

    Args:
        headers: Request headers (any mapping; lookup is case-insensitive)

    Returns:
        Credentials tagged with their CredentialSource
    """
    signature = _header(headers, SIGNATURE_HEADER)
    timestamp = _header(headers, TIMESTAMP_HEADER)

    if signature and timestamp:
        return Credentials(
            source=CredentialSource.HMAC_HEADERS,
            signature=signature,
            timestamp=timestamp,
        )
    if signature or timestamp:
        return Credentials(source=CredentialSource.NONE)

    legacy = _header(headers, LEGACY_SECRET_HEADER)
    if legacy:
        return Credentials(source=CredentialSource.LEGACY_HEADER, legacy_secret=legacy)

    bearer = extract_bearer_token(_header(headers, AUTHORIZATION_HEADER))
    if bearer:
        return Credentials(source=CredentialSource.LEGACY_BEARER, legacy_secret=bearer)

    return Credentials(source=CredentialSource.NONE)


def create_signed_headers(
    payload: BytesLike,
    secret: BytesLike,
    timestamp: Optional[int] = None,
) -> Dict[str, str]:
    """
    Create headers for a signed webhook delivery.

    Args:
        payload: Exact body bytes that will be sent
        secret: Shared webhook secret
        timestamp: Unix seconds (defaults to now)

    Returns:
        Dictionary of headers to include in the request
    """
    if timestamp is None:
        timestamp = int(time.time())
    signature = compute_signature(payload, timestamp, secret)

    return {
        SIGNATURE_HEADER: f"{SIGNATURE_PREFIX}{signature}",
        TIMESTAMP_HEADER: str(int(timestamp)),
    }
