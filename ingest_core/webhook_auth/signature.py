"""
Signature Functions
===================
HMAC-SHA256 signature computation and verification for n8n webhook callbacks.

The signing string is ``"{timestamp}.{payload}"`` so the timestamp is bound
into the signature and cannot be refreshed on a captured request.
"""

import hmac
import hashlib
import re
import time
from typing import Optional, Union

# Configuration
REPLAY_WINDOW_SECONDS = 300  # 5 minutes
MIN_SECRET_LENGTH = 32
SIGNATURE_ALGORITHM = "sha256"
SIGNATURE_PREFIX = "sha256="

_HEX_RE = re.compile(r"[0-9a-fA-F]*")

BytesLike = Union[bytes, str]


def _to_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def compute_signature(payload: BytesLike, timestamp: int, secret: BytesLike) -> str:
    """
    Compute the HMAC-SHA256 signature of a webhook payload.

    Args:
        payload: Raw request body, exactly as sent on the wire
        timestamp: Unix timestamp in seconds
        secret: Shared webhook secret

    Returns:
        Lowercase hex-encoded HMAC-SHA256 signature (64 characters)
    """
    message = f"{int(timestamp)}.".encode("utf-8") + _to_bytes(payload)
    return hmac.new(_to_bytes(secret), message, hashlib.sha256).hexdigest()


def generate_signature(payload: BytesLike, timestamp: int, secret: BytesLike) -> str:
    """Sign a payload on the sending side. Same output as compute_signature."""
    return compute_signature(payload, timestamp, secret)


def strip_signature_prefix(value: str) -> str:
    """Remove an optional ``sha256=`` prefix from a signature header value."""
    if value.startswith(SIGNATURE_PREFIX):
        return value[len(SIGNATURE_PREFIX):]
    return value


def decode_signature(value: str) -> Optional[bytes]:
    """
    Decode a hex signature to raw bytes.

    Returns None instead of raising when the value is not strict hex
    (odd length, non-hex characters, whitespace).
    """
    if len(value) % 2 or not _HEX_RE.fullmatch(value):
        return None
    return bytes.fromhex(value)


def verify_signature(
    payload: BytesLike,
    timestamp: int,
    provided_signature: str,
    secret: BytesLike,
) -> bool:
    """
    Verify a webhook signature using constant-time comparison.

    Args:
        payload: Raw request body bytes
        timestamp: Timestamp the sender signed
        provided_signature: ``sha256=<hex>`` or bare ``<hex>``
        secret: Shared webhook secret

    Returns:
        True if the signature is valid
    """
    provided = decode_signature(strip_signature_prefix(provided_signature))
    if provided is None:
        return False

    expected = bytes.fromhex(compute_signature(payload, timestamp, secret))
    # Length is public (always 32 bytes for SHA-256), not secret-dependent
    if len(provided) != len(expected):
        return False

    return hmac.compare_digest(expected, provided)


def timestamp_age(timestamp: int, now: int) -> int:
    """Absolute distance in seconds between a claimed timestamp and now."""
    return abs(int(now) - int(timestamp))


def check_timestamp_skew(
    timestamp: int,
    now: Optional[int] = None,
    max_skew: int = REPLAY_WINDOW_SECONDS,
) -> bool:
    """
    Check if timestamp is within the replay window.

    The window is symmetric: future-dated timestamps are accepted up to
    ``max_skew`` seconds ahead.
    """
    if now is None:
        now = int(time.time())
    return timestamp_age(timestamp, now) <= max_skew


def secrets_match(provided: BytesLike, expected: BytesLike) -> bool:
    """Compare a legacy shared secret with the configured one in constant time."""
    provided_bytes = _to_bytes(provided)
    expected_bytes = _to_bytes(expected)
    if len(provided_bytes) != len(expected_bytes):
        return False
    return hmac.compare_digest(provided_bytes, expected_bytes)
