"""
Unit Tests for Webhook Signatures
=================================
Tests for HMAC signing, verification and timestamp checks.
"""

import hashlib
import hmac

import pytest

from ingest_core.webhook_auth import (
    check_timestamp_skew,
    compute_signature,
    decode_signature,
    generate_signature,
    secrets_match,
    strip_signature_prefix,
    timestamp_age,
    verify_signature,
)

from .conftest import NOW, PAYLOAD, SECRET


class TestComputeSignature:
    """Tests for signature computation."""

    def test_signature_is_64_lowercase_hex(self):
        """Should produce a SHA-256 hex digest."""
        sig = compute_signature(PAYLOAD, NOW, SECRET)

        assert len(sig) == 64
        assert sig == sig.lower()
        int(sig, 16)

    def test_signature_matches_reference_hmac(self):
        """Signing string is '{timestamp}.{payload}'."""
        expected = hmac.new(
            SECRET.encode(),
            f"{NOW}.".encode() + PAYLOAD,
            hashlib.sha256,
        ).hexdigest()

        assert compute_signature(PAYLOAD, NOW, SECRET) == expected

    def test_signature_is_deterministic(self):
        assert compute_signature(PAYLOAD, NOW, SECRET) == compute_signature(PAYLOAD, NOW, SECRET)

    def test_str_and_bytes_inputs_agree(self):
        """str payloads and secrets are UTF-8 encoded."""
        assert compute_signature(PAYLOAD.decode(), NOW, SECRET.encode()) == compute_signature(
            PAYLOAD, NOW, SECRET
        )

    def test_generate_signature_matches_compute(self):
        assert generate_signature(PAYLOAD, NOW, SECRET) == compute_signature(PAYLOAD, NOW, SECRET)


class TestVerifySignature:
    """Tests for constant-time verification."""

    def test_round_trip(self):
        sig = compute_signature(PAYLOAD, NOW, SECRET)
        assert verify_signature(PAYLOAD, NOW, sig, SECRET) is True

    def test_accepts_sha256_prefix(self):
        sig = compute_signature(PAYLOAD, NOW, SECRET)
        assert verify_signature(PAYLOAD, NOW, f"sha256={sig}", SECRET) is True

    def test_accepts_uppercase_hex(self):
        sig = compute_signature(PAYLOAD, NOW, SECRET)
        assert verify_signature(PAYLOAD, NOW, sig.upper(), SECRET) is True

    def test_tampered_payload_fails(self):
        sig = compute_signature(PAYLOAD, NOW, SECRET)
        tampered = bytearray(PAYLOAD)
        tampered[-2] ^= 0x01

        assert verify_signature(bytes(tampered), NOW, sig, SECRET) is False

    def test_changed_timestamp_fails(self):
        sig = compute_signature(PAYLOAD, NOW, SECRET)
        assert verify_signature(PAYLOAD, NOW + 1, sig, SECRET) is False

    def test_wrong_secret_fails(self):
        sig = compute_signature(PAYLOAD, NOW, SECRET)
        assert verify_signature(PAYLOAD, NOW, sig, "another-secret-entirely-0123456789") is False

    def test_reserialized_body_fails(self):
        """Whitespace changes from re-serialization invalidate the signature."""
        sig = compute_signature(PAYLOAD, NOW, SECRET)
        assert verify_signature(b'{"a": 1}', NOW, sig, SECRET) is False

    @pytest.mark.parametrize("provided", [
        "not-hex-at-all",
        "abc",
        "ab cd",
        "",
        "sha256=",
        "ab" * 16,
        "ab" * 33,
    ])
    def test_malformed_or_wrong_length_fails(self, provided):
        """Malformed hex and length mismatches return False without raising."""
        assert verify_signature(PAYLOAD, NOW, provided, SECRET) is False


class TestSignatureHelpers:
    """Tests for prefix stripping and hex decoding."""

    def test_strip_prefix(self):
        assert strip_signature_prefix("sha256=abcd") == "abcd"
        assert strip_signature_prefix("abcd") == "abcd"

    def test_strip_prefix_only_once(self):
        assert strip_signature_prefix("sha256=sha256=ab") == "sha256=ab"

    def test_decode_valid_hex(self):
        assert decode_signature("00ff") == b"\x00\xff"

    def test_decode_rejects_bad_input(self):
        assert decode_signature("0") is None
        assert decode_signature("zz") is None
        assert decode_signature("00 ff") is None


class TestTimestampWindow:
    """Tests for the replay window."""

    def test_age_is_absolute(self):
        assert timestamp_age(NOW - 10, NOW) == 10
        assert timestamp_age(NOW + 10, NOW) == 10

    def test_boundary(self):
        assert check_timestamp_skew(NOW - 300, now=NOW) is True
        assert check_timestamp_skew(NOW + 300, now=NOW) is True
        assert check_timestamp_skew(NOW - 301, now=NOW) is False
        assert check_timestamp_skew(NOW + 301, now=NOW) is False


class TestSecretsMatch:
    """Tests for legacy secret comparison."""

    def test_equal_secrets(self):
        assert secrets_match(SECRET, SECRET) is True

    def test_different_secrets(self):
        assert secrets_match("wrong-secret", SECRET) is False

    def test_same_length_different_secret(self):
        assert secrets_match(SECRET[:-1] + "X", SECRET) is False

    def test_non_ascii_input_does_not_raise(self):
        assert secrets_match("sécret", SECRET) is False
