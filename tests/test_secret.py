"""Tests for secret generation and encoding."""

import base64

import pytest

from onetimepass.exceptions import InvalidParameter
from onetimepass.secret import (
    decode_secret,
    encode_secret,
    generate_secret,
    generate_secret_bytes,
)

BASE32_ALPHABET = set("ABCDEFGHIJKLMNOPQRSTUVWXYZ234567")


# ============================================================================
# Secret Generation Tests
# ============================================================================


class TestGenerateSecret:
    """Test suite for Base32 secret generation."""

    def test_default_length(self) -> None:
        """The default secret is 16 characters (80 bits)."""
        secret = generate_secret()
        assert len(secret) == 16
        assert len(decode_secret(secret)) == 10

    @pytest.mark.parametrize(
        ("secret_length", "byte_length"), [(16, 10), (26, 16), (32, 20), (64, 40)]
    )
    def test_supported_lengths(self, secret_length: int, byte_length: int) -> None:
        """Each supported length decodes to the expected number of bytes."""
        secret = generate_secret(secret_length)
        assert len(secret) == secret_length
        assert len(decode_secret(secret)) == byte_length

    @pytest.mark.parametrize("secret_length", [0, 10, 15, 20, 33, 128])
    def test_unsupported_lengths_raise(self, secret_length: int) -> None:
        """Unsupported lengths fail instead of being rounded."""
        with pytest.raises(InvalidParameter):
            generate_secret(secret_length)

    def test_uppercase_unpadded(self) -> None:
        """Secrets use the uppercase Base32 alphabet without padding."""
        secret = generate_secret(26)
        assert "=" not in secret
        assert set(secret) <= BASE32_ALPHABET

    def test_byte_length_is_not_secret_length(self) -> None:
        """Byte counts go through generate_secret_bytes, not generate_secret."""
        with pytest.raises(InvalidParameter):
            generate_secret(10)

        secret = encode_secret(generate_secret_bytes(10))
        assert len(secret) == 16

    def test_generates_different_secrets(self) -> None:
        """Each call draws fresh random bytes."""
        secrets = {generate_secret(32) for _ in range(20)}
        assert len(secrets) == 20


class TestGenerateSecretBytes:
    """Test suite for raw secret generation."""

    @pytest.mark.parametrize("byte_length", [10, 16, 20, 40])
    def test_supported_lengths(self, byte_length: int) -> None:
        """Returns exactly the requested number of bytes."""
        assert len(generate_secret_bytes(byte_length)) == byte_length

    @pytest.mark.parametrize("byte_length", [0, 8, 15, 32, 64])
    def test_unsupported_lengths_raise(self, byte_length: int) -> None:
        """Unsupported byte lengths fail."""
        with pytest.raises(InvalidParameter):
            generate_secret_bytes(byte_length)

    def test_invalid_parameter_is_value_error(self) -> None:
        """InvalidParameter can be caught as ValueError."""
        with pytest.raises(ValueError):
            generate_secret_bytes(15)


# ============================================================================
# Encoding Tests
# ============================================================================


class TestEncoding:
    """Test suite for Base32 helpers."""

    def test_encode_strips_padding(self) -> None:
        """Encoded secrets carry no padding characters."""
        raw = b"12345678901234567890"
        assert encode_secret(raw) == "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
        assert encode_secret(b"\x00" * 16) == base64.b32encode(b"\x00" * 16).decode().rstrip("=")

    def test_decode_restores_padding(self) -> None:
        """Unpadded 26 character secrets decode to 16 bytes."""
        raw = bytes(range(16))
        assert decode_secret(encode_secret(raw)) == raw

    def test_decode_lowercase(self) -> None:
        """Lowercase input is accepted."""
        assert decode_secret("gezdgnbvgy3tqojq") == b"1234567890"

    def test_decode_invalid_raises(self) -> None:
        """Characters outside the alphabet are rejected."""
        with pytest.raises(InvalidParameter):
            decode_secret("GEZDGNBV1Y3TQOJQ")
