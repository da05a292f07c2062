"""Shared secret generation and Base32 encoding."""

import base64
import binascii
import secrets

from onetimepass.exceptions import InvalidParameter

# Encoded Base32 length -> number of random bytes behind it
SECRET_LENGTHS: dict[int, int] = {16: 10, 26: 16, 32: 20, 64: 40}
SECRET_BYTE_LENGTHS = frozenset(SECRET_LENGTHS.values())


def generate_secret_bytes(byte_length: int) -> bytes:
    """
    Draw a raw secret from the operating system's CSPRNG.

    Args:
        byte_length: Number of bytes, one of 10, 16, 20 or 40

    Returns:
        ``byte_length`` random bytes

    Raises:
        InvalidParameter: If ``byte_length`` is not supported
    """
    if byte_length not in SECRET_BYTE_LENGTHS:
        raise InvalidParameter(
            f"Invalid secret byte length {byte_length!r}, "
            f"expected one of {sorted(SECRET_BYTE_LENGTHS)}"
        )
    return secrets.token_bytes(byte_length)


def generate_secret(secret_length: int = 16) -> str:
    """
    Generate a Base32 secret key to be shared with an authenticator app.

    The default creates a 16 character (80-bit) string, which Google
    Authenticator accepts. 26 character (128-bit), 32 character (160-bit)
    and 64 character (320-bit) secrets are also available.

    RFC 4226 requires the secret to be at least 128 bits long and
    recommends 160 bits.

    ``secret_length`` counts Base32 characters, not bytes: 16, 26, 32 and
    64 characters hold 10, 16, 20 and 40 random bytes. A byte count such as
    ``generate_secret(10)`` raises ``InvalidParameter``; encode the result of
    ``generate_secret_bytes(byte_length)`` with ``encode_secret`` to pick the
    size in bytes instead.

    Args:
        secret_length: Length of the encoded secret, one of 16, 26, 32 or 64

    Returns:
        Uppercase Base32 string without padding

    Raises:
        InvalidParameter: If ``secret_length`` is not supported

    Example:
        >>> len(generate_secret(32))
        32
    """
    if secret_length not in SECRET_LENGTHS:
        raise InvalidParameter(
            f"Invalid secret length {secret_length!r}, "
            f"expected one of {sorted(SECRET_LENGTHS)}"
        )
    return encode_secret(generate_secret_bytes(SECRET_LENGTHS[secret_length]))


def encode_secret(raw: bytes) -> str:
    """Encode raw secret bytes as unpadded uppercase Base32."""
    return base64.b32encode(raw).decode("ascii").rstrip("=")


def decode_secret(encoded: str) -> bytes:
    """
    Decode a Base32 secret back to its raw bytes.

    Lowercase input is accepted and missing padding is restored.

    Raises:
        InvalidParameter: If ``encoded`` is not valid Base32
    """
    padding = -len(encoded) % 8
    try:
        return base64.b32decode(encoded + "=" * padding, casefold=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidParameter("The secret is not a valid Base32 string") from e


def secret_key(secret: str | bytes) -> bytes:
    """Return the HMAC key for a secret given as raw bytes or Base32 text."""
    if isinstance(secret, bytes):
        return secret
    return decode_secret(secret)
