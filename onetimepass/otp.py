"""
HOTP and TOTP token generation and verification.

Implements RFC 4226 (HMAC-based one-time passwords) and RFC 6238
(time-based one-time passwords). Every function here is a pure function of
its arguments, apart from reading the system clock when no ``now`` is
given, and is safe to call concurrently.

Preventing replay is the caller's job:

- HOTP: read the stored ``last`` counter, call ``check_hotp`` and persist the
  accepted counter as one atomic unit per secret.
- TOTP: only accept the outcome if its counter is strictly greater than the
  counter recorded at the previous successful verification.

``onetimepass.verifier.OTPVerifier`` does both against a storage adapter.
"""

import hashlib
import hmac
import logging
import math
import secrets
import struct
import time
from datetime import datetime

from onetimepass.config import DEFAULT_CONFIG, OTPConfig
from onetimepass.exceptions import InvalidArgument, InvalidParameter
from onetimepass.schemas import REJECTED, Accepted, VerificationOutcome
from onetimepass.secret import secret_key

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 6
MAX_COUNTER = 2**64 - 1

# Unix seconds, or a timezone-aware datetime
Timestamp = int | float | datetime


def valid_token(token: str, token_length: int) -> bool:
    """
    Check that a token has the right shape.

    The token must be a string of exactly ``token_length`` ASCII digits and
    ``token_length`` must be at least 6.

    Raises:
        InvalidArgument: If ``token`` is not a string
    """
    if not isinstance(token, str):
        raise InvalidArgument("The token should be a string")

    return (
        token_length >= MIN_TOKEN_LENGTH
        and len(token) == token_length
        and all("0" <= char <= "9" for char in token)
    )


def generate_hotp(secret: str | bytes, counter: int, token_length: int = 6) -> str:
    """
    Generate an HMAC-based one-time password.

    Args:
        secret: Raw key bytes, or the Base32 encoded secret
        counter: Non-negative counter value, below 2**64
        token_length: Number of digits in the token

    Returns:
        Token of exactly ``token_length`` digits, zero padded

    Raises:
        InvalidParameter: If the counter is out of range or the secret
            cannot be decoded

    Example:
        >>> generate_hotp(b"12345678901234567890", 0)
        '755224'
    """
    if not 0 <= counter <= MAX_COUNTER:
        raise InvalidParameter(f"Counter must be between 0 and 2**64 - 1, got {counter}")

    digest = hmac.new(
        secret_key(secret), struct.pack(">Q", counter), hashlib.sha1
    ).digest()

    # Dynamic truncation, RFC 4226 section 5.3
    offset = digest[19] & 0x0F
    (truncated,) = struct.unpack(">I", digest[offset : offset + 4])
    truncated &= 0x7FFFFFFF

    return str(truncated % 10**token_length).zfill(token_length)


def interval_count(interval_length: int = 30, now: Timestamp | None = None) -> int:
    """
    Return the index of the time step containing ``now``.

    ``now`` is a Unix timestamp or an aware datetime; the system clock is
    read when it is omitted.

    Raises:
        InvalidParameter: If ``interval_length`` is not positive, or ``now``
            is a naive datetime (it would be read as local time)
    """
    if interval_length <= 0:
        raise InvalidParameter("interval_length must be a positive number of seconds")

    if now is None:
        now = time.time()
    elif isinstance(now, datetime):
        if now.tzinfo is None:
            raise InvalidParameter("now must be a timezone-aware datetime")
        now = now.timestamp()

    return math.floor(now / interval_length)


def generate_totp(
    secret: str | bytes,
    interval_length: int = 30,
    token_length: int = 6,
    now: Timestamp | None = None,
) -> str:
    """
    Generate a time-based one-time password.

    Args:
        secret: Raw key bytes, or the Base32 encoded secret
        interval_length: Length of each time step, in seconds
        token_length: Number of digits in the token
        now: Time to generate the token for, defaults to the current time

    Returns:
        Token of exactly ``token_length`` digits
    """
    return generate_hotp(secret, interval_count(interval_length, now), token_length)


def check_hotp(
    token: str,
    secret: str | bytes,
    last: int,
    window: int | None = None,
    token_length: int | None = None,
    config: OTPConfig = DEFAULT_CONFIG,
) -> VerificationOutcome:
    """
    Verify an HMAC-based one-time password.

    Counters ``last + 1`` up to ``last + window`` are tried in increasing
    order. The search never looks back, so a token for an already used
    counter is rejected. A token for a counter beyond ``last + window``
    is rejected as well: there is no resynchronisation beyond the window.

    Args:
        token: Token submitted by the user
        secret: Raw key bytes, or the Base32 encoded secret
        last: Counter of the last accepted token, stored server-side
        window: Number of future counters to try, defaults to 3
        token_length: Number of digits in the token, defaults to 6
        config: Defaults for ``window`` and ``token_length``

    Returns:
        ``Accepted`` with the matching counter, or ``Rejected``

    Example:
        >>> check_hotp("287082", b"12345678901234567890", last=0)
        Accepted(status='accepted', counter=1)
    """
    window = config.hotp_window if window is None else window
    token_length = config.token_length if token_length is None else token_length

    if not valid_token(token, token_length):
        logger.debug("Rejected malformed HOTP token")
        return REJECTED

    # Counters are 8 bytes; a window reaching past 2**64 - 1 is cut short
    return _scan(
        token, secret, last + 1, min(last + window, MAX_COUNTER), token_length
    )


def check_totp(
    token: str,
    secret: str | bytes,
    interval_length: int | None = None,
    window: int | None = None,
    token_length: int | None = None,
    now: Timestamp | None = None,
    config: OTPConfig = DEFAULT_CONFIG,
) -> VerificationOutcome:
    """
    Verify a time-based one-time password.

    Time steps from ``window`` before to ``window`` after the current one
    are tried in increasing order. A window of 1 tolerates one interval of
    clock skew or transmission delay in either direction; increase it if
    client clocks drift further.

    A token stays valid for its whole window, so the caller must only
    accept an outcome whose counter is strictly greater than the one
    recorded for the previous successful verification.

    Args:
        token: Token submitted by the user
        secret: Raw key bytes, or the Base32 encoded secret
        interval_length: Length of each time step in seconds, defaults to 30
        window: Number of intervals before and after now, defaults to 1
        token_length: Number of digits in the token, defaults to 6
        now: Time of the verification, defaults to the current time
        config: Defaults for the options above

    Returns:
        ``Accepted`` with the matching time step, or ``Rejected``
    """
    interval_length = (
        config.interval_length if interval_length is None else interval_length
    )
    window = config.totp_window if window is None else window
    token_length = config.token_length if token_length is None else token_length

    if not valid_token(token, token_length):
        logger.debug("Rejected malformed TOTP token")
        return REJECTED

    current = interval_count(interval_length, now)
    return _scan(token, secret, max(current - window, 0), current + window, token_length)


def _scan(
    token: str, secret: str | bytes, first: int, last: int, token_length: int
) -> VerificationOutcome:
    key = secret_key(secret)
    submitted = token.encode("ascii")

    for counter in range(first, last + 1):
        expected = generate_hotp(key, counter, token_length)
        if secrets.compare_digest(expected.encode("ascii"), submitted):
            logger.debug("Token matched counter %d", counter)
            return Accepted(counter=counter)

    logger.debug("No match for counters %d..%d", first, last)
    return REJECTED
