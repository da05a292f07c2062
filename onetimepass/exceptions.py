"""Exception types raised by onetimepass."""


class OTPError(Exception):
    """Base class for all onetimepass errors."""


class InvalidParameter(OTPError, ValueError):
    """
    Raised when a parameter value is outside what the algorithm supports.

    Examples are an unsupported secret length, a negative counter, or a
    secret string that is not valid Base32.
    """


class InvalidArgument(OTPError, TypeError):
    """Raised when a token is not a string (a caller bug, not a failed login)."""


class IdentityNotFound(OTPError, LookupError):
    """Raised by the verifier when the store has no OTP record for an identity."""
