"""onetimepass - HOTP and TOTP one-time passwords (RFC 4226, RFC 6238)."""

from onetimepass.config import OTPConfig
from onetimepass.db import (
    BaseOTPUserTable,
    OTPDatabase,
    SQLAlchemyAdapter,
)
from onetimepass.exceptions import (
    IdentityNotFound,
    InvalidArgument,
    InvalidParameter,
    OTPError,
)
from onetimepass.otp import (
    check_hotp,
    check_totp,
    generate_hotp,
    generate_totp,
    interval_count,
    valid_token,
)
from onetimepass.schemas import REJECTED, Accepted, Rejected, VerificationOutcome
from onetimepass.secret import (
    decode_secret,
    encode_secret,
    generate_secret,
    generate_secret_bytes,
)
from onetimepass.verifier import OTPVerifier

__version__ = "0.1.0"

__all__ = [
    "REJECTED",
    "Accepted",
    "BaseOTPUserTable",
    "IdentityNotFound",
    "InvalidArgument",
    "InvalidParameter",
    "OTPConfig",
    "OTPDatabase",
    "OTPError",
    "OTPVerifier",
    "Rejected",
    "SQLAlchemyAdapter",
    "VerificationOutcome",
    "check_hotp",
    "check_totp",
    "decode_secret",
    "encode_secret",
    "generate_hotp",
    "generate_secret",
    "generate_secret_bytes",
    "generate_totp",
    "interval_count",
    "valid_token",
]

# Conditionally export MongoDB classes if motor is installed
try:
    from onetimepass.db import BaseOTPUserDocument, MongoDBAdapter

    __all__ += ["BaseOTPUserDocument", "MongoDBAdapter"]
except ImportError:
    # MongoDB support not installed
    pass
