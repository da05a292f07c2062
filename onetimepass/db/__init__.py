"""Storage protocol and adapters for onetimepass."""

from onetimepass.db.adapter import OTPDatabase
from onetimepass.db.protocols import OTPUserProtocol
from onetimepass.db.sqlalchemy.adapter import SQLAlchemyAdapter
from onetimepass.db.sqlalchemy.models import BaseOTPUserTable

__all__ = [
    "BaseOTPUserTable",
    "OTPDatabase",
    "OTPUserProtocol",
    "SQLAlchemyAdapter",
]

# Conditionally export MongoDB classes if motor is installed
try:
    from onetimepass.db.mongodb.adapter import MongoDBAdapter
    from onetimepass.db.mongodb.models import BaseOTPUserDocument

    __all__ += ["BaseOTPUserDocument", "MongoDBAdapter"]
except ImportError:
    # MongoDB support not installed
    pass
