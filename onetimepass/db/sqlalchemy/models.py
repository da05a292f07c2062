"""SQLAlchemy model mixin for OTP verification."""

from typing import Generic, TypeVar

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column  # type: ignore[import-untyped]


ID = TypeVar("ID")


class BaseOTPUserTable(Generic[ID]):
    """
    Base class for user models with one-time password support.

    Generic type parameter ID allows for different primary key types (int, UUID, etc.).

    Required fields:
        - otp_secret: Base32 shared secret (nullable until the user enrolls)
        - otp_last: Counter of the last accepted token

    For HOTP, ``otp_last`` counts the tokens used so far. For TOTP it is
    the time step of the last accepted token.

    Example:
        ```python
        from sqlalchemy.orm import DeclarativeBase

        class Base(DeclarativeBase):
            pass

        class User(BaseOTPUserTable[int], Base):
            __tablename__ = "users"

            id: Mapped[int] = mapped_column(Integer, primary_key=True)
            username: Mapped[str] = mapped_column(String(50), unique=True)
        ```
    """

    otp_secret: Mapped[str | None] = mapped_column(String(64), nullable=True)
    otp_last: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
