"""Protocols defining user and model interfaces for OTP verification."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class OTPUserProtocol(Protocol):
    """
    Protocol defining the required interface for OTP user objects.

    Any user model (SQLAlchemy, Pydantic, etc.) used with adapters
    must provide these attributes.
    """

    id: int | str
    otp_secret: str | None
    otp_last: int
