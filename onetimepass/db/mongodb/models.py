"""MongoDB document models for OTP verification."""

from pydantic import BaseModel, ConfigDict, Field


class BaseOTPUserDocument(BaseModel):
    """
    Base Pydantic model for user documents with one-time password support in MongoDB.

    Users should inherit from this class and add their custom fields.

    Required fields:
        - id: Unique identifier (MongoDB ObjectId as string, optional for auto-generation)
        - otp_secret: Base32 shared secret (nullable until the user enrolls)
        - otp_last: Counter of the last accepted token

    Example:
        ```python
        class User(BaseOTPUserDocument):
            username: str
            full_name: str | None = None
        ```
    """

    # MongoDB _id field (ObjectId as string)
    id: str | None = Field(default=None, alias="_id")

    otp_secret: str | None = Field(
        default=None, description="Base32 shared secret", max_length=64
    )
    otp_last: int = Field(
        default=0, ge=0, description="Counter of the last accepted token"
    )

    model_config = ConfigDict(
        populate_by_name=True,  # Allow both 'id' and '_id'
        from_attributes=True,
    )
