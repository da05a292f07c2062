"""Pydantic models for verification outcomes."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field  # type: ignore[import-untyped]


class Accepted(BaseModel):
    """The token matched; ``counter`` is the value that generated it."""

    model_config = ConfigDict(frozen=True)

    status: Literal["accepted"] = "accepted"
    counter: int = Field(..., ge=0, description="Counter that produced the token")

    @property
    def is_accepted(self) -> bool:
        return True

    def __bool__(self) -> bool:
        raise TypeError("Use is_accepted or isinstance() to inspect an outcome")


class Rejected(BaseModel):
    """The token was malformed or no counter in the window produced it."""

    model_config = ConfigDict(frozen=True)

    status: Literal["rejected"] = "rejected"

    @property
    def is_accepted(self) -> bool:
        return False

    def __bool__(self) -> bool:
        raise TypeError("Use is_accepted or isinstance() to inspect an outcome")


REJECTED = Rejected()

VerificationOutcome = Accepted | Rejected
