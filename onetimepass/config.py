"""Configuration for one-time password generation and verification."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field  # type: ignore[import-untyped]

SecretLength = Literal[16, 26, 32, 64]


class OTPConfig(BaseModel):
    """
    Immutable set of one-time password options.

    Defaults apply to any option that is not given. Invalid values raise
    ``pydantic.ValidationError`` when the configuration is created, never
    later during verification.

    Example:
        ```python
        config = OTPConfig(token_length=8, totp_window=2)

        outcome = check_totp(token, secret, config=config)
        ```
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    token_length: int = Field(default=6, ge=6, le=10)
    """Number of digits in each token."""

    hotp_window: int = Field(default=3, ge=0)
    """Number of counters after the last used one that HOTP checks scan."""

    totp_window: int = Field(default=1, ge=0)
    """Number of intervals before and after the current one that TOTP checks scan."""

    interval_length: int = Field(default=30, gt=0)
    """Width of a TOTP time step, in seconds."""

    # Encoded Base32 length; 16 characters is what Google Authenticator expects
    secret_length: SecretLength = 16


DEFAULT_CONFIG = OTPConfig()
