"""Example of HOTP and TOTP verification against a SQLAlchemy store.

This example demonstrates:
- Setting up a user model with BaseOTPUserTable
- Creating an async session and SQLAlchemyAdapter
- Enrolling a user with a fresh secret
- Verifying tokens with OTPVerifier, including a rejected replay
"""

import asyncio
import logging

from sqlalchemy import Integer, String
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from onetimepass import (
    BaseOTPUserTable,
    OTPConfig,
    OTPVerifier,
    SQLAlchemyAdapter,
    decode_secret,
    generate_hotp,
    generate_totp,
)

# Database configuration
DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class Base(DeclarativeBase):
    pass


# User model with OTP support
class User(BaseOTPUserTable[int], Base):
    """User model with additional custom fields."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)


engine = create_async_engine(DATABASE_URL)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)

config = OTPConfig(secret_length=32)


async def main() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        db = SQLAlchemyAdapter(session, User)
        verifier = OTPVerifier(db, config)

        user = await db.create_user(username="alice")
        secret = await verifier.rotate_secret(user.id)
        print(f"Secret for the authenticator app: {secret}")

        # What the user's authenticator would show
        key = decode_secret(secret)
        hotp = generate_hotp(key, 1)
        totp = generate_totp(key)

        print("HOTP first use: ", await verifier.verify_hotp(user.id, hotp))
        print("HOTP replay:    ", await verifier.verify_hotp(user.id, hotp))

        await verifier.rotate_secret(user.id)
        print("Old secret TOTP:", await verifier.verify_totp(user.id, totp))

    await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
