"""Test configuration and fixtures."""

from datetime import UTC, datetime

import pytest
from sqlalchemy import Integer, String
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from onetimepass.config import OTPConfig
from onetimepass.db.sqlalchemy.adapter import SQLAlchemyAdapter
from onetimepass.db.sqlalchemy.models import BaseOTPUserTable
from onetimepass.secret import encode_secret

# ============================================================================
# Database Models for Testing
# ============================================================================


class Base(DeclarativeBase):
    """Base class for test database models."""


class User(BaseOTPUserTable[int], Base):
    """Test user model."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str | None] = mapped_column(String(50), nullable=True)


# ============================================================================
# Basic Fixtures
# ============================================================================

# Secret of the RFC 4226 and RFC 6238 test vectors
RFC_SECRET = b"12345678901234567890"


@pytest.fixture
def rfc_secret() -> bytes:
    """Provide the raw secret used by the RFC test vectors."""
    return RFC_SECRET


@pytest.fixture
def rfc_secret_b32() -> str:
    """Provide the RFC test vector secret as Base32."""
    return encode_secret(RFC_SECRET)


@pytest.fixture
def test_config() -> OTPConfig:
    """Provide a test configuration."""
    return OTPConfig()


@pytest.fixture
def current_time() -> datetime:
    """Provide a fixed UTC time at the start of a 30 second interval."""
    return datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def async_engine():  # type: ignore[no-untyped-def]
    """Create an async SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def async_session(async_engine) -> AsyncSession:  # type: ignore[no-untyped-def]
    """Create an async database session."""
    async_session_maker = async_sessionmaker(
        async_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session_maker() as session:
        yield session


@pytest.fixture
async def otp_db(async_session: AsyncSession) -> SQLAlchemyAdapter[User]:
    """Create a SQLAlchemyAdapter instance."""
    return SQLAlchemyAdapter(async_session, User)


@pytest.fixture
async def test_user(otp_db: SQLAlchemyAdapter[User], rfc_secret_b32: str) -> User:
    """Create a user enrolled with the RFC test vector secret."""
    return await otp_db.create_user(username="testuser", otp_secret=rfc_secret_b32)


@pytest.fixture
async def unenrolled_user(otp_db: SQLAlchemyAdapter[User]) -> User:
    """Create a user without an OTP secret."""
    return await otp_db.create_user(username="unenrolled")
