import logging
import typing
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from onetimepass.db.protocols import OTPUserProtocol

logger = logging.getLogger(__name__)

UserType = typing.TypeVar("UserType", bound=OTPUserProtocol)


class SQLAlchemyAdapter(typing.Generic[UserType]):
    """
    SQLAlchemy implementation of the OTPDatabase protocol.

    Wraps an AsyncSession. Locked loads use ``SELECT ... FOR UPDATE`` so
    the row stays locked until ``transaction()`` commits; counters are
    advanced with a conditional ``UPDATE`` that only succeeds when the new
    counter is strictly greater than the stored one.

    The adapter commits (or rolls back) the session it was given, not a
    transaction of its own: leaving ``transaction()`` and calling
    ``persist_counter`` or ``store_secret`` outside of it also commit any
    unrelated pending changes in that session. Use a dedicated session if
    those must stay separate.

    Example:
        ```python
        async def get_otp_db(
            session: AsyncSession = Depends(get_async_session)
        ) -> SQLAlchemyAdapter[User]:
            return SQLAlchemyAdapter(session, User)
        ```
    """

    def __init__(self, session: AsyncSession, user_model: type[UserType]) -> None:
        """
        Initialize the database adapter.

        Args:
            session: SQLAlchemy async session
            user_model: User model class inheriting from BaseOTPUserTable
        """
        self.session = session
        self.user_model = user_model
        self._in_transaction = False

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Commit everything done in the block, or roll it back on error."""
        self._in_transaction = True
        try:
            yield
        except Exception:
            await self.session.rollback()
            raise
        else:
            await self.session.commit()
        finally:
            self._in_transaction = False

    async def create_user(self, **kwargs: object) -> UserType:
        """
        Create a new user with the given fields.

        Args:
            **kwargs: User fields, ``otp_secret`` included if already known

        Returns:
            Created user object
        """
        user = self.user_model(**kwargs)  # type: ignore[call-arg]
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def load_secret_and_counter(
        self, identity: typing.Any, *, lock: bool = False  # noqa: ANN401
    ) -> tuple[str, int] | None:
        """
        Load the secret and last counter of a user.

        Args:
            identity: Primary key of the user
            lock: Lock the row until the surrounding transaction ends

        Returns:
            ``(secret, last)`` or None if the user is missing or not enrolled
        """
        statement = select(self.user_model.otp_secret, self.user_model.otp_last).where(
            self.user_model.id == identity  # type: ignore[arg-type]
        )
        if lock:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        row = result.one_or_none()
        if row is None or row.otp_secret is None:
            return None
        return row.otp_secret, row.otp_last

    async def persist_counter(self, identity: typing.Any, counter: int) -> bool:  # noqa: ANN401
        """
        Advance the stored counter if ``counter`` is strictly greater.

        Args:
            identity: Primary key of the user
            counter: Counter of the token that was just accepted

        Returns:
            True if the row was updated, False if the stored counter was
            already at or beyond ``counter``
        """
        statement = (
            update(self.user_model)
            .where(
                self.user_model.id == identity,  # type: ignore[arg-type]
                self.user_model.otp_last < counter,  # type: ignore[operator]
            )
            .values(otp_last=counter)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(statement)
        if not self._in_transaction:
            await self.session.commit()

        updated = result.rowcount == 1
        if not updated:
            logger.debug("Counter for %r not advanced to %d", identity, counter)
        return updated

    async def store_secret(self, identity: typing.Any, secret: str) -> bool:  # noqa: ANN401
        """
        Replace a user's secret and reset the counter.

        Args:
            identity: Primary key of the user
            secret: New Base32 secret

        Returns:
            True if the user exists, False otherwise
        """
        statement = (
            update(self.user_model)
            .where(self.user_model.id == identity)  # type: ignore[arg-type]
            .values(otp_secret=secret, otp_last=0)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(statement)
        if not self._in_transaction:
            await self.session.commit()
        return result.rowcount == 1
