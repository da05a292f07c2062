"""Storage protocol consumed by the OTP verifier."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol, TypeVar, runtime_checkable

ID = TypeVar("ID")


@runtime_checkable
class OTPDatabase(Protocol[ID]):
    """
    Interface a store of per-user OTP secrets and counters must provide.

    The verifier runs HOTP checks as::

        async with db.transaction():
            loaded = await db.load_secret_and_counter(identity, lock=True)
            ...
            await db.persist_counter(identity, counter)

    Implementations must make that block atomic for one identity, so two
    concurrent verifications can never both read the same counter.
    """

    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Delimit one atomic read-compare-advance unit."""
        ...

    async def load_secret_and_counter(
        self, identity: ID, *, lock: bool = False
    ) -> tuple[str, int] | None:
        """
        Load the Base32 secret and last accepted counter for an identity.

        Args:
            identity: User identifier
            lock: Hold a lock on the record until the transaction ends

        Returns:
            ``(secret, last)`` or None if the identity has no OTP secret
        """
        ...

    async def persist_counter(self, identity: ID, counter: int) -> bool:
        """
        Store ``counter`` if it is strictly greater than the stored one.

        Returns:
            True if the counter was advanced, False otherwise
        """
        ...

    async def store_secret(self, identity: ID, secret: str) -> bool:
        """
        Replace the secret of an identity and reset its counter to 0.

        Returns:
            True if the identity exists, False otherwise
        """
        ...
