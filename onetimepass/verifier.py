"""Verify one-time passwords against a store of per-user secrets."""

import logging
from typing import Any

from onetimepass.config import DEFAULT_CONFIG, OTPConfig
from onetimepass.db.adapter import OTPDatabase
from onetimepass.exceptions import IdentityNotFound
from onetimepass.otp import Timestamp, check_hotp, check_totp
from onetimepass.schemas import REJECTED, Accepted, VerificationOutcome
from onetimepass.secret import generate_secret

logger = logging.getLogger(__name__)


class OTPVerifier:
    """
    Check tokens for stored identities and advance their counters.

    A token is only accepted once: HOTP checks run inside
    ``db.transaction()`` with the record locked, and both HOTP and TOTP
    outcomes are only accepted if the store agrees to advance the counter
    past the stored value.

    Example:
        ```python
        verifier = OTPVerifier(SQLAlchemyAdapter(session, User))

        outcome = await verifier.verify_totp(user.id, "492039")
        if not outcome.is_accepted:
            raise PermissionError("Invalid one-time password")
        ```
    """

    def __init__(self, db: OTPDatabase[Any], config: OTPConfig = DEFAULT_CONFIG) -> None:
        self.db = db
        self.config = config

    async def _load(self, identity: Any, *, lock: bool) -> tuple[str, int]:  # noqa: ANN401
        loaded = await self.db.load_secret_and_counter(identity, lock=lock)
        if loaded is None:
            raise IdentityNotFound(f"No one-time password secret for {identity!r}")
        return loaded

    async def verify_hotp(self, identity: Any, token: str) -> VerificationOutcome:  # noqa: ANN401
        """
        Verify an HOTP token and store its counter.

        Raises:
            IdentityNotFound: If the store has no secret for ``identity``
            InvalidArgument: If ``token`` is not a string
        """
        async with self.db.transaction():
            secret, last = await self._load(identity, lock=True)
            outcome = check_hotp(token, secret, last=last, config=self.config)
            return await self._advance(identity, outcome)

    async def verify_totp(
        self, identity: Any, token: str, now: Timestamp | None = None  # noqa: ANN401
    ) -> VerificationOutcome:
        """
        Verify a TOTP token and store its time step.

        A token whose time step is not greater than the last accepted one
        is rejected, so each token works once.

        Raises:
            IdentityNotFound: If the store has no secret for ``identity``
            InvalidArgument: If ``token`` is not a string
        """
        secret, _ = await self._load(identity, lock=False)
        outcome = check_totp(token, secret, now=now, config=self.config)
        return await self._advance(identity, outcome)

    async def _advance(
        self, identity: Any, outcome: VerificationOutcome  # noqa: ANN401
    ) -> VerificationOutcome:
        if not isinstance(outcome, Accepted):
            logger.info("Invalid one-time password for %r", identity)
            return outcome

        if not await self.db.persist_counter(identity, outcome.counter):
            logger.warning("Replayed one-time password for %r", identity)
            return REJECTED

        return outcome

    async def rotate_secret(self, identity: Any) -> str:  # noqa: ANN401
        """
        Issue a new secret for ``identity`` and reset its counter.

        Returns:
            The new Base32 secret, to be handed to the user's authenticator

        Raises:
            IdentityNotFound: If the store has no record for ``identity``
        """
        secret = generate_secret(self.config.secret_length)
        if not await self.db.store_secret(identity, secret):
            raise IdentityNotFound(f"No user {identity!r}")
        logger.info("Issued a new one-time password secret for %r", identity)
        return secret
