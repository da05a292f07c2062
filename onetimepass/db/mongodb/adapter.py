"""MongoDB adapter for OTP verification."""

import contextlib
import logging
from collections.abc import AsyncIterator
from typing import Any, Generic, TypeVar

try:
    from bson import ObjectId  # type: ignore[import-untyped]
    from bson.errors import InvalidId  # type: ignore[import-untyped]
    from motor.motor_asyncio import AsyncIOMotorDatabase  # type: ignore[import-untyped]
except ImportError as e:
    raise ImportError(
        "MongoDB support requires motor and pymongo. "
        "Install with: pip install onetimepass[mongodb]"
    ) from e

logger = logging.getLogger(__name__)

UserType = TypeVar("UserType")


class MongoDBAdapter(Generic[UserType]):
    """
    MongoDB implementation of the OTPDatabase protocol.

    MongoDB has no row locks, so ``transaction()`` does nothing and
    ``lock`` is ignored. Counters are advanced with a single conditional
    ``update_one`` matching ``otp_last < counter``, which is atomic per
    document: of two concurrent verifications that matched the same
    counter, only one gets to store it.

    Example:
        ```python
        async def get_otp_db() -> MongoDBAdapter[User]:
            client = AsyncIOMotorClient("mongodb://localhost:27017")
            return MongoDBAdapter(
                database=client.myapp,
                user_collection_name="users",
                user_model_class=User,
            )
        ```
    """

    def __init__(
        self,
        database: AsyncIOMotorDatabase,
        user_collection_name: str,
        user_model_class: type[UserType],
    ) -> None:
        """
        Initialize the MongoDB adapter.

        Args:
            database: Motor AsyncIOMotorDatabase instance
            user_collection_name: Name of the users collection
            user_model_class: Pydantic model class for user documents
        """
        self.database = database
        self.user_collection = database[user_collection_name]
        self.user_model_class = user_model_class

    @staticmethod
    def _query_id(user_id: Any) -> Any:  # noqa: ANN401
        # Try to convert to ObjectId if it's a valid ObjectId string
        if isinstance(user_id, str):
            with contextlib.suppress(InvalidId, TypeError):
                return ObjectId(user_id)
        return user_id

    @contextlib.asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Single-document updates are already atomic."""
        yield

    async def create_user(self, **kwargs: object) -> UserType:
        """
        Create a new user with the given fields.

        Args:
            **kwargs: User fields, ``otp_secret`` included if already known

        Returns:
            Created user object
        """
        user_data: dict[str, Any] = {"otp_secret": None, "otp_last": 0, **kwargs}

        result = await self.user_collection.insert_one(user_data)
        user_data["_id"] = str(result.inserted_id)

        return self.user_model_class.model_validate(user_data)  # type: ignore[attr-defined]

    async def load_secret_and_counter(
        self, identity: int | str, *, lock: bool = False
    ) -> tuple[str, int] | None:
        """
        Load the secret and last counter of a user.

        Args:
            identity: User ID
            lock: Ignored, see the class documentation

        Returns:
            ``(secret, last)`` or None if the user is missing or not enrolled
        """
        doc = await self.user_collection.find_one(
            {"_id": self._query_id(identity)}, {"otp_secret": 1, "otp_last": 1}
        )
        if doc is None or doc.get("otp_secret") is None:
            return None
        return doc["otp_secret"], doc.get("otp_last", 0)

    async def persist_counter(self, identity: int | str, counter: int) -> bool:
        """
        Advance the stored counter if ``counter`` is strictly greater.

        Returns:
            True if the document was updated, False otherwise
        """
        result = await self.user_collection.update_one(
            {"_id": self._query_id(identity), "otp_last": {"$lt": counter}},
            {"$set": {"otp_last": counter}},
        )
        updated = result.modified_count == 1
        if not updated:
            logger.debug("Counter for %r not advanced to %d", identity, counter)
        return updated

    async def store_secret(self, identity: int | str, secret: str) -> bool:
        """
        Replace a user's secret and reset the counter.

        Returns:
            True if the user exists, False otherwise
        """
        result = await self.user_collection.update_one(
            {"_id": self._query_id(identity)},
            {"$set": {"otp_secret": secret, "otp_last": 0}},
        )
        return result.matched_count == 1
