from typing import Any

from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from contactgain.core.core import Service
from contactgain.core.modules.counter.models import CounterName


class CounterService(Service):
    """Service for managing global auto-incrementing counters."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("counters")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("name", 1)], unique=True)

    async def increment_and_read(self, name: CounterName) -> int:
        """Atomically increment the counter and return its new value.

        A single server-side $inc, so concurrent callers never observe the same value.
        """
        result = await self._collection.find_one_and_update(
            {"name": name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )

        # If it was just created (upserted), seq will be 1
        return int(result["seq"])
