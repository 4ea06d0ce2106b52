from typing import Any, Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor
from pymongo.errors import DuplicateKeyError


class MongoModel(BaseModel):
    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        data["_id"] = data.pop("id")
        return data

    @classmethod
    def from_mongo(cls, doc: dict[str, Any] | None) -> Self | None:
        """Validate a raw document, passing through None for missing records."""
        if doc is None:
            return None
        return cls.model_validate(doc)

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]


def duplicate_key_fields(exc: DuplicateKeyError) -> set[str]:
    """Return the index fields that a DuplicateKeyError was raised for.

    Empty when the server did not report the key pattern.
    """
    details = exc.details or {}
    key_pattern = details.get("keyPattern") or {}
    return set(key_pattern)
