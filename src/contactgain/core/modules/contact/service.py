from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from contactgain.core.core import Service
from contactgain.core.modules.contact.models import Contact
from contactgain.core.modules.contact.validators import name_key, validate_contact_fields
from contactgain.errors import DuplicateNameError, WindowClosedError
from contactgain.utils import now

logger = structlog.get_logger(__name__)


class ContactService(Service):
    """Contact registry: validates submissions and enforces per-session name uniqueness."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("contacts")

    async def on_start(self) -> None:
        """Create indexes for uniqueness and listing."""
        # Concurrent first submissions with the same name are settled here
        await self._collection.create_index([("session_id", 1), ("name_key", 1)], unique=True)
        await self._collection.create_index([("session_id", 1), ("submitted_at", 1)])

    async def submit(self, session_id: UUID, name: str, phone: str, email: str | None = None) -> Contact:
        """Add a contact to a session.

        Checks run in a fixed order, each with its own error: session exists,
        submission window open, required fields present, phone format, unique name.
        """
        session = await self.core.services.session.get_session(session_id)
        if not now() < session.expires_at:
            raise WindowClosedError

        name, phone, email = validate_contact_fields(name, phone, email)
        key = name_key(name)
        if await self._collection.find_one({"session_id": session_id, "name_key": key}) is not None:
            raise DuplicateNameError

        contact = Contact(session_id=session_id, name=name, name_key=key, phone=phone, email=email)
        try:
            await self._collection.insert_one(contact.to_mongo())
        except DuplicateKeyError as e:
            raise DuplicateNameError from e

        logger.info("contact_submitted", session_id=session_id, contact_id=contact.id)
        return contact

    async def list_contacts(self, session_id: UUID) -> list[Contact]:
        """All contacts of a session in submission order."""
        cursor = self._collection.find({"session_id": session_id}).sort("submitted_at", 1)
        return await Contact.list_cursor(cursor)

    async def count_contacts(self, session_id: UUID) -> int:
        return await self._collection.count_documents({"session_id": session_id})

    async def find_sessions_with_contacts(self, session_ids: list[UUID]) -> set[UUID]:
        """Subset of the given sessions that have at least one contact."""
        if not session_ids:
            return set()
        return set(await self._collection.distinct("session_id", {"session_id": {"$in": session_ids}}))

    async def delete_contacts_for_sessions(self, session_ids: list[UUID]) -> int:
        """Delete all contacts of the given sessions and return count of deleted contacts."""
        if not session_ids:
            return 0
        result = await self._collection.delete_many({"session_id": {"$in": session_ids}})
        return result.deleted_count
