from datetime import timedelta
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from contactgain.core.core import Service
from contactgain.core.db import duplicate_key_fields
from contactgain.core.modules.session.models import (
    MAX_DURATION_MINUTES,
    MIN_DURATION_MINUTES,
    Session,
    SessionStats,
    SessionSummary,
    TopSession,
)
from contactgain.errors import AccessDeniedError, ConflictError, NotFoundError, StoreUnavailableError, ValidationError
from contactgain.utils import now

logger = structlog.get_logger(__name__)

SHORT_ID_ATTEMPTS = 5
TOP_SESSIONS_LIMIT = 5


class SessionService(Service):
    """Service for creating, looking up and hiding contact collection sessions."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("short_id", 1)], unique=True)
        await self._collection.create_index([("creator_identifier", 1), ("created_at", -1)])
        await self._collection.create_index([("deletion_scheduled_at", 1)])
        await self._collection.create_index([("expires_at", 1)])

    async def create_session(self, creator_identifier: str, group_name: str, duration_minutes: int) -> Session:
        """Open a new session, retrying on short id collisions."""
        group_name = group_name.strip()
        if not group_name:
            raise ValidationError("Group name is required")
        if not MIN_DURATION_MINUTES <= duration_minutes <= MAX_DURATION_MINUTES:
            raise ValidationError(
                f"Duration must be between {MIN_DURATION_MINUTES} and {MAX_DURATION_MINUTES} minutes"
            )

        created_at = now()
        expires_at = created_at + timedelta(minutes=duration_minutes)
        deletion_scheduled_at = expires_at + timedelta(hours=self.core.config.retention_hours)
        # Taken once per creation, not per insert attempt
        file_sequence_number = await self.core.services.identifier.issue_file_sequence_number()

        for attempt in range(1, SHORT_ID_ATTEMPTS + 1):
            session = Session(
                short_id=self.core.services.identifier.issue_short_id(),
                group_name=group_name,
                creator_identifier=creator_identifier,
                created_at=created_at,
                submission_duration_minutes=duration_minutes,
                expires_at=expires_at,
                deletion_scheduled_at=deletion_scheduled_at,
                file_sequence_number=file_sequence_number,
            )
            try:
                await self._insert_session(session)
            except ConflictError:
                logger.warning("short_id_collision", short_id=session.short_id, attempt=attempt)
                continue
            logger.info(
                "session_created",
                session_id=session.id,
                short_id=session.short_id,
                duration_minutes=duration_minutes,
                file_sequence_number=file_sequence_number,
            )
            return session

        logger.error("short_id_attempts_exhausted", attempts=SHORT_ID_ATTEMPTS)
        raise StoreUnavailableError("Could not allocate a session link, please try again")

    async def _insert_session(self, session: Session) -> None:
        try:
            await self._collection.insert_one(session.to_mongo())
        except DuplicateKeyError as e:
            fields = duplicate_key_fields(e)
            if fields and "short_id" not in fields:
                raise
            raise ConflictError(f"Short id '{session.short_id}' already exists") from e

    async def find_session_by_short_id(self, short_id: str) -> Session | None:
        """Get a session by short id, None when unknown or already purged."""
        return Session.from_mongo(await self._collection.find_one({"short_id": short_id}))

    async def get_session_by_short_id(self, short_id: str) -> Session:
        session = await self.find_session_by_short_id(short_id)
        if session is None:
            raise NotFoundError(f"Session '{short_id}' not found")
        return session

    async def get_session(self, session_id: UUID) -> Session:
        session = Session.from_mongo(await self._collection.find_one({"_id": session_id}))
        if session is None:
            raise NotFoundError(f"Session '{session_id}' not found")
        return session

    async def list_sessions(self, creator_identifier: str, exclude_hidden: bool = True) -> list[SessionSummary]:
        """List a creator's sessions, newest first, with their contact counts."""
        query: dict[str, Any] = {"creator_identifier": creator_identifier}
        if exclude_hidden:
            query["hidden_by_creator_at"] = None
        sessions = await Session.list_cursor(self._collection.find(query).sort("created_at", -1))

        result = []
        for session in sessions:
            contact_count = await self.core.services.contact.count_contacts(session.id)
            result.append(SessionSummary.from_domain(session, contact_count))
        return result

    async def mark_hidden(self, session_id: UUID, creator_identifier: str) -> None:
        """Hide a session from its creator's listing. It stays reachable by link."""
        session = await self.get_session(session_id)
        if session.creator_identifier != creator_identifier:
            raise AccessDeniedError("Only the creator can hide this session")
        if session.is_hidden:
            return
        await self._collection.update_one(
            {"_id": session_id, "creator_identifier": creator_identifier},
            {"$set": {"hidden_by_creator_at": now()}},
        )
        logger.info("session_hidden", session_id=session_id, short_id=session.short_id)

    async def increment_download_count(self, session_id: UUID) -> None:
        await self._collection.update_one({"_id": session_id}, {"$inc": {"download_count": 1}})

    async def get_creator_stats(self, creator_identifier: str) -> SessionStats:
        """Totals, average and top sessions over the creator's visible sessions."""
        summaries = await self.list_sessions(creator_identifier)
        if not summaries:
            return SessionStats(total_sessions=0, total_contacts=0, average_contacts_per_session=0.0)

        total_contacts = sum(s.contact_count for s in summaries)
        # Stable sort keeps the newest session first among equal counts
        ranked = sorted(summaries, key=lambda s: s.contact_count, reverse=True)
        top = [TopSession(short_id=s.short_id, group_name=s.group_name, contact_count=s.contact_count) for s in ranked]
        return SessionStats(
            total_sessions=len(summaries),
            total_contacts=total_contacts,
            average_contacts_per_session=round(total_contacts / len(summaries), 1),
            most_active=top[0],
            top_sessions=top[:TOP_SESSIONS_LIMIT],
        )

    async def find_expired_session_ids(self) -> list[UUID]:
        """Sessions whose retention window has elapsed."""
        cursor = self._collection.find({"deletion_scheduled_at": {"$lt": now()}}, {"_id": 1})
        return [doc["_id"] async for doc in cursor]

    async def find_hidden_closed_session_ids(self) -> list[UUID]:
        """Hidden sessions whose submission window has closed."""
        cursor = self._collection.find({"hidden_by_creator_at": {"$ne": None}, "expires_at": {"$lt": now()}}, {"_id": 1})
        return [doc["_id"] async for doc in cursor]

    async def delete_sessions(self, session_ids: list[UUID]) -> int:
        """Delete sessions by id and return count of deleted sessions. Contacts must be deleted first."""
        if not session_ids:
            return 0
        result = await self._collection.delete_many({"_id": {"$in": session_ids}})
        return result.deleted_count
