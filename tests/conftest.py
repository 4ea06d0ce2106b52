"""Shared pytest fixtures."""

from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta

import pytest
from memory_db import MemoryDatabase

from contactgain.config import Config
from contactgain.core.core import Core
from contactgain.core.modules.contact.models import Contact
from contactgain.core.modules.contact.validators import name_key
from contactgain.core.modules.session.models import Session
from contactgain.utils import now

CREATOR = "creator-browser"


@pytest.fixture
def config() -> Config:
    return Config(
        database_url="mongodb://localhost:27017/contactgain_test",
        session_secret_key="test-secret-key",
        cleanup_interval_seconds=3600,
        status_tick_seconds=0.01,
    )


@pytest.fixture
def database() -> MemoryDatabase:
    return MemoryDatabase()


@pytest.fixture
async def core(config: Config, database: MemoryDatabase) -> AsyncGenerator[Core]:
    """Started core backed by the in-memory database."""
    core = Core(config, database=database)  # type: ignore[arg-type]
    async with core.lifespan():
        yield core


@pytest.fixture
def make_session(database: MemoryDatabase) -> Callable[..., Session]:
    """Store a session whose windows are placed relative to now.

    `expires_in` and `deleted_in` are offsets from now; negative values put the boundary in the past.
    """
    counter = iter(range(1, 10_000))

    def factory(
        expires_in: timedelta = timedelta(hours=1),
        deleted_in: timedelta | None = None,
        creator: str = CREATOR,
        short_id: str | None = None,
        hidden_at: datetime | None = None,
        group_name: str = "Study Group",
    ) -> Session:
        current = now()
        expires_at = current + expires_in
        deletion_scheduled_at = current + deleted_in if deleted_in is not None else expires_at + timedelta(hours=5)
        seq = next(counter)
        session = Session(
            short_id=short_id or f"S{seq:06d}",
            group_name=group_name,
            creator_identifier=creator,
            created_at=expires_at - timedelta(hours=2),
            submission_duration_minutes=120,
            expires_at=expires_at,
            deletion_scheduled_at=deletion_scheduled_at,
            file_sequence_number=seq,
            hidden_by_creator_at=hidden_at,
        )
        database.seed("sessions", [session.to_mongo()])
        return session

    return factory


@pytest.fixture
def add_contact(database: MemoryDatabase) -> Callable[..., Contact]:
    """Store a contact directly, regardless of the session window."""

    def factory(session: Session, name: str, phone: str = "+233501234567", email: str | None = None) -> Contact:
        contact = Contact(session_id=session.id, name=name, name_key=name_key(name), phone=phone, email=email)
        database.seed("contacts", [contact.to_mongo()])
        return contact

    return factory
