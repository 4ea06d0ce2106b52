from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog

from contactgain.config import Config
from contactgain.core.core import Core
from contactgain.core.modules.contact.models import ContactView
from contactgain.core.modules.lifecycle.models import LifecycleSnapshot, SessionState
from contactgain.core.modules.session.models import (
    MAX_DURATION_MINUTES,
    MIN_DURATION_MINUTES,
    BrowserId,
    Session,
    SessionLimits,
    SessionStats,
    SessionSummary,
    SessionView,
)
from contactgain.core.modules.vcf import codec
from contactgain.core.modules.vcf.models import VcfDownload
from contactgain.errors import NotFoundError, ValidationError, WindowClosedError

logger = structlog.get_logger(__name__)

CONTACTGAIN_VERSION = "0.1.0"


class App:
    """Facade for all application operations, resolves short ids and checks creator rights before delegating to Core."""

    def __init__(self, config: Config, core: Core | None = None) -> None:
        self._core = core or Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def create_session(self, browser_id: BrowserId, group_name: str, duration_minutes: int) -> SessionSummary:
        """Open a new collection session owned by the requesting browser."""
        session = await self._core.services.session.create_session(browser_id, group_name, duration_minutes)
        return SessionSummary.from_domain(session, contact_count=0)

    async def get_my_sessions(self, browser_id: BrowserId) -> list[SessionSummary]:
        """Sessions created by this browser and not hidden, newest first."""
        return await self._core.services.session.list_sessions(browser_id)

    async def get_my_stats(self, browser_id: BrowserId) -> SessionStats:
        return await self._core.services.session.get_creator_stats(browser_id)

    async def get_session_view(self, short_id: str, browser_id: BrowserId, has_submitted: bool) -> SessionView:
        """Session details with its current phase for this viewer."""
        session, status = await self._core.services.lifecycle.snapshot(short_id, has_submitted)
        if session is None:
            raise NotFoundError(f"Session '{short_id}' not found")

        # Past the deletion schedule nothing is retrievable, even before the sweep runs
        contact_count = 0
        if status.state != SessionState.TERMINAL:
            contact_count = await self._core.services.contact.count_contacts(session.id)
        return SessionView(
            short_id=session.short_id,
            group_name=session.group_name,
            created_at=session.created_at,
            expires_at=session.expires_at,
            deletion_scheduled_at=session.deletion_scheduled_at,
            is_creator=session.creator_identifier == browser_id,
            contact_count=contact_count,
            download_count=session.download_count,
            status=status,
        )

    async def watch_session(self, short_id: str, has_submitted: bool) -> AsyncGenerator[LifecycleSnapshot]:
        """Stream status snapshots for a session until it becomes terminal."""
        session = await self._core.services.session.find_session_by_short_id(short_id)
        async for snapshot in self._core.services.lifecycle.watch(session, has_submitted):
            yield snapshot

    async def hide_session(self, short_id: str, browser_id: BrowserId) -> None:
        """Hide a session from the creator's list (creator only)."""
        session = await self._resolve_session(short_id)
        await self._core.services.session.mark_hidden(session.id, browser_id)

    async def submit_contact(self, short_id: str, name: str, phone: str, email: str | None = None) -> ContactView:
        """Add a contact to the session behind a short link."""
        session = await self._resolve_session(short_id)
        contact = await self._core.services.contact.submit(session.id, name, phone, email)
        return ContactView.from_domain(contact)

    async def download_contacts(self, short_id: str, browser_id: BrowserId) -> VcfDownload:
        """Encode a session's contacts as a vCard file.

        Anyone with the link may download during the download window; the creator
        may also download while submissions are still open.
        """
        session, status = await self._core.services.lifecycle.snapshot(short_id)
        if session is None or status.state == SessionState.TERMINAL:
            raise NotFoundError(f"Session '{short_id}' not found")
        if status.state.is_open and session.creator_identifier != browser_id:
            raise WindowClosedError("Download is available once submissions close")

        contacts = await self._core.services.contact.list_contacts(session.id)
        if not contacts:
            raise ValidationError("There are no contacts in this session to download")

        content = codec.encode(contacts)
        filename = codec.filename_for(self._core.config.vcf_base_label, session.file_sequence_number)
        await self._core.services.session.increment_download_count(session.id)
        logger.info("session_downloaded", short_id=short_id, contact_count=len(contacts), filename=filename)
        return VcfDownload(content=content, filename=filename, contact_count=len(contacts))

    def get_session_limits(self) -> SessionLimits:
        """Bounds the creation form must respect."""
        return SessionLimits(
            min_duration_minutes=MIN_DURATION_MINUTES,
            max_duration_minutes=MAX_DURATION_MINUTES,
            retention_hours=self._core.config.retention_hours,
        )

    def get_version(self) -> dict[str, str]:
        """Get version and build information."""
        config = self._core.config
        return {
            "version": CONTACTGAIN_VERSION,
            "git_commit_hash": config.git_commit_hash,
            "git_commit_date": config.git_commit_date,
            "build_time": config.build_time,
        }

    # === Private resolver methods ===
    async def _resolve_session(self, short_id: str) -> Session:
        """Resolve short id to Session object. Raises NotFoundError if not found."""
        return await self._core.services.session.get_session_by_short_id(short_id)
