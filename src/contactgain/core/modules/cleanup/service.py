import asyncio
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from contactgain.core.core import Service
from contactgain.core.modules.cleanup.models import CleanupReport

logger = structlog.get_logger(__name__)


class CleanupService(Service):
    """Background garbage collector for finished sessions.

    Two independent sweeps run on a fixed interval, once right at startup:

    - expired: sessions past deletion_scheduled_at are deleted with their contacts
    - hidden: sessions hidden by their creator, closed for submissions and
      without a single contact are deleted without waiting for the retention window
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    async def on_start(self) -> None:
        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())
        logger.debug("cleanup_service_started", interval=self.core.config.cleanup_interval_seconds)

    async def on_stop(self) -> None:
        if self._task is None:
            return
        self._stopping.set()
        await self._task
        self._task = None

    async def _run(self) -> None:
        interval = max(1, self.core.config.cleanup_interval_seconds)
        while not self._stopping.is_set():
            await self.run_once()
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=interval)
            except TimeoutError:
                continue

    async def run_once(self) -> CleanupReport:
        """Run both sweeps. Never raises; failures are logged and reported."""
        report = CleanupReport()

        try:
            report.expired_deleted = await self.sweep_expired()
        except Exception:
            logger.exception("cleanup_sweep_failed", sweep="expired")
            report.failed_sweeps.append("expired")

        try:
            report.hidden_reclaimed = await self.sweep_hidden_empty()
        except Exception:
            logger.exception("cleanup_sweep_failed", sweep="hidden")
            report.failed_sweeps.append("hidden")

        return report

    async def sweep_expired(self) -> int:
        """Delete sessions past their deletion schedule, contacts first."""
        session_ids = await self.core.services.session.find_expired_session_ids()
        if not session_ids:
            return 0
        deleted = await self._delete_sessions(session_ids)
        logger.info("cleanup_expired_sessions", count=deleted)
        return deleted

    async def sweep_hidden_empty(self) -> int:
        """Delete hidden, closed sessions that never received a contact."""
        candidates = await self.core.services.session.find_hidden_closed_session_ids()
        if not candidates:
            return 0
        with_contacts = await self.core.services.contact.find_sessions_with_contacts(candidates)
        empty_ids = [session_id for session_id in candidates if session_id not in with_contacts]
        if not empty_ids:
            return 0
        deleted = await self._delete_sessions(empty_ids)
        logger.info("cleanup_hidden_empty_sessions", count=deleted)
        return deleted

    async def _delete_sessions(self, session_ids: list[UUID]) -> int:
        # Children before parents so an interrupted run never leaves orphaned contacts
        await self.core.services.contact.delete_contacts_for_sessions(session_ids)
        return await self.core.services.session.delete_sessions(session_ids)
