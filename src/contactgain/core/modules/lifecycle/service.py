import asyncio
from collections.abc import AsyncGenerator

import structlog

from contactgain.core.core import Service
from contactgain.core.modules.lifecycle.models import LifecycleSnapshot
from contactgain.core.modules.lifecycle.state import describe
from contactgain.core.modules.session.models import Session
from contactgain.utils import now

logger = structlog.get_logger(__name__)


class LifecycleService(Service):
    """Reports the phase of a session and drives the per-view countdown tick."""

    async def snapshot(self, short_id: str, has_submitted: bool = False) -> tuple[Session | None, LifecycleSnapshot]:
        """Look the session up and describe it at the current instant."""
        session = await self.core.services.session.find_session_by_short_id(short_id)
        return session, describe(session, now(), has_submitted)

    async def watch(self, session: Session | None, has_submitted: bool = False) -> AsyncGenerator[LifecycleSnapshot]:
        """Yield a snapshot now and then on every tick until the state is final.

        Closing the generator (the viewer went away) cancels the pending tick.
        """
        interval = self.core.config.status_tick_seconds
        while True:
            snapshot = describe(session, now(), has_submitted)
            yield snapshot
            if snapshot.state.is_final:
                logger.debug("session_watch_finished", short_id=session.short_id if session else None, state=snapshot.state)
                return
            await asyncio.sleep(interval)
