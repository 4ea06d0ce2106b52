"""Pure time-window state machine for sessions."""

from datetime import datetime, timedelta

from contactgain.core.modules.lifecycle.models import LifecycleSnapshot, SessionState
from contactgain.core.modules.session.models import Session

TERMINAL_TEXT = "Session permanently closed."


def evaluate_state(
    at: datetime, expires_at: datetime, deletion_scheduled_at: datetime, has_submitted: bool = False
) -> SessionState:
    """Phase of a session at instant `at`.

    Depends only on its arguments, so the result moves forward monotonically as `at` grows.
    """
    if at >= deletion_scheduled_at:
        return SessionState.TERMINAL
    if at >= expires_at:
        return SessionState.DOWNLOAD_WINDOW
    if has_submitted:
        return SessionState.ALREADY_SUBMITTED
    return SessionState.SUBMISSION_OPEN


def format_remaining(delta: timedelta) -> str:
    """Format a duration as '{h}h {m}m {s}s'. Hours are not wrapped into days."""
    total_seconds = max(int(delta.total_seconds()), 0)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours}h {minutes}m {seconds}s"


def describe(session: Session | None, at: datetime, has_submitted: bool = False) -> LifecycleSnapshot:
    """State plus countdown text for a session, or not_found when the record is absent."""
    if session is None:
        return LifecycleSnapshot(state=SessionState.NOT_FOUND, time_left="")

    state = evaluate_state(at, session.expires_at, session.deletion_scheduled_at, has_submitted)
    if state.is_open:
        remaining = format_remaining(session.expires_at - at)
        return LifecycleSnapshot(state=state, time_left=f"Submissions open for: {remaining}", boundary=session.expires_at)
    if state == SessionState.DOWNLOAD_WINDOW:
        remaining = format_remaining(session.deletion_scheduled_at - at)
        return LifecycleSnapshot(
            state=state, time_left=f"Download available for: {remaining}", boundary=session.deletion_scheduled_at
        )
    return LifecycleSnapshot(state=state, time_left=TERMINAL_TEXT)
