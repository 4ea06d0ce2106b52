from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class SessionState(StrEnum):
    """Phase of a session as seen by one viewer."""

    SUBMISSION_OPEN = "submission_open"
    ALREADY_SUBMITTED = "already_submitted"  # Submission window, but this browser already submitted
    DOWNLOAD_WINDOW = "download_window"
    TERMINAL = "terminal"
    NOT_FOUND = "not_found"

    @property
    def is_open(self) -> bool:
        return self in (SessionState.SUBMISSION_OPEN, SessionState.ALREADY_SUBMITTED)

    @property
    def is_final(self) -> bool:
        """No further ticks can change the state."""
        return self in (SessionState.TERMINAL, SessionState.NOT_FOUND)


class LifecycleSnapshot(BaseModel):
    """Derived state of a session at one instant."""

    state: SessionState = Field(..., description="Current phase for this viewer")
    time_left: str = Field(..., description="Human-readable countdown to the active boundary")
    boundary: datetime | None = Field(None, description="Instant the current phase ends, None when final")
