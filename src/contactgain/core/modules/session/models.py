"""Contact collection session models."""

from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from contactgain.core.db import MongoModel
from contactgain.core.modules.lifecycle.models import LifecycleSnapshot

MIN_DURATION_MINUTES = 10
MAX_DURATION_MINUTES = 14 * 24 * 60  # Two weeks

BrowserId = NewType("BrowserId", str)


class Session(MongoModel):
    """Time-boxed contact collection unit identified by a short link token.

    Indexed on short_id - unique, creator_identifier, deletion_scheduled_at, expires_at.
    """

    short_id: str
    group_name: str
    creator_identifier: str
    created_at: datetime
    submission_duration_minutes: int
    expires_at: datetime  # Submissions accepted while now < expires_at
    deletion_scheduled_at: datetime  # Download allowed while expires_at <= now < deletion_scheduled_at
    file_sequence_number: int  # Global counter value taken at creation, names the .vcf file
    download_count: int = 0
    hidden_by_creator_at: datetime | None = None

    @model_validator(mode="after")
    def check_window_order(self) -> "Session":
        if not self.created_at < self.expires_at < self.deletion_scheduled_at:
            raise ValueError("Session windows must satisfy created_at < expires_at < deletion_scheduled_at")
        return self

    @property
    def is_hidden(self) -> bool:
        return self.hidden_by_creator_at is not None


class SessionSummary(BaseModel):
    """Session as listed for its creator, with aggregate contact count."""

    id: UUID = Field(..., description="Session ID")
    short_id: str = Field(..., description="Shareable link token")
    group_name: str = Field(..., description="Display label")
    created_at: datetime
    submission_duration_minutes: int
    expires_at: datetime = Field(..., description="Submissions close at")
    deletion_scheduled_at: datetime = Field(..., description="Session and contacts are deleted at")
    file_sequence_number: int
    download_count: int
    contact_count: int = Field(..., description="Number of contacts submitted so far", ge=0)

    @classmethod
    def from_domain(cls, session: Session, contact_count: int) -> "SessionSummary":
        """Create view model from domain model."""
        return cls(
            id=session.id,
            short_id=session.short_id,
            group_name=session.group_name,
            created_at=session.created_at,
            submission_duration_minutes=session.submission_duration_minutes,
            expires_at=session.expires_at,
            deletion_scheduled_at=session.deletion_scheduled_at,
            file_sequence_number=session.file_sequence_number,
            download_count=session.download_count,
            contact_count=contact_count,
        )


class TopSession(BaseModel):
    short_id: str
    group_name: str
    contact_count: int


class SessionStats(BaseModel):
    """Aggregate numbers over a creator's visible sessions."""

    total_sessions: int = Field(..., ge=0)
    total_contacts: int = Field(..., ge=0)
    average_contacts_per_session: float = Field(..., description="Rounded to one decimal")
    most_active: TopSession | None = Field(None, description="Session with the most contacts")
    top_sessions: list[TopSession] = Field(default_factory=list, description="Up to five sessions by contact count")


class SessionView(BaseModel):
    """Session as shown to anyone holding the link."""

    short_id: str = Field(..., description="Shareable link token")
    group_name: str = Field(..., description="Display label")
    created_at: datetime
    expires_at: datetime = Field(..., description="Submissions close at")
    deletion_scheduled_at: datetime = Field(..., description="Session and contacts are deleted at")
    is_creator: bool = Field(..., description="Whether the requesting browser created this session")
    contact_count: int = Field(..., ge=0)
    download_count: int = Field(..., ge=0)
    status: LifecycleSnapshot


class SessionLimits(BaseModel):
    """Constraints on new sessions."""

    min_duration_minutes: int
    max_duration_minutes: int
    retention_hours: int = Field(..., description="Download window length after submissions close")
