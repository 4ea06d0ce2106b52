from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from contactgain.core.db import MongoModel
from contactgain.utils import now


class Contact(MongoModel):
    """Contact submitted to a session.

    Indexed on (session_id, name_key) - unique, and session_id + submitted_at for listing.
    """

    session_id: UUID
    name: str
    name_key: str  # Casefolded name, per-session uniqueness key
    phone: str  # Whitespace removed
    email: str | None = None
    submitted_at: datetime = Field(default_factory=now)


class ContactView(BaseModel):
    """Submitted contact (API representation)."""

    id: UUID = Field(..., description="Contact ID")
    name: str = Field(..., description="Full name")
    phone: str = Field(..., description="Phone number in international format")
    email: str | None = Field(None, description="Optional email address")
    submitted_at: datetime

    @classmethod
    def from_domain(cls, contact: Contact) -> "ContactView":
        """Create view model from domain model."""
        return cls(
            id=contact.id, name=contact.name, phone=contact.phone, email=contact.email, submitted_at=contact.submitted_at
        )
