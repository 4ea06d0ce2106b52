"""Contact submission endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from contactgain.core.modules.contact.models import ContactView
from contactgain.web.deps import AppDep, BrowserDep
from contactgain.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["contacts"])


class SubmitContactRequest(BaseModel):
    """Contact details submitted through a session link."""

    name: str = Field(..., description="Full name, unique within the session (case-insensitive)")
    phone: str = Field(..., description="Phone number in international format, e.g. +233501234567")
    email: str | None = Field(None, description="Optional email address")

    model_config = {"json_schema_extra": {"examples": [{"name": "Jane Doe", "phone": "+233501234567", "email": None}]}}


@router.post(
    "/sessions/{short_id}/contacts",
    summary="Submit contact",
    description="Add a contact to an open session. Remembers in the browser cookie that this browser has submitted.",
    operation_id="submitContact",
    status_code=201,
    responses={
        201: {"description": "Contact submitted successfully"},
        400: {"model": ErrorResponse, "description": "Missing name or phone, or invalid phone format"},
        404: {"model": ErrorResponse, "description": "Session not found"},
        409: {"model": ErrorResponse, "description": "Submissions closed or name already submitted"},
    },
)
async def submit_contact(short_id: str, request: SubmitContactRequest, app: AppDep, browser: BrowserDep) -> ContactView:
    contact = await app.submit_contact(short_id, request.name, request.phone, request.email)
    browser.mark_submitted(short_id)
    return contact
