"""Session-related API endpoints."""

from collections.abc import AsyncGenerator

from fastapi import APIRouter, Response
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from contactgain.core.modules.session.models import (
    MAX_DURATION_MINUTES,
    MIN_DURATION_MINUTES,
    SessionStats,
    SessionSummary,
    SessionView,
)
from contactgain.core.modules.vcf.codec import MEDIA_TYPE
from contactgain.web.deps import AppDep, BrowserDep
from contactgain.web.openapi import ErrorResponse

router = APIRouter(tags=["sessions"])


class CreateSessionRequest(BaseModel):
    """Request to open a new collection session."""

    group_name: str = Field(..., description="Display label shown to participants", min_length=1)
    duration_minutes: int = Field(
        ...,
        description="How long submissions stay open",
        ge=MIN_DURATION_MINUTES,
        le=MAX_DURATION_MINUTES,
    )

    model_config = {"json_schema_extra": {"examples": [{"group_name": "Study Group", "duration_minutes": 60}]}}


@router.post(
    "/sessions",
    summary="Create session",
    description="Open a contact collection session owned by the requesting browser.",
    operation_id="createSession",
    status_code=201,
    responses={
        201: {"description": "Session created successfully"},
        400: {"model": ErrorResponse, "description": "Invalid group name or duration"},
        503: {"model": ErrorResponse, "description": "Could not allocate a session link"},
    },
)
async def create_session(req: CreateSessionRequest, app: AppDep, browser: BrowserDep) -> SessionSummary:
    return await app.create_session(browser.browser_id, req.group_name, req.duration_minutes)


@router.get(
    "/sessions",
    summary="List my sessions",
    description="Sessions created by this browser that were not hidden, newest first, with contact counts.",
    operation_id="listSessions",
    responses={200: {"description": "List of sessions"}},
)
async def list_sessions(app: AppDep, browser: BrowserDep) -> list[SessionSummary]:
    return await app.get_my_sessions(browser.browser_id)


@router.get(
    "/sessions/stats",
    summary="Get my session statistics",
    description="Totals, average contacts per session and the most active sessions of this browser.",
    operation_id="getSessionStats",
    responses={200: {"description": "Aggregate statistics"}},
)
async def get_session_stats(app: AppDep, browser: BrowserDep) -> SessionStats:
    return await app.get_my_stats(browser.browser_id)


@router.get(
    "/sessions/{short_id}",
    summary="Get session",
    description="Session details with its current phase and countdown for the requesting browser.",
    operation_id="getSession",
    responses={
        200: {"description": "Session details"},
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def get_session(short_id: str, app: AppDep, browser: BrowserDep) -> SessionView:
    return await app.get_session_view(short_id, browser.browser_id, browser.has_submitted(short_id))


@router.get(
    "/sessions/{short_id}/status/stream",
    summary="Stream session status",
    description=(
        "Server-sent events with the session phase and countdown, one per tick. "
        "The stream ends once the session is terminal or unknown. The browser's submitted marker is read "
        "from the cookie when the stream opens; after submitting a contact, reconnect to receive already_submitted."
    ),
    operation_id="streamSessionStatus",
    response_class=StreamingResponse,
    responses={200: {"description": "text/event-stream of status snapshots", "content": {"text/event-stream": {}}}},
)
async def stream_session_status(short_id: str, app: AppDep, browser: BrowserDep) -> StreamingResponse:
    # Snapshot of this request's cookie; a submit in another request cannot change it mid-stream
    has_submitted = browser.has_submitted(short_id)

    async def events() -> AsyncGenerator[str]:
        async for snapshot in app.watch_session(short_id, has_submitted):
            yield f"event: status\ndata: {snapshot.model_dump_json()}\n\n"

    return StreamingResponse(events(), media_type="text/event-stream", headers={"Cache-Control": "no-cache"})


@router.delete(
    "/sessions/{short_id}",
    summary="Hide session",
    description="Hide a session from the creator's list. It stays reachable by link until it is deleted.",
    operation_id="hideSession",
    status_code=204,
    responses={
        204: {"description": "Session hidden"},
        403: {"model": ErrorResponse, "description": "Not the creator of this session"},
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def hide_session(short_id: str, app: AppDep, browser: BrowserDep) -> None:
    await app.hide_session(short_id, browser.browser_id)


@router.get(
    "/sessions/{short_id}/download",
    summary="Download contacts",
    description=(
        "Download all contacts of a session as a vCard file. Available to everyone during the download "
        "window and to the creator while submissions are open. Every download is counted."
    ),
    operation_id="downloadContacts",
    response_class=Response,
    responses={
        200: {"description": "vCard file", "content": {"text/vcard": {}}},
        400: {"model": ErrorResponse, "description": "Session has no contacts"},
        404: {"model": ErrorResponse, "description": "Session not found or already closed"},
        409: {"model": ErrorResponse, "description": "Submissions are still open"},
    },
)
async def download_contacts(short_id: str, app: AppDep, browser: BrowserDep) -> Response:
    download = await app.download_contacts(short_id, browser.browser_id)
    return Response(
        content=download.content,
        media_type=MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{download.filename}"'},
    )
