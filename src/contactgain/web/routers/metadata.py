"""Metadata endpoints for exposing system information."""

from fastapi import APIRouter

from contactgain.core.modules.session.models import SessionLimits
from contactgain.web.deps import AppDep

router = APIRouter(tags=["metadata"])


@router.get(
    "/metadata/limits",
    summary="Get session limits",
    description="Returns the allowed submission window range and the download window length, for the creation form.",
    operation_id="getSessionLimits",
    responses={200: {"description": "Session limits"}},
)
async def get_session_limits(app: AppDep) -> SessionLimits:
    return app.get_session_limits()


@router.get(
    "/metadata/version",
    summary="Get version information",
    description="Returns build and version information including package version, git commit hash, commit date, and build time.",
    operation_id="getVersion",
    responses={200: {"description": "Version and build information"}},
)
async def get_version(app: AppDep) -> dict[str, str]:
    return app.get_version()
