from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field


def set_custom_openapi(app: FastAPI, version: str) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="ContactGain API",
            version=version,
            summary="Time-boxed contact collection sessions with vCard export",
            routes=app.routes,
        )

        # The browser identifier travels in the signed session cookie
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BrowserCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": "session",
                "description": "Signed cookie holding the opaque browser identifier, issued on first request",
            },
        }
        openapi_schema["security"] = [{"BrowserCookie": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Session not found", "type": "not_found"},
                {"message": "This name has already been submitted for this session", "type": "duplicate_name"},
                {"message": "Session is no longer accepting submissions", "type": "window_closed"},
            ]
        }
    }
