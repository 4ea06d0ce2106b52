from typing import Annotated, Any, cast
from uuid import uuid4

from fastapi import Depends, Request

from contactgain.app import App
from contactgain.core.modules.session.models import BrowserId

BROWSER_ID_KEY = "browser_id"
SUBMITTED_KEY = "submitted_sessions"


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


class BrowserState:
    """Per-browser state kept in the signed session cookie.

    Holds the opaque browser identifier (the creator identity) and the advisory
    "already submitted" markers. The markers only shortcut the view; the server
    still rejects duplicate names when they are missing.
    """

    def __init__(self, storage: dict[str, Any]) -> None:
        self._storage = storage
        if not isinstance(storage.get(BROWSER_ID_KEY), str):
            storage[BROWSER_ID_KEY] = str(uuid4())

    @property
    def browser_id(self) -> BrowserId:
        return BrowserId(self._storage[BROWSER_ID_KEY])

    def has_submitted(self, short_id: str) -> bool:
        return short_id in self._storage.get(SUBMITTED_KEY, [])

    def mark_submitted(self, short_id: str) -> None:
        submitted = list(self._storage.get(SUBMITTED_KEY, []))
        if short_id not in submitted:
            submitted.append(short_id)
        # Reassign so the middleware notices the change and rewrites the cookie
        self._storage[SUBMITTED_KEY] = submitted


async def get_browser_state(request: Request) -> BrowserState:
    """Browser state from the cookie session, assigning a new identifier on first visit."""
    return BrowserState(request.session)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
BrowserDep = Annotated[BrowserState, Depends(get_browser_state)]
