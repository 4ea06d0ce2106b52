from contactgain.web.routers.contacts import router as contacts_router
from contactgain.web.routers.metadata import router as metadata_router
from contactgain.web.routers.sessions import router as sessions_router

__all__ = [
    "contacts_router",
    "metadata_router",
    "sessions_router",
]
