from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import ConnectionFailure
from starlette.middleware.sessions import SessionMiddleware

from contactgain.app import CONTACTGAIN_VERSION, App
from contactgain.config import Config
from contactgain.errors import UserError
from contactgain.web.error_handlers import general_exception_handler, store_error_handler, user_error_handler
from contactgain.web.openapi import set_custom_openapi
from contactgain.web.routers import contacts_router, metadata_router, sessions_router

BROWSER_COOKIE_MAX_AGE = 365 * 24 * 60 * 60


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="ContactGain API", lifespan=lifespan)

    # The cookie is the only identity a browser has, so it must outlive the longest session
    app.add_middleware(
        SessionMiddleware, secret_key=config.session_secret_key, max_age=BROWSER_COOKIE_MAX_AGE, same_site="lax"
    )

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Health check endpoint (at root level, not versioned)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(sessions_router, prefix="/api/v1")
    app.include_router(contacts_router, prefix="/api/v1")
    app.include_router(metadata_router, prefix="/api/v1")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(ConnectionFailure, store_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app, CONTACTGAIN_VERSION)

    return app
