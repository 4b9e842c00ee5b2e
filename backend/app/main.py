"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from app.domain.exceptions import DuplicateEntityError, StoreError
from app.infrastructure.database.session import async_session_factory, create_tables
from app.infrastructure.dependencies import build_auth_service
from app.infrastructure.logging.log_config import setup_logging
from app.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _seed_admin_account() -> None:
    """Create the ADMIN account from ADMIN_EMAIL / ADMIN_PASSWORD when configured.

    Idempotent: safe to call on every startup.
    """
    settings = get_settings()
    if not settings.admin_email or not settings.admin_password:
        logger.debug("No admin credentials configured; skipping admin seed")
        return

    try:
        async with async_session_factory() as session:
            service = build_auth_service(session)
            await service.seed_admin(
                settings.admin_email, settings.admin_password, settings.admin_name
            )
            await session.commit()
    except (StoreError, DuplicateEntityError) as exc:
        logger.warning("Could not seed admin account: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging, create tables, seed the admin."""
    setup_logging()

    try:
        await create_tables()
    except (SQLAlchemyError, OSError) as exc:
        # Public reads degrade to empty results until the store is reachable.
        logger.error("Database unavailable at startup: %s", exc)
    else:
        await _seed_admin_account()

    yield


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
