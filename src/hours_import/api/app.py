"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from hours_import import __version__
from hours_import.api.routes import health, imports
from hours_import.core.config import AppSettings
from hours_import.core.protocols import (
    IAttendanceStore,
    ISessionStore,
    ISupervisorNotifier,
    IWorkforceDirectory,
)
from hours_import.persistence import create_session_store
from hours_import.services.coordinator import ImportCoordinator

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging from the application settings."""
    settings: AppSettings = app.state.settings
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    yield


def create_app(
    *,
    directory: IWorkforceDirectory,
    attendance: IAttendanceStore,
    notifier: ISupervisorNotifier,
    settings: AppSettings | None = None,
    session_store: ISessionStore | None = None,
) -> FastAPI:
    """Create the FastAPI application around the host's collaborators."""
    if settings is None:
        settings = AppSettings()
    if session_store is None:
        session_store = create_session_store(settings)

    app = FastAPI(
        title="Hours Import Service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.coordinator = ImportCoordinator(
        directory=directory,
        attendance=attendance,
        notifier=notifier,
        session_store=session_store,
        settings=settings,
    )
    app.include_router(health.router)
    app.include_router(imports.router, prefix="/hours-import")
    return app
