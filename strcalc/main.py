"""
Main FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from strcalc.api import router as api_router
from strcalc.calculations.display import build_display
from strcalc.config import Settings, get_settings
from strcalc.db.database import init_db
from strcalc.services.session import CalculatorSession
from strcalc.services.snapshots import SnapshotStore, SqlSnapshotStore
from strcalc.ui import FORM_SECTIONS, STATIC_DIR, templates

VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def create_app(
    store: Optional[SnapshotStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the calculator application.

    Args:
        store: Where the input snapshot is loaded from at startup and saved
            to on every edit and at shutdown. Defaults to the configured
            database.
        settings: Application settings (defaults to get_settings())
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    owns_database = store is None
    if owns_database:
        store = SqlSnapshotStore(key=settings.snapshot_key)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if owns_database:
            init_db()
        app.state.calculator = CalculatorSession(store.load())
        logger.info(f"{settings.app_name} started")
        yield
        if settings.persist_on_shutdown:
            store.save(app.state.calculator.inputs)
        logger.info(f"{settings.app_name} stopped")

    app = FastAPI(
        title=settings.app_name,
        description="Short-term rental investment calculator",
        version=VERSION,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.snapshot_store = store

    # Mount static files
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/", response_class=HTMLResponse)
    async def home(request: Request):
        """Render the calculator page."""
        session = request.app.state.calculator
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "title": settings.app_name,
                "sections": FORM_SECTIONS,
                "inputs": session.inputs,
                "display": build_display(session.metrics()),
                "recompute_delay_ms": settings.recompute_delay_ms,
            },
        )

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy", "version": VERSION}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("strcalc.main:app", host=settings.host, port=settings.port)
