from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from lawoffice.api.api import api_router
from lawoffice.core.config import settings
from lawoffice.core.logging import configure_logging
from lawoffice.core.revalidation import PageCache
from lawoffice.db.init_db import init_db
from lawoffice.ui.router import ui_router


def create_app() -> FastAPI:
    configure_logging()
    init_db()
    app = FastAPI(title="Law Office")
    app.state.page_cache = PageCache(enabled=settings.page_cache_enabled)

    app.include_router(api_router)

    # UI (server-rendered, Arabic RTL)
    app.include_router(ui_router)

    static_dir = Path(__file__).resolve().parent / "static"
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir), html=True), name="static")
    return app


app = create_app()
