"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from dependency_dashboard import __version__
from dependency_dashboard.web.api_analysis import router as analysis_router


def create_app() -> FastAPI:
    app = FastAPI(title="dependency-dashboard", version=__version__)

    @app.get("/api/health")
    async def health():
        return {"status": "ok", "version": __version__}

    app.include_router(analysis_router)
    return app
