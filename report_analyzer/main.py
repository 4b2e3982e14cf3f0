"""
FastAPI application entrypoint for the Tweet Binder report analyzer.
"""

from __future__ import annotations

from fastapi import FastAPI

from report_analyzer.api.routes import router as api_router
from report_analyzer.core.config import get_settings
from report_analyzer.core.logging import configure_logging


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Tweet Binder Report Analyzer",
        version="0.1.0",
        description="REST API for AI analysis of Tweet Binder reports and follow-up chat.",
    )
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()

__all__ = ["app", "create_app"]
