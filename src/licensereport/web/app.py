"""FastAPI application exposing the report engine."""

from __future__ import annotations

from fastapi import FastAPI
from pydantic import BaseModel

from licensereport import __version__
from licensereport.aggregation.engine import ReportEngine
from licensereport.core.config import Settings
from licensereport.web.report_router import router as report_router


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str = __version__


def create_app(
    settings: Settings | None = None,
    report_engine: ReportEngine | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Optional settings; defaults to ``Settings()``.
        report_engine: Optional pre-built ReportEngine.
    """
    settings = settings or Settings()
    if report_engine is None:
        report_engine = ReportEngine(settings=settings)

    app = FastAPI(title="licensereport", version=__version__, debug=settings.debug)
    app.state.settings = settings
    app.state.report_engine = report_engine
    app.include_router(report_router)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="licensereport")

    return app
