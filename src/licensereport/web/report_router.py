"""Report API router: catalog inspection and report builds."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from licensereport.aggregation.engine import ReportEngine
from licensereport.aggregation.timeseries import ReportWindow


router = APIRouter()


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class ReportRequest(BaseModel):
    """Request body for building a report."""

    records: list[Any] = Field(default_factory=list)
    date_start: str | None = None
    date_end: str | None = None
    region: str | None = None


# ---------------------------------------------------------------------------
# Helper to get services from app state
# ---------------------------------------------------------------------------


def _get_engine(request: Request) -> ReportEngine:
    engine = getattr(request.app.state, "report_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Report engine not available")
    return engine


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/api/catalog")
async def api_get_catalog(request: Request) -> dict[str, Any]:
    """Baseline catalog rows and fee bucket names."""
    baseline = _get_engine(request).baseline
    return {
        "services": [row.model_dump(mode="json") for row in baseline.services],
        "fees": list(baseline.fees),
        "other_fee": baseline.other_fee,
    }


@router.get("/api/catalog/rules")
async def api_get_rules(request: Request) -> list[dict[str, str]]:
    """All station classification rules."""
    rules = _get_engine(request).rules
    return [
        {
            "family": key.family.value,
            "nature": key.nature.value,
            "station_class": key.station_class.value,
            "new": pair.new,
            "renewal": pair.renewal,
        }
        for key, pair in rules.entries()
    ]


@router.post("/api/reports")
def api_build_report(body: ReportRequest, request: Request) -> dict[str, Any]:
    """Build an aggregate report from application documents.

    Declared sync so the scan runs in the threadpool, off the event loop.
    """
    engine = _get_engine(request)
    window = None
    if body.date_start is not None or body.date_end is not None:
        window = ReportWindow.parse(body.date_start, body.date_end)
    report = engine.build(body.records, window=window, region=body.region)
    return report.model_dump(mode="json")
