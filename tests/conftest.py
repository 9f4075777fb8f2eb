"""Shared test fixtures and helpers."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from licensereport.aggregation.engine import ReportEngine
from licensereport.catalog.models import CatalogBaseline
from licensereport.catalog.store import CatalogStore, load_baseline
from licensereport.classification.rules import StationRuleTable


TODAY = date(2024, 3, 31)


def build_document(
    label: str = "Radio Station License (NEW)",
    nature: str = "CP (Public Correspondence)",
    particulars: list[dict[str, Any]] | None = None,
    years: int | None = 1,
    status: str = "For Evaluation",
    updated_at: str | None = "2024-03-15T08:30:00Z",
    soa: list[dict[str, Any]] | None = None,
    total_fee: Any = 0,
    **extra: Any,
) -> dict[str, Any]:
    """Assemble an application document shaped like the upstream records."""
    service: dict[str, Any] = {
        "applicationType": {"label": label},
        "natureOfService": {"type": nature},
        "particulars": particulars if particulars is not None else [],
    }
    if years is not None:
        service["applicationDetails"] = {"noOfYears": years}
    doc: dict[str, Any] = {
        "service": service,
        "status": status,
        "soa": soa or [],
        "totalFee": total_fee,
    }
    if updated_at is not None:
        doc["updatedAt"] = updated_at
    doc.update(extra)
    return doc


def particular(station_class: str | None, equipments: int = 0) -> dict[str, Any]:
    entry: dict[str, Any] = {"equipments": [{"serial": f"EQ-{i}"} for i in range(equipments)]}
    if station_class is not None:
        entry["stationClass"] = station_class
    return entry


@pytest.fixture(scope="session")
def baseline() -> CatalogBaseline:
    return load_baseline()


@pytest.fixture(scope="session")
def rules() -> StationRuleTable:
    return StationRuleTable()


@pytest.fixture
def catalog(baseline: CatalogBaseline) -> CatalogStore:
    return CatalogStore(baseline)


@pytest.fixture
def engine() -> ReportEngine:
    return ReportEngine(today=TODAY)


@pytest.fixture
def make_document():
    """Factory fixture for application documents."""
    return build_document


@pytest.fixture
def make_particular():
    """Factory fixture for station particulars."""
    return particular
