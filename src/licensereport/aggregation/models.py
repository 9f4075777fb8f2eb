"""Aggregate report and chart models."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from licensereport.catalog.models import CatalogRow, FeeBucket
from licensereport.core.types import ApplicationTypeCode


class ChartData(BaseModel):
    """One bar of the monthly status chart."""

    label: str
    value: int = 0
    front_color: str = ""
    gradient_color: str = ""


class StackedSeries(BaseModel):
    """One status series of the stacked daily chart."""

    name: str
    type: str = "line"
    stack: str = "total"
    bar_width: str = "60%"
    label: dict[str, Any] = Field(default_factory=lambda: {"show": False})
    data: list[float] = Field(default_factory=list)


class ProcessingStats(BaseModel):
    """Counters describing how a batch scan went."""

    processed: int = 0
    skipped: int = 0
    failed_steps: dict[str, int] = Field(default_factory=dict)

    def record_failure(self, step: str) -> None:
        self.failed_steps[step] = self.failed_steps.get(step, 0) + 1


class AggregateReport(BaseModel):
    """Root report for one batch of applications."""

    services: list[CatalogRow] = Field(default_factory=list)
    fees: list[FeeBucket] = Field(default_factory=list)
    chart_data: list[ChartData] = Field(default_factory=list)
    chart_stacked_series: list[StackedSeries] = Field(default_factory=list)
    total_fee: Decimal = Decimal("0")

    region: str = ""
    permit_number: str = ""
    period_covered: str = ""
    evaluator: str = ""
    nature_of_service: str = ""
    no_of_years: int = 1
    application_type: ApplicationTypeCode | None = None

    stats: ProcessingStats = Field(default_factory=ProcessingStats)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def find_service(self, name: str) -> CatalogRow | None:
        key = name.strip().casefold()
        for row in self.services:
            if row.name.strip().casefold() == key:
                return row
        return None

    def find_fee(self, name: str) -> FeeBucket | None:
        key = name.strip().casefold()
        for bucket in self.fees:
            if bucket.name.strip().casefold() == key:
                return bucket
        return None
