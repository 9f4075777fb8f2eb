"""Single-pass report engine over a stream of application documents."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date
from pathlib import Path
from typing import Any, TypeVar

from licensereport.aggregation.accumulator import Accumulator
from licensereport.aggregation.fees import FeeRollup
from licensereport.aggregation.models import AggregateReport, ProcessingStats
from licensereport.aggregation.timeseries import (
    DailyStatusWindow,
    MonthlyStatusHistogram,
    ReportWindow,
)
from licensereport.catalog.models import CatalogBaseline
from licensereport.catalog.store import CatalogStore, load_baseline
from licensereport.classification.rules import StationRuleTable, detect_application_type
from licensereport.core.config import ChartConfig, Settings
from licensereport.ingest.records import ApplicationRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

_FAILED = object()


class ReportBatch:
    """Mutable state of one report scan.

    Obtain from :meth:`ReportEngine.start`, feed records with :meth:`process`
    and call :meth:`finish` once to get the report.
    """

    def __init__(
        self,
        baseline: CatalogBaseline,
        rules: StationRuleTable,
        window: ReportWindow,
        region: str,
        chart: ChartConfig,
        today: date | None = None,
    ) -> None:
        self.catalog = CatalogStore(baseline)
        self._accumulator = Accumulator(self.catalog, rules)
        self._fees = FeeRollup(self.catalog)
        self._monthly = MonthlyStatusHistogram(window)
        self._daily = DailyStatusWindow(today=today, days=chart.daily_window_days)
        self._chart = chart
        self._report = AggregateReport(region=region)
        self._stats = ProcessingStats()
        self._finished = False

    def _run_step(self, step: str, record: ApplicationRecord, fn: Callable[[], T]) -> T | object:
        try:
            return fn()
        except Exception:
            self._stats.record_failure(step)
            logger.exception("Step %r failed for application %r", step, record.label or "(no label)")
            return _FAILED

    def process(self, document: dict[str, Any] | ApplicationRecord) -> bool:
        """Fold one application into the report.

        Returns False when the document could not be read at all. A failure
        inside any later step is logged and only that step's contribution is
        lost.
        """
        if self._finished:
            raise RuntimeError("Report batch already finished")

        if isinstance(document, ApplicationRecord):
            record = document
        elif not isinstance(document, dict):
            self._stats.skipped += 1
            logger.warning("Skipping non-object application entry of type %s", type(document).__name__)
            return False
        else:
            try:
                record = ApplicationRecord.from_document(document)
            except Exception:
                self._stats.skipped += 1
                logger.exception("Could not read application document")
                return False

        acc = self._accumulator
        base_index = self._run_step("base", record, lambda: acc.resolve_base(record))
        if base_index is not _FAILED:
            self._run_step("classify", record, lambda: acc.classify_particulars(record, base_index))
            self._run_step("accumulate", record, lambda: acc.accumulate_base(base_index, record))
        self._run_step("fees", record, lambda: self._fees.apply(record.soa))
        self._run_step("timeseries", record, lambda: self._tally_status(record))
        self._run_step("metadata", record, lambda: self._update_metadata(record))

        self._stats.processed += 1
        return True

    def _tally_status(self, record: ApplicationRecord) -> None:
        self._monthly.add(record.updated_at, record.status)
        self._daily.add(record.updated_at, record.status)

    def _update_metadata(self, record: ApplicationRecord) -> None:
        report = self._report
        # Last application wins for the header fields.
        report.permit_number = record.permit_number
        report.nature_of_service = record.nature_of_service
        report.no_of_years = record.year_multiplier
        report.period_covered = (
            f"{record.validity_start} to {record.validity_end}" if record.validity_end.strip() else ""
        )
        code = detect_application_type(record.label)
        if code is not None:
            report.application_type = code
        if record.evaluator is not None:
            report.evaluator = record.evaluator.full_name

    def finish(self) -> AggregateReport:
        """Close the batch and return the completed report."""
        if self._finished:
            raise RuntimeError("Report batch already finished")
        self._finished = True

        report = self._report
        report.services = [row.model_copy(deep=True) for row in self.catalog.rows]
        report.fees = [bucket.model_copy() for bucket in self.catalog.fee_buckets]
        report.total_fee = self._accumulator.total_fee
        report.chart_data = self._monthly.to_chart_data(self._chart.palette, report.region)
        report.chart_stacked_series = self._daily.to_series(self._chart.tracked_statuses)
        report.stats = self._stats

        logger.info(
            "Report built: %d processed, %d skipped, %d rows, failed steps %s",
            self._stats.processed,
            self._stats.skipped,
            len(report.services),
            self._stats.failed_steps or "none",
        )
        return report


class ReportEngine:
    """Builds aggregate reports from application documents.

    The baseline catalog and the station rules are loaded once; every call
    to :meth:`build` (or :meth:`start`) works on a fresh copy of the catalog.

    Args:
        settings: Settings instance. Defaults to ``Settings()`` which reads
            from environment variables.
        catalog_path: Override for the baseline catalog YAML.
        rules_path: Override for the station rules YAML.
        today: Last day of the daily chart window. Defaults to the current
            UTC date at the time a batch starts.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        catalog_path: str | Path | None = None,
        rules_path: str | Path | None = None,
        today: date | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._baseline = load_baseline(catalog_path or self._settings.catalog.catalog_path)
        self._rules = StationRuleTable(rules_path or self._settings.catalog.rules_path)
        self._today = today

    @property
    def rules(self) -> StationRuleTable:
        return self._rules

    @property
    def baseline(self) -> CatalogBaseline:
        return self._baseline

    def start(
        self,
        window: ReportWindow | None = None,
        region: str | None = None,
    ) -> ReportBatch:
        """Begin a batch. Window and region default to the configured ones."""
        window_config = self._settings.window
        if window is None:
            window = ReportWindow.parse(window_config.date_start, window_config.date_end)
        return ReportBatch(
            baseline=self._baseline,
            rules=self._rules,
            window=window,
            region=window_config.region if region is None else region,
            chart=self._settings.chart,
            today=self._today,
        )

    def build(
        self,
        documents: Iterable[dict[str, Any] | ApplicationRecord],
        window: ReportWindow | None = None,
        region: str | None = None,
    ) -> AggregateReport:
        """Scan *documents* once and return the aggregate report."""
        batch = self.start(window=window, region=region)
        for document in documents:
            batch.process(document)
        return batch.finish()
