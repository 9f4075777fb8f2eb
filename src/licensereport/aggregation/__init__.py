"""Report aggregation: accumulation, fee rollup, status charts."""

from licensereport.aggregation.engine import ReportBatch, ReportEngine
from licensereport.aggregation.models import AggregateReport, ChartData, StackedSeries
from licensereport.aggregation.reports import export_report, format_report
from licensereport.aggregation.timeseries import ReportWindow

__all__ = [
    "AggregateReport",
    "ChartData",
    "ReportBatch",
    "ReportEngine",
    "ReportWindow",
    "StackedSeries",
    "export_report",
    "format_report",
]
