"""Format and export aggregate reports."""

from __future__ import annotations

import json
from pathlib import Path

from licensereport.aggregation.models import AggregateReport


def format_report(report: AggregateReport, top: int = 20) -> str:
    """Produce a human-readable text summary of an AggregateReport."""
    lines: list[str] = []

    lines.append("=" * 72)
    lines.append("  License Application Report")
    lines.append("=" * 72)
    lines.append(f"  Generated : {report.generated_at.isoformat()}")
    if report.region:
        lines.append(f"  Region    : {report.region}")
    if report.period_covered:
        lines.append(f"  Period    : {report.period_covered}")
    lines.append(f"  Processed : {report.stats.processed} (skipped {report.stats.skipped})")
    lines.append(f"  Total fee : {report.total_fee:,.2f}")
    if report.stats.failed_steps:
        failed = ", ".join(f"{step}={n}" for step, n in sorted(report.stats.failed_steps.items()))
        lines.append(f"  Failures  : {failed}")

    active = sorted((r for r in report.services if r.count), key=lambda r: r.count, reverse=True)
    lines.append("-" * 72)
    lines.append(f"  {'Service':<52} {'Count':>6} {'Fee':>10}")
    lines.append("-" * 72)
    for row in active[:top]:
        lines.append(f"  {row.name[:52]:<52} {row.count:>6} {row.total_fee:>10,.2f}")
    if len(active) > top:
        lines.append(f"  ... {len(active) - top} more")

    fees = [b for b in report.fees if b.value]
    if fees:
        lines.append("-" * 72)
        lines.append(f"  {'Fee':<52} {'Amount':>17}")
        lines.append("-" * 72)
        for bucket in fees:
            lines.append(f"  {bucket.name[:52]:<52} {bucket.value:>17,.2f}")

    if report.chart_data:
        lines.append("-" * 72)
        for point in report.chart_data:
            lines.append(f"  {point.label:<52} {point.value:>6}")

    lines.append("=" * 72)
    return "\n".join(lines)


def export_report(report: AggregateReport, path: str | Path) -> None:
    """Save an AggregateReport to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = report.model_dump(mode="json")
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
