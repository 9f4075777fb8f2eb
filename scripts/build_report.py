#!/usr/bin/env python3
"""CLI script to build an aggregate report from an issue dump or application list."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure the project source is importable when running the script directly.
_project_root = Path(__file__).resolve().parent.parent
_src = _project_root / "src"
if str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from licensereport.aggregation.engine import ReportEngine  # noqa: E402
from licensereport.aggregation.reports import export_report, format_report  # noqa: E402
from licensereport.aggregation.timeseries import ReportWindow  # noqa: E402
from licensereport.core.config import Settings  # noqa: E402
from licensereport.ingest.issues import iter_application_documents, load_issues  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build a license application report from a JSON dump."
    )
    parser.add_argument("input", type=str, help="Path to the JSON dump.")
    parser.add_argument(
        "--documents",
        action="store_true",
        help="Treat the input as a bare array of application documents instead of issues.",
    )
    parser.add_argument("--date-start", type=str, default=None, help="Monthly chart start date.")
    parser.add_argument("--date-end", type=str, default=None, help="Monthly chart end date.")
    parser.add_argument(
        "--region",
        type=str,
        default=None,
        help="Keep only issues labelled with this region and tag chart labels with it.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Path to write the JSON report.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    # Load settings from environment.
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        items = load_issues(args.input)
    except (FileNotFoundError, ValueError) as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)

    region = args.region if args.region is not None else settings.window.region
    documents = items if args.documents else iter_application_documents(items, region=region)

    window = None
    if args.date_start is not None or args.date_end is not None:
        window = ReportWindow.parse(args.date_start, args.date_end)

    engine = ReportEngine(settings=settings)
    report = engine.build(documents, window=window, region=region)

    print(format_report(report))

    if args.output:
        export_report(report, args.output)
        print(f"\nReport exported to {args.output}")


if __name__ == "__main__":
    main()
