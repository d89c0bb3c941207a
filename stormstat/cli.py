"""
stormstat command line interface
================================

Runs the whole report in one go:

    python -m stormstat.cli --data repdata-data-StormData.csv.bz2

Steps:
1) Load the compressed storm events file
2) Aggregate health and economic impact by event type and year
3) Print the top event types (mean / std per year)
4) Save one line chart per report (and optionally a DOCX report)

The input file is only read; nothing is written next to it.
"""

from __future__ import annotations
import argparse
import os
import sys
from typing import List, Optional

from .engine import StormAnalysis
from .loader import load_storm_data
from .report import (
    ReportConfig,
    format_summary_table,
    generate_docx_report,
    plot_selection,
    summary_table,
)

DEFAULT_DATA = "repdata-data-StormData.csv.bz2"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="stormstat",
        description="Summarize public health and economic impact of storm events.",
    )
    ap.add_argument("--data", default=DEFAULT_DATA, help="Path to the compressed Storm Data CSV")
    ap.add_argument("--out-dir", default=ReportConfig.out_dir, help="Directory for chart images")
    ap.add_argument("--top-health", type=int, default=ReportConfig.top_health,
                    help="Event types to keep per health metric (injuries, fatalities)")
    ap.add_argument("--top-economic", type=int, default=ReportConfig.top_economic,
                    help="Event types to keep by mean damage")
    ap.add_argument("--dpi", type=int, default=ReportConfig.dpi, help="Chart resolution")
    ap.add_argument("--docx", default=None, help="Also write a DOCX report to this path")
    return ap


def run(args: argparse.Namespace) -> int:
    config = ReportConfig(
        out_dir=args.out_dir,
        dpi=args.dpi,
        top_health=args.top_health,
        top_economic=args.top_economic,
    )

    print("Loading dataset...")
    events = load_storm_data(args.data)
    analysis = StormAnalysis(events=events, dataset_path=args.data)

    stats = analysis.stats()
    print(f"Loaded {stats['records']} events | event types: {stats['event_types']} "
          f"| years: {stats['year_min']}-{stats['year_max']}")
    if stats["missing_year"]:
        print(f"WARNING: {stats['missing_year']} rows have an unparsable begin date (year is NA).")

    health = analysis.top_health(config.top_health)
    economic = analysis.top_economic(config.top_economic)

    print(f"\nPublic health impact: top {config.top_health} by mean injuries / fatalities per year")
    print(format_summary_table(summary_table(health)))
    print(f"\nEconomic impact: top {config.top_economic} by mean damage per year (US$)")
    print(format_summary_table(summary_table(economic)))

    charts: List[str] = []
    if health.event_types:
        charts.append(plot_selection(
            health, os.path.join(config.out_dir, "health_by_year.png"),
            title="Fatalities and injuries per year", dpi=config.dpi,
        ))
    if economic.event_types:
        charts.append(plot_selection(
            economic, os.path.join(config.out_dir, "damage_by_year.png"),
            title="Property + crop damage per year (US$)", dpi=config.dpi,
        ))
    print()
    for path in charts:
        print(f"Chart written to {path}")

    if args.docx:
        generate_docx_report(
            stats, health, economic, charts, args.docx,
            config=config, dataset_file=os.path.basename(analysis.dataset_path),
        )
        print(f"Report written to {args.docx}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the stormstat CLI."""
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except (FileNotFoundError, KeyError, ValueError, ImportError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
