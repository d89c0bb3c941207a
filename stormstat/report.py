from __future__ import annotations

"""
Report output
-------------
Turns the selected Summary Rows into:
- printable text tables (mean / std per event type),
- line charts of the per-year aggregates for exactly the selected event types,
- optionally a DOCX report bundling both tables and both charts.

matplotlib and python-docx are imported lazily so the aggregation modules can
be used without them.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pandas as pd

from .models import COLS, Selection, mean_col, std_col


# -----------------------------
# Configuration
# -----------------------------

@dataclass
class ReportConfig:
    """High-level knobs to control what the report shows and where it goes."""
    title: str = "Storm Impact Report"
    subtitle: str = "Public health and economic impact of severe weather events"
    dataset_name: str = "NOAA Storm Data"
    out_dir: str = "figures"
    dpi: int = 150

    # How many event types to select per ranked metric
    top_health: int = 5
    top_economic: int = 3


# -----------------------------
# Tables
# -----------------------------

def _table_columns(selection: Selection) -> List[str]:
    cols = [COLS.event_type]
    for mean_name in selection.metric_columns:
        metric = mean_name[: -len("_mean")]
        cols += [mean_col(metric), std_col(metric)]
    return cols


def summary_table(selection: Selection) -> pd.DataFrame:
    """Selected Summary Rows restricted to the ranked metrics' mean/std columns."""
    return selection.summary[_table_columns(selection)]


def format_summary_table(table: pd.DataFrame) -> str:
    if table.empty:
        return "(no rows)"
    return table.to_string(index=False, float_format=lambda v: f"{v:,.2f}")


# -----------------------------
# Charts
# -----------------------------

def _pyplot():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib.\n"
            "Install it with: python -m pip install matplotlib"
        ) from e
    return plt


def yearly_lines_figure(
    yearly: pd.DataFrame,
    event_types: Sequence[str],
    metrics: Sequence[str],
    *,
    title: str = "",
):
    """
    Build the per-year line chart: one panel per metric, one line per
    event type. Only `event_types` are drawn. The caller closes the figure.
    """
    if not event_types:
        raise ValueError("No event types selected for the chart.")
    if not metrics:
        raise ValueError("No metrics to plot.")

    plt = _pyplot()
    fig, axes = plt.subplots(len(metrics), 1, figsize=(10, 4 * len(metrics)), sharex=True, squeeze=False)

    for ax, metric in zip(axes[:, 0], metrics):
        for event_type in event_types:
            rows = yearly[yearly[COLS.event_type] == event_type]
            rows = rows.assign(_x=pd.to_numeric(rows[COLS.year], errors="coerce")).sort_values("_x")
            ax.plot(rows["_x"], rows[metric], marker="o", markersize=3, label=event_type)
        ax.set_ylabel(metric.replace("_", " ").title())
        ax.grid(True)

    axes[-1, 0].set_xlabel("Year")
    axes[0, 0].legend(loc="upper left", fontsize="small")
    if title:
        fig.suptitle(title)
    fig.tight_layout()
    return fig


def plot_yearly_lines(
    yearly: pd.DataFrame,
    event_types: Sequence[str],
    metrics: Sequence[str],
    out_path: Union[str, Path],
    *,
    title: str = "",
    dpi: int = 150,
) -> str:
    """Save `yearly_lines_figure` as a PNG and return its path."""
    fig = yearly_lines_figure(yearly, event_types, metrics, title=title)

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=dpi, bbox_inches="tight")
    _pyplot().close(fig)
    return str(out_path)


def plot_selection(selection: Selection, out_path: Union[str, Path], *, title: str = "", dpi: int = 150) -> str:
    metrics = [m[: -len("_mean")] for m in selection.metric_columns]
    return plot_yearly_lines(selection.yearly, selection.event_types, metrics, out_path, title=title, dpi=dpi)


# -----------------------------
# DOCX report
# -----------------------------

def generate_docx_report(
    stats: dict,
    health: Selection,
    economic: Selection,
    chart_paths: Sequence[str],
    out_path: Union[str, Path],
    *,
    config: Optional[ReportConfig] = None,
    dataset_file: Optional[str] = None,
) -> str:
    """Write both summary tables and the charts into a DOCX file."""
    config = config or ReportConfig()

    # Lazy import: only required when a DOCX report is asked for.
    try:
        from docx import Document
        from docx.enum.text import WD_ALIGN_PARAGRAPH
        from docx.shared import Inches, Pt
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    def _table(df: pd.DataFrame) -> None:
        t = doc.add_table(rows=1, cols=len(df.columns))
        for cell, name in zip(t.rows[0].cells, df.columns):
            cell.text = str(name)
        for values in df.itertuples(index=False):
            cells = t.add_row().cells
            for cell, v in zip(cells, values):
                cell.text = f"{v:,.2f}" if isinstance(v, float) else str(v)

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    _kv("Dataset", config.dataset_name)
    if dataset_file:
        _kv("Data file", dataset_file)
    _kv("Records", f"{stats['records']:,}")
    _kv("Records without a parsable begin date", f"{stats['missing_year']:,}")
    _kv("Distinct event types", f"{stats['event_types']:,}")
    if stats.get("year_min") is not None:
        _kv("Year range", f"{stats['year_min']} to {stats['year_max']}")

    doc.add_heading("Public health impact", level=1)
    doc.add_paragraph(
        f"Event types in the top {config.top_health} by mean yearly injuries "
        f"or mean yearly fatalities."
    )
    _table(summary_table(health))

    doc.add_heading("Economic impact", level=1)
    doc.add_paragraph(
        f"Top {config.top_economic} event types by mean yearly damage "
        f"(property + crop, US$)."
    )
    _table(summary_table(economic))

    doc.add_heading("Visualizations", level=1)
    for path in chart_paths:
        doc.add_picture(str(path), width=Inches(6.5))

    doc.add_heading("Notes", level=1)
    for note in [
        "Damage magnitude codes K/M/B scale by 10^3/10^6/10^9; any other code is left unscaled.",
        "Event type labels are grouped as written; near-duplicate labels are not merged.",
        "Standard deviation is undefined (blank/NaN) for event types seen in a single year.",
    ]:
        doc.add_paragraph(note, style="List Bullet")

    from . import __version__

    doc.add_heading("Reproducibility footer", level=1)
    doc.add_paragraph(f"stormstat version: {__version__}")
    doc.add_paragraph(f"Report generated at: {datetime.now().isoformat(timespec='seconds')}")

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    doc.save(str(out_path))
    return str(out_path)
