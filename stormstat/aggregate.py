"""
Aggregation (two-stage)
=======================

Both reports (public health and economic impact) share the same shape:

Stage A: group incident rows by (event type, year) and sum each metric.
Stage B: group the Stage-A rows by event type only and take the mean and
         sample standard deviation of each summed metric across the years
         present for that event type.

Stage B always runs on Stage-A output, never on raw incidents. Event types
are matched as exact strings ("TSTM WIND" and "THUNDERSTORM WIND" stay two
separate groups).
"""

from __future__ import annotations
from typing import Iterable, List, Sequence

import pandas as pd

from .models import COLS, ECONOMIC_METRICS, HEALTH_METRICS, mean_col, std_col
from .normalize import add_normalized_damage

KEYS: List[str] = [COLS.event_type, COLS.year]


def _by_type_year(events: pd.DataFrame, metrics: Sequence[str]) -> pd.DataFrame:
    missing = [c for c in KEYS + list(metrics) if c not in events.columns]
    if missing:
        raise KeyError(f"aggregate: missing columns {missing}")

    # rows without a parsed year stay in the raw table but are not grouped
    keyed = events.dropna(subset=KEYS)
    return (
        keyed.groupby(KEYS, sort=True)[list(metrics)]
        .sum()
        .reset_index()
    )


def health_by_type_year(events: pd.DataFrame) -> pd.DataFrame:
    """Stage A for public health: summed fatalities and injuries per (type, year)."""
    return _by_type_year(events, HEALTH_METRICS)


def economic_by_type_year(events: pd.DataFrame) -> pd.DataFrame:
    """Stage A for economic impact: summed normalized damage per (type, year).

    `damage` is property plus crop damage; both components are kept too.
    """
    if COLS.damage not in events.columns:
        events = add_normalized_damage(events)
    return _by_type_year(events, ECONOMIC_METRICS)


def summarize_by_type(yearly: pd.DataFrame, metrics: Iterable[str]) -> pd.DataFrame:
    """
    Stage B: one Summary Row per event type.

    Columns: event_type, <metric>_mean, <metric>_std for each metric, n_years.
    The std of a single year is NaN (sample std is undefined there).
    """
    metrics = list(metrics)
    columns = [COLS.event_type]
    for m in metrics:
        columns += [mean_col(m), std_col(m)]
    columns.append("n_years")

    if yearly.empty:
        return pd.DataFrame(columns=columns)

    grouped = yearly.groupby(COLS.event_type, sort=True)
    stats = grouped[metrics].agg(["mean", "std"])
    stats.columns = [f"{m}_{stat}" for m, stat in stats.columns]
    stats["n_years"] = grouped.size()
    return stats.reset_index()[columns]


def health_summary(yearly: pd.DataFrame) -> pd.DataFrame:
    return summarize_by_type(yearly, HEALTH_METRICS)


def economic_summary(yearly: pd.DataFrame) -> pd.DataFrame:
    return summarize_by_type(yearly, ECONOMIC_METRICS)
