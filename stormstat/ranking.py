"""
Ranking and top-K selection
===========================

Summary Rows are ranked by a metric's mean, highest first.

- The sort is stable: two event types with the same mean keep the order
  they had in the input table.
- NaN means go last.
- `select_top_types` takes the top K for several columns and returns the
  union, in first-appearance order (the health report uses K=5 for injuries
  and K=5 for fatalities, so at most 10 event types).
"""

from __future__ import annotations
from typing import Iterable, List

import pandas as pd

from .models import COLS


def rank_by(summary: pd.DataFrame, column: str) -> pd.DataFrame:
    """Sort Summary Rows by `column`, descending, stable."""
    if column not in summary.columns:
        raise KeyError(f"Cannot rank by missing column: {column}")
    return summary.sort_values(column, ascending=False, kind="stable", na_position="last")


def top_k(summary: pd.DataFrame, column: str, k: int) -> pd.DataFrame:
    if k < 0:
        raise ValueError(f"k must be >= 0, got {k}")
    return rank_by(summary, column).head(k)


def select_top_types(summary: pd.DataFrame, columns: Iterable[str], k: int) -> List[str]:
    """Union of the top-k event types for each column (first appearance wins)."""
    selected: List[str] = []
    for column in columns:
        for event_type in top_k(summary, column, k)[COLS.event_type]:
            if event_type not in selected:
                selected.append(event_type)
    return selected
