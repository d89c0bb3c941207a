"""
Core engine
===========

`StormAnalysis` ties the stages together:

1) Take the loaded events DataFrame (see `loader.load_storm_data`)
2) Normalize damage amounts (K/M/B codes -> US$)
3) Stage A: per (event type, year) sums for health and economic metrics
4) Stage B: per event type mean / std across years
5) Select the top event types for the report tables and charts

Each stage reads the previous stage's output and returns a new frame;
the loaded events are never modified.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

import pandas as pd

from .aggregate import (
    economic_by_type_year,
    economic_summary,
    health_by_type_year,
    health_summary,
)
from .models import COLS, Selection, mean_col
from .normalize import add_normalized_damage
from .ranking import select_top_types


@dataclass
class StormAnalysis:
    """Health and economic summaries for one storm events table."""
    events: pd.DataFrame
    dataset_path: Optional[str] = None

    health_yearly: pd.DataFrame = field(init=False)
    economic_yearly: pd.DataFrame = field(init=False)
    health: pd.DataFrame = field(init=False)
    economic: pd.DataFrame = field(init=False)

    def __post_init__(self) -> None:
        self.events = add_normalized_damage(self.events)
        self.health_yearly = health_by_type_year(self.events)
        self.economic_yearly = economic_by_type_year(self.events)
        self.health = health_summary(self.health_yearly)
        self.economic = economic_summary(self.economic_yearly)

    # ---------------- Selection ----------------
    def select(
        self,
        summary: pd.DataFrame,
        yearly: pd.DataFrame,
        metrics: Sequence[str],
        k: int,
    ) -> Selection:
        """Top-k event types by the mean of each metric (union)."""
        columns = tuple(mean_col(m) for m in metrics)
        types = select_top_types(summary, columns, k)

        rows = summary.set_index(COLS.event_type).loc[types].reset_index()
        chart = yearly[yearly[COLS.event_type].isin(types)].reset_index(drop=True)
        return Selection(metric_columns=columns, event_types=types, summary=rows, yearly=chart)

    def top_health(self, k: int = 5) -> Selection:
        """Top-k by mean injuries, then top-k by mean fatalities."""
        return self.select(self.health, self.health_yearly, (COLS.injuries, COLS.fatalities), k)

    def top_economic(self, k: int = 3) -> Selection:
        return self.select(self.economic, self.economic_yearly, (COLS.damage,), k)

    # ---------------- Info ----------------
    def stats(self) -> Dict[str, Any]:
        years = self.events[COLS.year].dropna()
        return {
            "records": len(self.events),
            "missing_year": int(self.events[COLS.year].isna().sum()),
            "event_types": int(self.events[COLS.event_type].nunique()),
            "year_min": years.min() if not years.empty else None,
            "year_max": years.max() if not years.empty else None,
        }
