"""
Data model (column schema + selections)
=======================================

Storm records live in a pandas DataFrame (hundreds of thousands of rows), so
the "model" here is the column schema every module agrees on, plus a small
immutable record for the result of a top-K selection.

The loader renames the source headers (EVTYPE, BGN_DATE, ...) to the
canonical names below. Later stages only add derived columns; they never
edit the loaded values.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Tuple

import pandas as pd


@dataclass(frozen=True)
class StormColumns:
    """Canonical column names used after loading."""
    event_type: str = "event_type"
    begin_date: str = "begin_date"
    year: str = "year"
    fatalities: str = "fatalities"
    injuries: str = "injuries"
    prop_dmg: str = "prop_dmg"
    prop_dmg_exp: str = "prop_dmg_exp"
    crop_dmg: str = "crop_dmg"
    crop_dmg_exp: str = "crop_dmg_exp"
    # derived by normalize.add_normalized_damage (raw currency units)
    prop_damage: str = "prop_damage"
    crop_damage: str = "crop_damage"
    damage: str = "damage"


COLS = StormColumns()

# canonical name -> accepted source header spellings (NOAA Storm Data first)
SOURCE_COLUMNS: Dict[str, Tuple[str, ...]] = {
    COLS.event_type: ("EVTYPE", "EVENT_TYPE", "Event Type"),
    COLS.begin_date: ("BGN_DATE", "BEGIN_DATE", "Begin Date"),
    COLS.fatalities: ("FATALITIES", "Deaths"),
    COLS.injuries: ("INJURIES",),
    COLS.prop_dmg: ("PROPDMG", "PROP_DMG"),
    COLS.prop_dmg_exp: ("PROPDMGEXP", "PROP_DMG_EXP"),
    COLS.crop_dmg: ("CROPDMG", "CROP_DMG"),
    COLS.crop_dmg_exp: ("CROPDMGEXP", "CROP_DMG_EXP"),
}

HEALTH_METRICS: Tuple[str, ...] = (COLS.fatalities, COLS.injuries)
ECONOMIC_METRICS: Tuple[str, ...] = (COLS.prop_damage, COLS.crop_damage, COLS.damage)


def mean_col(metric: str) -> str:
    return f"{metric}_mean"


def std_col(metric: str) -> str:
    return f"{metric}_std"


@dataclass(frozen=True)
class Selection:
    """Top-K event types for one or more ranked metrics.

    `summary` holds the selected Summary Rows (mean/std per event type) and
    `yearly` the per-year aggregate rows for exactly the same event types,
    which is what the line charts are drawn from.
    """
    metric_columns: Tuple[str, ...]
    event_types: List[str]
    summary: pd.DataFrame
    yearly: pd.DataFrame
