"""
Damage magnitude normalization
==============================

Storm Data records damage as a base number plus a one-letter magnitude code:
`25.0` + `"K"` means 25,000 US$. This module turns those pairs into plain
currency amounts.

Codes are case-sensitive: only "K", "M" and "B" scale the number. Anything
else (blank, lowercase, digits, "+", "?") is treated as already being in base
units. That under/over-counts some records, and it is kept that way so the
totals stay comparable with previously published summaries.
"""

from __future__ import annotations
from typing import Dict

import pandas as pd

from .models import COLS

MAGNITUDE_MULTIPLIERS: Dict[str, float] = {
    "K": 1e3,
    "M": 1e6,
    "B": 1e9,
}


def magnitude_multiplier(code: object) -> float:
    """Multiplier for one magnitude code (1 for anything unrecognized)."""
    if not isinstance(code, str):
        return 1.0
    return MAGNITUDE_MULTIPLIERS.get(code, 1.0)


def normalize_amount(number: float, code: object) -> float:
    """Scalar form: normalize_amount(2.5, "K") -> 2500.0"""
    return float(number) * magnitude_multiplier(code)


def normalize_column(numbers: pd.Series, codes: pd.Series) -> pd.Series:
    """Vectorized form of normalize_amount over two aligned columns."""
    multipliers = codes.map(MAGNITUDE_MULTIPLIERS).fillna(1.0).astype(float)
    return pd.to_numeric(numbers, errors="coerce") * multipliers


def add_normalized_damage(events: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with prop_damage, crop_damage and their total `damage`."""
    out = events.copy()
    out[COLS.prop_damage] = normalize_column(out[COLS.prop_dmg], out[COLS.prop_dmg_exp])
    out[COLS.crop_damage] = normalize_column(out[COLS.crop_dmg], out[COLS.crop_dmg_exp])
    out[COLS.damage] = out[COLS.prop_damage].fillna(0.0) + out[COLS.crop_damage].fillna(0.0)
    return out
