"""Shared fixtures: a tiny Storm Data extract in memory and on disk."""

from __future__ import annotations

from pathlib import Path

import matplotlib
import pandas as pd
import pytest

from tests.factories import write_storm_csv

matplotlib.use("Agg")


@pytest.fixture
def storm_file(tmp_path: Path) -> Path:
    return write_storm_csv(tmp_path / "StormData.csv.bz2")


@pytest.fixture
def events() -> pd.DataFrame:
    """Already-loaded events with canonical columns."""
    return pd.DataFrame(
        {
            "event_type": ["FLOOD", "FLOOD", "FLOOD", "HAIL", "HAIL", "HEAT"],
            "begin_date": ["", "", "", "", "", ""],
            "year": ["2001", "2001", "2002", "2001", None, "2003"],
            "fatalities": [1.0, 2.0, 4.0, 0.0, 5.0, 3.0],
            "injuries": [0.0, 1.0, 1.0, 2.0, 8.0, 6.0],
            "prop_dmg": [1.0, 2.0, 3.0, 5.0, 9.0, 0.0],
            "prop_dmg_exp": ["K", "M", "K", "", "B", ""],
            "crop_dmg": [0.0, 1.0, 0.0, 2.0, 0.0, float("nan")],
            "crop_dmg_exp": ["", "K", "", "m", "", ""],
        }
    )
