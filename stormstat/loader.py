"""
Dataset loader (compressed CSV -> events DataFrame)
===================================================

This module reads the NOAA Storm Data export (a bzip2-compressed CSV) and
returns one row per reported incident with canonical column names and a
derived `year` column.

Key ideas:
- We try multiple possible header spellings because exports may vary.
- Numeric fields are coerced (malformed -> NaN); nothing is dropped here.
- Begin dates that do not match the fixed format get a missing year instead
  of aborting the load.
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional, Union
import lzma
import re
import zipfile

import numpy as np
import pandas as pd

from .models import COLS, SOURCE_COLUMNS

BEGIN_DATE_FORMAT = "%m/%d/%Y %H:%M:%S"

_COMPRESSION_BY_SUFFIX = {
    ".bz2": "bz2",
    ".gz": "gzip",
    ".xz": "xz",
    ".zip": "zip",
}

_NUMERIC = (COLS.fatalities, COLS.injuries, COLS.prop_dmg, COLS.crop_dmg)
_CODES = (COLS.prop_dmg_exp, COLS.crop_dmg_exp)


def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())


def _col(df: pd.DataFrame, *names: str) -> str:
    cols = list(df.columns)
    for n in names:
        if n in cols:
            return n
    norm_map = {_norm(c): c for c in cols}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    raise KeyError(f"Missing required column. Tried={names}. Available={cols}")


def _compression_for(path: Path) -> Optional[str]:
    return _COMPRESSION_BY_SUFFIX.get(path.suffix.lower())


def parse_begin_year(dates: pd.Series) -> pd.Series:
    """Return the 4-digit year string of each begin date (NaN if unparseable)."""
    parsed = pd.to_datetime(dates, format=BEGIN_DATE_FORMAT, errors="coerce")
    years = parsed.dt.strftime("%Y")
    return years.where(parsed.notna(), np.nan)


def load_storm_data(path: Union[str, Path], *, encoding: str = "latin-1") -> pd.DataFrame:
    """
    Load the storm events file into a DataFrame with canonical columns.

    Raises:
        FileNotFoundError: the file does not exist.
        ValueError: the file cannot be decompressed or parsed.
        KeyError: a required column is missing.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Storm data file not found: {path}")

    try:
        with open(path, "rb") as fh:
            raw = pd.read_csv(
                fh,
                compression=_compression_for(path),
                dtype=str,
                encoding=encoding,
                low_memory=False,
            )
    except (
        OSError,
        EOFError,
        UnicodeDecodeError,
        lzma.LZMAError,
        zipfile.BadZipFile,
        pd.errors.ParserError,
        pd.errors.EmptyDataError,
    ) as e:
        raise ValueError(f"Could not read storm data file {path}: {e}") from e

    raw.rename(columns={c: str(c).strip() for c in raw.columns}, inplace=True)

    out = pd.DataFrame(index=raw.index)
    for name, candidates in SOURCE_COLUMNS.items():
        out[name] = raw[_col(raw, *candidates)]

    for name in _NUMERIC:
        out[name] = pd.to_numeric(out[name], errors="coerce")

    # blank code == no scaling; keep the code exactly as written (case and spaces)
    for name in _CODES:
        out[name] = out[name].fillna("").astype(str)

    out[COLS.year] = parse_begin_year(out[COLS.begin_date])
    return out
