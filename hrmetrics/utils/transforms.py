"""Common data transformation utilities."""

import re
from collections.abc import Iterable, Mapping

import numpy as np
import pandas as pd

type ColumnMapping = dict[str, str]
type ColumnDefaults = dict[str, object]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_columns(df: pd.DataFrame, mapping: ColumnMapping | None = None) -> pd.DataFrame:
    """Normalize column names to snake_case and apply optional mapping.

    Handles both export-style headers (``Hire Date``) and camelCase keys
    (``hireDate``).
    """
    df.columns = [
        _CAMEL_BOUNDARY.sub("_", str(col).strip()).lower().replace(" ", "_").replace("-", "_")
        for col in df.columns
    ]

    if mapping:
        df = df.rename(columns=mapping)

    return df


def frame_from_records(
    records: Iterable[Mapping] | pd.DataFrame,
    mapping: ColumnMapping | None = None,
) -> pd.DataFrame:
    """Copy raw records into a fresh DataFrame with normalized column names."""
    if isinstance(records, pd.DataFrame):
        df = records.copy()
    else:
        df = pd.DataFrame([dict(r) for r in records])
    return normalize_columns(df, mapping)


def ensure_columns(df: pd.DataFrame, defaults: ColumnDefaults) -> pd.DataFrame:
    """Add any missing columns, filled with their default value."""
    for col, default in defaults.items():
        if col not in df.columns:
            df[col] = default
    return df


def coerce_dates(df: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    for col in columns:
        df[col] = pd.to_datetime(df[col], errors="coerce")
    return df


def coerce_numeric(df: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    for col in columns:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def safe_ratio(numerator: float, denominator: float, scale: float = 100.0) -> float:
    """``numerator / denominator * scale``, or 0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return float(numerator) / float(denominator) * scale


def to_plain(value: object) -> object:
    """Unwrap numpy scalars so results serialize as plain Python values."""
    if isinstance(value, np.generic):
        return value.item()
    return value


def counts_to_series(counts: pd.Series, sort: bool = True) -> list[dict[str, object]]:
    """Turn a value_counts-style Series into ``[{"name", "value"}]`` points."""
    if sort:
        counts = counts.sort_values(ascending=False, kind="stable")
    return [{"name": to_plain(name), "value": to_plain(value)} for name, value in counts.items()]
