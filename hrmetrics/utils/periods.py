"""Time windows, month buckets and tenure arithmetic shared by all calculators.

Every time-dependent calculator takes an ``as_of`` timestamp (defaulting to
today) so that repeated calls over the same inputs are reproducible.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

import numpy as np
import pandas as pd

from hrmetrics.utils.types import LabeledSeries

type DateLike = str | pd.Timestamp | None

DAYS_PER_YEAR = 365.25
DAYS_PER_MONTH = 30.44
MAX_TREND_MONTHS = 48
LABEL_FORMAT = "%b %y"


class Period(StrEnum):
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    TWELVE_MONTHS = "12m"
    TWENTY_FOUR_MONTHS = "24m"
    ALL = "all"


_FIXED_MONTHS: dict[Period, int] = {
    Period.THREE_MONTHS: 3,
    Period.SIX_MONTHS: 6,
    Period.TWELVE_MONTHS: 12,
    Period.TWENTY_FOUR_MONTHS: 24,
}


@dataclass(frozen=True)
class TimeWindow:
    start: pd.Timestamp
    end: pd.Timestamp
    months: int

    def contains(self, dates: pd.Series) -> pd.Series:
        """Boolean mask of dates falling inside the window, bounds included."""
        return (dates >= self.start) & (dates <= self.end)


def resolve_as_of(as_of: DateLike = None) -> pd.Timestamp:
    if as_of is None:
        return pd.Timestamp.now().normalize()
    return pd.Timestamp(as_of)


def parse_period(period: str | Period) -> Period:
    match str(period).strip().lower():
        case "3m" | "6m" | "12m" | "24m" | "all" as token:
            return Period(token)
        case other:
            raise ValueError(f"Unknown period: {other!r}")


def months_between(earlier: pd.Timestamp, later: pd.Timestamp) -> int:
    """Calendar-month distance, ignoring the day of month."""
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)


def resolve_window(
    period: str | Period,
    as_of: DateLike = None,
    earliest: DateLike = None,
) -> TimeWindow:
    """Turn a period token into a concrete window ending at ``as_of``.

    For ``all`` the window reaches back to ``earliest`` (typically the first
    hire date) and always spans at least one month.
    """
    now = resolve_as_of(as_of)
    match parse_period(period):
        case Period.ALL:
            if earliest is None or pd.isna(earliest):
                first = now
            else:
                first = min(pd.Timestamp(earliest), now)
            months = max(1, months_between(first, now))
        case token:
            months = _FIXED_MONTHS[token]

    return TimeWindow(start=now - pd.DateOffset(months=months), end=now, months=months)


def trend_length(
    period: str | Period,
    as_of: DateLike = None,
    earliest_event: DateLike = None,
) -> int:
    """Number of month buckets a trend covers for the given period token."""
    now = resolve_as_of(as_of)
    match parse_period(period):
        case Period.ALL:
            if earliest_event is None or pd.isna(earliest_event):
                return 1
            days = (now - pd.Timestamp(earliest_event)).days
            months = int(np.floor(days / DAYS_PER_MONTH)) + 1
            return int(min(max(months, 1), MAX_TREND_MONTHS))
        case token:
            return _FIXED_MONTHS[token]


def month_labels(months: int, as_of: DateLike = None) -> list[str]:
    """Labels for ``months`` consecutive buckets, oldest first, ending at ``as_of``."""
    current = resolve_as_of(as_of).to_period("M")
    return [(current - offset).strftime(LABEL_FORMAT) for offset in range(months - 1, -1, -1)]


def bucket_by_month(
    dates: pd.Series,
    months: int,
    as_of: DateLike = None,
    values: pd.Series | None = None,
    aggfunc: str = "count",
) -> LabeledSeries:
    """Seed ``months`` zero buckets and aggregate each dated event into its month.

    Events older than the window, or dated after the ``as_of`` month, are
    dropped. A month whose events all lack a value reports 0, like an empty
    month.
    """
    now = resolve_as_of(as_of)
    dates = pd.to_datetime(dates, errors="coerce")
    if values is None:
        values = pd.Series(1, index=dates.index)

    offset = (now.year - dates.dt.year) * 12 + (now.month - dates.dt.month)
    in_window = dates.notna() & (offset >= 0) & (offset < months)
    grouped = values[in_window].groupby(offset[in_window].astype(int)).agg(aggfunc).fillna(0)

    labels = month_labels(months, now)
    series = []
    for label, bucket in zip(labels, range(months - 1, -1, -1)):
        value = grouped.get(bucket, 0)
        series.append({"name": label, "value": value.item() if isinstance(value, np.generic) else value})
    return series


def _elapsed_years(start: pd.Series, end: pd.Series) -> pd.Series:
    # A part day counts as a whole day.
    return np.ceil((end - start) / pd.Timedelta(days=1)) / DAYS_PER_YEAR


def tenure_years(employees: pd.DataFrame, as_of: DateLike = None) -> pd.Series:
    """Tenure in years from hire to termination (or ``as_of`` for active staff)."""
    now = resolve_as_of(as_of)
    if employees.empty:
        return pd.Series(dtype=float)
    end = employees["termination_date"].fillna(now)
    return _elapsed_years(employees["hire_date"], end).fillna(0.0)


def employee_tenure_years(employee: Mapping, as_of: DateLike = None) -> float:
    """Single-employee form of :func:`tenure_years`."""
    now = resolve_as_of(as_of)
    hire = employee.get("hire_date")
    if hire is None or pd.isna(hire):
        return 0.0
    termination = employee.get("termination_date")
    end = now if termination is None or pd.isna(termination) else termination
    years = _elapsed_years(pd.Series([pd.Timestamp(hire)]), pd.Series([pd.Timestamp(end)]))
    return float(years.iloc[0])
