"""Performance rating distributions, calibration and trends."""

import logging

import pandas as pd

from hrmetrics.utils.filters import active_employees, hired_since
from hrmetrics.utils.periods import DateLike, Period, bucket_by_month, resolve_as_of, trend_length
from hrmetrics.utils.transforms import safe_ratio
from hrmetrics.utils.types import LabeledSeries

logger = logging.getLogger(__name__)

RATING_LABELS = {
    1: "Needs Improvement",
    2: "Below Expectations",
    3: "Meets Expectations",
    4: "Exceeds Expectations",
    5: "Outstanding",
}


def performance_distribution(employees: pd.DataFrame) -> LabeledSeries:
    """Count per rating label; ratings outside 1-5 are ignored."""
    counts = employees["performance_rating"].value_counts() if not employees.empty else pd.Series(dtype=int)
    return [
        {"name": label, "value": int(counts.get(rating, 0))}
        for rating, label in RATING_LABELS.items()
    ]


def performance_calibration(employees: pd.DataFrame) -> list[dict[str, object]]:
    """Per-department share of active employees at each rating, in percent."""
    if employees.empty:
        return []

    active = active_employees(employees)
    active_depts = active["department"].astype(str)
    rows = []
    for dept in sorted(employees["department"].dropna().astype(str).unique().tolist()):
        ratings = active.loc[active_depts == dept, "performance_rating"]
        counts = ratings.value_counts()
        rows.append({
            "department": dept,
            "distribution": {
                str(rating): safe_ratio(int(counts.get(rating, 0)), len(ratings))
                for rating in RATING_LABELS
            },
        })
    return rows


def performance_trend(
    employees: pd.DataFrame,
    period: str | Period = Period.TWELVE_MONTHS,
    as_of: DateLike = None,
) -> LabeledSeries:
    """Mean rating of dated snapshot rows per month; months with no rows are 0."""
    if employees.empty:
        snapshots = pd.DataFrame({"snapshot_date": pd.Series(dtype="datetime64[ns]"),
                                  "performance_rating": pd.Series(dtype=float)})
    else:
        snapshots = employees[employees["snapshot_date"].notna()]

    earliest = snapshots["snapshot_date"].min() if not snapshots.empty else None
    months = trend_length(period, as_of, earliest)
    return bucket_by_month(
        snapshots["snapshot_date"],
        months,
        as_of,
        values=snapshots["performance_rating"].astype(float),
        aggfunc="mean",
    )


def new_hire_performance(employees: pd.DataFrame, months: int, as_of: DateLike = None) -> dict[str, float | int]:
    """Mean rating of active employees hired in the last ``months`` months."""
    cutoff = resolve_as_of(as_of) - pd.DateOffset(months=months)
    new_hires = active_employees(hired_since(employees, cutoff))
    if new_hires.empty:
        return {"average_performance": 0.0, "new_hire_count": 0}

    average = float(new_hires["performance_rating"].fillna(0).mean())
    logger.info("New hires in last %d months: %d, avg rating %.2f", months, len(new_hires), average)
    return {"average_performance": average, "new_hire_count": len(new_hires)}
