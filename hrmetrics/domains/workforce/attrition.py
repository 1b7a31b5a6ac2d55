"""Employee turnover and attrition analysis."""

import logging
from dataclasses import dataclass, field

import pandas as pd

from hrmetrics.utils.filters import (
    headcount_at_end,
    headcount_at_start,
    high_performers,
    leavers_in_window,
    terminated_employees,
)
from hrmetrics.utils.periods import (
    DateLike,
    Period,
    bucket_by_month,
    resolve_window,
    tenure_years,
    trend_length,
)
from hrmetrics.utils.transforms import counts_to_series
from hrmetrics.utils.types import LabeledSeries, MemberList, TerminationReason, to_members

logger = logging.getLogger(__name__)

type TenureBucket = str

TENURE_BUCKETS: list[TenureBucket] = ["< 1 Year", "1-2 Years", "2-5 Years", "5+ Years"]
RECENT_LEAVERS_LIMIT = 10


@dataclass(frozen=True)
class AttritionSummary:
    count: int = 0
    average_tenure: float = 0.0
    top_department: str = "N/A"
    leavers: MemberList = field(default_factory=list)


def _bucket_tenure(years: float) -> TenureBucket:
    """Bucket tenure at exit into standard ranges for reporting."""
    match years:
        case y if y < 1:
            return "< 1 Year"
        case y if y <= 2:
            return "1-2 Years"
        case y if y <= 5:
            return "2-5 Years"
        case _:
            return "5+ Years"


def annual_turnover_rate(
    employees: pd.DataFrame,
    period: str | Period = Period.TWELVE_MONTHS,
    as_of: DateLike = None,
) -> float:
    """Annualized turnover percentage over the resolved window.

    Turnover = leavers in window / ((headcount at start + headcount at end) / 2),
    scaled by 12 / months. Both counts use the same window.
    """
    if employees.empty:
        return 0.0

    window = resolve_window(period, as_of, earliest=employees["hire_date"].min())
    leavers = len(leavers_in_window(employees, window))
    average_headcount = (
        len(headcount_at_start(employees, window)) + len(headcount_at_end(employees, window))
    ) / 2

    if average_headcount == 0:
        return 0.0

    rate = leavers / average_headcount * (12 / window.months) * 100
    logger.info(
        "Turnover over %d months: %d leavers, avg headcount %.1f -> %.2f%%",
        window.months, leavers, average_headcount, rate,
    )
    return rate


def turnover_by_reason(leavers: pd.DataFrame) -> LabeledSeries:
    counts = leavers["termination_reason"].value_counts() if not leavers.empty else pd.Series(dtype=int)
    return [
        {"name": str(reason), "value": int(counts.get(str(reason), 0))}
        for reason in TerminationReason
    ]


def _turnover_by(leavers: pd.DataFrame, column: str) -> LabeledSeries:
    if leavers.empty:
        return []
    return counts_to_series(leavers[column].value_counts(sort=False))


def turnover_by_department(leavers: pd.DataFrame) -> LabeledSeries:
    return _turnover_by(leavers, "department")


def turnover_by_location(leavers: pd.DataFrame) -> LabeledSeries:
    return _turnover_by(leavers, "location")


def turnover_by_job_title(leavers: pd.DataFrame) -> LabeledSeries:
    return _turnover_by(leavers, "job_title")


def turnover_by_tenure_bucket(leavers: pd.DataFrame) -> LabeledSeries:
    counts = dict.fromkeys(TENURE_BUCKETS, 0)
    exited = terminated_employees(leavers)
    for years in tenure_years(exited):
        counts[_bucket_tenure(years)] += 1
    return [{"name": bucket, "value": value} for bucket, value in counts.items()]


def average_tenure_of_leavers(leavers: pd.DataFrame) -> float:
    """Mean tenure at exit, in years, over rows carrying a termination date."""
    exited = terminated_employees(leavers)
    if exited.empty:
        return 0.0
    return float(tenure_years(exited).mean())


def turnover_trend(
    employees: pd.DataFrame,
    period: str | Period = Period.TWELVE_MONTHS,
    as_of: DateLike = None,
) -> LabeledSeries:
    """Leavers per month over a rolling window ending at ``as_of``."""
    leavers = terminated_employees(employees)
    earliest = leavers["termination_date"].min() if not leavers.empty else None
    months = trend_length(period, as_of, earliest)
    dates = leavers["termination_date"] if not leavers.empty else pd.Series(dtype="datetime64[ns]")
    return bucket_by_month(dates, months, as_of)


def high_performer_attrition(employees: pd.DataFrame) -> AttritionSummary:
    """Summarize leavers rated 4 or above.

    Average tenure reuses :func:`average_tenure_of_leavers` so the figure
    matches the tenure-of-leavers panel.
    """
    leavers = high_performers(terminated_employees(employees))
    if leavers.empty:
        return AttritionSummary()

    by_dept = turnover_by_department(leavers)
    recent = leavers.sort_values("termination_date", ascending=False, kind="stable")
    summary = AttritionSummary(
        count=len(leavers),
        average_tenure=average_tenure_of_leavers(leavers),
        top_department=str(by_dept[0]["name"]) if by_dept else "N/A",
        leavers=to_members(recent.head(RECENT_LEAVERS_LIMIT)),
    )
    logger.info("High-performer attrition: %d leavers, top dept %s", summary.count, summary.top_department)
    return summary


def regrettable_leavers_for_manager(manager_id: str, employees: pd.DataFrame) -> MemberList:
    """Voluntary leavers rated 4+ who reported to the given manager."""
    leavers = high_performers(terminated_employees(employees))
    if leavers.empty:
        return []
    regrettable = leavers[
        (leavers["manager_id"] == str(manager_id))
        & (leavers["termination_reason"] == TerminationReason.VOLUNTARY)
    ]
    return to_members(regrettable)
