"""Headcount breakdowns and the department x location heatmap."""

import logging

import pandas as pd

from hrmetrics.utils.filters import active_employees
from hrmetrics.utils.periods import DateLike, tenure_years
from hrmetrics.utils.transforms import counts_to_series, to_plain
from hrmetrics.utils.types import GENDERS, LabeledSeries

logger = logging.getLogger(__name__)

type GenderCounts = dict[str, int]
type HeatmapCell = dict[str, int]


def headcount(employees: pd.DataFrame) -> int:
    return len(active_employees(employees))


def headcount_by_department(employees: pd.DataFrame) -> LabeledSeries:
    """Employee count per department for the rows given (callers pre-filter)."""
    if employees.empty:
        return []
    return counts_to_series(employees["department"].value_counts(sort=False), sort=False)


def gender_diversity(employees: pd.DataFrame) -> LabeledSeries:
    """Counts for Male/Female/Other, omitting genders with no employees."""
    if employees.empty:
        return []
    counts = employees["gender"].value_counts()
    return [
        {"name": gender, "value": int(counts.get(gender, 0))}
        for gender in GENDERS
        if counts.get(gender, 0) > 0
    ]


def headcount_by_department_and_gender(employees: pd.DataFrame) -> dict[str, GenderCounts]:
    data: dict[str, GenderCounts] = {}
    if employees.empty:
        return data
    for dept, group in employees.groupby("department", sort=False):
        counts = group["gender"].value_counts()
        data[dept] = {gender: int(counts.get(gender, 0)) for gender in GENDERS}
    return data


def headcount_heatmap(employees: pd.DataFrame, active_only: bool = False) -> dict[str, object]:
    """Department x location grid with per-cell gender subcounts.

    Every row passed in is counted, leavers included; callers wanting the
    current workforce pass ``active_only=True`` or pre-filter. Department
    and location codes are compared as strings. ``max_headcount`` is the
    largest cell total, for colour-scale normalization by the caller.
    """
    if active_only:
        employees = active_employees(employees)
    placed = employees.dropna(subset=["department", "location"])
    if placed.empty:
        return {"departments": [], "locations": [], "data": {}, "max_headcount": 0}
    placed = placed.astype({"department": str, "location": str})

    departments = sorted(placed["department"].unique().tolist())
    locations = sorted(placed["location"].unique().tolist())

    data: dict[str, dict[str, HeatmapCell]] = {
        dept: {loc: {"total": 0, **{g: 0 for g in GENDERS}} for loc in locations}
        for dept in departments
    }
    max_headcount = 0
    for (dept, loc), group in placed.groupby(["department", "location"]):
        cell = data[dept][loc]
        cell["total"] = len(group)
        counts = group["gender"].value_counts()
        for gender in GENDERS:
            cell[gender] = int(counts.get(gender, 0))
        max_headcount = max(max_headcount, cell["total"])

    logger.info(
        "Built headcount heatmap: %d departments x %d locations",
        len(departments),
        len(locations),
    )
    return {
        "departments": departments,
        "locations": locations,
        "data": data,
        "max_headcount": max_headcount,
    }


def average_tenure(employees: pd.DataFrame, as_of: DateLike = None) -> float:
    """Mean tenure in years of the active employees."""
    active = active_employees(employees)
    if active.empty:
        return 0.0
    return float(tenure_years(active, as_of).mean())


def average_engagement(employees: pd.DataFrame) -> float:
    if employees.empty:
        return 0.0
    return float(employees["engagement_score"].fillna(0).mean())


def departments_by_engagement(
    employees: pd.DataFrame,
    order: str = "lowest",
    count: int | None = None,
) -> list[dict[str, object]]:
    """Active departments ranked by mean engagement score."""
    active = active_employees(employees)
    if active.empty:
        return []
    means = active.groupby("department")["engagement_score"].mean()
    match order:
        case "lowest":
            means = means.sort_values(ascending=True, kind="stable")
        case "highest":
            means = means.sort_values(ascending=False, kind="stable")
        case other:
            raise ValueError(f"Unknown sort order: {other}")
    ranked = [
        {"department": dept, "average_engagement": to_plain(value)}
        for dept, value in means.items()
    ]
    return ranked if count is None else ranked[:count]
