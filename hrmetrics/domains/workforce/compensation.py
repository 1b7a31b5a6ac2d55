"""Compensation ratios over the active workforce."""

import logging

import pandas as pd

from hrmetrics.utils.filters import active_employees
from hrmetrics.utils.transforms import safe_ratio, to_plain

logger = logging.getLogger(__name__)

type CompaRatio = float


def average_salary(employees: pd.DataFrame) -> float:
    active = active_employees(employees)
    if active.empty:
        return 0.0
    return safe_ratio(active["salary"].fillna(0).sum(), len(active), scale=1.0)


def raise_rate(employees: pd.DataFrame) -> float:
    """Total last-raise amount as a percentage of total base salary."""
    active = active_employees(employees)
    if active.empty:
        return 0.0
    return safe_ratio(active["last_raise_amount"].fillna(0).sum(), active["salary"].fillna(0).sum())


def bonus_rate(employees: pd.DataFrame) -> float:
    active = active_employees(employees)
    if active.empty:
        return 0.0
    return safe_ratio(active["bonus"].fillna(0).sum(), active["salary"].fillna(0).sum())


def pay_for_performance(employees: pd.DataFrame) -> list[dict[str, object]]:
    """Scatter points of rating (x) against salary (y) for active employees."""
    active = active_employees(employees)
    if active.empty:
        return []
    return [
        {"x": to_plain(rating), "y": to_plain(salary), "label": name}
        for rating, salary, name in zip(active["performance_rating"], active["salary"], active["name"])
    ]


def training_completion_rate(employees: pd.DataFrame) -> float:
    active = active_employees(employees)
    if active.empty:
        return 0.0
    return safe_ratio(active["training_completed"].fillna(0).sum(), active["training_total"].fillna(0).sum())


def grievance_rate(employees: pd.DataFrame) -> float:
    """Grievances per 100 active employees."""
    active = active_employees(employees)
    if active.empty:
        return 0.0
    grievances = active["has_grievance"].fillna(False).astype(bool).sum()
    return safe_ratio(grievances, len(active))
