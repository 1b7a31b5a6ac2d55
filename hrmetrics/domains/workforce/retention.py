"""Retention rates for the organization, segments, departments and managers.

An empty eligible population is reported as 100% retained, whereas
turnover over the same empty population is 0%. Dashboards and the AI tool
layer rely on that pairing.
"""

import logging

import pandas as pd

from hrmetrics.domains.workforce.org_structure import build_reporting_map, employee_index
from hrmetrics.utils.filters import (
    active_employees,
    headcount_at_start,
    high_performers,
    hired_since,
    terminated_employees,
)
from hrmetrics.utils.periods import DateLike, Period, resolve_as_of, resolve_window
from hrmetrics.utils.transforms import to_plain

logger = logging.getLogger(__name__)

VACUOUS_RETENTION = 100.0


def overall_retention_rate(
    employees: pd.DataFrame,
    period: str | Period = Period.TWELVE_MONTHS,
    as_of: DateLike = None,
) -> float:
    """Share of the start-of-window cohort still employed at window end.

    The cohort is everyone present at the window start; leavers are cohort
    members terminated inside the window, so the rate stays in [0, 100].
    """
    if employees.empty:
        return VACUOUS_RETENTION

    window = resolve_window(period, as_of, earliest=employees["hire_date"].min())
    cohort = headcount_at_start(employees, window)
    if cohort.empty:
        return VACUOUS_RETENTION

    left = cohort["termination_date"].notna() & window.contains(cohort["termination_date"])
    return (len(cohort) - int(left.sum())) / len(cohort) * 100


def high_performer_retention_rate(
    employees: pd.DataFrame,
    period: str | Period = Period.TWELVE_MONTHS,
    as_of: DateLike = None,
) -> float:
    return overall_retention_rate(high_performers(employees), period, as_of)


def first_year_retention_rate(employees: pd.DataFrame, as_of: DateLike = None) -> float:
    """Share of the last year's hires who have not left."""
    if employees.empty:
        return VACUOUS_RETENTION
    now = resolve_as_of(as_of)
    new_hires = hired_since(employees, now - pd.DateOffset(years=1))
    if new_hires.empty:
        return VACUOUS_RETENTION
    leavers = len(terminated_employees(new_hires))
    return (len(new_hires) - leavers) / len(new_hires) * 100


def retention_by_department(
    employees: pd.DataFrame,
    period: str | Period = Period.TWELVE_MONTHS,
    as_of: DateLike = None,
) -> list[dict[str, object]]:
    if employees.empty:
        return []
    rates = [
        {"name": dept, "value": overall_retention_rate(group, period, as_of)}
        for dept, group in employees.groupby("department", sort=False)
    ]
    return sorted(rates, key=lambda r: r["value"], reverse=True)


def retention_by_manager(
    employees: pd.DataFrame,
    period: str | Period = Period.TWELVE_MONTHS,
    as_of: DateLike = None,
) -> list[dict[str, object]]:
    """Team retention per manager, lowest first.

    Managers are resolved from active employees' ``manager_id``; references
    to unknown managers yield no team.
    """
    if employees.empty:
        return []

    index = employee_index(employees)
    reporting = build_reporting_map(employees)
    managers = {
        mgr for mgr in active_employees(employees)["manager_id"].dropna() if mgr in index
    }

    rates = []
    for manager_id in managers:
        team = employees[employees["employee_id"].isin(reporting.get(manager_id, []))]
        rates.append({
            "manager_id": manager_id,
            "name": to_plain(index[manager_id].get("name")),
            "value": overall_retention_rate(team, period, as_of),
            "team_size": len(active_employees(team)),
        })

    logger.info("Computed retention for %d managers", len(rates))
    return sorted(rates, key=lambda r: (r["value"], r["manager_id"]))
