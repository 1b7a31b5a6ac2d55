"""Absence rates, trends and rankings over daily attendance rows.

Each attendance row is one person-day. Rates divide counts of rows, so
callers scope the population by filtering attendance beforehand (see
:func:`hrmetrics.utils.filters.attendance_for_employees`).
"""

import logging

import pandas as pd

from hrmetrics.utils.filters import (
    active_employees,
    attendance_for_employees,
    filter_attendance_by_status,
)
from hrmetrics.utils.periods import DateLike, Period, bucket_by_month, trend_length
from hrmetrics.utils.transforms import counts_to_series, safe_ratio
from hrmetrics.utils.types import AttendanceStatus, EmployeeRecord, LabeledSeries

logger = logging.getLogger(__name__)

ABSENCE_STATUSES = (AttendanceStatus.SICK_LEAVE, AttendanceStatus.UNSCHEDULED_ABSENCE)
PTO_DAYS_PER_YEAR = 15
PTO_PERIODS_PER_YEAR = 4


def _count(attendance: pd.DataFrame, *statuses: AttendanceStatus) -> int:
    return len(filter_attendance_by_status(attendance, *statuses))


def absences(attendance: pd.DataFrame) -> pd.DataFrame:
    """Sick leave and unscheduled absence rows."""
    return filter_attendance_by_status(attendance, *ABSENCE_STATUSES)


def attendance_summary(attendance: pd.DataFrame) -> dict[str, int]:
    return {
        "present": _count(attendance, AttendanceStatus.PRESENT),
        "sick": _count(attendance, AttendanceStatus.SICK_LEAVE),
        "pto": _count(attendance, AttendanceStatus.PTO),
        "unscheduled": _count(attendance, AttendanceStatus.UNSCHEDULED_ABSENCE),
        "total": len(attendance),
    }


def overall_absence_rate(attendance: pd.DataFrame) -> float:
    """Sick leave plus unscheduled absence over all rows."""
    return safe_ratio(len(absences(attendance)), len(attendance))


def unscheduled_absence_rate(attendance: pd.DataFrame) -> float:
    """Unscheduled absence over scheduled work days (Present + Unscheduled)."""
    unscheduled = _count(attendance, AttendanceStatus.UNSCHEDULED_ABSENCE)
    workdays = _count(attendance, AttendanceStatus.PRESENT, AttendanceStatus.UNSCHEDULED_ABSENCE)
    return safe_ratio(unscheduled, workdays)


def sick_leave_rate(attendance: pd.DataFrame) -> float:
    """Sick days over every non-PTO row."""
    if attendance.empty:
        return 0.0
    non_pto = int((attendance["status"] != AttendanceStatus.PTO).sum())
    return safe_ratio(_count(attendance, AttendanceStatus.SICK_LEAVE), non_pto)


def pto_utilization(attendance: pd.DataFrame, employees: pd.DataFrame) -> float:
    """PTO days taken against one quarter of a 15-day annual accrual per employee.

    A rough proxy: it does not prorate accrual by hire date.
    """
    if employees.empty:
        return 0.0
    accrued = len(employees) * PTO_DAYS_PER_YEAR / PTO_PERIODS_PER_YEAR
    return safe_ratio(_count(attendance, AttendanceStatus.PTO), accrued)


def absence_trend(
    attendance: pd.DataFrame,
    period: str | Period = Period.SIX_MONTHS,
    as_of: DateLike = None,
) -> LabeledSeries:
    """Absence rows per month; every month in the window is present, zero-filled."""
    rows = absences(attendance)
    earliest = rows["date"].min() if not rows.empty else None
    months = trend_length(period, as_of, earliest)
    dates = rows["date"] if not rows.empty else pd.Series(dtype="datetime64[ns]")
    return bucket_by_month(dates, months, as_of)


def _department_lookup(employees: pd.DataFrame) -> dict[str, str]:
    if employees.empty:
        return {}
    return dict(zip(employees["employee_id"], employees["department"]))


def absences_by_department(attendance: pd.DataFrame, employees: pd.DataFrame) -> LabeledSeries:
    """Absence rows per department; rows of unknown employees are dropped."""
    rows = absences(attendance)
    if rows.empty:
        return []
    departments = rows["employee_id"].map(_department_lookup(employees)).dropna()
    return counts_to_series(departments.value_counts(sort=False))


def top_absentees(
    attendance: pd.DataFrame,
    employees: pd.DataFrame,
    count: int = 5,
) -> list[dict[str, EmployeeRecord | int]]:
    """Employees with the most absence rows, most first; unknown ids are skipped."""
    rows = absences(attendance)
    if rows.empty or employees.empty:
        return []

    lookup = {
        record["employee_id"]: record
        for record in employees.drop_duplicates("employee_id").to_dict(orient="records")
    }
    ranked = rows["employee_id"].value_counts(sort=False).sort_values(ascending=False, kind="stable")
    result = [
        {"employee": lookup[emp_id], "absence_count": int(n)}
        for emp_id, n in ranked.items()
        if emp_id in lookup
    ]
    return result[:count]


def attendance_rates(attendance: pd.DataFrame, employees: pd.DataFrame) -> dict[str, float]:
    """All attendance rates for the active population, for report headers."""
    active = active_employees(employees)
    scoped = attendance_for_employees(attendance, active)
    rates = {
        "overall": overall_absence_rate(scoped),
        "unscheduled": unscheduled_absence_rate(scoped),
        "sick_leave": sick_leave_rate(scoped),
        "pto_utilization": pto_utilization(scoped, active),
    }
    logger.info("Attendance rates over %d rows: %s", len(scoped), rates)
    return rates
