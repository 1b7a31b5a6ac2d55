"""Predicate filters over employee, attendance and position frames.

Filters never mutate their input; each returns a (possibly empty) slice.
"""

import pandas as pd

from hrmetrics.utils.periods import TimeWindow
from hrmetrics.utils.types import AttendanceStatus, EmploymentStatus, PositionStatus


def _matches_casefold(column: pd.Series, value: str) -> pd.Series:
    return column.astype("string").str.casefold() == value.casefold()


def active_employees(employees: pd.DataFrame) -> pd.DataFrame:
    if employees.empty:
        return employees
    return employees[employees["termination_date"].isna()]


def terminated_employees(employees: pd.DataFrame) -> pd.DataFrame:
    if employees.empty:
        return employees
    return employees[employees["termination_date"].notna()]


def filter_by_status(employees: pd.DataFrame, status: str | EmploymentStatus) -> pd.DataFrame:
    match EmploymentStatus(status):
        case EmploymentStatus.ACTIVE:
            return active_employees(employees)
        case EmploymentStatus.TERMINATED:
            return terminated_employees(employees)


def filter_by_department(employees: pd.DataFrame, department: str | None) -> pd.DataFrame:
    """Case-insensitive department filter; ``None`` or empty keeps everyone."""
    if not department or employees.empty:
        return employees
    return employees[_matches_casefold(employees["department"], department).fillna(False)]


def filter_by_location(employees: pd.DataFrame, location: str | None) -> pd.DataFrame:
    if not location or employees.empty:
        return employees
    return employees[_matches_casefold(employees["location"], location).fillna(False)]


def filter_by_gender(employees: pd.DataFrame, gender: str | None) -> pd.DataFrame:
    if not gender or employees.empty:
        return employees
    return employees[employees["gender"] == gender]


def high_performers(employees: pd.DataFrame, min_rating: int = 4) -> pd.DataFrame:
    if employees.empty:
        return employees
    return employees[employees["performance_rating"] >= min_rating]


def leavers_in_window(employees: pd.DataFrame, window: TimeWindow) -> pd.DataFrame:
    """Employees whose termination date falls inside the window."""
    if employees.empty:
        return employees
    return employees[window.contains(employees["termination_date"])]


def headcount_at_start(employees: pd.DataFrame, window: TimeWindow) -> pd.DataFrame:
    """Employees present at the window boundary.

    Hired before the window start and either still active or terminated on or
    after the start.
    """
    if employees.empty:
        return employees
    hired_before = employees["hire_date"] < window.start
    present = employees["termination_date"].isna() | (employees["termination_date"] >= window.start)
    return employees[hired_before & present]


def headcount_at_end(employees: pd.DataFrame, window: TimeWindow) -> pd.DataFrame:
    if employees.empty:
        return employees
    hired = employees["hire_date"].isna() | (employees["hire_date"] <= window.end)
    present = employees["termination_date"].isna() | (employees["termination_date"] > window.end)
    return employees[hired & present]


def hired_since(employees: pd.DataFrame, since: pd.Timestamp) -> pd.DataFrame:
    if employees.empty:
        return employees
    return employees[employees["hire_date"] >= since]


def attendance_for_employees(attendance: pd.DataFrame, employees: pd.DataFrame) -> pd.DataFrame:
    """Attendance rows belonging to the given employee subset."""
    if attendance.empty:
        return attendance
    if employees.empty:
        return attendance.iloc[0:0]
    return attendance[attendance["employee_id"].isin(set(employees["employee_id"]))]


def filter_attendance_by_status(
    attendance: pd.DataFrame,
    *statuses: str | AttendanceStatus,
) -> pd.DataFrame:
    if attendance.empty:
        return attendance
    return attendance[attendance["status"].isin([str(s) for s in statuses])]


def filter_positions_by_status(positions: pd.DataFrame, status: str | PositionStatus) -> pd.DataFrame:
    if positions.empty:
        return positions
    return positions[positions["status"] == str(status)]


def filter_positions_by_department(positions: pd.DataFrame, department: str | None) -> pd.DataFrame:
    if not department or positions.empty:
        return positions
    return positions[_matches_casefold(positions["department"], department).fillna(False)]
