"""Shared fixtures: a small org chart, its attendance and recruiting data.

Every time-dependent test evaluates at ``AS_OF`` so results do not drift
with the calendar.

Org (active unless noted):
  E1  Chief Executive Officer   Executive    NY      no manager
  E2  VP of Engineering         Engineering  NY      reports to E1
  E3  Software Engineer         Engineering  London  reports to E2, hired 2025-09
  E4  Senior Engineer           Engineering  London  reports to E2
  E5  Account Executive         Sales        NY      reports to E1
  E6  Software Engineer         Engineering  London  left 2026-02-10 (voluntary)
  E7  Account Executive         Sales        NY      left 2025-11-20 (involuntary)
"""

import pandas as pd
import pytest

from hrmetrics.domains.attendance.transform import build_attendance_frame
from hrmetrics.domains.recruiting.transform import build_funnel_frame, build_position_frame
from hrmetrics.domains.workforce.transform import build_employee_frame
from hrmetrics.utils.types import DataContext

AS_OF = pd.Timestamp("2026-06-15")


def skills(**levels: str) -> list[dict[str, str]]:
    return [{"name": name, "level": level} for name, level in levels.items()]


EMPLOYEE_RECORDS = [
    {
        "employee_id": "E1", "name": "Avery Stone", "department": "Executive",
        "job_title": "Chief Executive Officer", "location": "NY", "gender": "Female",
        "hire_date": "2015-01-10", "performance_rating": 5, "potential_rating": 3,
        "engagement_score": 85, "management_satisfaction": 80, "weekly_hours": 50,
        "salary": 300000, "bonus": 60000, "last_raise_amount": 15000,
        "skills": skills(Leadership="Expert"),
    },
    {
        "employee_id": "E2", "name": "Blake Moreno", "department": "Engineering",
        "job_title": "VP of Engineering", "location": "NY", "gender": "Male",
        "hire_date": "2018-03-01", "performance_rating": 4, "potential_rating": 3,
        "engagement_score": 70, "management_satisfaction": 55, "weekly_hours": 55,
        "manager_id": "E1", "succession_status": "Ready in 1-2 Years",
        "salary": 220000, "bonus": 30000, "last_raise_amount": 10000,
        "skills": skills(Python="Expert", Kubernetes="Proficient"),
    },
    {
        "employee_id": "E3", "name": "Casey Lin", "department": "Engineering",
        "job_title": "Software Engineer", "location": "London", "gender": "Female",
        "hire_date": "2025-09-01", "performance_rating": 3, "potential_rating": 2,
        "engagement_score": 58, "management_satisfaction": 50, "weekly_hours": 45,
        "manager_id": "E2", "succession_status": "Future Potential",
        "salary": 110000, "bonus": 5000, "last_raise_amount": 0,
        "skills": skills(Python="Proficient", SQL="Competent"),
    },
    {
        "employee_id": "E4", "name": "Devon Okafor", "department": "Engineering",
        "job_title": "Senior Engineer", "location": "London", "gender": "Male",
        "hire_date": "2020-05-01", "performance_rating": 2, "potential_rating": 1,
        "engagement_score": 62, "management_satisfaction": 70, "weekly_hours": 40,
        "manager_id": "E2", "succession_status": "Not Assessed",
        "salary": 140000, "bonus": 0, "last_raise_amount": 4000,
        "skills": skills(Python="Competent"),
    },
    {
        "employee_id": "E5", "name": "Emerson Reyes", "department": "Sales",
        "job_title": "Account Executive", "location": "NY", "gender": "Other",
        "hire_date": "2022-01-15", "performance_rating": 4, "potential_rating": 2,
        "engagement_score": 90, "management_satisfaction": 90, "weekly_hours": None,
        "manager_id": "E1", "succession_status": "Not Assessed",
        "salary": 90000, "bonus": 20000, "last_raise_amount": 3000,
        "skills": skills(Negotiation="Expert"),
    },
    {
        "employee_id": "E6", "name": "Finley Park", "department": "Engineering",
        "job_title": "Software Engineer", "location": "London", "gender": "Male",
        "hire_date": "2021-02-01", "termination_date": "2026-02-10",
        "termination_reason": "Voluntary", "performance_rating": 4, "potential_rating": 2,
        "engagement_score": 60, "manager_id": "E2",
        "salary": 120000, "skills": skills(Kubernetes="Expert"),
    },
    {
        "employee_id": "E7", "name": "Gray Novak", "department": "Sales",
        "job_title": "Account Executive", "location": "NY", "gender": "Female",
        "hire_date": "2023-06-01", "termination_date": "2025-11-20",
        "termination_reason": "Involuntary", "performance_rating": 2, "potential_rating": 1,
        "engagement_score": 50, "manager_id": "E5",
        "salary": 85000, "skills": [],
    },
]

ATTENDANCE_RECORDS = [
    {"employee_id": "E3", "date": "2026-06-01", "status": "Present"},
    {"employee_id": "E3", "date": "2026-06-02", "status": "Sick Leave"},
    {"employee_id": "E3", "date": "2026-06-03", "status": "Unscheduled Absence"},
    {"employee_id": "E3", "date": "2026-05-04", "status": "Sick Leave"},
    {"employee_id": "E4", "date": "2026-06-01", "status": "Present"},
    {"employee_id": "E4", "date": "2026-06-02", "status": "PTO"},
    {"employee_id": "E4", "date": "2026-04-10", "status": "Unscheduled Absence"},
    {"employee_id": "E1", "date": "2026-06-01", "status": "Present"},
]

POSITION_RECORDS = [
    {"id": "P1", "title": "Software Engineer", "department": "Engineering", "status": "Open",
     "open_date": "2026-05-16", "position_type": "Replacement", "budget_status": "Budgeted"},
    {"id": "P2", "title": "Data Engineer", "department": "Engineering", "status": "Open",
     "open_date": "2026-04-16", "position_type": "New", "budget_status": "Budgeted"},
    {"id": "P3", "title": "Account Executive", "department": "Sales", "status": "Open",
     "open_date": "2026-06-05", "position_type": "New", "budget_status": "Non-Budgeted"},
    {"id": "P4", "title": "Account Executive", "department": "Sales", "status": "Closed",
     "open_date": "2025-10-01", "close_date": "2025-12-01", "position_type": "Replacement",
     "budget_status": "Budgeted"},
]

FUNNEL_RECORDS = [
    {"position_id": "P1", "shortlisted": 10, "interviewed": 6, "offers_extended": 3,
     "offers_accepted": 2, "joined": 2},
    {"position_id": "P2", "shortlisted": 8, "interviewed": 4, "offers_extended": 1,
     "offers_accepted": 1, "joined": 0},
]


@pytest.fixture
def as_of() -> pd.Timestamp:
    return AS_OF


@pytest.fixture
def employees() -> pd.DataFrame:
    return build_employee_frame(EMPLOYEE_RECORDS)


@pytest.fixture
def empty_employees() -> pd.DataFrame:
    return build_employee_frame([])


@pytest.fixture
def attendance() -> pd.DataFrame:
    return build_attendance_frame(ATTENDANCE_RECORDS)


@pytest.fixture
def positions() -> pd.DataFrame:
    return build_position_frame(POSITION_RECORDS)


@pytest.fixture
def funnels() -> pd.DataFrame:
    return build_funnel_frame(FUNNEL_RECORDS)


@pytest.fixture
def context(employees, attendance, positions, funnels) -> DataContext:
    return DataContext(employees=employees, attendance=attendance, positions=positions, funnels=funnels)


@pytest.fixture
def cohort() -> pd.DataFrame:
    """Nine employees present a year ago, two of whom left during the year.

    Also holds one recent hire and one long-gone leaver, neither of whom
    belongs to the 12-month retention cohort.
    """
    records = [
        {"employee_id": f"C{i}", "department": "Operations", "hire_date": "2020-01-01",
         "performance_rating": 4 if i < 3 else 3}
        for i in range(9)
    ]
    records[0]["termination_date"] = "2026-01-10"
    records[1]["termination_date"] = "2026-03-05"
    records.append({"employee_id": "N1", "department": "Operations", "hire_date": "2026-02-01",
                    "performance_rating": 3})
    records.append({"employee_id": "X1", "department": "Operations", "hire_date": "2019-01-01",
                    "termination_date": "2024-06-01", "performance_rating": 3})
    return build_employee_frame(records)
