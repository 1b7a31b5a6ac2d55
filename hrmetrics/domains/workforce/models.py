"""Pandera schema for employee records."""

import pandera as pa
from pandera import Column, Check

type EmployeeID = str | int
type SalaryAmount = float | int

SKILL_LEVELS = ["Novice", "Beginner", "Competent", "Proficient", "Expert"]
SUCCESSION_STATUSES = ["Ready Now", "Ready in 1-2 Years", "Future Potential", "Not Assessed"]


def _skills_well_formed(skills) -> bool:
    if not isinstance(skills, list):
        return False
    return all(
        isinstance(s, dict) and s.get("name") and s.get("level") in SKILL_LEVELS
        for s in skills
    )


employee_schema = pa.DataFrameSchema(
    {
        "employee_id": Column(str, nullable=False, unique=True),
        "name": Column(str, nullable=True),
        "department": Column(str, nullable=False),
        "job_title": Column(str, nullable=False),
        "location": Column(str, nullable=False),
        "gender": Column(str, Check.isin(["Male", "Female", "Other"]), nullable=True),
        "hire_date": Column(pa.DateTime, nullable=False),
        "termination_date": Column(pa.DateTime, nullable=True),
        "termination_reason": Column(
            str, Check.isin(["Voluntary", "Involuntary"]), nullable=True,
        ),
        "salary": Column(float, Check.greater_than_or_equal_to(0), nullable=True),
        "performance_rating": Column(float, Check.in_range(1, 5), nullable=True),
        "potential_rating": Column(float, Check.in_range(1, 3), nullable=True),
        "engagement_score": Column(float, Check.in_range(0, 100), nullable=True),
        "management_satisfaction": Column(float, Check.in_range(0, 100), nullable=True),
        "weekly_hours": Column(float, Check.greater_than_or_equal_to(0), nullable=True),
        "succession_status": Column(str, Check.isin(SUCCESSION_STATUSES), nullable=True),
        "skills": Column(object, Check(_skills_well_formed, element_wise=True)),
    },
    strict=False,
    coerce=True,
)
