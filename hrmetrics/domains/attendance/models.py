"""Pandera schema for daily attendance records."""

import pandera as pa
from pandera import Column, Check

ATTENDANCE_STATUSES = ["Present", "Unscheduled Absence", "PTO", "Sick Leave"]

attendance_schema = pa.DataFrameSchema(
    {
        "employee_id": Column(str, nullable=False),
        "date": Column(pa.DateTime, nullable=False),
        "status": Column(str, Check.isin(ATTENDANCE_STATUSES)),
    },
    strict=False,
    coerce=True,
)
