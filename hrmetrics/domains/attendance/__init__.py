"""Attendance domain: absence rates, trends and absentee rankings."""

from hrmetrics.config import EngineConfig
from hrmetrics.domains.attendance.absence import (
    absence_trend,
    absences_by_department,
    attendance_rates,
    attendance_summary,
    top_absentees,
)
from hrmetrics.domains.attendance.models import attendance_schema
from hrmetrics.utils.periods import DateLike
from hrmetrics.utils.types import DataContext
from hrmetrics.utils.validators import merge_results, validate_dataframe, validate_referential_integrity


def validate(context: DataContext) -> dict[str, object]:
    attendance = context.attendance
    if attendance.empty:
        return {"status": "skipped", "reason": "no attendance records"}

    match merge_results(
        validate_dataframe(attendance, attendance_schema),
        validate_referential_integrity(attendance, context.employees, "employee_id", "employee_id"),
    ):
        case {"status": "ok"}:
            return {"status": "ok", "rows_available": len(attendance)}
        case {"errors": errors}:
            return {"status": "error", "message": "; ".join(errors)}


def run(context: DataContext, config: EngineConfig, as_of: DateLike = None) -> dict[str, object]:
    attendance, employees = context.attendance, context.employees
    return {
        "summary": attendance_summary(attendance),
        "rates": attendance_rates(attendance, employees),
        "trend": absence_trend(attendance, as_of=as_of),
        "by_department": absences_by_department(attendance, employees),
        "top_absentees": [
            {"name": row["employee"].get("name"), "absence_count": row["absence_count"]}
            for row in top_absentees(attendance, employees)
        ],
    }
