"""Workforce analytics domain.

Headcount breakdowns, turnover and retention rates, attrition reports,
compensation ratios and org hierarchy resolution over employee records.
"""

from dataclasses import asdict

from hrmetrics.config import EngineConfig
from hrmetrics.domains.workforce.attrition import (
    annual_turnover_rate,
    average_tenure_of_leavers,
    high_performer_attrition,
    turnover_by_reason,
    turnover_trend,
)
from hrmetrics.domains.workforce.compensation import average_salary, bonus_rate, raise_rate
from hrmetrics.domains.workforce.headcount import (
    average_engagement,
    average_tenure,
    gender_diversity,
    headcount,
    headcount_by_department,
    headcount_heatmap,
)
from hrmetrics.domains.workforce.models import employee_schema
from hrmetrics.domains.workforce.retention import (
    first_year_retention_rate,
    high_performer_retention_rate,
    overall_retention_rate,
)
from hrmetrics.utils.filters import active_employees, terminated_employees
from hrmetrics.utils.periods import DateLike
from hrmetrics.utils.types import DataContext
from hrmetrics.utils.validators import (
    merge_results,
    validate_dataframe,
    validate_referential_integrity,
    validate_unique,
)


def validate(context: DataContext) -> dict[str, object]:
    """Validate employee records against the schema and reporting references."""
    employees = context.employees
    if employees.empty:
        return {"status": "skipped", "reason": "no employee records"}

    result = merge_results(
        validate_dataframe(employees, employee_schema),
        validate_unique(employees, ["employee_id"]),
    )
    # Dangling managers are tolerated; report them without failing the domain.
    orphans = validate_referential_integrity(employees, employees, "manager_id", "employee_id")
    match result:
        case {"status": "ok"}:
            return {"status": "ok", "rows_available": len(employees), "warnings": orphans["errors"]}
        case {"errors": errors}:
            return {"status": "error", "message": "; ".join(errors)}


def run(context: DataContext, config: EngineConfig, as_of: DateLike = None) -> dict[str, object]:
    """Compute the workforce summary for the configured default period."""
    employees = context.employees
    period = config.default_period
    return {
        "headcount": headcount(employees),
        "headcount_by_department": headcount_by_department(active_employees(employees)),
        "gender_diversity": gender_diversity(active_employees(employees)),
        "average_tenure": average_tenure(employees, as_of),
        "average_engagement": average_engagement(active_employees(employees)),
        "turnover_rate": annual_turnover_rate(employees, period, as_of),
        "turnover_by_reason": turnover_by_reason(terminated_employees(employees)),
        "turnover_trend": turnover_trend(employees, period, as_of),
        "average_tenure_of_leavers": average_tenure_of_leavers(employees),
        "retention_rate": overall_retention_rate(employees, period, as_of),
        "high_performer_retention_rate": high_performer_retention_rate(employees, period, as_of),
        "first_year_retention_rate": first_year_retention_rate(employees, as_of),
        "high_performer_attrition": asdict(high_performer_attrition(employees)),
        "heatmap": headcount_heatmap(employees, active_only=True),
        "average_salary": average_salary(employees),
        "raise_rate": raise_rate(employees),
        "bonus_rate": bonus_rate(employees),
    }
