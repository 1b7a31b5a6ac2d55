"""Skills domain: the skill inventory, scarcity and gap analysis."""

from hrmetrics.config import EngineConfig
from hrmetrics.domains.skills.matrix import (
    at_risk_skills,
    skill_comparison_by_department,
    skill_density_by_department,
    skill_matrix,
    skill_matrix_heat,
    skill_proficiency_metrics,
    skill_set_kpis,
)
from hrmetrics.utils.filters import active_employees
from hrmetrics.utils.periods import DateLike
from hrmetrics.utils.types import DataContext


def validate(context: DataContext) -> dict[str, object]:
    active = active_employees(context.employees)
    if active.empty:
        return {"status": "skipped", "reason": "no active employees"}
    with_skills = int(active["skills"].map(bool).sum())
    if with_skills == 0:
        return {"status": "error", "message": "No active employee lists any skills"}
    return {"status": "ok", "rows_available": with_skills}


def run(context: DataContext, config: EngineConfig, as_of: DateLike = None) -> dict[str, object]:
    employees = context.employees
    matrix = skill_matrix(employees)
    return {
        "kpis": skill_set_kpis(employees, matrix),
        "at_risk": [
            {
                "skill_name": row["skill_name"],
                "holders": len(row["employees"]),
                "high_risk_holders": row["high_risk_employee_count"],
            }
            for row in at_risk_skills(employees, config.at_risk_threshold, as_of)
        ],
        "proficiency": skill_proficiency_metrics(employees),
        "heat": skill_matrix_heat(employees, config.scarcity_bands),
        "comparison_by_department": skill_comparison_by_department(employees),
        "density_by_department": skill_density_by_department(employees),
    }
