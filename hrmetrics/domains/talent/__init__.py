"""Talent domain: flight risk, impact, burnout, nine-box and succession."""

from dataclasses import asdict

from hrmetrics.config import EngineConfig
from hrmetrics.domains.talent.performance import (
    new_hire_performance,
    performance_calibration,
    performance_distribution,
)
from hrmetrics.domains.talent.scoring import burnout_hotspots
from hrmetrics.domains.talent.segmentation import impact_risk_quadrants, nine_box_grid, talent_risk_count
from hrmetrics.domains.talent.succession import analyze_succession_gaps
from hrmetrics.domains.talent.tiers import PerformanceTier, RiskTier
from hrmetrics.utils.filters import active_employees
from hrmetrics.utils.periods import DateLike
from hrmetrics.utils.types import DataContext

RATING_COLUMNS = ["performance_rating", "potential_rating", "engagement_score"]


def validate(context: DataContext) -> dict[str, object]:
    """Talent scoring needs ratings on the active population."""
    active = active_employees(context.employees)
    if active.empty:
        return {"status": "skipped", "reason": "no active employees"}

    missing = [col for col in RATING_COLUMNS if active[col].isna().all()]
    match missing:
        case []:
            return {"status": "ok", "rows_available": len(active)}
        case cols:
            return {"status": "error", "message": f"No values for {', '.join(cols)}"}


def run(context: DataContext, config: EngineConfig, as_of: DateLike = None) -> dict[str, object]:
    employees = context.employees
    grid = nine_box_grid(employees)
    quadrants = impact_risk_quadrants(employees, as_of)
    return {
        "nine_box": {perf: {pot: len(m) for pot, m in row.items()} for perf, row in grid.items()},
        "impact_risk": {name: len(members) for name, members in quadrants.items()},
        "high_performers_at_high_risk": talent_risk_count(
            employees, PerformanceTier.HIGH, RiskTier.HIGH, as_of,
        ),
        "burnout": [asdict(r) for r in burnout_hotspots(employees)],
        "succession_gaps": [
            {
                "critical_role": gap.critical_role,
                "incumbent": gap.incumbent.get("name"),
                "at_risk_successors": len(gap.at_risk_successors),
            }
            for gap in analyze_succession_gaps(employees, config.critical_roles, as_of)
        ],
        "performance_distribution": performance_distribution(active_employees(employees)),
        "performance_calibration": performance_calibration(employees),
        "new_hire_performance": new_hire_performance(employees, config.new_hire_months, as_of),
    }
