"""Heuristic flight-risk, impact and burnout scoring.

Scores are weighted checklists over employee attributes. A missing optional
attribute never raises and never adds a penalty.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np
import pandas as pd

from hrmetrics.domains.talent.tiers import RiskTier, classify_flight_risk
from hrmetrics.utils.filters import active_employees
from hrmetrics.utils.periods import DateLike, employee_tenure_years
from hrmetrics.utils.types import to_members

logger = logging.getLogger(__name__)

type Score = float

MAX_FLIGHT_RISK = 10.0
MAX_IMPACT = 10.0
MAX_BURNOUT = 100.0
DISPLAY_SCALE = 10

# Flight-risk checklist weights
LOW_ENGAGEMENT_PENALTY = 3.0
MODERATE_ENGAGEMENT_PENALTY = 1.5
LOW_MANAGEMENT_SATISFACTION_PENALTY = 2.5
LOW_PERFORMANCE_PENALTY = 1.5
NEW_HIRE_PENALTY = 1.5
MID_TENURE_PENALTY = 1.0

# Burnout triggers
DEFAULT_WEEKLY_HOURS = 40
OVERWORK_HOURS = 48
BURNOUT_ENGAGEMENT_FLOOR = 65
BURNOUT_HIGH_RISK_SCORE = 65
BURNOUT_WEIGHTS = {
    "high_workload": 35,
    "low_engagement": 45,
    "high_performance_pressure": 20,
}


@dataclass(frozen=True)
class FlightRisk:
    risk: RiskTier
    score: Score  # 0-100 display scale, not the raw 0-10 score


@dataclass(frozen=True)
class BurnoutRiskResult:
    department: str
    average_risk_score: Score
    high_risk_employee_count: int
    contributing_factors: dict[str, float]


def _present(value) -> bool:
    return value is not None and not pd.isna(value)


def flight_risk_score(employee: Mapping, as_of: DateLike = None) -> Score:
    """Raw flight-risk score in [0, 10]."""
    risk = 0.0

    engagement = employee.get("engagement_score")
    if _present(engagement):
        if engagement < 60:
            risk += LOW_ENGAGEMENT_PENALTY
        elif engagement < 75:
            risk += MODERATE_ENGAGEMENT_PENALTY

    satisfaction = employee.get("management_satisfaction")
    if _present(satisfaction) and satisfaction < 60:
        risk += LOW_MANAGEMENT_SATISFACTION_PENALTY

    rating = employee.get("performance_rating")
    if _present(rating) and rating <= 2:
        risk += LOW_PERFORMANCE_PENALTY

    if _present(employee.get("hire_date")):
        tenure = employee_tenure_years(employee, as_of)
        if tenure < 1.5:
            risk += NEW_HIRE_PENALTY
        if 5 < tenure < 10:
            risk += MID_TENURE_PENALTY

    return float(np.clip(risk, 0.0, MAX_FLIGHT_RISK))


def employee_flight_risk(employee: Mapping, as_of: DateLike = None) -> FlightRisk:
    """Tier plus the score rescaled to 0-100 for display."""
    score = flight_risk_score(employee, as_of)
    return FlightRisk(risk=classify_flight_risk(score), score=score * DISPLAY_SCALE)


def _title_bonus(title: str) -> float:
    match title:
        case t if "Chief" in t or "VP" in t:
            return 3.0
        case t if "Director" in t or "Principal" in t:
            return 2.0
        case t if "Manager" in t or "Lead" in t:
            return 1.0
        case _:
            return 0.0


def impact_score(employee: Mapping) -> Score:
    """Organizational impact of a departure, in [0, 10]."""
    rating = employee.get("performance_rating")
    potential = employee.get("potential_rating")
    impact = 0.0
    if _present(rating):
        impact += rating / 5 * 4
    if _present(potential):
        impact += potential / 3 * 3
    title = employee.get("job_title")
    impact += _title_bonus(title if isinstance(title, str) else "")
    return float(np.clip(impact, 0.0, MAX_IMPACT))


def score_flight_risk(employees: pd.DataFrame, as_of: DateLike = None) -> pd.Series:
    """Raw flight-risk score per row, index-aligned with ``employees``."""
    return pd.Series(
        [flight_risk_score(record, as_of) for record in to_members(employees)],
        index=employees.index,
        dtype=float,
    )


def score_impact(employees: pd.DataFrame) -> pd.Series:
    return pd.Series(
        [impact_score(record) for record in to_members(employees)],
        index=employees.index,
        dtype=float,
    )


def burnout_triggers(employee: Mapping) -> dict[str, bool]:
    hours = employee.get("weekly_hours")
    engagement = employee.get("engagement_score")
    rating = employee.get("performance_rating")
    return {
        "high_workload": (hours if _present(hours) else DEFAULT_WEEKLY_HOURS) > OVERWORK_HOURS,
        "low_engagement": _present(engagement) and engagement < BURNOUT_ENGAGEMENT_FLOOR,
        "high_performance_pressure": _present(rating) and rating >= 4,
    }


def burnout_score(employee: Mapping) -> Score:
    triggers = burnout_triggers(employee)
    score = sum(BURNOUT_WEIGHTS[name] for name, hit in triggers.items() if hit)
    return float(np.clip(score, 0.0, MAX_BURNOUT))


def burnout_hotspots(employees: pd.DataFrame) -> list[BurnoutRiskResult]:
    """Department burnout risk over active employees, highest average first.

    Contributing factors are each trigger's share of all triggers fired in
    the department, not a share of headcount.
    """
    if employees.empty:
        return []

    results = []
    departments = employees["department"].dropna().unique().tolist()
    active = active_employees(employees)
    for dept in departments:
        members = to_members(active[active["department"] == dept])
        if not members:
            continue

        factors = dict.fromkeys(BURNOUT_WEIGHTS, 0)
        scores = []
        for member in members:
            for name, hit in burnout_triggers(member).items():
                factors[name] += int(hit)
            scores.append(burnout_score(member))

        total_factors = sum(factors.values()) or 1
        results.append(BurnoutRiskResult(
            department=dept,
            average_risk_score=sum(scores) / len(scores),
            high_risk_employee_count=sum(1 for s in scores if s > BURNOUT_HIGH_RISK_SCORE),
            contributing_factors={
                name: count / total_factors * 100 for name, count in factors.items()
            },
        ))

    logger.info("Computed burnout risk for %d departments", len(results))
    return sorted(results, key=lambda r: r.average_risk_score, reverse=True)
