"""Talent segmentation grids: nine-box, performance x risk, impact x risk."""

import logging

import pandas as pd

from hrmetrics.domains.talent.scoring import flight_risk_score, impact_score
from hrmetrics.domains.talent.tiers import (
    ImpactRiskQuadrant,
    PerformanceTier,
    PotentialTier,
    RiskTier,
    classify_flight_risk,
    classify_impact_risk,
    classify_performance,
    classify_potential,
)
from hrmetrics.utils.filters import active_employees
from hrmetrics.utils.periods import DateLike
from hrmetrics.utils.types import MemberList, to_members

logger = logging.getLogger(__name__)

type Grid = dict[str, dict[str, MemberList]]

# Row order top to bottom, column order left to right, as drawn on the grid.
PERFORMANCE_ROWS = (PerformanceTier.HIGH, PerformanceTier.MEDIUM, PerformanceTier.LOW)
POTENTIAL_COLUMNS = (PotentialTier.LOW, PotentialTier.MEDIUM, PotentialTier.HIGH)
RISK_COLUMNS = (RiskTier.LOW, RiskTier.MEDIUM, RiskTier.HIGH)


def _empty_grid(rows, columns) -> Grid:
    return {str(row): {str(col): [] for col in columns} for row in rows}


def nine_box_grid(employees: pd.DataFrame) -> Grid:
    """Active employees placed by performance tier (rows) and potential tier (columns).

    Every active employee lands in exactly one cell.
    """
    grid = _empty_grid(PERFORMANCE_ROWS, POTENTIAL_COLUMNS)
    for member in to_members(active_employees(employees)):
        perf = classify_performance(member.get("performance_rating"))
        pot = classify_potential(member.get("potential_rating"))
        grid[str(perf)][str(pot)].append(member)
    return grid


def performance_risk_matrix(employees: pd.DataFrame, as_of: DateLike = None) -> Grid:
    """Active employees by performance tier (rows) and flight-risk tier (columns)."""
    grid = _empty_grid(PERFORMANCE_ROWS, RISK_COLUMNS)
    for member in to_members(active_employees(employees)):
        perf = classify_performance(member.get("performance_rating"))
        risk = classify_flight_risk(flight_risk_score(member, as_of))
        grid[str(perf)][str(risk)].append(member)
    return grid


def quadrant_for(employee, as_of: DateLike = None) -> ImpactRiskQuadrant:
    return classify_impact_risk(impact_score(employee), flight_risk_score(employee, as_of))


def impact_risk_quadrants(employees: pd.DataFrame, as_of: DateLike = None) -> dict[str, MemberList]:
    """Active employees split into the four impact/flight-risk quadrants."""
    quadrants: dict[str, MemberList] = {str(q): [] for q in ImpactRiskQuadrant}
    for member in to_members(active_employees(employees)):
        quadrants[str(quadrant_for(member, as_of))].append(member)

    logger.info(
        "Impact/risk quadrants: %s",
        {name: len(members) for name, members in quadrants.items()},
    )
    return quadrants


def impact_risk_points(employees: pd.DataFrame, as_of: DateLike = None) -> list[dict[str, object]]:
    """Scatter points for the talent risk chart (x = flight risk, y = impact)."""
    points = []
    for member in to_members(active_employees(employees)):
        flight = flight_risk_score(member, as_of)
        impact = impact_score(member)
        points.append({
            "employee_id": member.get("employee_id"),
            "name": member.get("name"),
            "x": flight,
            "y": impact,
            "quadrant": str(classify_impact_risk(impact, flight)),
        })
    return points


def _tier_axis(tiers, value: str | None, default):
    """Tiers selected by a free-text filter; matching ignores case, unknown text selects none."""
    if not value:
        return default
    return [tier for tier in tiers if tier.lower() == str(value).strip().lower()]


def talent_risk_count(
    employees: pd.DataFrame,
    performance: str | None = None,
    risk: str | None = None,
    as_of: DateLike = None,
) -> int:
    """Active employees in a performance/risk cell; an omitted axis matches all."""
    grid = performance_risk_matrix(employees, as_of)
    rows = _tier_axis(PerformanceTier, performance, PERFORMANCE_ROWS)
    columns = _tier_axis(RiskTier, risk, RISK_COLUMNS)
    return sum(len(grid[str(row)][str(col)]) for row in rows for col in columns)
