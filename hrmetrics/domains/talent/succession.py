"""Succession pipeline gaps for critical roles."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import pandas as pd

from hrmetrics.config import DEFAULT_CRITICAL_ROLES
from hrmetrics.domains.talent.scoring import FlightRisk, employee_flight_risk
from hrmetrics.domains.talent.tiers import RiskTier
from hrmetrics.domains.workforce.org_structure import build_reporting_map
from hrmetrics.utils.filters import active_employees
from hrmetrics.utils.periods import DateLike
from hrmetrics.utils.types import EmployeeRecord, SuccessionStatus, to_members

logger = logging.getLogger(__name__)

AT_RISK_TIERS = (RiskTier.HIGH, RiskTier.MEDIUM)


@dataclass(frozen=True)
class AtRiskSuccessor:
    employee: EmployeeRecord
    risk: RiskTier
    score: float


@dataclass(frozen=True)
class SuccessionGap:
    critical_role: str
    incumbent: EmployeeRecord
    ready_now_count: int = 0
    at_risk_successors: list[AtRiskSuccessor] = field(default_factory=list)

    @property
    def is_high_risk(self) -> bool:
        """No ready-now successor and at least one flight-risk candidate."""
        return self.ready_now_count == 0 and bool(self.at_risk_successors)


def analyze_succession_gaps(
    employees: pd.DataFrame,
    critical_roles: Sequence[str] = DEFAULT_CRITICAL_ROLES,
    as_of: DateLike = None,
) -> list[SuccessionGap]:
    """Critical roles whose active incumbent has no Ready Now direct report.

    Only active direct reports are considered successors. The first active
    employee holding a role title is its incumbent; roles without one are
    skipped.
    """
    active = active_employees(employees)
    if active.empty:
        return []

    reporting = build_reporting_map(active)
    gaps = []
    for role in critical_roles:
        holders = to_members(active[active["job_title"] == role])
        if not holders:
            continue
        incumbent = holders[0]

        report_ids = reporting.get(str(incumbent["employee_id"]), [])
        reports = to_members(active[active["employee_id"].isin(report_ids)])
        ready_now = [r for r in reports if r.get("succession_status") == SuccessionStatus.READY_NOW]
        if ready_now:
            continue

        at_risk = []
        for report in reports:
            if report.get("succession_status") == SuccessionStatus.NOT_ASSESSED:
                continue
            flight: FlightRisk = employee_flight_risk(report, as_of)
            if flight.risk in AT_RISK_TIERS:
                at_risk.append(AtRiskSuccessor(employee=report, risk=flight.risk, score=flight.score))

        gaps.append(SuccessionGap(critical_role=role, incumbent=incumbent, at_risk_successors=at_risk))

    logger.info("Found %d succession gaps across %d critical roles", len(gaps), len(critical_roles))
    return gaps
