"""Tier enumerations and the one classifier per axis.

Every place that buckets a rating or score into High/Medium/Low goes through
these functions so thresholds cannot drift between views.
"""

from enum import StrEnum

import pandas as pd

HIGH_RISK_THRESHOLD = 6.5
MEDIUM_RISK_THRESHOLD = 3.5
HIGH_PERFORMANCE_MIN = 4
QUADRANT_SPLIT = 5.0


class PerformanceTier(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class PotentialTier(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class RiskTier(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ImpactRiskQuadrant(StrEnum):
    HIGH_IMPACT_HIGH_RISK = "HighImpact_HighRisk"
    HIGH_IMPACT_LOW_RISK = "HighImpact_LowRisk"
    LOW_IMPACT_HIGH_RISK = "LowImpact_HighRisk"
    LOW_IMPACT_LOW_RISK = "LowImpact_LowRisk"


def classify_performance(rating: float | None) -> PerformanceTier:
    """High is 4-5, Medium is exactly 3, everything else (incl. missing) is Low."""
    if rating is None or pd.isna(rating):
        return PerformanceTier.LOW
    match rating:
        case r if r >= HIGH_PERFORMANCE_MIN:
            return PerformanceTier.HIGH
        case r if r == 3:
            return PerformanceTier.MEDIUM
        case _:
            return PerformanceTier.LOW


def classify_potential(rating: float | None) -> PotentialTier:
    if rating is None or pd.isna(rating):
        return PotentialTier.LOW
    match rating:
        case r if r == 3:
            return PotentialTier.HIGH
        case r if r == 2:
            return PotentialTier.MEDIUM
        case _:
            return PotentialTier.LOW


def classify_flight_risk(score: float) -> RiskTier:
    """Tier a raw 0-10 flight-risk score."""
    match score:
        case s if s >= HIGH_RISK_THRESHOLD:
            return RiskTier.HIGH
        case s if s >= MEDIUM_RISK_THRESHOLD:
            return RiskTier.MEDIUM
        case _:
            return RiskTier.LOW


def classify_impact_risk(impact: float, flight_risk: float) -> ImpactRiskQuadrant:
    """Quadrant on the raw 0-10 axes; values equal to the split count as low."""
    match (impact > QUADRANT_SPLIT, flight_risk > QUADRANT_SPLIT):
        case (True, True):
            return ImpactRiskQuadrant.HIGH_IMPACT_HIGH_RISK
        case (True, False):
            return ImpactRiskQuadrant.HIGH_IMPACT_LOW_RISK
        case (False, True):
            return ImpactRiskQuadrant.LOW_IMPACT_HIGH_RISK
        case _:
            return ImpactRiskQuadrant.LOW_IMPACT_LOW_RISK
