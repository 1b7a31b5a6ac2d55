"""Recruitment funnel totals and conversion rates."""

import logging

import pandas as pd

from hrmetrics.domains.recruiting.transform import FUNNEL_STAGES
from hrmetrics.utils.transforms import safe_ratio

logger = logging.getLogger(__name__)

type FunnelTotals = dict[str, int]


def funnel_totals(funnels: pd.DataFrame) -> FunnelTotals:
    """Stage counts summed across every position's funnel."""
    if funnels.empty:
        return dict.fromkeys(FUNNEL_STAGES, 0)
    sums = funnels[FUNNEL_STAGES].fillna(0).sum()
    return {stage: int(sums[stage]) for stage in FUNNEL_STAGES}


def offer_acceptance_rate(funnels: pd.DataFrame) -> float:
    totals = funnel_totals(funnels)
    return safe_ratio(totals["offers_accepted"], totals["offers_extended"])


def stage_conversion_rates(funnels: pd.DataFrame) -> list[dict[str, object]]:
    """Conversion from each stage to the next, as a percentage of the earlier stage.

    Stage counts are not checked for monotonicity, so a later stage larger
    than an earlier one yields a rate above 100.
    """
    totals = funnel_totals(funnels)
    rates = [
        {
            "from_stage": earlier,
            "to_stage": later,
            "rate": safe_ratio(totals[later], totals[earlier]),
        }
        for earlier, later in zip(FUNNEL_STAGES, FUNNEL_STAGES[1:])
    ]
    logger.info("Funnel totals: %s", totals)
    return rates


def yield_ratio(funnels: pd.DataFrame) -> float:
    """Joined hires per shortlisted candidate, in percent."""
    totals = funnel_totals(funnels)
    return safe_ratio(totals["joined"], totals["shortlisted"])
