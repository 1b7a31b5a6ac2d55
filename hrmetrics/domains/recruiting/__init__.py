"""Recruiting domain: open requisitions and recruitment funnels."""

from hrmetrics.config import EngineConfig
from hrmetrics.domains.recruiting.funnel import funnel_totals, offer_acceptance_rate, stage_conversion_rates
from hrmetrics.domains.recruiting.models import funnel_schema, position_schema
from hrmetrics.domains.recruiting.positions import (
    average_position_age,
    open_position_count,
    open_positions_by_department,
    open_positions_by_title,
)
from hrmetrics.utils.filters import filter_positions_by_status
from hrmetrics.utils.periods import DateLike
from hrmetrics.utils.types import DataContext, PositionStatus
from hrmetrics.utils.validators import merge_results, validate_dataframe, validate_unique


def validate(context: DataContext) -> dict[str, object]:
    if context.positions.empty and context.funnels.empty:
        return {"status": "skipped", "reason": "no positions or funnels"}

    results = []
    if not context.positions.empty:
        results.append(validate_dataframe(context.positions, position_schema))
        results.append(validate_unique(context.positions, ["position_id"]))
    if not context.funnels.empty:
        results.append(validate_dataframe(context.funnels, funnel_schema))

    match merge_results(*results):
        case {"status": "ok"}:
            return {"status": "ok", "rows_available": len(context.positions) + len(context.funnels)}
        case {"errors": errors}:
            return {"status": "error", "message": "; ".join(errors)}


def run(context: DataContext, config: EngineConfig, as_of: DateLike = None) -> dict[str, object]:
    positions, funnels = context.positions, context.funnels
    open_positions = filter_positions_by_status(positions, PositionStatus.OPEN)
    return {
        "open_positions": open_position_count(positions),
        "open_by_department": open_positions_by_department(open_positions),
        "open_by_title": open_positions_by_title(open_positions),
        "average_position_age": average_position_age(open_positions, as_of),
        "funnel": funnel_totals(funnels),
        "offer_acceptance_rate": offer_acceptance_rate(funnels),
        "conversion": stage_conversion_rates(funnels),
    }
