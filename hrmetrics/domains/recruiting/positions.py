"""Open requisition breakdowns."""

import logging

import pandas as pd

from hrmetrics.utils.filters import filter_positions_by_department, filter_positions_by_status
from hrmetrics.utils.periods import DateLike, resolve_as_of
from hrmetrics.utils.types import PositionStatus

logger = logging.getLogger(__name__)

type RequisitionMix = dict[str, int]


def _classify(position_type, budget_status) -> str | None:
    match position_type:
        case "Replacement":
            return "replacement"
        case "New" if budget_status == "Budgeted":
            return "new_budgeted"
        case "New":
            return "new_non_budgeted"
        case _:
            return None


def _mix_by(positions: pd.DataFrame, column: str) -> dict[str, RequisitionMix]:
    mix: dict[str, RequisitionMix] = {}
    if positions.empty:
        return mix
    for key, ptype, budget in zip(positions[column], positions["position_type"], positions["budget_status"]):
        counts = mix.setdefault(key, {"replacement": 0, "new_budgeted": 0, "new_non_budgeted": 0})
        bucket = _classify(ptype, budget)
        if bucket is not None:
            counts[bucket] += 1
    return mix


def open_positions_by_department(positions: pd.DataFrame) -> list[dict[str, object]]:
    """Replacement vs new (budgeted / non-budgeted) requisitions per department."""
    return [
        {"department": dept, **counts}
        for dept, counts in _mix_by(positions, "department").items()
    ]


def open_positions_by_title(positions: pd.DataFrame) -> list[dict[str, object]]:
    rows = [{"title": title, **counts} for title, counts in _mix_by(positions, "title").items()]
    return sorted(
        rows,
        key=lambda r: r["replacement"] + r["new_budgeted"] + r["new_non_budgeted"],
        reverse=True,
    )


def open_position_count(positions: pd.DataFrame, department: str | None = None) -> int:
    open_positions = filter_positions_by_status(positions, PositionStatus.OPEN)
    return len(filter_positions_by_department(open_positions, department))


def average_position_age(positions: pd.DataFrame, as_of: DateLike = None) -> float:
    """Mean days since ``open_date``; positions without an open date are ignored."""
    if positions.empty:
        return 0.0
    opened = positions["open_date"].dropna()
    if opened.empty:
        return 0.0
    age = (resolve_as_of(as_of) - opened).dt.total_seconds() / 86400
    logger.info("Average age of %d positions: %.1f days", len(opened), age.mean())
    return float(age.mean())
