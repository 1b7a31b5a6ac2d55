"""Named tool adapters for the AI assistant.

Each tool takes the live :class:`DataContext` plus keyword arguments chosen
by the model and returns a small JSON-serializable dict. Tools only filter
and delegate; every figure comes from the domain calculators.
"""

import logging
from collections.abc import Callable, Mapping

from hrmetrics.domains.attendance.absence import overall_absence_rate, unscheduled_absence_rate
from hrmetrics.domains.recruiting.funnel import funnel_totals
from hrmetrics.domains.recruiting.positions import open_position_count
from hrmetrics.domains.talent.performance import new_hire_performance
from hrmetrics.domains.talent.segmentation import talent_risk_count
from hrmetrics.domains.workforce.attrition import annual_turnover_rate
from hrmetrics.domains.workforce.headcount import (
    average_engagement,
    average_tenure,
    departments_by_engagement,
    headcount,
)
from hrmetrics.domains.workforce.retention import (
    first_year_retention_rate,
    high_performer_retention_rate,
    overall_retention_rate,
)
from hrmetrics.utils.filters import (
    active_employees,
    attendance_for_employees,
    filter_by_department,
    filter_by_gender,
)
from hrmetrics.utils.periods import DateLike, Period
from hrmetrics.utils.types import DataContext, ToolResult

logger = logging.getLogger(__name__)

type Tool = Callable[..., ToolResult]

TOOL_PERIOD = Period.TWELVE_MONTHS


def get_headcount(
    context: DataContext,
    department: str | None = None,
    gender: str | None = None,
) -> ToolResult:
    employees = filter_by_gender(filter_by_department(context.employees, department), gender)
    return {"count": headcount(employees)}


def get_turnover_rate(context: DataContext, department: str | None = None, as_of: DateLike = None) -> ToolResult:
    employees = filter_by_department(context.employees, department)
    return {"turnover_rate": annual_turnover_rate(employees, TOOL_PERIOD, as_of)}


def get_average_metric(
    context: DataContext,
    metric: str,
    department: str | None = None,
    as_of: DateLike = None,
) -> ToolResult:
    employees = filter_by_department(active_employees(context.employees), department)
    if employees.empty:
        return {"average": 0.0}
    match metric:
        case "tenure":
            return {"average": average_tenure(employees, as_of)}
        case "engagement":
            return {"average": average_engagement(employees)}
        case other:
            logger.warning("Unknown metric %r; reporting 0", other)
            return {"average": 0.0}


def get_new_hire_performance(context: DataContext, months: int, as_of: DateLike = None) -> ToolResult:
    return new_hire_performance(context.employees, int(months), as_of)


def get_departments_by_engagement(context: DataContext, order: str = "lowest", count: int = 3) -> ToolResult:
    return {"departments": departments_by_engagement(context.employees, order, int(count))}


def get_open_position_count(context: DataContext, department: str | None = None) -> ToolResult:
    return {"count": open_position_count(context.positions, department)}


def get_talent_risk_count(
    context: DataContext,
    performance: str | None = None,
    risk: str | None = None,
    as_of: DateLike = None,
) -> ToolResult:
    return {"count": talent_risk_count(context.employees, performance, risk, as_of)}


def get_retention_rate(
    context: DataContext,
    type: str = "overall",
    department: str | None = None,
    as_of: DateLike = None,
) -> ToolResult:
    employees = filter_by_department(context.employees, department)
    match type:
        case "high_performer":
            rate = high_performer_retention_rate(employees, TOOL_PERIOD, as_of)
        case "first_year":
            rate = first_year_retention_rate(employees, as_of)
        case _:
            rate = overall_retention_rate(employees, TOOL_PERIOD, as_of)
    return {"retention_rate": rate}


def get_absence_rate(context: DataContext, type: str = "overall", department: str | None = None) -> ToolResult:
    """Absence rate over the attendance of a department's employees, leavers included.

    Any type other than ``"overall"`` reports the unscheduled rate.
    """
    employees = filter_by_department(context.employees, department)
    attendance = attendance_for_employees(context.attendance, employees)
    if attendance.empty:
        return {"rate": 0.0}
    match type:
        case "overall":
            return {"rate": overall_absence_rate(attendance)}
        case _:
            return {"rate": unscheduled_absence_rate(attendance)}


def get_recruitment_funnel_summary(context: DataContext) -> ToolResult:
    return funnel_totals(context.funnels)


TOOLS: dict[str, Tool] = {
    "get_headcount": get_headcount,
    "get_turnover_rate": get_turnover_rate,
    "get_average_metric": get_average_metric,
    "get_new_hire_performance": get_new_hire_performance,
    "get_departments_by_engagement": get_departments_by_engagement,
    "get_open_position_count": get_open_position_count,
    "get_talent_risk_count": get_talent_risk_count,
    "get_retention_rate": get_retention_rate,
    "get_absence_rate": get_absence_rate,
    "get_recruitment_funnel_summary": get_recruitment_funnel_summary,
}


def call_tool(name: str, context: DataContext, args: Mapping[str, object] | None = None) -> ToolResult:
    """Dispatch a model tool call by name.

    Bad calls from the model come back as ``{"error": ...}`` so the assistant
    can read the failure and retry instead of the conversation crashing.
    """
    tool = TOOLS.get(name)
    if tool is None:
        logger.warning("Model requested unknown tool %s", name)
        return {"error": f"Unknown tool: {name}"}
    kwargs = dict(args or {})
    logger.info("Calling tool %s with %s", name, kwargs)
    try:
        return tool(context, **kwargs)
    except (TypeError, ValueError) as exc:
        logger.warning("Tool %s failed: %s", name, exc)
        return {"error": f"{name}: {exc}"}
