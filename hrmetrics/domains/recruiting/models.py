"""Pandera schemas for requisitions and recruitment funnels."""

import pandera as pa
from pandera import Column, Check

position_schema = pa.DataFrameSchema(
    {
        "position_id": Column(str, nullable=False, unique=True),
        "title": Column(str),
        "department": Column(str),
        "status": Column(str, Check.isin(["Open", "Closed", "On Hold"])),
        "open_date": Column(pa.DateTime, nullable=False),
        "close_date": Column(pa.DateTime, nullable=True),
        "on_hold_date": Column(pa.DateTime, nullable=True),
        "position_type": Column(str, Check.isin(["Replacement", "New"]), nullable=True),
        "budget_status": Column(str, Check.isin(["Budgeted", "Non-Budgeted"]), nullable=True),
    },
    strict=False,
    coerce=True,
)


# Stage ordering (shortlisted >= interviewed >= ...) is deliberately not
# checked here; out-of-order rows flow through as negative deltas.
funnel_schema = pa.DataFrameSchema(
    {
        "position_id": Column(str),
        "shortlisted": Column(int, Check.greater_than_or_equal_to(0)),
        "interviewed": Column(int, Check.greater_than_or_equal_to(0)),
        "offers_extended": Column(int, Check.greater_than_or_equal_to(0)),
        "offers_accepted": Column(int, Check.greater_than_or_equal_to(0)),
        "joined": Column(int, Check.greater_than_or_equal_to(0)),
    },
    strict=False,
    coerce=True,
)
