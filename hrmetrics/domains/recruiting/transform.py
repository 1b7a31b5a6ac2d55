"""Normalize requisition and funnel exports from the ATS."""

import logging
from collections.abc import Iterable, Mapping

import pandas as pd

from hrmetrics.utils.transforms import (
    coerce_dates,
    coerce_numeric,
    ensure_columns,
    frame_from_records,
)

logger = logging.getLogger(__name__)

FUNNEL_STAGES = ["shortlisted", "interviewed", "offers_extended", "offers_accepted", "joined"]

POSITION_DEFAULTS = {
    "position_id": None,
    "title": None,
    "department": None,
    "status": None,
    "open_date": pd.NaT,
    "close_date": pd.NaT,
    "on_hold_date": pd.NaT,
    "position_type": None,
    "budget_status": None,
}
FUNNEL_DEFAULTS = {"position_id": None, **{stage: 0 for stage in FUNNEL_STAGES}}


def normalize_position_records(raw_df: pd.DataFrame) -> pd.DataFrame:
    df = frame_from_records(raw_df, {"id": "position_id"})
    df = ensure_columns(df, POSITION_DEFAULTS)
    df = coerce_dates(df, ("open_date", "close_date", "on_hold_date"))
    logger.info("Normalized %d job positions", len(df))
    return df


def normalize_funnel_records(raw_df: pd.DataFrame) -> pd.DataFrame:
    df = frame_from_records(raw_df)
    df = ensure_columns(df, FUNNEL_DEFAULTS)
    df = coerce_numeric(df, FUNNEL_STAGES)
    df[FUNNEL_STAGES] = df[FUNNEL_STAGES].fillna(0)
    logger.info("Normalized %d funnel rows", len(df))
    return df


def build_position_frame(records: Iterable[Mapping] | pd.DataFrame) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        return normalize_position_records(records)
    return normalize_position_records(pd.DataFrame([dict(r) for r in records]))


def build_funnel_frame(records: Iterable[Mapping] | pd.DataFrame) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        return normalize_funnel_records(records)
    return normalize_funnel_records(pd.DataFrame([dict(r) for r in records]))
