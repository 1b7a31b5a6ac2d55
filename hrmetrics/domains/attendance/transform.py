"""Normalize raw attendance exports."""

import logging
from collections.abc import Iterable, Mapping

import pandas as pd

from hrmetrics.utils.transforms import coerce_dates, ensure_columns, frame_from_records

logger = logging.getLogger(__name__)

ATTENDANCE_DEFAULTS = {"employee_id": None, "date": pd.NaT, "status": None}


def _classify_status(raw) -> str | None:
    """Map raw attendance status strings to canonical values."""
    if not isinstance(raw, str):
        return None
    match raw.strip().lower().replace("_", " ").replace("-", " "):
        case "present" | "p" | "worked":
            return "Present"
        case "unscheduled absence" | "unscheduled" | "absent" | "no show":
            return "Unscheduled Absence"
        case "pto" | "vacation" | "annual leave":
            return "PTO"
        case "sick leave" | "sick":
            return "Sick Leave"
        case _:
            logger.warning("Unknown attendance status: %r", raw)
            return raw.strip()


def normalize_attendance_records(raw_df: pd.DataFrame) -> pd.DataFrame:
    df = frame_from_records(raw_df)
    df = ensure_columns(df, ATTENDANCE_DEFAULTS)
    df = coerce_dates(df, ("date",))
    df["employee_id"] = df["employee_id"].map(
        lambda v: None if pd.isna(v) else str(v).strip()
    ).astype(object)
    df["status"] = df["status"].map(_classify_status).astype(object)
    logger.info("Normalized %d attendance records", len(df))
    return df


def build_attendance_frame(records: Iterable[Mapping] | pd.DataFrame) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        return normalize_attendance_records(records)
    return normalize_attendance_records(pd.DataFrame([dict(r) for r in records]))
