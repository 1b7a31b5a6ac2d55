"""Normalize raw employee records into the frame shape calculators expect."""

import logging
from collections.abc import Iterable, Mapping

import numpy as np
import pandas as pd

from hrmetrics.domains.workforce.models import SKILL_LEVELS
from hrmetrics.utils.transforms import (
    coerce_dates,
    coerce_numeric,
    ensure_columns,
    frame_from_records,
)

logger = logging.getLogger(__name__)

COLUMN_ALIASES = {"id": "employee_id"}

EMPLOYEE_DEFAULTS = {
    "employee_id": None,
    "name": None,
    "department": None,
    "job_title": "",
    "location": None,
    "gender": None,
    "hire_date": pd.NaT,
    "termination_date": pd.NaT,
    "termination_reason": None,
    "salary": np.nan,
    "bonus": np.nan,
    "last_raise_amount": np.nan,
    "performance_rating": np.nan,
    "potential_rating": np.nan,
    "engagement_score": np.nan,
    "compensation_satisfaction": np.nan,
    "benefits_satisfaction": np.nan,
    "management_satisfaction": np.nan,
    "training_satisfaction": np.nan,
    "manager_id": None,
    "succession_status": "Not Assessed",
    "weekly_hours": np.nan,
    "has_grievance": False,
    "training_completed": np.nan,
    "training_total": np.nan,
    "snapshot_date": pd.NaT,
    "skills": None,
}

DATE_COLUMNS = ("hire_date", "termination_date", "snapshot_date")
NUMERIC_COLUMNS = (
    "salary", "bonus", "last_raise_amount",
    "performance_rating", "potential_rating", "engagement_score",
    "compensation_satisfaction", "benefits_satisfaction",
    "management_satisfaction", "training_satisfaction",
    "weekly_hours", "training_completed", "training_total",
)


def _parse_skill_token(token: str) -> dict[str, str] | None:
    """Parse ``"Python:Expert"`` as exported in flat CSV files."""
    name, sep, level = token.partition(":")
    if not sep or not name.strip():
        return None
    return {"name": name.strip(), "level": level.strip()}


def _coerce_skills(raw) -> list[dict[str, str]]:
    """Accept a list of skill dicts or a ``"Name:Level|Name:Level"`` string."""
    match raw:
        case list() | tuple():
            skills = [
                {"name": str(s["name"]).strip(), "level": str(s["level"]).strip()}
                for s in raw
                if isinstance(s, Mapping) and s.get("name") and s.get("level")
            ]
        case str() if raw.strip():
            skills = [s for s in map(_parse_skill_token, raw.split("|")) if s]
        case _:
            skills = []

    for skill in skills:
        if skill["level"] not in SKILL_LEVELS:
            logger.warning("Unknown skill level %r for skill %r", skill["level"], skill["name"])
    return skills


def _normalize_id(value) -> str | None:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def normalize_employee_records(raw_df: pd.DataFrame) -> pd.DataFrame:
    """Apply column, date, numeric and skill normalization to employee data."""
    df = frame_from_records(raw_df, COLUMN_ALIASES)
    df = ensure_columns(df, EMPLOYEE_DEFAULTS)

    df = coerce_dates(df, DATE_COLUMNS)
    df = coerce_numeric(df, NUMERIC_COLUMNS)

    df["employee_id"] = df["employee_id"].map(_normalize_id).astype(object)
    df["manager_id"] = df["manager_id"].map(_normalize_id).astype(object)
    df["job_title"] = df["job_title"].fillna("").astype(str)
    df["succession_status"] = df["succession_status"].fillna("Not Assessed")
    df["skills"] = df["skills"].map(_coerce_skills).astype(object)

    # Derive active status
    df["is_active"] = df["termination_date"].isna()

    logger.info("Normalized %d employee records", len(df))
    return df


def build_employee_frame(records: Iterable[Mapping] | pd.DataFrame) -> pd.DataFrame:
    """Build a normalized employee frame from records or a raw DataFrame."""
    if isinstance(records, pd.DataFrame):
        return normalize_employee_records(records)
    return normalize_employee_records(pd.DataFrame([dict(r) for r in records]))
