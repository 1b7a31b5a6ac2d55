"""Shared type definitions for the metrics engine."""

from dataclasses import dataclass, field
from enum import StrEnum

import pandas as pd


type SeriesPoint = dict[str, str | float | int]
type LabeledSeries = list[SeriesPoint]
type EmployeeRecord = dict[str, object]
type MemberList = list[EmployeeRecord]
type RecordID = str | int
type MetricValue = int | float
type ToolResult = dict[str, object]


class EmploymentStatus(StrEnum):
    ACTIVE = "active"
    TERMINATED = "terminated"


class TerminationReason(StrEnum):
    VOLUNTARY = "Voluntary"
    INVOLUNTARY = "Involuntary"


class AttendanceStatus(StrEnum):
    PRESENT = "Present"
    UNSCHEDULED_ABSENCE = "Unscheduled Absence"
    PTO = "PTO"
    SICK_LEAVE = "Sick Leave"


class PositionStatus(StrEnum):
    OPEN = "Open"
    CLOSED = "Closed"
    ON_HOLD = "On Hold"


class SkillLevel(StrEnum):
    NOVICE = "Novice"
    BEGINNER = "Beginner"
    COMPETENT = "Competent"
    PROFICIENT = "Proficient"
    EXPERT = "Expert"


class SuccessionStatus(StrEnum):
    READY_NOW = "Ready Now"
    READY_1_2_YEARS = "Ready in 1-2 Years"
    FUTURE_POTENTIAL = "Future Potential"
    NOT_ASSESSED = "Not Assessed"


GENDERS = ("Male", "Female", "Other")

SKILL_LEVEL_SCORES: dict[SkillLevel, int] = {
    SkillLevel.NOVICE: 1,
    SkillLevel.BEGINNER: 2,
    SkillLevel.COMPETENT: 3,
    SkillLevel.PROFICIENT: 4,
    SkillLevel.EXPERT: 5,
}


def _empty_frame() -> pd.DataFrame:
    return pd.DataFrame()


@dataclass(frozen=True)
class DataContext:
    """The four entity collections handed to the engine by its callers."""

    employees: pd.DataFrame = field(default_factory=_empty_frame)
    attendance: pd.DataFrame = field(default_factory=_empty_frame)
    positions: pd.DataFrame = field(default_factory=_empty_frame)
    funnels: pd.DataFrame = field(default_factory=_empty_frame)


def to_members(df: pd.DataFrame) -> MemberList:
    """Convert a frame of employees into a plain list of records."""
    if df.empty:
        return []
    return df.to_dict(orient="records")
