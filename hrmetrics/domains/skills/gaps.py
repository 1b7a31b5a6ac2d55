"""Skill-gap analysis against a free-text requirements block.

Requirements are written one per line as ``Skill: count``. Lines that cannot
be parsed are returned to the caller alongside the gaps instead of being
dropped.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field

import pandas as pd

from hrmetrics.domains.skills.matrix import iter_skills
from hrmetrics.utils.filters import active_employees
from hrmetrics.utils.types import SkillLevel, to_members

logger = logging.getLogger(__name__)

QUALIFIED_LEVELS = (SkillLevel.PROFICIENT, SkillLevel.EXPERT)


@dataclass(frozen=True)
class LineParseError:
    line_no: int
    line: str
    reason: str


@dataclass(frozen=True)
class SkillRequirements:
    required: dict[str, int] = field(default_factory=dict)
    errors: list[LineParseError] = field(default_factory=list)


@dataclass(frozen=True)
class SkillGap:
    skill_name: str
    required: int
    current: int

    @property
    def gap(self) -> int:
        """Negative when fewer qualified employees exist than are required."""
        return self.current - self.required


@dataclass(frozen=True)
class SkillGapReport:
    gaps: list[SkillGap] = field(default_factory=list)
    errors: list[LineParseError] = field(default_factory=list)


def _parse_line(line: str) -> tuple[str, int] | str:
    """Return ``(skill, count)`` or a reason string describing the failure."""
    name, sep, raw_count = line.rpartition(":")
    if not sep:
        return "expected 'Skill: count'"
    name = name.strip()
    if not name:
        return "missing skill name"
    try:
        count = int(raw_count.strip())
    except ValueError:
        return f"count {raw_count.strip()!r} is not an integer"
    if count < 0:
        return "count must not be negative"
    return name, count


def parse_skill_requirements(text: str) -> SkillRequirements:
    """Parse ``Skill: count`` lines; a repeated skill keeps its last count."""
    required: dict[str, int] = {}
    errors: list[LineParseError] = []
    for line_no, line in enumerate((text or "").splitlines(), start=1):
        if not line.strip():
            continue
        match _parse_line(line):
            case (name, count):
                required[name] = count
            case reason:
                errors.append(LineParseError(line_no=line_no, line=line, reason=reason))

    if errors:
        logger.warning("Skipped %d malformed skill requirement lines", len(errors))
    return SkillRequirements(required=required, errors=errors)


def qualified_skill_counts(employees: pd.DataFrame) -> Counter:
    """Active employees holding each skill at Proficient or Expert."""
    counts: Counter = Counter()
    for member in to_members(active_employees(employees)):
        counts.update(name for name, level in iter_skills(member) if level in QUALIFIED_LEVELS)
    return counts


def analyze_skill_gaps(employees: pd.DataFrame, requirements_text: str) -> SkillGapReport:
    """Compare required headcount per skill with the qualified active workforce.

    Covers every skill that is either required or held; gaps are sorted with
    the largest shortfall first, ties broken by skill name.
    """
    requirements = parse_skill_requirements(requirements_text)
    current = qualified_skill_counts(employees)

    names = set(requirements.required) | set(current)
    gaps = [
        SkillGap(skill_name=name, required=requirements.required.get(name, 0), current=current.get(name, 0))
        for name in names
    ]
    gaps.sort(key=lambda g: (g.gap, g.skill_name))

    logger.info(
        "Skill gaps: %d skills compared, %d short",
        len(gaps), sum(1 for g in gaps if g.gap < 0),
    )
    return SkillGapReport(gaps=gaps, errors=requirements.errors)
