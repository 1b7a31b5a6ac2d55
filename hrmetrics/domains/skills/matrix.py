"""Skill inventory: the skill x proficiency matrix and the views built on it."""

import logging
from collections import Counter
from collections.abc import Iterator, Sequence

import pandas as pd

from hrmetrics.config import DEFAULT_SCARCITY_BANDS, ScarcityBand
from hrmetrics.domains.talent.scoring import employee_flight_risk
from hrmetrics.domains.talent.tiers import RiskTier
from hrmetrics.utils.filters import active_employees, high_performers
from hrmetrics.utils.periods import DateLike
from hrmetrics.utils.types import SKILL_LEVEL_SCORES, EmployeeRecord, MemberList, SkillLevel, to_members

logger = logging.getLogger(__name__)

type SkillMatrix = dict[str, dict[str, MemberList]]

LEVELS = [str(level) for level in SkillLevel]
TOTAL = "total"
FALLBACK_COLOR = "#6b7280"


def iter_skills(member: EmployeeRecord) -> Iterator[tuple[str, str]]:
    """Yield ``(name, level)`` once per skill name; the first listing wins."""
    seen = set()
    for skill in member.get("skills") or []:
        name = skill.get("name")
        if not name or name in seen:
            continue
        seen.add(name)
        yield name, skill.get("level")


def skill_matrix(employees: pd.DataFrame) -> SkillMatrix:
    """Active employees grouped by skill, then by proficiency level.

    ``total`` holds every listed holder, so per-level bucket sizes always add
    up to it. Skills with an unrecognized level are left out.
    """
    matrix: SkillMatrix = {}
    for member in to_members(active_employees(employees)):
        for name, level in iter_skills(member):
            if level not in LEVELS:
                logger.debug("Skipping %s for %s: unknown level %r", name, member.get("employee_id"), level)
                continue
            buckets = matrix.setdefault(name, {**{lvl: [] for lvl in LEVELS}, TOTAL: []})
            buckets[level].append(member)
            buckets[TOTAL].append(member)
    return matrix


def at_risk_skills(
    employees: pd.DataFrame,
    threshold: int = 3,
    as_of: DateLike = None,
) -> list[dict[str, object]]:
    """Skills held by at most ``threshold`` active employees, scarcest first."""
    rows = []
    for name, buckets in skill_matrix(employees).items():
        holders = buckets[TOTAL]
        if len(holders) > threshold:
            continue
        rows.append({
            "skill_name": name,
            "employees": holders,
            "high_risk_employee_count": sum(
                1 for h in holders if employee_flight_risk(h, as_of).risk == RiskTier.HIGH
            ),
        })

    logger.info("Found %d at-risk skills at threshold %d", len(rows), threshold)
    return sorted(rows, key=lambda r: len(r["employees"]))


def skill_set_kpis(employees: pd.DataFrame, matrix: SkillMatrix | None = None) -> dict[str, object]:
    if matrix is None:
        matrix = skill_matrix(employees)
    if not matrix:
        return {
            "unique_skill_count": 0,
            "most_common_skill": "N/A",
            "top_expert_skill": "N/A",
            "most_skilled_department": "N/A",
        }

    most_common = max(matrix, key=lambda name: len(matrix[name][TOTAL]))
    top_expert = max(matrix, key=lambda name: len(matrix[name][str(SkillLevel.EXPERT)]))

    dept_skills: Counter = Counter()
    for member in to_members(active_employees(employees)):
        dept_skills[member.get("department")] += sum(1 for _ in iter_skills(member))
    most_skilled = dept_skills.most_common(1)[0][0] if dept_skills else "N/A"

    return {
        "unique_skill_count": len(matrix),
        "most_common_skill": most_common,
        "top_expert_skill": top_expert,
        "most_skilled_department": most_skilled,
    }


def skill_proficiency_metrics(employees: pd.DataFrame) -> list[dict[str, object]]:
    """Mean proficiency score (Novice=1 .. Expert=5) per skill, highest first."""
    rows = []
    for name, buckets in skill_matrix(employees).items():
        total = len(buckets[TOTAL])
        score = sum(SKILL_LEVEL_SCORES[SkillLevel(lvl)] * len(buckets[lvl]) for lvl in LEVELS)
        rows.append({"skill_name": name, "avg_proficiency": score / total if total else 0.0})
    return sorted(rows, key=lambda r: r["avg_proficiency"], reverse=True)


def _count_skills(members: MemberList) -> Counter:
    counts: Counter = Counter()
    for member in members:
        counts.update(name for name, _ in iter_skills(member))
    return counts


def high_performer_skills(employees: pd.DataFrame) -> list[dict[str, object]]:
    """Skills of active high performers, with overall holder counts for scarcity."""
    active = active_employees(employees)
    if active.empty:
        return []
    hp_counts = _count_skills(to_members(high_performers(active)))
    totals = _count_skills(to_members(active))
    rows = [
        {"skill_name": name, "high_performer_count": count, "total_count": totals.get(name, 0)}
        for name, count in hp_counts.items()
    ]
    return sorted(rows, key=lambda r: r["high_performer_count"], reverse=True)


def _top_skills_and_departments(
    members: MemberList,
    skill_limit: int,
    department_limit: int,
) -> tuple[list[str], list[str], Counter, Counter]:
    """Most held skills and largest departments; ties keep first-seen order."""
    skill_counts = _count_skills(members)
    dept_counts = Counter(str(m.get("department")) for m in members)
    skills = [name for name, _ in skill_counts.most_common(skill_limit)]
    departments = [name for name, _ in dept_counts.most_common(department_limit)]
    return skills, departments, skill_counts, dept_counts


def skill_comparison_by_department(
    employees: pd.DataFrame,
    skill_limit: int = 8,
    department_limit: int = 4,
) -> dict[str, list]:
    """Average proficiency (Novice=1 .. Expert=5) of the most held skills in the largest departments.

    A department with no holder of a skill scores 0 for it.
    """
    members = to_members(active_employees(employees))
    if not members:
        return {"skills": [], "datasets": []}
    skills, departments, _, _ = _top_skills_and_departments(members, skill_limit, department_limit)

    scores = {dept: {skill: [] for skill in skills} for dept in departments}
    for member in members:
        cells = scores.get(str(member.get("department")))
        if cells is None:
            continue
        for name, level in iter_skills(member):
            if name in cells and level in LEVELS:
                cells[name].append(SKILL_LEVEL_SCORES[SkillLevel(level)])

    datasets = [
        {
            "department": dept,
            "data": [sum(values) / len(values) if values else 0.0 for values in scores[dept].values()],
        }
        for dept in departments
    ]
    return {"skills": skills, "datasets": datasets}


def skill_density_by_department(
    employees: pd.DataFrame,
    skill_limit: int = 10,
    department_limit: int = 5,
) -> dict[str, object]:
    """Share of each large department's active headcount holding each top skill, as a percentage."""
    members = to_members(active_employees(employees))
    if not members:
        return {"skills": [], "departments": [], "datasets": [], "skill_total_counts": {}}
    skills, departments, skill_counts, dept_counts = _top_skills_and_departments(
        members, skill_limit, department_limit,
    )

    holders = {dept: Counter() for dept in departments}
    for member in members:
        dept = str(member.get("department"))
        if dept in holders:
            holders[dept].update(name for name, _ in iter_skills(member) if name in skills)

    datasets = [
        {
            "department": dept,
            "data": [holders[dept][skill] / dept_counts[dept] * 100 for skill in skills],
        }
        for dept in departments
    ]
    logger.info("Skill density over %d skills and %d departments", len(skills), len(departments))
    return {
        "skills": skills,
        "departments": departments,
        "datasets": datasets,
        "skill_total_counts": dict(skill_counts),
    }


def skill_impact_on_performance(employees: pd.DataFrame, skill: str) -> list[dict[str, object]]:
    """Average rating of active holders of ``skill`` at each level they hold it."""
    if not skill:
        return []
    buckets = skill_matrix(employees).get(skill)
    if buckets is None:
        return []

    rows = []
    for level in LEVELS:
        if not buckets[level]:
            continue
        ratings = [m.get("performance_rating") for m in buckets[level]]
        ratings = [r for r in ratings if r is not None and not pd.isna(r)]
        rows.append({
            "level": level,
            "avg_performance": sum(ratings) / len(ratings) if ratings else 0.0,
            "count": len(buckets[level]),
        })
    return rows


def skill_scarcity_color(count: int, bands: Sequence[ScarcityBand] = DEFAULT_SCARCITY_BANDS) -> str:
    """Colour of the first band whose threshold ``count`` does not exceed."""
    ordered = sorted(bands, key=lambda b: b.threshold)
    if not ordered:
        return FALLBACK_COLOR
    for band in ordered:
        if count <= band.threshold:
            return band.color
    return ordered[-1].color


def scarcity_legend(bands: Sequence[ScarcityBand] = DEFAULT_SCARCITY_BANDS) -> list[dict[str, str]]:
    ordered = sorted(bands, key=lambda b: b.threshold)
    legend = []
    previous = 0
    for i, band in enumerate(ordered):
        if i == 0:
            label = f"<= {band.threshold:g}"
        elif i == len(ordered) - 1:
            label = f"> {previous:g}"
        else:
            label = f"{previous + 1:g} - {band.threshold:g}"
        previous = band.threshold
        legend.append({"label": f"{label} Employees", "color": band.color})
    return legend


def skill_matrix_heat(
    employees: pd.DataFrame,
    bands: Sequence[ScarcityBand] = DEFAULT_SCARCITY_BANDS,
) -> list[dict[str, object]]:
    """Per-skill level counts coloured by scarcity of total holders, most held first."""
    rows = [
        {
            "skill_name": name,
            "levels": {lvl: len(buckets[lvl]) for lvl in LEVELS},
            "total": len(buckets[TOTAL]),
            "color": skill_scarcity_color(len(buckets[TOTAL]), bands),
        }
        for name, buckets in skill_matrix(employees).items()
    ]
    return sorted(rows, key=lambda r: (-r["total"], r["skill_name"]))
