"""Tests for the skill matrix, scarcity colouring and skill-gap analysis."""

import pytest

from hrmetrics.config import DEFAULT_SCARCITY_BANDS, EngineConfig, OutputConfig, ScarcityBand
from hrmetrics.domains import skills as skills_domain
from hrmetrics.domains.skills.gaps import (
    LineParseError,
    analyze_skill_gaps,
    parse_skill_requirements,
    qualified_skill_counts,
)
from hrmetrics.domains.skills.matrix import (
    FALLBACK_COLOR,
    LEVELS,
    TOTAL,
    at_risk_skills,
    high_performer_skills,
    scarcity_legend,
    skill_comparison_by_department,
    skill_density_by_department,
    skill_impact_on_performance,
    skill_matrix,
    skill_matrix_heat,
    skill_proficiency_metrics,
    skill_scarcity_color,
    skill_set_kpis,
)
from hrmetrics.domains.workforce.transform import build_employee_frame
from hrmetrics.utils.types import DataContext

from conftest import AS_OF, skills

REQUIREMENTS = "Python: 4\nKubernetes: 2\n\nbad line\nGo: x"


def holder_ids(members) -> list[str]:
    return sorted(m["employee_id"] for m in members)


class TestSkillMatrix:
    def test_counts_active_holders(self, employees):
        matrix = skill_matrix(employees)
        assert set(matrix) == {"Leadership", "Python", "Kubernetes", "SQL", "Negotiation"}
        assert holder_ids(matrix["Python"][TOTAL]) == ["E2", "E3", "E4"]
        assert holder_ids(matrix["Python"]["Expert"]) == ["E2"]
        # E6 held Kubernetes too, but has left
        assert holder_ids(matrix["Kubernetes"][TOTAL]) == ["E2"]

    def test_levels_add_up_to_total(self, employees):
        for buckets in skill_matrix(employees).values():
            assert sum(len(buckets[level]) for level in LEVELS) == len(buckets[TOTAL])

    def test_duplicate_listing_counts_once(self):
        frame = build_employee_frame([
            {"employee_id": "A", "skills": [{"name": "Go", "level": "Expert"}, {"name": "Go", "level": "Novice"}]},
        ])
        buckets = skill_matrix(frame)["Go"]
        assert len(buckets[TOTAL]) == 1
        assert len(buckets["Expert"]) == 1
        assert buckets["Novice"] == []

    def test_unknown_level_is_left_out(self):
        frame = build_employee_frame([
            {"employee_id": "A", "skills": skills(Go="Guru", Rust="Beginner")},
        ])
        assert set(skill_matrix(frame)) == {"Rust"}

    def test_empty(self, empty_employees):
        assert skill_matrix(empty_employees) == {}


class TestAtRiskSkills:
    def test_scarcest_first(self, employees):
        rows = at_risk_skills(employees, 3, AS_OF)
        assert len(rows) == 5
        assert rows[-1]["skill_name"] == "Python"
        assert [len(r["employees"]) for r in rows] == [1, 1, 1, 1, 3]

    def test_high_risk_holders(self, employees):
        rows = {r["skill_name"]: r for r in at_risk_skills(employees, 3, AS_OF)}
        assert rows["Python"]["high_risk_employee_count"] == 1
        assert rows["Kubernetes"]["high_risk_employee_count"] == 0
        assert len(rows["Kubernetes"]["employees"]) == 1

    def test_threshold_is_inclusive(self, employees):
        names = [r["skill_name"] for r in at_risk_skills(employees, 2, AS_OF)]
        assert "Python" not in names
        assert len(names) == 4


class TestSkillViews:
    def test_kpis(self, employees):
        kpis = skill_set_kpis(employees)
        assert kpis["unique_skill_count"] == 5
        assert kpis["most_common_skill"] == "Python"
        assert kpis["most_skilled_department"] == "Engineering"

    def test_kpis_empty(self, empty_employees):
        assert skill_set_kpis(empty_employees)["most_common_skill"] == "N/A"

    def test_proficiency(self, employees):
        metrics = {r["skill_name"]: r["avg_proficiency"] for r in skill_proficiency_metrics(employees)}
        assert metrics["Python"] == pytest.approx(4.0)
        assert metrics["SQL"] == pytest.approx(3.0)
        assert metrics["Leadership"] == pytest.approx(5.0)

    def test_high_performer_skills(self, employees):
        rows = {r["skill_name"]: r for r in high_performer_skills(employees)}
        assert set(rows) == {"Leadership", "Python", "Kubernetes", "Negotiation"}
        assert rows["Python"] == {"skill_name": "Python", "high_performer_count": 1, "total_count": 3}

    def test_impact_on_performance(self, employees):
        rows = skill_impact_on_performance(employees, "Python")
        assert [(r["level"], r["avg_performance"], r["count"]) for r in rows] == [
            ("Competent", 2.0, 1),
            ("Proficient", 3.0, 1),
            ("Expert", 4.0, 1),
        ]

    def test_impact_for_unknown_skill(self, employees):
        assert skill_impact_on_performance(employees, "Cobol") == []
        assert skill_impact_on_performance(employees, "") == []


class TestDepartmentViews:
    def test_comparison_averages_proficiency(self, employees):
        result = skill_comparison_by_department(employees)
        assert result["skills"] == ["Python", "Leadership", "Kubernetes", "SQL", "Negotiation"]
        by_dept = {d["department"]: d["data"] for d in result["datasets"]}
        assert list(by_dept) == ["Engineering", "Executive", "Sales"]
        assert by_dept["Engineering"] == pytest.approx([4.0, 0.0, 4.0, 3.0, 0.0])
        assert by_dept["Executive"] == pytest.approx([0.0, 5.0, 0.0, 0.0, 0.0])

    def test_comparison_limits(self, employees):
        result = skill_comparison_by_department(employees, skill_limit=2, department_limit=1)
        assert result["skills"] == ["Python", "Leadership"]
        assert [d["department"] for d in result["datasets"]] == ["Engineering"]
        assert result["datasets"][0]["data"] == pytest.approx([4.0, 0.0])

    def test_density_is_share_of_department_headcount(self, employees):
        result = skill_density_by_department(employees)
        assert result["departments"] == ["Engineering", "Executive", "Sales"]
        engineering = result["datasets"][0]
        assert engineering["department"] == "Engineering"
        assert engineering["data"] == pytest.approx([100.0, 0.0, 100 / 3, 100 / 3, 0.0])
        assert result["datasets"][2]["data"][-1] == pytest.approx(100.0)
        assert result["skill_total_counts"]["Python"] == 3

    def test_mixed_department_codes(self):
        frame = build_employee_frame([
            {"employee_id": "A", "department": 10, "skills": skills(Python="Expert")},
            {"employee_id": "B", "department": "Ops", "skills": skills(Python="Novice")},
            {"employee_id": "C", "department": 10, "skills": skills(SQL="Expert")},
        ])
        result = skill_density_by_department(frame)
        assert result["departments"] == ["10", "Ops"]
        assert result["datasets"][0]["data"] == pytest.approx([50.0, 50.0])

    def test_empty(self, empty_employees):
        assert skill_comparison_by_department(empty_employees) == {"skills": [], "datasets": []}
        assert skill_density_by_department(empty_employees)["skill_total_counts"] == {}


class TestScarcity:
    @pytest.mark.parametrize(
        ("count", "color"),
        [(0, "#ef4444"), (5, "#ef4444"), (6, "#f97316"), (65, "#84cc16"), (1000, "#16a34a")],
    )
    def test_default_bands(self, count, color):
        assert skill_scarcity_color(count) == color

    def test_no_bands_uses_fallback(self):
        assert skill_scarcity_color(3, []) == FALLBACK_COLOR

    def test_above_every_band_uses_last(self):
        bands = [ScarcityBand(threshold=4, color="b"), ScarcityBand(threshold=2, color="a")]
        assert skill_scarcity_color(1, bands) == "a"
        assert skill_scarcity_color(10, bands) == "b"

    def test_legend(self):
        assert [entry["label"] for entry in scarcity_legend(DEFAULT_SCARCITY_BANDS)] == [
            "<= 5 Employees",
            "6 - 35 Employees",
            "36 - 65 Employees",
            "> 65 Employees",
        ]

    def test_heat_rows(self, employees):
        rows = skill_matrix_heat(employees)
        assert [r["skill_name"] for r in rows] == ["Python", "Kubernetes", "Leadership", "Negotiation", "SQL"]
        assert rows[0]["levels"] == {"Novice": 0, "Beginner": 0, "Competent": 1, "Proficient": 1, "Expert": 1}
        assert rows[0]["color"] == "#ef4444"


class TestSkillGaps:
    def test_parse_requirements(self):
        parsed = parse_skill_requirements(REQUIREMENTS)
        assert parsed.required == {"Python": 4, "Kubernetes": 2}
        assert [(e.line_no, e.line) for e in parsed.errors] == [(4, "bad line"), (5, "Go: x")]
        assert "not an integer" in parsed.errors[1].reason

    def test_repeated_skill_keeps_last_count(self):
        assert parse_skill_requirements("Go: 1\nGo: 3").required == {"Go": 3}

    def test_negative_and_nameless_lines_are_errors(self):
        parsed = parse_skill_requirements("Go: -1\n: 2")
        assert parsed.required == {}
        assert [e.reason for e in parsed.errors] == ["count must not be negative", "missing skill name"]

    def test_name_may_contain_colon(self):
        assert parse_skill_requirements("C++: STL: 2").required == {"C++: STL": 2}

    def test_empty_text(self):
        parsed = parse_skill_requirements("")
        assert parsed.required == {}
        assert parsed.errors == []

    def test_qualified_counts(self, employees):
        assert qualified_skill_counts(employees) == {
            "Leadership": 1, "Python": 2, "Kubernetes": 1, "Negotiation": 1,
        }

    def test_gaps_sorted_by_shortfall(self, employees):
        report = analyze_skill_gaps(employees, REQUIREMENTS)
        assert [(g.skill_name, g.gap) for g in report.gaps] == [
            ("Python", -2),
            ("Kubernetes", -1),
            ("Leadership", 1),
            ("Negotiation", 1),
        ]
        assert report.errors[0] == LineParseError(line_no=4, line="bad line", reason="expected 'Skill: count'")

    def test_required_but_unheld_skill(self, employees):
        (gap,) = [g for g in analyze_skill_gaps(employees, "Rust: 2").gaps if g.skill_name == "Rust"]
        assert (gap.required, gap.current, gap.gap) == (2, 0, -2)


class TestSkillsDomain:
    def test_validate(self, context, empty_employees):
        assert skills_domain.validate(context)["status"] == "ok"
        assert skills_domain.validate(DataContext(employees=empty_employees))["status"] == "skipped"

    def test_validate_without_skills(self):
        frame = build_employee_frame([{"employee_id": "A"}])
        assert skills_domain.validate(DataContext(employees=frame))["status"] == "error"

    def test_run_uses_config_threshold(self, context):
        config = EngineConfig(
            output=OutputConfig(directory="out", format="json"),
            log_level="INFO",
            at_risk_threshold=1,
        )
        result = skills_domain.run(context, config, AS_OF)
        assert [row["holders"] for row in result["at_risk"]] == [1, 1, 1, 1]
        assert result["kpis"]["unique_skill_count"] == 5
        assert result["comparison_by_department"]["skills"][0] == "Python"
        assert result["density_by_department"]["departments"][0] == "Engineering"
