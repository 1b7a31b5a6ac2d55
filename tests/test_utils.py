"""Tests for filters, transforms and validators."""

import pandas as pd
import pytest

from hrmetrics.domains.attendance.models import attendance_schema
from hrmetrics.domains.workforce.transform import build_employee_frame
from hrmetrics.utils.filters import (
    active_employees,
    attendance_for_employees,
    filter_attendance_by_status,
    filter_by_department,
    filter_by_gender,
    filter_by_location,
    filter_by_status,
    filter_positions_by_department,
    filter_positions_by_status,
    headcount_at_end,
    headcount_at_start,
    hired_since,
    leavers_in_window,
    terminated_employees,
)
from hrmetrics.utils.periods import resolve_window
from hrmetrics.utils.transforms import counts_to_series, normalize_columns, safe_ratio
from hrmetrics.utils.validators import (
    merge_results,
    validate_dataframe,
    validate_referential_integrity,
    validate_unique,
)

from conftest import AS_OF


def ids(df: pd.DataFrame) -> list[str]:
    return sorted(df["employee_id"].tolist())


class TestEmployeeFilters:
    def test_active_and_terminated_partition(self, employees):
        assert ids(active_employees(employees)) == ["E1", "E2", "E3", "E4", "E5"]
        assert ids(terminated_employees(employees)) == ["E6", "E7"]

    def test_filter_by_status(self, employees):
        assert ids(filter_by_status(employees, "terminated")) == ["E6", "E7"]

    def test_department_is_case_insensitive(self, employees):
        assert ids(filter_by_department(employees, "ENGINEERING")) == ["E2", "E3", "E4", "E6"]

    def test_missing_department_keeps_everyone(self, employees):
        assert len(filter_by_department(employees, None)) == len(employees)

    def test_gender(self, employees):
        assert ids(filter_by_gender(employees, "Other")) == ["E5"]

    def test_location(self, employees):
        assert ids(filter_by_location(employees, "london")) == ["E3", "E4", "E6"]

    def test_filters_do_not_mutate(self, employees):
        before = employees.copy()
        filter_by_department(active_employees(employees), "sales")
        pd.testing.assert_frame_equal(employees, before)


class TestWindowFilters:
    def test_same_window_for_leavers_and_headcounts(self, employees):
        window = resolve_window("12m", AS_OF)
        assert ids(leavers_in_window(employees, window)) == ["E6", "E7"]
        assert ids(headcount_at_start(employees, window)) == ["E1", "E2", "E4", "E5", "E6", "E7"]
        assert ids(headcount_at_end(employees, window)) == ["E1", "E2", "E3", "E4", "E5"]

    def test_hired_since(self, employees):
        assert ids(hired_since(employees, pd.Timestamp("2025-01-01"))) == ["E3"]


class TestAttendanceAndPositionFilters:
    def test_attendance_for_employees(self, attendance, employees):
        engineering = filter_by_department(employees, "Engineering")
        assert set(attendance_for_employees(attendance, engineering)["employee_id"]) == {"E3", "E4"}

    def test_attendance_for_no_employees_is_empty(self, attendance, empty_employees):
        assert attendance_for_employees(attendance, empty_employees).empty

    def test_attendance_by_status(self, attendance):
        assert len(filter_attendance_by_status(attendance, "Sick Leave", "PTO")) == 3

    def test_positions(self, positions):
        open_positions = filter_positions_by_status(positions, "Open")
        assert len(open_positions) == 3
        assert len(filter_positions_by_department(open_positions, "sales")) == 1


class TestTransforms:
    def test_normalize_columns_handles_camel_and_spaces(self):
        df = pd.DataFrame(columns=["hireDate", "Job Title", "employee-id"])
        assert normalize_columns(df).columns.tolist() == ["hire_date", "job_title", "employee_id"]

    def test_safe_ratio_zero_denominator(self):
        assert safe_ratio(5, 0) == 0.0
        assert safe_ratio(1, 4) == 25.0

    def test_counts_to_series_sorted_descending(self):
        counts = pd.Series({"a": 1, "b": 3})
        assert counts_to_series(counts) == [{"name": "b", "value": 3}, {"name": "a", "value": 1}]

    def test_build_employee_frame_from_camel_case(self):
        frame = build_employee_frame([
            {"id": 101, "hireDate": "2024-01-02", "performanceRating": "4",
             "managerId": 100.0, "skills": "Python:Expert|SQL:Novice"},
        ])
        row = frame.iloc[0]
        assert row["employee_id"] == "101"
        assert row["manager_id"] == "100"
        assert row["hire_date"] == pd.Timestamp("2024-01-02")
        assert row["performance_rating"] == 4
        assert row["skills"] == [{"name": "Python", "level": "Expert"}, {"name": "SQL", "level": "Novice"}]
        assert bool(row["is_active"]) is True
        assert row["succession_status"] == "Not Assessed"


class TestValidators:
    def test_clean_attendance_passes(self, attendance):
        assert validate_dataframe(attendance, attendance_schema)["valid"] is True

    def test_unknown_status_fails(self, attendance):
        bad = attendance.copy()
        bad.loc[0, "status"] = "Holiday"
        result = validate_dataframe(bad, attendance_schema)
        assert result["status"] == "error"
        assert result["errors"]

    def test_unique(self, employees):
        assert validate_unique(employees, ["employee_id"])["valid"] is True
        doubled = pd.concat([employees, employees.head(1)])
        result = validate_unique(doubled, ["employee_id"])
        assert result["valid"] is False
        assert "2 duplicate rows" in result["errors"][0]

    def test_referential_integrity_reports_orphans(self, attendance, employees):
        orphaned = pd.concat([attendance, pd.DataFrame([{"employee_id": "Z9", "status": "Present"}])])
        result = validate_referential_integrity(orphaned, employees, "employee_id", "employee_id")
        assert result["valid"] is False
        assert "Z9" in result["errors"][0]

    def test_merge_results(self):
        ok = {"valid": True, "status": "ok", "errors": []}
        bad = {"valid": False, "status": "error", "errors": ["boom"]}
        assert merge_results(ok, ok)["status"] == "ok"
        assert merge_results(ok, bad)["errors"] == ["boom"]
