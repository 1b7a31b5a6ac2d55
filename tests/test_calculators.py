"""Tests for the formula calculators."""

import pytest

from hrmetrics import calculators


class TestZeroDenominators:
    @pytest.mark.parametrize(
        "call",
        [
            lambda: calculators.roi(100, 0),
            lambda: calculators.absence_rate(3, 0),
            lambda: calculators.benefits_cost_per_employee(5000, 0),
            lambda: calculators.average_workweek(400, 0, 10),
            lambda: calculators.average_workweek(400, 4, 0),
            lambda: calculators.performance_pay_differential(120000, 0),
            lambda: calculators.high_performer_growth_rate(0, 5),
            lambda: calculators.retention_rate(0, 0, 0),
            lambda: calculators.cost_per_hire(10000, 0),
        ],
    )
    def test_yield_zero(self, call):
        assert call() == 0.0


class TestFormulas:
    def test_roi(self):
        assert calculators.roi(50000, 200000) == pytest.approx(25.0)

    def test_turnover_savings(self):
        assert calculators.turnover_savings(15000, 20, 50) == pytest.approx(150000)

    def test_productivity_gains(self):
        assert calculators.productivity_gains(200000, 5, 10) == pytest.approx(100000)

    def test_per_head_figures_are_not_percentages(self):
        assert calculators.benefits_cost_per_employee(50000, 10) == pytest.approx(5000)
        assert calculators.revenue_per_employee(1_000_000, 8) == pytest.approx(125000)

    def test_benefits_vs_salary_is_a_plain_ratio(self):
        assert calculators.benefits_vs_salary_ratio(30, 100) == pytest.approx(0.3)

    def test_average_workweek(self):
        assert calculators.average_workweek(4000, 4, 25) == pytest.approx(40.0)

    def test_pay_differential(self):
        assert calculators.performance_pay_differential(120, 100) == pytest.approx(20.0)

    def test_growth_rate(self):
        assert calculators.high_performer_growth_rate(10, 12) == pytest.approx(20.0)
        assert calculators.high_performer_growth_rate(10, 8) == pytest.approx(-20.0)

    def test_retention_rate_counts_hires(self):
        assert calculators.retention_rate(90, 10, 20) == pytest.approx(80.0)

    def test_key_employee_retention(self):
        assert calculators.key_employee_retention_rate(20, 5) == pytest.approx(75.0)

    def test_offer_acceptance(self):
        assert calculators.offer_acceptance_rate(3, 4) == pytest.approx(75.0)


class TestPercentages:
    @pytest.mark.parametrize(
        ("func", "args", "expected"),
        [
            (calculators.benefits_percent_of_compensation, (25, 100), 25.0),
            (calculators.benefits_percent_of_revenue, (5, 200), 2.5),
            (calculators.high_performer_ratio, (3, 12), 25.0),
            (calculators.hr_service_level, (45, 50), 90.0),
            (calculators.hr_self_service_rate, (30, 40), 75.0),
            (calculators.new_hire_turnover_contribution, (4, 16), 25.0),
            (calculators.performance_appraisal_rate, (19, 20), 95.0),
            (calculators.source_effectiveness, (6, 8), 75.0),
            (calculators.successor_pool_coverage, (3, 4), 75.0),
            (calculators.task_completion_rate, (7, 10), 70.0),
            (calculators.training_completion_rate, (40, 50), 80.0),
            (calculators.pto_utilization, (60, 120), 50.0),
            (calculators.raise_rate, (3, 100), 3.0),
            (calculators.bonus_rate, (10, 100), 10.0),
            (calculators.grievance_rate, (2, 50), 4.0),
            (calculators.turnover_rate, (6, 60), 10.0),
        ],
    )
    def test_percentage(self, func, args, expected):
        assert func(*args) == pytest.approx(expected)


class TestPerHead:
    @pytest.mark.parametrize(
        ("func", "args", "expected"),
        [
            (calculators.average_termination_cost, (50000, 10), 5000),
            (calculators.avg_cost_of_unscheduled_absence, (20, 300, 10), 600),
            (calculators.avg_grievance_resolution_time, (45, 3), 15),
            (calculators.avg_time_to_fill, (90, 3), 30),
            (calculators.hr_costs_per_employee, (100000, 50), 2000),
            (calculators.recruitment_savings, (4000, 3), 12000),
            (calculators.return_on_human_investment, (500000, 250000), 2.0),
            (calculators.total_compensation_per_fte, (900000, 9), 100000),
            (calculators.training_cost_per_employee, (20000, 40), 500),
            (calculators.unscheduled_absences_per_employee, (30, 60), 0.5),
            (calculators.average_salary, (600000, 8), 75000),
        ],
    )
    def test_per_head(self, func, args, expected):
        assert func(*args) == pytest.approx(expected)
