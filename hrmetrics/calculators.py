"""Formula calculators over caller-supplied totals.

These back the HR metric calculator pages: each takes already-aggregated
figures and returns a rate, ratio or per-head amount. A zero denominator
yields 0.
"""

from hrmetrics.utils.transforms import safe_ratio

PER_HEAD = 1.0


# ROI and savings

def roi(net_benefit: float, total_cost: float) -> float:
    return safe_ratio(net_benefit, total_cost)


def turnover_savings(avg_cost_per_termination: float, reduction_percent: float, annual_terminations: float) -> float:
    """Cost avoided by cutting annual terminations by ``reduction_percent``."""
    return annual_terminations * (reduction_percent / 100) * avg_cost_per_termination


def productivity_gains(revenue_per_employee: float, increase_percent: float, employees: int) -> float:
    return revenue_per_employee * (increase_percent / 100) * employees


def recruitment_savings(avg_cost_per_hire: float, hires_avoided: int) -> float:
    return avg_cost_per_hire * hires_avoided


# Attendance

def absence_rate(absence_days: float, workdays: float) -> float:
    return safe_ratio(absence_days, workdays)


def unscheduled_absences_per_employee(unscheduled_days: float, employees: int) -> float:
    return safe_ratio(unscheduled_days, employees, scale=PER_HEAD)


def pto_utilization(pto_hours_used: float, pto_hours_accrued: float) -> float:
    return safe_ratio(pto_hours_used, pto_hours_accrued)


def avg_cost_of_unscheduled_absence(unscheduled_days: float, daily_comp: float, fte: float) -> float:
    return safe_ratio(unscheduled_days * daily_comp, fte, scale=PER_HEAD)


# Benefits

def benefits_percent_of_compensation(benefits_expense: float, total_compensation: float) -> float:
    return safe_ratio(benefits_expense, total_compensation)


def benefits_cost_per_employee(benefits_expense: float, fte: float) -> float:
    return safe_ratio(benefits_expense, fte, scale=PER_HEAD)


def benefits_vs_salary_ratio(benefits_expense: float, salary_expense: float) -> float:
    """Plain ratio (e.g. 0.3), not a percentage."""
    return safe_ratio(benefits_expense, salary_expense, scale=PER_HEAD)


def benefits_percent_of_revenue(benefits_expense: float, total_revenue: float) -> float:
    return safe_ratio(benefits_expense, total_revenue)


# Compensation

def average_workweek(total_hours: float, weeks: float, average_headcount: float) -> float:
    if not weeks or not average_headcount:
        return 0.0
    return total_hours / weeks / average_headcount


def average_salary(total_salary: float, average_headcount: float) -> float:
    return safe_ratio(total_salary, average_headcount, scale=PER_HEAD)


def total_compensation_per_fte(total_compensation: float, fte: float) -> float:
    return safe_ratio(total_compensation, fte, scale=PER_HEAD)


def raise_rate(total_raise_amount: float, total_base_salary: float) -> float:
    return safe_ratio(total_raise_amount, total_base_salary)


def bonus_rate(total_bonus_amount: float, total_base_salary: float) -> float:
    return safe_ratio(total_bonus_amount, total_base_salary)


# Employee relations

def grievance_rate(grievances: int, employees: int) -> float:
    """Grievances per 100 employees."""
    return safe_ratio(grievances, employees)


def avg_grievance_resolution_time(total_days: float, resolved: int) -> float:
    return safe_ratio(total_days, resolved, scale=PER_HEAD)


# Profitability and HR operations

def revenue_per_employee(total_revenue: float, employees: int) -> float:
    return safe_ratio(total_revenue, employees, scale=PER_HEAD)


def return_on_human_investment(operating_profit: float, total_compensation: float) -> float:
    return safe_ratio(operating_profit, total_compensation, scale=PER_HEAD)


def hr_costs_per_employee(total_hr_costs: float, employees: int) -> float:
    return safe_ratio(total_hr_costs, employees, scale=PER_HEAD)


def hr_service_level(answered_in_time: int, total_calls: int) -> float:
    return safe_ratio(answered_in_time, total_calls)


def hr_self_service_rate(self_service_tasks: int, total_tasks: int) -> float:
    return safe_ratio(self_service_tasks, total_tasks)


# Leadership and performance

def successor_pool_coverage(successors: int, key_positions: int) -> float:
    return safe_ratio(successors, key_positions)


def performance_pay_differential(high_performer_comp: float, other_comp: float) -> float:
    """Percent by which high-performer pay exceeds everyone else's."""
    if not other_comp:
        return 0.0
    return safe_ratio(high_performer_comp, other_comp) - 100


def performance_appraisal_rate(appraisals_done: int, eligible: int) -> float:
    return safe_ratio(appraisals_done, eligible)


def high_performer_growth_rate(start: int, end: int) -> float:
    """Percent change in high-performer count; 0 when starting from none."""
    return safe_ratio(end - start, start)


def task_completion_rate(completed: int, total: int) -> float:
    return safe_ratio(completed, total)


def high_performer_ratio(high_performers: int, total_employees: int) -> float:
    return safe_ratio(high_performers, total_employees)


# Recruitment

def cost_per_hire(total_recruiting_costs: float, hires: int) -> float:
    return safe_ratio(total_recruiting_costs, hires, scale=PER_HEAD)


def offer_acceptance_rate(offers_accepted: int, offers_made: int) -> float:
    return safe_ratio(offers_accepted, offers_made)


def new_hire_turnover_contribution(new_hires_who_left: int, total_terminations: int) -> float:
    return safe_ratio(new_hires_who_left, total_terminations)


def source_effectiveness(high_quality_hires: int, total_hires: int) -> float:
    return safe_ratio(high_quality_hires, total_hires)


def avg_time_to_fill(total_days: float, positions_filled: int) -> float:
    return safe_ratio(total_days, positions_filled, scale=PER_HEAD)


# Retention

def turnover_rate(leavers: int, average_headcount: float) -> float:
    return safe_ratio(leavers, average_headcount)


def retention_rate(start_headcount: int, hires: int, terminations: int) -> float:
    effective = start_headcount + hires
    return safe_ratio(effective - terminations, effective)


def key_employee_retention_rate(key_start: int, key_left: int) -> float:
    return safe_ratio(key_start - key_left, key_start)


def average_termination_cost(total_costs: float, terminations: int) -> float:
    return safe_ratio(total_costs, terminations, scale=PER_HEAD)


# Training

def training_cost_per_employee(total_training_costs: float, employees_trained: int) -> float:
    return safe_ratio(total_training_costs, employees_trained, scale=PER_HEAD)


def training_completion_rate(completed: int, assigned: int) -> float:
    return safe_ratio(completed, assigned)
