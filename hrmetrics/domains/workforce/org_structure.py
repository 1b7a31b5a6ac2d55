"""Org hierarchy resolution over ``manager_id`` back-references.

The reporting graph comes from uploaded data and may contain dangling
managers, duplicate ids or cycles. Lookups here build the adjacency map once
per call and walk it iteratively with a visited set, never by unbounded
recursion.
"""

import logging
from collections import defaultdict

import pandas as pd

from hrmetrics.utils.filters import active_employees
from hrmetrics.utils.types import EmployeeRecord, to_members

logger = logging.getLogger(__name__)

type ReportingMap = dict[str, list[str]]
type ManagerChain = list[str]

RATING_KEYS = ("1", "2", "3", "4", "5")


def employee_index(employees: pd.DataFrame) -> dict[str, EmployeeRecord]:
    """Map ``employee_id`` to its record; the first row wins on duplicate ids."""
    index: dict[str, EmployeeRecord] = {}
    for record in to_members(employees):
        emp_id = record.get("employee_id")
        if emp_id is not None and emp_id not in index:
            index[emp_id] = record
    return index


def build_reporting_map(employees: pd.DataFrame) -> ReportingMap:
    """Build a manager_id -> list[employee_id] adjacency map."""
    tree: dict[str, list[str]] = defaultdict(list)
    if employees.empty:
        return {}
    for emp_id, mgr in zip(employees["employee_id"], employees["manager_id"]):
        if mgr is not None and pd.notna(mgr) and emp_id is not None:
            tree[str(mgr)].append(str(emp_id))
    return dict(tree)


def find_roots(employees: pd.DataFrame) -> list[str]:
    """Employees with no manager, or whose manager is not in the data."""
    index = employee_index(employees)
    return [
        emp_id for emp_id, record in index.items()
        if record.get("manager_id") is None or record.get("manager_id") not in index
    ]


def direct_reports(manager_id: str, employees: pd.DataFrame) -> pd.DataFrame:
    reporting = build_reporting_map(employees)
    if employees.empty:
        return employees
    return employees[employees["employee_id"].isin(reporting.get(str(manager_id), []))]


def management_chain(employee_id: str, employees: pd.DataFrame) -> ManagerChain:
    """Managers above an employee, nearest first.

    Stops at an orphan root, a dangling reference, or the first repeated id
    when the data contains a cycle.
    """
    index = employee_index(employees)
    chain: ManagerChain = []
    visited = {str(employee_id)}
    current = index.get(str(employee_id))
    while current is not None:
        mgr = current.get("manager_id")
        if mgr is None or mgr in visited or mgr not in index:
            break
        chain.append(mgr)
        visited.add(mgr)
        current = index[mgr]
    return chain


def org_levels(employees: pd.DataFrame) -> dict[str, int]:
    """Depth of each reachable employee below the orphan roots.

    Breadth-first by explicit level; employees only reachable through a
    cycle are left out.
    """
    reporting = build_reporting_map(employees)
    depths: dict[str, int] = {}
    frontier = find_roots(employees)
    level = 0
    while frontier:
        next_frontier = []
        for emp_id in frontier:
            if emp_id in depths:
                continue
            depths[emp_id] = level
            next_frontier.extend(c for c in reporting.get(emp_id, []) if c not in depths)
        frontier = next_frontier
        level += 1
    return depths


def performance_by_manager(employees: pd.DataFrame) -> list[dict[str, object]]:
    """Rating distribution of each active manager's active team, largest first."""
    index = employee_index(employees)
    reporting = build_reporting_map(employees)

    rows = []
    for manager_id, report_ids in reporting.items():
        manager = index.get(manager_id)
        if manager is None or pd.notna(manager.get("termination_date")):
            continue
        team = employees[employees["employee_id"].isin(report_ids)]
        active_team = active_employees(team)
        ratings = dict.fromkeys(RATING_KEYS, 0)
        for rating in active_team["performance_rating"].dropna():
            key = str(int(rating))
            if key in ratings:
                ratings[key] += 1
        rows.append({
            "manager_id": manager_id,
            "manager_name": manager.get("name"),
            "team_size": len(team),
            "ratings": ratings,
        })

    logger.info("Resolved performance for %d managers", len(rows))
    return sorted(rows, key=lambda r: r["team_size"], reverse=True)
