"""Checks run over raw exports before any metric is computed.

Used by the ingest/validate path only; calculators trust their input shape.
"""

import pandas as pd
import pandera as pa
from pandera import DataFrameSchema

type ValidationResult = dict[str, str | bool | list[str]]

MAX_SAMPLE = 5


def _result(errors: list[str]) -> ValidationResult:
    if errors:
        return {"valid": False, "status": "error", "errors": errors}
    return {"valid": True, "status": "ok", "errors": []}


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ValidationResult:
    """Run a pandera schema lazily and summarise failures per column and check.

    Large exports can fail the same check on thousands of rows, so each
    (column, check) pair yields one message with a count and a few sample
    values rather than one message per row.
    """
    try:
        schema.validate(df, lazy=True)
    except pa.errors.SchemaErrors as exc:
        cases = exc.failure_cases.copy()
        cases["column"] = cases["column"].fillna(schema.name or "<frame>")
        errors = []
        for (column, check), group in cases.groupby(["column", "check"], sort=True, dropna=False):
            sample = group["failure_case"].dropna().astype(str).unique()[:MAX_SAMPLE].tolist()
            errors.append(f"Column '{column}' failed '{check}' on {len(group)} value(s): {sample}")
        return _result(errors or ["Schema validation failed"])
    return _result([])


def validate_unique(df: pd.DataFrame, columns: list[str]) -> ValidationResult:
    """Report rows sharing the same key across ``columns``."""
    if df.empty:
        return _result([])
    dupes = int(df.duplicated(subset=columns, keep=False).sum())
    return _result([f"Found {dupes} duplicate rows on columns {columns}"] if dupes else [])


def validate_referential_integrity(
    child: pd.DataFrame,
    parent: pd.DataFrame,
    child_key: str,
    parent_key: str,
) -> ValidationResult:
    """Report child keys with no matching parent row.

    Dangling references are tolerated by the engine; this check only reports
    them.
    """
    if child.empty:
        return _result([])
    known = set(parent[parent_key].dropna().astype(str)) if not parent.empty else set()
    orphans = sorted(set(child[child_key].dropna().astype(str)) - known)
    if not orphans:
        return _result([])
    return _result([
        f"'{child_key}' references {len(orphans)} unknown key(s): {orphans[:MAX_SAMPLE]}"
    ])


def merge_results(*results: ValidationResult) -> ValidationResult:
    """Combine several validation results into one."""
    return _result([err for r in results for err in r["errors"]])
