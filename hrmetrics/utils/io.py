"""File I/O utilities for reading entity exports and writing metric outputs."""

import json
from pathlib import Path

import pandas as pd
from rich.console import Console

type FilePath = str | Path

console = Console()

ENTITY_FILES = {
    "employees": "employees",
    "attendance": "attendance",
    "positions": "job_positions",
    "funnels": "recruitment_funnels",
}


def read_data_file(path: FilePath) -> pd.DataFrame:
    """Read a single export file with automatic format detection."""
    path = Path(path)

    match path.suffix.lower():
        case ".csv":
            return pd.read_csv(path)
        case ".json":
            with open(path, encoding="utf-8") as f:
                return pd.DataFrame(json.load(f))
        case ".xlsx":
            return pd.read_excel(path, engine="openpyxl")
        case ext:
            raise ValueError(f"Unsupported export format: {ext}")


def find_entity_file(directory: FilePath, entity: str) -> Path | None:
    """Locate ``<stem>.json``, ``<stem>.csv`` or ``<stem>.xlsx`` for an entity."""
    stem = ENTITY_FILES[entity]
    for suffix in (".json", ".csv", ".xlsx"):
        candidate = Path(directory) / f"{stem}{suffix}"
        if candidate.exists():
            return candidate
    return None


def read_entity(directory: FilePath, entity: str) -> pd.DataFrame:
    path = find_entity_file(directory, entity)
    if path is None:
        console.print(f"  [yellow]No {entity} export found in {directory}[/yellow]")
        return pd.DataFrame()
    console.print(f"  Reading {path.name}...")
    return read_data_file(path)


def write_output(payload: object, path: FilePath, fmt: str = "json") -> None:
    """Write a metrics payload (plain values or a DataFrame) to disk."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "json":
            with open(path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, default=str)
        case "csv":
            pd.DataFrame(payload).to_csv(path, index=False)
        case "excel":
            pd.DataFrame(payload).to_excel(path, index=False)
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {path}")
