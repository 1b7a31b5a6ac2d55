"""Command-line runner: validates inputs and computes metrics for each domain."""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from hrmetrics.config import EngineConfig, load_engine_config
from hrmetrics.domains import attendance, recruiting, skills, talent, workforce
from hrmetrics.domains.attendance.transform import build_attendance_frame
from hrmetrics.domains.recruiting.transform import build_funnel_frame, build_position_frame
from hrmetrics.domains.workforce.transform import build_employee_frame
from hrmetrics.utils.io import read_entity, write_output
from hrmetrics.utils.periods import DateLike, parse_period
from hrmetrics.utils.types import DataContext

type DomainResult = dict[str, bool | str | int]

console = Console()
logger = logging.getLogger(__name__)

DOMAINS = {
    "workforce": workforce,
    "talent": talent,
    "skills": skills,
    "attendance": attendance,
    "recruiting": recruiting,
}


def load_context(data_dir: Path) -> DataContext:
    """Read the four entity exports from a directory and normalize them."""
    console.print(f"[bold]Loading exports from {data_dir}[/bold]")
    employees = read_entity(data_dir, "employees")
    attendance_rows = read_entity(data_dir, "attendance")
    positions = read_entity(data_dir, "positions")
    funnels = read_entity(data_dir, "funnels")
    return DataContext(
        employees=build_employee_frame(employees),
        attendance=build_attendance_frame(attendance_rows),
        positions=build_position_frame(positions),
        funnels=build_funnel_frame(funnels),
    )


def validate_all(context: DataContext, names: list[str]) -> list[DomainResult]:
    results = []
    for name in names:
        match DOMAINS[name].validate(context):
            case {"status": "ok", **rest}:
                results.append({"domain": name, "valid": True, **rest})
            case {"status": "error", "message": msg}:
                results.append({"domain": name, "valid": False, "error": msg})
            case {"status": "skipped", "reason": reason}:
                console.print(f"[yellow]Skipping {name}: {reason}[/yellow]")
            case _:
                results.append({"domain": name, "valid": False, "error": "Unknown validation result"})
    return results


def _format(value: object) -> str:
    match value:
        case bool():
            return str(value)
        case float():
            return f"{value:,.2f}"
        case int():
            return f"{value:,}"
        case list():
            return f"{len(value)} rows"
        case dict():
            return f"{len(value)} keys"
        case _:
            return str(value)


def print_summary(name: str, summary: dict[str, object]) -> None:
    table = Table(title=f"{name.title()} metrics")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for key, value in summary.items():
        table.add_row(key, _format(value))
    console.print(table)


def run_domains(
    context: DataContext,
    config: EngineConfig,
    names: list[str],
    as_of: DateLike = None,
    output_dir: Path | None = None,
) -> dict[str, dict[str, object]]:
    results = {}
    for name in names:
        console.print(f"\n[cyan]{'=' * 60}[/cyan]")
        console.print(f"[bold cyan]Domain: {name}[/bold cyan]")
        summary = DOMAINS[name].run(context, config, as_of=as_of)
        print_summary(name, summary)
        results[name] = summary
        if output_dir is not None:
            write_output(summary, output_dir / f"{name}.{config.output.format}", config.output.format)
    return results


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Compute HR metrics from entity exports")
    parser.add_argument("--data-dir", type=Path, default=Path("data"), help="Directory holding the exports")
    parser.add_argument("--validate", action="store_true", help="Only validate, don't compute")
    parser.add_argument("--domain", type=str, help="Run a specific domain only")
    parser.add_argument("--period", type=str, help="Time window: 3m, 6m, 12m, 24m or all")
    parser.add_argument("--env", type=str, default="production", help="Configuration environment")
    parser.add_argument("--as-of", type=str, help="Reference date (YYYY-MM-DD); defaults to today")
    parser.add_argument("--write", action="store_true", help="Write each domain summary to the output directory")
    args = parser.parse_args(argv)

    config = load_engine_config(args.env)
    logging.basicConfig(
        level=config.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    if args.period:
        config = replace(config, default_period=str(parse_period(args.period)))

    names = config.domains
    if args.domain:
        if args.domain not in DOMAINS:
            console.print(f"[red]Unknown domain: {args.domain}[/red]")
            sys.exit(1)
        names = [args.domain]

    context = load_context(args.data_dir)

    if args.validate:
        results = validate_all(context, names)
        table = Table(title="Validation Results")
        table.add_column("Domain")
        table.add_column("Valid")
        table.add_column("Details")

        for r in results:
            status = "[green]✓[/green]" if r["valid"] else "[red]✗[/red]"
            detail = r.get("error", "OK")
            table.add_row(r["domain"], status, detail)

        console.print(table)

        if not all(r["valid"] for r in results):
            sys.exit(1)
        return

    output_dir = Path(config.output.directory) if args.write else None
    run_domains(context, config, names, as_of=args.as_of, output_dir=output_dir)


if __name__ == "__main__":
    main()
