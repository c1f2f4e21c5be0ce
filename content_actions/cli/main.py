"""
CLI entrypoint.

doctor:   print effective settings.
actions:  list registered actions and their inputs.
invoke:   run one action and print its host outputs as JSON.
validate: offline input check of a JSON ActionSpec[] script.
run:      execute a script, print a results table, optionally write reports.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..core import registry
from ..core.action import ActionSpec
from ..core.controller.runner import Runner, StepOutcome, execute
from ..core.errors import InputValidationError
from ..core.settings import settings
from ..reporting.writer import build_report, write_report

app = typer.Typer(help="content-actions CLI")
console = Console()
err_console = Console(stderr=True)


@app.callback()
def configure(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level"),
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )
    registry.load_builtin_actions()


def _load_specs(script: Path, command: str) -> list[ActionSpec]:
    if not script.exists():
        typer.secho(f"[{command}] file not found: {script}", fg=typer.colors.RED)
        raise typer.Exit(code=2)
    try:
        data = json.loads(script.read_text(encoding="utf-8"))
        return TypeAdapter(list[ActionSpec]).validate_python(data)
    except (ValidationError, json.JSONDecodeError) as e:
        typer.secho(f"[{command}] invalid file format for ActionSpec[]", fg=typer.colors.RED)
        console.print(str(e))
        raise typer.Exit(code=2)


@app.command("doctor")
def doctor() -> None:
    """Environment check: print the effective defaults."""
    console.print("[bold green]content-actions[/] environment")
    for key, value in settings.model_dump().items():
        console.print(f"- {key}: {value}")
    console.print(f"- registered actions: {len(registry.list_actions())}")


@app.command("actions")
def actions() -> None:
    """List registered actions with their inputs (* = required)."""
    table = Table(title="Actions", show_header=True, header_style="bold")
    table.add_column("name", no_wrap=True)
    table.add_column("inputs")
    table.add_column("description")
    for name, meta in sorted(registry.list_actions().items()):
        inputs = "-"
        if meta.params_model is not None:
            inputs = ", ".join(
                f"{n}*" if required else n for n, required in meta.params_model.input_names()
            )
        table.add_row(name, inputs, meta.description or "-")
    console.print(table)


@app.command("invoke")
def invoke(
    name: str = typer.Argument(..., help="Registered action name"),
    inputs: Optional[List[str]] = typer.Option(
        None, "--input", "-i", help="Input as name=value; repeat for more inputs"
    ),
) -> None:
    """Run one action and print returnCode/returnResult/exception as JSON."""
    raw: dict[str, Optional[str]] = {}
    for item in inputs or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            typer.secho(f"[invoke] expected name=value, got: {item}", fg=typer.colors.RED)
            raise typer.Exit(code=2)
        raw[key] = value

    res = execute(name, raw)
    typer.echo(json.dumps(res.to_outputs(), indent=2))
    if not res.ok:
        raise typer.Exit(code=1)


@app.command("validate")
def validate(script: Path = typer.Argument(..., help="Path to JSON file of ActionSpec[]")) -> None:
    """
    Offline validation: read a JSON array [{name, inputs}] and validate each
    item against the params model bound in the registry. Nothing is executed.
    """
    specs = _load_specs(script, "validate")

    table = Table(title="Validation Results", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("name", no_wrap=True)
    table.add_column("result", no_wrap=True)
    table.add_column("detail")

    failures = 0
    for i, spec in enumerate(specs, start=1):
        try:
            registry.validate_spec(spec)
            table.add_row(str(i), spec.name, "[green]OK[/]", "-")
        except KeyError as ke:
            failures += 1
            table.add_row(str(i), spec.name, "[red]Not Registered[/]", escape(str(ke)))
        except InputValidationError as ve:
            failures += 1
            table.add_row(str(i), spec.name, "[red]Invalid Inputs[/]", escape(ve.message))

    console.print(table)
    if failures:
        raise typer.Exit(code=1)
    typer.secho("[validate] all specs passed", fg=typer.colors.GREEN)


@app.command("run")
def run(
    script: Path = typer.Argument(..., help="Path to JSON file of ActionSpec[]"),
    report_dir: Optional[Path] = typer.Option(
        None, "--report-dir", help="Write report.json and report.csv here"
    ),
) -> None:
    """
    Execute a list of actions in order and print a table of results.
    Returns non-zero on any failure.
    """
    specs = _load_specs(script, "run")
    rows: list[StepOutcome] = Runner().run(specs)

    table = Table(title="Run Results", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("name", no_wrap=True)
    table.add_column("returnCode")
    table.add_column("result", no_wrap=True)
    table.add_column("detail")

    failures = 0
    for r in rows:
        if not r.ok:
            failures += 1
        result = "[green]OK[/]" if r.ok else "[red]FAIL[/]"
        table.add_row(str(r.index), r.name, r.return_code, result, escape(r.detail))
    console.print(table)

    if report_dir is not None:
        json_path, csv_path = write_report(build_report(str(script), rows), report_dir)
        console.print(f"[bold green]Report written[/]: {json_path}  |  {csv_path}")

    if failures:
        raise typer.Exit(code=1)
    typer.secho("[run] completed successfully", fg=typer.colors.GREEN)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
