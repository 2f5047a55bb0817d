"""CLI command for evaluating a JSON case file."""

from __future__ import annotations

import click
from rich.console import Console

from vapour_thermal.cli.gas_cmd import render_gas_result
from vapour_thermal.cli.ncg_cmd import render_ncg_result
from vapour_thermal.cli.tvc_cmd import render_tvc_result
from vapour_thermal.core.config import load_case_json, run_case, save_result_json
from vapour_thermal.core.steam import SteamPropertyError
from vapour_thermal.utils.validation import InputValidationError

_RENDERERS = {
    "dissolved_gas": render_gas_result,
    "ncg": render_ncg_result,
    "tvc": render_tvc_result,
}


@click.command("run")
@click.argument("path", type=click.Path(exists=True))
@click.option(
    "--output", "-o", type=click.Path(), default=None, help="Output file path (JSON)."
)
@click.pass_context
def run(ctx: click.Context, path: str, output: str | None) -> None:
    """Evaluate a calculation case file."""
    console: Console = ctx.obj.get("console", Console())

    try:
        case = load_case_json(path)
        result = run_case(case)
    except (InputValidationError, SteamPropertyError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1)

    console.print(f"\n[bold]Vapour Thermal — {case.meta.name}[/bold]\n")
    if case.meta.description:
        console.print(f"[dim]{case.meta.description}[/dim]\n")
    _RENDERERS[case.calculator](console, result)

    if output:
        save_result_json(result, output, case=case)
        console.print(f"\n[dim]Saved to {output}[/dim]")
