"""CLI command for thermo-vapour compressor (steam ejector) performance."""

from __future__ import annotations

from dataclasses import asdict

import click
import pint
from rich.console import Console
from rich.table import Table

from vapour_thermal.core.config import CalculationCase, CaseMeta, save_result_json
from vapour_thermal.core.steam import SteamPropertyError
from vapour_thermal.core.tvc import TVCInput, TVCResult, calculate_tvc
from vapour_thermal.utils.units import mass_flow_to_t_h
from vapour_thermal.utils.validation import InputValidationError


def render_tvc_result(console: Console, r: TVCResult) -> None:
    """Print a TVC result as a table followed by any warnings."""
    table = Table(title="TVC Performance (1-D model)")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")

    table.add_row("Entrainment Ratio", f"{r.entrainment_ratio:.3f}", "—")
    table.add_row("Theoretical Entrainment Ratio", f"{r.theoretical_entrainment_ratio:.3f}", "—")
    table.add_row("Ejector Efficiency", f"{r.ejector_efficiency * 100:.1f}", "%")
    table.add_row("Compression Ratio", f"{r.compression_ratio:.3f}", "—")
    table.add_row("Expansion Ratio", f"{r.expansion_ratio:.2f}", "—")
    table.add_row("Motive T_sat", f"{r.motive_sat_temperature:.2f}", "°C")
    table.add_row("Suction T_sat", f"{r.suction_sat_temperature:.2f}", "°C")
    table.add_row("Discharge T_sat", f"{r.discharge_sat_temperature:.2f}", "°C")
    table.add_row("Motive Enthalpy", f"{r.motive_enthalpy:.1f}", "kJ/kg")
    table.add_row("Suction Enthalpy", f"{r.suction_enthalpy:.1f}", "kJ/kg")
    table.add_row("Discharge Enthalpy", f"{r.discharge_enthalpy:.1f}", "kJ/kg")
    table.add_row("Discharge Temperature", f"{r.discharge_temperature:.2f}", "°C")
    table.add_row("Discharge Superheat", f"{r.discharge_superheat:.2f}", "°C")
    table.add_row("Motive Flow", f"{r.motive_flow:.3f}", "t/h")
    table.add_row("Entrained Flow", f"{r.entrained_flow:.3f}", "t/h")
    table.add_row("Discharge Flow", f"{r.discharge_flow:.3f}", "t/h")
    console.print(table)

    for w in r.warnings:
        console.print(f"[yellow]Warning:[/yellow] {w}")


@click.command("tvc")
@click.option("--motive-pressure", "--pm", type=float, required=True, help="Motive steam pressure [bar abs].")
@click.option("--suction-pressure", "--ps", type=float, required=True, help="Suction pressure [bar abs].")
@click.option(
    "--discharge-pressure", "--pd", type=float, required=True, help="Discharge pressure [bar abs]."
)
@click.option("--entrained-flow", type=float, default=None, help="Entrained vapour flow.")
@click.option("--motive-flow", type=float, default=None, help="Motive steam flow.")
@click.option(
    "--flow-unit", type=str, default="t/h", show_default=True, help="Unit of the given flow."
)
@click.option(
    "--motive-temperature",
    type=float,
    default=None,
    help="Motive steam temperature [°C] (saturated if omitted).",
)
@click.option("--nozzle-eff", type=float, default=None, help="Nozzle efficiency (default 0.92).")
@click.option("--mixing-eff", type=float, default=None, help="Mixing efficiency (default 0.85).")
@click.option(
    "--diffuser-eff", type=float, default=None, help="Diffuser efficiency (default 0.78)."
)
@click.option(
    "--output", "-o", type=click.Path(), default=None, help="Output file path (JSON)."
)
@click.pass_context
def tvc(
    ctx: click.Context,
    motive_pressure: float,
    suction_pressure: float,
    discharge_pressure: float,
    entrained_flow: float | None,
    motive_flow: float | None,
    flow_unit: str,
    motive_temperature: float | None,
    nozzle_eff: float | None,
    mixing_eff: float | None,
    diffuser_eff: float | None,
    output: str | None,
) -> None:
    """Size a thermo-vapour compressor from pressures and one flow."""
    console: Console = ctx.obj.get("console", Console())

    try:
        entrained = None if entrained_flow is None else mass_flow_to_t_h(entrained_flow, flow_unit)
        motive = None if motive_flow is None else mass_flow_to_t_h(motive_flow, flow_unit)
    except (pint.UndefinedUnitError, pint.DimensionalityError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1)

    inp = TVCInput(
        motive_pressure=motive_pressure,
        suction_pressure=suction_pressure,
        discharge_pressure=discharge_pressure,
        entrained_flow=entrained,
        motive_flow=motive,
        motive_temperature=motive_temperature,
        nozzle_efficiency=nozzle_eff,
        mixing_efficiency=mixing_eff,
        diffuser_efficiency=diffuser_eff,
    )
    try:
        result = calculate_tvc(inp)
    except (InputValidationError, SteamPropertyError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1)

    console.print("\n[bold]Vapour Thermal — TVC Sizing[/bold]\n")
    render_tvc_result(console, result)

    if output:
        case = CalculationCase(calculator="tvc", input=asdict(inp), meta=CaseMeta(name="TVC Sizing"))
        save_result_json(result, output, case=case)
        console.print(f"\n[dim]Saved to {output}[/dim]")
