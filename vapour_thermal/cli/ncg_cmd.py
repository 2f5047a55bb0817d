"""CLI command for NCG / water-vapour mixture properties."""

from __future__ import annotations

import click
import pint
from rich.console import Console
from rich.table import Table

from vapour_thermal.core.config import CalculationCase, CaseMeta, save_result_json
from vapour_thermal.core.ncg import (
    NCG_MODES,
    NCGMixtureResult,
    calculate_ncg_properties,
    ncg_input_from_dict,
)
from vapour_thermal.core.steam import SteamPropertyError
from vapour_thermal.utils.units import (
    mass_flow_to_kg_h,
    pressure_to_bar,
    temperature_to_celsius,
    volume_flow_to_m3_h,
)
from vapour_thermal.utils.validation import InputValidationError


def render_ncg_result(console: Console, r: NCGMixtureResult) -> None:
    """Print an NCG mixture result as tables."""
    table = Table(title=f"NCG Mixture Properties ({r.mode})")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")

    table.add_row("Temperature", f"{r.temperature_c:.2f}", "°C")
    table.add_row("Total Pressure", f"{r.total_pressure_bar:.5f}", "bar")
    table.add_row("Saturation Pressure", f"{r.saturation_pressure_bar:.5f}", "bar")
    table.add_row("NCG Partial Pressure", f"{r.ncg_partial_pressure_bar:.5f}", "bar")
    table.add_row("Vapour Partial Pressure", f"{r.water_vapour_partial_pressure_bar:.5f}", "bar")
    table.add_row("Vapour Mole Fraction", f"{r.water_vapour_mole_frac:.4f}", "—")
    table.add_row("NCG Mole Fraction", f"{r.ncg_mole_frac:.4f}", "—")
    table.add_row("Vapour Mass Fraction", f"{r.water_vapour_mass_frac:.4f}", "—")
    table.add_row("NCG Mass Fraction", f"{r.ncg_mass_frac:.4f}", "—")
    table.add_row("Molar Mass", f"{r.mix_molar_mass:.3f}", "g/mol")
    table.add_row("Density", f"{r.density:.5f}", "kg/m³")
    table.add_row("Specific Volume", f"{r.specific_volume:.3f}", "m³/kg")
    table.add_row("Specific Enthalpy", f"{r.specific_enthalpy:.1f}", "kJ/kg")
    table.add_row("Cp", f"{r.cp_mix:.4f}", "kJ/(kg·K)")
    table.add_row("Cv", f"{r.cv_mix:.4f}", "kJ/(kg·K)")
    table.add_row("γ", f"{r.gamma_mix:.4f}", "—")
    table.add_row("Viscosity", f"{r.dynamic_viscosity_pas * 1e6:.3f}", "µPa·s")
    table.add_row("Thermal Conductivity", f"{r.thermal_conductivity_wmk * 1e3:.3f}", "mW/(m·K)")
    console.print(table)

    if r.total_flow_kg_h is not None:
        flows = Table(title="Flow Breakdown")
        flows.add_column("Stream", style="cyan")
        flows.add_column("Value", style="green", justify="right")
        flows.add_column("Unit", style="dim")
        flows.add_row("Dry NCG", f"{r.dry_ncg_flow_kg_h:.4f}", "kg/h")
        flows.add_row("Water Vapour", f"{r.water_vapour_flow_kg_h:.4f}", "kg/h")
        flows.add_row("Total", f"{r.total_flow_kg_h:.4f}", "kg/h")
        flows.add_row("Volumetric", f"{r.volumetric_flow_m3h:.3f}", "m³/h")
        console.print(flows)

    if r.seawater_info is not None:
        sw = r.seawater_info
        console.print(
            f"Seawater gas release at {sw.gas_temperature_c:.1f} °C, S = {sw.salinity_gkg:g} g/kg: "
            f"{sw.total_gas_mg_l:.3f} mg/L (O₂ {sw.o2_mg_l:.3f}, N₂ {sw.n2_mg_l:.3f})"
        )
        if sw.extrapolated:
            console.print("[yellow]Warning:[/yellow] dissolved gas values are extrapolated.")


@click.command("ncg")
@click.option(
    "--mode",
    type=click.Choice(NCG_MODES),
    default="dry_ncg",
    show_default=True,
    help="How the flow is specified.",
)
@click.option("--temperature", "-t", type=float, required=True, help="Mixture temperature.")
@click.option(
    "--temperature-unit",
    type=str,
    default="degC",
    show_default=True,
    help="Unit of --temperature and --seawater-temp.",
)
@click.option(
    "--pressure",
    "-p",
    type=float,
    default=None,
    help="NCG partial pressure (with --sat-pressure) or total pressure.",
)
@click.option(
    "--pressure-unit", type=str, default="bar", show_default=True, help="Unit of --pressure."
)
@click.option(
    "--sat-pressure/--total-pressure",
    "use_sat_pressure",
    default=True,
    show_default=True,
    help="Interpret --pressure as NCG partial pressure above P_sat, or as total pressure.",
)
@click.option("--dry-flow", type=float, default=None, help="Dry NCG mass flow.")
@click.option("--wet-flow", type=float, default=None, help="Total NCG + vapour mass flow.")
@click.option("--vapour-flow", type=float, default=None, help="Water vapour mass flow.")
@click.option(
    "--flow-unit",
    type=str,
    default="kg/h",
    show_default=True,
    help="Unit of --dry-flow, --wet-flow and --vapour-flow.",
)
@click.option("--seawater-flow", type=float, default=None, help="Seawater feed flow.")
@click.option(
    "--seawater-flow-unit",
    type=str,
    default="m**3/h",
    show_default=True,
    help="Unit of --seawater-flow.",
)
@click.option("--seawater-temp", type=float, default=None, help="Gas release temperature.")
@click.option(
    "--salinity", type=float, default=35.0, show_default=True, help="Salinity [g/kg]."
)
@click.option(
    "--output", "-o", type=click.Path(), default=None, help="Output file path (JSON)."
)
@click.pass_context
def ncg(
    ctx: click.Context,
    mode: str,
    temperature: float,
    temperature_unit: str,
    pressure: float | None,
    pressure_unit: str,
    use_sat_pressure: bool,
    dry_flow: float | None,
    wet_flow: float | None,
    vapour_flow: float | None,
    flow_unit: str,
    seawater_flow: float | None,
    seawater_flow_unit: str,
    seawater_temp: float | None,
    salinity: float,
    output: str | None,
) -> None:
    """Thermophysical properties of an NCG + water vapour mixture."""
    console: Console = ctx.obj.get("console", Console())

    def mass_flow(value: float | None) -> float | None:
        return None if value is None else mass_flow_to_kg_h(value, flow_unit)

    try:
        data = {
            "mode": mode,
            "temperature_c": temperature_to_celsius(temperature, temperature_unit),
            "pressure_bar": None if pressure is None else pressure_to_bar(pressure, pressure_unit),
            "use_sat_pressure": use_sat_pressure,
            "dry_ncg_flow_kg_h": mass_flow(dry_flow),
            "wet_ncg_flow_kg_h": mass_flow(wet_flow),
            "vapour_flow_kg_h": mass_flow(vapour_flow),
            "seawater_flow_m3h": (
                None
                if seawater_flow is None
                else volume_flow_to_m3_h(seawater_flow, seawater_flow_unit)
            ),
            "seawater_temp_c": (
                None
                if seawater_temp is None
                else temperature_to_celsius(seawater_temp, temperature_unit)
            ),
            "salinity_gkg": salinity,
        }
    except (pint.UndefinedUnitError, pint.DimensionalityError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1)
    data = {k: v for k, v in data.items() if v is not None}

    try:
        result = calculate_ncg_properties(ncg_input_from_dict(data))
    except (InputValidationError, SteamPropertyError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1)

    console.print("\n[bold]Vapour Thermal — NCG Properties[/bold]\n")
    render_ncg_result(console, result)

    if output:
        case = CalculationCase(calculator="ncg", input=data, meta=CaseMeta(name="NCG Properties"))
        save_result_json(result, output, case=case)
        console.print(f"\n[dim]Saved to {output}[/dim]")
