"""CLI command for dissolved gas content of seawater."""

from __future__ import annotations

import click
import numpy as np
from rich.console import Console
from rich.table import Table

from vapour_thermal.core.config import save_result_json
from vapour_thermal.core.dissolved_gas import (
    DissolvedGasResult,
    dissolved_gas_content,
    dissolved_gas_profile,
)


def render_gas_result(console: Console, res: DissolvedGasResult) -> None:
    """Print a single-point dissolved gas result."""
    table = Table(title="Dissolved Gas (Weiss 1970)")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")

    table.add_row("Temperature", f"{res.gas_temperature_c:.2f}", "°C")
    table.add_row("Salinity", f"{res.salinity_gkg:.2f}", "g/kg")
    table.add_row("O₂", f"{res.o2_ml_l:.4f}", "mL/L")
    table.add_row("N₂", f"{res.n2_ml_l:.4f}", "mL/L")
    table.add_row("O₂", f"{res.o2_mg_l:.4f}", "mg/L")
    table.add_row("N₂", f"{res.n2_mg_l:.4f}", "mg/L")
    table.add_row("Total Gas", f"{res.total_gas_mg_l:.4f}", "mg/L")
    console.print(table)

    if res.extrapolated:
        console.print(
            "[yellow]Warning:[/yellow] temperature is outside the 0–36 °C range of the "
            "Weiss correlation; values are extrapolated."
        )


@click.command("gas")
@click.option("--temperature", "-t", type=float, required=True, help="Seawater temperature [°C].")
@click.option(
    "--salinity", type=float, default=35.0, show_default=True, help="Salinity [g/kg]."
)
@click.option(
    "--t-max",
    type=float,
    default=None,
    help="End temperature [°C]; tabulates from --temperature to --t-max.",
)
@click.option("--steps", type=int, default=8, show_default=True, help="Number of sweep points.")
@click.option(
    "--output", "-o", type=click.Path(), default=None, help="Output file path (JSON)."
)
@click.pass_context
def gas(
    ctx: click.Context,
    temperature: float,
    salinity: float,
    t_max: float | None,
    steps: int,
    output: str | None,
) -> None:
    """Dissolved O₂ / N₂ content of seawater at air saturation."""
    console: Console = ctx.obj.get("console", Console())

    if t_max is None:
        res = dissolved_gas_content(temperature, salinity)
        console.print("\n[bold]Vapour Thermal — Dissolved Gas[/bold]\n")
        render_gas_result(console, res)
        if output:
            save_result_json(res, output)
            console.print(f"\n[dim]Saved to {output}[/dim]")
        return

    if steps < 2:
        console.print("[red]Error:[/red] --steps must be at least 2 for a sweep.")
        raise SystemExit(1)

    profile = dissolved_gas_profile(np.linspace(temperature, t_max, steps), salinity)
    table = Table(title=f"Dissolved Gas vs Temperature (S = {salinity:g} g/kg)")
    table.add_column("T [°C]", style="cyan", justify="right")
    table.add_column("O₂ [mg/L]", style="green", justify="right")
    table.add_column("N₂ [mg/L]", style="green", justify="right")
    table.add_column("Total [mg/L]", style="bold green", justify="right")
    table.add_column("Note", style="dim")
    for i, t in enumerate(profile["temperature_c"]):
        table.add_row(
            f"{t:.1f}",
            f"{profile['o2_mg_l'][i]:.3f}",
            f"{profile['n2_mg_l'][i]:.3f}",
            f"{profile['total_gas_mg_l'][i]:.3f}",
            "extrapolated" if profile["extrapolated"][i] else "",
        )
    console.print(table)

    if output:
        save_result_json(profile, output)
        console.print(f"\n[dim]Saved to {output}[/dim]")
