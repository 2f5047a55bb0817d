"""Vapour Thermal command-line interface.

Entry point for the ``vapour`` CLI tool.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from vapour_thermal import __app_name__, __version__

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name=__app_name__)
@click.option("--verbose", "-v", is_flag=True, help="Show calculation log messages.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Vapour Thermal — desalination thermal calculations.

    Dissolved gas in seawater, NCG / vapour mixture properties and
    thermo-vapour compressor performance.
    """
    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# Import and register sub-commands
from vapour_thermal.cli.gas_cmd import gas  # noqa: E402
from vapour_thermal.cli.ncg_cmd import ncg  # noqa: E402
from vapour_thermal.cli.run_cmd import run  # noqa: E402
from vapour_thermal.cli.tvc_cmd import tvc  # noqa: E402

cli.add_command(gas)
cli.add_command(ncg)
cli.add_command(tvc)
cli.add_command(run)


def main() -> None:
    """Convenience wrapper for entry-point scripts."""
    cli()
