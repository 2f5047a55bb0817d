"""Vapour Thermal command-line interface package.

Supports ``python -m vapour_thermal.cli`` as an alternative to the ``vapour`` entry point.
"""

from vapour_thermal.cli.main import cli, main

__all__ = ["cli", "main"]
