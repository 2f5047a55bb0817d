"""Unit conversion utilities for Vapour Thermal.

Provides a lightweight unit conversion system built on top of pint, with
convenience functions for the calculator units (bar, °C, kg/h, t/h, m³/h).
The CLI converts user-supplied values with these before calling the core.
"""

from __future__ import annotations

import pint

# Module-level unit registry (singleton)
_ureg = pint.UnitRegistry()
_ureg.default_format = "~P"  # short pretty format

Q_ = _ureg.Quantity


def pressure_to_bar(value: float, unit: str) -> float:
    """Convert a pressure value to bar (absolute).

    Args:
        value: Numeric pressure value.
        unit: Source unit string (e.g. "mbar", "kPa", "psi", "atm").

    Returns:
        Pressure in bar.
    """
    return Q_(value, unit).to("bar").magnitude


def temperature_to_celsius(value: float, unit: str) -> float:
    """Convert temperature to degrees Celsius.

    Args:
        value: Numeric temperature value.
        unit: Source unit string (e.g. "K", "degF", "degC").
    """
    return Q_(value, unit).to("degC").magnitude


def mass_flow_to_kg_h(value: float, unit: str) -> float:
    """Convert mass flow rate to kg/h."""
    return Q_(value, unit).to("kg/h").magnitude


def mass_flow_to_t_h(value: float, unit: str) -> float:
    """Convert mass flow rate to metric tonnes per hour."""
    return Q_(value, unit).to("t/h").magnitude


def volume_flow_to_m3_h(value: float, unit: str) -> float:
    """Convert volumetric flow rate to m³/h."""
    return Q_(value, unit).to("m**3/h").magnitude
