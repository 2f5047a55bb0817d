"""Utility modules for Vapour Thermal."""

from vapour_thermal.utils.constants import M_AIR, M_H2O, R_UNIVERSAL
from vapour_thermal.utils.units import pressure_to_bar, temperature_to_celsius

__all__ = ["M_AIR", "M_H2O", "R_UNIVERSAL", "pressure_to_bar", "temperature_to_celsius"]
