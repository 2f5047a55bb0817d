"""Steam property interface.

The calculators depend on a small set of water/steam properties expressed
in plant units (bar, °C, kJ/kg). They receive them through the
``SteamPropertyProvider`` protocol so that a deterministic table can be
substituted in tests; ``CoolPropSteam`` is the default implementation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol, runtime_checkable

from CoolProp.CoolProp import PropsSI

from vapour_thermal.utils.constants import (
    BAR_TO_PA,
    J_TO_KJ,
    PA_TO_BAR,
    T_CELSIUS_OFFSET,
    T_TRIPLE_POINT_C,
)

logger = logging.getLogger(__name__)

_WATER = "Water"


class SteamPropertyError(Exception):
    """Raised when a steam property calculation fails."""


@runtime_checkable
class SteamPropertyProvider(Protocol):
    """Saturation and vapour-enthalpy lookups used by the calculators."""

    def saturation_pressure(self, temperature_c: float) -> float:
        """Saturation pressure [bar] at temperature [°C]."""
        ...

    def saturation_temperature(self, pressure_bar: float) -> float:
        """Saturation temperature [°C] at pressure [bar]."""
        ...

    def enthalpy_vapor(self, temperature_c: float) -> float:
        """Saturated vapour enthalpy h_g [kJ/kg] at temperature [°C]."""
        ...

    def enthalpy_superheated(self, pressure_bar: float, temperature_c: float) -> float:
        """Vapour enthalpy [kJ/kg] at pressure [bar] and temperature [°C]."""
        ...

    def is_superheated(self, pressure_bar: float, temperature_c: float) -> bool:
        """True when temperature is above saturation at the given pressure."""
        ...


class CoolPropSteam:
    """Steam properties from CoolProp (IAPWS-95 formulation, HEOS backend).

    Enthalpies use the IAPWS reference state (saturated liquid at the triple
    point has zero enthalpy), matching published steam tables. Temperatures
    below the triple point are evaluated at the triple point.
    """

    def __init__(self, fluid: str = _WATER):
        self.fluid = fluid

    def _props(self, output: str, name1: str, value1: float, name2: str, value2: float) -> float:
        try:
            return PropsSI(output, name1, value1, name2, value2, self.fluid)
        except ValueError as exc:
            raise SteamPropertyError(
                f"{self.fluid} property {output} failed at {name1}={value1}, {name2}={value2}: {exc}"
            ) from exc

    @staticmethod
    def _kelvin(temperature_c: float) -> float:
        return max(temperature_c, T_TRIPLE_POINT_C) + T_CELSIUS_OFFSET

    def saturation_pressure(self, temperature_c: float) -> float:
        return self._props("P", "T", self._kelvin(temperature_c), "Q", 1.0) * PA_TO_BAR

    def saturation_temperature(self, pressure_bar: float) -> float:
        T = self._props("T", "P", pressure_bar * BAR_TO_PA, "Q", 1.0)
        return T - T_CELSIUS_OFFSET

    def enthalpy_vapor(self, temperature_c: float) -> float:
        return self._props("H", "T", self._kelvin(temperature_c), "Q", 1.0) * J_TO_KJ

    def enthalpy_superheated(self, pressure_bar: float, temperature_c: float) -> float:
        t_sat = self.saturation_temperature(pressure_bar)
        if temperature_c <= t_sat:
            # At or below saturation the dry vapour state is the saturated one
            return self.enthalpy_vapor(t_sat)
        h = self._props("H", "T", self._kelvin(temperature_c), "P", pressure_bar * BAR_TO_PA)
        return h * J_TO_KJ

    def is_superheated(self, pressure_bar: float, temperature_c: float) -> bool:
        return temperature_c > self.saturation_temperature(pressure_bar)

    def __repr__(self) -> str:
        return f"CoolPropSteam('{self.fluid}')"


@lru_cache(maxsize=1)
def get_default_steam() -> CoolPropSteam:
    """Return the shared default steam property provider."""
    logger.debug("Creating default CoolProp steam property provider")
    return CoolPropSteam()


def resolve_steam(steam: SteamPropertyProvider | None) -> SteamPropertyProvider:
    """Return *steam*, or the default provider when None."""
    return get_default_steam() if steam is None else steam


@dataclass(frozen=True)
class SaturationState:
    """Saturated water/vapour state at a given temperature."""

    temperature_c: float
    saturation_pressure_bar: float
    saturated_vapor_enthalpy: float  # kJ/kg


def saturation_state(
    temperature_c: float, steam: SteamPropertyProvider | None = None
) -> SaturationState:
    """Derive the saturation state at *temperature_c* from the provider."""
    steam = resolve_steam(steam)
    return SaturationState(
        temperature_c=temperature_c,
        saturation_pressure_bar=steam.saturation_pressure(temperature_c),
        saturated_vapor_enthalpy=steam.enthalpy_vapor(temperature_c),
    )
