"""Non-condensable gas (NCG) / water-vapour mixture properties.

Thermophysical properties of the NCG + vapour mixtures found in the vacuum
systems of thermal desalination plants. The mixture is an ideal gas; NCG is
modelled as dry air (M = 28.97 g/mol) and the water vapour partial pressure
is the saturation pressure at the mixture temperature (Dalton's law).

Four input modes describe how the flow is known:

- ``dry_ncg``: dry NCG mass flow at a given pressure
- ``wet_ncg``: total NCG + vapour mass flow at a given pressure
- ``seawater``: NCG released from a seawater feed (Weiss 1970 solubility)
- ``split_flows``: NCG and vapour mass flows; total pressure is derived

Whatever the mode, the mixture properties come from the same routine,
``mixture_properties``, once the total and partial pressures are known.

References:
    Wilke C.R. (1950). "A viscosity equation for gas mixtures."
    J. Chem. Phys. 18(4), 517–519.
    Mason E.A., Saxena S.C. (1958). Wassiljewa conductivity mixing rule.
"""

from __future__ import annotations

import logging
import math
from dataclasses import MISSING, asdict, dataclass, fields
from typing import Any, ClassVar, Mapping, Union

from vapour_thermal.core.dissolved_gas import DissolvedGasResult, dissolved_gas_content
from vapour_thermal.core.steam import SteamPropertyProvider, resolve_steam
from vapour_thermal.utils.constants import (
    BAR_TO_PA,
    CP_AIR,
    CP_VAPOR,
    M_AIR,
    M_H2O,
    R_UNIVERSAL,
    T_CELSIUS_OFFSET,
)
from vapour_thermal.utils.validation import (
    InputValidationError,
    ValidationResult,
    require_number,
    validate_non_negative,
    validate_positive,
    validate_range,
)

logger = logging.getLogger(__name__)

T_MIN_C = 0.0
T_MAX_C = 350.0

# Mole fraction below which a component is treated as absent
_TRACE = 1e-9


# --- Inputs ---


@dataclass(frozen=True)
class _PressureSpecifiedInput:
    """Common fields of the modes where pressure is an input.

    With ``use_sat_pressure`` the entered pressure is the NCG partial
    pressure above P_sat(T); otherwise it is the total pressure [bar abs].
    """

    temperature_c: float
    pressure_bar: float
    use_sat_pressure: bool


@dataclass(frozen=True)
class DryNCGInput(_PressureSpecifiedInput):
    """Known dry NCG mass flow (gas only, no vapour)."""

    mode: ClassVar[str] = "dry_ncg"

    dry_ncg_flow_kg_h: float | None = None


@dataclass(frozen=True)
class WetNCGInput(_PressureSpecifiedInput):
    """Known total NCG + water vapour mass flow."""

    mode: ClassVar[str] = "wet_ncg"

    wet_ncg_flow_kg_h: float | None = None


@dataclass(frozen=True)
class SeawaterInput(_PressureSpecifiedInput):
    """NCG released from a seawater feed at air-saturation equilibrium."""

    mode: ClassVar[str] = "seawater"

    seawater_flow_m3h: float
    seawater_temp_c: float | None = None  # defaults to temperature_c
    salinity_gkg: float = 35.0


@dataclass(frozen=True)
class SplitFlowsInput:
    """Known NCG and water vapour mass flows; total pressure is derived."""

    mode: ClassVar[str] = "split_flows"

    temperature_c: float
    vapour_flow_kg_h: float
    dry_ncg_flow_kg_h: float = 0.0


NCGInput = Union[DryNCGInput, WetNCGInput, SeawaterInput, SplitFlowsInput]

_INPUT_TYPES: dict[str, type] = {
    cls.mode: cls for cls in (DryNCGInput, WetNCGInput, SeawaterInput, SplitFlowsInput)
}

NCG_MODES = tuple(_INPUT_TYPES)


def ncg_input_from_dict(data: Mapping[str, Any]) -> NCGInput:
    """Build the input variant named by ``data["mode"]``.

    Keys that the selected mode does not use are ignored, and a ``None``
    value counts as not supplied.

    Raises:
        InputValidationError: If the mode is unknown, a required field is
            missing, or a value has the wrong type.
    """
    mode = data.get("mode")
    cls = _INPUT_TYPES.get(mode)
    if cls is None:
        raise InputValidationError(
            f"Unknown NCG input mode '{mode}'. Available: {list(NCG_MODES)}", parameter="mode"
        )

    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        value = data.get(f.name)
        if value is None:
            if f.default is MISSING:
                raise InputValidationError(
                    f"Incomplete '{mode}' input: {f.name} is required", parameter=f.name
                )
            continue
        if f.name == "use_sat_pressure":
            if not isinstance(value, bool):
                raise InputValidationError(
                    f"use_sat_pressure must be true or false, got {value!r}", parameter=f.name
                )
            kwargs[f.name] = value
        else:
            kwargs[f.name] = require_number(f.name, value)
    return cls(**kwargs)


# --- Results ---


@dataclass(frozen=True)
class MixtureState:
    """Composition and thermophysical properties of the mixture at (T, P)."""

    temperature_c: float
    total_pressure_bar: float
    saturation_pressure_bar: float
    ncg_partial_pressure_bar: float
    water_vapour_partial_pressure_bar: float

    water_vapour_mole_frac: float
    ncg_mole_frac: float
    water_vapour_mass_frac: float
    ncg_mass_frac: float
    mix_molar_mass: float  # g/mol

    density: float  # kg/m³
    specific_volume: float  # m³/kg

    specific_enthalpy: float  # kJ/kg (ref: dry air at 0 °C, liquid water at triple point)
    vapor_enthalpy: float  # kJ/kg, h_g(T)
    air_enthalpy: float  # kJ/kg, Cp_air · T

    cp_mix: float  # kJ/(kg·K)
    cv_mix: float  # kJ/(kg·K)
    gamma_mix: float

    dynamic_viscosity_pas: float
    thermal_conductivity_wmk: float


@dataclass(frozen=True)
class NCGMixtureResult(MixtureState):
    """Mixture properties plus the flow breakdown for the chosen mode."""

    mode: str = ""

    # Populated only when a flow is supplied
    dry_ncg_flow_kg_h: float | None = None
    water_vapour_flow_kg_h: float | None = None
    total_flow_kg_h: float | None = None
    volumetric_flow_m3h: float | None = None  # at T, P_total

    # seawater mode only
    seawater_info: DissolvedGasResult | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# --- Pure-component transport properties ---


def air_viscosity(T: float) -> float:
    """Dry air dynamic viscosity [Pa·s], Sutherland's law. T in K."""
    return 1.458e-6 * T**1.5 / (T + 110.4)


def steam_viscosity(T: float) -> float:
    """Low-pressure water vapour viscosity [Pa·s], linear fit to NIST, 0–300 °C."""
    return (0.407 * (T - T_CELSIUS_OFFSET) + 80.4) * 1e-7


def air_conductivity(temperature_c: float) -> float:
    """Dry air thermal conductivity [W/(m·K)], 0–200 °C."""
    return 0.02442 + 7.18e-5 * temperature_c


def steam_conductivity(temperature_c: float) -> float:
    """Low-pressure water vapour thermal conductivity [W/(m·K)], 0–300 °C."""
    return 0.01601 + 9.7e-5 * temperature_c


def _wilke_phi(mu_i: float, mu_j: float, M_i: float, M_j: float) -> float:
    return (1.0 + math.sqrt(mu_i / mu_j) * (M_j / M_i) ** 0.25) ** 2 / (
        math.sqrt(8.0) * math.sqrt(1.0 + M_i / M_j)
    )


def wilke_mix(
    y1: float,
    y2: float,
    prop1: float,
    prop2: float,
    mu1: float,
    mu2: float,
    M1: float,
    M2: float,
) -> float:
    """Binary Wilke / Wassiljewa–Mason–Saxena mixing rule.

    With ``prop = mu`` this is Wilke's viscosity rule; with ``prop`` a
    thermal conductivity it is the Wassiljewa rule using the same Φ
    interaction parameters.
    """
    if y1 < _TRACE:
        return prop2
    if y2 < _TRACE:
        return prop1
    phi12 = _wilke_phi(mu1, mu2, M1, M2)
    phi21 = _wilke_phi(mu2, mu1, M2, M1)
    return y1 * prop1 / (y1 + y2 * phi12) + y2 * prop2 / (y2 + y1 * phi21)


# --- Shared mixture routine ---


def mixture_properties(
    temperature_c: float,
    total_pressure_bar: float,
    water_vapour_pressure_bar: float,
    ncg_pressure_bar: float,
    saturation_pressure_bar: float,
    steam: SteamPropertyProvider,
) -> MixtureState:
    """Mixture properties from temperature and the partial pressures.

    Args:
        temperature_c: Mixture temperature [°C].
        total_pressure_bar: Total pressure [bar].
        water_vapour_pressure_bar: Water vapour partial pressure [bar].
        ncg_pressure_bar: NCG partial pressure [bar].
        saturation_pressure_bar: P_sat(T) [bar], reported only.
        steam: Steam property provider (vapour enthalpy).
    """
    T = temperature_c + T_CELSIUS_OFFSET

    y_w = water_vapour_pressure_bar / total_pressure_bar
    y_n = ncg_pressure_bar / total_pressure_bar

    M_mix = y_w * M_H2O + y_n * M_AIR
    x_w = y_w * M_H2O / M_mix
    x_n = y_n * M_AIR / M_mix

    # Ideal gas: P [Pa], M [kg/mol]
    density = total_pressure_bar * BAR_TO_PA * (M_mix * 1e-3) / (R_UNIVERSAL * T)
    specific_volume = 1.0 / density

    h_vapor = steam.enthalpy_vapor(temperature_c)
    h_air = CP_AIR * temperature_c
    h_mix = x_w * h_vapor + x_n * h_air

    # R [J/(mol·K)] / M [g/mol] is already kJ/(kg·K)
    cv_water = CP_VAPOR - R_UNIVERSAL / M_H2O
    cv_air = CP_AIR - R_UNIVERSAL / M_AIR
    cp_mix = x_w * CP_VAPOR + x_n * CP_AIR
    cv_mix = x_w * cv_water + x_n * cv_air

    mu_air = air_viscosity(T)
    mu_steam = steam_viscosity(T)
    mu_mix = wilke_mix(y_n, y_w, mu_air, mu_steam, mu_air, mu_steam, M_AIR, M_H2O)
    k_mix = wilke_mix(
        y_n,
        y_w,
        air_conductivity(temperature_c),
        steam_conductivity(temperature_c),
        mu_air,
        mu_steam,
        M_AIR,
        M_H2O,
    )

    return MixtureState(
        temperature_c=temperature_c,
        total_pressure_bar=total_pressure_bar,
        saturation_pressure_bar=saturation_pressure_bar,
        ncg_partial_pressure_bar=ncg_pressure_bar,
        water_vapour_partial_pressure_bar=water_vapour_pressure_bar,
        water_vapour_mole_frac=y_w,
        ncg_mole_frac=y_n,
        water_vapour_mass_frac=x_w,
        ncg_mass_frac=x_n,
        mix_molar_mass=M_mix,
        density=density,
        specific_volume=specific_volume,
        specific_enthalpy=h_mix,
        vapor_enthalpy=h_vapor,
        air_enthalpy=h_air,
        cp_mix=cp_mix,
        cv_mix=cv_mix,
        gamma_mix=cp_mix / cv_mix,
        dynamic_viscosity_pas=mu_mix,
        thermal_conductivity_wmk=k_mix,
    )


# --- Pressure derivation ---


def _resolve_pressures(
    inp: NCGInput, p_sat: float, result: ValidationResult
) -> tuple[float, float, float]:
    """Return (total, water vapour, NCG) pressures [bar] for the input mode."""
    if isinstance(inp, SplitFlowsInput):
        if inp.vapour_flow_kg_h is None or inp.vapour_flow_kg_h <= 0:
            result.error(
                "water vapour flow",
                f"water vapour flow must be positive in split_flows mode, got {inp.vapour_flow_kg_h}",
            )
        validate_non_negative("NCG flow", inp.dry_ncg_flow_kg_h, result)
        result.raise_for_errors()

        # Molar flows in kmol/h; only the ratio matters
        n_ncg = inp.dry_ncg_flow_kg_h / M_AIR
        n_h2o = inp.vapour_flow_kg_h / M_H2O
        y_w = n_h2o / (n_ncg + n_h2o)
        total = p_sat / y_w
        return total, p_sat, total - p_sat

    validate_positive("pressure", inp.pressure_bar, result)
    result.raise_for_errors()

    total = p_sat + inp.pressure_bar if inp.use_sat_pressure else inp.pressure_bar
    if not inp.use_sat_pressure and total < p_sat:
        raise InputValidationError(
            f"Total pressure ({total:.4f} bar) is below the saturation pressure at "
            f"{inp.temperature_c} °C ({p_sat:.4f} bar). Either raise the pressure "
            f"or lower the temperature.",
            parameter="pressure",
        )
    p_water = min(p_sat, total)
    return total, p_water, max(0.0, total - p_water)


# --- Public API ---


def calculate_ncg_properties(
    inp: NCGInput, steam: SteamPropertyProvider | None = None
) -> NCGMixtureResult:
    """Calculate thermophysical properties of an NCG + water vapour mixture.

    Args:
        inp: One of the NCG input variants (see module docstring).
        steam: Steam property provider; CoolProp when omitted.

    Returns:
        NCGMixtureResult.

    Raises:
        InputValidationError: When conditions are out of range or physically
            impossible (e.g. total pressure below P_sat).
    """
    steam = resolve_steam(steam)
    result = ValidationResult()
    validate_range("temperature", inp.temperature_c, T_MIN_C, T_MAX_C, result)
    if isinstance(inp, SeawaterInput):
        validate_non_negative("seawater flow", inp.seawater_flow_m3h, result)
    result.raise_for_errors()

    p_sat = steam.saturation_pressure(inp.temperature_c)
    total, p_water, p_ncg = _resolve_pressures(inp, p_sat, result)
    mix = mixture_properties(inp.temperature_c, total, p_water, p_ncg, p_sat, steam)
    logger.debug(
        "NCG %s: T=%.2f °C P=%.5f bar y_H2O=%.4f rho=%.5f kg/m³",
        inp.mode,
        inp.temperature_c,
        total,
        mix.water_vapour_mole_frac,
        mix.density,
    )

    x_w, x_n = mix.water_vapour_mass_frac, mix.ncg_mass_frac
    dry = vapour = total_flow = None
    seawater_info = None

    if isinstance(inp, SeawaterInput):
        gas_temp = inp.temperature_c if inp.seawater_temp_c is None else inp.seawater_temp_c
        seawater_info = dissolved_gas_content(gas_temp, inp.salinity_gkg)
        # mg/L · m³/h · 1000 L/m³ · 1e-6 kg/mg
        dry = seawater_info.total_gas_mg_l * inp.seawater_flow_m3h * 1e-3
        vapour = dry * (x_w / x_n) if mix.ncg_mole_frac > _TRACE else 0.0
        total_flow = dry + vapour
    elif isinstance(inp, DryNCGInput) and inp.dry_ncg_flow_kg_h is not None:
        dry = inp.dry_ncg_flow_kg_h
        vapour = dry * (x_w / x_n) if mix.ncg_mole_frac > _TRACE else 0.0
        total_flow = dry + vapour
    elif isinstance(inp, WetNCGInput) and inp.wet_ncg_flow_kg_h is not None:
        total_flow = inp.wet_ncg_flow_kg_h
        dry = total_flow * x_n
        vapour = total_flow * x_w
    elif isinstance(inp, SplitFlowsInput):
        dry = inp.dry_ncg_flow_kg_h
        vapour = inp.vapour_flow_kg_h
        total_flow = dry + vapour

    return NCGMixtureResult(
        **asdict(mix),
        mode=inp.mode,
        dry_ncg_flow_kg_h=dry,
        water_vapour_flow_kg_h=vapour,
        total_flow_kg_h=total_flow,
        volumetric_flow_m3h=None if total_flow is None else total_flow * mix.specific_volume,
        seawater_info=seawater_info,
    )
