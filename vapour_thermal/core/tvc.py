"""Thermo-vapour compressor (steam ejector) performance.

One-dimensional constant-pressure mixing model (Huang et al. 1999) as used
for MED-TVC sizing. The theoretical entrainment ratio is the energy-balance
limit for lossless mixing to saturated discharge vapour:

    Ra_theo = (h_m − h_d,sat) / (h_d,sat − h_s)

and the actual ratio applies the ejector efficiency

    η_ej = η_nozzle · η_mixing · η_diffuser · exp(−k·(CR − 1))

where CR is the compression ratio P_discharge / P_suction. Flows are in
t/h, pressures in bar abs, temperatures in °C, enthalpies in kJ/kg.

Reference: Huang B.J., Chang J.M., Wang C.P., Petrenko V.A. (1999).
"A 1-D analysis of ejector performance." Int. J. Refrigeration 22, 354–364.
"""

from __future__ import annotations

import logging
import math
from dataclasses import MISSING, asdict, dataclass, fields
from typing import Any, Mapping

from scipy.optimize import brentq

from vapour_thermal.core.steam import SteamPropertyProvider, resolve_steam
from vapour_thermal.utils.validation import (
    InputValidationError,
    ValidationResult,
    require_number,
    validate_fraction,
)

logger = logging.getLogger(__name__)

DEFAULT_NOZZLE_EFFICIENCY = 0.92
DEFAULT_MIXING_EFFICIENCY = 0.85
DEFAULT_DIFFUSER_EFFICIENCY = 0.78

# Loss growth with required compression
CR_CORRECTION_K = 1.0

MAX_COMPRESSION_RATIO = 2.5  # single-stage limit
WARN_COMPRESSION_RATIO = 2.2
LOW_ENTRAINMENT_RATIO = 0.1
HIGH_ENTRAINMENT_RATIO = 2.0
LOW_SUPERHEAT_C = 1.0
HIGH_SUPERHEAT_C = 50.0


@dataclass(frozen=True)
class TVCInput:
    """TVC operating point.

    Exactly one of ``entrained_flow`` / ``motive_flow`` is given; the other
    is derived. Without ``motive_temperature`` the motive steam is dry
    saturated. Omitted efficiencies take the module defaults.
    """

    motive_pressure: float  # bar abs
    suction_pressure: float  # bar abs
    discharge_pressure: float  # bar abs
    entrained_flow: float | None = None  # t/h
    motive_flow: float | None = None  # t/h
    motive_temperature: float | None = None  # °C
    nozzle_efficiency: float | None = None
    mixing_efficiency: float | None = None
    diffuser_efficiency: float | None = None


@dataclass(frozen=True)
class TVCResult:
    """TVC performance at the requested operating point."""

    compression_ratio: float  # Pd / Ps
    expansion_ratio: float  # Pm / Ps
    theoretical_entrainment_ratio: float
    entrainment_ratio: float  # actual, entrained / motive
    ejector_efficiency: float
    nozzle_efficiency: float
    mixing_efficiency: float
    diffuser_efficiency: float

    motive_sat_temperature: float
    suction_sat_temperature: float
    discharge_sat_temperature: float

    motive_enthalpy: float
    suction_enthalpy: float
    discharge_enthalpy: float

    discharge_temperature: float
    discharge_superheat: float

    motive_flow: float  # t/h
    entrained_flow: float
    discharge_flow: float

    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["warnings"] = list(self.warnings)
        return data


def tvc_input_from_dict(data: Mapping[str, Any]) -> TVCInput:
    """Build a TVCInput from a plain mapping such as a case-file ``input``.

    A ``None`` value counts as not supplied.

    Raises:
        InputValidationError: If a key is unknown, a pressure is missing, or
            a value is not a number.
    """
    names = {f.name for f in fields(TVCInput)}
    unknown = sorted(set(data) - names)
    if unknown:
        raise InputValidationError(
            f"Invalid TVC input: unknown field(s) {', '.join(unknown)}", parameter=unknown[0]
        )
    kwargs: dict[str, Any] = {}
    for f in fields(TVCInput):
        value = data.get(f.name)
        if value is None:
            if f.default is MISSING:
                raise InputValidationError(
                    f"Invalid TVC input: {f.name} is required", parameter=f.name
                )
            continue
        kwargs[f.name] = require_number(f.name, value)
    return TVCInput(**kwargs)


def _validate_input(inp: TVCInput) -> tuple[float, float, float]:
    """Check the operating point; return the efficiencies to use."""
    result = ValidationResult()
    pm, ps, pd = inp.motive_pressure, inp.suction_pressure, inp.discharge_pressure

    if pm <= 0 or ps <= 0 or pd <= 0:
        raise InputValidationError("All pressures must be positive", parameter="pressure")
    if pm <= pd:
        result.error(
            "motive pressure",
            f"Motive pressure ({pm} bar) must be greater than discharge pressure ({pd} bar)",
        )
    if pd <= ps:
        result.error(
            "discharge pressure",
            f"Discharge pressure ({pd} bar) must be greater than suction pressure ({ps} bar)",
        )

    has_entrained = inp.entrained_flow is not None and inp.entrained_flow > 0
    has_motive = inp.motive_flow is not None and inp.motive_flow > 0
    if not (has_entrained or has_motive):
        result.error("flow", "Specify either entrained flow or motive flow (positive value)")
    elif inp.entrained_flow is not None and inp.motive_flow is not None:
        result.error("flow", "Specify either entrained flow or motive flow, not both")

    efficiencies = []
    for label, value, default in (
        ("Nozzle efficiency", inp.nozzle_efficiency, DEFAULT_NOZZLE_EFFICIENCY),
        ("Mixing efficiency", inp.mixing_efficiency, DEFAULT_MIXING_EFFICIENCY),
        ("Diffuser efficiency", inp.diffuser_efficiency, DEFAULT_DIFFUSER_EFFICIENCY),
    ):
        if value is None:
            value = default
        validate_fraction(label, value, result)
        efficiencies.append(value)
    result.raise_for_errors()

    cr = pd / ps
    if cr > MAX_COMPRESSION_RATIO:
        raise InputValidationError(
            f"Required compression ratio {cr:.2f} exceeds single-stage limit of "
            f"{MAX_COMPRESSION_RATIO}. Use a multi-stage ejector or raise suction pressure.",
            parameter="compression ratio",
        )
    return efficiencies[0], efficiencies[1], efficiencies[2]


def ejector_efficiency(
    compression_ratio: float,
    nozzle_efficiency: float = DEFAULT_NOZZLE_EFFICIENCY,
    mixing_efficiency: float = DEFAULT_MIXING_EFFICIENCY,
    diffuser_efficiency: float = DEFAULT_DIFFUSER_EFFICIENCY,
) -> float:
    """Overall ejector efficiency including the compression-ratio correction."""
    f_cr = math.exp(-CR_CORRECTION_K * (compression_ratio - 1.0))
    return nozzle_efficiency * mixing_efficiency * diffuser_efficiency * f_cr


def discharge_temperature(
    discharge_pressure: float,
    discharge_enthalpy: float,
    steam: SteamPropertyProvider,
) -> float:
    """Temperature [°C] of vapour at *discharge_pressure* with the given enthalpy.

    Returns the saturation temperature when the enthalpy does not exceed
    the saturated-vapour enthalpy.
    """
    t_sat = steam.saturation_temperature(discharge_pressure)

    def residual(T: float) -> float:
        return steam.enthalpy_superheated(discharge_pressure, T) - discharge_enthalpy

    if residual(t_sat) >= 0.0:
        return t_sat

    span = 50.0
    while residual(t_sat + span) < 0.0:
        span *= 2.0
        if span > 1000.0:
            raise InputValidationError(
                f"Discharge enthalpy {discharge_enthalpy:.1f} kJ/kg is beyond the vapour range "
                f"at {discharge_pressure} bar",
                parameter="discharge enthalpy",
            )
    return brentq(residual, t_sat, t_sat + span, xtol=1e-6)


def calculate_tvc(inp: TVCInput, steam: SteamPropertyProvider | None = None) -> TVCResult:
    """Calculate TVC performance with the 1-D constant-pressure mixing model.

    Args:
        inp: Operating point.
        steam: Steam property provider; CoolProp when omitted.

    Returns:
        TVCResult with entrainment ratios, flows, discharge state and
        advisory warnings.

    Raises:
        InputValidationError: For invalid pressures, flows or efficiencies,
            or a compression ratio beyond the single-stage limit.
    """
    eta_n, eta_m, eta_d = _validate_input(inp)
    steam = resolve_steam(steam)
    pm, ps, pd = inp.motive_pressure, inp.suction_pressure, inp.discharge_pressure

    cr = pd / ps
    er = pm / ps

    t_sat_m = steam.saturation_temperature(pm)
    t_sat_s = steam.saturation_temperature(ps)
    t_sat_d = steam.saturation_temperature(pd)

    if inp.motive_temperature is not None and steam.is_superheated(pm, inp.motive_temperature):
        h_m = steam.enthalpy_superheated(pm, inp.motive_temperature)
    else:
        h_m = steam.enthalpy_vapor(t_sat_m)
    h_s = steam.enthalpy_vapor(t_sat_s)
    h_d_sat = steam.enthalpy_vapor(t_sat_d)

    if h_m <= h_d_sat:
        raise InputValidationError(
            f"Motive steam enthalpy ({h_m:.1f} kJ/kg) must exceed the saturated discharge "
            f"vapour enthalpy ({h_d_sat:.1f} kJ/kg)",
            parameter="motive enthalpy",
        )
    ra_theo = (h_m - h_d_sat) / (h_d_sat - h_s)
    eta_ej = ejector_efficiency(cr, eta_n, eta_m, eta_d)
    ra = ra_theo * eta_ej

    if inp.entrained_flow is not None:
        entrained = inp.entrained_flow
        motive = entrained / ra
    else:
        motive = inp.motive_flow
        entrained = motive * ra
    discharge = motive + entrained

    h_d = (motive * h_m + entrained * h_s) / discharge
    t_d = discharge_temperature(pd, h_d, steam)
    superheat = t_d - t_sat_d

    checks = ValidationResult()
    if cr > WARN_COMPRESSION_RATIO:
        checks.warning(
            "compression ratio",
            f"Compression ratio {cr:.2f} is above typical limit ({WARN_COMPRESSION_RATIO}) "
            f"for single-stage TVC",
        )
    if ra < LOW_ENTRAINMENT_RATIO:
        checks.warning(
            "entrainment ratio",
            f"Low entrainment ratio ({ra:.3f}): TVC is marginal, consider higher motive pressure",
        )
    elif ra > HIGH_ENTRAINMENT_RATIO:
        checks.warning(
            "entrainment ratio",
            f"High entrainment ratio ({ra:.2f}): verify against vendor performance curves",
        )
    if superheat < LOW_SUPERHEAT_C:
        checks.warning(
            "discharge superheat",
            f"Discharge superheat {superheat:.1f} °C is very low: risk of wet discharge vapour",
        )
    elif superheat > HIGH_SUPERHEAT_C:
        checks.warning(
            "discharge superheat",
            f"Discharge superheat {superheat:.1f} °C is high: desuperheating recommended",
        )
    warnings = tuple(m.message for m in checks.warnings)
    for w in warnings:
        logger.warning("TVC: %s", w)

    logger.debug(
        "TVC CR=%.3f Ra_theo=%.4f eta=%.4f Ra=%.4f T_d=%.2f °C", cr, ra_theo, eta_ej, ra, t_d
    )

    return TVCResult(
        compression_ratio=cr,
        expansion_ratio=er,
        theoretical_entrainment_ratio=ra_theo,
        entrainment_ratio=ra,
        ejector_efficiency=eta_ej,
        nozzle_efficiency=eta_n,
        mixing_efficiency=eta_m,
        diffuser_efficiency=eta_d,
        motive_sat_temperature=t_sat_m,
        suction_sat_temperature=t_sat_s,
        discharge_sat_temperature=t_sat_d,
        motive_enthalpy=h_m,
        suction_enthalpy=h_s,
        discharge_enthalpy=h_d,
        discharge_temperature=t_d,
        discharge_superheat=superheat,
        motive_flow=motive,
        entrained_flow=entrained,
        discharge_flow=discharge,
        warnings=warnings,
    )
