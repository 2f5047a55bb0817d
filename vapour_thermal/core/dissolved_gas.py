"""Dissolved oxygen and nitrogen in seawater.

Air-saturation equilibrium concentrations from the Weiss (1970)
correlation:

    ln C = A1 + A2·(100/T) + A3·ln(T/100) + A4·(T/100)
           + S·[B1 + B2·(T/100) + B3·(T/100)²]

with T in Kelvin, S in g/kg and C in mL(STP) per litre of seawater.

Reference: Weiss R.F. (1970). "The solubility of nitrogen, oxygen and
argon in water and seawater." Deep-Sea Research 17, 721–735.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass

import numpy as np

from vapour_thermal.utils.constants import M_N2, M_O2, MOLAR_VOLUME_STP, T_CELSIUS_OFFSET

# Validated range of the fit [°C]
WEISS_T_MIN = 0.0
WEISS_T_MAX = 36.0
# Evaluation clamp; above this the dissolved gas content is negligible
_T_EVAL_MAX = 80.0

_O2_A = (-173.4292, 249.6339, 143.3483, -21.8492)
_O2_B = (-0.033096, 0.014259, -0.0017)
_N2_A = (-172.4965, 248.4262, 143.0738, -21.712)
_N2_B = (-0.049781, 0.025018, -0.0034861)

# mg per mL(STP)
O2_MG_PER_ML = M_O2 / MOLAR_VOLUME_STP
N2_MG_PER_ML = M_N2 / MOLAR_VOLUME_STP


@dataclass(frozen=True)
class DissolvedGasResult:
    """Dissolved gas content of seawater at air-saturation equilibrium."""

    gas_temperature_c: float  # temperature the correlation was evaluated at
    salinity_gkg: float
    o2_ml_l: float  # mL(STP)/L
    n2_ml_l: float
    o2_mg_l: float  # mg/L
    n2_mg_l: float
    total_gas_mg_l: float
    extrapolated: bool  # True outside the 0–36 °C validated range

    def to_dict(self) -> dict:
        return asdict(self)


def weiss_concentration(
    A: tuple[float, float, float, float],
    B: tuple[float, float, float],
    temperature_c: float,
    salinity_gkg: float,
) -> float:
    """Evaluate the Weiss (1970) fit; returns mL(STP)/L."""
    t = (temperature_c + T_CELSIUS_OFFSET) / 100.0
    ln_c = (
        A[0]
        + A[1] / t
        + A[2] * math.log(t)
        + A[3] * t
        + salinity_gkg * (B[0] + B[1] * t + B[2] * t * t)
    )
    return math.exp(ln_c)


def dissolved_gas_content(temperature_c: float, salinity_gkg: float = 35.0) -> DissolvedGasResult:
    """Dissolved O₂ and N₂ in seawater in equilibrium with air.

    Concentrations outside the validated 0–36 °C range are still returned
    but flagged as extrapolated. The fit is evaluated at the temperature
    clamped to [0, 80] °C.

    Args:
        temperature_c: Seawater temperature [°C].
        salinity_gkg: Salinity [g/kg] (default 35).

    Returns:
        DissolvedGasResult with mL/L and mg/L concentrations.
    """
    extrapolated = temperature_c < WEISS_T_MIN or temperature_c > WEISS_T_MAX
    t_calc = min(max(temperature_c, WEISS_T_MIN), _T_EVAL_MAX)

    o2_ml_l = weiss_concentration(_O2_A, _O2_B, t_calc, salinity_gkg)
    n2_ml_l = weiss_concentration(_N2_A, _N2_B, t_calc, salinity_gkg)
    o2_mg_l = o2_ml_l * O2_MG_PER_ML
    n2_mg_l = n2_ml_l * N2_MG_PER_ML

    return DissolvedGasResult(
        gas_temperature_c=t_calc,
        salinity_gkg=salinity_gkg,
        o2_ml_l=o2_ml_l,
        n2_ml_l=n2_ml_l,
        o2_mg_l=o2_mg_l,
        n2_mg_l=n2_mg_l,
        total_gas_mg_l=o2_mg_l + n2_mg_l,
        extrapolated=extrapolated,
    )


def dissolved_gas_profile(
    temperatures: np.ndarray | list[float], salinity_gkg: float = 35.0
) -> dict[str, np.ndarray]:
    """Evaluate the dissolved gas content over a range of temperatures.

    Args:
        temperatures: Seawater temperatures [°C].
        salinity_gkg: Salinity [g/kg].

    Returns:
        Dict of arrays keyed by ``temperature_c``, ``o2_mg_l``, ``n2_mg_l``,
        ``total_gas_mg_l`` and ``extrapolated``.
    """
    temps = np.asarray(temperatures, dtype=float)
    points = [dissolved_gas_content(float(t), salinity_gkg) for t in temps]
    return {
        "temperature_c": temps,
        "o2_mg_l": np.array([p.o2_mg_l for p in points]),
        "n2_mg_l": np.array([p.n2_mg_l for p in points]),
        "total_gas_mg_l": np.array([p.total_gas_mg_l for p in points]),
        "extrapolated": np.array([p.extrapolated for p in points], dtype=bool),
    }
