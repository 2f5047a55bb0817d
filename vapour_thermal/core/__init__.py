"""Core calculation modules for Vapour Thermal.

This package contains the engineering calculations:
- steam: steam property provider interface (CoolProp default)
- dissolved_gas: O₂/N₂ solubility in seawater (Weiss 1970)
- ncg: NCG / water-vapour mixture properties
- tvc: thermo-vapour compressor performance (1-D model)
- config: JSON case files and result persistence
"""

from vapour_thermal.core.dissolved_gas import DissolvedGasResult, dissolved_gas_content
from vapour_thermal.core.ncg import (
    DryNCGInput,
    NCGMixtureResult,
    SeawaterInput,
    SplitFlowsInput,
    WetNCGInput,
    calculate_ncg_properties,
)
from vapour_thermal.core.steam import CoolPropSteam, SteamPropertyProvider
from vapour_thermal.core.tvc import TVCInput, TVCResult, calculate_tvc

__all__ = [
    "CoolPropSteam",
    "DissolvedGasResult",
    "DryNCGInput",
    "NCGMixtureResult",
    "SeawaterInput",
    "SplitFlowsInput",
    "SteamPropertyProvider",
    "TVCInput",
    "TVCResult",
    "WetNCGInput",
    "calculate_ncg_properties",
    "calculate_tvc",
    "dissolved_gas_content",
]
