"""Calculation case files and result persistence.

A case file is a JSON document naming the calculator and its inputs:

    {
      "meta": {"name": "MED-1 vent condenser", "author": "..."},
      "calculator": "ncg",
      "input": {"mode": "dry_ncg", "temperature_c": 40, ...}
    }

``run_case`` evaluates it; ``save_result_json`` writes the case together
with the result so a calculation can be reproduced from its output.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from vapour_thermal.core.dissolved_gas import DissolvedGasResult, dissolved_gas_content
from vapour_thermal.core.ncg import NCGMixtureResult, calculate_ncg_properties, ncg_input_from_dict
from vapour_thermal.core.steam import SteamPropertyProvider
from vapour_thermal.core.tvc import TVCResult, calculate_tvc, tvc_input_from_dict
from vapour_thermal.utils.validation import InputValidationError, require_number

logger = logging.getLogger(__name__)

CALCULATORS = ("dissolved_gas", "ncg", "tvc")


@dataclass
class CaseMeta:
    """Case metadata."""

    name: str = "Untitled"
    description: str = ""
    author: str = ""
    created: str = ""
    modified: str = ""

    def touch(self) -> None:
        """Update the modified timestamp."""
        self.modified = datetime.now(timezone.utc).isoformat()


@dataclass
class CalculationCase:
    """A calculator name plus its raw input mapping."""

    calculator: str
    input: dict[str, Any] = field(default_factory=dict)
    meta: CaseMeta = field(default_factory=CaseMeta)


class _NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        if isinstance(obj, (np.bool_,)):
            return bool(obj)
        return super().default(obj)


def load_case_json(path: str | Path) -> CalculationCase:
    """Load a calculation case from a JSON file.

    Raises:
        InputValidationError: If the calculator name is missing or unknown.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    calculator = data.get("calculator")
    if calculator not in CALCULATORS:
        raise InputValidationError(
            f"Unknown calculator '{calculator}' in {path}. Available: {list(CALCULATORS)}",
            parameter="calculator",
        )
    meta_fields = {f.name for f in fields(CaseMeta)}
    meta = CaseMeta(**{k: v for k, v in (data.get("meta") or {}).items() if k in meta_fields})
    return CalculationCase(calculator=calculator, input=dict(data.get("input") or {}), meta=meta)


def save_case_json(case: CalculationCase, path: str | Path) -> None:
    """Save a calculation case (inputs only) to JSON."""
    path = Path(path)
    case.meta.touch()
    if not case.meta.created:
        case.meta.created = case.meta.modified
    with open(path, "w") as f:
        json.dump(asdict(case), f, indent=2, cls=_NumpyEncoder)
    logger.info("Saved case to %s", path)


def run_case(
    case: CalculationCase, steam: SteamPropertyProvider | None = None
) -> DissolvedGasResult | NCGMixtureResult | TVCResult:
    """Evaluate a calculation case with the matching calculator.

    Raises:
        InputValidationError: If the calculator is unknown or its inputs are
            missing, mistyped or out of range.
    """
    logger.debug("Running %s case '%s'", case.calculator, case.meta.name)
    if case.calculator == "dissolved_gas":
        temperature = case.input.get("temperature_c")
        if temperature is None:
            raise InputValidationError(
                "Incomplete 'dissolved_gas' input: temperature_c is required",
                parameter="temperature_c",
            )
        salinity = case.input.get("salinity_gkg")
        return dissolved_gas_content(
            require_number("temperature_c", temperature),
            35.0 if salinity is None else require_number("salinity_gkg", salinity),
        )
    if case.calculator == "ncg":
        return calculate_ncg_properties(ncg_input_from_dict(case.input), steam=steam)
    if case.calculator == "tvc":
        return calculate_tvc(tvc_input_from_dict(case.input), steam=steam)
    raise InputValidationError(f"Unknown calculator '{case.calculator}'", parameter="calculator")


def save_result_json(
    result: Any, path: str | Path, case: CalculationCase | None = None
) -> None:
    """Write a result (and optionally the case that produced it) to JSON.

    ``result`` is a calculator result with ``to_dict()`` or a plain mapping
    (numpy arrays are converted to lists).
    """
    path = Path(path)
    payload: dict[str, Any] = {}
    if case is not None:
        case.meta.touch()
        payload.update(asdict(case))
    payload["result"] = result.to_dict() if hasattr(result, "to_dict") else result

    with open(path, "w") as f:
        json.dump(payload, f, indent=2, cls=_NumpyEncoder)
    logger.info("Saved result to %s", path)
