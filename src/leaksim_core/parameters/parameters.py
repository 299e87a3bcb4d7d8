# src/leaksim_core/parameters/parameters.py

"""
Circuit parameters of the leakage experiment and their unit-aware resolution.

`SimulationParameters` is a plain, immutable container of SI floats. It does not
validate itself: the engine treats it as trusted input. Validation lives in
`resolve_quantity` / `resolve_parameters`, which every configuration path
(YAML files, `SimulationParameters.from_raw`, `with_updates`) goes through.
That pair guarantees the precondition the integrator relies on:
source voltage, resistance and capacitance are finite and strictly positive.
"""

import logging
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import pint

from ..units import ureg, Quantity
from .exceptions import ParameterDefinitionError, UnknownParameterError

logger = logging.getLogger(__name__)

#: SI unit each circuit parameter is stored in.
PARAMETER_UNITS: Dict[str, str] = {
    "source_voltage": "volt",
    "resistance": "ohm",
    "capacitance": "farad",
}

#: Source reported in diagnostics for values that did not come from a file.
PROGRAMMATIC_SOURCE = Path("<programmatic>")


def resolve_quantity(
    name: str,
    raw_value: Any,
    unit: str,
    source: Path = PROGRAMMATIC_SOURCE,
    allow_zero: bool = False,
) -> float:
    """
    Converts a user-supplied value into a finite float in the given SI unit.

    Numbers are taken to be in SI units already. Strings are parsed by pint;
    a unitless string ("5") is also read as SI.

    Raises:
        ParameterDefinitionError: On unparsable input, incompatible units,
            non-finite values, or values that are negative (or zero, unless
            `allow_zero` is set).
    """
    if isinstance(raw_value, bool) or raw_value is None:
        raise ParameterDefinitionError(name, raw_value, source, "A numeric value or a quantity string is required.")

    try:
        if isinstance(raw_value, (int, float)):
            magnitude = float(raw_value)
        elif isinstance(raw_value, str):
            qty = ureg.Quantity(raw_value)
            if qty.dimensionless:
                magnitude = float(qty.to("dimensionless").magnitude)
            else:
                magnitude = float(qty.to(unit).magnitude)
        elif isinstance(raw_value, Quantity):
            magnitude = float(raw_value.to(unit).magnitude)
        else:
            raise ParameterDefinitionError(
                name, raw_value, source,
                f"Unsupported value type '{type(raw_value).__name__}'."
            )
    except pint.DimensionalityError as e:
        raise ParameterDefinitionError(
            name, raw_value, source,
            f"Value is not dimensionally compatible with '{unit}': {e}"
        ) from e
    except (pint.errors.PintError, ValueError, TypeError, AttributeError, SyntaxError) as e:
        raise ParameterDefinitionError(name, raw_value, source, f"Could not parse value: {e}") from e

    if not math.isfinite(magnitude):
        raise ParameterDefinitionError(name, raw_value, source, f"Value must be finite, got {magnitude}.")
    if magnitude < 0.0 or (magnitude == 0.0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise ParameterDefinitionError(name, raw_value, source, f"Value must be {bound}, got {magnitude} {unit}.")

    logger.debug(f"Resolved parameter '{name}' = {magnitude:.6g} {unit} (input: {raw_value!r}).")
    return magnitude


@dataclass(frozen=True)
class SimulationParameters:
    """
    Bench configuration for one experiment, in SI units.

    Attributes:
        source_voltage: Voltage the capacitor charges towards, in volts.
        resistance: Leakage path resistance the capacitor discharges through, in ohms.
        capacitance: Capacitance under test, in farads.
    """
    source_voltage: float
    resistance: float
    capacitance: float

    @property
    def time_constant(self) -> float:
        """RC time constant in seconds."""
        return self.resistance * self.capacitance

    @classmethod
    def from_raw(
        cls,
        raw: Dict[str, Any],
        source: Path = PROGRAMMATIC_SOURCE,
        defaults: Optional["SimulationParameters"] = None,
    ) -> "SimulationParameters":
        """Validated construction from raw values; see `resolve_parameters`."""
        return resolve_parameters(raw, source=source, defaults=defaults)

    def with_updates(self, **changes: Any) -> "SimulationParameters":
        """Returns a new validated instance with the given parameters replaced."""
        return resolve_parameters(changes, defaults=self)

    def as_quantities(self) -> Dict[str, Quantity]:
        """The parameters as pint quantities, for display."""
        return {f.name: Quantity(getattr(self, f.name), PARAMETER_UNITS[f.name]) for f in fields(self)}


def resolve_parameters(
    raw: Dict[str, Any],
    source: Path = PROGRAMMATIC_SOURCE,
    defaults: Optional[SimulationParameters] = None,
) -> SimulationParameters:
    """
    Builds a `SimulationParameters` from raw values, filling gaps from `defaults`.

    Args:
        raw: Mapping of parameter name to number or quantity string.
        source: Where the values came from, for diagnostics.
        defaults: Values for parameters missing from `raw`. Defaults to
                  `INITIAL_PARAMETERS`.

    Raises:
        UnknownParameterError: If `raw` names a parameter that does not exist.
        ParameterDefinitionError: If any value is invalid.
    """
    base = defaults if defaults is not None else INITIAL_PARAMETERS
    resolved: Dict[str, float] = {}
    for name in raw:
        if name not in PARAMETER_UNITS:
            raise UnknownParameterError(name, tuple(PARAMETER_UNITS))

    for name, unit in PARAMETER_UNITS.items():
        if name in raw:
            resolved[name] = resolve_quantity(name, raw[name], unit, source)
        else:
            resolved[name] = getattr(base, name)

    params = SimulationParameters(**resolved)
    logger.info(
        f"Circuit parameters: V0={params.source_voltage:.4g} V, R={params.resistance:.4g} ohm, "
        f"C={params.capacitance:.4g} F (RC={params.time_constant:.4g} s)"
    )
    return params


#: Bench settings at start-up: 10 V source, 2 MOhm leakage resistor, 10 uF capacitor.
INITIAL_PARAMETERS = SimulationParameters(
    source_voltage=10.0,
    resistance=2.0e6,
    capacitance=10.0e-6,
)
