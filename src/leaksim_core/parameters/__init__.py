# src/leaksim_core/parameters/__init__.py
from .exceptions import (
    ParameterError,
    ParameterDefinitionError,
    UnknownParameterError,
)
from .parameters import (
    INITIAL_PARAMETERS,
    PARAMETER_UNITS,
    PROGRAMMATIC_SOURCE,
    SimulationParameters,
    resolve_parameters,
    resolve_quantity,
)

__all__ = [
    # Exceptions
    "ParameterError",
    "ParameterDefinitionError",
    "UnknownParameterError",
    # Core Classes
    "SimulationParameters",
    "INITIAL_PARAMETERS",
    "PARAMETER_UNITS",
    "PROGRAMMATIC_SOURCE",
    "resolve_parameters",
    "resolve_quantity",
]
