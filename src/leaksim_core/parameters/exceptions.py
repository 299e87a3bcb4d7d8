# src/leaksim_core/parameters/exceptions.py
"""
Defines the custom, diagnosable exceptions for the parameter subsystem.

The parameter subsystem is the boundary where user-supplied values (YAML
strings, slider updates) become the positive, finite SI floats the engine
assumes. Every rejection carries the parameter name, the offending input and
its source so the report points straight at the fix.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..errors import DiagnosableError, format_diagnostic_report


class ParameterError(DiagnosableError):
    """
    A concrete base class for all parameter-related errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parameter Error",
            details=str(self),
            suggestion="Review the circuit parameters of the experiment for correctness.",
            context={}
        )


@dataclass(frozen=True)
class ParameterDefinitionError(ParameterError):
    """Raised when a single parameter value cannot be converted or is out of range."""
    name: str
    user_input: Any
    source: Path
    details: str

    def __str__(self):
        return (f"Parameter '{self.name}': {self.details} "
                f"(input: '{self.user_input}', source: '{self.source}')")

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Parameter Definition",
            details=self.details,
            suggestion="Give the value as a number in SI units or as a string with compatible units (e.g. '10 V', '2.2 Mohm', '4.7 uF'). Circuit values must be strictly positive.",
            context={
                'parameter': self.name,
                'source_file': self.source,
                'user_input': str(self.user_input),
            }
        )


@dataclass(frozen=True)
class UnknownParameterError(ParameterError):
    """Raised when an update names a parameter the circuit does not have."""
    name: str
    known_names: tuple

    def __str__(self):
        return f"Unknown parameter '{self.name}'. Known parameters: {list(self.known_names)}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unknown Parameter",
            details=str(self),
            suggestion="Check the spelling of the parameter name.",
            context={'parameter': self.name}
        )
