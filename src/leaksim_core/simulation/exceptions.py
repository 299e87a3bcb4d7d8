# src/leaksim_core/simulation/exceptions.py
"""
Diagnosable exceptions raised while running a scripted procedure.

The integration engine and sample logger themselves define no error cases:
every mode transition is total and every update is defined for positive
circuit parameters. Only the procedure runner, which interprets user-written
steps, can reject input.
"""
from dataclasses import dataclass
from typing import Any

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(frozen=True)
class ProcedureError(DiagnosableError):
    """Raised when a procedure step names an unknown command or has an invalid duration."""
    step_index: int
    command: str
    details: str
    user_input: Any = None

    def __str__(self):
        return f"Procedure step {self.step_index} ('{self.command}'): {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Procedure Step",
            details=self.details,
            suggestion="Each step needs a command (charge, discharge, stop or reset) and an optional non-negative duration such as '30 s'.",
            context={
                'step': f"#{self.step_index} ({self.command})",
                'user_input': None if self.user_input is None else str(self.user_input),
            }
        )
