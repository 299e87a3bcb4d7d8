# src/leaksim_core/analysis/exceptions.py
"""
Defines custom, diagnosable exceptions for the leakage analysis tools.
"""
from dataclasses import dataclass
from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class AnalysisError(ValueError, DiagnosableError):
    """Raised when bench readings cannot yield a resistance estimate."""
    details: str

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Leakage Analysis Error",
            details=self.details,
            suggestion="Take the reading during the discharge phase, after some time has elapsed, while the voltage is still clearly above zero.",
            context={}
        )
