# src/leaksim_core/analysis/__init__.py
"""
Lab-manual arithmetic for the leakage method: the expected decay curve and the
resistance recovered from readings, either from a single (t, Vt) pair or from a
fit over the whole logged discharge.
"""
from .results import LeakageFitResult
from .tools import estimate_resistance, expected_voltage, fit_resistance, time_constant
from .exceptions import AnalysisError

__all__ = [
    "LeakageFitResult",
    "estimate_resistance",
    "expected_voltage",
    "fit_resistance",
    "time_constant",
    "AnalysisError",
]
