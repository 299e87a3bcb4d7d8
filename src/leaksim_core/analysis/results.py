# src/leaksim_core/analysis/results.py
from dataclasses import dataclass


@dataclass(frozen=True)
class LeakageFitResult:
    """
    Result of fitting ``V(t) = V0 * exp(-t / RC)`` to logged discharge samples.

    Attributes:
        resistance: Estimated leakage resistance in ohms.
        initial_voltage: Fitted voltage at t = 0 in volts.
        time_constant: Fitted RC in seconds.
        num_points: Number of samples used by the fit.
    """
    resistance: float
    initial_voltage: float
    time_constant: float
    num_points: int
