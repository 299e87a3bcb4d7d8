# src/leaksim_core/analysis/tools.py
import logging
import math
from typing import Sequence, Tuple, Union

import numpy as np

from ..parameters import SimulationParameters
from ..simulation.sampling import DataPoint
from .exceptions import AnalysisError
from .results import LeakageFitResult

logger = logging.getLogger(__name__)

SampleInput = Union[Sequence[DataPoint], Tuple[Sequence[float], Sequence[float]]]


def time_constant(parameters: SimulationParameters) -> float:
    """RC time constant of the bench in seconds."""
    return parameters.resistance * parameters.capacitance


def expected_voltage(initial_voltage: float, elapsed_time: float, parameters: SimulationParameters) -> float:
    """Noise-free capacitor voltage after `elapsed_time` seconds of discharge."""
    return initial_voltage * math.exp(-elapsed_time / time_constant(parameters))


def estimate_resistance(
    initial_voltage: float,
    voltage: float,
    elapsed_time: float,
    capacitance: float,
) -> float:
    """
    Leakage-method estimate ``R = t / (C * ln(V0 / Vt))`` from one reading.

    Args:
        initial_voltage: V0, the voltage when the discharge started, in volts.
        voltage: Vt, the voltage read after `elapsed_time`, in volts.
        elapsed_time: t, in seconds.
        capacitance: C, in farads.

    Raises:
        AnalysisError: Unless ``0 < Vt < V0``, ``t > 0`` and ``C > 0``.
    """
    if capacitance <= 0.0:
        raise AnalysisError(f"Capacitance must be > 0 F, got {capacitance}.")
    if elapsed_time <= 0.0:
        raise AnalysisError(f"Elapsed time must be > 0 s, got {elapsed_time}.")
    if voltage <= 0.0:
        raise AnalysisError(f"Voltage reading must be > 0 V, got {voltage}.")
    if voltage >= initial_voltage:
        raise AnalysisError(
            f"Voltage reading ({voltage} V) must be below the initial voltage ({initial_voltage} V)."
        )
    return elapsed_time / (capacitance * math.log(initial_voltage / voltage))


def _as_series(samples: SampleInput) -> Tuple[np.ndarray, np.ndarray]:
    """Normalizes fit input to a pair of equal-length 1-D float arrays."""
    is_pair = isinstance(samples, tuple) and len(samples) == 2 and not isinstance(samples[0], DataPoint)
    try:
        if is_pair:
            times, voltages = (np.asarray(a, dtype=float) for a in samples)
        else:
            times = np.array([p.time for p in samples], dtype=float)
            voltages = np.array([p.voltage for p in samples], dtype=float)
    except (AttributeError, TypeError, ValueError) as e:
        raise AnalysisError(
            f"Samples must be a sequence of DataPoint or a (times, voltages) pair of numbers: {e}"
        ) from e

    if times.ndim != 1 or times.shape != voltages.shape:
        raise AnalysisError(
            f"Times and voltages must be 1-D and of equal length, got shapes {times.shape} and {voltages.shape}."
        )
    return times, voltages


def fit_resistance(samples: SampleInput, capacitance: float) -> LeakageFitResult:
    """
    Least-squares fit of ``ln V`` against ``t`` over logged discharge samples.

    Samples at or below 0 V (the voltmeter floor) carry no information about the
    decay rate and are left out.

    Args:
        samples: Either a sequence of `DataPoint` or a ``(times, voltages)`` tuple
                 of arrays or lists, such as `SampleLogger.as_arrays` returns.
        capacitance: C, in farads.

    Raises:
        AnalysisError: On malformed input, with fewer than two usable samples at
            distinct times, or if the fitted curve does not decay.
    """
    if capacitance <= 0.0:
        raise AnalysisError(f"Capacitance must be > 0 F, got {capacitance}.")

    times, voltages = _as_series(samples)
    usable = voltages > 0.0
    times, voltages = times[usable], voltages[usable]
    if np.unique(times).size < 2:
        raise AnalysisError(
            f"At least two positive samples at distinct times are required, got {times.size} usable sample(s)."
        )

    slope, intercept = np.polyfit(times, np.log(voltages), 1)
    if slope >= 0.0:
        raise AnalysisError(f"Samples do not show a decay (fitted slope {slope:.4g} 1/s).")

    tau = -1.0 / slope
    result = LeakageFitResult(
        resistance=float(tau / capacitance),
        initial_voltage=float(math.exp(intercept)),
        time_constant=float(tau),
        num_points=int(times.size),
    )
    logger.info(f"Leakage fit over {result.num_points} samples: R={result.resistance:.4g} ohm (RC={tau:.4g} s).")
    return result
