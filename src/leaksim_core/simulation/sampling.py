# src/leaksim_core/simulation/sampling.py
"""
The voltmeter log that feeds the strip chart.

`SampleLogger` has no clock of its own. It is handed the engine snapshot after
every tick and records one noisy reading per tick while the capacitor is
discharging. Samples are kept, in order, until `clear()` is called when a new
charge cycle starts or the bench is reset.
"""
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np

from ..constants import DEFAULT_NOISE_AMPLITUDE_VOLTS, VOLTMETER_FLOOR_VOLTS
from .state import CircuitMode, EngineSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataPoint:
    """One voltmeter reading: stopwatch time (s) and displayed voltage (V)."""
    time: float
    voltage: float


class SampleLogger:
    """
    Append-only log of discharge-phase voltmeter readings.

    Each reading is the engine voltage plus uniform jitter drawn from
    ``[-A/2, +A/2]``, floored at 0 V like a real meter.

    Args:
        noise_amplitude: Peak-to-peak jitter ``A`` in volts.
        rng: Random source for the jitter. Pass a `numpy.random.Generator` or an
             integer seed for reproducible logs; defaults to a fresh, OS-seeded
             generator.
    """
    def __init__(
        self,
        noise_amplitude: float = DEFAULT_NOISE_AMPLITUDE_VOLTS,
        rng: Union[np.random.Generator, int, None] = None,
    ):
        if noise_amplitude < 0.0:
            raise ValueError(f"noise_amplitude must be >= 0, got {noise_amplitude}.")
        self.noise_amplitude: float = noise_amplitude
        self._rng: np.random.Generator = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self._samples: List[DataPoint] = []

    def observe(self, state: EngineSnapshot) -> Optional[DataPoint]:
        """
        Records a reading if `state` is discharging.

        Returns:
            The appended `DataPoint`, or None when nothing was recorded.
        """
        if state.mode is not CircuitMode.DISCHARGING:
            return None

        half_width = self.noise_amplitude / 2.0
        noise = float(self._rng.uniform(-half_width, half_width)) if half_width > 0.0 else 0.0
        point = DataPoint(time=state.elapsed_time, voltage=max(VOLTMETER_FLOOR_VOLTS, state.voltage + noise))
        self._samples.append(point)
        return point

    def clear(self):
        if self._samples:
            logger.debug(f"Clearing {len(self._samples)} logged samples.")
        self._samples.clear()

    @property
    def samples(self) -> Tuple[DataPoint, ...]:
        return tuple(self._samples)

    def iter_samples(self) -> Iterator[DataPoint]:
        """Yields samples in log order, including ones appended during iteration."""
        index = 0
        while index < len(self._samples):
            yield self._samples[index]
            index += 1

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Returns ``(times, voltages)`` as float arrays for charting."""
        times = np.fromiter((p.time for p in self._samples), dtype=float, count=len(self._samples))
        voltages = np.fromiter((p.voltage for p in self._samples), dtype=float, count=len(self._samples))
        return times, voltages

    def __len__(self) -> int:
        return len(self._samples)
