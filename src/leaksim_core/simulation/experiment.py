# src/leaksim_core/simulation/experiment.py
"""
Defines `Experiment`, one bench: an engine and the voltmeter log wired together.

The host calls `tick` (or `advance`) once per frame. Each call runs the engine
first and then lets the sample logger observe the fresh snapshot, so state
mutation and observation never interleave. Commands go through the experiment
rather than the bare engine because two of them also clear the log: entering
CHARGING starts a new cycle, and `reset` empties the bench.
"""
import logging
from typing import Any, Tuple, Union

import numpy as np

from ..constants import DEFAULT_NOISE_AMPLITUDE_VOLTS
from ..parameters import INITIAL_PARAMETERS, SimulationParameters
from .context import ContextSnapshot, build_context_snapshot
from .engine import SimulationEngine
from .sampling import DataPoint, SampleLogger
from .state import CircuitMode, EngineSnapshot

logger = logging.getLogger(__name__)


class Experiment:
    def __init__(
        self,
        parameters: SimulationParameters = INITIAL_PARAMETERS,
        noise_amplitude: float = DEFAULT_NOISE_AMPLITUDE_VOLTS,
        rng: Union[np.random.Generator, int, None] = None,
        name: str = "experiment",
    ):
        self.name = name
        self._engine = SimulationEngine(parameters)
        self._sample_logger = SampleLogger(noise_amplitude=noise_amplitude, rng=rng)
        logger.info(f"Experiment '{name}' ready (RC={parameters.time_constant:.4g} s, noise={noise_amplitude} V).")

    # --- Collaborators ---

    @property
    def engine(self) -> SimulationEngine:
        return self._engine

    @property
    def sample_logger(self) -> SampleLogger:
        return self._sample_logger

    @property
    def parameters(self) -> SimulationParameters:
        return self._engine.parameters

    def update_parameters(self, **changes: Any) -> SimulationParameters:
        """
        Applies new bench settings (the slider path). Values are validated before
        the engine sees them; the engine picks them up on its next tick.
        """
        updated = self._engine.parameters.with_updates(**changes)
        self._engine.parameters = updated
        return updated

    # --- Per-frame driving ---

    def tick(self, now: float) -> EngineSnapshot:
        """Advances to host clock reading `now` (ms) and logs the result."""
        snapshot = self._engine.tick(now)
        self._sample_logger.observe(snapshot)
        return snapshot

    def advance(self, delta_time: float) -> EngineSnapshot:
        """Advances by `delta_time` seconds and logs the result."""
        snapshot = self._engine.advance(delta_time)
        self._sample_logger.observe(snapshot)
        return snapshot

    # --- Commands ---

    def charge(self) -> CircuitMode:
        return self._command(self._engine.charge)

    def discharge(self) -> CircuitMode:
        return self._command(self._engine.discharge)

    def stop(self) -> CircuitMode:
        return self._command(self._engine.stop)

    def toggle_charge(self) -> CircuitMode:
        return self._command(self._engine.toggle_charge)

    def toggle_discharge(self) -> CircuitMode:
        return self._command(self._engine.toggle_discharge)

    def reset(self) -> CircuitMode:
        mode = self._engine.reset()
        self._sample_logger.clear()
        return mode

    def _command(self, command) -> CircuitMode:
        previous = self._engine.mode
        mode = command()
        if mode is CircuitMode.CHARGING and previous is not CircuitMode.CHARGING:
            self._sample_logger.clear()
        return mode

    # --- Outputs ---

    def snapshot(self) -> EngineSnapshot:
        return self._engine.snapshot()

    @property
    def samples(self) -> Tuple[DataPoint, ...]:
        return self._sample_logger.samples

    def context_snapshot(self) -> ContextSnapshot:
        return build_context_snapshot(self._engine.parameters, self._engine.snapshot())
