# src/leaksim_core/simulation/engine.py

"""
Defines the `SimulationEngine`, the delta-time integrator of the leakage bench.

The engine owns the circuit mode, the capacitor voltage and the discharge
stopwatch. It is advanced once per host frame, either with a raw clock reading
(`tick`) or with an explicit time step (`advance`), and it is the only writer of
those quantities. Circuit parameters are read on every step but never modified.

Integration rules per mode:

    CHARGING     V += (V0 - V) * min(K * dt, 1), snapping to V0 once |V0 - V| < eps
    DISCHARGING  V *= exp(-dt / RC),  t += dt
    IDLE/PAUSED  unchanged

The engine does not guard against `R * C == 0`; parameters are validated
upstream by `resolve_parameters`.
"""
import logging
import math
from typing import Optional

from ..constants import (
    CHARGE_RATE_PER_SECOND,
    CHARGE_SNAP_EPSILON_VOLTS,
    MILLISECONDS_PER_SECOND,
)
from ..parameters import SimulationParameters
from .state import CircuitMode, EngineSnapshot, EngineState

logger = logging.getLogger(__name__)


class SimulationEngine:
    """
    Owns and advances the `EngineState` of one bench.

    Mode changes are commanded from outside (`charge`, `discharge`, `stop`,
    `reset` and the two toggles) and are never rejected: every command maps
    every mode to a defined next mode.
    """
    def __init__(self, parameters: SimulationParameters, state: Optional[EngineState] = None):
        self._parameters: SimulationParameters = parameters
        self._state: EngineState = state if state is not None else EngineState()
        logger.debug(f"SimulationEngine initialized in mode '{self._state.mode}'.")

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> SimulationParameters:
        return self._parameters

    @parameters.setter
    def parameters(self, parameters: SimulationParameters):
        self._parameters = parameters

    @property
    def mode(self) -> CircuitMode:
        return self._state.mode

    @property
    def voltage(self) -> float:
        return self._state.voltage

    @property
    def elapsed_time(self) -> float:
        return self._state.elapsed_time

    @property
    def last_tick_timestamp(self) -> Optional[float]:
        return self._state.last_tick_timestamp

    def snapshot(self) -> EngineSnapshot:
        return self._state.snapshot()

    # ------------------------------------------------------------------
    # Integration
    # ------------------------------------------------------------------

    def tick(self, now: float) -> EngineSnapshot:
        """
        Advances the engine to host clock reading `now` (milliseconds).

        The first tick after construction has a zero time step. A reading that is
        earlier than the previous one is also treated as a zero step.
        """
        previous = self._state.last_tick_timestamp
        self._state.last_tick_timestamp = now

        if previous is None:
            delta_time = 0.0
        else:
            delta_time = (now - previous) / MILLISECONDS_PER_SECOND
            if delta_time < 0.0:
                logger.warning(
                    f"Host clock went backwards ({previous} ms -> {now} ms). Treating this tick as a zero time step."
                )
                delta_time = 0.0

        return self.advance(delta_time)

    def advance(self, delta_time: float) -> EngineSnapshot:
        """
        Applies the integration rule of the current mode for `delta_time` seconds.

        Raises:
            ValueError: If `delta_time` is negative.
        """
        if delta_time < 0.0:
            raise ValueError(f"delta_time must be >= 0, got {delta_time}.")

        mode = self._state.mode
        if mode is CircuitMode.CHARGING:
            self._step_charging(delta_time)
        elif mode is CircuitMode.DISCHARGING:
            self._step_discharging(delta_time)

        return self._state.snapshot()

    def _step_charging(self, delta_time: float):
        target = self._parameters.source_voltage
        diff = target - self._state.voltage
        if abs(diff) < CHARGE_SNAP_EPSILON_VOLTS:
            self._state.voltage = target
        else:
            # A fraction above 1 would overshoot the source on a long frame.
            fraction = min(CHARGE_RATE_PER_SECOND * delta_time, 1.0)
            self._state.voltage += diff * fraction
        self._state.elapsed_time = 0.0

    def _step_discharging(self, delta_time: float):
        rc = self._parameters.resistance * self._parameters.capacitance
        self._state.voltage *= math.exp(-delta_time / rc)
        self._state.elapsed_time += delta_time

    # ------------------------------------------------------------------
    # Transition commands
    # ------------------------------------------------------------------

    def charge(self) -> CircuitMode:
        """Closes S1. Entering CHARGING starts a new cycle and zeroes the stopwatch."""
        return self._enter(CircuitMode.CHARGING)

    def discharge(self) -> CircuitMode:
        """Closes S2. The voltage decays from whatever the capacitor currently holds."""
        return self._enter(CircuitMode.DISCHARGING)

    def stop(self) -> CircuitMode:
        """Isolates the capacitor, freezing voltage and stopwatch until resumed."""
        return self._enter(CircuitMode.PAUSED)

    def toggle_charge(self) -> CircuitMode:
        if self._state.mode is CircuitMode.CHARGING:
            return self.stop()
        return self.charge()

    def toggle_discharge(self) -> CircuitMode:
        if self._state.mode is CircuitMode.DISCHARGING:
            return self.stop()
        return self.discharge()

    def reset(self) -> CircuitMode:
        """Returns the bench to IDLE with an empty capacitor and a zeroed stopwatch."""
        previous = self._state.mode
        self._state.mode = CircuitMode.IDLE
        self._state.voltage = 0.0
        self._state.elapsed_time = 0.0
        logger.info(f"Bench reset (was '{previous}').")
        return self._state.mode

    def _enter(self, mode: CircuitMode) -> CircuitMode:
        previous = self._state.mode
        if previous is mode:
            return mode

        self._state.mode = mode
        if mode is CircuitMode.CHARGING:
            self._state.elapsed_time = 0.0
        logger.info(
            f"Mode '{previous}' -> '{mode}' at V={self._state.voltage:.4f} V, t={self._state.elapsed_time:.2f} s."
        )
        return mode
