# src/leaksim_core/simulation/state.py
"""
State containers for the integration engine.

`EngineState` is the single mutable record of the bench. Only `SimulationEngine`
writes to it; everything else reads `EngineSnapshot` copies taken after a tick.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CircuitMode(Enum):
    """Which switch configuration the bench is in, and so which integration rule applies."""
    IDLE = "idle"                # Nothing connected, nothing changes.
    CHARGING = "charging"        # S1 closed: capacitor ramps towards the source voltage.
    DISCHARGING = "discharging"  # S2 closed: capacitor leaks through the resistor.
    PAUSED = "paused"            # Isolated: voltage and stopwatch are frozen.

    def __str__(self):
        return self.value


@dataclass
class EngineState:
    """
    Mutable engine state.

    Attributes:
        mode: Current circuit mode.
        voltage: Capacitor voltage in volts.
        elapsed_time: Discharge stopwatch in seconds. Advances only while discharging.
        last_tick_timestamp: Host clock reading (ms) of the previous tick, or None
                             before the first tick.
    """
    mode: CircuitMode = CircuitMode.IDLE
    voltage: float = 0.0
    elapsed_time: float = 0.0
    last_tick_timestamp: Optional[float] = None

    def snapshot(self) -> "EngineSnapshot":
        return EngineSnapshot(mode=self.mode, voltage=self.voltage, elapsed_time=self.elapsed_time)


@dataclass(frozen=True)
class EngineSnapshot:
    """Read-only view of the engine state handed to observers and renderers."""
    mode: CircuitMode
    voltage: float
    elapsed_time: float
