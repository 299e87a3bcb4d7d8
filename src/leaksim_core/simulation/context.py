# src/leaksim_core/simulation/context.py
"""
Defines `ContextSnapshot`, the read-only summary of the bench handed to the
lab assistant.

The assistant only needs the four numbers a student would read off the bench to
apply ``R = t / (C * ln(V0 / Vt))``. The snapshot is frozen, so consumers cannot
feed anything back into the engine through it.
"""
from dataclasses import asdict, dataclass
from typing import Dict

from ..constants import CONTEXT_TIME_DECIMALS, CONTEXT_VOLTAGE_DECIMALS
from ..parameters import SimulationParameters
from .state import EngineSnapshot


@dataclass(frozen=True)
class ContextSnapshot:
    """
    Attributes:
        v0: Source voltage in volts.
        vt: Current capacitor voltage in volts, rounded to 3 decimals.
        t: Discharge stopwatch in seconds, rounded to 2 decimals.
        c: Capacitance in farads.
    """
    v0: float
    vt: float
    t: float
    c: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def build_context_snapshot(parameters: SimulationParameters, state: EngineSnapshot) -> ContextSnapshot:
    return ContextSnapshot(
        v0=parameters.source_voltage,
        vt=round(state.voltage, CONTEXT_VOLTAGE_DECIMALS),
        t=round(state.elapsed_time, CONTEXT_TIME_DECIMALS),
        c=parameters.capacitance,
    )
