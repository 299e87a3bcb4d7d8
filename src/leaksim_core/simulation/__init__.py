# src/leaksim_core/simulation/__init__.py
from .state import CircuitMode, EngineSnapshot, EngineState
from .engine import SimulationEngine
from .sampling import DataPoint, SampleLogger
from .context import ContextSnapshot, build_context_snapshot
from .experiment import Experiment
from .exceptions import ProcedureError
from .runner import FrameClock, ProcedureResult, ProcedureStep, resolve_procedure, run_procedure

__all__ = [
    # State
    "CircuitMode",
    "EngineSnapshot",
    "EngineState",
    # Core Classes
    "SimulationEngine",
    "SampleLogger",
    "DataPoint",
    "Experiment",
    "ContextSnapshot",
    "build_context_snapshot",
    # Headless Host
    "FrameClock",
    "ProcedureStep",
    "ProcedureResult",
    "resolve_procedure",
    "run_procedure",
    # Exceptions
    "ProcedureError",
]
