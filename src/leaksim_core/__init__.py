# src/leaksim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("LeakSim Core package initialized.")

from .units import ureg, pint, Quantity
from .parameters import INITIAL_PARAMETERS, SimulationParameters, ParameterError, ParameterDefinitionError
from .parser import ExperimentConfigParser, ParsingError, SchemaValidationError
from .simulation import (
    CircuitMode,
    ContextSnapshot,
    DataPoint,
    EngineSnapshot,
    EngineState,
    Experiment,
    FrameClock,
    ProcedureError,
    ProcedureResult,
    ProcedureStep,
    SampleLogger,
    SimulationEngine,
    run_procedure,
)
from .experiment_builder import ExperimentBuilder, ExperimentPlan
from .simulation.execution import run_experiment
from .analysis import AnalysisError, LeakageFitResult, estimate_resistance, expected_voltage, fit_resistance, time_constant
from .errors import LeakSimError, ExperimentBuildError, ExperimentRunError

__version__ = "0.1.0"

__all__ = [
    # Units
    "ureg", "pint", "Quantity",
    # Configuration
    "SimulationParameters", "INITIAL_PARAMETERS", "ExperimentConfigParser",
    "ExperimentBuilder", "ExperimentPlan",
    # Engine & Logger
    "CircuitMode", "EngineState", "EngineSnapshot", "SimulationEngine",
    "SampleLogger", "DataPoint", "Experiment", "ContextSnapshot",
    # Headless Host
    "FrameClock", "ProcedureStep", "ProcedureResult", "run_procedure", "run_experiment",
    # Analysis
    "time_constant", "expected_voltage", "estimate_resistance", "fit_resistance", "LeakageFitResult",
    # Internal Diagnosable Errors
    "ParameterError", "ParameterDefinitionError", "ParsingError", "SchemaValidationError",
    "ProcedureError", "AnalysisError",
    # Top-Level Errors (Actionable Diagnostics)
    "LeakSimError", "ExperimentBuildError", "ExperimentRunError",
]
