# src/leaksim_core/parser/__init__.py
from .raw_data import ParsedExperimentConfig, ParsedProcedureStep
from .parser import ExperimentConfigParser, PROCEDURE_COMMANDS
from .exceptions import ParsingError, SchemaValidationError

__all__ = [
    # IR Data Structures
    "ParsedExperimentConfig",
    "ParsedProcedureStep",
    # Parser and Exceptions
    "ExperimentConfigParser",
    "PROCEDURE_COMMANDS",
    "ParsingError",
    "SchemaValidationError",
]
