# src/leaksim_core/parser/exceptions.py
"""
Defines custom, diagnosable exceptions for the parsing and schema validation stage.

`ParsingError` covers file-level and syntax problems, `SchemaValidationError`
covers structural problems found by the Cerberus schema. Both derive from
`DiagnosableError`, so the experiment builder can catch them as one family and
turn them into a single user-facing report.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

from ..errors import DiagnosableError, format_diagnostic_report


def flatten_cerberus_errors(errors: Dict[Any, Any], prefix: str = "") -> List[Tuple[str, str]]:
    """
    Flattens Cerberus' nested error tree into ``(dotted.field.path, message)`` pairs.

    Cerberus reports errors for sub-documents and list items as a list whose
    elements may themselves be dictionaries keyed by field name or list index.
    """
    flat: List[Tuple[str, str]] = []
    for key in sorted(errors, key=str):
        path = f"{prefix}.{key}" if prefix else str(key)
        for entry in errors[key]:
            if isinstance(entry, dict):
                flat.extend(flatten_cerberus_errors(entry, path))
            else:
                flat.append((path, str(entry)))
    return flat


class BaseParsingError(DiagnosableError):
    """
    A local, concrete base class for all YAML parsing and schema validation errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the experiment YAML file.",
            context={}
        )


@dataclass(frozen=True)
class ParsingError(BaseParsingError):
    """
    Custom exception for file-system issues or invalid YAML syntax that prevents
    the experiment file from being loaded at all.
    """
    details: str
    file_path: Path

    def __str__(self):
        return f"Parsing error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="YAML Parsing or File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains valid YAML syntax.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class SchemaValidationError(BaseParsingError):
    """
    Custom exception for failures during Cerberus schema validation.
    Raised when the YAML is syntactically valid but does not have the structure
    of an experiment file (unknown keys, wrong value types, unknown commands).
    """
    errors: Dict[str, Any]
    file_path: Path

    def __str__(self):
        error_lines = [
            f"  - In field '{path}': {message}"
            for path, message in flatten_cerberus_errors(self.errors)
        ]
        return (
            f"YAML schema validation failed for file '{self.file_path}':\n"
            + "\n".join(error_lines)
        )

    def get_diagnostic_report(self) -> str:
        flat = flatten_cerberus_errors(self.errors)
        error_list_str = "\n".join(f"  - Field '{path}': {message}" for path, message in flat)
        details = (
            "The structure of the YAML file does not conform to the experiment schema.\n"
            f"See details for {len(flat)} issue(s) below:\n\n{error_list_str}"
        )
        return format_diagnostic_report(
            error_type="YAML Schema Validation Error",
            details=details,
            suggestion="Correct the specified fields. Parameter values must be strings with units (e.g. '2 Mohm') or plain numbers in SI units, and procedure commands must be one of charge, discharge, stop or reset.",
            context={'source_file': self.file_path}
        )
