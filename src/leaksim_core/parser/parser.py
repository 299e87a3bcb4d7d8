# src/leaksim_core/parser/parser.py
import logging
import re
import string
from pathlib import Path
from typing import Any, Dict, List, Union

import cerberus
import yaml

from .raw_data import ParsedExperimentConfig, ParsedProcedureStep
from .exceptions import ParsingError, SchemaValidationError

logger = logging.getLogger(__name__)

ID_REGEX = r"^[a-zA-Z_][a-zA-Z0-9_]*$"
ALLOWED_ID_CHARS = set(string.ascii_letters + string.digits + "_")

#: Commands accepted in a scripted procedure. They mirror the bench controls.
PROCEDURE_COMMANDS = ("charge", "discharge", "stop", "reset")

#: Source name used in diagnostics when the YAML is supplied as a string.
STRING_SOURCE = Path("<string>")


class EnhancedValidator(cerberus.Validator):
    """Custom Cerberus validator enforcing the project's identifier convention."""

    def _validate_id_regex(self, constraint: bool, field: str, value: Any):
        """
        Validates that a string is a plain identifier.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint:
            return
        if not isinstance(value, str):
            self._error(field, "must be a string to be validated by id_regex.")
            return

        if not re.match(ID_REGEX, value):
            invalid_chars = sorted(set(value) - ALLOWED_ID_CHARS)
            self._error(
                field,
                f"Identifier '{value}' is invalid. Identifiers must start with a letter or underscore, "
                f"and can only contain letters, numbers, and underscores. Forbidden character(s): {invalid_chars}",
            )


class ExperimentConfigParser:
    """
    Parses and structurally validates an experiment YAML document.
    Its sole responsibility is to produce a `ParsedExperimentConfig` IR object;
    it does not interpret units or check physical ranges.
    """
    _quantity_rule = {"type": ["string", "number"], "required": False, "empty": False}

    _schema = {
        "experiment_name": {"type": "string", "required": False, "id_regex": True},
        "parameters": {
            "type": "dict", "required": False, "schema": {
                "source_voltage": _quantity_rule,
                "resistance": _quantity_rule,
                "capacitance": _quantity_rule,
            },
        },
        "voltmeter": {
            "type": "dict", "required": False, "schema": {
                "noise_amplitude": _quantity_rule,
                "seed": {"type": "integer", "required": False, "min": 0},
            },
        },
        "clock": {
            "type": "dict", "required": False, "schema": {
                "frame_rate": {"type": ["string", "number"], "required": True, "empty": False},
            },
        },
        "procedure": {
            "type": "list", "required": False, "schema": {
                "type": "dict", "schema": {
                    "command": {"type": "string", "required": True, "allowed": list(PROCEDURE_COMMANDS)},
                    "duration": _quantity_rule,
                },
            },
        },
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False
        logger.info("ExperimentConfigParser initialized with strict structural validation rules.")

    def parse_file(self, yaml_path: Union[str, Path]) -> ParsedExperimentConfig:
        """Loads, validates and converts an experiment file into its IR."""
        resolved_path = Path(yaml_path).resolve()
        logger.info(f"Parsing experiment file: {resolved_path}")
        content = self._load_yaml_file(resolved_path)
        return self._build_ir(content, resolved_path, default_name=resolved_path.stem)

    def parse_string(self, yaml_text: str, source_name: Path = STRING_SOURCE) -> ParsedExperimentConfig:
        """Validates and converts an in-memory YAML document into its IR."""
        logger.debug(f"Parsing experiment YAML from {source_name}.")
        content = self._load_yaml_text(yaml_text, source_name)
        return self._build_ir(content, source_name, default_name="experiment")

    def _build_ir(self, content: Dict[str, Any], source: Path, default_name: str) -> ParsedExperimentConfig:
        if not self._validator.validate(content):
            raise SchemaValidationError(self._validator.errors, source)
        validated = self._validator.document

        voltmeter = validated.get("voltmeter", {})
        clock = validated.get("clock", {})

        steps: List[ParsedProcedureStep] = [
            ParsedProcedureStep(index=idx, command=raw_step["command"], raw_duration=raw_step.get("duration"))
            for idx, raw_step in enumerate(validated.get("procedure", []))
        ]

        return ParsedExperimentConfig(
            experiment_name=validated.get("experiment_name", default_name),
            source_path=source,
            raw_parameters=dict(validated.get("parameters", {})),
            raw_noise_amplitude=voltmeter.get("noise_amplitude"),
            seed=voltmeter.get("seed"),
            raw_frame_rate=clock.get("frame_rate"),
            procedure=steps,
        )

    def _load_yaml_file(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise ParsingError(details=f"Experiment file not found at path: {source}", file_path=source)
        try:
            text = source.read_text(encoding="utf-8")
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        return self._load_yaml_text(text, source)

    def _load_yaml_text(self, text: str, source: Path) -> Dict[str, Any]:
        try:
            content = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        if content is None:
            raise ParsingError(details="The YAML document is empty or contains no valid content.", file_path=source)
        if not isinstance(content, dict):
            raise ParsingError(details="The root of the YAML document must be a dictionary (mapping).", file_path=source)
        return content
