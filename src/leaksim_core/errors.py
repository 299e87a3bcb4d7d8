# src/leaksim_core/errors.py
"""
Error taxonomy of LeakSim Core.

Two layers are kept apart. Internal failures (bad YAML, a parameter without
units, an unknown procedure command, ...) subclass `DiagnosableError` and know
how to describe themselves. The public entry points (`ExperimentBuilder` and
`run_experiment`) catch those and re-raise a `LeakSimError` whose message is
the rendered report, chaining the internal error as `__cause__`.
"""
import logging
from abc import abstractmethod
from typing import Any, Dict, List, Protocol, Tuple, runtime_checkable

logger = logging.getLogger(__name__)


class LeakSimError(Exception):
    """Root of the errors a caller of the public API is expected to handle."""


class ExperimentBuildError(LeakSimError):
    """An experiment file or parameter set could not be turned into a bench."""


class ExperimentRunError(LeakSimError):
    """A built experiment failed while its procedure was being replayed."""


@runtime_checkable
class Diagnosable(Protocol):
    def get_diagnostic_report(self) -> str:
        ...


class DiagnosableError(Exception, Diagnosable):
    """Base for internal errors; subclasses render their own report."""

    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


# Context keys shown in the report header, in display order.
_CONTEXT_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("parameter", "Parameter"),
    ("source_file", "Source File"),
    ("user_input", "User Input"),
    ("step", "Step"),
)

_REPORT_WIDTH = 72


def _indented(text: str) -> List[str]:
    return [f"  {line}" for line in text.splitlines()]


def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Renders a diagnostic report.

    `context` may carry any of 'parameter', 'source_file', 'user_input' and
    'step'; empty entries are left out. User input is shown quoted so that
    stray whitespace stays visible.
    """
    title = " LeakSim Core: Actionable Diagnostic Report "
    lines = ["\n", title.center(_REPORT_WIDTH, "="), f"{'Error Type:':<16}{error_type}"]

    for key, label in _CONTEXT_FIELDS:
        value = context.get(key)
        if not value:
            continue
        shown = f"'{value}'" if key == "user_input" else value
        lines.append(f"{label + ':':<16}{shown}")

    lines.append("\nDetails:")
    lines.extend(_indented(details))
    if suggestion:
        lines.append("\nSuggestion:")
        lines.extend(_indented(suggestion))
    lines.append("=" * _REPORT_WIDTH)
    return "\n".join(lines)
