# src/leaksim_core/experiment_builder.py
"""
Turns a parsed experiment file into a ready-to-run bench.

The `ExperimentBuilder` is the configuration boundary of the simulator: it
converts every unit-bearing value in the IR through pint and rejects anything
non-positive or non-finite before an `Experiment` is constructed. Any
diagnosable failure is re-raised as a single `ExperimentBuildError` whose
message is the formatted diagnostic report.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .constants import DEFAULT_FRAME_RATE_HZ, DEFAULT_NOISE_AMPLITUDE_VOLTS
from .errors import DiagnosableError, ExperimentBuildError, format_diagnostic_report
from .parameters import SimulationParameters, resolve_parameters, resolve_quantity
from .parser import ExperimentConfigParser, ParsedExperimentConfig
from .simulation import Experiment, ProcedureStep, resolve_procedure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExperimentPlan:
    """Everything resolved from an experiment file, in SI units."""
    experiment_name: str
    source_path: Path
    parameters: SimulationParameters
    noise_amplitude: float
    seed: Optional[int]
    frame_rate_hz: float
    procedure: Tuple[ProcedureStep, ...]


class ExperimentBuilder:
    def __init__(self, parser: Optional[ExperimentConfigParser] = None):
        self._parser = parser if parser is not None else ExperimentConfigParser()

    def load(self, yaml_path: Union[str, Path]) -> Tuple[Experiment, ExperimentPlan]:
        """Parses the file at `yaml_path` and builds it."""
        return self._guarded(lambda: self._build(self._parser.parse_file(yaml_path)))

    def load_string(self, yaml_text: str) -> Tuple[Experiment, ExperimentPlan]:
        """Parses an in-memory YAML document and builds it."""
        return self._guarded(lambda: self._build(self._parser.parse_string(yaml_text)))

    def build(self, config: ParsedExperimentConfig) -> Tuple[Experiment, ExperimentPlan]:
        """Builds an already-parsed configuration."""
        return self._guarded(lambda: self._build(config))

    def _guarded(self, action):
        try:
            return action()
        except DiagnosableError as e:
            logger.error(f"Experiment build failed: {e}")
            raise ExperimentBuildError(e.get_diagnostic_report()) from e
        except Exception as e:
            logger.critical(f"An unexpected internal error occurred during the build: {e}", exc_info=True)
            report = format_diagnostic_report(
                error_type=f"An Unexpected Build Error Occurred ({type(e).__name__})",
                details=f"The experiment could not be built due to an unexpected internal error: {e}",
                suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
                context={}
            )
            raise ExperimentBuildError(report) from e

    def _build(self, config: ParsedExperimentConfig) -> Tuple[Experiment, ExperimentPlan]:
        source = config.source_path
        logger.info(f"--- Building experiment '{config.experiment_name}' from {source} ---")

        parameters = resolve_parameters(config.raw_parameters, source=source)

        noise_amplitude = DEFAULT_NOISE_AMPLITUDE_VOLTS
        if config.raw_noise_amplitude is not None:
            noise_amplitude = resolve_quantity(
                "voltmeter.noise_amplitude", config.raw_noise_amplitude, "volt", source, allow_zero=True
            )

        frame_rate_hz = DEFAULT_FRAME_RATE_HZ
        if config.raw_frame_rate is not None:
            frame_rate_hz = resolve_quantity("clock.frame_rate", config.raw_frame_rate, "hertz", source)

        procedure = tuple(resolve_procedure(config.procedure, source))

        plan = ExperimentPlan(
            experiment_name=config.experiment_name,
            source_path=source,
            parameters=parameters,
            noise_amplitude=noise_amplitude,
            seed=config.seed,
            frame_rate_hz=frame_rate_hz,
            procedure=procedure,
        )
        experiment = Experiment(
            parameters=parameters,
            noise_amplitude=noise_amplitude,
            rng=config.seed,
            name=config.experiment_name,
        )
        logger.info(f"Experiment '{plan.experiment_name}' built successfully.")
        return experiment, plan
