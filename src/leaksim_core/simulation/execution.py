# src/leaksim_core/simulation/execution.py
"""
Public entry point for running a configured experiment headlessly.

`run_experiment` is a thin facade over `run_procedure`: it replays the plan's
scripted procedure at the plan's frame rate and converts any diagnosable
failure into a single, user-facing `ExperimentRunError`.
"""
import logging

from ..errors import DiagnosableError, ExperimentRunError, format_diagnostic_report
from ..experiment_builder import ExperimentPlan
from .experiment import Experiment
from .runner import ProcedureResult, run_procedure

logger = logging.getLogger(__name__)


def run_experiment(experiment: Experiment, plan: ExperimentPlan) -> ProcedureResult:
    """
    Runs the plan's procedure against `experiment`.

    Args:
        experiment: The bench, as produced by `ExperimentBuilder.build`.
        plan: The validated plan from the same build.

    Returns:
        The `ProcedureResult` of the run.

    Raises:
        ExperimentRunError: A user-friendly, diagnosable error if the run fails.
                            The original exception is chained for debugging.
    """
    logger.info(f"--- Running procedure for '{plan.experiment_name}' ({len(plan.procedure)} steps) ---")
    try:
        return run_procedure(experiment, plan.procedure, frame_rate_hz=plan.frame_rate_hz)
    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred during the run: {e}")
        raise ExperimentRunError(e.get_diagnostic_report()) from e
    except Exception as e:
        logger.critical(f"An unexpected internal error occurred during the run: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Run Error Occurred ({type(e).__name__})",
            details=f"The simulator encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={}
        )
        raise ExperimentRunError(report) from e
