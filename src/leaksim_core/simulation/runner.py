# src/leaksim_core/simulation/runner.py
"""
Headless host for an `Experiment`.

In the interactive bench, the browser's animation-frame callback drives the
engine. Here `FrameClock` stands in for it, producing evenly spaced millisecond
readings, and `run_procedure` replays a scripted lab procedure
(charge, isolate, discharge, ...) frame by frame.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import numpy as np

from ..constants import DEFAULT_FRAME_RATE_HZ, MILLISECONDS_PER_SECOND
from ..parameters import PROGRAMMATIC_SOURCE, ParameterDefinitionError, resolve_quantity
from ..parser import PROCEDURE_COMMANDS, ParsedProcedureStep
from .context import ContextSnapshot
from .exceptions import ProcedureError
from .experiment import Experiment
from .state import EngineSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcedureStep:
    """A validated procedure step: a bench command followed by `duration` seconds of frames."""
    command: str
    duration: float = 0.0


@dataclass(frozen=True)
class ProcedureResult:
    """
    Outcome of a scripted run.

    Attributes:
        final_state: Engine snapshot after the last frame.
        times: Stopwatch times of the logged samples, in seconds.
        voltages: Logged voltmeter readings, in volts.
        frames: Number of frames ticked during the run.
        context: Assistant context snapshot at the end of the run.
    """
    final_state: EngineSnapshot
    times: np.ndarray
    voltages: np.ndarray
    frames: int
    context: ContextSnapshot


class FrameClock:
    """
    Deterministic stand-in for a display's frame callback.

    Readings are computed from the frame count rather than accumulated, so
    long runs do not drift.
    """
    def __init__(self, frame_rate_hz: float = DEFAULT_FRAME_RATE_HZ, start_ms: float = 0.0):
        if frame_rate_hz <= 0:
            raise ValueError(f"frame_rate_hz must be positive, got {frame_rate_hz}")
        self.frame_rate_hz: float = frame_rate_hz
        self._start_ms: float = start_ms
        self._frame: int = 0

    @property
    def frame_interval_ms(self) -> float:
        return MILLISECONDS_PER_SECOND / self.frame_rate_hz

    @property
    def frame(self) -> int:
        return self._frame

    def now(self) -> float:
        return self._start_ms + self._frame * self.frame_interval_ms

    def next_frame(self) -> float:
        """Moves to the next frame and returns its reading in milliseconds."""
        self._frame += 1
        return self.now()

    def frames_for(self, duration: float) -> int:
        """Number of whole frames that cover `duration` seconds."""
        return int(round(duration * self.frame_rate_hz))


def resolve_procedure(
    raw_steps: Iterable[ParsedProcedureStep],
    source: Path = PROGRAMMATIC_SOURCE,
) -> List[ProcedureStep]:
    """
    Validates parsed procedure steps, converting durations to seconds.

    Raises:
        ProcedureError: On an unknown command or an invalid duration.
    """
    steps: List[ProcedureStep] = []
    for raw in raw_steps:
        if raw.command not in PROCEDURE_COMMANDS:
            raise ProcedureError(
                step_index=raw.index,
                command=raw.command,
                details=f"Unknown command '{raw.command}'. Allowed commands: {list(PROCEDURE_COMMANDS)}.",
            )
        duration = 0.0
        if raw.raw_duration is not None:
            try:
                duration = resolve_quantity(
                    f"procedure[{raw.index}].duration", raw.raw_duration, "second", source, allow_zero=True
                )
            except ParameterDefinitionError as e:
                raise ProcedureError(
                    step_index=raw.index,
                    command=raw.command,
                    details=e.details,
                    user_input=raw.raw_duration,
                ) from e
        steps.append(ProcedureStep(command=raw.command, duration=duration))
    return steps


def run_procedure(
    experiment: Experiment,
    steps: Sequence[ProcedureStep],
    frame_rate_hz: float = DEFAULT_FRAME_RATE_HZ,
    clock: Optional[FrameClock] = None,
) -> ProcedureResult:
    """
    Replays `steps` against `experiment`, ticking it at a fixed frame rate.

    Each step issues its command once and then ticks for the step's duration.
    When no clock is given, a new one continues from the experiment's last
    tick so that the first frame does not see a jump in time.
    """
    if clock is None:
        start_ms = experiment.engine.last_tick_timestamp
        clock = FrameClock(frame_rate_hz, start_ms=start_ms if start_ms is not None else 0.0)

    if experiment.engine.last_tick_timestamp is None:
        experiment.tick(clock.now())

    frames = 0
    for index, step in enumerate(steps):
        if step.command not in PROCEDURE_COMMANDS:
            raise ProcedureError(
                step_index=index,
                command=step.command,
                details=f"Unknown command '{step.command}'. Allowed commands: {list(PROCEDURE_COMMANDS)}.",
            )
        if step.duration < 0:
            raise ProcedureError(
                step_index=index,
                command=step.command,
                details=f"Duration must be >= 0 s, got {step.duration} s.",
                user_input=step.duration,
            )

        getattr(experiment, step.command)()
        step_frames = clock.frames_for(step.duration)
        logger.debug(f"Step {index}: '{step.command}' for {step.duration} s ({step_frames} frames).")
        for _ in range(step_frames):
            experiment.tick(clock.next_frame())
        frames += step_frames

    times, voltages = experiment.sample_logger.as_arrays()
    final_state = experiment.snapshot()
    logger.info(
        f"Procedure finished after {frames} frames: mode '{final_state.mode}', "
        f"V={final_state.voltage:.4f} V, t={final_state.elapsed_time:.2f} s, {len(times)} samples."
    )
    return ProcedureResult(
        final_state=final_state,
        times=times,
        voltages=voltages,
        frames=frames,
        context=experiment.context_snapshot(),
    )
