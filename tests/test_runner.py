# tests/test_runner.py
import dataclasses
import math

import numpy as np
import pytest

from leaksim_core import (
    CircuitMode,
    ExperimentRunError,
    FrameClock,
    ProcedureError,
    ProcedureStep,
    fit_resistance,
    run_experiment,
    run_procedure,
)
from leaksim_core.parameters import PROGRAMMATIC_SOURCE
from leaksim_core.parser import ParsedProcedureStep
from leaksim_core.simulation import resolve_procedure
from tests.conftest import LAB_MANUAL_YAML, write_experiment_file

LAB_PROCEDURE = [
    ProcedureStep("charge", 2.0),
    ProcedureStep("stop", 1.0),
    ProcedureStep("discharge", 10.0),
]


class TestFrameClock:

    def test_readings_are_evenly_spaced(self):
        clock = FrameClock(frame_rate_hz=50.0, start_ms=1000.0)
        readings = [clock.now()] + [clock.next_frame() for _ in range(3)]
        assert readings == [1000.0, 1020.0, 1040.0, 1060.0]
        assert clock.frame == 3

    def test_no_drift_over_long_runs(self):
        clock = FrameClock(frame_rate_hz=60.0)
        for _ in range(60 * 3600):
            clock.next_frame()
        assert clock.now() == pytest.approx(3600.0 * 1000.0, rel=1e-12)

    def test_frames_for_duration(self):
        clock = FrameClock(frame_rate_hz=60.0)
        assert clock.frames_for(2.0) == 120
        assert clock.frames_for(0.0) == 0

    @pytest.mark.parametrize("rate", [0.0, -30.0])
    def test_rate_must_be_positive(self, rate):
        with pytest.raises(ValueError):
            FrameClock(frame_rate_hz=rate)


class TestRunProcedure:

    def test_lab_manual_procedure(self, experiment):
        result = run_procedure(experiment, LAB_PROCEDURE, frame_rate_hz=60.0)

        assert result.frames == 120 + 60 + 600
        assert result.final_state.mode is CircuitMode.DISCHARGING
        assert result.final_state.elapsed_time == pytest.approx(10.0, rel=1e-9)
        assert result.final_state.voltage == pytest.approx(10.0 * math.exp(-10.0 / 20.0), rel=1e-9)
        assert result.times.shape == result.voltages.shape == (600,)
        assert np.all(np.diff(result.times) >= 0.0)
        assert result.context.t == pytest.approx(10.0)
        assert result.context.v0 == 10.0

    def test_logged_samples_recover_the_resistance(self, experiment):
        result = run_procedure(experiment, LAB_PROCEDURE, frame_rate_hz=60.0)
        fit = fit_resistance((result.times, result.voltages), experiment.parameters.capacitance)
        assert fit.resistance == pytest.approx(2.0e6, rel=0.01)
        assert fit.initial_voltage == pytest.approx(10.0, rel=0.01)
        assert fit.num_points == 600

    def test_isolation_holds_the_charge(self, experiment):
        result = run_procedure(experiment, LAB_PROCEDURE[:2], frame_rate_hz=60.0)
        assert result.final_state.mode is CircuitMode.PAUSED
        assert result.final_state.voltage == 10.0
        assert result.times.size == 0

    def test_recharging_clears_previous_run(self, experiment):
        run_procedure(experiment, LAB_PROCEDURE, frame_rate_hz=60.0)
        result = run_procedure(experiment, [ProcedureStep("charge", 1.0)], frame_rate_hz=60.0)
        assert result.times.size == 0
        assert result.final_state.elapsed_time == 0.0

    def test_second_run_continues_the_clock(self, experiment):
        run_procedure(experiment, [ProcedureStep("charge", 1.0)], frame_rate_hz=60.0)
        last = experiment.engine.last_tick_timestamp
        run_procedure(experiment, [ProcedureStep("stop", 1.0)], frame_rate_hz=60.0)
        assert experiment.engine.last_tick_timestamp == pytest.approx(last + 1000.0)

    def test_reset_step(self, experiment):
        result = run_procedure(experiment, LAB_PROCEDURE + [ProcedureStep("reset", 0.5)], frame_rate_hz=60.0)
        assert result.final_state.mode is CircuitMode.IDLE
        assert result.final_state.voltage == 0.0
        assert result.times.size == 0

    def test_unknown_command(self, experiment):
        with pytest.raises(ProcedureError, match="Unknown command 'jump'"):
            run_procedure(experiment, [ProcedureStep("jump", 1.0)])

    def test_negative_duration(self, experiment):
        with pytest.raises(ProcedureError, match="Duration must be >= 0"):
            run_procedure(experiment, [ProcedureStep("charge", -1.0)])


class TestResolveProcedure:

    def test_durations_are_converted_to_seconds(self):
        steps = resolve_procedure([
            ParsedProcedureStep(0, "charge", "1500 ms"),
            ParsedProcedureStep(1, "discharge", 3),
            ParsedProcedureStep(2, "reset"),
        ])
        assert steps == [
            ProcedureStep("charge", pytest.approx(1.5)),
            ProcedureStep("discharge", 3.0),
            ProcedureStep("reset", 0.0),
        ]

    def test_bad_duration_units(self):
        with pytest.raises(ProcedureError) as exc_info:
            resolve_procedure([ParsedProcedureStep(4, "charge", "2 V")])
        report = exc_info.value.get_diagnostic_report()
        assert "#4 (charge)" in report
        assert "2 V" in report


class TestRunExperiment:

    def test_file_to_result(self, builder, tmp_path):
        experiment, plan = builder.load(write_experiment_file(tmp_path, LAB_MANUAL_YAML))
        result = run_experiment(experiment, plan)
        assert result.frames == 780
        assert result.times.size == 600

    def test_same_seed_same_readings(self, builder):
        first = run_experiment(*builder.load_string(LAB_MANUAL_YAML))
        second = run_experiment(*builder.load_string(LAB_MANUAL_YAML))
        np.testing.assert_array_equal(first.voltages, second.voltages)

    def test_failures_become_run_errors(self, builder):
        experiment, plan = builder.load_string("{}")
        bad_plan = dataclasses.replace(plan, procedure=(ProcedureStep("jump", 1.0),))
        with pytest.raises(ExperimentRunError) as exc_info:
            run_experiment(experiment, bad_plan)
        assert "Invalid Procedure Step" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ProcedureError)


def test_programmatic_steps_report_programmatic_source():
    with pytest.raises(ProcedureError) as exc_info:
        resolve_procedure([ParsedProcedureStep(0, "discharge", "-2 s")])
    assert exc_info.value.__cause__.source == PROGRAMMATIC_SOURCE
