# tests/conftest.py
from pathlib import Path

import numpy as np
import pytest

from leaksim_core import (
    CircuitMode,
    EngineState,
    Experiment,
    ExperimentBuilder,
    ExperimentConfigParser,
    SampleLogger,
    SimulationEngine,
    SimulationParameters,
)


@pytest.fixture
def rc_one_second():
    """5 V source, 1 MOhm, 1 uF: a one-second time constant."""
    return SimulationParameters(source_voltage=5.0, resistance=1.0e6, capacitance=1.0e-6)


@pytest.fixture
def ten_volt_params():
    return SimulationParameters(source_voltage=10.0, resistance=2.0e6, capacitance=10.0e-6)


@pytest.fixture
def engine(rc_one_second):
    return SimulationEngine(rc_one_second)


@pytest.fixture
def charged_discharging_engine(rc_one_second):
    """Engine holding 5 V and already discharging."""
    return SimulationEngine(rc_one_second, state=EngineState(mode=CircuitMode.DISCHARGING, voltage=5.0))


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def sample_logger(rng):
    return SampleLogger(noise_amplitude=0.1, rng=rng)


@pytest.fixture
def experiment(ten_volt_params):
    return Experiment(parameters=ten_volt_params, noise_amplitude=0.05, rng=np.random.default_rng(42), name="bench")


@pytest.fixture
def parser():
    return ExperimentConfigParser()


@pytest.fixture
def builder():
    return ExperimentBuilder()


def write_experiment_file(directory: Path, text: str, name: str = "experiment.yaml") -> Path:
    """Writes a YAML experiment file into `directory` and returns its path."""
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


LAB_MANUAL_YAML = """
experiment_name: leakage_demo
parameters:
  source_voltage: "10 V"
  resistance: "2 Mohm"
  capacitance: "10 uF"
voltmeter:
  noise_amplitude: "50 mV"
  seed: 7
clock:
  frame_rate: "60 Hz"
procedure:
  - {command: charge, duration: "2 s"}
  - {command: stop, duration: "1 s"}
  - {command: discharge, duration: "10 s"}
"""
