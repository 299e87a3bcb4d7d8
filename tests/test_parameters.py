# tests/test_parameters.py
from pathlib import Path

import pytest

from leaksim_core import INITIAL_PARAMETERS, Quantity, SimulationParameters
from leaksim_core.parameters import (
    ParameterDefinitionError,
    ParameterError,
    UnknownParameterError,
    resolve_parameters,
    resolve_quantity,
)


class TestResolveQuantity:

    @pytest.mark.parametrize("raw, unit, expected", [
        ("10 V", "volt", 10.0),
        ("250 mV", "volt", 0.25),
        ("2.2 Mohm", "ohm", 2.2e6),
        ("470 kohm", "ohm", 4.7e5),
        ("4.7 uF", "farad", 4.7e-6),
        ("100 nF", "farad", 1.0e-7),
        ("500 ms", "second", 0.5),
        ("60 Hz", "hertz", 60.0),
        (12, "volt", 12.0),
        (3.3e-6, "farad", 3.3e-6),
        ("5", "volt", 5.0),
    ])
    def test_valid_inputs(self, raw, unit, expected):
        assert resolve_quantity("x", raw, unit) == pytest.approx(expected, rel=1e-12)

    def test_accepts_pint_quantity(self):
        assert resolve_quantity("capacitance", Quantity(22, "uF"), "farad") == pytest.approx(22e-6)

    @pytest.mark.parametrize("raw", ["0 ohm", 0, -5, "-1 Mohm"])
    def test_non_positive_values_are_rejected(self, raw):
        with pytest.raises(ParameterDefinitionError, match="must be > 0"):
            resolve_quantity("resistance", raw, "ohm")

    def test_zero_allowed_when_requested(self):
        assert resolve_quantity("duration", "0 s", "second", allow_zero=True) == 0.0

    def test_negative_rejected_even_when_zero_allowed(self):
        with pytest.raises(ParameterDefinitionError, match="must be >= 0"):
            resolve_quantity("duration", "-1 s", "second", allow_zero=True)

    def test_wrong_dimension_is_rejected(self):
        with pytest.raises(ParameterDefinitionError, match="dimensionally compatible"):
            resolve_quantity("capacitance", "10 V", "farad")

    @pytest.mark.parametrize("raw", ["ten volts", "10 blargs", True, None, [1, 2]])
    def test_unparsable_values_are_rejected(self, raw):
        with pytest.raises(ParameterDefinitionError):
            resolve_quantity("source_voltage", raw, "volt")

    @pytest.mark.parametrize("raw", [float("nan"), float("inf")])
    def test_non_finite_values_are_rejected(self, raw):
        with pytest.raises(ParameterDefinitionError, match="finite"):
            resolve_quantity("resistance", raw, "ohm")

    def test_error_report_names_parameter_and_source(self):
        with pytest.raises(ParameterDefinitionError) as exc_info:
            resolve_quantity("resistance", "-3 ohm", "ohm", source=Path("bench.yaml"))
        report = exc_info.value.get_diagnostic_report()
        assert "Invalid Parameter Definition" in report
        assert "resistance" in report
        assert "bench.yaml" in report
        assert "-3 ohm" in report
        assert isinstance(exc_info.value, ParameterError)


class TestSimulationParameters:

    def test_time_constant(self):
        params = SimulationParameters(5.0, 1.0e6, 1.0e-6)
        assert params.time_constant == pytest.approx(1.0)

    def test_initial_parameters(self):
        assert INITIAL_PARAMETERS.source_voltage == 10.0
        assert INITIAL_PARAMETERS.time_constant == pytest.approx(20.0)

    def test_is_frozen(self):
        with pytest.raises(AttributeError):
            INITIAL_PARAMETERS.resistance = 1.0

    def test_from_raw_fills_missing_values_from_defaults(self):
        params = SimulationParameters.from_raw({"capacitance": "1 uF"})
        assert params.capacitance == pytest.approx(1e-6)
        assert params.source_voltage == INITIAL_PARAMETERS.source_voltage
        assert params.resistance == INITIAL_PARAMETERS.resistance

    def test_with_updates_returns_new_instance(self):
        updated = INITIAL_PARAMETERS.with_updates(source_voltage="6 V")
        assert updated is not INITIAL_PARAMETERS
        assert updated.source_voltage == 6.0
        assert updated.resistance == INITIAL_PARAMETERS.resistance
        assert INITIAL_PARAMETERS.source_voltage == 10.0

    def test_unknown_parameter_is_rejected(self):
        with pytest.raises(UnknownParameterError) as exc_info:
            resolve_parameters({"inductance": "1 mH"})
        assert "inductance" in exc_info.value.get_diagnostic_report()

    def test_as_quantities(self):
        quantities = INITIAL_PARAMETERS.as_quantities()
        assert quantities["resistance"].to("Mohm").magnitude == pytest.approx(2.0)
        assert quantities["capacitance"].to("uF").magnitude == pytest.approx(10.0)
        assert quantities["source_voltage"].to("V").magnitude == pytest.approx(10.0)
