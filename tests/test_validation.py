"""
tests/test_validation.py
========================
Operating range checks and error types.
"""

import pytest

from teg_brake_recovery.utils.validation import (
    TEGSystemError, ConfigNotFound, UnsafeTemperature, ValueOutOfRange,
    ValidationResult, validate_in_range, require_in_range
)


class TestValidateInRange:

    def test_value_inside_range_is_valid(self):
        assert validate_in_range(100.0, "brake_temperature")["status"] == "valid"

    def test_value_below_range(self):
        assert validate_in_range(-50.0, "ambient_temperature")["status"] == "below_range"

    def test_value_above_range(self):
        assert validate_in_range(600.0, "brake_temperature")["status"] == "above_range"

    def test_custom_range_overrides_default(self):
        result = validate_in_range(5.0, "airflow", custom_range=(10.0, 20.0))
        assert result["status"] == "below_range"
        assert result["expected_range"] == (10.0, 20.0)

    def test_unknown_metric(self):
        result = validate_in_range(1.0, "tyre_pressure")
        assert result["status"] == "unknown"
        assert result["expected_range"] is None


class TestRequireInRange:

    def test_boundaries_are_inclusive(self):
        require_in_range(-40.0, "brake_temperature")
        require_in_range(500.0, "brake_temperature")
        require_in_range(0.0, "airflow")

    def test_out_of_range_message_names_quantity(self):
        with pytest.raises(ValueOutOfRange, match="Brake temperature out of valid range"):
            require_in_range(600.0, "brake_temperature")

    def test_error_carries_bounds(self):
        with pytest.raises(ValueOutOfRange) as excinfo:
            require_in_range(-5.0, "airflow")
        assert excinfo.value.lower == 0.0
        assert excinfo.value.upper == 100.0


class TestErrorTypes:

    def test_errors_share_base_class(self):
        assert issubclass(ConfigNotFound, TEGSystemError)
        assert issubclass(ValueOutOfRange, ValueError)

    def test_unsafe_temperature_message(self):
        error = UnsafeTemperature(350.0, 300.0)
        assert str(error) == "TEG temperature (350°C) exceeds safety limit (300°C)"

    def test_validation_result_validity(self):
        assert ValidationResult().is_valid
        assert not ValidationResult(errors=["bad"]).is_valid
        assert ValidationResult(warnings=["meh"]).to_dict()["is_valid"] is True
