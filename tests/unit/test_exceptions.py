"""
Unit tests for the error hierarchy.

Tests message formatting, error codes and parameter validation helpers.
"""

import pytest

from meanderer.geometry import Position
from meanderer.utils.exceptions import (
    ConfigurationError,
    InvalidDimensions,
    InvalidLink,
    InvalidPosition,
    MazeError,
    Unreachable,
    UnsupportedTopology,
    validate_parameter_value,
)


class TestMazeError:
    """Test base error formatting."""

    def test_full_message(self):
        error = MazeError(
            "Something went wrong",
            component="Carver",
            suggested_action="Try again",
            error_code="E42",
            diagnostic_data={"cells": 9},
        )

        message = str(error)
        assert message.startswith("[Carver] Something went wrong")
        assert "Suggestion: Try again" in message
        assert "Error Code: E42" in message
        assert "   - cells: 9" in message

    def test_minimal_message(self):
        error = MazeError("Plain")

        assert str(error) == "[meanderer] Plain"
        assert error.diagnostic_data == {}

    @pytest.mark.parametrize(
        "error",
        [
            InvalidDimensions({"rows": 0, "cols": 3}),
            InvalidLink(Position(0, 0), Position(2, 2)),
            InvalidPosition(Position(9, 9)),
            Unreachable(Position(1, 1), Position(0, 0)),
            UnsupportedTopology("binary_tree", "polar", ("rectangular",)),
            ConfigurationError("braid_probability", 3.0),
        ],
    )
    def test_subclasses_are_maze_errors(self, error):
        assert isinstance(error, MazeError)
        assert error.error_code


class TestSpecificErrors:
    """Test the details carried by each error kind."""

    def test_invalid_dimensions_suggests_fix(self):
        error = InvalidDimensions({"rows": 0, "cols": 3}, component="RectangularGrid")

        assert "Use rows >= 1 (got 0)" in str(error)
        assert "cols >=" not in str(error)
        assert error.dimensions == {"rows": 0, "cols": 3}

    def test_invalid_link_keeps_positions(self):
        error = InvalidLink(Position(0, 0), Position(2, 2))

        assert error.first == Position(0, 0)
        assert error.second == Position(2, 2)
        assert "(0, 0)" in str(error)

    def test_invalid_position_role(self):
        error = InvalidPosition(Position(7, 7), role="target")
        assert "target position (7, 7)" in str(error)

    def test_unsupported_topology(self):
        error = UnsupportedTopology("sidewinder", "polar", ("rectangular",))

        assert error.operation == "sidewinder"
        assert error.topology == "polar"
        assert "Use a rectangular grid" in str(error)

    def test_configuration_error_range_suggestion(self):
        error = ConfigurationError("braid_probability", 1.5, valid_range=(0.0, 1.0))

        assert "Decrease braid_probability to at most 1.0" in str(error)
        assert "Probabilities are expressed as floats in [0, 1]" in str(error)
        assert error.parameter_name == "braid_probability"


class TestValidateParameterValue:
    """Test the parameter validation helper."""

    def test_valid(self):
        validate_parameter_value(0.5, "probability", (int, float), (0.0, 1.0))

    def test_wrong_type(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_parameter_value("high", "probability", (int, float), (0.0, 1.0))

        assert exc_info.value.diagnostic_data["expected_type"] == "int"

    def test_bool_rejected(self):
        with pytest.raises(ConfigurationError):
            validate_parameter_value(True, "probability", (int, float))

    @pytest.mark.parametrize("value", [-0.01, 1.01])
    def test_out_of_range(self, value):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_parameter_value(value, "probability", (int, float), (0.0, 1.0), component="braid")

        assert exc_info.value.component == "braid"
