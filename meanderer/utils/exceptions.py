"""
Exception classes for meanderer with helpful error messages and user guidance.

Every error carries the component that raised it, an error code, optional
diagnostic data and a suggested action, all folded into the message so that
a bare traceback is still actionable.
"""

from __future__ import annotations

from numbers import Integral
from typing import Any


class MazeError(Exception):
    """
    Base exception for maze errors with helpful context and suggestions.

    This exception class provides structured error information including:
    - Clear error description
    - Component context information
    - Suggested actions for resolution
    - Optional diagnostic data
    """

    def __init__(
        self,
        message: str,
        component: str | None = None,
        suggested_action: str | None = None,
        error_code: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.component = component or "meanderer"
        self.suggested_action = suggested_action
        self.error_code = error_code
        self.diagnostic_data = diagnostic_data or {}

        full_message = f"[{self.component}] {message}"

        if self.suggested_action:
            full_message += f"\nSuggestion: {self.suggested_action}"

        if self.error_code:
            full_message += f"\nError Code: {self.error_code}"

        if self.diagnostic_data:
            full_message += "\nDiagnostic Information:"
            for key, value in self.diagnostic_data.items():
                full_message += f"\n   - {key}: {value}"

        super().__init__(full_message)


class InvalidDimensions(MazeError):
    """Exception raised when a grid is constructed with zero or negative extents."""

    def __init__(self, dimensions: dict[str, Any], component: str | None = None):
        bad = {
            name: value
            for name, value in dimensions.items()
            if isinstance(value, bool) or not isinstance(value, Integral) or value < 1
        }
        diagnostic_data = dict(dimensions)
        suggested_action = " | ".join(f"Use {name} >= 1 (got {value})" for name, value in bad.items())

        super().__init__(
            message="Grid dimensions must be positive integers",
            component=component,
            suggested_action=suggested_action or None,
            error_code="INVALID_DIMENSIONS",
            diagnostic_data=diagnostic_data,
        )
        self.dimensions = dimensions


class InvalidLink(MazeError):
    """Exception raised when linking or unlinking positions that are not structural neighbors."""

    def __init__(self, first: Any, second: Any, component: str | None = None):
        super().__init__(
            message=f"Cannot link {first} and {second}: they are not structural neighbors",
            component=component,
            suggested_action="Only link positions returned by grid.neighbors(pos)",
            error_code="INVALID_LINK",
            diagnostic_data={"first": first, "second": second},
        )
        self.first = first
        self.second = second


class InvalidPosition(MazeError):
    """Exception raised when a position is outside the grid's position set."""

    def __init__(self, position: Any, component: str | None = None, role: str | None = None):
        label = f"{role} position" if role else "Position"
        diagnostic_data = {"position": position}
        if role:
            diagnostic_data["role"] = role

        super().__init__(
            message=f"{label} {position} is not part of the grid",
            component=component,
            suggested_action="Pick a position from grid.all_positions()",
            error_code="INVALID_POSITION",
            diagnostic_data=diagnostic_data,
        )
        self.position = position


class Unreachable(MazeError):
    """
    Exception raised when a position is not connected to the distance source.

    On a maze produced by any generator this cannot happen; seeing it means
    the grid was left disconnected (or was never generated).
    """

    def __init__(self, position: Any, source: Any, component: str | None = None):
        super().__init__(
            message=f"Position {position} is not reachable from {source}",
            component=component,
            suggested_action="Run a generator on the grid before solving; check verify_perfect_maze(grid)",
            error_code="UNREACHABLE",
            diagnostic_data={"position": position, "source": source},
        )
        self.position = position
        self.source = source


class UnsupportedTopology(MazeError):
    """Exception raised when an operation is not defined for the grid's topology."""

    def __init__(self, operation: str, topology: str, supported: tuple[str, ...], component: str | None = None):
        super().__init__(
            message=f"'{operation}' is not available on {topology} grids",
            component=component,
            suggested_action=f"Use a {' or '.join(supported)} grid, or choose another algorithm",
            error_code="UNSUPPORTED_TOPOLOGY",
            diagnostic_data={"operation": operation, "topology": topology, "supported": ", ".join(supported)},
        )
        self.operation = operation
        self.topology = topology


class ConfigurationError(MazeError):
    """Exception raised when a parameter value is invalid."""

    def __init__(
        self,
        parameter_name: str,
        provided_value: Any,
        expected_type: type | None = None,
        valid_range: tuple | None = None,
        component: str | None = None,
    ):
        diagnostic_data = {
            "parameter": parameter_name,
            "provided_value": str(provided_value),
            "provided_type": type(provided_value).__name__,
        }

        if expected_type:
            diagnostic_data["expected_type"] = expected_type.__name__

        if valid_range:
            diagnostic_data["valid_range"] = f"[{valid_range[0]}, {valid_range[1]}]"

        suggested_action = _generate_configuration_suggestions(
            parameter_name, provided_value, expected_type, valid_range
        )

        super().__init__(
            message=f"Invalid configuration for parameter '{parameter_name}'",
            component=component,
            suggested_action=suggested_action,
            error_code="INVALID_CONFIGURATION",
            diagnostic_data=diagnostic_data,
        )
        self.parameter_name = parameter_name


def _generate_configuration_suggestions(
    parameter_name: str,
    provided_value: Any,
    expected_type: type | None,
    valid_range: tuple | None,
) -> str:
    """Generate specific suggestions for configuration errors."""

    suggestions = []

    if expected_type and not isinstance(provided_value, expected_type):
        suggestions.append(f"Convert {parameter_name} to {expected_type.__name__}")

    if valid_range and isinstance(provided_value, (int, float)):
        if provided_value < valid_range[0]:
            suggestions.append(f"Increase {parameter_name} to at least {valid_range[0]}")
        elif provided_value > valid_range[1]:
            suggestions.append(f"Decrease {parameter_name} to at most {valid_range[1]}")

    if "probability" in parameter_name.lower():
        suggestions.append("Probabilities are expressed as floats in [0, 1]")

    return " | ".join(suggestions) if suggestions else f"Check {parameter_name} value and try again"


def validate_parameter_value(
    value: Any,
    parameter_name: str,
    expected_type: type | tuple[type, ...] | None = None,
    valid_range: tuple | None = None,
    component: str | None = None,
):
    """Validate parameter value and type."""
    if expected_type and (isinstance(value, bool) or not isinstance(value, expected_type)):
        raise ConfigurationError(
            parameter_name=parameter_name,
            provided_value=value,
            expected_type=expected_type if isinstance(expected_type, type) else expected_type[0],
            component=component,
        )

    if valid_range and isinstance(value, (int, float)):
        if not (valid_range[0] <= value <= valid_range[1]):
            raise ConfigurationError(
                parameter_name=parameter_name,
                provided_value=value,
                valid_range=valid_range,
                component=component,
            )
