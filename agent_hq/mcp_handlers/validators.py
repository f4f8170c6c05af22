"""
Parameter validation helpers for MCP tool handlers.

Each validator returns (value, error). On failure value is None and error is
a ready-to-return TextContent. Validation runs before any storage or network
access.
"""

import math
from typing import Any, Dict, List, Optional, Tuple
from mcp.types import TextContent

from agent_hq.records import ACTIVITY_STATUSES, WORKFLOW_STATUSES
from .error_helpers import validation_error


ACTIVITY_TYPES = {"invocations", "workflows", "all"}


def _type_name(value: Any) -> str:
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_non_empty_string(
    value: Any,
    param_name: str,
    required: bool = True
) -> Tuple[Optional[str], Optional[TextContent]]:
    """
    Validate a string parameter that must contain at least one character.

    Args:
        value: The value to validate
        param_name: Name of the parameter (for error messages)
        required: If False, None is accepted and returned as None
    """
    if value is None:
        if not required:
            return None, None
        return None, validation_error(f"{param_name} is required", param_name,
                                      {"constraint": "required"})

    if not isinstance(value, str):
        return None, validation_error(
            f"Invalid {param_name}: must be a string, got {_type_name(value)}",
            param_name, {"constraint": "type:string"}
        )

    if len(value) < 1:
        return None, validation_error(f"{param_name} must not be empty", param_name,
                                      {"constraint": "min_length:1"})

    return value, None


def validate_enum(
    value: Any,
    valid_values: set,
    param_name: str,
    required: bool = False
) -> Tuple[Optional[str], Optional[TextContent]]:
    """
    Validate an enum parameter value.

    Args:
        value: The value to validate
        valid_values: Set of valid enum values
        param_name: Name of the parameter (for error messages)
        required: If False, None is accepted (optional parameter)
    """
    if value is None:
        if not required:
            return None, None
        return None, validation_error(
            f"{param_name} is required. Must be one of: {', '.join(sorted(valid_values))}",
            param_name, {"constraint": "required"}
        )

    if not isinstance(value, str) or value not in valid_values:
        close_matches = []
        value_lower = str(value).lower()
        for candidate in sorted(valid_values):
            if value_lower and (value_lower in candidate or candidate in value_lower):
                close_matches.append(candidate)

        error_msg = f"Invalid {param_name}: '{value}'. Must be one of: {', '.join(sorted(valid_values))}"
        if close_matches:
            error_msg += f". Did you mean: {', '.join(close_matches)}?"

        return None, validation_error(error_msg, param_name,
                                      {"constraint": "enum", "provided_value": value})

    return value, None


def validate_number(
    value: Any,
    param_name: str,
    min_val: Optional[float] = None,
    max_val: Optional[float] = None,
    integer: bool = False
) -> Tuple[Optional[float], Optional[TextContent]]:
    """
    Validate an optional numeric parameter, with inclusive bounds.

    Booleans are rejected even though bool is an int subclass.
    """
    if value is None:
        return None, None

    if not _is_number(value) or (isinstance(value, float) and not math.isfinite(value)):
        return None, validation_error(
            f"Invalid {param_name}: '{value}'. Must be a number.",
            param_name, {"constraint": "type:number", "provided_value": value}
        )

    if integer:
        if isinstance(value, float) and not value.is_integer():
            return None, validation_error(
                f"Invalid {param_name}: {value}. Must be an integer.",
                param_name, {"constraint": "type:integer", "provided_value": value}
            )
        value = int(value)

    if (min_val is not None and value < min_val) or (max_val is not None and value > max_val):
        low = "-inf" if min_val is None else min_val
        high = "inf" if max_val is None else max_val
        return None, validation_error(
            f"Invalid {param_name}: {value}. Must be in range [{low}, {high}].",
            param_name, {"constraint": "range", "provided_value": value, "valid_range": [min_val, max_val]}
        )

    return value, None


def validate_string_list(
    value: Any,
    param_name: str
) -> Tuple[Optional[List[str]], Optional[TextContent]]:
    """Validate an optional list whose items are all strings."""
    if value is None:
        return None, None

    if not isinstance(value, list):
        return None, validation_error(
            f"Invalid {param_name}: must be a list of strings, got {_type_name(value)}",
            param_name, {"constraint": "type:array"}
        )

    for i, item in enumerate(value):
        if not isinstance(item, str):
            return None, validation_error(
                f"Invalid {param_name}[{i}]: must be a string, got {_type_name(item)}",
                param_name, {"constraint": "items:string"}
            )

    return value, None


def validate_context(value: Any) -> Tuple[Optional[Dict[str, Any]], Optional[TextContent]]:
    """Validate the optional free-form context object."""
    if value is None:
        return None, None

    if not isinstance(value, dict):
        return None, validation_error(
            f"Invalid context: must be an object, got {_type_name(value)}",
            "context", {"constraint": "type:object"}
        )

    return value, None


def validate_boolean(value: Any, param_name: str) -> Tuple[Optional[bool], Optional[TextContent]]:
    """Validate a required boolean parameter."""
    if value is None:
        return None, validation_error(f"{param_name} is required", param_name,
                                      {"constraint": "required"})

    if not isinstance(value, bool):
        return None, validation_error(
            f"Invalid {param_name}: must be a boolean, got {_type_name(value)}",
            param_name, {"constraint": "type:boolean"}
        )

    return value, None


def validate_activity_status(value: Any) -> Tuple[Optional[str], Optional[TextContent]]:
    """Validate logActivity status parameter."""
    return validate_enum(value, ACTIVITY_STATUSES, "status", required=True)


def validate_workflow_status(value: Any) -> Tuple[Optional[str], Optional[TextContent]]:
    """Validate logWorkflow status parameter."""
    return validate_enum(value, WORKFLOW_STATUSES, "status", required=True)


def validate_activity_type(value: Any) -> Tuple[Optional[str], Optional[TextContent]]:
    """Validate getRecentActivities type parameter."""
    return validate_enum(value, ACTIVITY_TYPES, "type")
