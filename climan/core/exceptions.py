"""
Custom exceptions for climan.

Provides specific exception types with associated exit codes
for different failure modes. All exceptions support JSON serialization
for CI integration via --json-errors flag.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional


class ExitCode:
    """Standard exit codes for climan."""
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIG_ERROR = 2
    TARGET_ERROR = 3


@dataclass
class InvalidSourceDateEpoch(Exception):
    """Raised when SOURCE_DATE_EPOCH is set but is not an integer.

    Raised before any output is written, so a partially generated page
    is never left behind.

    Attributes:
        value: The raw environment value
    """
    value: str

    def __str__(self) -> str:
        return f"Invalid SOURCE_DATE_EPOCH: {self.value!r} is not an integer"

    @property
    def exit_code(self) -> int:
        return ExitCode.CONFIG_ERROR


@dataclass
class TargetResolutionError(Exception):
    """Raised when a generate target cannot be turned into a Parser.

    Attributes:
        target: The module:attribute reference given on the command line
        details: Human-readable explanation
    """
    target: str
    details: str

    def __str__(self) -> str:
        return f"Cannot load {self.target}: {self.details}"

    @property
    def exit_code(self) -> int:
        return ExitCode.TARGET_ERROR


def exception_to_json(exc: Exception, context: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """Convert an exception to a JSON-serializable dictionary.

    Args:
        exc: The exception to convert
        context: Optional additional context (target, output path, etc.)

    Returns:
        JSON-serializable dict with error details
    """
    error_dict: dict[str, Any] = {
        "type": type(exc).__name__,
        "message": str(exc),
    }

    if hasattr(exc, "exit_code"):
        error_dict["exit_code"] = exc.exit_code
    else:
        error_dict["exit_code"] = ExitCode.GENERAL_ERROR

    if isinstance(exc, InvalidSourceDateEpoch):
        error_dict["value"] = exc.value

    elif isinstance(exc, TargetResolutionError):
        error_dict["target"] = exc.target
        error_dict["details"] = exc.details

    if context:
        error_dict["context"] = context

    return {"error": error_dict}


def format_json_error(exc: Exception, context: Optional[dict[str, Any]] = None) -> str:
    """Format an exception as a JSON string.

    Args:
        exc: The exception to format
        context: Optional additional context

    Returns:
        JSON string with error details
    """
    return json.dumps(exception_to_json(exc, context), indent=2, default=str)
