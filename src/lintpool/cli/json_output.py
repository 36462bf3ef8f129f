"""JSON output schemas and helpers for `--format json`."""

import json
from collections.abc import Callable
from functools import wraps
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from lintpool.cli.output import machine_output


class ErrorResponse(BaseModel):
    """Pydantic model for error JSON responses.

    Attributes:
        error: Error message
        error_type: Error class name (e.g., "CommandResolutionError")
        exit_code: Exit code for the process
    """

    model_config = ConfigDict(strict=True)

    error: str
    error_type: str
    exit_code: int = Field(default=1, ge=0, le=255)


class InvocationResult(BaseModel):
    """Outcome of running one tool on one file.

    Attributes:
        tool: Tool name (the command line for `lintpool run`)
        path: File the tool was run on
        output: Decoded tool output, or None if the invocation failed
        error: Error message, or None if the invocation succeeded
    """

    model_config = ConfigDict(strict=True)

    tool: str
    path: str
    output: str | None
    error: str | None


class RunResponse(BaseModel):
    """Schema for `lintpool run --format json`."""

    model_config = ConfigDict(strict=True)

    command: str
    results: list[InvocationResult]
    failed: bool


class CheckResponse(BaseModel):
    """Schema for `lintpool check --format json`."""

    model_config = ConfigDict(strict=True)

    results: list[InvocationResult]
    failed_tools: list[str]
    skipped_tools: list[str]


def emit_json(data: dict[str, Any]) -> None:
    """Output JSON data to stdout for machine consumption.

    For Pydantic models, call model.model_dump(mode="json") before passing
    the data to this function.
    """
    machine_output(json.dumps(data, indent=2))


def emit_json_error(error: str, error_type: str, exit_code: int = 1) -> None:
    """Output error as JSON and exit.

    Raises:
        SystemExit: Always raises to terminate with specified exit code
    """
    error_response = ErrorResponse(error=error, error_type=error_type, exit_code=exit_code)
    emit_json(error_response.model_dump(mode="json"))
    raise SystemExit(exit_code)


def json_error_boundary(func: Callable) -> Callable:
    """Decorator emitting exceptions as JSON errors when `format == "json"`.

    In text mode exceptions propagate unchanged to the regular error boundary.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except Exception as e:
            if kwargs.get("format", "text") == "json":
                emit_json_error(str(e), type(e).__name__, exit_code=1)
            raise

    return wrapper
