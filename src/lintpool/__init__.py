"""Run external linters as subprocesses with bounded concurrency."""

from lintpool.core.command import ExternalCommand, parse_command_line, resolve_external_command
from lintpool.core.errors import (
    CommandLineParseError,
    CommandResolutionError,
    ConfigError,
    ExecutionError,
    LintpoolError,
    ProcessExitError,
    ProcessTerminatedError,
    SemaphoreAcquireError,
    StdinWriteError,
    TaskAbortedError,
)
from lintpool.core.execution import CommandExecution
from lintpool.core.process import Callback, ConcurrentProcess, default_parallelism
from lintpool.core.sync import TaskGroup, WaitGroup

__version__ = "0.1.0"

__all__ = [
    # Process pool
    "Callback",
    "ConcurrentProcess",
    "default_parallelism",
    # Command handles
    "ExternalCommand",
    "parse_command_line",
    "resolve_external_command",
    # Execution unit
    "CommandExecution",
    # Synchronization
    "TaskGroup",
    "WaitGroup",
    # Errors
    "LintpoolError",
    "CommandResolutionError",
    "CommandLineParseError",
    "ExecutionError",
    "StdinWriteError",
    "ProcessTerminatedError",
    "ProcessExitError",
    "SemaphoreAcquireError",
    "TaskAbortedError",
    "ConfigError",
]
