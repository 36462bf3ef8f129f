"""Exception hierarchy for lintpool.

Resolution errors are raised synchronously when a command handle is built.
Execution errors never escape a worker thread: they are handed to the
invocation callback and recorded by the handle's task group.
"""


class LintpoolError(Exception):
    """Base class for all lintpool errors."""


class CommandResolutionError(LintpoolError):
    """Raised when a command name or command line cannot be resolved to an executable."""


class CommandLineParseError(CommandResolutionError):
    """Raised when a command line cannot be tokenized (e.g. unterminated quote)."""


class ExecutionError(LintpoolError):
    """Base class for failures classified after running a subprocess."""


class StdinWriteError(ExecutionError):
    """Raised when the stdin payload could not be written to the child process."""


class ProcessTerminatedError(ExecutionError):
    """Raised when the child process was killed by a signal."""

    def __init__(self, message: str, stderr: str) -> None:
        super().__init__(message)
        self.stderr = stderr


class ProcessExitError(ExecutionError):
    """Raised when the child exited with nonzero status and printed nothing to stdout."""

    def __init__(self, message: str, exit_code: int, stderr: str) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


class SemaphoreAcquireError(ExecutionError):
    """Raised when a worker could not obtain an admission slot."""


class ConfigError(LintpoolError, ValueError):
    """Raised when .lintpool.toml is malformed."""


class TaskAbortedError(LintpoolError):
    """Recorded in place of a BaseException (e.g. SystemExit) that escaped a task."""
