"""Command handles bound to a resolved executable.

An ExternalCommand runs one tool many times through a shared
ConcurrentProcess. Each handle owns a TaskGroup, so its wait() only covers
invocations made through that handle and reports only that tool's errors.
"""

import logging
import shlex
from typing import TYPE_CHECKING

from lintpool.core.errors import CommandLineParseError, CommandResolutionError
from lintpool.core.execution import CommandExecution
from lintpool.core.executables import Executables
from lintpool.core.sync import TaskGroup

if TYPE_CHECKING:
    from lintpool.core.process import Callback, ConcurrentProcess

logger = logging.getLogger(__name__)


def parse_command_line(line: str) -> list[str]:
    """Split a shell-like command line into arguments.

    Quotes and backslash escapes are honored. No variable, glob or tilde
    expansion is performed.

    Examples:
        shellcheck --norc -f json → ["shellcheck", "--norc", "-f", "json"]
        "my tool" 'a b' → ["my tool", "a b"]

    Raises:
        CommandLineParseError: If the line is not well formed (e.g. unterminated quote)
    """
    try:
        return shlex.split(line, posix=True)
    except ValueError as e:
        raise CommandLineParseError(f"could not parse command line {line!r}: {e}") from e


def resolve_external_command(exe: str, executables: Executables) -> tuple[str, list[str]]:
    """Resolve an executable name or a full command line.

    The string is first looked up as a single executable. When that fails it
    is parsed as a command line: the first token must be an executable and
    the remaining tokens become leading arguments for every invocation.

    Args:
        exe: Executable name, path, or command line
        executables: Lookup used to locate executables

    Returns:
        Tuple of (executable path, baked-in leading arguments)

    Raises:
        CommandResolutionError: If the string is empty, cannot be parsed, or
            names no executable
    """
    if not exe.strip():
        raise CommandResolutionError("command is empty")

    path = executables.which(exe)
    if path is not None:
        logger.debug("Resolved %r to %s", exe, path)
        return path, []

    try:
        tokens = parse_command_line(exe)
    except CommandLineParseError as e:
        raise CommandResolutionError(f"command not found: {exe!r} ({e})") from e

    if tokens:
        path = executables.which(tokens[0])
        if path is not None:
            logger.debug("Resolved command line %r to %s with args %s", exe, path, tokens[1:])
            return path, tokens[1:]

    raise CommandResolutionError(f"command not found: {exe!r}")


class ExternalCommand:
    """Reusable handle running one executable through a ConcurrentProcess.

    Invocations are fire-and-forget: run() schedules work and returns at
    once. Call wait() at the end to join this handle's invocations and learn
    whether any of them failed.
    """

    def __init__(
        self,
        proc: "ConcurrentProcess",
        exe: str,
        args: list[str] | None = None,
        combine_output: bool = False,
    ) -> None:
        """Create a handle for an already resolved executable.

        Args:
            proc: Pool that bounds how many processes run at once (borrowed)
            exe: Resolved path of the executable
            args: Leading arguments prepended to every invocation
            combine_output: Whether stderr is merged into the captured output
        """
        self._proc = proc
        self._exe = exe
        self._args = list(args) if args is not None else []
        self._combine_output = combine_output
        self._group = TaskGroup(name=f"lintpool:{exe}")

    @property
    def exe(self) -> str:
        return self._exe

    @property
    def args(self) -> list[str]:
        return list(self._args)

    @property
    def combine_output(self) -> bool:
        return self._combine_output

    @property
    def errors(self) -> list[Exception]:
        """Every error recorded for this handle so far."""
        return self._group.errors

    def run(self, args: list[str] | None, stdin: str | bytes, callback: "Callback") -> None:
        """Schedule one invocation and return without waiting for it.

        Args:
            args: Arguments appended after the baked-in leading arguments
            stdin: Payload written to the process's standard input (text is UTF-8 encoded)
            callback: Called on a worker thread with (output, error) once the
                process finished. Its return value (or an exception it
                raises) is recorded as this handle's error.
        """
        execution = CommandExecution(
            cmd=self._exe,
            args=[*self._args, *(args or [])],
            stdin=stdin,
            combine_output=self._combine_output,
        )
        self._proc.run(self._group, execution, callback)

    def wait(self) -> Exception | None:
        """Block until every invocation made through this handle finished.

        Returns:
            The first error recorded for this handle, or None
        """
        return self._group.wait()
