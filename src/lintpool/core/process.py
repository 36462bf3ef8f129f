"""Bounded-concurrency process pool.

Running too many processes at once exhausts OS resources: file descriptors
run out ("too many open files") and process creation can hang on some
platforms. ConcurrentProcess caps how many subprocesses run at the same
time while every scheduled invocation still gets its own thread.
"""

import logging
import os
import threading
from collections.abc import Callable
from typing import Literal, overload

from lintpool.core.command import ExternalCommand, resolve_external_command
from lintpool.core.errors import CommandResolutionError, ExecutionError, SemaphoreAcquireError
from lintpool.core.execution import CommandExecution
from lintpool.core.executables import Executables, RealExecutables
from lintpool.core.sync import TaskGroup, WaitGroup

logger = logging.getLogger(__name__)

Callback = Callable[[bytes | None, Exception | None], Exception | None]


def default_parallelism() -> int:
    """Number of processes to run at once when the caller does not choose."""
    return os.cpu_count() or 1


class ConcurrentProcess:
    """Manager running subprocesses concurrently with a fixed upper bound.

    Example:
        >>> proc = ConcurrentProcess(default_parallelism())
        >>> cat = proc.new_command_runner("cat", combine_output=False)
        >>> cat.run([], "hello", lambda out, err: err)
        >>> cat.wait()
        >>> proc.wait()
    """

    def __init__(
        self,
        parallelism: int,
        acquire_timeout: float | None = None,
        executables: Executables | None = None,
    ) -> None:
        """Create a pool.

        Args:
            parallelism: Maximum number of subprocesses running at once
            acquire_timeout: Seconds a worker waits for a free slot before the
                invocation fails, or None to wait indefinitely
            executables: Executable lookup (defaults to the PATH-based one)

        Raises:
            ValueError: If parallelism is not positive
        """
        if parallelism < 1:
            raise ValueError(f"parallelism must be a positive integer, got {parallelism}")
        self._parallelism = parallelism
        self._acquire_timeout = acquire_timeout
        self._executables = executables if executables is not None else RealExecutables()
        self._sema = threading.BoundedSemaphore(parallelism)
        self._wg = WaitGroup()

    @property
    def parallelism(self) -> int:
        return self._parallelism

    def run(self, group: TaskGroup, execution: CommandExecution, callback: Callback) -> None:
        """Schedule an execution on a new thread owned by group.

        The admission slot is released as soon as the subprocess finished,
        before the callback runs, so slow callbacks do not hold a slot.
        """
        self._wg.add(1)

        def worker() -> Exception | None:
            try:
                self._acquire(execution)
                try:
                    output: bytes | None = execution.run()
                    error: Exception | None = None
                except (OSError, ValueError, ExecutionError) as e:
                    output, error = None, e
                finally:
                    self._sema.release()
                return callback(output, error)
            finally:
                self._wg.done()

        try:
            group.go(worker)
        except BaseException:
            self._wg.done()
            raise

    def wait(self) -> None:
        """Block until every execution scheduled so far completed its callback.

        Work scheduled while this call is in progress may or may not be
        covered; callers needing a strict boundary must stop scheduling first.
        """
        self._wg.wait()

    @overload
    def new_command_runner(
        self, exe: str, combine_output: bool, *, optional: Literal[False] = False
    ) -> ExternalCommand: ...

    @overload
    def new_command_runner(
        self, exe: str, combine_output: bool, *, optional: bool
    ) -> ExternalCommand | None: ...

    def new_command_runner(
        self,
        exe: str,
        combine_output: bool,
        *,
        optional: bool = False,
    ) -> ExternalCommand | None:
        """Create a command handle for an executable name or command line.

        Args:
            exe: Executable name, path, or full command line
            combine_output: Whether stderr is merged into the captured output
            optional: Return None instead of raising when resolution fails

        Returns:
            The command handle, or None when optional and not resolvable

        Raises:
            CommandResolutionError: If resolution fails and optional is False
        """
        try:
            path, args = resolve_external_command(exe, self._executables)
        except CommandResolutionError as e:
            if not optional:
                raise
            logger.debug("Skipping optional command %r: %s", exe, e)
            return None
        return ExternalCommand(self, path, args, combine_output)

    def _acquire(self, execution: CommandExecution) -> None:
        logger.debug("Waiting for a slot to run %s", execution.cmd)
        if not self._sema.acquire(timeout=self._acquire_timeout):
            raise SemaphoreAcquireError(
                f"could not acquire semaphore to run {execution.cmd!r}: "
                f"no slot freed within {self._acquire_timeout}s"
            )
