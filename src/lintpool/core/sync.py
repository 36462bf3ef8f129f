"""Thread synchronization primitives used by the process pool.

WaitGroup is a reusable counter barrier. TaskGroup runs each task on its own
thread and remembers the errors those tasks produce, so that one command
handle can be joined independently of every other handle sharing a pool.
"""

import logging
import threading
from collections.abc import Callable

from lintpool.core.errors import TaskAbortedError

logger = logging.getLogger(__name__)

Task = Callable[[], Exception | None]


class WaitGroup:
    """Counter that lets callers block until it drops back to zero.

    The counter can be raised again after wait() returned, so the same
    instance serves any number of schedule/join cycles.
    """

    def __init__(self) -> None:
        self._count = 0
        self._cond = threading.Condition()

    def add(self, delta: int = 1) -> None:
        """Adjust the counter by delta, waking waiters when it reaches zero.

        Raises:
            ValueError: If the counter would become negative
        """
        with self._cond:
            if self._count + delta < 0:
                raise ValueError("negative WaitGroup counter")
            self._count += delta
            if self._count == 0:
                self._cond.notify_all()

    def done(self) -> None:
        """Decrement the counter by one."""
        self.add(-1)

    def wait(self) -> None:
        """Block until the counter is zero."""
        with self._cond:
            self._cond.wait_for(lambda: self._count == 0)


class TaskGroup:
    """Group of tasks run on independent threads with first-error tracking.

    A task returns an exception (or None) to report its outcome. Exceptions
    raised by a task are caught on its thread and recorded the same way, so
    a misbehaving task never takes its worker thread down silently.

    The first recorded error is what wait() reports. Later errors are kept
    in `errors` and logged, so a failure is never lost.
    """

    def __init__(self, name: str = "task") -> None:
        self._name = name
        self._wg = WaitGroup()
        self._lock = threading.Lock()
        self._errors: list[Exception] = []

    @property
    def errors(self) -> list[Exception]:
        """All errors recorded so far, in the order they were recorded."""
        with self._lock:
            return list(self._errors)

    def go(self, task: Task) -> None:
        """Run task on a new daemon thread and return immediately.

        Raises:
            RuntimeError: If the thread could not be started
        """
        self._wg.add(1)
        thread = threading.Thread(target=self._run, args=(task,), name=self._name, daemon=True)
        try:
            thread.start()
        except BaseException:
            self._wg.done()
            raise

    def wait(self) -> Exception | None:
        """Block until every task started so far finished.

        Returns:
            The first error recorded by any task, or None if all succeeded
        """
        self._wg.wait()
        with self._lock:
            if self._errors:
                return self._errors[0]
            return None

    def _run(self, task: Task) -> None:
        try:
            try:
                error = task()
            except Exception as e:
                error = e
            except BaseException as e:
                # SystemExit must not escape the worker thread unrecorded
                error = TaskAbortedError(f"{self._name} aborted with {type(e).__name__}: {e}")
                error.__cause__ = e
            if error is not None:
                self._record(error)
        finally:
            self._wg.done()

    def _record(self, error: Exception) -> None:
        with self._lock:
            self._errors.append(error)
            count = len(self._errors)
        if count == 1:
            logger.debug("%s: recorded error: %s", self._name, error)
        else:
            logger.debug("%s: recorded additional error #%d: %s", self._name, count, error)
