"""Scheduling tool invocations over files and collecting their results.

Callbacks run on worker threads in completion order, so results are
gathered under a lock and sorted back into input order for display.
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from lintpool.cli.json_output import InvocationResult
from lintpool.core.command import ExternalCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileResult:
    """Result of one tool invocation on one file."""

    index: int
    tool: str
    path: Path
    output: str | None
    error: Exception | None

    def to_model(self) -> InvocationResult:
        return InvocationResult(
            tool=self.tool,
            path=str(self.path),
            output=self.output,
            error=str(self.error) if self.error is not None else None,
        )


class ResultCollector:
    """Thread-safe sink for FileResult records."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._results: list[FileResult] = []

    def add(self, result: FileResult) -> None:
        with self._lock:
            self._results.append(result)

    @property
    def results(self) -> list[FileResult]:
        """Results ordered by input file, then tool name."""
        with self._lock:
            return sorted(self._results, key=lambda r: (r.index, r.tool))

    @property
    def failed_tools(self) -> set[str]:
        """Tools with at least one failed result."""
        with self._lock:
            return {r.tool for r in self._results if r.error is not None}


def schedule_file(
    cmd: ExternalCommand,
    tool: str,
    index: int,
    path: Path,
    pass_path: bool,
    collector: ResultCollector,
) -> None:
    """Schedule cmd on one file without waiting for it.

    The file's raw bytes are piped to stdin, unless pass_path is set, in which
    case the path is appended as the last argument and stdin is empty. A file
    that cannot be read is recorded as a failed result and nothing is run.
    """
    args: list[str] = []
    stdin = b""
    if pass_path:
        args = [str(path)]
    else:
        try:
            stdin = path.read_bytes()
        except OSError as e:
            logger.debug("Could not read %s for %s: %s", path, tool, e)
            collector.add(FileResult(index=index, tool=tool, path=path, output=None, error=e))
            return

    def on_result(output: bytes | None, error: Exception | None) -> Exception | None:
        text = output.decode("utf-8", errors="replace") if output is not None else None
        collector.add(FileResult(index=index, tool=tool, path=path, output=text, error=error))
        return error

    cmd.run(args, stdin, on_result)
