"""Single subprocess invocation with outcome classification."""

import logging
import subprocess
import threading
from dataclasses import dataclass, field

from lintpool.core.errors import ProcessExitError, ProcessTerminatedError, StdinWriteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandExecution:
    """One fully specified, one-shot request to spawn a subprocess.

    Attributes:
        cmd: Resolved path of the executable
        args: Arguments passed after the executable
        stdin: Payload written to the child's standard input. Text is
            encoded as UTF-8, bytes are written unchanged.
        combine_output: Whether stderr is merged into the captured output
    """

    cmd: str
    args: list[str] = field(default_factory=list)
    stdin: str | bytes = b""
    combine_output: bool = False

    @property
    def payload(self) -> bytes:
        if isinstance(self.stdin, str):
            return self.stdin.encode("utf-8")
        return self.stdin

    def run(self) -> bytes:
        """Run the process to completion and return its captured output.

        A nonzero exit status is not an error as long as the process printed
        something to stdout: linters commonly exit nonzero to signal that
        they reported findings.

        stdin is written from its own thread while stdout is read here and
        stderr on a second thread, so neither side can fill a pipe and stall
        the other.

        Returns:
            Captured stdout (interleaved with stderr when combine_output is set)

        Raises:
            OSError: If the process could not be started (e.g. FileNotFoundError)
            StdinWriteError: If the stdin payload could not be written. The
                process is killed and reaped first.
            ProcessTerminatedError: If the process was killed by a signal
            ProcessExitError: If the process exited nonzero with empty stdout
        """
        logger.debug("Spawning %s with args %s", self.cmd, self.args)
        process = subprocess.Popen(
            [self.cmd, *self.args],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if self.combine_output else subprocess.PIPE,
        )

        payload = self.payload
        write_errors: list[OSError] = []
        stderr_output: list[bytes] = []

        def write_stdin() -> None:
            if process.stdin is None:
                return
            try:
                try:
                    if payload:
                        process.stdin.write(payload)
                finally:
                    process.stdin.close()
            except OSError as e:
                write_errors.append(e)
                process.kill()

        def capture_stderr() -> None:
            if process.stderr is not None:
                stderr_output.append(process.stderr.read())

        writer = threading.Thread(target=write_stdin, name=f"{self.cmd}:stdin", daemon=True)
        writer.start()
        stderr_thread = threading.Thread(
            target=capture_stderr, name=f"{self.cmd}:stderr", daemon=True
        )
        stderr_thread.start()

        stdout = process.stdout.read() if process.stdout is not None else b""
        stderr_thread.join()
        code = process.wait()
        writer.join()

        if write_errors:
            raise StdinWriteError(
                f"could not write to stdin of {self.cmd} process: {write_errors[0]}"
            ) from write_errors[0]

        logger.debug("%s exited with status %d (%d bytes of output)", self.cmd, code, len(stdout))
        if code == 0:
            return stdout

        captured_stderr = stdout if self.combine_output else b"".join(stderr_output)
        stderr_text = captured_stderr.decode("utf-8", errors="replace")

        if code < 0:
            raise ProcessTerminatedError(
                f"{self.cmd} was terminated. stderr: {stderr_text!r}",
                stderr=stderr_text,
            )

        if not stdout:
            raise ProcessExitError(
                f"{self.cmd} exited with status {code} but stdout was empty. "
                f"stderr: {stderr_text!r}",
                exit_code=code,
                stderr=stderr_text,
            )

        return stdout
