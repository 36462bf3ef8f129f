"""Tests for CommandExecution outcome classification.

These tests mock subprocess.Popen so every exit path can be exercised
without depending on particular tools being installed.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from lintpool.core.errors import ProcessExitError, ProcessTerminatedError, StdinWriteError
from lintpool.core.execution import CommandExecution


def _fake_process(stdout: bytes, stderr: bytes | None, returncode: int) -> MagicMock:
    process = MagicMock()
    process.stdout.read.return_value = stdout
    if stderr is None:
        process.stderr = None
    else:
        process.stderr.read.return_value = stderr
    process.wait.return_value = returncode
    process.returncode = returncode
    return process


def test_zero_exit_returns_stdout() -> None:
    execution = CommandExecution("/bin/lint", ["-x", "file.sh"], "payload", False)
    process = _fake_process(b"ok\n", b"", 0)

    with patch("subprocess.Popen", return_value=process) as mock_popen:
        assert execution.run() == b"ok\n"

    call_args = mock_popen.call_args
    assert call_args[0][0] == ["/bin/lint", "-x", "file.sh"]
    assert call_args[1]["stderr"] == subprocess.PIPE
    process.stdin.write.assert_called_once_with(b"payload")
    process.stdin.close.assert_called_once()


def test_bytes_payload_is_written_unchanged() -> None:
    payload = b"\xff\xfe not utf-8"
    execution = CommandExecution("/bin/cat", [], payload, False)
    process = _fake_process(payload, b"", 0)

    with patch("subprocess.Popen", return_value=process):
        assert execution.run() == payload

    process.stdin.write.assert_called_once_with(payload)


def test_empty_payload_only_closes_stdin() -> None:
    execution = CommandExecution("/bin/lint", [], "", False)
    process = _fake_process(b"ok\n", b"", 0)

    with patch("subprocess.Popen", return_value=process):
        execution.run()

    process.stdin.write.assert_not_called()
    process.stdin.close.assert_called_once()


def test_combine_output_redirects_stderr_to_stdout() -> None:
    execution = CommandExecution("/bin/lint", [], "", True)

    with patch("subprocess.Popen", return_value=_fake_process(b"", None, 0)) as mock_popen:
        execution.run()

    assert mock_popen.call_args[1]["stderr"] == subprocess.STDOUT


def test_nonzero_exit_with_stdout_is_not_an_error() -> None:
    execution = CommandExecution("/bin/shellcheck", ["-"], "echo $x", False)
    process = _fake_process(b"-:1:6: note: Double quote to prevent globbing\n", b"", 1)

    with patch("subprocess.Popen", return_value=process):
        output = execution.run()

    assert output.startswith(b"-:1:6: note")


def test_nonzero_exit_with_empty_stdout_is_an_error() -> None:
    execution = CommandExecution("/bin/shellcheck", [], "", False)
    process = _fake_process(b"", b"could not open config\n", 2)

    with patch("subprocess.Popen", return_value=process):
        with pytest.raises(ProcessExitError) as exc_info:
            execution.run()

    error = exc_info.value
    assert error.exit_code == 2
    assert error.stderr == "could not open config\n"
    assert "exited with status 2 but stdout was empty" in str(error)
    assert "could not open config" in str(error)


def test_killed_process_is_reported_as_terminated() -> None:
    execution = CommandExecution("/bin/pyflakes", [], "import os", False)
    process = _fake_process(b"partial", b"segfault\n", -9)

    with patch("subprocess.Popen", return_value=process):
        with pytest.raises(ProcessTerminatedError, match="was terminated") as exc_info:
            execution.run()

    assert exc_info.value.stderr == "segfault\n"


def test_terminated_with_combined_output_reports_captured_stream() -> None:
    execution = CommandExecution("/bin/pyflakes", [], "", True)
    process = _fake_process(b"fatal: out of memory\n", None, -6)

    with patch("subprocess.Popen", return_value=process):
        with pytest.raises(ProcessTerminatedError, match="out of memory"):
            execution.run()


def test_stdin_write_failure_kills_process() -> None:
    execution = CommandExecution("/bin/cat", [], "data", False)
    process = _fake_process(b"", b"", -9)
    process.stdin.write.side_effect = BrokenPipeError(32, "Broken pipe")

    with patch("subprocess.Popen", return_value=process):
        with pytest.raises(StdinWriteError, match="could not write to stdin of /bin/cat process"):
            execution.run()

    process.kill.assert_called_once()
    process.wait.assert_called_once()
    process.stdin.close.assert_called_once()


def test_spawn_failure_propagates_raw_error() -> None:
    execution = CommandExecution("this-command-does-not-exist", [], "", False)

    with patch("subprocess.Popen", side_effect=FileNotFoundError("No such file")):
        with pytest.raises(FileNotFoundError):
            execution.run()
