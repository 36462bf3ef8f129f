"""Tests for `lintpool which` and `lintpool init`."""

from pathlib import Path

from click.testing import CliRunner

from lintpool.cli.cli import cli
from lintpool.core.config import CONFIG_FILENAME, LintpoolConfig, load_config
from lintpool.core.context import LintpoolContext
from tests.fakes.executables import FakeExecutables


def _context(cwd: Path, installed: dict[str, str] | None = None) -> LintpoolContext:
    return LintpoolContext(
        config=LintpoolConfig(),
        executables=FakeExecutables(installed=installed),
        cwd=cwd,
    )


def test_which_prints_executable(tmp_path: Path) -> None:
    ctx = _context(tmp_path, {"pyflakes": "/usr/bin/pyflakes"})
    runner = CliRunner()

    result = runner.invoke(cli, ["which", "pyflakes"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert result.stdout == "/usr/bin/pyflakes\n"


def test_which_prints_baked_in_args_quoted(tmp_path: Path) -> None:
    ctx = _context(tmp_path, {"shellcheck": "/usr/bin/shellcheck"})
    runner = CliRunner()

    result = runner.invoke(cli, ["which", "shellcheck -f gcc 'a b' -"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert result.stdout == "/usr/bin/shellcheck\n-f gcc 'a b' -\n"


def test_which_unknown_command(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["which", "no-such-linter --flag"], obj=_context(tmp_path))

    assert result.exit_code == 1
    assert "Error: command not found: 'no-such-linter --flag'" in result.stderr


def test_which_malformed_command_line(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["which", "shellcheck 'unterminated"], obj=_context(tmp_path))

    assert result.exit_code == 1
    assert "command not found" in result.stderr


def test_init_writes_starter_config(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["init"], obj=_context(tmp_path))

    assert result.exit_code == 0, result.output
    cfg_path = tmp_path / CONFIG_FILENAME
    assert f"Wrote {cfg_path}" in result.stderr

    config = load_config(cfg_path)
    assert set(config.tools) == {"shellcheck", "pyflakes"}
    assert config.tools["shellcheck"].command == "shellcheck --norc -f gcc -"
    assert config.tools["shellcheck"].optional is True
    assert config.tools["pyflakes"].combine_output is True


def test_init_refuses_to_overwrite_without_force(tmp_path: Path) -> None:
    cfg_path = tmp_path / CONFIG_FILENAME
    cfg_path.write_text("parallelism = 2\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli, ["init"], obj=_context(tmp_path))

    assert result.exit_code == 1
    assert "already exists" in result.stderr
    assert cfg_path.read_text(encoding="utf-8") == "parallelism = 2\n"


def test_init_force_overwrites(tmp_path: Path) -> None:
    cfg_path = tmp_path / CONFIG_FILENAME
    cfg_path.write_text("parallelism = 2\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli, ["init", "--force"], obj=_context(tmp_path))

    assert result.exit_code == 0, result.output
    config = load_config(cfg_path)
    assert config.parallelism is None
    assert "pyflakes" in config.tools


def test_version_option() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.stdout
