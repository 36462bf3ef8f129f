"""Loading and saving `.lintpool.toml`.

Example config:
  parallelism = 4

  [tools.shellcheck]
  command = "shellcheck --norc -f gcc -"
  optional = true

  [tools.pyflakes]
  command = "pyflakes"
  combine_output = true
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit

from lintpool.core.errors import ConfigError

CONFIG_FILENAME = ".lintpool.toml"


@dataclass(frozen=True)
class ToolConfig:
    """One external tool run by `lintpool check`.

    Attributes:
        name: Table name under [tools]
        command: Executable name or full command line
        combine_output: Merge stderr into the captured output
        optional: Skip the tool when it is not installed instead of failing
        pass_path: Append the file path as an argument instead of piping its contents
    """

    name: str
    command: str
    combine_output: bool = False
    optional: bool = False
    pass_path: bool = False


@dataclass(frozen=True)
class LintpoolConfig:
    """In-memory representation of `.lintpool.toml`."""

    parallelism: int | None = None  # None = number of CPUs
    tools: dict[str, ToolConfig] = field(default_factory=dict)


def _expect_bool(table: dict[str, Any], key: str, where: str) -> bool:
    value = table.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' in {where} must be a boolean, got {value!r}")
    return value


def _parse_tool(name: str, table: Any, cfg_path: Path) -> ToolConfig:
    where = f"[tools.{name}] of {cfg_path}"
    if not isinstance(table, dict):
        raise ConfigError(f"{where} must be a table")
    command = table.get("command")
    if not isinstance(command, str) or not command.strip():
        raise ConfigError(f"Missing 'command' in {where}")
    return ToolConfig(
        name=name,
        command=command,
        combine_output=_expect_bool(table, "combine_output", where),
        optional=_expect_bool(table, "optional", where),
        pass_path=_expect_bool(table, "pass_path", where),
    )


def load_config(cfg_path: Path) -> LintpoolConfig:
    """Load the config file if present; otherwise return defaults.

    Raises:
        ConfigError: If the file is not valid TOML or has wrongly typed values
    """
    if not cfg_path.exists():
        return LintpoolConfig()

    try:
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {cfg_path}: {e}") from e

    parallelism = data.get("parallelism")
    if parallelism is not None:
        if isinstance(parallelism, bool) or not isinstance(parallelism, int) or parallelism < 1:
            raise ConfigError(
                f"'parallelism' in {cfg_path} must be a positive integer, got {parallelism!r}"
            )

    tools_table = data.get("tools", {})
    if not isinstance(tools_table, dict):
        raise ConfigError(f"[tools] in {cfg_path} must be a table")
    tools = {
        str(name): _parse_tool(str(name), table, cfg_path) for name, table in tools_table.items()
    }

    return LintpoolConfig(parallelism=parallelism, tools=tools)


def save_config(cfg_path: Path, config: LintpoolConfig) -> None:
    """Write config to cfg_path, creating parent directories as needed.

    Only non-default tool flags are written to keep the file short.
    """
    cfg_path.parent.mkdir(parents=True, exist_ok=True)

    doc = tomlkit.document()
    if config.parallelism is not None:
        doc["parallelism"] = config.parallelism

    if config.tools:
        tools = tomlkit.table(is_super_table=True)
        for name, tool in config.tools.items():
            table = tomlkit.table()
            table["command"] = tool.command
            if tool.combine_output:
                table["combine_output"] = True
            if tool.optional:
                table["optional"] = True
            if tool.pass_path:
                table["pass_path"] = True
            tools[name] = table
        doc["tools"] = tools

    cfg_path.write_text(tomlkit.dumps(doc), encoding="utf-8")
