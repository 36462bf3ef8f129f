"""Run every configured tool over a set of files."""

from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from lintpool.cli.error_boundary import cli_error_boundary
from lintpool.cli.invocations import FileResult, ResultCollector, schedule_file
from lintpool.cli.json_output import CheckResponse, emit_json, json_error_boundary
from lintpool.cli.output import machine_output
from lintpool.core.command import ExternalCommand
from lintpool.core.context import LintpoolContext
from lintpool.core.errors import ConfigError


def format_check_summary(
    results: list[FileResult],
    failed_tools: list[str],
    skipped_tools: list[str],
) -> Panel:
    """Format the final summary box listing failed and skipped tools."""
    lines: list[Text] = []

    if failed_tools:
        lines.append(Text(f"❌ Failed tools: {', '.join(failed_tools)}", style="red"))
    else:
        lines.append(Text("✅ All tools ran successfully", style="green"))

    lines.append(Text(f"Invocations: {len(results)}"))

    if skipped_tools:
        lines.append(Text(f"Skipped (not installed): {', '.join(skipped_tools)}", style="yellow"))

    for result in results:
        if result.error is not None:
            lines.append(Text(f"  {result.tool} on {result.path}: {result.error}", style="red"))

    return Panel(Text("\n").join(lines), title="lintpool check", border_style="blue")


@click.command("check")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-j",
    "--jobs",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of processes running at once (default: config, then CPU count)",
)
@click.option(
    "--format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (text or json)",
)
@click.pass_obj
@cli_error_boundary
@json_error_boundary
def check_cmd(
    ctx: LintpoolContext,
    files: tuple[Path, ...],
    jobs: int | None,
    format: str,
) -> None:
    """Run the tools configured in .lintpool.toml over FILES.

    All tools share one process pool, but each tool tracks its own
    failures: a crashing tool is reported without stopping the others.
    """
    if not ctx.config.tools:
        raise ConfigError(f"No tools configured in {ctx.config_path}. Run `lintpool init`.")

    proc = ctx.new_process(jobs)

    handles: dict[str, ExternalCommand] = {}
    skipped_tools: list[str] = []
    for name, tool in ctx.config.tools.items():
        cmd = proc.new_command_runner(tool.command, tool.combine_output, optional=tool.optional)
        if cmd is None:
            skipped_tools.append(name)
            continue
        handles[name] = cmd

    collector = ResultCollector()
    for index, path in enumerate(files):
        for name, cmd in handles.items():
            schedule_file(cmd, name, index, path, ctx.config.tools[name].pass_path, collector)

    failed_tools = [
        name
        for name, cmd in handles.items()
        if cmd.wait() is not None or name in collector.failed_tools
    ]
    proc.wait()
    results = collector.results

    if format == "json":
        response = CheckResponse(
            results=[r.to_model() for r in results],
            failed_tools=failed_tools,
            skipped_tools=skipped_tools,
        )
        emit_json(response.model_dump(mode="json"))
    else:
        for result in results:
            if result.output:
                machine_output(f"==> {result.path} [{result.tool}] <==")
                machine_output(result.output, nl=False)
        Console(stderr=True).print(format_check_summary(results, failed_tools, skipped_tools))

    if failed_tools:
        raise SystemExit(1)
