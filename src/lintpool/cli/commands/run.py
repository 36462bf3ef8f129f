"""Run one command line over a set of files."""

from pathlib import Path

import click

from lintpool.cli.error_boundary import cli_error_boundary
from lintpool.cli.invocations import ResultCollector, schedule_file
from lintpool.cli.json_output import RunResponse, emit_json, json_error_boundary
from lintpool.cli.output import machine_output, user_output
from lintpool.core.context import LintpoolContext


@click.command("run")
@click.argument("command")
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
@click.option("--combine-output", is_flag=True, help="Merge stderr into the captured output")
@click.option(
    "--pass-path",
    is_flag=True,
    help="Append each file path to the command instead of piping the file to stdin",
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
def run_cmd(
    ctx: LintpoolContext,
    command: str,
    files: tuple[Path, ...],
    jobs: int | None,
    combine_output: bool,
    pass_path: bool,
    format: str,
) -> None:
    """Run COMMAND once per FILE, concurrently.

    COMMAND is an executable name or a full command line such as
    "shellcheck -f gcc -". Exits with status 1 if any invocation failed.
    """
    proc = ctx.new_process(jobs)
    cmd = proc.new_command_runner(command, combine_output)

    collector = ResultCollector()
    for index, path in enumerate(files):
        schedule_file(cmd, command, index, path, pass_path, collector)

    failed = cmd.wait() is not None or bool(collector.failed_tools)
    proc.wait()
    results = collector.results

    if format == "json":
        response = RunResponse(
            command=command,
            results=[r.to_model() for r in results],
            failed=failed,
        )
        emit_json(response.model_dump(mode="json"))
    else:
        for result in results:
            if result.output:
                machine_output(result.output, nl=False)
            if result.error is not None:
                user_output(click.style("Error: ", fg="red") + f"{result.path}: {result.error}")

    if failed:
        raise SystemExit(1)
