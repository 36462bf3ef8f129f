"""Show how a command name or command line resolves."""

import shlex

import click

from lintpool.cli.error_boundary import cli_error_boundary
from lintpool.cli.output import machine_output
from lintpool.core.command import resolve_external_command
from lintpool.core.context import LintpoolContext


@click.command("which")
@click.argument("command")
@click.pass_obj
@cli_error_boundary
def which_cmd(ctx: LintpoolContext, command: str) -> None:
    """Print the executable COMMAND resolves to and its leading arguments."""
    exe, args = resolve_external_command(command, ctx.executables)
    machine_output(exe)
    if args:
        machine_output(" ".join(shlex.quote(arg) for arg in args))
