import logging
import os

import click

from lintpool import __version__
from lintpool.cli.commands.check import check_cmd
from lintpool.cli.commands.init import init_cmd
from lintpool.cli.commands.run import run_cmd
from lintpool.cli.commands.which import which_cmd
from lintpool.cli.error_boundary import cli_error_boundary
from lintpool.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
@click.pass_context
@cli_error_boundary
def cli(ctx: click.Context) -> None:
    """Run external linters concurrently with a bounded number of processes."""
    # Enable debug logging if LINTPOOL_DEBUG environment variable is set
    if os.environ.get("LINTPOOL_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()


cli.add_command(check_cmd)
cli.add_command(init_cmd)
cli.add_command(run_cmd)
cli.add_command(which_cmd)


def main() -> None:
    """CLI entry point used by the `lintpool` console script."""
    cli()
