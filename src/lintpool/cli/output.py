"""Output routing for CLI commands.

Human-readable messages go to stderr so that stdout carries only data
(tool output or JSON) and can be piped into other programs.
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a message meant for a human to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Write data meant for programs or pipes to stdout."""
    click.echo(message, nl=nl)
