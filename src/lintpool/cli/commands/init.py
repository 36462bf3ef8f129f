"""Write a starter `.lintpool.toml`."""

import click

from lintpool.cli.error_boundary import cli_error_boundary
from lintpool.cli.output import user_output
from lintpool.core.config import LintpoolConfig, ToolConfig, save_config
from lintpool.core.context import LintpoolContext

STARTER_TOOLS = (
    ToolConfig(name="shellcheck", command="shellcheck --norc -f gcc -", optional=True),
    ToolConfig(name="pyflakes", command="pyflakes", combine_output=True, optional=True),
)


@click.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_obj
@cli_error_boundary
def init_cmd(ctx: LintpoolContext, force: bool) -> None:
    """Create .lintpool.toml in the current directory."""
    cfg_path = ctx.config_path
    if cfg_path.exists() and not force:
        user_output(
            click.style("Error: ", fg="red")
            + f"{cfg_path} already exists. Use --force to overwrite it."
        )
        raise SystemExit(1)

    config = LintpoolConfig(tools={tool.name: tool for tool in STARTER_TOOLS})
    save_config(cfg_path, config)
    user_output(f"Wrote {cfg_path}")
