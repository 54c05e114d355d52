"""BlockGit CLI entry point.

Orchestrator for the BlockGit command-line interface. Loads settings,
configures logging, registers all command modules and provides the
main entry point.

Execution Context:
    CLI application - run via `python -m blockgit_cli.main` or `blockgit` command

Dependencies:
    - click: CLI framework
    - blockgit_core: Core library

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

import sys

import click

from blockgit_cli import __version__
from blockgit_cli.commands.add import add
from blockgit_cli.commands.branch import branch
from blockgit_cli.commands.checkout import checkout
from blockgit_cli.commands.clone import clone
from blockgit_cli.commands.commit import commit
from blockgit_cli.commands.init import init
from blockgit_cli.commands.log import log
from blockgit_cli.commands.reset import reset
from blockgit_cli.commands.revert import revert
from blockgit_cli.commands.show import show
from blockgit_cli.commands.status import status
from blockgit_core.config import configure_logging
from blockgit_core.config import load_settings


# ---- CLI Group ----------------------------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="blockgit")
@click.pass_context
def cli(
        ctx: click.Context,
) -> None:
    """BlockGit - Version control for item trees.

    Provides Git-like version control for nested todo outlines. Stage,
    commit, branch, clone, reset, and revert snapshots using familiar
    workflows.
    """
    try:
        settings = load_settings()
    except ValueError as settings_error:
        raise click.ClickException(str(settings_error)) from settings_error

    configure_logging(settings.log_level)
    ctx.obj = settings


# ---- Register Commands --------------------------------------------------------------------------------------


cli.add_command(init)
cli.add_command(add)
cli.add_command(commit)
cli.add_command(status)
cli.add_command(log)
cli.add_command(show)
cli.add_command(branch)
cli.add_command(checkout)
cli.add_command(clone)
cli.add_command(reset)
cli.add_command(revert)


# ---- Main Function ------------------------------------------------------------------------------------------


def main() -> int:
    """Main entry point for BlockGit CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        cli()
        return 0
    except Exception as cli_error:
        click.echo(f"Error: {cli_error}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
