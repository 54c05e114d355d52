"""BlockGit init command.

Initializes a new BlockGit repository.

Execution Context:
    CLI command - invoked via `blockgit init`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - blockgit_core: State file storage

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

import click
from rich.console import Console

from blockgit_cli.commands.utils import get_settings
from blockgit_core.storage import StateFile

console = Console()


# ---- Init Command -------------------------------------------------------------------------------------------


@click.command()
@click.option(
    "--branch",
    "-b",
    "branch_name",
    default="",
    help="Name of the initial branch (defaults to BLOCKGIT_DEFAULT_BRANCH).",
)
@click.argument(
    "path",
    type=click.Path(file_okay=False),
    default=".",
    required=False,
)
def init(
        path: str,
        branch_name: str,
) -> None:
    """Initialize a new BlockGit repository.

    Creates the state directory in the specified PATH (defaults to
    current directory) holding an empty repository with one branch.

    Examples:
        blockgit init
        blockgit init --branch main
        blockgit init /path/to/project
    """
    try:
        settings = get_settings()
        state = StateFile(path, state_dir=settings.state_dir)

        if state.exists():
            console.print(
                f"[yellow]BlockGit repository already exists at {state.state_dir}[/yellow]"
            )
            return

        repo = state.init(default_branch=branch_name or settings.default_branch)

        console.print(f"[green]Initialized empty BlockGit repository in {state.state_dir}[/green]")
        console.print(f"[dim]On branch '{repo.get_current_branch().name}'[/dim]")

    except Exception as init_error:
        msg = f"Failed to initialize repository: {init_error}"
        raise click.ClickException(msg) from init_error
