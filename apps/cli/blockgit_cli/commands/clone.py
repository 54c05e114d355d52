"""BlockGit clone command.

Creates a copy of the current branch.

Execution Context:
    CLI command - invoked via `blockgit clone`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - blockgit_core: Repository management

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from blockgit_cli.commands.utils import load_repository
from blockgit_cli.commands.utils import short_id

console = Console()


# ---- Clone Command ------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "name",
)
@click.option(
    "--full-history",
    is_flag=True,
    help="Copy every commit instead of sharing history with the source.",
)
def clone(
        name: str,
        full_history: bool,
) -> None:
    """Clone the current branch into a new branch NAME.

    By default the new branch shares the source's commits. With
    --full-history the whole commit chain is copied with new IDs.
    The current branch stays active.

    Examples:
        blockgit clone experiment
        blockgit clone archive --full-history
    """
    try:
        state, repo = load_repository()

        source = repo.get_current_branch()
        new_branch = repo.clone_branch(name, full_history=full_history)
        state.save(repo)

        mode = "full history" if full_history else "shared history"
        console.print(
            f"[green]Cloned '{escape(source.name)}' into '{escape(new_branch.name)}' ({mode})[/green]"
        )
        console.print(f"[dim]Head: {short_id(new_branch.head_id)}[/dim]")

    except Exception as clone_error:
        msg = f"Clone failed: {clone_error}"
        raise click.ClickException(msg) from clone_error
