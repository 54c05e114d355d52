"""BlockGit reset command.

Moves the current branch back to an earlier commit.

Execution Context:
    CLI command - invoked via `blockgit reset`

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
from blockgit_cli.commands.utils import resolve_commit
from blockgit_cli.commands.utils import short_id

console = Console()


# ---- Reset Command ------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "commit_ref",
    metavar="COMMIT",
)
def reset(
        commit_ref: str,
) -> None:
    """Reset the current branch to COMMIT.

    Commits made on this branch after COMMIT are deleted. Commits that
    another branch still points at are kept.

    Example:
        blockgit reset 3f2a9c1e
    """
    try:
        state, repo = load_repository()

        before = repo.commit_count
        target = repo.reset_to_commit(resolve_commit(repo, commit_ref).id)
        state.save(repo)

        removed = before - repo.commit_count
        console.print(f"[green]HEAD is now at {short_id(target.id)}[/green] {escape(target.message)}")
        console.print(f"[dim]Removed {removed} commit(s)[/dim]")

    except Exception as reset_error:
        msg = f"Reset failed: {reset_error}"
        raise click.ClickException(msg) from reset_error
