"""BlockGit revert command.

Restores an earlier snapshot as a new commit.

Execution Context:
    CLI command - invoked via `blockgit revert`

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


# ---- Revert Command -----------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "commit_ref",
    metavar="COMMIT",
)
@click.option(
    "--message",
    "-m",
    default=None,
    help="Message for the new commit (defaults to 'revert: <message>').",
)
def revert(
        commit_ref: str,
        message: str | None,
) -> None:
    """Re-apply the snapshot of COMMIT as a new commit.

    History is kept; the new commit carries a copy of the old tree and
    becomes the tip of the current branch.

    Examples:
        blockgit revert 3f2a9c1e
        blockgit revert 3f2a9c1e -m "Back to the short list"
    """
    try:
        state, repo = load_repository()

        target = resolve_commit(repo, commit_ref)
        new_commit = repo.revert_commit(target.id, message)
        state.save(repo)

        console.print(f"[green]Created commit {short_id(new_commit.id)}[/green] {escape(new_commit.message)}")
        console.print(f"[dim]Restored snapshot of {short_id(target.id)}[/dim]")

    except Exception as revert_error:
        msg = f"Revert failed: {revert_error}"
        raise click.ClickException(msg) from revert_error
