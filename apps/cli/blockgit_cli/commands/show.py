"""BlockGit show command.

Shows a single commit with its item tree.

Execution Context:
    CLI command - invoked via `blockgit show`

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

from blockgit_cli.commands.utils import format_timestamp
from blockgit_cli.commands.utils import load_repository
from blockgit_cli.commands.utils import render_tree
from blockgit_cli.commands.utils import resolve_commit
from blockgit_cli.commands.utils import short_id

console = Console()


# ---- Show Command -------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "commit_ref",
    metavar="COMMIT",
)
def show(
        commit_ref: str,
) -> None:
    """Show a commit and its snapshot.

    COMMIT is a commit ID or a unique ID prefix.

    Example:
        blockgit show 3f2a9c1e
    """
    try:
        _, repo = load_repository()

        commit = resolve_commit(repo, commit_ref)
        branch = repo.get_branch(commit.branch_id)

        console.print(f"[bold cyan]commit {commit.id}[/bold cyan]")
        console.print(f"Branch: {escape(branch.name) if branch else short_id(commit.branch_id)}")
        console.print(f"Date:   {format_timestamp(commit.timestamp)}")
        if commit.parent_id:
            console.print(f"Parent: {short_id(commit.parent_id)}")
        console.print()
        console.print(f"    {escape(commit.message)}")
        console.print()
        console.print(render_tree(commit.tree, label="tree"))

    except Exception as show_error:
        msg = f"Show failed: {show_error}"
        raise click.ClickException(msg) from show_error
