"""BlockGit commit command.

Records the staged item tree as a new commit.

Execution Context:
    CLI command - invoked via `blockgit commit`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - blockgit_core: Repository management

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

from typing import IO

import click
from rich.console import Console
from rich.markup import escape

from blockgit_cli.commands.utils import format_timestamp
from blockgit_cli.commands.utils import load_repository
from blockgit_cli.commands.utils import read_items
from blockgit_cli.commands.utils import short_id
from blockgit_core.models import count_items

console = Console()


# ---- Commit Command -----------------------------------------------------------------------------------------


@click.command()
@click.option(
    "--message",
    "-m",
    required=True,
    help="Commit message describing the changes.",
)
@click.option(
    "--file",
    "-f",
    "source",
    type=click.File("r"),
    default=None,
    help="Stage this JSON item file before committing.",
)
def commit(
        message: str,
        source: IO[str] | None,
) -> None:
    """Record the staged items as a new commit.

    Creates a commit on the current branch from the staging area.
    With --file, the file is staged first.

    Examples:
        blockgit commit -m "Initial commit"
        blockgit commit -m "Add groceries" --file items.json
    """
    try:
        state, repo = load_repository()

        if source is not None:
            repo.add(read_items(source))

        if not repo.has_staged_changes():
            console.print("[yellow]Nothing to commit, staging area is empty[/yellow]")
            return

        new_commit = repo.commit(message)
        state.save(repo)

        branch = repo.get_current_branch()
        console.print(f"[green]\\[{escape(branch.name)} {short_id(new_commit.id)}] {escape(new_commit.message)}[/green]")
        console.print(f"  [bold]Timestamp:[/bold] {format_timestamp(new_commit.timestamp)}")
        if new_commit.parent_id:
            console.print(f"  [bold]Parent:[/bold] {short_id(new_commit.parent_id)}")
        console.print(f"  [bold]Items:[/bold] {count_items(new_commit.tree)}")

    except Exception as commit_error:
        msg = f"Commit failed: {commit_error}"
        raise click.ClickException(msg) from commit_error
