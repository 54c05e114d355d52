"""BlockGit log command.

Shows commit history for the current branch.

Execution Context:
    CLI command - invoked via `blockgit log`

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
from blockgit_cli.commands.utils import short_id
from blockgit_core.models import count_items

console = Console()


# ---- Log Command --------------------------------------------------------------------------------------------


@click.command()
@click.option(
    "--limit",
    "-n",
    default=10,
    help="Maximum number of commits to show.",
)
@click.option(
    "--oneline",
    is_flag=True,
    help="Show compact one-line format.",
)
def log(
        limit: int,
        oneline: bool,
) -> None:
    """Show commit history.

    Displays the commit log starting from HEAD, walking back through
    parent commits. Commits of other branches are only shown where the
    current branch was created from them.

    Examples:
        blockgit log
        blockgit log -n 5
        blockgit log --oneline
    """
    try:
        _, repo = load_repository()

        commits = repo.list_commits(limit=limit)

        if not commits:
            console.print("[dim]No commits yet[/dim]")
            return

        branch = repo.get_current_branch()
        head = repo.get_head()

        if oneline:
            for commit in commits:
                marker = "[yellow]*[/yellow] " if head and commit.id == head.id else "  "
                console.print(f"{marker}[cyan]{short_id(commit.id)}[/cyan] {escape(commit.message)}")
            return

        for i, commit in enumerate(commits):
            if i > 0:
                console.print()

            head_marker = ""
            if head and commit.id == head.id:
                target = "detached" if repo.is_detached() else escape(branch.name)
                head_marker = f" [yellow](HEAD -> {target})[/yellow]"

            console.print(f"[bold cyan]commit {commit.id}[/bold cyan]{head_marker}")
            console.print(f"Date:   {format_timestamp(commit.timestamp)}")
            if commit.parent_id:
                console.print(f"Parent: {short_id(commit.parent_id)}")

            console.print()
            console.print(f"    {escape(commit.message)}")
            console.print(f"    [dim]({count_items(commit.tree)} item(s))[/dim]")

    except Exception as log_error:
        msg = f"Log failed: {log_error}"
        raise click.ClickException(msg) from log_error
