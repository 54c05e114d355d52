"""BlockGit status command.

Shows the current branch, head, and staging area.

Execution Context:
    CLI command - invoked via `blockgit status`

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
from rich.panel import Panel

from blockgit_cli.commands.utils import load_repository
from blockgit_cli.commands.utils import render_tree
from blockgit_cli.commands.utils import short_id
from blockgit_core.models import count_items

console = Console()


# ---- Status Command -----------------------------------------------------------------------------------------


@click.command()
def status() -> None:
    """Show the working tree status.

    Displays the current branch, whether HEAD is detached, and the
    items staged for the next commit.

    Example:
        blockgit status
    """
    try:
        _, repo = load_repository()

        branch = repo.get_current_branch()
        head = repo.get_head()

        header = f"[bold]On branch:[/bold] [cyan]{escape(branch.name)}[/cyan]"
        if repo.is_detached():
            header += f"\n[yellow]HEAD detached at {short_id(head.id if head else None)}[/yellow]"
        console.print(Panel(header, title="BlockGit Status", border_style="blue"))

        if head:
            console.print(f"[dim]Latest commit: {short_id(head.id)} - {escape(head.message)}[/dim]")
        else:
            console.print("[dim]No commits yet[/dim]")

        console.print()

        if repo.has_staged_changes():
            staged = repo.get_staged()
            console.print(f"[yellow]Changes to be committed ({count_items(staged)} item(s)):[/yellow]")
            console.print(render_tree(staged, label="staged"))
        else:
            console.print("[green]Nothing staged[/green]")

    except Exception as status_error:
        msg = f"Status failed: {status_error}"
        raise click.ClickException(msg) from status_error
