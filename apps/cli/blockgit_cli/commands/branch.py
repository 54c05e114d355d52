"""BlockGit branch command.

Lists existing branches, creates a new branch, or deletes one.

Execution Context:
    CLI command - invoked via `blockgit branch [name]`

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
from blockgit_cli.commands.utils import resolve_branch
from blockgit_cli.commands.utils import resolve_commit
from blockgit_cli.commands.utils import short_id

console = Console()


# ---- Branch Command -----------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "name",
    required=False,
)
@click.option(
    "--delete",
    "-d",
    is_flag=True,
    help="Delete the specified branch.",
)
@click.option(
    "--from",
    "from_ref",
    default=None,
    help="Commit the new branch points to (defaults to HEAD).",
)
def branch(
        name: str | None,
        delete: bool,
        from_ref: str | None,
) -> None:
    """List, create, or delete branches.

    Without arguments, lists all branches. With a NAME argument,
    creates a new branch pointing to HEAD (or to --from).

    Examples:
        blockgit branch                 # List branches
        blockgit branch feature         # Create branch 'feature'
        blockgit branch old --from 3f2a # Create branch at a commit
        blockgit branch -d feature      # Delete branch 'feature'
    """
    try:
        state, repo = load_repository()

        if not name:
            if delete:
                raise click.ClickException("Branch name required")

            current_id = repo.current_branch_id
            for item in repo.list_branches():
                line = f"{escape(item.name)} [dim]{short_id(item.head_id)}[/dim]"
                if item.id == current_id:
                    console.print(f"[green]* {line}[/green]")
                else:
                    console.print(f"  {line}")
            return

        if delete:
            target = resolve_branch(repo, name)
            repo.delete_branch(target.id)
            state.save(repo)
            console.print(f"[green]Deleted branch '{escape(target.name)}'[/green]")
            return

        from_commit_id = resolve_commit(repo, from_ref).id if from_ref else None
        new_branch = repo.create_branch(name, from_commit_id=from_commit_id)
        state.save(repo)
        console.print(f"[green]Created branch '{escape(new_branch.name)}'[/green]")

        if new_branch.head_id:
            console.print(f"[dim]Points to commit {short_id(new_branch.head_id)}[/dim]")
        else:
            console.print("[dim]Branch created (no commits yet)[/dim]")

    except Exception as branch_error:
        msg = f"Branch operation failed: {branch_error}"
        raise click.ClickException(msg) from branch_error
