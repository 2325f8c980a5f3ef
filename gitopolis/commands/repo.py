"""
Commands that add, remove and show tracked repositories.
"""

import click
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .. import storage
from ..domain.repository import Repo
from ..infra.git_client import GitClient

console = Console()


@click.command(name='add')
@click.argument('repo_folders', nargs=-1, required=True)
def add_cmd(repo_folders):
    """Add one or more git repos to manage.

    Remotes are read from each repo's git config and stored with it.
    """
    repos = storage.load()
    git = GitClient()
    for folder in repo_folders:
        repos.add(folder, git.read_all_remotes(folder))
    storage.save(repos)


@click.command(name='remove')
@click.argument('repo_folders', nargs=-1, required=True)
def remove_cmd(repo_folders):
    """Stop managing one or more repos. Folders are left untouched."""
    repos = storage.load()
    repos.remove(repo_folders)
    storage.save(repos)


def render_repo(repo: Repo) -> Panel:
    """Render a repo's tags and remotes as a panel."""
    body = Text()
    body.append("Path: ", style="bold cyan")
    body.append(f"{repo.path}\n", style="bold white")
    body.append("Tags: ", style="bold blue")
    body.append(", ".join(repo.tags) if repo.tags else "(none)")
    if repo.remotes:
        body.append("\nRemotes:", style="bold blue")
        for name, remote in sorted(repo.remotes.items()):
            body.append(f"\n  {name}", style="green")
            body.append(f"  {remote.url}", style="dim")
    else:
        body.append("\nRemotes: ", style="bold blue")
        body.append("(none)")
    return Panel(body, border_style="cyan")


@click.command(name='show')
@click.argument('repo_folder')
def show_cmd(repo_folder):
    """Show the tags and remotes recorded for a repo."""
    repo = storage.load().get(repo_folder)
    console.print(render_repo(repo))
