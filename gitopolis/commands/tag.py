"""
Tag management commands for gitopolis.
"""

import click

from .. import storage


@click.command(name='tag')
@click.option('--remove', '-r', is_flag=True, help='Remove the tag instead of adding it')
@click.argument('tag_name')
@click.argument('repo_folders', nargs=-1, required=True)
def tag_cmd(remove, tag_name, repo_folders):
    """Add TAG_NAME to repositories, or remove it with --remove.

    Examples:

    \b
        gitopolis tag work api web
        gitopolis tag --remove work web
    """
    repos = storage.load()
    if remove:
        repos.remove_tag(tag_name, repo_folders)
    else:
        repos.add_tag(tag_name, repo_folders)
    storage.save(repos)


@click.command(name='tags')
@click.option('--long', '-l', 'long_format', is_flag=True, help='Show the repos under each tag')
def tags_cmd(long_format):
    """List every tag in use."""
    repos = storage.load()
    for tag in repos.tags():
        click.echo(tag)
        if long_format:
            for repo in repos.repos_with_tag(tag):
                click.echo(f"\t{repo.path}")
            click.echo()
