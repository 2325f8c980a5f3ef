import sys

import click

from .. import storage
from ..exit_codes import NO_REPOS
from ..tag_filter import TagFilter


def format_long(repo) -> str:
    """path<TAB>tags<TAB>url, suitable for cut/sort."""
    return "\t".join([repo.path, ",".join(repo.tags), repo.primary_url() or ""])


@click.command(name='list')
@click.option('--tag', '-t', 'tags', multiple=True, metavar='SPEC',
              help='Only repos with all these comma separated tags; repeat for OR')
@click.option('--long', '-l', 'long_format', is_flag=True, help='Show tags and remote URL')
def list_cmd(tags, long_format):
    """List tracked repositories, sorted by path.

    Exits 2 if there is nothing to list.
    """
    repos = storage.load().sorted_by_path(TagFilter.from_args(tags))
    if not repos:
        click.echo("No repos", err=True)
        sys.exit(NO_REPOS)

    for repo in repos:
        click.echo(format_long(repo) if long_format else repo.path)
