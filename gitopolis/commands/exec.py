"""
Exec command for gitopolis.
"""

import logging
import sys

import click

from .. import storage
from ..services.exec_service import ExecService
from ..tag_filter import TagFilter

logger = logging.getLogger(__name__)


@click.command(
    name='exec',
    context_settings={'ignore_unknown_options': True, 'allow_interspersed_args': False},
)
@click.option('--tag', '-t', 'tags', multiple=True, metavar='SPEC',
              help='Only repos with all these comma separated tags; repeat for OR')
@click.option('--oneline', is_flag=True,
              help='One line per repo: path, tab, flattened output')
@click.argument('command', nargs=-1, required=True, type=click.UNPROCESSED)
def exec_cmd(tags, oneline, command):
    """Run a command in each repository.

    A single quoted COMMAND is passed to your shell as-is, so pipes and
    redirection work. Several words are passed through without any
    re-splitting or quoting.

    Exits 1 if any repo folder was missing or any command failed.

    Examples:

    \b
        gitopolis exec -- git status
        gitopolis exec --tag work,active -- git pull
        gitopolis exec --oneline -- 'git log -1 --format=%cd | cat' | sort
    """
    tag_filter = TagFilter.from_args(tags)
    repos = storage.load().select(tag_filter)
    if not tag_filter.is_all():
        logger.debug(f"{len(repos)} repos tagged {tag_filter.describe()}")
    summary = ExecService().run(repos, list(command), oneline=oneline)
    sys.exit(summary.exit_code)
