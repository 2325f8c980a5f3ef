#!/usr/bin/env python3

import click

from gitopolis import __version__
from gitopolis.config import configure_logging, logger
from gitopolis.exit_codes import CommandError
from gitopolis.commands.exec import exec_cmd
from gitopolis.commands.list import list_cmd
from gitopolis.commands.repo import add_cmd, remove_cmd, show_cmd
from gitopolis.commands.tag import tag_cmd, tags_cmd


class GitopolisGroup(click.Group):
    """Group that turns CommandError into a message and its exit code."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except CommandError as e:
            logger.error(str(e))
            ctx.exit(e.exit_code)


@click.group(cls=GitopolisGroup)
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
def cli(verbose):
    """gitopolis - manage multiple git repositories.

    Tracks a list of repo folders in .gitopolis.toml in the current
    directory, tags them, and runs commands across all or some of them.
    """
    configure_logging('DEBUG' if verbose else None)


cli.add_command(add_cmd)
cli.add_command(remove_cmd)
cli.add_command(list_cmd)
cli.add_command(show_cmd)
cli.add_command(tag_cmd)
cli.add_command(tags_cmd)
cli.add_command(exec_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
