"""
Exec service for gitopolis.

Runs one command in every selected repository, one after another, and
tallies what went wrong. Used by the `gitopolis exec` command.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Sequence

import click

from ..domain.execution import ExecutionOutcome, RunSummary
from ..domain.repository import Repo
from ..format_utils import format_for_display
from ..infra.process import capture_command, stream_command
from ..infra.shell import ExecInvocation, ShellResolution, build_invocation, resolve_shell

logger = logging.getLogger(__name__)

MISSING_FOLDER_MESSAGE = "Repo folder missing, skipped."

Executor = Callable[[ExecInvocation], ExecutionOutcome]


class ExecService:
    """
    Service fanning a command out over repositories.

    Repos are visited strictly in order with one child process at a time,
    so output from different repos never interleaves. A missing folder or
    a failing command is counted and the loop carries on; only a shell
    that cannot be spawned at all (ShellSpawnError) stops the run.

    Example:
        service = ExecService()
        summary = service.run(repos, ['git', 'status'])
        sys.exit(summary.exit_code)
    """

    def __init__(
        self,
        shell: Optional[ShellResolution] = None,
        base_dir: Optional[Path] = None,
        streamer: Executor = stream_command,
        capturer: Executor = capture_command,
    ):
        """
        Initialize ExecService.

        Args:
            shell: Shell to use (resolved from the environment if None)
            base_dir: Directory repo paths are relative to (cwd if None)
            streamer: Executor for normal mode
            capturer: Executor for oneline mode
        """
        self.shell = shell or resolve_shell()
        self.base_dir = base_dir
        self.streamer = streamer
        self.capturer = capturer

    def repo_dir(self, repo: Repo) -> str:
        if self.base_dir is None:
            return repo.path
        return str(Path(self.base_dir) / repo.path)

    def exists(self, repo: Repo) -> bool:
        return os.path.isdir(self.repo_dir(repo))

    def run(
        self,
        repos: Sequence[Repo],
        command_tokens: Sequence[str],
        oneline: bool = False,
    ) -> RunSummary:
        """
        Run a command in each repo.

        Args:
            repos: Repos to visit, in order
            command_tokens: The user's command
            oneline: Print one flattened line per repo instead of streaming

        Returns:
            RunSummary with skipped and failed counts
        """
        summary = RunSummary()
        display = format_for_display(command_tokens)
        logger.debug(f"Running {display!r} in {len(repos)} repos with {self.shell.program}")

        for repo in repos:
            if not self.exists(repo):
                self._print_skip(repo, oneline)
                summary.record_skip()
                continue

            invocation = build_invocation(self.shell, command_tokens, self.repo_dir(repo))
            if oneline:
                outcome = self.capturer(invocation)
                click.echo(f"{repo.path}\t{outcome.captured_text or ''}")
            else:
                click.echo()
                click.echo(f"🏢 {repo.path}> {display}")
                outcome = self.streamer(invocation)
                click.echo()
            summary.record(outcome)

        self._print_summary(summary)
        return summary

    def _print_skip(self, repo: Repo, oneline: bool) -> None:
        if oneline:
            click.echo(f"{repo.path}\t{MISSING_FOLDER_MESSAGE}")
            return
        click.echo()
        click.echo(f"🏢 {repo.path}> {MISSING_FOLDER_MESSAGE}")
        click.echo(f"    ({os.path.abspath(self.repo_dir(repo))} does not exist)")

    def _print_summary(self, summary: RunSummary) -> None:
        if summary.failed_count:
            click.echo(f"{summary.failed_count} commands exited with non-zero status code", err=True)
        if summary.skipped_count:
            click.echo(f"{summary.skipped_count} repos skipped because their folder is missing", err=True)

