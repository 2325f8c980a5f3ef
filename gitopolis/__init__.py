"""
gitopolis - manage multiple git repositories.

Keeps a list of repository folders with tags in .gitopolis.toml and runs
commands across all of them, or a tag-selected subset.

Quick Start:
    from gitopolis import storage, TagFilter, ExecService

    repos = storage.load()
    selected = repos.select(TagFilter.from_args(["work,active"]))
    summary = ExecService().run(selected, ["git", "status"])
    print(summary.failed_count, summary.skipped_count)
"""

__version__ = "0.3.0"

from .domain import Repo, Remote, ExecutionOutcome, RunSummary
from .repos import Repos
from .tag_filter import TagFilter
from .services import ExecService
from .infra.shell import resolve_shell, build_invocation
from .format_utils import format_for_display

__all__ = [
    "__version__",
    "Repo",
    "Remote",
    "Repos",
    "ExecutionOutcome",
    "RunSummary",
    "TagFilter",
    "ExecService",
    "resolve_shell",
    "build_invocation",
    "format_for_display",
]
