"""
Domain layer for gitopolis.

Contains pure domain objects with no I/O or side effects:
- Repo / Remote: an entry of the tracked repository list
- ExecutionOutcome: what happened when a command ran in one repo
- RunSummary: skipped/failed counters for one exec run
"""

from .repository import Repo, Remote
from .execution import ExecutionOutcome, RunSummary

__all__ = [
    'Repo',
    'Remote',
    'ExecutionOutcome',
    'RunSummary',
]
