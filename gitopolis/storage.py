"""
Persistence of the repository list in .gitopolis.toml.

Layout:

    [[repos]]
    path = "foo"
    tags = ["a", "b"]
    [repos.remotes.origin]
    name = "origin"
    url = "git@example.org:foo.git"
"""

import tomllib
from pathlib import Path
from typing import Optional

import toml

from .config import get_state_path, logger
from .domain.repository import Repo
from .exit_codes import StateError
from .repos import Repos


def parse(state_toml: str) -> Repos:
    """Parse state file text into a Repos collection."""
    try:
        data = tomllib.loads(state_toml)
    except tomllib.TOMLDecodeError as e:
        raise StateError(f"Failed to parse state data as valid TOML. {e}") from e

    entries = data.get('repos')
    if not isinstance(entries, list):
        raise StateError("Failed to read 'repos' entry from state TOML")

    try:
        return Repos([Repo.from_dict(entry) for entry in entries])
    except (KeyError, TypeError, AttributeError) as e:
        raise StateError(f"Corrupted repo entry in state TOML. {e}") from e


def serialize(repos: Repos) -> str:
    return toml.dumps({'repos': [repo.to_dict() for repo in repos]})


def load(path: Optional[Path] = None) -> Repos:
    """Load the repository list; a missing file is an empty list."""
    state_path = path or get_state_path()
    if not state_path.exists():
        return Repos()
    try:
        text = state_path.read_text(encoding='utf-8')
    except OSError as e:
        raise StateError(f"Failed to read {state_path}. {e}") from e
    return parse(text)


def save(repos: Repos, path: Optional[Path] = None) -> None:
    state_path = path or get_state_path()
    try:
        state_path.write_text(serialize(repos), encoding='utf-8')
    except OSError as e:
        raise StateError(f"Failed to write {state_path}. {e}") from e
    logger.debug(f"Saved {len(repos)} repos to {state_path}")
