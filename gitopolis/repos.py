"""
The tracked repository list and the operations that change it.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .domain.repository import Repo
from .exit_codes import RepoNotFoundError
from .tag_filter import TagFilter

logger = logging.getLogger(__name__)


def normalize_folder(repo_folder: str) -> str:
    """Strip trailing path separators so "foo/" and "foo" are the same repo."""
    return repo_folder.rstrip('/').rstrip('\\')


def normalize_folders(repo_folders: Iterable[str]) -> List[str]:
    return [normalize_folder(f) for f in repo_folders]


class Repos:
    """
    Ordered collection of Repo entries keyed by path.

    Order is the order repos were added, which is also the order exec
    visits them.
    """

    def __init__(self, repos: Optional[List[Repo]] = None):
        self.repos: List[Repo] = list(repos or [])

    def __len__(self) -> int:
        return len(self.repos)

    def __iter__(self):
        return iter(self.repos)

    def repo_index(self, path: str) -> Optional[int]:
        for ix, repo in enumerate(self.repos):
            if repo.path == path:
                return ix
        return None

    def find_repo(self, path: str) -> Optional[Repo]:
        ix = self.repo_index(path)
        return self.repos[ix] if ix is not None else None

    def get(self, path: str) -> Repo:
        repo = self.find_repo(normalize_folder(path))
        if repo is None:
            raise RepoNotFoundError(normalize_folder(path))
        return repo

    def add(self, repo_folder: str, remotes: Optional[Dict[str, str]] = None) -> bool:
        """
        Add a repo unless already present.

        Args:
            repo_folder: Folder of the working copy
            remotes: Remote name to URL mapping

        Returns:
            True if the repo was added
        """
        path = normalize_folder(repo_folder)
        if self.repo_index(path) is not None:
            logger.info(f"{path} already added, ignoring.")
            return False
        repo = Repo(path=path)
        for name, url in sorted((remotes or {}).items()):
            repo.add_remote(name, url)
        self.repos.append(repo)
        logger.info(f"Added {path}")
        return True

    def remove(self, repo_folders: Iterable[str]) -> None:
        for path in normalize_folders(repo_folders):
            ix = self.repo_index(path)
            if ix is None:
                raise RepoNotFoundError(path)
            del self.repos[ix]
            logger.info(f"Removed {path}")

    def add_tag(self, tag_name: str, repo_folders: Iterable[str]) -> None:
        for path in normalize_folders(repo_folders):
            repo = self.get(path)
            if not repo.has_tag(tag_name):
                repo.tags.append(tag_name)

    def remove_tag(self, tag_name: str, repo_folders: Iterable[str]) -> None:
        for path in normalize_folders(repo_folders):
            repo = self.get(path)
            if repo.has_tag(tag_name):
                repo.tags.remove(tag_name)

    def select(self, tag_filter: Optional[TagFilter] = None) -> List[Repo]:
        """Repos matching the filter, in stored order."""
        if tag_filter is None:
            return list(self.repos)
        return [r for r in self.repos if tag_filter.matches(r.tags)]

    def sorted_by_path(self, tag_filter: Optional[TagFilter] = None) -> List[Repo]:
        return sorted(self.select(tag_filter), key=lambda r: r.path)

    def tags(self) -> List[str]:
        """Every tag in use, sorted and de-duplicated."""
        return sorted({tag for repo in self.repos for tag in repo.tags})

    def repos_with_tag(self, tag_name: str) -> List[Repo]:
        return sorted((r for r in self.repos if r.has_tag(tag_name)), key=lambda r: r.path)
