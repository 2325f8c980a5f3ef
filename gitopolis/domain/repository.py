"""
Repository domain object for gitopolis.

Repo represents one entry of the tracked repository list: a working copy
folder, the tags attached to it and the git remotes it was added with.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List


@dataclass(frozen=True)
class Remote:
    """A named git remote."""
    name: str
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'url': self.url,
        }


@dataclass
class Repo:
    """
    A tracked repository working copy.

    Attributes:
        path: Folder relative to the directory holding the repository list,
            unique within the list
        tags: Tags in the order they were added
        remotes: Remotes keyed by remote name
    """
    path: str
    tags: List[str] = field(default_factory=list)
    remotes: Dict[str, Remote] = field(default_factory=dict)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def add_remote(self, name: str, url: str) -> None:
        self.remotes[name] = Remote(name=name, url=url)

    def primary_url(self) -> Optional[str]:
        """URL of origin, else of the first remote by name."""
        if 'origin' in self.remotes:
            return self.remotes['origin'].url
        for name in sorted(self.remotes):
            return self.remotes[name].url
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dictionary layout stored in the state file."""
        return {
            'path': self.path,
            'tags': list(self.tags),
            'remotes': {name: remote.to_dict() for name, remote in sorted(self.remotes.items())},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Repo':
        """Create a Repo from a state file entry."""
        remotes = {}
        for name, remote in (data.get('remotes') or {}).items():
            remotes[name] = Remote(name=remote.get('name', name), url=remote.get('url', ''))
        return cls(
            path=data['path'],
            tags=list(data.get('tags') or []),
            remotes=remotes,
        )
