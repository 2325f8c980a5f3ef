"""
Tag filtering for gitopolis.

A filter is built from the repeated --tag option:
  - each --tag value may hold comma separated tags, all of which must be
    present (AND)
  - separate --tag values are alternatives (OR)
  - no --tag at all matches every repository

Examples:
  --tag foo,bar              foo AND bar
  --tag foo,bar --tag baz    (foo AND bar) OR baz
"""

from typing import Iterable, List, Sequence, Tuple


class TagFilter:
    """Immutable OR-of-ANDs predicate over a repository's tags."""

    def __init__(self, groups: Iterable[Iterable[str]] = ()):
        self._groups: Tuple[Tuple[str, ...], ...] = tuple(tuple(g) for g in groups)

    @classmethod
    def from_args(cls, tag_args: Sequence[str]) -> 'TagFilter':
        """
        Build a filter from CLI --tag values.

        An empty value yields a group holding one empty tag, which matches
        nothing; that is expected rather than an error.
        """
        return cls(
            [part.strip() for part in tag_arg.split(',')]
            for tag_arg in tag_args or ()
        )

    @property
    def groups(self) -> List[List[str]]:
        return [list(g) for g in self._groups]

    def is_all(self) -> bool:
        return not self._groups

    def matches(self, repo_tags: Iterable[str]) -> bool:
        """True when any group's tags are all present in repo_tags."""
        if not self._groups:
            return True
        tag_set = set(repo_tags)
        return any(tag_set.issuperset(group) for group in self._groups)

    def describe(self) -> str:
        """Human readable form, e.g. "(foo AND bar) OR baz"."""
        parts = []
        for group in self._groups:
            text = " AND ".join(group)
            parts.append(f"({text})" if len(group) > 1 and len(self._groups) > 1 else text)
        return " OR ".join(parts)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TagFilter):
            return NotImplemented
        return self._groups == other._groups

    def __hash__(self) -> int:
        return hash(self._groups)

    def __repr__(self) -> str:
        return f"TagFilter({self.groups!r})"
