"""Helpers for comparing project identifiers consistently across the checker.

Project identifiers are usually full project file paths, so whether two of
them name the same project depends on the file system. Every container keyed
by identifier is bound to one ``IdentifierComparer`` so lookups never mix
case-sensitive and case-insensitive semantics.
"""

from __future__ import annotations

import sys
from collections.abc import MutableMapping, MutableSet
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, TypeVar

V = TypeVar("V")

CASE_INSENSITIVE_PLATFORMS = ("win32", "cygwin", "darwin")


class IdentifierComparer:
    """Equality strategy for project identifiers."""

    def __init__(self, case_sensitive: bool) -> None:
        self.case_sensitive = case_sensitive

    @classmethod
    def for_platform(cls, platform: Optional[str] = None) -> "IdentifierComparer":
        """Comparer matching the file system conventions of the host."""
        platform = platform or sys.platform
        return cls(case_sensitive=not platform.startswith(CASE_INSENSITIVE_PLATFORMS))

    @classmethod
    def from_setting(cls, setting: str) -> "IdentifierComparer":
        """Build a comparer from a ``case_sensitivity`` configuration value."""
        if setting == "sensitive":
            return cls(case_sensitive=True)
        if setting == "insensitive":
            return cls(case_sensitive=False)
        return cls.for_platform()

    def key(self, project_id: str) -> str:
        """Return the lookup key for an identifier."""
        return project_id if self.case_sensitive else project_id.casefold()

    def equals(self, left: str, right: str) -> bool:
        return self.key(left) == self.key(right)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdentifierComparer):
            return NotImplemented
        return self.case_sensitive == other.case_sensitive

    def __hash__(self) -> int:
        return hash(self.case_sensitive)

    def __repr__(self) -> str:
        mode = "sensitive" if self.case_sensitive else "insensitive"
        return f"IdentifierComparer({mode})"


class ProjectIdSet(MutableSet):
    """Set of project identifiers that remembers the first spelling it saw."""

    def __init__(self, comparer: IdentifierComparer, ids: Iterable[str] = ()) -> None:
        self.comparer = comparer
        self._items: Dict[str, str] = {}
        for project_id in ids:
            self.add(project_id)

    def __contains__(self, project_id: object) -> bool:
        if not isinstance(project_id, str):
            return False
        return self.comparer.key(project_id) in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def add(self, project_id: str) -> None:
        self._items.setdefault(self.comparer.key(project_id), project_id)

    def discard(self, project_id: str) -> None:
        self._items.pop(self.comparer.key(project_id), None)

    def clear(self) -> None:
        self._items.clear()

    def copy(self) -> "ProjectIdSet":
        return ProjectIdSet(self.comparer, self)

    def _from_iterable(self, it: Iterable[str]) -> "ProjectIdSet":
        return ProjectIdSet(self.comparer, it)

    def __repr__(self) -> str:
        return f"ProjectIdSet({sorted(self._items.values())!r})"


class ProjectIdMap(MutableMapping):
    """Mapping keyed by project identifier under a fixed comparer."""

    def __init__(self, comparer: IdentifierComparer, items: Iterable[Tuple[str, Any]] = ()) -> None:
        self.comparer = comparer
        self._items: Dict[str, Tuple[str, Any]] = {}
        for project_id, value in items:
            self[project_id] = value

    def __getitem__(self, project_id: str) -> Any:
        return self._items[self.comparer.key(project_id)][1]

    def __setitem__(self, project_id: str, value: Any) -> None:
        key = self.comparer.key(project_id)
        existing = self._items.get(key)
        spelling = existing[0] if existing else project_id
        self._items[key] = (spelling, value)

    def __delitem__(self, project_id: str) -> None:
        del self._items[self.comparer.key(project_id)]

    def __contains__(self, project_id: object) -> bool:
        if not isinstance(project_id, str):
            return False
        return self.comparer.key(project_id) in self._items

    def __iter__(self) -> Iterator[str]:
        return (spelling for spelling, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ProjectIdMap({dict(self.items())!r})"


__all__ = [
    "CASE_INSENSITIVE_PLATFORMS",
    "IdentifierComparer",
    "ProjectIdSet",
    "ProjectIdMap",
]
