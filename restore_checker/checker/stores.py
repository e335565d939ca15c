"""
State owned by the up-to-date checker.

Three small stores, none of them thread-safe on their own; the checker
facade serializes all access through its lock.
"""

from typing import Iterable, Optional

from ..schemas.models import OutputFingerprint, SolutionGraphSnapshot
from ..utils.identifiers import IdentifierComparer, ProjectIdMap, ProjectIdSet


class SnapshotStore:
    """Holds the last accepted snapshot; replaced wholesale, never merged."""

    def __init__(self) -> None:
        self._current: Optional[SolutionGraphSnapshot] = None

    @property
    def current(self) -> Optional[SolutionGraphSnapshot]:
        return self._current

    @property
    def is_cold(self) -> bool:
        return self._current is None

    def replace(self, snapshot: SolutionGraphSnapshot) -> None:
        self._current = snapshot

    def size(self) -> int:
        return len(self._current) if self._current is not None else 0


class FingerprintStore:
    """Last observed output fingerprint per successfully restored project."""

    def __init__(self, comparer: IdentifierComparer) -> None:
        self._fingerprints = ProjectIdMap(comparer)

    def get(self, project_id: str) -> Optional[OutputFingerprint]:
        return self._fingerprints.get(project_id)

    def record(self, project_id: str, fingerprint: OutputFingerprint) -> None:
        """Store a fingerprint, overwriting any previous entry."""
        self._fingerprints[project_id] = fingerprint

    def snapshot(self) -> dict:
        """Return a copy of the store for debugging."""
        return dict(self._fingerprints.items())

    def size(self) -> int:
        return len(self._fingerprints)


class FailureTracker:
    """Projects whose most recently reported restore failed."""

    def __init__(self, comparer: IdentifierComparer) -> None:
        self._failed = ProjectIdSet(comparer)

    def reset(self, failed_ids: Iterable[str] = ()) -> None:
        """Forget the previous batch and track only ``failed_ids``."""
        self._failed.clear()
        for project_id in failed_ids:
            self._failed.add(project_id)

    def has_failed(self, project_id: str) -> bool:
        return project_id in self._failed

    def failed_ids(self) -> list:
        return list(self._failed)

    def size(self) -> int:
        return len(self._failed)
