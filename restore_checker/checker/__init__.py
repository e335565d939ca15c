"""
Incremental restore decision engine.

Compares solution graph snapshots, validates restore outputs and
propagates spec changes across project references.
"""

from .analyzer import CheckPath, CheckReport, DirtyAnalyzer
from .facade import SolutionRestoreChecker, SolutionUpToDateChecker
from .ordering import sort_by_dependency_order
from .outputs import ArtifactPaths, compute_fingerprint, get_artifact_paths

__all__ = [
    "CheckPath",
    "CheckReport",
    "DirtyAnalyzer",
    "SolutionRestoreChecker",
    "SolutionUpToDateChecker",
    "sort_by_dependency_order",
    "ArtifactPaths",
    "compute_fingerprint",
    "get_artifact_paths",
]
