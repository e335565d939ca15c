"""
Restore up-to-date checker for multi-project solutions.

Decides which projects need their package restore re-run after the
solution's dependency graph is recomputed.
"""

from .checker import SolutionRestoreChecker, SolutionUpToDateChecker
from .framework import CheckerConfig
from .schemas import (
    ProjectDescriptor,
    ProjectReference,
    RestoreOutcome,
    RestoreStyle,
    SolutionGraphSnapshot,
    TargetFramework,
)
from .utils import UnknownProjectError, DuplicateProjectError

__version__ = "0.1.0"

__all__ = [
    "SolutionRestoreChecker",
    "SolutionUpToDateChecker",
    "CheckerConfig",
    "ProjectDescriptor",
    "ProjectReference",
    "RestoreOutcome",
    "RestoreStyle",
    "SolutionGraphSnapshot",
    "TargetFramework",
    "UnknownProjectError",
    "DuplicateProjectError",
]
