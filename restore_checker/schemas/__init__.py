"""
Data models shared by the checker and its orchestrator.
"""

from .models import (
    ABSENT,
    RestoreStyle,
    ProjectReference,
    TargetFramework,
    ProjectDescriptor,
    SolutionGraphSnapshot,
    OutputFingerprint,
    RestoreOutcome,
)

__all__ = [
    "ABSENT",
    "RestoreStyle",
    "ProjectReference",
    "TargetFramework",
    "ProjectDescriptor",
    "SolutionGraphSnapshot",
    "OutputFingerprint",
    "RestoreOutcome",
]
