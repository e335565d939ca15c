"""
Data models for the restore up-to-date checker.

Defines the project descriptors, graph snapshots, output fingerprints and
restore outcomes exchanged with the orchestrator.
"""

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Dict, Any, Optional, Iterable, Iterator, List, Tuple
from enum import Enum

from ..utils.errors import DuplicateProjectError, create_error_context
from ..utils.identifiers import IdentifierComparer, ProjectIdMap, ProjectIdSet


# Sentinel for an artifact that does not exist or could not be read.
ABSENT = None


class RestoreStyle(str, Enum):
    """How a project declares its package dependencies."""
    PACKAGE_REFERENCE = "package_reference"
    PROJECT_JSON = "project_json"
    PACKAGES_CONFIG = "packages_config"
    STANDALONE = "standalone"
    DOTNET_CLI_TOOL = "dotnet_cli_tool"
    UNKNOWN = "unknown"

    @property
    def tracks_outputs(self) -> bool:
        """True for styles whose restore writes assets/targets/props files."""
        return self in (RestoreStyle.PACKAGE_REFERENCE, RestoreStyle.PROJECT_JSON)


@dataclass(frozen=True)
class ProjectReference:
    """A project-reference edge from the owning project to ``project_id``."""
    project_id: str


@dataclass(frozen=True)
class TargetFramework:
    """Restore inputs of one target framework."""
    name: str
    project_references: Tuple[ProjectReference, ...] = ()

    def __post_init__(self):
        if not isinstance(self.project_references, tuple):
            object.__setattr__(self, "project_references", tuple(self.project_references))


@dataclass(frozen=True)
class ProjectDescriptor:
    """Restore-relevant configuration of one project."""
    project_id: str
    restore_style: RestoreStyle
    output_path: str
    target_frameworks: Tuple[TargetFramework, ...] = ()
    lock_file_path: Optional[str] = None
    project_name: Optional[str] = None

    def __post_init__(self):
        # Lists are accepted; tuples are stored.
        if not isinstance(self.target_frameworks, tuple):
            object.__setattr__(self, "target_frameworks", tuple(self.target_frameworks))

    @property
    def name(self) -> str:
        """Project name, defaulting to the file stem of the identifier."""
        return self.project_name or PurePath(self.project_id).stem

    def project_reference_ids(self, comparer: Optional[IdentifierComparer] = None) -> List[str]:
        """Distinct referenced identifiers across all target frameworks."""
        seen = ProjectIdSet(comparer or IdentifierComparer(case_sensitive=True))
        for framework in self.target_frameworks:
            for reference in framework.project_references:
                seen.add(reference.project_id)
        return list(seen)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "project_id": self.project_id,
            "restore_style": self.restore_style.value,
            "output_path": self.output_path,
            "target_frameworks": [
                {
                    "name": framework.name,
                    "project_references": [ref.project_id for ref in framework.project_references],
                }
                for framework in self.target_frameworks
            ],
            "lock_file_path": self.lock_file_path,
            "project_name": self.project_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectDescriptor":
        """Create from dictionary."""
        return cls(
            project_id=data["project_id"],
            restore_style=RestoreStyle(data.get("restore_style", RestoreStyle.UNKNOWN.value)),
            output_path=data["output_path"],
            target_frameworks=tuple(
                TargetFramework(
                    name=framework["name"],
                    project_references=tuple(
                        ProjectReference(ref) for ref in framework.get("project_references", [])
                    ),
                )
                for framework in data.get("target_frameworks", [])
            ),
            lock_file_path=data.get("lock_file_path"),
            project_name=data.get("project_name"),
        )


class SolutionGraphSnapshot:
    """Immutable set of project descriptors for one point in time."""

    def __init__(
        self,
        projects: Iterable[ProjectDescriptor],
        restore_ids: Optional[Iterable[str]] = None,
        comparer: Optional[IdentifierComparer] = None,
    ):
        self.comparer = comparer or IdentifierComparer.for_platform()
        self._projects = ProjectIdMap(self.comparer)

        for project in projects:
            if project.project_id in self._projects:
                existing = self._projects[project.project_id].project_id
                raise DuplicateProjectError(
                    f"Project {project.project_id!r} appears more than once in the snapshot",
                    project_id=project.project_id,
                    existing_id=existing,
                    context=create_error_context("snapshot", "build", project_id=project.project_id),
                )
            self._projects[project.project_id] = project

        if restore_ids is None:
            self._restore_ids: Tuple[str, ...] = tuple(self._projects)
        else:
            self._restore_ids = tuple(restore_ids)

    @property
    def projects(self) -> Tuple[ProjectDescriptor, ...]:
        """Descriptors in the order they were supplied."""
        return tuple(self._projects.values())

    @property
    def restore_ids(self) -> Tuple[str, ...]:
        """Identifiers the orchestrator intends to restore this cycle."""
        return self._restore_ids

    def get_project(self, project_id: str) -> Optional[ProjectDescriptor]:
        return self._projects.get(project_id)

    def __contains__(self, project_id: object) -> bool:
        return project_id in self._projects

    def __iter__(self) -> Iterator[ProjectDescriptor]:
        return iter(self._projects.values())

    def __len__(self) -> int:
        return len(self._projects)

    def __repr__(self) -> str:
        return f"SolutionGraphSnapshot(projects={len(self)}, restore_ids={len(self._restore_ids)})"


@dataclass(frozen=True)
class OutputFingerprint:
    """Last-write times (ns) of a project's restore artifacts; ``ABSENT`` when missing."""
    assets: Optional[int] = ABSENT
    targets: Optional[int] = ABSENT
    props: Optional[int] = ABSENT
    lock_file: Optional[int] = ABSENT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "assets": self.assets,
            "targets": self.targets,
            "props": self.props,
            "lock_file": self.lock_file,
        }


@dataclass(frozen=True)
class RestoreOutcome:
    """Result of one restore attempt, reported back by the orchestrator."""
    project_id: str
    success: bool
    elapsed_seconds: Optional[float] = None
    errors: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def succeeded(cls, project_id: str, elapsed_seconds: Optional[float] = None) -> "RestoreOutcome":
        return cls(project_id=project_id, success=True, elapsed_seconds=elapsed_seconds)

    @classmethod
    def failed(cls, project_id: str, *errors: str) -> "RestoreOutcome":
        return cls(project_id=project_id, success=False, errors=tuple(errors))
