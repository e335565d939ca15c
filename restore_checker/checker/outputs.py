"""Restore artifact locations and their last-write fingerprints."""

import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional

from ..schemas.models import ABSENT, OutputFingerprint, ProjectDescriptor, RestoreStyle
from ..utils.logging import get_logger

logger = get_logger("restore-outputs")

ASSETS_FILE_NAME = "project.assets.json"
TARGETS_EXTENSION = ".targets"
PROPS_EXTENSION = ".props"


@dataclass(frozen=True)
class ArtifactPaths:
    """Files written by a restore of one project."""
    assets: str
    targets: str
    props: str
    lock_file: Optional[str] = None


def get_assets_file_path(output_path: str) -> str:
    return os.path.join(output_path, ASSETS_FILE_NAME)


def get_build_file_path(descriptor: ProjectDescriptor, extension: str) -> str:
    """
    Path of the generated build targets/props file.

    PackageReference projects get ``<output>/<project file>.nuget.g<ext>``;
    project.json projects get ``<project dir>/<name>.nuget<ext>``.
    """
    project_path = PurePath(descriptor.project_id)
    if descriptor.restore_style == RestoreStyle.PROJECT_JSON:
        return os.path.join(str(project_path.parent), f"{descriptor.name}.nuget{extension}")
    return os.path.join(descriptor.output_path, f"{project_path.name}.nuget.g{extension}")


def get_artifact_paths(descriptor: ProjectDescriptor) -> ArtifactPaths:
    return ArtifactPaths(
        assets=get_assets_file_path(descriptor.output_path),
        targets=get_build_file_path(descriptor, TARGETS_EXTENSION),
        props=get_build_file_path(descriptor, PROPS_EXTENSION),
        lock_file=descriptor.lock_file_path or None,
    )


def read_last_write_time(path: Optional[str]) -> Optional[int]:
    """Last modification time in nanoseconds, or ``ABSENT`` if it cannot be read."""
    if not path or not path.strip():
        return ABSENT
    try:
        return os.stat(path).st_mtime_ns
    except FileNotFoundError:
        return ABSENT
    except (OSError, ValueError) as e:
        logger.debug("Artifact timestamp unreadable", path=path, error=str(e))
        return ABSENT


def compute_fingerprint(descriptor: ProjectDescriptor) -> OutputFingerprint:
    """Read the current fingerprint of a project's restore artifacts."""
    paths = get_artifact_paths(descriptor)
    return OutputFingerprint(
        assets=read_last_write_time(paths.assets),
        targets=read_last_write_time(paths.targets),
        props=read_last_write_time(paths.props),
        lock_file=read_last_write_time(paths.lock_file),
    )
