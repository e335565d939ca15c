"""Pytest configuration and fixtures."""

import os
from typing import Callable, Iterable, Optional

import pytest

from restore_checker.checker.facade import SolutionUpToDateChecker
from restore_checker.checker.outputs import get_artifact_paths
from restore_checker.framework.config import CheckerConfig, ObservabilityConfig
from restore_checker.framework.metrics import CheckerMetrics
from restore_checker.schemas.models import (
    ProjectDescriptor,
    ProjectReference,
    RestoreStyle,
    TargetFramework,
)
from restore_checker.utils.identifiers import IdentifierComparer

BASE_MTIME_NS = 1_700_000_000_000_000_000


def set_mtime(path: str, mtime_ns: int) -> None:
    """Pin a file's modification time."""
    os.utime(path, ns=(mtime_ns, mtime_ns))


def write_outputs(descriptor: ProjectDescriptor, mtime_ns: int = BASE_MTIME_NS) -> None:
    """Create every restore artifact of ``descriptor`` with a fixed timestamp."""
    paths = get_artifact_paths(descriptor)
    for path in (paths.assets, paths.targets, paths.props, paths.lock_file):
        if not path:
            continue
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w") as f:
            f.write("{}")
        set_mtime(path, mtime_ns)


@pytest.fixture
def comparer():
    """Case-sensitive comparer so tests behave the same on every platform."""
    return IdentifierComparer(case_sensitive=True)


@pytest.fixture
def test_config():
    """Test configuration fixture."""
    return CheckerConfig(
        case_sensitivity="sensitive",
        parallel_validation=False,
        max_workers=4,
        parallel_threshold=32,
        observability=ObservabilityConfig(
            service_name="test_checker",
            log_level="debug",
            log_format="console",
            metrics_enabled=True,
        ),
    )


@pytest.fixture
def metrics():
    return CheckerMetrics("test_checker")


@pytest.fixture
def checker(test_config, metrics):
    return SolutionUpToDateChecker(test_config, metrics=metrics)


@pytest.fixture
def make_project(tmp_path) -> Callable[..., ProjectDescriptor]:
    """Factory for descriptors whose artifacts live under ``tmp_path``."""

    def _make(
        name: str,
        references: Iterable[str] = (),
        style: RestoreStyle = RestoreStyle.PACKAGE_REFERENCE,
        frameworks: Iterable[str] = ("net8.0",),
        lock_file: bool = False,
        output_path: Optional[str] = None,
    ) -> ProjectDescriptor:
        project_dir = tmp_path / name
        project_dir.mkdir(exist_ok=True)
        refs = tuple(ProjectReference(ref) for ref in references)
        return ProjectDescriptor(
            project_id=str(project_dir / f"{name}.csproj"),
            restore_style=style,
            output_path=output_path or str(project_dir / "obj"),
            target_frameworks=tuple(TargetFramework(fw, refs) for fw in frameworks),
            lock_file_path=str(project_dir / "packages.lock.json") if lock_file else None,
        )

    return _make


@pytest.fixture
def outputs():
    """Helpers for writing and touching restore artifacts."""

    class _Outputs:
        write = staticmethod(write_outputs)
        touch = staticmethod(set_mtime)
        paths = staticmethod(get_artifact_paths)

    return _Outputs
