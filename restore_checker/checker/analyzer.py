"""
Dirty analysis for incremental restore.

Pass 1 validates every project of a new snapshot against the cached
snapshot, the recorded output fingerprints and the last failures. Pass 2
propagates spec changes to every project that transitively references a
changed project.
"""

import contextvars
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from ..schemas.models import ProjectDescriptor, SolutionGraphSnapshot
from ..utils.identifiers import IdentifierComparer, ProjectIdSet
from ..utils.logging import get_logger
from .differ import describe_differences, specs_equal
from .ordering import sort_by_dependency_order
from .outputs import compute_fingerprint
from .stores import FailureTracker, FingerprintStore, SnapshotStore


class CheckPath(str, Enum):
    """Which branch of the algorithm produced a result."""
    COLD_START = "cold_start"
    UP_TO_DATE = "up_to_date"
    PROPAGATED = "propagated"


@dataclass
class ProjectValidation:
    """Pass 1 verdict for one project."""
    project_id: str
    spec_dirty: bool = False
    output_dirty: bool = False
    reason: Optional[str] = None


@dataclass
class CheckReport:
    """Everything one check decided, for logging and metrics."""
    path: CheckPath
    result: ProjectIdSet
    spec_dirty: List[str] = field(default_factory=list)
    output_dirty: List[str] = field(default_factory=list)
    transitive: List[str] = field(default_factory=list)
    duration: float = 0.0


class DirtyAnalyzer:
    """Runs the two-pass invalidation over the checker's stores."""

    def __init__(
        self,
        snapshots: SnapshotStore,
        fingerprints: FingerprintStore,
        failures: FailureTracker,
        comparer: IdentifierComparer,
        parallel_validation: bool = False,
        max_workers: int = 8,
        parallel_threshold: int = 32,
    ):
        self.snapshots = snapshots
        self.fingerprints = fingerprints
        self.failures = failures
        self.comparer = comparer
        self.parallel_validation = parallel_validation
        self.max_workers = max_workers
        self.parallel_threshold = parallel_threshold
        self.logger = get_logger("dirty-analyzer")

    def analyze(self, snapshot: SolutionGraphSnapshot, logger=None) -> CheckReport:
        """Decide which projects of ``snapshot`` need a restore."""
        log = logger or self.logger
        start_time = time.perf_counter()

        if self.snapshots.is_cold:
            self.snapshots.replace(snapshot)
            result = ProjectIdSet(self.comparer, snapshot.restore_ids)
            log.info("No cached snapshot, restoring everything", project_count=len(result))
            return CheckReport(
                path=CheckPath.COLD_START,
                result=result,
                duration=time.perf_counter() - start_time,
            )

        spec_dirty, output_dirty = self.validate(snapshot, log)

        if not spec_dirty and not output_dirty:
            log.debug("All projects up to date", project_count=len(snapshot))
            return CheckReport(
                path=CheckPath.UP_TO_DATE,
                result=ProjectIdSet(self.comparer),
                duration=time.perf_counter() - start_time,
            )

        self.snapshots.replace(snapshot)
        dirty = self.propagate_dirty(spec_dirty, snapshot)
        transitive = [project_id for project_id in dirty if project_id not in spec_dirty]

        result = ProjectIdSet(self.comparer, dirty)
        result |= output_dirty

        return CheckReport(
            path=CheckPath.PROPAGATED,
            result=result,
            spec_dirty=spec_dirty,
            output_dirty=output_dirty,
            transitive=transitive,
            duration=time.perf_counter() - start_time,
        )

    def validate(self, snapshot: SolutionGraphSnapshot, logger=None) -> Tuple[List[str], List[str]]:
        """Pass 1: spec-dirty and output-dirty identifiers, in snapshot order."""
        log = logger or self.logger
        projects = snapshot.projects

        if self.parallel_validation and len(projects) >= self.parallel_threshold:
            workers = min(self.max_workers, len(projects))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="restore-check") as pool:
                # Each task runs in a copy of the caller's context so bound log context follows it.
                futures = [
                    pool.submit(contextvars.copy_context().run, self.validate_project, project, log)
                    for project in projects
                ]
                validations = [future.result() for future in futures]
        else:
            validations = [self.validate_project(project, log) for project in projects]

        spec_dirty: List[str] = []
        output_dirty: List[str] = []
        for validation in validations:
            if validation.spec_dirty:
                spec_dirty.append(validation.project_id)
            if validation.output_dirty:
                output_dirty.append(validation.project_id)
                log.debug("Project outputs dirty", project_id=validation.project_id,
                          reason=validation.reason)

        return spec_dirty, output_dirty

    def validate_project(self, project: ProjectDescriptor, logger=None) -> ProjectValidation:
        """Check one project; touches only its own cache, fingerprint and failure entries."""
        log = logger or self.logger
        validation = ProjectValidation(project_id=project.project_id)

        cached = self.snapshots.current.get_project(project.project_id)
        if not specs_equal(cached, project):
            validation.spec_dirty = True
            log.debug("Project spec changed", project_id=project.project_id,
                      changed=describe_differences(cached, project))

        if not project.restore_style.tracks_outputs:
            return validation

        if self.failures.has_failed(project.project_id):
            validation.output_dirty = True
            validation.reason = "last_restore_failed"
            return validation

        recorded = self.fingerprints.get(project.project_id)
        if recorded is None:
            validation.output_dirty = True
            validation.reason = "no_fingerprint"
        elif compute_fingerprint(project) != recorded:
            validation.output_dirty = True
            validation.reason = "outputs_changed"

        return validation

    def propagate_dirty(self, spec_dirty: Iterable[str], snapshot: SolutionGraphSnapshot) -> ProjectIdSet:
        """
        Pass 2: the spec-dirty projects plus everything that references them.

        Walking in dependency order means a project's references are settled
        before the project itself is visited, so one pass is enough.
        """
        dirty = ProjectIdSet(self.comparer, spec_dirty)

        for project in sort_by_dependency_order(snapshot):
            if project.project_id in dirty:
                continue
            for reference_id in project.project_reference_ids(self.comparer):
                if reference_id in dirty:
                    dirty.add(project.project_id)
                    break

        return dirty
