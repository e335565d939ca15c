"""
Solution up-to-date checker.

Entry point used by the restore orchestrator: ``check_for_changes`` says which
projects need restoring, ``record_outcome`` reports how those restores went.
"""

import threading
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from ..framework.config import CheckerConfig
from ..framework.metrics import CheckerMetrics
from ..schemas.models import ProjectDescriptor, RestoreOutcome, SolutionGraphSnapshot
from ..utils.errors import ConfigurationError, UnknownProjectError, create_error_context
from ..utils.identifiers import ProjectIdSet
from ..utils.logging import add_check_id, add_project_id, get_logger, setup_logging
from .analyzer import CheckReport, DirtyAnalyzer
from .outputs import compute_fingerprint
from .stores import FailureTracker, FingerprintStore, SnapshotStore


class SolutionRestoreChecker(ABC):
    """Decides which projects of a solution need a restore."""

    @abstractmethod
    def check_for_changes(self, snapshot: SolutionGraphSnapshot) -> ProjectIdSet:
        """Return the identifiers of projects that need restoring."""

    @abstractmethod
    def record_outcome(self, outcomes: Iterable[RestoreOutcome]) -> None:
        """Report the result of the restores triggered by the last check."""


class SolutionUpToDateChecker(SolutionRestoreChecker):
    """Owns the cached snapshot, output fingerprints and failures for one solution."""

    def __init__(self, config: Optional[CheckerConfig] = None, metrics: Optional[CheckerMetrics] = None):
        self.config = config or CheckerConfig()
        self.comparer = self.config.build_comparer()
        self.logger = get_logger("solution-uptodate-checker")

        if metrics is None and self.config.observability.metrics_enabled:
            metrics = CheckerMetrics(self.config.observability.service_name)
        self.metrics = metrics

        self.snapshots = SnapshotStore()
        self.fingerprints = FingerprintStore(self.comparer)
        self.failures = FailureTracker(self.comparer)
        self.analyzer = DirtyAnalyzer(
            self.snapshots,
            self.fingerprints,
            self.failures,
            self.comparer,
            parallel_validation=self.config.parallel_validation,
            max_workers=self.config.max_workers,
            parallel_threshold=self.config.parallel_threshold,
        )

        self._lock = threading.Lock()
        self._checks_performed = 0

    @classmethod
    def from_env(cls) -> "SolutionUpToDateChecker":
        """Create a checker from environment variables, with logging configured."""
        config = CheckerConfig.from_env()
        setup_logging(
            config.observability.service_name,
            log_level=config.observability.log_level,
            format_type=config.observability.log_format,
        )
        return cls(config)

    def new_snapshot(self, projects: Iterable[ProjectDescriptor],
                     restore_ids: Optional[Iterable[str]] = None) -> SolutionGraphSnapshot:
        """Build a snapshot that compares identifiers the way this checker does."""
        return SolutionGraphSnapshot(projects, restore_ids=restore_ids, comparer=self.comparer)

    def check_for_changes(self, snapshot: SolutionGraphSnapshot) -> ProjectIdSet:
        """
        Return the projects of ``snapshot`` that need a restore.

        The first call returns every project the snapshot intends to restore.
        Later calls return projects whose spec changed, projects that reference
        a changed project, and projects whose restore outputs are stale,
        missing, or whose last restore failed.
        """
        if snapshot.comparer != self.comparer:
            self._record_error("ConfigurationError")
            raise ConfigurationError(
                "Snapshot identifier comparer does not match the checker's",
                config_key="case_sensitivity",
                config_value=self.config.case_sensitivity,
                context=create_error_context("solution-uptodate-checker", "check_for_changes"),
            )

        check_id = str(uuid.uuid4())
        log = add_check_id(self.logger, check_id)

        with self._lock:
            report = self.analyzer.analyze(snapshot, log)
            self._checks_performed += 1
            self._publish(report)

        log.info(
            "Up-to-date check completed",
            path=report.path.value,
            project_count=len(snapshot),
            dirty_count=len(report.result),
            spec_dirty=len(report.spec_dirty),
            output_dirty=len(report.output_dirty),
            transitive=len(report.transitive),
            duration=report.duration,
        )
        return report.result

    def record_outcome(self, outcomes: Iterable[RestoreOutcome]) -> None:
        """
        Record restore results for the projects of the cached snapshot.

        Successful projects get a fresh output fingerprint; failed projects
        become the new failure set, replacing the previous one.

        Raises:
            UnknownProjectError: an outcome names a project that is not in
                the cached snapshot. Nothing is recorded in that case.
        """
        outcomes = list(outcomes)

        with self._lock:
            snapshot = self.snapshots.current
            successes: List[ProjectDescriptor] = []
            failed_ids: List[str] = []

            for outcome in outcomes:
                descriptor = snapshot.get_project(outcome.project_id) if snapshot is not None else None
                if descriptor is None:
                    self._record_error("UnknownProjectError")
                    self.logger.error("Outcome reported for unknown project",
                                      project_id=outcome.project_id,
                                      cached=snapshot is not None)
                    raise UnknownProjectError(
                        f"Project {outcome.project_id!r} is not in the last checked snapshot",
                        project_id=outcome.project_id,
                        context=create_error_context(
                            "solution-uptodate-checker", "record_outcome",
                            project_id=outcome.project_id,
                        ),
                    )

                if outcome.success:
                    successes.append(descriptor)
                else:
                    failed_ids.append(descriptor.project_id)

            self.failures.reset(failed_ids)
            for descriptor in successes:
                self.fingerprints.record(descriptor.project_id, compute_fingerprint(descriptor))

            if self.metrics:
                self.metrics.record_outcomes(len(successes), len(failed_ids))
                self._publish_state()

        self.logger.info("Restore outcomes recorded",
                         succeeded=len(successes),
                         failed=len(failed_ids))
        for failed_id in failed_ids:
            add_project_id(self.logger, failed_id).warning("Restore failed, project will be re-checked")

    def get_stats(self) -> Dict[str, Any]:
        """Get checker state statistics."""
        with self._lock:
            return {
                "checks_performed": self._checks_performed,
                "cached_projects": self.snapshots.size(),
                "tracked_fingerprints": self.fingerprints.size(),
                "failed_projects": self.failures.size(),
                "case_sensitive": self.comparer.case_sensitive,
            }

    def _publish(self, report: CheckReport) -> None:
        if not self.metrics:
            return
        self.metrics.record_check(
            report.path.value,
            report.duration,
            spec_dirty=len(report.spec_dirty),
            output_dirty=len(report.output_dirty),
            transitive=len(report.transitive),
        )
        self._publish_state()

    def _publish_state(self) -> None:
        self.metrics.set_state_sizes(
            self.snapshots.size(),
            self.fingerprints.size(),
            self.failures.size(),
        )

    def _record_error(self, error_type: str) -> None:
        if self.metrics:
            self.metrics.record_error(error_type, "solution-uptodate-checker")
