"""Prometheus metrics collection for the restore checker."""

from typing import Optional

from prometheus_client import (
    Counter, Histogram, Gauge,
    CollectorRegistry, generate_latest, CONTENT_TYPE_LATEST
)


class CheckerMetrics:
    """Metrics for up-to-date checks and recorded restore outcomes."""

    def __init__(self, service_name: str = "restore_checker", registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry or CollectorRegistry()

        self._init_metrics()

    def _init_metrics(self):
        # Check metrics
        self.checks_total = Counter(
            f"{self.service_name}_checks_total",
            "Total number of up-to-date checks by the path they took",
            ["path"],
            registry=self.registry
        )

        self.check_duration = Histogram(
            f"{self.service_name}_check_duration_seconds",
            "Up-to-date check duration in seconds",
            ["path"],
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
            registry=self.registry
        )

        self.dirty_projects = Counter(
            f"{self.service_name}_dirty_projects_total",
            "Projects reported as needing restore, by reason",
            ["reason"],
            registry=self.registry
        )

        # Outcome metrics
        self.outcomes_total = Counter(
            f"{self.service_name}_outcomes_total",
            "Restore outcomes recorded by the checker",
            ["status"],
            registry=self.registry
        )

        # State metrics
        self.cached_projects = Gauge(
            f"{self.service_name}_cached_projects",
            "Projects in the cached snapshot",
            registry=self.registry
        )

        self.tracked_fingerprints = Gauge(
            f"{self.service_name}_tracked_fingerprints",
            "Projects with a recorded output fingerprint",
            registry=self.registry
        )

        self.failed_projects = Gauge(
            f"{self.service_name}_failed_projects",
            "Projects whose most recent restore failed",
            registry=self.registry
        )

        # Error metrics
        self.errors_total = Counter(
            f"{self.service_name}_errors_total",
            "Total number of errors raised by the checker",
            ["error_type", "component"],
            registry=self.registry
        )

    def record_check(self, path: str, duration: float, spec_dirty: int = 0,
                     output_dirty: int = 0, transitive: int = 0):
        """Record one completed check."""
        self.checks_total.labels(path=path).inc()
        self.check_duration.labels(path=path).observe(duration)
        if spec_dirty:
            self.dirty_projects.labels(reason="spec").inc(spec_dirty)
        if output_dirty:
            self.dirty_projects.labels(reason="output").inc(output_dirty)
        if transitive:
            self.dirty_projects.labels(reason="transitive").inc(transitive)

    def record_outcomes(self, succeeded: int, failed: int):
        """Record a batch of restore outcomes."""
        if succeeded:
            self.outcomes_total.labels(status="success").inc(succeeded)
        if failed:
            self.outcomes_total.labels(status="failure").inc(failed)

    def set_state_sizes(self, cached: int, fingerprints: int, failures: int):
        """Publish the current size of each state store."""
        self.cached_projects.set(cached)
        self.tracked_fingerprints.set(fingerprints)
        self.failed_projects.set(failures)

    def record_error(self, error_type: str, component: str):
        """Record an error metric."""
        self.errors_total.labels(error_type=error_type, component=component).inc()

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus format."""
        return generate_latest(self.registry)

    def get_content_type(self) -> str:
        """Get the content type for metrics."""
        return CONTENT_TYPE_LATEST
