"""Unit tests for checker framework components."""

import pytest

from restore_checker.framework.config import CheckerConfig, ObservabilityConfig
from restore_checker.framework.metrics import CheckerMetrics
from restore_checker.utils.errors import ConfigurationError, UnknownProjectError, create_error_context


class TestCheckerConfig:
    """Test CheckerConfig class."""

    def test_defaults_from_environment(self, monkeypatch):
        monkeypatch.setenv("RESTORE_CHECK_CASE_SENSITIVITY", "insensitive")
        monkeypatch.setenv("RESTORE_CHECK_MAX_WORKERS", "3")
        monkeypatch.setenv("RESTORE_CHECK_PARALLEL_VALIDATION", "false")
        monkeypatch.setenv("RESTORE_CHECK_LOG_FORMAT", "console")

        config = CheckerConfig.from_env()

        assert config.case_sensitivity == "insensitive"
        assert config.max_workers == 3
        assert not config.parallel_validation
        assert config.observability.log_format == "console"
        assert not config.build_comparer().case_sensitive

    def test_invalid_values(self):
        with pytest.raises(ConfigurationError):
            CheckerConfig(case_sensitivity="sometimes")

        with pytest.raises(ConfigurationError) as exc_info:
            CheckerConfig(max_workers=0)
        assert exc_info.value.details["config_key"] == "max_workers"

        with pytest.raises(ConfigurationError):
            CheckerConfig(parallel_threshold=-1)

        with pytest.raises(ConfigurationError):
            ObservabilityConfig(log_format="xml")

    def test_to_dict(self, test_config):
        data = test_config.to_dict()

        assert data["case_sensitivity"] == "sensitive"
        assert data["observability"]["service_name"] == "test_checker"


class TestCheckerMetrics:
    """Test CheckerMetrics class."""

    def test_record_check(self, metrics):
        metrics.record_check("propagated", 0.01, spec_dirty=2, output_dirty=1, transitive=3)

        registry = metrics.registry
        assert registry.get_sample_value("test_checker_checks_total", {"path": "propagated"}) == 1
        assert registry.get_sample_value("test_checker_dirty_projects_total", {"reason": "spec"}) == 2
        assert registry.get_sample_value("test_checker_dirty_projects_total", {"reason": "transitive"}) == 3

    def test_state_and_errors(self, metrics):
        metrics.set_state_sizes(cached=4, fingerprints=3, failures=1)
        metrics.record_error("UnknownProjectError", "solution-uptodate-checker")

        registry = metrics.registry
        assert registry.get_sample_value("test_checker_tracked_fingerprints") == 3
        assert registry.get_sample_value(
            "test_checker_errors_total",
            {"error_type": "UnknownProjectError", "component": "solution-uptodate-checker"},
        ) == 1
        assert b"test_checker_cached_projects 4.0" in metrics.get_metrics()


class TestErrors:
    """Test structured errors."""

    def test_to_dict_includes_context(self):
        error = UnknownProjectError(
            "missing",
            project_id="/src/App/App.csproj",
            context=create_error_context("checker", "record_outcome", check_id="abc"),
        )

        data = error.to_dict()
        assert data["error_code"] == "UNKNOWN_PROJECT"
        assert data["context"]["operation"] == "record_outcome"
        assert data["context"]["check_id"] == "abc"
