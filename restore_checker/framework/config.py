"""
Configuration management for the restore checker.

Provides typed configuration classes with environment variable
injection and validation.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Any

from ..utils.errors import ConfigurationError
from ..utils.identifiers import IdentifierComparer

CASE_SENSITIVITY_MODES = ("auto", "sensitive", "insensitive")
LOG_FORMATS = ("json", "console")
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass
class ObservabilityConfig:
    """Observability configuration."""
    service_name: str = field(default_factory=lambda: os.getenv("RESTORE_CHECK_SERVICE_NAME", "restore_checker"))
    log_level: str = field(default_factory=lambda: os.getenv("RESTORE_CHECK_LOG_LEVEL", "info"))
    log_format: str = field(default_factory=lambda: os.getenv("RESTORE_CHECK_LOG_FORMAT", "json"))
    metrics_enabled: bool = field(default_factory=lambda: os.getenv("RESTORE_CHECK_METRICS_ENABLED", "true").lower() == "true")

    def __post_init__(self):
        if self.log_level.lower() not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}",
                config_key="log_level",
                config_value=self.log_level,
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Invalid log format: {self.log_format}",
                config_key="log_format",
                config_value=self.log_format,
            )


@dataclass
class CheckerConfig:
    """Up-to-date checker configuration."""
    case_sensitivity: str = field(default_factory=lambda: os.getenv("RESTORE_CHECK_CASE_SENSITIVITY", "auto"))
    parallel_validation: bool = field(default_factory=lambda: os.getenv("RESTORE_CHECK_PARALLEL_VALIDATION", "true").lower() == "true")
    max_workers: int = field(default_factory=lambda: int(os.getenv("RESTORE_CHECK_MAX_WORKERS", "8")))
    parallel_threshold: int = field(default_factory=lambda: int(os.getenv("RESTORE_CHECK_PARALLEL_THRESHOLD", "32")))

    # Sub-configurations
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.case_sensitivity not in CASE_SENSITIVITY_MODES:
            raise ConfigurationError(
                f"Invalid case sensitivity: {self.case_sensitivity}",
                config_key="case_sensitivity",
                config_value=self.case_sensitivity,
            )

        if self.max_workers <= 0:
            raise ConfigurationError(
                "max_workers must be positive",
                config_key="max_workers",
                config_value=self.max_workers,
            )

        if self.parallel_threshold <= 0:
            raise ConfigurationError(
                "parallel_threshold must be positive",
                config_key="parallel_threshold",
                config_value=self.parallel_threshold,
            )

    @classmethod
    def from_env(cls) -> "CheckerConfig":
        """Create configuration from environment variables."""
        return cls()

    def build_comparer(self) -> IdentifierComparer:
        """Identifier comparer selected by ``case_sensitivity``."""
        return IdentifierComparer.from_setting(self.case_sensitivity)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "case_sensitivity": self.case_sensitivity,
            "parallel_validation": self.parallel_validation,
            "max_workers": self.max_workers,
            "parallel_threshold": self.parallel_threshold,
            "observability": {
                "service_name": self.observability.service_name,
                "log_level": self.observability.log_level,
                "log_format": self.observability.log_format,
                "metrics_enabled": self.observability.metrics_enabled,
            },
        }
