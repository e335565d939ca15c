"""
Framework components for hosting the restore checker.

Provides configuration and metrics shared by the checker and
the service that embeds it.
"""

from .config import CheckerConfig, ObservabilityConfig
from .metrics import CheckerMetrics

__all__ = [
    "CheckerConfig",
    "ObservabilityConfig",
    "CheckerMetrics",
]
