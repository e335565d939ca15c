"""
Utility modules for the restore checker.

Provides common utilities for:
- Structured logging
- Error handling
- Project identifier comparison
"""

from .logging import setup_logging, get_logger
from .errors import (
    RestoreCheckError,
    UnknownProjectError,
    DuplicateProjectError,
    ConfigurationError,
)
from .identifiers import IdentifierComparer, ProjectIdSet, ProjectIdMap

__all__ = [
    "setup_logging",
    "get_logger",
    "RestoreCheckError",
    "UnknownProjectError",
    "DuplicateProjectError",
    "ConfigurationError",
    "IdentifierComparer",
    "ProjectIdSet",
    "ProjectIdMap",
]
