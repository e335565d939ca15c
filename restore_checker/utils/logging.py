"""
Structured logging setup for the restore checker.

Provides consistent logging configuration with structured output
and per-check correlation IDs.
"""

import logging
import sys
from typing import Optional
import structlog
from structlog.stdlib import LoggerFactory


def setup_logging(
    service_name: str,
    log_level: str = "info",
    format_type: str = "json"
) -> None:
    """
    Setup structured logging for the checker's host process.

    Args:
        service_name: Name of the hosting service
        log_level: Logging level (debug, info, warning, error)
        format_type: Output format (json, console)
    """
    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper())
    )

    # Configure structlog
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if format_type == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Set default context
    structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def add_check_id(logger: structlog.BoundLogger, check_id: str) -> structlog.BoundLogger:
    """Add the correlation ID of one up-to-date check to logger context."""
    return logger.bind(check_id=check_id)


def add_project_id(logger: structlog.BoundLogger, project_id: str) -> structlog.BoundLogger:
    """Add project ID to logger context."""
    return logger.bind(project_id=project_id)
