"""
Centralized logging configuration for the scrapbook application.

Both entry points (the Streamlit UI and the FastAPI backend) call
``configure_structured_logging`` once at startup. Every module then logs
through ``get_logger(__name__)`` using event names plus keyword context.
"""

import logging
import os
import sys
from typing import Any

import structlog

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_configured = False


def get_log_level() -> int:
    """
    Get log level from the LOG_LEVEL environment variable, defaulting to INFO.

    Returns:
        int: Log level constant from logging module
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    return _LEVELS.get(level_name, logging.INFO)


def is_development_environment() -> bool:
    """Check if running in development environment."""
    return os.getenv("ENVIRONMENT", "development").lower() in ["development", "dev", "local"]


def configure_structured_logging(force: bool = False) -> None:
    """
    Configure structlog and the standard library logging for the process.

    Development renders human-readable console lines; any other environment
    renders one JSON object per line for log collectors.

    Args:
        force: Reconfigure even if logging was already configured
    """
    global _configured
    if _configured and not force:
        return

    log_level = get_log_level()
    is_dev = is_development_environment()

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        stream=sys.stderr,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger().setLevel(log_level)
    _configured = True

    logger = structlog.get_logger("scrapbook.logging")
    logger.info(
        "logging_configured",
        log_level=logging.getLevelName(log_level),
        environment="development" if is_dev else "production",
    )


def get_logger(name: str | None = None) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, usually the calling module's ``__name__``

    Returns:
        structlog.BoundLogger: Configured logger instance
    """
    return structlog.get_logger(name or "scrapbook")


def log_performance(operation: str, duration: float, **context: Any) -> None:
    """
    Log how long an operation took.

    Args:
        operation: Name of the operation
        duration: Duration in seconds
        **context: Additional context information
    """
    logger = get_logger("scrapbook.performance")
    logger.info("performance_metric", operation=operation, duration_seconds=duration, **context)


def log_user_action(action: str, **context: Any) -> None:
    """
    Log admin actions for the audit trail.

    There is a single shared admin identity, so no user id is recorded.

    Args:
        action: Action performed
        **context: Additional context information
    """
    logger = get_logger("scrapbook.user_actions")
    logger.info("user_action", action=action, **context)


def log_error(error: Exception, context: dict[str, Any] | None = None) -> None:
    """
    Log errors with structured context.

    Args:
        error: Exception that occurred
        context: Additional context information
    """
    logger = get_logger("scrapbook.errors")

    error_context = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if context:
        error_context.update(context)

    logger.error("error_occurred", **error_context, exc_info=error)


def log_security_event(event_type: str, **context: Any) -> None:
    """
    Log security-related events such as failed logins.

    Args:
        event_type: Type of security event
        **context: Additional context information
    """
    logger = get_logger("scrapbook.security")
    logger.warning("security_event", event_type=event_type, **context)
