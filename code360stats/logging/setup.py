"""Structlog configuration for code360stats."""

import logging
import sys

import structlog

from code360stats.config import ScraperConfig, LogFormat

_configured = False


def configure_logging(config: ScraperConfig | None = None, force: bool = False) -> None:
    """
    Configure structlog processors and output format once per process.

    Both the API lifespan and the CLI call this; later calls are no-ops
    unless ``force`` is set.

    Args:
        config: ScraperConfig instance, uses defaults if None
        force: Reconfigure even if logging was already set up
    """
    global _configured
    if _configured and not force:
        return

    if config is None:
        config = ScraperConfig()

    log_level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if config.log_format == LogFormat.JSON:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])
    else:
        processors.extend([
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    _configured = True


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """
    Get a structlog logger bound to a component name.

    Args:
        name: Optional component name for context

    Returns:
        Lazy structlog logger, resolved against the current configuration
        on every call
    """
    if name:
        return structlog.get_logger(component=name)
    return structlog.get_logger()
