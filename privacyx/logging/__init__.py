"""
Logging Module
==============

Structured logging using structlog with JSON output for production
and colored console output for development.

Usage:
    from privacyx.logging import get_logger, setup_logging

    # Setup at application start (optional, the SDK never calls it itself)
    setup_logging()

    logger = get_logger(__name__)
    logger.info("root_read", pass_name="balance", root=root)
"""

from privacyx.logging.logger import (
    bind_context,
    clear_context,
    get_logger,
    redact_url,
    setup_logging,
)


__all__ = [
    "get_logger",
    "setup_logging",
    "bind_context",
    "clear_context",
    "redact_url",
]
