"""
Document context logger.

Provides logging interface for the document context with automatic [document] prefix.
All document modules should import from this module, not from loguru directly.
"""

from typing import List

from loguru import logger

CONTEXT_PREFIX = "[document]"


def _log_info(message: str) -> None:
    """Log info message with [document] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [document] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [document] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_document_replaced(source: str, changes: List[str], subscriber_count: int) -> None:
    """Log a published replacement and what it changed."""
    if changes:
        _log_info(f"Document replaced by {source}: {len(changes)} field(s) changed")
        for path in changes:
            _log_debug(f"  changed: {path}")
    else:
        _log_debug(f"Document republished by {source} (no changes)")
    _log_debug(f"  notified {subscriber_count} subscriber(s)")
