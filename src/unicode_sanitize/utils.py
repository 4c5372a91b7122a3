# src/unicode_sanitize/utils.py
"""Utility functions for unicode-sanitize.

Structured logging helpers shared by the configuration layer and the
command-line harness. The sanitizer itself never logs.
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

# =============================================================================
# Type Aliases
# =============================================================================

#: Logging kwargs - intentionally accepts any JSON-serializable values
LogKwargs = Any

# =============================================================================
# Constants
# =============================================================================

# Standardized error message truncation length
ERROR_MESSAGE_MAX_LENGTH = 200

LOGGER_NAME = "unicode_sanitize"

# =============================================================================
# Structured Logging
# =============================================================================

# Operational logs go to stderr so stdout stays free for sanitized output
_logger = logging.getLogger(LOGGER_NAME)
if not _logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("%(message)s"))
    _logger.addHandler(_handler)
    _logger.setLevel(logging.INFO)
    # Note: propagate defaults to True, needed for test caplog capture


def get_iso_timestamp() -> str:
    """Get current UTC time as ISO string with Z suffix (RFC3339)."""
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def log_op(event_type: str, **kwargs: LogKwargs) -> None:
    """Log an operational event as structured JSON."""
    event = {
        "event_type": event_type,
        "timestamp": get_iso_timestamp(),
        **kwargs,
    }
    _logger.info(json.dumps(event))


def truncate_error(error: str | Exception, max_length: int = ERROR_MESSAGE_MAX_LENGTH) -> str:
    """Truncate error message with indicator if needed."""
    error_str = str(error)
    if len(error_str) <= max_length:
        return error_str
    return error_str[: max_length - 3] + "..."


def log_error(event_type: str, exception: Exception, **kwargs: LogKwargs) -> None:
    """Log an error event with standardized exception formatting.

    Uses logger.error() level for error events, making them easily
    distinguishable from info-level operational logs.
    """
    event = {
        "event_type": event_type,
        "timestamp": get_iso_timestamp(),
        "error_type": type(exception).__name__,
        "error": truncate_error(exception),
        **kwargs,
    }
    _logger.error(json.dumps(event))


def describe_codepoint(cp: int) -> str:
    """Format a codepoint as U+XXXX, padding to at least four hex digits."""
    return f"U+{cp:04X}"
