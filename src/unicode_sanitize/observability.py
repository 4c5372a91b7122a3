# src/unicode_sanitize/observability.py
"""
Wide event logging for harness runs.

One comprehensive event per command invocation, written as a single JSON
line to stderr. The library functions never emit events; only the
command-line harness does.

Usage:
    event = SanitizeRunEvent(command="scrub")
    with Timer() as timer:
        ...  # populate event fields during the run
    event.wall_time_ms = timer.elapsed_ms
    emit_event(event)
"""

import json
import logging
import secrets
import time
from dataclasses import asdict, dataclass, field
from typing import Any

from unicode_sanitize.utils import LOGGER_NAME, get_iso_timestamp

_logger = logging.getLogger(f"{LOGGER_NAME}.observability")


def generate_request_id() -> str:
    """Generate a unique run ID for correlating log lines."""
    return secrets.token_hex(8)


@dataclass
class SanitizeRunEvent:
    """
    Canonical log line for one harness invocation.

    Contains the options in force, the size of what went in and came out,
    and how the run ended.
    """

    event_type: str = field(default="sanitize_run", init=False)
    request_id: str = ""
    timestamp: str = ""
    command: str = ""

    # Options
    strip_reserved: bool = False
    allow_newlines: bool = False
    debug: bool = False

    # Sizes
    input_size_bytes: int = 0
    output_size_bytes: int = 0

    # Audit results
    codepoints_checked: int = 0
    codepoints_leaked: int = 0
    codepoints_rejected: int = 0

    # Timing
    wall_time_ms: float = 0

    # Outcome
    outcome: str = "success"  # "success" | "error"
    error_type: str | None = None

    def __post_init__(self) -> None:
        if not self.timestamp:
            self.timestamp = get_iso_timestamp()
        if not self.request_id:
            self.request_id = generate_request_id()

    def fail(self, error_type: str) -> None:
        """Mark the run as failed."""
        self.outcome = "error"
        self.error_type = error_type


def emit_event(event: SanitizeRunEvent | dict[str, Any]) -> dict[str, Any]:
    """
    Emit an event as one JSON log line.

    Args:
        event: The event to emit (dataclass or dict)

    Returns:
        The dict that was logged.
    """
    event_dict = event if isinstance(event, dict) else asdict(event)
    _logger.info(json.dumps(event_dict))
    return event_dict


class Timer:
    """Context manager for timing operations."""

    def __init__(self) -> None:
        self.start_time: float = 0
        self.elapsed_ms: float = 0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        self.elapsed_ms = (time.perf_counter() - self.start_time) * 1000

