# vulture_whitelist.py
# Whitelist for vulture dead code detection.
# Items listed here are intentionally "unused" in src/ but used elsewhere
# (tests, the console script entry point, library callers).
#
# Format: reference the symbol so vulture sees it as "used".
# Run: uvx vulture src/ vulture_whitelist.py

# =============================================================================
# Console script entry point (declared in pyproject.toml)
# =============================================================================
from unicode_sanitize.cli import main

main  # unicode-sanitize console script

# =============================================================================
# Public library API (called by library users and tests, not by src/)
# =============================================================================
from unicode_sanitize.models import SanitizeError
from unicode_sanitize.numeric import parse_float64, parse_int32, parse_int64

parse_int32  # also reached through cli.PARSERS
parse_int64
parse_float64
SanitizeError.is_encoding_error  # used in tests and by callers
SanitizeError.is_numeric_error

# =============================================================================
# Wide event fields (serialized via asdict, never read as attributes)
# =============================================================================
from unicode_sanitize.observability import SanitizeRunEvent

SanitizeRunEvent.event_type
SanitizeRunEvent.wall_time_ms
SanitizeRunEvent.codepoints_checked
