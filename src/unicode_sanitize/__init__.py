"""
unicode-sanitize: strip unsafe codepoints from UTF-8 text.
"""

from unicode_sanitize.config import debug_options, default_options, options_from_env
from unicode_sanitize.models import (
    Err,
    Ok,
    Options,
    Result,
    SanitizeError,
    SanitizeFailure,
)
from unicode_sanitize.numeric import parse_float64, parse_int32, parse_int64
from unicode_sanitize.sanitizer import sanitize, sanitize_or_raise

__version__ = "0.1.0"

__all__ = [
    "Err",
    "Ok",
    "Options",
    "Result",
    "SanitizeError",
    "SanitizeFailure",
    "debug_options",
    "default_options",
    "options_from_env",
    "parse_float64",
    "parse_int32",
    "parse_int64",
    "sanitize",
    "sanitize_or_raise",
]
