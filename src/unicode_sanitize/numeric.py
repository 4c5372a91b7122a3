# src/unicode_sanitize/numeric.py
"""Decimal string to number coercion.

Independent of the sanitizer pipeline: the input is parsed as-is. Only
plain base-10 literals are accepted; int() and float() on their own would
also take whitespace, underscores and non-ASCII digits.
"""

import math
import re

from unicode_sanitize.models import Err, Ok, Result, SanitizeError

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:inf(?:inity)?|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)

# Longest magnitude (in digits) any int64 can have; int() refuses very long
# strings, so anything longer is rejected before conversion
_INT64_MAX_DIGITS = 19


def _parse_int(text: str, bits: int) -> Result[int, SanitizeError]:
    if not isinstance(text, str) or not _INT_RE.fullmatch(text):
        return Err(SanitizeError.NOT_A_NUMBER)
    sign = "-" if text.startswith("-") else ""
    digits = text.lstrip("+-").lstrip("0") or "0"
    if len(digits) > _INT64_MAX_DIGITS:
        return Err(SanitizeError.OUT_OF_RANGE)

    value = int(sign + digits)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        return Err(SanitizeError.OUT_OF_RANGE)
    return Ok(value)


def parse_int32(text: str) -> Result[int, SanitizeError]:
    """Parse a base-10 string into a signed 32-bit integer."""
    return _parse_int(text, 32)


def parse_int64(text: str) -> Result[int, SanitizeError]:
    """Parse a base-10 string into a signed 64-bit integer."""
    return _parse_int(text, 64)


def parse_float64(text: str) -> Result[float, SanitizeError]:
    """Parse a decimal string into a double.

    Accepts an optional sign, digits with an optional fraction and exponent,
    and the special values inf, infinity and nan in any case. A finite
    literal too large for a double is OUT_OF_RANGE rather than infinity.
    """
    if not isinstance(text, str) or not _FLOAT_RE.fullmatch(text):
        return Err(SanitizeError.NOT_A_NUMBER)

    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        return Err(SanitizeError.OUT_OF_RANGE)
    return Ok(value)
