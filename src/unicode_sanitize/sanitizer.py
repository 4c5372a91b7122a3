# src/unicode_sanitize/sanitizer.py
"""UTF-8 text hygiene filter.

sanitize() runs a fixed pipeline over the raw bytes of its input:

1. Reject anything that is not well-formed UTF-8 (encoded surrogates are
   let through so that step 2 can remove them).
2. Replace evil codepoints (see patterns.EVIL_RANGES).
3. Replace reserved codepoints when Options.strip_reserved is set,
   otherwise only the invalid noncharacter sequences.
4. Normalize line endings, tabs and replacement characters.

Usage:
    result = sanitize(raw_bytes)
    if isinstance(result, Ok):
        store(result.value)
    else:
        reject(result.error)
"""

from unicode_sanitize.config import default_options
from unicode_sanitize.models import Err, Ok, Options, Result, SanitizeError, SanitizeFailure
from unicode_sanitize.patterns import (
    EVIL_RE,
    FORMFEED,
    INVALID_RE,
    LINE_ENDING_KINDS,
    LINE_ENDING_RE,
    LINEFEED,
    TAB,
    UNKNOWN,
    reserved_pattern,
)

SanitizeInput = bytes | bytearray | memoryview | str


def _to_bytes(data: SanitizeInput) -> bytes:
    if isinstance(data, str):
        # surrogatepass keeps lone surrogates visible to the evil table
        return data.encode("utf-8", "surrogatepass")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"sanitize() expects bytes or str, got {type(data).__name__}")


def is_well_formed(data: bytes) -> bool:
    """Check that data is UTF-8, tolerating encoded surrogates.

    Lone continuation bytes, truncated sequences, overlong forms and values
    above U+10FFFF all fail.
    """
    try:
        data.decode("utf-8", "surrogatepass")
    except UnicodeDecodeError:
        return False
    return True


def line_ending_lookup(options: Options) -> dict[str, str]:
    """Resolve every line-ending key to its replacement under options."""
    by_kind = {
        LINEFEED: options.linefeed(),
        FORMFEED: options.formfeed(),
        TAB: options.replacement_tab,
        UNKNOWN: options.replacement_unknown,
    }
    return {key: by_kind[kind] for key, kind in LINE_ENDING_KINDS.items()}


def normalize_line_endings(text: str, options: Options) -> str:
    """Replace line breaks, tabs and U+FFFC/U+FFFD according to options."""
    lookup = line_ending_lookup(options)
    return LINE_ENDING_RE.sub(lambda m: lookup[m.group(0)], text)


def sanitize(data: SanitizeInput, options: Options | None = None) -> Result[str, SanitizeError]:
    """Sanitize text that claims to be UTF-8.

    Args:
        data: Raw bytes, or a str (encoded with surrogatepass)
        options: Sanitizer options, default_options() if omitted

    Returns:
        Ok(text) with the sanitized string, or Err(SanitizeError.INVALID_ENCODING)
        if data is not well-formed. No partial output is ever returned.
    """
    options = options or default_options()
    raw = _to_bytes(data)

    if not is_well_formed(raw):
        return Err(SanitizeError.INVALID_ENCODING)

    # Replacements are inserted literally, never as regex templates
    default_bytes = options.replacement_default.encode("utf-8")
    raw = EVIL_RE.sub(lambda _m: default_bytes, raw)
    if not options.strip_reserved:
        raw = INVALID_RE.sub(lambda _m: default_bytes, raw)

    # Every encoded surrogate is gone, so a strict decode cannot fail here
    text = raw.decode("utf-8")
    if options.strip_reserved:
        text = reserved_pattern().sub(lambda _m: options.replacement_default, text)

    return Ok(normalize_line_endings(text, options))


def sanitize_or_raise(data: SanitizeInput, options: Options | None = None) -> str:
    """Like sanitize(), but return the text directly or raise SanitizeFailure."""
    result = sanitize(data, options)
    if isinstance(result, Err):
        raise SanitizeFailure(result.error)
    return result.value
