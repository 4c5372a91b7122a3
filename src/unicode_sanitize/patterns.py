# src/unicode_sanitize/patterns.py
"""Fixed byte-range tables and the compiled matchers built from them.

Evil codepoints are removed unconditionally. They are matched on the raw
UTF-8 bytes, so encoded surrogates and beyond-range sequences can be
recognized even though they never decode to a valid codepoint:

  U+0000..U+0008      [\\x00-\\x08]
  U+000E..U+001F      [\\x0E-\\x1F]
  U+007F              \\x7F
  U+0080..U+0084      \\xC2[\\x80-\\x84]
  U+0086..U+009F      \\xC2[\\x86-\\x9F]
  U+FEFF              \\xEF\\xBB\\xBF
  U+206A..U+206F      \\xE2\\x81[\\xAA-\\xAF]
  U+FFF9..U+FFFA      \\xEF\\xBF[\\xB9-\\xBA]
  U+E0000..U+E007F    \\xF3\\xA0[\\x80-\\x81][\\x80-\\xBF]
  U+D800..U+DFFF      \\xED[\\xA0-\\xBF][\\x80-\\xBF]
  U+110000..U+13FFFF  \\xF4[\\x90-\\xBF][\\x80-\\xBF][\\x80-\\xBF]

Tab, LF, VT, FF, CR and NEL (U+0085) are deliberately absent: the
line-ending lookup owns them.

Invalid sequences are the noncharacters (U+FDD0..U+FDEF and the last two
codepoints of every plane). Reserved codepoints are everything in general
categories Cc, Cs, Co and Cn, again minus the line-ending controls.
"""

import re
import sys
import threading
import unicodedata
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ByteRange:
    """One contiguous codepoint range and the byte pattern that matches it."""

    name: str
    first: int
    last: int
    pattern: bytes

    def codepoints(self) -> range:
        return range(self.first, self.last + 1)


# =============================================================================
# Evil Codepoints
# =============================================================================

EVIL_RANGES: tuple[ByteRange, ...] = (
    ByteRange("c0_controls_low", 0x0000, 0x0008, rb"[\x00-\x08]"),
    ByteRange("c0_controls_high", 0x000E, 0x001F, rb"[\x0E-\x1F]"),
    ByteRange("delete", 0x007F, 0x007F, rb"\x7F"),
    ByteRange("c1_controls_low", 0x0080, 0x0084, rb"\xC2[\x80-\x84]"),
    ByteRange("c1_controls_high", 0x0086, 0x009F, rb"\xC2[\x86-\x9F]"),
    ByteRange("byte_order_mark", 0xFEFF, 0xFEFF, rb"\xEF\xBB\xBF"),
    ByteRange("deprecated_format", 0x206A, 0x206F, rb"\xE2\x81[\xAA-\xAF]"),
    ByteRange("interlinear_annotation", 0xFFF9, 0xFFFA, rb"\xEF\xBF[\xB9-\xBA]"),
    ByteRange("tags", 0xE0000, 0xE007F, rb"\xF3\xA0[\x80-\x81][\x80-\xBF]"),
    ByteRange("surrogates", 0xD800, 0xDFFF, rb"\xED[\xA0-\xBF][\x80-\xBF]"),
    ByteRange(
        "beyond_unicode", 0x110000, 0x13FFFF, rb"\xF4[\x90-\xBF][\x80-\xBF][\x80-\xBF]"
    ),
)

EVIL_RE = re.compile(b"|".join(r.pattern for r in EVIL_RANGES))

# =============================================================================
# Invalid Sequences (noncharacters)
# =============================================================================

INVALID_RE = re.compile(
    rb"(?:\xF4\x8F|\xEF|\xF0\x9F|\xF0\xAF|\xF0\xBF|[\xF1-\xF3][\x8F\x9F\xAF\xBF])\xBF[\xBE\xBF]"
    rb"|\xEF\xB7[\x90-\xAF]"
)

# =============================================================================
# Line-Ending Lookup
# =============================================================================

# Kinds resolved against Options at call time
LINEFEED = "linefeed"
FORMFEED = "formfeed"
TAB = "tab"
UNKNOWN = "unknown"

LINE_ENDING_KINDS: dict[str, str] = {
    "\u2028": LINEFEED,  # LINE SEPARATOR
    "\u2029": FORMFEED,  # PARAGRAPH SEPARATOR
    "\x85": LINEFEED,  # NEL
    "\t": TAB,
    "\x0b": FORMFEED,
    "\x0c": FORMFEED,
    "\r\n": LINEFEED,
    "\r": LINEFEED,
    "\n": LINEFEED,
    "\ufffc": UNKNOWN,  # OBJECT REPLACEMENT CHARACTER
    "\ufffd": UNKNOWN,  # REPLACEMENT CHARACTER
}

# Longest key first so CRLF is consumed as one unit
LINE_ENDING_RE = re.compile(
    "|".join(re.escape(key) for key in sorted(LINE_ENDING_KINDS, key=len, reverse=True))
)

# =============================================================================
# Reserved Codepoints
# =============================================================================

RESERVED_CATEGORIES = frozenset({"Cc", "Cs", "Co", "Cn"})
_LINE_ENDING_CONTROLS = frozenset("\t\n\x0b\x0c\r\x85")

_reserved_lock = threading.Lock()
_reserved_re: re.Pattern[str] | None = None


def is_reserved(char: str) -> bool:
    """Check whether a single character belongs to the reserved set."""
    if char in _LINE_ENDING_CONTROLS:
        return False
    return unicodedata.category(char) in RESERVED_CATEGORIES


def reserved_ranges() -> list[tuple[int, int]]:
    """Collapse the reserved set into sorted inclusive (first, last) ranges."""
    ranges: list[tuple[int, int]] = []
    start: int | None = None
    for cp in range(sys.maxunicode + 1):
        if is_reserved(chr(cp)):
            if start is None:
                start = cp
        elif start is not None:
            ranges.append((start, cp - 1))
            start = None
    if start is not None:
        ranges.append((start, sys.maxunicode))
    return ranges


def _char_class(ranges: list[tuple[int, int]]) -> str:
    parts = []
    for first, last in ranges:
        if first == last:
            parts.append(f"\\U{first:08x}")
        else:
            parts.append(f"\\U{first:08x}-\\U{last:08x}")
    return "[" + "".join(parts) + "]"


def reserved_pattern() -> re.Pattern[str]:
    """Return the reserved-codepoint matcher, building it on first use.

    Building it walks the whole codepoint space, so it is deferred until a
    caller asks for strip_reserved and then shared by every later call.
    """
    global _reserved_re
    if _reserved_re is not None:
        return _reserved_re
    with _reserved_lock:
        if _reserved_re is None:
            _reserved_re = re.compile(_char_class(reserved_ranges()))
        return _reserved_re


# =============================================================================
# Helpers
# =============================================================================


def encode_codepoint(cp: int) -> bytes:
    """Encode a codepoint with the generalized UTF-8 bit layout.

    Unlike str.encode(), this also produces the byte forms of surrogates and
    of values above U+10FFFF, which is what the evil table is written against.
    """
    if cp < 0 or cp > 0x1FFFFF:
        raise ValueError(f"codepoint out of encodable range: {cp:#x}")
    if cp < 0x80:
        return bytes([cp])
    if cp < 0x800:
        return bytes([0xC0 | (cp >> 6), 0x80 | (cp & 0x3F)])
    if cp < 0x10000:
        return bytes([0xE0 | (cp >> 12), 0x80 | ((cp >> 6) & 0x3F), 0x80 | (cp & 0x3F)])
    return bytes(
        [
            0xF0 | (cp >> 18),
            0x80 | ((cp >> 12) & 0x3F),
            0x80 | ((cp >> 6) & 0x3F),
            0x80 | (cp & 0x3F),
        ]
    )
