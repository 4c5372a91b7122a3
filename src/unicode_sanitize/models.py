# src/unicode_sanitize/models.py
"""Type definitions for unicode-sanitize."""

from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")

# =============================================================================
# Result Type for Error Handling
# =============================================================================


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success case of Result."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error case of Result."""

    error: E


# Result is either Ok or Err
Result = Ok[T] | Err[E]


class SanitizeError(Enum):
    """Possible failures of the sanitizer and the numeric helpers."""

    INVALID_ENCODING = auto()
    NOT_A_NUMBER = auto()
    OUT_OF_RANGE = auto()

    def is_encoding_error(self) -> bool:
        return self is SanitizeError.INVALID_ENCODING

    def is_numeric_error(self) -> bool:
        return self in (SanitizeError.NOT_A_NUMBER, SanitizeError.OUT_OF_RANGE)


class SanitizeFailure(ValueError):
    """Raised by sanitize_or_raise() when sanitization returns an Err."""

    def __init__(self, error: SanitizeError):
        super().__init__(error.name)
        self.error = error


# =============================================================================
# Sanitizer Options
# =============================================================================


@dataclass(frozen=True, slots=True)
class Options:
    """Sanitizer configuration. Immutable.

    Attributes:
        strip_reserved: Strip every reserved codepoint (control, surrogate,
            private use, unassigned) instead of only the invalid sequences.
        allow_newlines: Normalize line breaks to "\\n" / "\\n\\n" instead of
            collapsing them into the linefeed/formfeed replacements.
        replacement_default: Inserted for evil, reserved and invalid spans.
        replacement_tab: Inserted for a horizontal tab.
        replacement_linefeed: Inserted for single line breaks when
            newlines are not allowed.
        replacement_formfeed: Inserted for page/paragraph breaks when
            newlines are not allowed.
        replacement_unknown: Inserted for U+FFFC and U+FFFD.
    """

    strip_reserved: bool = False
    allow_newlines: bool = False
    replacement_default: str = ""
    replacement_tab: str = " "
    replacement_linefeed: str = " "
    replacement_formfeed: str = " "
    replacement_unknown: str = "?"

    def __post_init__(self) -> None:
        for f in fields(self):
            if not f.name.startswith("replacement_"):
                continue
            value = getattr(self, f.name)
            if not isinstance(value, str):
                raise TypeError(f"{f.name} must be a str, got {type(value).__name__}")
            try:
                value.encode("utf-8")
            except UnicodeEncodeError as e:
                raise ValueError(f"{f.name} is not encodable as UTF-8") from e

    def linefeed(self) -> str:
        """Replacement for a single line break under the newline policy."""
        return "\n" if self.allow_newlines else self.replacement_linefeed

    def formfeed(self) -> str:
        """Replacement for a page or paragraph break under the newline policy."""
        return "\n\n" if self.allow_newlines else self.replacement_formfeed
