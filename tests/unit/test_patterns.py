# tests/unit/test_patterns.py
"""Tests for the fixed byte-range tables and compiled matchers."""

import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from unicode_sanitize import patterns
from unicode_sanitize.patterns import (
    EVIL_RANGES,
    EVIL_RE,
    INVALID_RE,
    LINE_ENDING_KINDS,
    LINE_ENDING_RE,
    encode_codepoint,
    is_reserved,
    reserved_pattern,
)


def _in_evil_table(cp: int) -> bool:
    return any(r.first <= cp <= r.last for r in EVIL_RANGES)


class TestEvilTable:
    """Tests for EVIL_RANGES and EVIL_RE."""

    def test_ranges_are_disjoint(self):
        ordered = sorted(EVIL_RANGES, key=lambda r: r.first)
        for lower, upper in zip(ordered, ordered[1:]):
            assert lower.last < upper.first, f"{lower.name} overlaps {upper.name}"

    def test_ranges_are_well_formed(self):
        for byte_range in EVIL_RANGES:
            assert byte_range.first <= byte_range.last

    def test_names_are_unique(self):
        names = [r.name for r in EVIL_RANGES]
        assert len(names) == len(set(names))

    @pytest.mark.parametrize("byte_range", EVIL_RANGES, ids=lambda r: r.name)
    def test_every_codepoint_matches_own_pattern(self, byte_range):
        own = re.compile(byte_range.pattern)
        for cp in byte_range.codepoints():
            assert own.fullmatch(encode_codepoint(cp)), hex(cp)

    @pytest.mark.parametrize("byte_range", EVIL_RANGES, ids=lambda r: r.name)
    def test_combined_pattern_matches_whole_range(self, byte_range):
        for cp in byte_range.codepoints():
            assert EVIL_RE.fullmatch(encode_codepoint(cp)), hex(cp)

    @pytest.mark.parametrize("byte_range", EVIL_RANGES, ids=lambda r: r.name)
    def test_neighbours_outside_table_do_not_match(self, byte_range):
        for cp in (byte_range.first - 1, byte_range.last + 1):
            if cp < 0 or _in_evil_table(cp):
                continue
            assert EVIL_RE.fullmatch(encode_codepoint(cp)) is None, hex(cp)

    @pytest.mark.parametrize("cp", [0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x20, 0x85])
    def test_line_ending_controls_are_not_evil(self, cp):
        assert EVIL_RE.search(chr(cp).encode("utf-8")) is None

    def test_tags_and_annotations_match(self):
        """These ranges need byte-level matching of multi-byte sequences."""
        assert EVIL_RE.fullmatch("\U000e0020".encode())
        assert EVIL_RE.fullmatch("\ufff9".encode())
        assert EVIL_RE.fullmatch("\ufffa".encode())


class TestInvalidPattern:
    """Tests for INVALID_RE (noncharacters)."""

    @pytest.mark.parametrize("plane", range(17))
    def test_plane_end_noncharacters(self, plane):
        for offset in (0xFFFE, 0xFFFF):
            assert INVALID_RE.fullmatch(chr(plane * 0x10000 + offset).encode())

    def test_arabic_presentation_noncharacters(self):
        for cp in range(0xFDD0, 0xFDF0):
            assert INVALID_RE.fullmatch(chr(cp).encode()), hex(cp)

    @pytest.mark.parametrize("cp", [0xFDCF, 0xFDF0, 0xFFFD, 0x1FFFD, 0x10FFFD])
    def test_neighbours_do_not_match(self, cp):
        assert INVALID_RE.search(chr(cp).encode()) is None


class TestLineEndingPattern:
    """Tests for LINE_ENDING_RE."""

    def test_crlf_is_one_match(self):
        matches = [m.group(0) for m in LINE_ENDING_RE.finditer("a\r\nb\r")]
        assert matches == ["\r\n", "\r"]

    def test_matches_every_key(self):
        for key in LINE_ENDING_KINDS:
            assert LINE_ENDING_RE.fullmatch(key), repr(key)

    def test_ignores_plain_text(self):
        assert LINE_ENDING_RE.search("plain text, no breaks") is None


class TestReservedMatcher:
    """Tests for is_reserved() and reserved_pattern()."""

    @pytest.mark.parametrize(
        "char",
        ["\x00", "\x1f", "\x7f", "\x9f", "\ud800", "\ue000", "\U00100000", "\u0378"],
    )
    def test_reserved(self, char):
        assert is_reserved(char)

    @pytest.mark.parametrize(
        "char",
        ["a", " ", "\t", "\n", "\x0b", "\x0c", "\r", "\x85", "\u200d", "\ufeff", "\ufffd"],
    )
    def test_not_reserved(self, char):
        assert not is_reserved(char)

    def test_pattern_agrees_with_predicate(self):
        pattern = reserved_pattern()
        for char in ["\x00", "\x7f", "\ue000", "\u0378", "\uffff", "\ud800"]:
            assert pattern.fullmatch(char), repr(char)
        for char in ["a", "\t", "\n", "\r", "\x85", "\u200d", "\u2318"]:
            assert pattern.fullmatch(char) is None, repr(char)

    def test_pattern_is_built_once(self):
        assert reserved_pattern() is reserved_pattern()

    def test_concurrent_callers_share_one_pattern(self):
        with ThreadPoolExecutor(max_workers=8) as pool:
            built = list(pool.map(lambda _: reserved_pattern(), range(16)))
        assert all(p is built[0] for p in built)

    def test_built_pattern_is_read_without_locking(self, monkeypatch):
        built = reserved_pattern()

        class _RefusingLock:
            def __enter__(self):
                raise AssertionError("lock taken after the pattern was built")

            def __exit__(self, *args):
                return False

        monkeypatch.setattr(patterns, "_reserved_lock", _RefusingLock())
        assert reserved_pattern() is built


class TestEncodeCodepoint:
    """Tests for encode_codepoint()."""

    @pytest.mark.parametrize("cp", [0x41, 0x7F, 0x80, 0xE9, 0x7FF, 0x800, 0x20AC, 0xFFFF])
    def test_matches_codec_for_bmp(self, cp):
        assert encode_codepoint(cp) == chr(cp).encode("utf-8")

    @pytest.mark.parametrize("cp", [0x10000, 0x1F600, 0xE0001, 0x10FFFF])
    def test_matches_codec_for_supplementary(self, cp):
        assert encode_codepoint(cp) == chr(cp).encode("utf-8")

    def test_encodes_surrogates(self):
        assert encode_codepoint(0xD800) == b"\xed\xa0\x80"
        assert encode_codepoint(0xDFFF) == b"\xed\xbf\xbf"

    def test_encodes_beyond_unicode(self):
        assert encode_codepoint(0x110000) == b"\xf4\x90\x80\x80"
        assert encode_codepoint(0x13FFFF) == b"\xf4\xbf\xbf\xbf"

    @pytest.mark.parametrize("cp", [-1, 0x200000])
    def test_rejects_unencodable(self, cp):
        with pytest.raises(ValueError):
            encode_codepoint(cp)
