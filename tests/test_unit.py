"""
Unit Tests - Test individual components in isolation.
"""

import pytest

from inipack.spec import isgraph, iseol, iscomment, TAG_SECTION, TAG_PAIR, TERMINATOR
from inipack.scanner import (
    LineKind, as_bytes, classify, count_pairs, iter_lines, scan,
)
from inipack.errors import (
    IniSyntaxError, BadSectionHeader, InvalidKey, MissingValue, PackingError,
)
from inipack.numeric import parse_int, parse_float


def _one(text: str):
    """Classify a single-line source."""
    source = as_bytes(text)
    return source, classify(source, 0, len(source), 1)


def _text(source: bytes, span) -> str:
    start, end = span
    return source[start:end].decode("utf-8")


# =============================================================================
# Byte classes
# =============================================================================

class TestByteClasses:

    def test_graphic_bytes(self):
        assert isgraph(ord("a"))
        assert isgraph(ord("~"))
        assert isgraph(0xC3)  # UTF-8 lead byte

    def test_non_graphic_bytes(self):
        for c in (0x00, 0x09, 0x0A, 0x0D, 0x20, 0x7F):
            assert not isgraph(c)

    def test_eol(self):
        assert iseol(ord("\n"))
        assert iseol(0)
        assert not iseol(ord("\r"))

    def test_line_splitter_matches_eol(self):
        from inipack.scanner import _EOL

        for c in range(256):
            assert bool(_EOL.match(bytes([c]))) == iseol(c)

    def test_package_format_version(self):
        import inipack
        from inipack.spec import FORMAT_VERSION

        assert inipack.__format_version__ is FORMAT_VERSION

    def test_comment_chars(self):
        assert iscomment(ord(";"))
        assert iscomment(ord("#"))
        assert not iscomment(ord("/"))

    def test_tags_are_distinct_and_non_graphic(self):
        assert len({TAG_SECTION, TAG_PAIR, TERMINATOR}) == 3
        assert not any(isgraph(t) for t in (TAG_SECTION, TAG_PAIR, TERMINATOR))


# =============================================================================
# Line splitting
# =============================================================================

class TestIterLines:

    def test_empty_source_is_one_line(self):
        assert list(iter_lines(b"")) == [(0, 0)]

    def test_trailing_newline_yields_empty_last_line(self):
        assert list(iter_lines(b"a\nb\n")) == [(0, 1), (2, 3), (4, 4)]

    def test_nul_ends_a_line(self):
        assert list(iter_lines(b"a=1\x00b=2")) == [(0, 3), (4, 7)]

    def test_carriage_return_is_not_a_line_end(self):
        assert list(iter_lines(b"a\r\nb")) == [(0, 2), (3, 4)]

    def test_as_bytes_encodes_text(self):
        assert as_bytes("größe") == "größe".encode("utf-8")
        assert as_bytes(bytearray(b"x")) == b"x"


# =============================================================================
# Classification
# =============================================================================

class TestClassify:

    def test_blank(self):
        _, line = _one("   \t\r")
        assert line.kind is LineKind.BLANK
        assert line.skipped

    def test_comment_semicolon(self):
        _, line = _one("; a comment = with equals")
        assert line.kind is LineKind.COMMENT

    def test_comment_hash_indented(self):
        _, line = _one("    # indented")
        assert line.kind is LineKind.COMMENT
        assert line.skipped

    def test_section(self):
        source, line = _one("[network]")
        assert line.kind is LineKind.SECTION
        assert _text(source, line.name) == "network"

    def test_section_name_is_not_trimmed(self):
        source, line = _one("  [ spaced ] trailing text")
        assert _text(source, line.name) == " spaced "

    def test_empty_section_name(self):
        source, line = _one("[]")
        assert line.kind is LineKind.SECTION
        assert _text(source, line.name) == ""

    def test_pair(self):
        source, line = _one("key=value")
        assert line.kind is LineKind.PAIR
        assert not line.skipped
        assert _text(source, line.key) == "key"
        assert _text(source, line.value) == "value"

    def test_pair_is_trimmed(self):
        source, line = _one("\t key \t=  value with  spaces \t\r")
        assert _text(source, line.key) == "key"
        assert _text(source, line.value) == "value with  spaces"

    def test_value_keeps_equals_and_comment_chars(self):
        source, line = _one("url = http://host/?a=b ; kept")
        assert _text(source, line.value) == "http://host/?a=b ; kept"

    def test_non_ascii_pair(self):
        source, line = _one("größe=10 cm")
        assert _text(source, line.key) == "größe"
        assert _text(source, line.value) == "10 cm"

    def test_line_number_is_kept(self):
        source = b"x=1"
        line = classify(source, 0, 3, 42)
        assert line.line_number == 42


class TestClassifyErrors:

    def test_unterminated_section(self):
        with pytest.raises(BadSectionHeader) as exc:
            _one("[section")
        assert exc.value.line == "[section"
        assert exc.value.line_number == 1

    def test_space_inside_key(self):
        with pytest.raises(InvalidKey):
            _one("ke y=val")

    def test_tab_inside_key(self):
        with pytest.raises(InvalidKey):
            _one("key\t\tx=1")

    def test_no_equals(self):
        with pytest.raises(InvalidKey):
            _one("just-a-word")

    def test_empty_key(self):
        with pytest.raises(InvalidKey):
            _one("=value")

    def test_empty_value(self):
        with pytest.raises(MissingValue):
            _one("key=")

    def test_whitespace_only_value(self):
        with pytest.raises(MissingValue):
            _one("key =  \t\r")

    def test_error_reports_line_number(self):
        with pytest.raises(InvalidKey) as exc:
            list(scan(b"a=1\n\nke y=2\n"))
        assert exc.value.line_number == 3
        assert exc.value.line == "ke y=2"

    def test_error_message(self):
        with pytest.raises(IniSyntaxError) as exc:
            _one("[section")
        assert str(exc.value) == "line 1: unterminated section header: '[section'"

    def test_errors_are_value_errors(self):
        for cls in (BadSectionHeader, InvalidKey, MissingValue):
            assert issubclass(cls, IniSyntaxError)
            assert issubclass(cls, ValueError)
        assert issubclass(PackingError, RuntimeError)

    def test_explicit_message_wins(self):
        err = InvalidKey("custom", line="x", line_number=9)
        assert str(err) == "custom"
        assert err.line_number == 9


# =============================================================================
# Scan / count
# =============================================================================

class TestScan:

    def test_kinds_in_order(self):
        kinds = [l.kind for l in scan(b"; c\n[a]\nx=1\n\n")]
        assert kinds == [
            LineKind.COMMENT, LineKind.SECTION, LineKind.PAIR, LineKind.BLANK, LineKind.BLANK,
        ]

    def test_line_numbers_are_one_based(self):
        numbers = [l.line_number for l in scan(b"a=1\nb=2")]
        assert numbers == [1, 2]

    def test_count_pairs(self):
        assert count_pairs(b"; c\n[a]\nx=1\n  # d\n\ny=2\n") == 2

    def test_count_pairs_does_not_validate(self):
        # Malformed lines still count as "not blank, comment or header"
        assert count_pairs(b"ke y=1\nnovalue\n") == 2

    def test_count_pairs_empty(self):
        assert count_pairs(b"") == 0


# =============================================================================
# Numeric conversion
# =============================================================================

class TestNumeric:

    def test_int_trailing_junk_ignored(self):
        assert parse_int("42abc") == 42

    def test_int_negative(self):
        assert parse_int("-17") == -17

    def test_int_empty(self):
        assert parse_int("") == 0

    def test_int_no_digits(self):
        assert parse_int("abc") == 0
        assert parse_int("-") == 0

    def test_int_stops_at_dot(self):
        assert parse_int("3.9") == 3

    def test_int_leading_space_is_not_skipped(self):
        assert parse_int(" 4") == 0

    def test_float_negative_fraction(self):
        assert parse_float("-3.5") == -3.5

    def test_float_integer_input(self):
        assert parse_float("12") == 12.0

    def test_float_trailing_dot(self):
        assert parse_float("2.") == 2.0

    def test_float_no_integer_part(self):
        assert parse_float("-.25") == -0.25

    def test_float_exponent_ignored(self):
        assert parse_float("1.5e3") == 1.5

    def test_float_empty_and_invalid(self):
        assert parse_float("") == 0.0
        assert parse_float("x") == 0.0
        assert parse_float(".") == 0.0

    def test_float_types(self):
        assert isinstance(parse_float("1"), float)
        assert isinstance(parse_int("1"), int)
