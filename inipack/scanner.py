"""
inipack Scanner - Line splitting and grammar classification.

This is the single implementation of the source grammar. The sizing pass
and the packing pass both walk ``scan()``, so they always see the same
lines classified the same way.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Iterator

from inipack.errors import BadSectionHeader, InvalidKey, MissingValue
from inipack.spec import (
    ASSIGN, NEWLINE, SECTION_CLOSE, SECTION_OPEN, SOURCE_ENCODING, TERMINATOR,
    isgraph, iscomment,
)

# Same bytes as spec.iseol
_EOL = re.compile(b"[" + bytes([NEWLINE, TERMINATOR]) + b"]")

Span = tuple[int, int]


class LineKind(enum.Enum):
    BLANK = "blank"
    COMMENT = "comment"
    SECTION = "section"
    PAIR = "pair"


@dataclass(frozen=True)
class ScannedLine:
    """One classified source line. Spans are (start, end) source offsets."""
    kind: LineKind
    line_number: int
    name: Span | None = None
    key: Span | None = None
    value: Span | None = None

    @property
    def skipped(self) -> bool:
        return self.kind in (LineKind.BLANK, LineKind.COMMENT)


def as_bytes(source: str | bytes | bytearray | memoryview) -> bytes:
    """Normalise source text to bytes. Text is UTF-8 encoded."""
    if isinstance(source, str):
        return source.encode(SOURCE_ENCODING)
    return bytes(source)


def iter_lines(source: bytes) -> Iterator[Span]:
    """Yield (start, end) for every line, excluding the line ending."""
    start = 0
    for m in _EOL.finditer(source):
        yield start, m.start()
        start = m.end()
    yield start, len(source)


def _skip_space(source: bytes, p: int, end: int) -> int:
    while p < end and not isgraph(source[p]):
        p += 1
    return p


def _line_text(source: bytes, start: int, end: int) -> str:
    return source[start:end].decode(SOURCE_ENCODING, errors="replace").rstrip("\r")


def classify(source: bytes, start: int, end: int, line_number: int) -> ScannedLine:
    """Classify the line ``source[start:end]``.

    Raises:
        BadSectionHeader: '[' without a closing ']' on the line.
        InvalidKey: whitespace inside the key, an empty key, or no '='.
        MissingValue: nothing graphic after '='.
    """
    p = _skip_space(source, start, end)
    if p == end:
        return ScannedLine(LineKind.BLANK, line_number)

    c = source[p]
    if iscomment(c):
        return ScannedLine(LineKind.COMMENT, line_number)

    if c == SECTION_OPEN:
        close = source.find(SECTION_CLOSE, p + 1, end)
        if close < 0:
            raise BadSectionHeader(
                line=_line_text(source, start, end), line_number=line_number
            )
        # Anything after ']' is ignored
        return ScannedLine(LineKind.SECTION, line_number, name=(p + 1, close))

    # Key: leading run of graphic bytes, then only whitespace until '='
    key_end = p
    keyend = False
    q = p
    while q < end:
        c = source[q]
        if c == ASSIGN:
            break
        if not keyend:
            if isgraph(c):
                key_end = q + 1
            else:
                keyend = True
        elif isgraph(c):
            raise InvalidKey(
                line=_line_text(source, start, end), line_number=line_number
            )
        q += 1

    if q == end or key_end == p:
        raise InvalidKey(line=_line_text(source, start, end), line_number=line_number)

    # Value: first graphic byte after '=' through the last graphic byte
    v = _skip_space(source, q + 1, end)
    if v == end:
        raise MissingValue(line=_line_text(source, start, end), line_number=line_number)
    v_end = end
    while not isgraph(source[v_end - 1]):
        v_end -= 1

    return ScannedLine(LineKind.PAIR, line_number, key=(p, key_end), value=(v, v_end))


def scan(source: bytes) -> Iterator[ScannedLine]:
    """Classify every line of ``source`` in order."""
    for line_number, (start, end) in enumerate(iter_lines(source), start=1):
        yield classify(source, start, end, line_number)


def count_pairs(source: bytes) -> int:
    """Count lines that are not blank, not comments and not section headers.

    Does no validation. On valid input this equals the number of pairs.
    """
    count = 0
    for start, end in iter_lines(source):
        p = _skip_space(source, start, end)
        if p == end or iscomment(source[p]) or source[p] == SECTION_OPEN:
            continue
        count += 1
    return count
