"""
inipack Cursor - Lazy iteration over a packed buffer.

A cursor is a buffer offset plus the last decoded record. Records are
decoded on demand and never stored; advancing a cursor never mutates the
buffer, so any number of cursors may walk the same buffer.
"""

from __future__ import annotations

import functools
from typing import Iterator, NamedTuple

from inipack.spec import SOURCE_ENCODING, TAG_PAIR, TAG_SECTION, TERMINATOR


class Record(NamedTuple):
    """A decoded (section, key, value) triple. ``section`` is None before any header."""
    section: str | None
    key: str
    value: str


def _decode(raw: bytes) -> str:
    return raw.decode(SOURCE_ENCODING, errors="replace")


@functools.total_ordering
class Cursor:
    """
    Position in a packed buffer.

    Usage:
        it = Cursor(buffer)
        while not it.at_end:
            print(it.record)
            it.advance()
    """

    __slots__ = ("_buffer", "_pos", "_section", "_key_pos", "_record")

    def __init__(self, buffer: bytes, pos: int = 0) -> None:
        self._buffer = buffer
        self._pos = pos
        self._section: str | None = None
        self._key_pos: int | None = None
        self._record: Record | None = None
        self._decode_next()

    def _decode_next(self) -> None:
        buf = self._buffer

        # Enter new section(s) if necessary
        while buf[self._pos] == TAG_SECTION:
            start = self._pos + 1
            end = buf.index(TERMINATOR, start)
            self._section = _decode(buf[start:end])
            self._pos = end + 1

        tag = buf[self._pos]
        if tag == TERMINATOR:
            # Position stays on the final terminator
            self._key_pos = None
            self._record = None
            return
        if tag != TAG_PAIR:
            raise ValueError(f"Corrupt packed buffer: unknown tag {tag:#04x} at offset {self._pos}")

        key_start = self._pos + 1
        key_end = buf.index(TERMINATOR, key_start)
        value_end = buf.index(TERMINATOR, key_end + 1)
        self._key_pos = key_start
        self._record = Record(
            self._section,
            _decode(buf[key_start:key_end]),
            _decode(buf[key_end + 1:value_end]),
        )
        self._pos = value_end + 1

    def advance(self) -> Cursor:
        """Move to the next record. A terminal cursor stays terminal."""
        if self._record is not None:
            self._decode_next()
        return self

    def copy(self) -> Cursor:
        clone = Cursor.__new__(Cursor)
        clone._buffer = self._buffer
        clone._pos = self._pos
        clone._section = self._section
        clone._key_pos = self._key_pos
        clone._record = self._record
        return clone

    @property
    def record(self) -> Record | None:
        """The current record, or None once the cursor is exhausted."""
        return self._record

    @property
    def at_end(self) -> bool:
        return self._record is None

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def key_offset(self) -> int | None:
        return self._key_pos

    @property
    def section(self) -> str | None:
        return self._section

    def __iter__(self) -> Iterator[Record]:
        """Yield this and all following records. Does not move this cursor."""
        it = self.copy()
        while it._record is not None:
            yield it._record
            it._decode_next()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self._pos == other._pos and self._key_pos == other._key_pos

    def __lt__(self, other: Cursor) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        if self._pos != other._pos:
            return self._pos < other._pos
        # At the same offset a terminal cursor sorts after everything else
        if self._key_pos is None:
            return False
        if other._key_pos is None:
            return True
        return self._key_pos < other._key_pos

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "end" if self._record is None else repr(self._record)
        return f"Cursor(offset={self._pos}, {state})"


class SectionView:
    """Records in ``[begin, end)``: the first contiguous run of one section."""

    def __init__(self, name: str, begin: Cursor, end: Cursor) -> None:
        self.name = name
        self._begin = begin
        self._end = end

    @property
    def begin(self) -> Cursor:
        return self._begin.copy()

    @property
    def end(self) -> Cursor:
        return self._end.copy()

    def __iter__(self) -> Iterator[Record]:
        it = self._begin.copy()
        while it != self._end and not it.at_end:
            yield it.record
            it.advance()

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return self._begin != self._end

    def __repr__(self) -> str:
        return f"SectionView({self.name!r}, records={len(self)})"
