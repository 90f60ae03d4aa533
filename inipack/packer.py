"""
inipack Packer - Builds the packed buffer from INI source.

Two-pass strategy, no reallocation:
  1. Measure: scan every line, validate, and compute the exact byte count
  2. Allocate one buffer of that size (+1 for the final terminator)
  3. Pack: scan every line again and fill the buffer
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from inipack.errors import PackingError
from inipack.scanner import LineKind, as_bytes, count_pairs, scan
from inipack.spec import TAG_PAIR, TAG_SECTION, TERMINATOR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Layout:
    """Result of the sizing pass."""
    size: int       # bytes for all entries, excluding the final terminator
    pairs: int
    sections: int

    @property
    def capacity(self) -> int:
        return self.size + 1


class IniPacker:

    @staticmethod
    def measure(source: str | bytes) -> Layout:
        """Validate ``source`` and compute the packed size.

        Raises an ``IniSyntaxError`` subclass on the first malformed line.
        """
        source = as_bytes(source)
        size = 0
        pairs = 0
        sections = 0

        for line in scan(source):
            if line.kind is LineKind.SECTION:
                start, end = line.name
                size += (end - start) + 2  # tag + terminator
                sections += 1
            elif line.kind is LineKind.PAIR:
                k_start, k_end = line.key
                v_start, v_end = line.value
                size += (k_end - k_start) + (v_end - v_start) + 3  # tag + 2 terminators
                pairs += 1

        # The independent line count must agree with what the scanner accepted
        counted = count_pairs(source)
        if counted != pairs:
            raise PackingError(f"pair count mismatch: scanned {pairs}, counted {counted}")

        logger.debug("measured %d pairs in %d sections (%d bytes)", pairs, sections, size)
        return Layout(size=size, pairs=pairs, sections=sections)

    @staticmethod
    def pack(source: str | bytes, layout: Layout) -> bytes:
        """Fill a buffer of exactly ``layout.capacity`` bytes.

        ``layout`` must come from ``measure()`` on the same source.
        """
        source = as_bytes(source)
        buf = bytearray(layout.capacity)
        out = memoryview(buf)
        pos = 0

        def put(data: bytes) -> None:
            nonlocal pos
            n = len(data)
            if pos + n > layout.size:
                raise PackingError(
                    f"packing overran measured size {layout.size} at offset {pos}"
                )
            out[pos:pos + n] = data
            pos += n

        for line in scan(source):
            if line.kind is LineKind.SECTION:
                start, end = line.name
                put(bytes((TAG_SECTION,)) + source[start:end] + bytes((TERMINATOR,)))
            elif line.kind is LineKind.PAIR:
                k_start, k_end = line.key
                v_start, v_end = line.value
                put(
                    bytes((TAG_PAIR,)) + source[k_start:k_end] + bytes((TERMINATOR,))
                    + source[v_start:v_end] + bytes((TERMINATOR,))
                )

        if pos != layout.size:
            raise PackingError(f"packed {pos} bytes, measured {layout.size}")
        out.release()
        # bytearray is zero-filled, so buf[-1] is already the final terminator
        logger.debug("packed %d bytes", layout.capacity)
        return bytes(buf)

    @staticmethod
    def build(source: str | bytes) -> tuple[bytes, Layout]:
        """Measure and pack ``source``. Returns (buffer, layout)."""
        source = as_bytes(source)
        layout = IniPacker.measure(source)
        return IniPacker.pack(source, layout), layout
