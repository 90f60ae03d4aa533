"""
inipack Config - Immutable, queryable view of parsed INI text.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Iterator

from inipack.cursor import Cursor, Record, SectionView
from inipack.numeric import parse_float, parse_int
from inipack.packer import IniPacker, Layout
from inipack.scanner import as_bytes
from inipack.spec import MAX_SOURCE_SIZE

logger = logging.getLogger(__name__)


class IniConfig:
    """
    Parsed INI configuration backed by a single packed buffer.

    Usage:
        config = IniConfig("[net]\\nport=8080\\n")
        config.get("port")                  # "8080"
        config.get_int("port", section="net")  # 8080
        for record in config.section("net"):
            print(record.key, record.value)

    Construction either succeeds completely or raises an IniSyntaxError;
    there is no partially built config.
    """

    __slots__ = ("_buffer", "_layout")

    def __init__(self, source: str | bytes, *, max_size: int = MAX_SOURCE_SIZE) -> None:
        data = as_bytes(source)
        if len(data) > max_size:
            raise ValueError(
                f"Input size {len(data)} exceeds maximum {max_size} bytes. "
                f"Pass max_size= to override."
            )
        buffer, layout = IniPacker.build(data)
        object.__setattr__(self, "_buffer", buffer)
        object.__setattr__(self, "_layout", layout)
        logger.debug("built config: %d pairs, %d bytes", layout.pairs, layout.capacity)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    @property
    def buffer(self) -> bytes:
        """The packed buffer (see inipack.spec for the layout)."""
        return self._buffer

    @property
    def layout(self) -> Layout:
        return self._layout

    def size(self) -> int:
        """Number of key-value pairs. Section headers are not counted."""
        return self._layout.pairs

    def __len__(self) -> int:
        return self._layout.pairs

    # --- Iteration ---

    def begin(self, section: str | None = None) -> Cursor:
        """Cursor at the first record, or the first record of ``section``."""
        it = Cursor(self._buffer)
        if section is None:
            return it
        while not it.at_end and it.record.section != section:
            it.advance()
        return it

    def end(self, section: str | None = None) -> Cursor:
        """Terminal cursor, or the cursor just past the first run of ``section``."""
        if section is None:
            return Cursor(self._buffer, len(self._buffer) - 1)
        it = self.begin(section)
        while not it.at_end and it.record.section == section:
            it.advance()
        return it

    def section(self, name: str) -> SectionView:
        """Records of the first contiguous run of section ``name``.

        A section reopened later in the source is not merged in.
        """
        return SectionView(name, self.begin(name), self.end(name))

    def sections(self) -> list[str]:
        """Distinct names of sections holding at least one pair, in source order."""
        names: list[str] = []
        for record in self:
            if record.section is not None and record.section not in names:
                names.append(record.section)
        return names

    def __iter__(self) -> Iterator[Record]:
        return iter(self.begin())

    # --- Lookup ---

    def get(self, key: str, section: str | None = None) -> str:
        """Value of the first matching key, or "" if there is none.

        With ``section``, only the first run of that section is searched.
        """
        records = self if section is None else self.section(section)
        for record in records:
            if record.key == key:
                return record.value
        return ""

    def get_int(self, key: str, section: str | None = None) -> int:
        """Value converted with parse_int. Returns 0 on a miss."""
        return parse_int(self.get(key, section))

    def get_float(self, key: str, section: str | None = None) -> float:
        """Value converted with parse_float. Returns 0.0 on a miss."""
        return parse_float(self.get(key, section))

    def contains(self, key: str, section: str | None = None) -> bool:
        return self.get(key, section) != ""

    def __contains__(self, key: object) -> bool:
        if isinstance(key, tuple):
            section, key = key
            return self.contains(key, section)
        return isinstance(key, str) and self.contains(key)

    def __getitem__(self, item: str | tuple[str, str]) -> str:
        """``config[key]`` or ``config[section, key]``. Returns "" on a miss."""
        if isinstance(item, tuple):
            section, key = item
            return self.get(key, section)
        return self.get(item)

    # --- Identity ---

    def fingerprint(self) -> str:
        """SHA-256 of the packed buffer."""
        return hashlib.sha256(self._buffer).hexdigest()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniConfig):
            return NotImplemented
        return self._buffer == other._buffer

    def __hash__(self) -> int:
        return hash(self._buffer)

    def __repr__(self) -> str:
        return f"IniConfig(pairs={self._layout.pairs}, sections={self.sections()})"
