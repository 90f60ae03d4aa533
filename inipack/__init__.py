"""
inipack - validate INI text once, then query a compact packed buffer.

Scan + size, allocate once, pack, read without further parsing.
"""

__version__ = "0.1.0"

from inipack.spec import FORMAT_VERSION, MAX_SOURCE_SIZE
from inipack.errors import (
    IniSyntaxError, BadSectionHeader, InvalidKey, MissingValue, PackingError,
)
from inipack.packer import IniPacker, Layout
from inipack.cursor import Cursor, Record, SectionView
from inipack.config import IniConfig
from inipack.numeric import parse_int, parse_float

__format_version__ = FORMAT_VERSION
