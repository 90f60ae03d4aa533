"""
inipack Packed Format v1.0
==========================

Source grammar (one construct per line, lines end at \\n, NUL or end of input):
    ; comment                    <- ';' or '#' as first graphic byte
    [name]                       <- Section header (name = bytes up to first ']')
    key = value                  <- Key/value pair (both trimmed)
                                 <- Blank lines are ignored

Packed buffer layout (entries in source order):
    0x01 <name> 0x00             <- Section marker
    0x02 <key> 0x00 <value> 0x00 <- Key/value pair
    ...
    0x00                         <- Final terminator

Design Decisions:
    - Every entry starts with a tag byte, so the buffer is self-describing.
      A cursor never has to replay the scanner to tell sections from pairs.
    - NUL ends a source line, so a terminator can never appear inside a
      name, key or value. Payloads are read up to the next terminator.
    - The buffer is sized exactly by the validation pass before the packing
      pass writes a single byte. Capacity = measured size + 1 (final terminator).
    - Lookups return "" on a miss. A miss is not an error.

Whitespace:
    - Any byte that is not "graphic" (<= 0x20 or 0x7F) counts as whitespace.
      This includes \\r, so CRLF input needs no normalisation.
"""

# Packed buffer bytes
TERMINATOR = 0x00
TAG_SECTION = 0x01
TAG_PAIR = 0x02

# Source grammar bytes
NEWLINE = 0x0A
SECTION_OPEN = ord("[")
SECTION_CLOSE = ord("]")
ASSIGN = ord("=")
COMMENT_CHARS = frozenset(b";#")

SOURCE_ENCODING = "utf-8"

# Format version
FORMAT_VERSION = "1.0"

# Safety limits
MAX_SOURCE_SIZE = 16 * 1024 * 1024  # 16MB max source text for config/CLI


def isgraph(c: int) -> bool:
    """True for printable, non-space bytes."""
    return c > 0x20 and c != 0x7F


def iseol(c: int) -> bool:
    """True for bytes that end a line."""
    return c == NEWLINE or c == TERMINATOR


def iscomment(c: int) -> bool:
    return c in COMMENT_CHARS
