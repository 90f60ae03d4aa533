"""
inipack Errors - Raised while validating source text.

All syntax errors are detected by the sizing pass, before any buffer
exists, so a failed parse never leaves a partially built config behind.
"""

from __future__ import annotations


class IniSyntaxError(ValueError):
    """Exception raised when a line of INI source is malformed.

    Attributes:
        line: The offending line (decoded, without its line ending).
        line_number: 1-based line number in the source.
    """

    reason = "invalid syntax"

    line: str
    line_number: int

    def __init__(self, *args, line: str = "", line_number: int = 0):
        if not args:
            args = (f"line {line_number}: {self.reason}: {line!r}",)
        super().__init__(*args)

        self.line = line
        self.line_number = line_number


class BadSectionHeader(IniSyntaxError):
    """A '[' was opened but no ']' follows on the same line."""

    reason = "unterminated section header"


class InvalidKey(IniSyntaxError):
    """A key holds embedded whitespace, is empty, or has no '=' after it."""

    reason = "invalid key"


class MissingValue(IniSyntaxError):
    """A '=' is present but nothing graphic follows it."""

    reason = "missing value"


class PackingError(RuntimeError):
    """The packing pass disagreed with the sizing pass.

    This indicates a bug in the scanner or packer, never bad input.
    """
