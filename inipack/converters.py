"""
inipack Converters - Export a parsed config to dict, JSON, CSV or INI.

Exports are one-way: the packed buffer is the only input format.
to_ini() emits canonical INI that parses back to the same records.
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from inipack.config import IniConfig
from inipack.spec import FORMAT_VERSION


# =============================================================================
# dict / JSON
# =============================================================================

def to_dict(config: IniConfig) -> dict[str | None, dict[str, str]]:
    """Group records by section. The first value of a repeated key wins,
    matching what get() returns. Pairs before any header go under None.
    """
    out: dict[str | None, dict[str, str]] = {}
    for record in config:
        out.setdefault(record.section, {}).setdefault(record.key, record.value)
    return out


def to_json(config: IniConfig, indent: int = 2) -> str:
    """Convert a config to a JSON string of records in source order."""
    data: dict[str, Any] = {
        "format_version": FORMAT_VERSION,
        "pairs": config.size(),
        "records": [],
    }
    for record in config:
        data["records"].append({
            "section": record.section,
            "key": record.key,
            "value": record.value,
        })
    return json.dumps(data, indent=indent, ensure_ascii=False)


# =============================================================================
# CSV
# =============================================================================

def _escape_csv_formula(value: str) -> str:
    """Prefix values a spreadsheet would evaluate as a formula."""
    stripped = value.lstrip()
    if stripped and stripped[0] in ("=", "+", "-", "@", "\t", "\r", ";"):
        return "'" + value
    return value


def to_csv(config: IniConfig) -> str:
    """
    Convert a config to CSV.
    Row format: section, key, value (empty section for pairs before any header).
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["section", "key", "value"])
    for record in config:
        writer.writerow([
            _escape_csv_formula(record.section or ""),
            _escape_csv_formula(record.key),
            _escape_csv_formula(record.value),
        ])
    return buf.getvalue()


# =============================================================================
# INI
# =============================================================================

def to_ini(config: IniConfig) -> str:
    """Re-emit the records as canonical INI (no comments, no blank padding)."""
    lines: list[str] = []
    current: str | None = None
    for record in config:
        if record.section != current:
            lines.append(f"[{record.section}]")
            current = record.section
        lines.append(f"{record.key}={record.value}")
    return "\n".join(lines) + ("\n" if lines else "")


FORMATS = {
    "json": to_json,
    "csv": to_csv,
    "ini": to_ini,
}


def convert_to(config: IniConfig, fmt: str) -> str:
    """Convert a config to the named format."""
    try:
        converter = FORMATS[fmt]
    except KeyError:
        raise ValueError(f"Unknown format: {fmt!r}. Supported: {', '.join(sorted(FORMATS))}") from None
    return converter(config)
