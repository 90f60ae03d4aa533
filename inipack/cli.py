"""
inipack CLI - Command-line interface for packed INI configs.

Commands:
  inipack inspect  - Show pair/section counts, buffer size and fingerprint
  inipack validate - Check INI syntax (exit 1 on the first error)
  inipack get      - Print the value for a key, optionally within a section
  inipack sections - List section names
  inipack dump     - Print (section, key, value) records, tab separated
  inipack convert  - Convert to JSON, CSV or canonical INI
  inipack view     - Browse a config in a TUI
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

logger = logging.getLogger(__name__)


def _load(path: str):
    """Read and parse ``path``, exiting with a message on failure."""
    from inipack.config import IniConfig
    from inipack.spec import MAX_SOURCE_SIZE

    file_path = Path(path)
    if not file_path.is_file():
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)
    file_size = file_path.stat().st_size
    if file_size > MAX_SOURCE_SIZE:
        print(f"Error: File size {file_size} exceeds maximum {MAX_SOURCE_SIZE} bytes", file=sys.stderr)
        sys.exit(1)

    logger.debug("loading %s (%d bytes)", file_path, file_size)
    try:
        return IniConfig(file_path.read_bytes())
    except ValueError as e:
        print(f"Error: {path}: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_inspect(args: argparse.Namespace) -> None:
    """Inspect a config - show sizes and section listing."""
    config = _load(args.path)
    layout = config.layout

    print(f"PAIRS:       {layout.pairs}")
    print(f"SECTIONS:    {layout.sections}")
    print(f"BUFFER:      {layout.capacity} bytes")
    print(f"FINGERPRINT: {config.fingerprint()}")
    print()

    counts = Counter(record.section for record in config)
    names = config.sections()
    if names:
        print("SECTIONS:")
        for name in names:
            print(f"  [{name}]  {counts[name]} pairs")


def cmd_validate(args: argparse.Namespace) -> None:
    """Validate INI syntax."""
    from inipack.errors import IniSyntaxError
    from inipack.packer import IniPacker
    from inipack.spec import MAX_SOURCE_SIZE

    path = Path(args.path)
    if not path.is_file():
        print(f"FAIL: {args.path} not found")
        sys.exit(1)
    file_size = path.stat().st_size
    if file_size > MAX_SOURCE_SIZE:
        print(f"FAIL: {args.path}: file size {file_size} exceeds maximum {MAX_SOURCE_SIZE} bytes")
        sys.exit(1)

    try:
        layout = IniPacker.measure(path.read_bytes())
    except IniSyntaxError as e:
        print(f"FAIL: {args.path}: {e}")
        sys.exit(1)
    print(f"OK: {args.path} ({layout.pairs} pairs, {layout.sections} sections)")


def cmd_get(args: argparse.Namespace) -> None:
    """Print the value for a key."""
    config = _load(args.path)

    if not config.contains(args.key, args.section):
        where = f" in [{args.section}]" if args.section is not None else ""
        print(f"Key '{args.key}'{where} not found.", file=sys.stderr)
        sys.exit(1)

    if args.int:
        print(config.get_int(args.key, args.section))
    elif args.float:
        print(config.get_float(args.key, args.section))
    else:
        print(config.get(args.key, args.section))


def cmd_sections(args: argparse.Namespace) -> None:
    """List section names."""
    config = _load(args.path)
    for name in config.sections():
        print(name)


def cmd_dump(args: argparse.Namespace) -> None:
    """Print records, one per line."""
    config = _load(args.path)
    records = config if args.section is None else config.section(args.section)
    for record in records:
        print(f"{record.section or ''}\t{record.key}\t{record.value}")


def cmd_convert(args: argparse.Namespace) -> None:
    """Convert a config to another format."""
    from inipack.converters import convert_to

    config = _load(args.path)
    result = convert_to(config, args.format)
    if args.output:
        # Reject path traversal in output path
        if ".." in Path(args.output).parts:
            print("Error: Output path must not contain '..' (path traversal)", file=sys.stderr)
            sys.exit(1)
        Path(args.output).write_text(result, encoding="utf-8")
        print(f"Converted {args.path} -> {args.output}")
    else:
        print(result, end="" if result.endswith("\n") else "\n")


def cmd_view(args: argparse.Namespace) -> None:
    """View a config in the TUI."""
    try:
        from inipack.tui.viewer import run_viewer
    except ImportError:
        print(
            "TUI viewer requires the 'textual' package.\n"
            "Install it with: pip install \"inipack[tui]\"",
            file=sys.stderr,
        )
        sys.exit(1)
    run_viewer(args.path)


def build_parser() -> argparse.ArgumentParser:
    from inipack import __version__

    parser = argparse.ArgumentParser(
        prog="inipack",
        description="inipack - validate, pack and query INI configuration.",
    )
    parser.add_argument("--version", action="version", version=f"inipack {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    # inspect
    p_inspect = sub.add_parser("inspect", help="Inspect a config file")
    p_inspect.add_argument("path", help="Path to INI file")

    # validate
    p_validate = sub.add_parser("validate", help="Validate INI syntax")
    p_validate.add_argument("path", help="Path to INI file")

    # get
    p_get = sub.add_parser("get", help="Print the value for a key")
    p_get.add_argument("path", help="Path to INI file")
    p_get.add_argument("key", help="Key to look up")
    p_get.add_argument("-s", "--section", help="Only search this section")
    kind = p_get.add_mutually_exclusive_group()
    kind.add_argument("--int", action="store_true", help="Convert the value to an integer")
    kind.add_argument("--float", action="store_true", help="Convert the value to a float")

    # sections
    p_sections = sub.add_parser("sections", help="List section names")
    p_sections.add_argument("path", help="Path to INI file")

    # dump
    p_dump = sub.add_parser("dump", help="Print records, tab separated")
    p_dump.add_argument("path", help="Path to INI file")
    p_dump.add_argument("-s", "--section", help="Only print this section")

    # convert
    p_convert = sub.add_parser("convert", help="Convert to JSON, CSV or canonical INI")
    p_convert.add_argument("path", help="Path to INI file")
    p_convert.add_argument("format", choices=["json", "csv", "ini"], help="Target format")
    p_convert.add_argument("-o", "--output", help="Output file path")

    # view
    p_view = sub.add_parser("view", help="Browse a config in a TUI")
    p_view.add_argument("path", help="Path to INI file")

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        print()
        print("Examples:")
        print("  inipack validate app.ini")
        print("  inipack get app.ini port -s server --int")
        print("  inipack dump app.ini -s server")
        print("  inipack convert app.ini json -o app.json")
        sys.exit(0)

    commands = {
        "inspect": cmd_inspect,
        "validate": cmd_validate,
        "get": cmd_get,
        "sections": cmd_sections,
        "dump": cmd_dump,
        "convert": cmd_convert,
        "view": cmd_view,
    }

    commands[args.command](args)


if __name__ == "__main__":
    main()
