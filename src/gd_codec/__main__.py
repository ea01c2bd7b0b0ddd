"""
Command-line entry point for gd_codec.
Usage: python -m gd_codec <command> ...
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .codec.framing import compress, decompress
from .codec.gmd import gmd_from_bytes
from .errors import LevelError
from .models.object_list import ObjectList
from .settings import AppSettings, ConfigError
from .utils.export import gmd_to_json, object_list_to_json
from .utils.logging_config import setup_logging

logger = logging.getLogger(f"{__name__}.main")


def _write_output(data: bytes, output: Optional[str]) -> None:
    if output:
        Path(output).write_bytes(data)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.write(b"\n")
        sys.stdout.flush()


def cmd_gmd(args: argparse.Namespace, settings: AppSettings) -> int:
    """Parse a GMD document and print it as JSON."""
    value = gmd_from_bytes(Path(args.input).read_bytes(), **settings.codec.gmd_options())
    _write_output(gmd_to_json(value), args.output)
    return 0


def cmd_objects(args: argparse.Namespace, settings: AppSettings) -> int:
    """Decode a compressed object string and print it as JSON."""
    options = settings.codec.object_list_options()
    if args.strict:
        options["strict"] = True
    blob = Path(args.input).read_text(encoding="utf-8")
    object_list = ObjectList.decode(blob, **options)
    logger.info(f"Decoded {len(object_list.objects)} objects from {args.input}")
    _write_output(object_list_to_json(object_list), args.output)
    return 0


def cmd_compress(args: argparse.Namespace, settings: AppSettings) -> int:
    """Gzip + base64 a text file."""
    text = Path(args.input).read_text(encoding="utf-8")
    _write_output(compress(text).encode("ascii"), args.output)
    return 0


def cmd_decompress(args: argparse.Namespace, settings: AppSettings) -> int:
    """Undo `compress`."""
    blob = Path(args.input).read_text(encoding="utf-8")
    _write_output(decompress(blob).encode("utf-8"), args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gd-codec",
        description="Inspect and convert level/save data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s gmd CCLocalLevels.xml              Print a GMD document as JSON
  %(prog)s objects level.txt --strict         Decode a compressed object string
  %(prog)s decompress level.txt -o level.raw  Remove the gzip/base64 envelope
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--settings", help="INI settings file (default: platform settings)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    gmd_parser = subparsers.add_parser("gmd", help="Print a GMD document as JSON")
    gmd_parser.add_argument("input", help="GMD file")
    gmd_parser.set_defaults(func=cmd_gmd)

    objects_parser = subparsers.add_parser("objects", help="Print a compressed object string as JSON")
    objects_parser.add_argument("input", help="File containing the compressed object string")
    objects_parser.add_argument("--strict", action="store_true", help="Fail on the first malformed object")
    objects_parser.set_defaults(func=cmd_objects)

    compress_parser = subparsers.add_parser("compress", help="Gzip + base64 a text file")
    compress_parser.add_argument("input", help="Text file")
    compress_parser.set_defaults(func=cmd_compress)

    decompress_parser = subparsers.add_parser("decompress", help="Decode a gzip + base64 file")
    decompress_parser.add_argument("input", help="Compressed file")
    decompress_parser.set_defaults(func=cmd_decompress)

    for sub in (gmd_parser, objects_parser, compress_parser, decompress_parser):
        sub.add_argument("-o", "--output", help="Output file (default: stdout)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main command-line entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = AppSettings(settings_file=args.settings)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(settings)

    validation = settings.validate()
    for warning in validation.warnings:
        logger.warning(warning)
    if not validation.is_valid:
        for error in validation.errors:
            logger.error(error)
        return 1

    try:
        return args.func(args, settings)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    except (LevelError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
