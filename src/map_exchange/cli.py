"""Command line entry point: detect map formats and convert between them."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import MapFormat, detect_format, export_map, import_map
from .config import get_log_file, get_log_level, get_target_size, parse_size
from .exceptions import MapExchangeError
from .logging_config import setup_logging
from .models import ImportOptions

logger = logging.getLogger(__name__)

EXPORT_FORMATS = [fmt.value for fmt in MapFormat if fmt != MapFormat.IMAGE]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="map-exchange",
        description="Convert battle maps between Roll20, Foundry VTT, Universal VTT and native JSON"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log per-object conversion details"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    detect = subparsers.add_parser("detect", help="Print the detected format of a file")
    detect.add_argument("file", type=Path, help="Map file to inspect")

    convert = subparsers.add_parser("convert", help="Convert a map file to another format")
    convert.add_argument("file", type=Path, help="Map file to convert")
    convert.add_argument(
        "--to",
        required=True,
        dest="target",
        help=f"Output format ({', '.join(EXPORT_FORMATS)}, or an alias such as dd2vtt)"
    )
    convert.add_argument(
        "--from",
        dest="source",
        default="auto",
        help="Input format (default: auto-detect)"
    )
    convert.add_argument(
        "-o", "--output",
        type=Path,
        help="Output file (default: stdout)"
    )
    convert.add_argument(
        "--preserve-ids",
        action="store_true",
        help="Keep object ids from the source document"
    )
    convert.add_argument(
        "--fit",
        nargs="?",
        const="",
        metavar="WxH",
        help="Scale the map to fit a canvas (default size from MAP_EXCHANGE_TARGET_SIZE)"
    )
    convert.add_argument(
        "--strict-shapes",
        action="store_true",
        help="Fail on unknown shape types instead of degrading them to rectangles"
    )
    convert.add_argument(
        "--no-background",
        dest="import_background",
        action="store_false",
        help="Drop the background image from the converted map"
    )
    return parser


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8-sig")


def run_detect(args: argparse.Namespace) -> int:
    content = None if args.file.suffix.lower() in (".jpg", ".jpeg", ".png", ".webp") else _read(args.file)
    print(detect_format(args.file.name, content).value)
    return 0


def run_convert(args: argparse.Namespace) -> int:
    target_size = None
    if args.fit is not None:
        target_size = parse_size(args.fit) if args.fit else get_target_size()

    options = ImportOptions(
        preserve_ids=args.preserve_ids,
        strict_shapes=args.strict_shapes,
        target_size=target_size,
        import_background=args.import_background,
    )
    result = import_map(args.file.name, _read(args.file), options, format_hint=args.source)
    document = export_map(result.map, args.target)
    output = json.dumps(document, indent=2)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(output + "\n", encoding="utf-8")
        logger.info(f"Wrote {args.output}")
    else:
        print(output)

    if result.warnings:
        logger.info(f"Converted with {len(result.warnings)} warning(s)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the map-exchange command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        "map_exchange",
        level="DEBUG" if args.verbose else get_log_level(),
        log_file=get_log_file(),
    )

    try:
        if args.command == "detect":
            return run_detect(args)
        return run_convert(args)
    except (MapExchangeError, ValueError, OSError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
