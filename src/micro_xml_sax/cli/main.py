"""Main CLI entry point for the micro-xml-sax command-line tool.

Provides two commands: ``validate`` checks that files scan cleanly and
``events`` dumps the event stream of one file as JSON.
"""

import argparse
import json
import logging
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from micro_xml_sax import __version__
from micro_xml_sax.api import EventRecorder, XMLSaxParser
from micro_xml_sax.shared.config import ConfigError, ParserConfig
from micro_xml_sax.shared.logging import get_logger

logger = get_logger(__name__, None, "cli")


def load_config(config_path: Optional[Path], preset: Optional[str] = None) -> ParserConfig:
    """Build the scanner configuration from a preset and/or a JSON file.

    Every field present in the file takes precedence over the preset, even
    when it sets the field back to its default value.
    """
    config = ParserConfig.preset(preset) if preset else ParserConfig()
    if config_path is None:
        return config
    json_str = config_path.read_text(encoding="utf-8")
    file_config = ParserConfig.from_json(json_str)
    present = json.loads(json_str)
    overrides = {
        f.name: getattr(file_config, f.name)
        for f in fields(ParserConfig) if f.name in present
    }
    return config.override(**overrides)


def process_file(
    path: Path,
    config: ParserConfig,
    check_duplicates: bool = False
) -> Dict[str, Any]:
    """Scan one file and summarise the result."""
    try:
        document = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read file", extra={"file": str(path)})
        return {"file": str(path), "valid": False, "error": str(e)}

    recorder = EventRecorder(validate=check_duplicates)
    result = XMLSaxParser(recorder, config).scan(document)

    summary: Dict[str, Any] = {
        "file": str(path),
        "valid": result.success,
        "outcome": result.outcome.name,
        "events": result.metrics.events_emitted,
        "max_depth": result.metrics.max_depth,
        "processing_time_ms": result.metrics.processing_time_ms,
    }
    if result.error_offset is not None:
        position = result.error_position
        summary["error"] = result.error_message
        summary["error_kind"] = result.error_kind.name if result.error_kind else None
        summary["line"] = position.line
        summary["column"] = position.column
    return summary


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format validation results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    if not results:
        return "No results to display."

    valid_count = sum(1 for r in results if r.get("valid", False))
    lines = [f"Validated {len(results)} files, {valid_count} valid", "-" * 50]
    for result in results:
        status = "✓" if result.get("valid", False) else "✗"
        lines.append(f"{status} {result['file']}")
        if not result.get("valid", False) and "error" in result:
            if "line" in result:
                lines.append(
                    f"   Error at {result['line']}:{result['column']}: {result['error']}"
                )
            else:
                lines.append(f"   Error: {result['error']}")
    return "\n".join(lines)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="micro-xml-sax",
        description="Single-pass SAX scanner for a restricted XML subset"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--preset",
        choices=["strict", "fault_tolerant", "lenient"],
        help="Scanner configuration preset"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser("validate", help="Validate XML files")
    validate_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files to validate"
    )
    validate_parser.add_argument(
        "--check-duplicates",
        action="store_true",
        help="Reject tags that repeat an attribute"
    )
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )

    events_parser = subparsers.add_parser("events", help="Print the event stream of a file")
    events_parser.add_argument("path", type=Path, help="XML file to scan")
    events_parser.add_argument(
        "--check-duplicates",
        action="store_true",
        help="Reject tags that repeat an attribute"
    )

    return parser


def cmd_validate(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle validate command."""
    results = [
        process_file(path, config, args.check_duplicates) for path in args.paths
    ]
    print(format_results(results, args.format))
    valid_count = sum(1 for r in results if r.get("valid", False))
    return 0 if valid_count == len(results) else 1


def cmd_events(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle events command."""
    try:
        document = args.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {args.path}: {e}", file=sys.stderr)
        return 1

    recorder = EventRecorder(validate=args.check_duplicates)
    result = XMLSaxParser(recorder, config).scan(document)
    output: Dict[str, Any] = {
        "file": str(args.path),
        "outcome": result.outcome.name,
        "events": recorder.to_dicts(),
    }
    if result.error_offset is not None:
        output["error"] = result.error_message
        output["position"] = str(result.error_position)
    print(json.dumps(output, indent=2))
    return 0 if result.success else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config, args.preset)
    except (OSError, ConfigError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)
    else:
        logging.basicConfig(level=getattr(logging, config.logging_level))

    if args.command == "validate":
        return cmd_validate(args, config)
    if args.command == "events":
        return cmd_events(args, config)

    print(f"Unknown command: {args.command}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
