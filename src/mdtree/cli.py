"""Command-line interface: convert and lint markdown files, or run the API server."""

import argparse
import json
import logging
import sys
from pathlib import Path

from mdtree.api.dependencies import get_settings
from mdtree.converter.document import convert_markdown
from mdtree.lint import validate_markdown

logger = logging.getLogger(__name__)


def _read_source(path: str) -> tuple[str, str | None]:
    """Read markdown from a file, or from stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read(), None
    source = Path(path)
    return source.read_text(encoding="utf-8"), source.name


def cmd_convert(args: argparse.Namespace) -> int:
    """Convert a markdown file and write the result as JSON."""
    try:
        text, filename = _read_source(args.file)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.file, e)
        return 1

    result = convert_markdown(text, filename=filename)
    payload = result.to_dict()
    output = json.dumps(payload, indent=None if args.compact else 2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        logger.info(
            "Wrote %s (%d elements, %s)",
            args.output,
            result.stats.elements,
            result.stats.json_size,
        )
    else:
        print(output)
    return 0


def cmd_lint(args: argparse.Namespace) -> int:
    """Print lint findings; exit status 1 when there are errors."""
    try:
        text, _ = _read_source(args.file)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.file, e)
        return 1

    report = validate_markdown(text)
    for finding in [*report.errors, *report.warnings]:
        location = f"{args.file}:{finding.line}" if finding.line else args.file
        print(f"{location}: {finding.severity}: {finding.message}")
        if finding.suggestion:
            print(f"    {finding.suggestion}")

    if report.is_valid and not report.warnings:
        print("Markdown syntax is valid")
    return 0 if report.is_valid else 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the HTTP API server."""
    import uvicorn

    settings = get_settings()
    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("Starting server on http://%s:%d", host, port)
    uvicorn.run("mdtree.main:app", host=host, port=port, log_level="info")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdtree", description="Convert markdown notes into structured JSON"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert a markdown file to JSON")
    convert.add_argument("file", help="Markdown file, or '-' for stdin")
    convert.add_argument("--output", "-o", default=None, help="Write JSON here instead of stdout")
    convert.add_argument("--compact", action="store_true", help="Emit JSON without indentation")
    convert.set_defaults(func=cmd_convert)

    lint = subparsers.add_parser("lint", help="Check markdown for syntax problems")
    lint.add_argument("file", help="Markdown file, or '-' for stdin")
    lint.set_defaults(func=cmd_lint)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help="Bind address (default: from config/env)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: from config/env)")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    return int(args.func(args))
