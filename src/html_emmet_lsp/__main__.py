from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from .__version import __version__
from ._logging import get_logger, setup_colored_logging
from .constants import DEFAULT_CACHE_MAX_AGE_SECONDS, DEFAULT_CACHE_MAX_ENTRIES

if TYPE_CHECKING:
    from lsprotocol.types import Color

logger = get_logger(__name__, "main")

_DESCRIPTION = """\
html-emmet-lsp: Language Server Protocol implementation for HTML

Provides IDE support for HTML documents with:
• Emmet abbreviation expansion merged with HTML tag and attribute completion
• CSS completion inside <style> blocks
• Color decorators for color attributes such as bgcolor
• Hover, highlights, links, symbols, rename, folding and selection ranges"""


def main():
    """Main entry point for the language server."""
    parser = argparse.ArgumentParser(
        description=_DESCRIPTION,
        prog="html-emmet-lsp",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: %(default)s)",
    )
    parser.add_argument(
        "--cache-size",
        type=int,
        default=DEFAULT_CACHE_MAX_ENTRIES,
        help="Maximum number of parsed documents kept in memory (default: %(default)s)",
    )
    parser.add_argument(
        "--cache-ttl",
        type=float,
        default=DEFAULT_CACHE_MAX_AGE_SECONDS,
        help="Seconds an unused parsed document is kept (default: %(default)s)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Start the LSP server",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    server_parser.add_argument("--tcp", action="store_true", help="Use TCP instead of stdio")
    server_parser.add_argument(
        "--port", type=int, default=8080, help="TCP port to listen on (default: %(default)s)"
    )
    server_parser.add_argument("--stdio", action="store_true", help="Use stdio (default)")

    # Colors subcommand
    colors_parser = subparsers.add_parser(
        "colors",
        help="Print the colors of color attributes in HTML files",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    colors_parser.add_argument("files", nargs="+", type=str, help="HTML files to scan")

    # Expand subcommand
    expand_parser = subparsers.add_parser(
        "expand",
        help="Print the expansion of an Emmet abbreviation",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    expand_parser.add_argument("abbreviation", type=str, help="Abbreviation, e.g. ul>li*3")
    expand_parser.add_argument(
        "--syntax", type=str, default="html", help="Target syntax (default: %(default)s)"
    )

    args = parser.parse_args()

    # Require explicit subcommand
    if args.command is None:
        parser.error(
            "A subcommand is required. Use 'html-emmet-lsp server' to start the LSP server.\n"
            "See 'html-emmet-lsp --help' for available commands."
        )
    if args.cache_size < 1:
        parser.error("--cache-size must be at least 1")

    # Configure colored logging
    log_level = getattr(logging, args.log_level)
    setup_colored_logging(level=log_level)

    if args.command == "colors":
        _run_colors(args.files)
        return

    elif args.command == "expand":
        _run_expand(args.abbreviation, args.syntax)
        return

    elif args.command == "server":
        # Check for mutually exclusive options
        if args.tcp and args.stdio:
            parser.error("--tcp and --stdio are mutually exclusive")

        # Import server only when actually needed
        from ._server.server import create_server

        server = create_server(
            cache_max_entries=args.cache_size, cache_max_age_seconds=args.cache_ttl
        )

        if args.tcp:
            logger.info(f"Starting HTML Emmet LSP server ({__version__}) on TCP port {args.port}")
            server.start_tcp("localhost", args.port)
        else:
            logger.info(f"Starting HTML Emmet LSP server ({__version__}) on stdio")
            server.start_io()


def format_color(color: Color) -> str:
    """``#rrggbbaa`` form of a protocol color."""
    channels = (color.red, color.green, color.blue, color.alpha)
    return "#" + "".join(f"{round(max(0.0, min(1.0, c)) * 255):02x}" for c in channels)


def _run_colors(files: list[str]) -> None:
    """Run colors command on the provided files."""
    from lsprotocol.types import PositionEncodingKind
    from pygls.workspace import PositionCodec, TextDocument

    from ._core import find_colors
    from ._services import CSSService, HTMLService
    from ._text import get_text

    html_service, css_service = HTMLService(), CSSService()
    found = 0
    for file in files:
        path = Path(file)
        try:
            content = path.read_text()
        except OSError as e:
            print(f"Error reading {path}: {e}", file=sys.stderr)
            sys.exit(1)

        # Report columns as characters.
        document = TextDocument(
            path.absolute().as_uri(),
            content,
            language_id="html",
            position_codec=PositionCodec(PositionEncodingKind.Utf32),
        )
        for info in find_colors(document, html_service, css_service):
            start = info.range.start
            value = get_text(content, info.range)
            print(f"{path}:{start.line + 1}:{start.character + 1}: {format_color(info.color)} {value}")
            found += 1

    if not found:
        print(f"No colors found in {len(files)} file(s)")


def _run_expand(abbreviation: str, syntax: str) -> None:
    """Run expand command for a single abbreviation."""
    from ._services import EmmetEngine

    try:
        print(EmmetEngine().expand(abbreviation, syntax))
    except Exception as e:
        print(f"Error: cannot expand {abbreviation!r}: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
