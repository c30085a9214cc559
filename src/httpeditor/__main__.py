"""
=============================================================================
HTTPEDITOR CLI ENTRY POINT
=============================================================================

Render a stored HTTP message as editable text, or apply edited text back
to it, from the command line.

=============================================================================
USAGE
=============================================================================

    # Show a captured request as text
    python -m httpeditor render request.http

    # Show a response (gzip bodies are shown decompressed)
    python -m httpeditor render --response response.http

    # Edit the text, then write the updated raw message
    python -m httpeditor render request.http -o request.txt
    $EDITOR request.txt
    python -m httpeditor apply request.http request.txt -o edited.http

Text files are read and written as UTF-8 with line endings left as-is,
so \\r\\n inside a body survives the round trip. Body bytes the charset
cannot decode are written as the raw bytes (surrogateescape) and read
back unchanged.

=============================================================================
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .codec import (
    REQUEST,
    RESPONSE,
    GzipCodec,
    InvalidMessageDataError,
    MessageTextCodec,
    UnreadableContentError,
)
from .config import CodecConfig
from .http import HTTPMalformedHeaderError, parse_request, parse_response

logger = logging.getLogger(__name__)

TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


def setup_logging(log_level: str) -> None:
    """Configure logging for command-line use."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    logging.getLogger("httpeditor").setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httpeditor",
        description="Edit stored HTTP messages as plain text",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httpeditor {__version__}",
    )

    # ─────────────────────────────────────────────────────────────────────
    # OPTIONS SHARED BY ALL COMMANDS
    # ─────────────────────────────────────────────────────────────────────

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--response", "-r",
        action="store_true",
        help="Treat the message file as a response (default: request)",
    )
    common.add_argument(
        "--charset", "-c",
        default=None,
        help="Body charset when Content-Type declares none (default: ISO-8859-1)",
    )
    common.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )
    common.add_argument(
        "--output", "-o",
        default=None,
        help="Write to this file instead of stdout",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    render = commands.add_parser(
        "render",
        parents=[common],
        help="Print the editable text of a raw message file",
    )
    render.add_argument("message", help="Raw HTTP message file")

    apply = commands.add_parser(
        "apply",
        parents=[common],
        help="Apply edited text to a raw message file",
    )
    apply.add_argument("message", help="Raw HTTP message file")
    apply.add_argument("text", help="Edited text file")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # =========================================================================
    # CREATE CONFIGURATION
    # =========================================================================
    # Environment first, command-line arguments override

    config = CodecConfig.from_env()
    if args.charset:
        config.default_charset = args.charset
    if args.log_level:
        config.log_level = args.log_level

    try:
        config.validate()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    setup_logging(config.log_level)

    # =========================================================================
    # LOAD MESSAGE
    # =========================================================================

    part = RESPONSE if args.response else REQUEST
    parse = parse_response if args.response else parse_request

    try:
        with open(args.message, "rb") as f:
            data = f.read()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        message = parse(data, default_charset=config.default_charset)
    except HTTPMalformedHeaderError as e:
        print(f"Error: {args.message}: {e}", file=sys.stderr)
        return 1

    codec = MessageTextCodec(part, GzipCodec(level=config.compression_level), message)

    # =========================================================================
    # RUN COMMAND
    # =========================================================================

    if args.command == "render":
        try:
            text = codec.render()
        except UnreadableContentError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        _write_text(text, args.output)
        return 0

    try:
        with open(args.text, "r", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="") as f:
            edited = f.read()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        codec.apply(edited)
    except InvalidMessageDataError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output = message.response_bytes() if args.response else message.request_bytes()
    _write_bytes(output, args.output)
    logger.info(f"Applied edit to {part.name} ({len(output)} bytes)")
    return 0


def _write_text(text: str, path: Optional[str]) -> None:
    if path is None:
        _write_bytes(text.encode(TEXT_ENCODING, errors=TEXT_ERRORS), None)
        return
    with open(path, "w", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="") as f:
        f.write(text)


def _write_bytes(data: bytes, path: Optional[str]) -> None:
    if path is None:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()
        return
    with open(path, "wb") as f:
        f.write(data)


# =============================================================================
# ENTRY POINT
# =============================================================================
# This allows running: python -m httpeditor

if __name__ == "__main__":
    sys.exit(main())
