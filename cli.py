#!/usr/bin/env python3
"""
CLI interface for share-intake.

Usage:
    share-intake share --action send --stream ./report.pdf
    share-intake share --action send_multiple --stream a.jpg --stream b.jpg
    share-intake share --action sendto --data-string "mailto:a@b.com"
    share-intake serve --action send --stream ./report.pdf

This delivers a share event the way the host would, then reads the result
back through the same fetch path the request channel uses.
"""

import argparse
import json
import sys
from pathlib import Path

from adapters.content import LocalContentResolver
from extractors.share import summarize_result
from logging_config import DEFAULT_LOG_LEVEL, configure_logging
from models import ShareError, ShareEvent
from tools import ShareExtractor, build_event
from workspace import deposit_share


def _event_from_args(args: argparse.Namespace) -> ShareEvent:
    return build_event(
        args.action,
        streams=args.stream,
        data_string=args.data_string,
        mime_type=args.type,
    )


def cmd_share(args: argparse.Namespace) -> int:
    """Handle one share event and print what a consumer would receive."""
    extractor = ShareExtractor(LocalContentResolver())
    try:
        stored = extractor.handle(_event_from_args(args))
    except ShareError as e:
        print(json.dumps(e.to_dict(), indent=2))
        return 1

    result = extractor.fetch()
    if not stored or result is None:
        print(json.dumps({"pending": False}, indent=2))
        return 0

    output = {"pending": True, "summary": summarize_result(result)}
    if args.deposit:
        output["path"] = str(deposit_share(result, Path(args.deposit)))
    print(json.dumps(output, indent=2))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the MCP server, optionally with a cold-start share."""
    from server import run_server

    event = _event_from_args(args) if args.action else None
    try:
        run_server(event, log_level=args.log_level or DEFAULT_LOG_LEVEL)
    except ShareError as e:
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 1
    return 0


def _add_event_args(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument(
        "--action",
        required=required,
        help="Share action: send, send_multiple, sendto, view (or android.intent.action.*)",
    )
    parser.add_argument(
        "--stream",
        action="append",
        help="Path or file:// URI of an attachment (repeat for send_multiple)",
    )
    parser.add_argument("--data-string", help="Text or link for sendto/view")
    parser.add_argument("--type", help="Declared media type of the share")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="share-intake",
        description="Normalize shared content into a flat result",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    share-intake share --action send --stream ./report.pdf --type application/pdf
    share-intake share --action send_multiple --stream a.jpg --stream b.jpg --deposit .
    share-intake share --action view --data-string "https://example.com"
    share-intake serve
""",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # share
    share_p = subparsers.add_parser("share", help="Handle a share event and print the result")
    _add_event_args(share_p, required=True)
    share_p.add_argument("--deposit", help="Write the result to a deposit folder under this directory")
    share_p.set_defaults(func=cmd_share)

    # serve
    serve_p = subparsers.add_parser("serve", help="Run the MCP server")
    _add_event_args(serve_p, required=False)
    serve_p.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or DEFAULT_LOG_LEVEL)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
