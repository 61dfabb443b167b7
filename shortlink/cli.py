"""
Command-line interface for shortlink.

Usage:
    shortlink-cli shorten <url> [--base-url URL]
    shortlink-cli resolve <chunk>
    shortlink-cli info <chunk>
    shortlink-cli encode <id>
    shortlink-cli decode <chunk>
    shortlink-cli health
"""

import argparse
import json
import os
import sys
from typing import List, Optional

from .codec import encode, decode
from .common.logging_config import setup_logging
from .database.sqlite import SQLiteLinkStore, DEFAULT_DB_PATH
from .errors import DecodeError, InvalidUrlError, ShortLinkError
from .service import ShortenerService, RedirectorService


def _print_json(payload: dict, error: bool = False) -> None:
    print(json.dumps(payload, indent=2), file=sys.stderr if error else sys.stdout)


class ShortLinkCLI:
    """Command-line interface for shortlink."""

    def __init__(self, db_path: str, verbose: bool = False):
        self.db_path = db_path
        # stdout carries the JSON result, so logs go to stderr
        self.logger = setup_logging(level="DEBUG" if verbose else "ERROR", stream=sys.stderr)
        self.store = SQLiteLinkStore(db_path=db_path, logger=self.logger)
        self.shortener = ShortenerService(self.store, logger=self.logger)
        self.redirector = RedirectorService(self.store, logger=self.logger)

    def close(self):
        self.store.close()

    def shorten(self, url: str, base_url: str) -> int:
        try:
            short_url = self.shortener.shorten(url, base_url)
        except InvalidUrlError as e:
            _print_json({"success": False, "error": f"URL is invalid: {e}"}, error=True)
            return 1

        _print_json({"success": True, "url": short_url})
        return 0

    def resolve(self, chunk: str) -> int:
        location = self.redirector.resolve(chunk)
        _print_json({
            "success": True,
            "chunk": chunk,
            "location": location,
            "fallback": location == self.redirector.fallback_location,
        })
        return 0

    def info(self, chunk: str) -> int:
        link = self.redirector.lookup(chunk)
        if link is None:
            _print_json({"success": False, "error": f"No link for '{chunk}'"}, error=True)
            return 1

        _print_json({"success": True, **link.to_dict()})
        return 0

    def health(self) -> int:
        healthy = self.store.health_check()
        payload = {"success": healthy, "database": self.db_path}
        if healthy:
            payload["total_links"] = self.store.count()
        _print_json(payload)
        return 0 if healthy else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shortlink-cli",
        description="Shortlink CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Where does a chunk redirect to?
  %(prog)s resolve AQAAAA

  # Chunk for a record id
  %(prog)s encode 1
        """
    )

    parser.add_argument(
        "--db-path",
        default=os.getenv("DATABASE_PATH", DEFAULT_DB_PATH),
        help=f"SQLite file (default: from DATABASE_PATH env or {DEFAULT_DB_PATH})"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument(
        "--base-url",
        default=os.getenv("BASE_URL", "http://localhost:9200"),
        help="Origin of the short URL"
    )

    resolve_parser = subparsers.add_parser("resolve", help="Show the redirect target of a chunk")
    resolve_parser.add_argument("chunk", help="Chunk to resolve")

    info_parser = subparsers.add_parser("info", help="Show the stored link for a chunk")
    info_parser.add_argument("chunk", help="Chunk to look up")

    encode_parser = subparsers.add_parser("encode", help="Encode a record id")
    encode_parser.add_argument("id", type=int, help="Record id")

    decode_parser = subparsers.add_parser("decode", help="Decode a chunk")
    decode_parser.add_argument("chunk", help="Chunk to decode")

    subparsers.add_parser("health", help="Check the database")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Pure codec commands never touch the database
    if args.command == "encode":
        try:
            _print_json({"success": True, "id": args.id, "chunk": encode(args.id)})
        except ValueError as e:
            _print_json({"success": False, "error": str(e)}, error=True)
            return 1
        return 0

    if args.command == "decode":
        try:
            _print_json({"success": True, "chunk": args.chunk, "id": decode(args.chunk)})
        except DecodeError as e:
            _print_json({"success": False, "error": str(e)}, error=True)
            return 1
        return 0

    try:
        cli = ShortLinkCLI(db_path=args.db_path, verbose=args.verbose)
    except ShortLinkError as e:
        _print_json({"success": False, "error": str(e)}, error=True)
        return 1

    try:
        if args.command == "shorten":
            return cli.shorten(args.url, args.base_url)
        elif args.command == "resolve":
            return cli.resolve(args.chunk)
        elif args.command == "info":
            return cli.info(args.chunk)
        elif args.command == "health":
            return cli.health()
        else:
            parser.print_help()
            return 1
    except ShortLinkError as e:
        _print_json({"success": False, "error": f"Error: {e}"}, error=True)
        return 1
    finally:
        cli.close()


if __name__ == "__main__":
    sys.exit(main())
