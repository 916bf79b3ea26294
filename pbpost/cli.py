"""
pbpost CLI: send an encrypted paste to a PrivateBin instance.

Input:
  -t TEXT        paste text (ignored when -T is given)
  -T             read paste text from stdin
  -f FILE        attach a file

Options:
  -p PASSWORD    paste password (or set PRIVATEBIN_PASSWORD)
  -E EXPIRE      5min 10min 1hour 1day 1week 1month 1year never
  -F FORMAT      plaintext syntaxhighlighting markdown
  -c MODE        zlib none
  -s URL         instance address (or set PRIVATEBIN_URL)

Switches:
  -b             bypass the allowed values of -E and -F
  -B             burn after reading
  -D             open discussion
  -d             debug output
"""

from __future__ import annotations

import argparse
import logging
import sys

from pbpost import (
    COMPRESSION_MODES,
    DEFAULT_COMPRESSION,
    DEFAULT_EXPIRE,
    DEFAULT_FORMAT,
    EXPIRE_CODES,
    FORMATS,
)


def build_parser() -> argparse.ArgumentParser:
    from pbpost import __version__

    parser = argparse.ArgumentParser(
        prog="pbpost",
        description="Send a client-side encrypted paste to a PrivateBin instance.",
    )
    parser.add_argument("--version", action="version", version=f"pbpost {__version__}")

    src = parser.add_argument_group("input")
    src.add_argument("-t", "--text", help="Paste text (ignored with -T)")
    src.add_argument("-T", "--stdin", action="store_true", help="Read paste text from stdin")
    src.add_argument("-f", "--file", help="Attach a file to the paste")

    opts = parser.add_argument_group("paste options")
    opts.add_argument("-p", "--password", default="", help="Paste password (or set PRIVATEBIN_PASSWORD)")
    opts.add_argument(
        "-E", "--expire", default=DEFAULT_EXPIRE,
        help=f"Paste lifetime: {', '.join(EXPIRE_CODES)} (default: {DEFAULT_EXPIRE})",
    )
    opts.add_argument(
        "-F", "--format", default=DEFAULT_FORMAT,
        help=f"Display format: {', '.join(FORMATS)} (default: {DEFAULT_FORMAT})",
    )
    opts.add_argument(
        "-c", "--compression", default=DEFAULT_COMPRESSION, choices=COMPRESSION_MODES,
        help=f"Compression mode (default: {DEFAULT_COMPRESSION})",
    )
    opts.add_argument("-s", "--server", help="PrivateBin instance URL (or set PRIVATEBIN_URL)")
    opts.add_argument("--timeout", type=float, help="HTTP timeout in seconds (default: 30)")

    sw = parser.add_argument_group("switches")
    sw.add_argument("-b", "--bypass", action="store_true", help="Do not check -E and -F against known values")
    sw.add_argument("-B", "--burn", action="store_true", help="Burn after reading")
    sw.add_argument("-D", "--discussion", action="store_true", help="Enable discussion")
    sw.add_argument("-d", "--debug", action="store_true", help="Debug output")

    return parser


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def _get_client(args: argparse.Namespace):
    """Build the client from -s/--timeout, falling back to env vars."""
    from pbpost.client import PrivateBinClient

    return PrivateBinClient.from_env(url=args.server, timeout=args.timeout)


def cmd_send(args: argparse.Namespace) -> None:
    """Collect input, encrypt, send, and print the links."""
    from pbpost.client import post_paste
    from pbpost.errors import PasteError
    from pbpost.options import PasteOptions, ValidationPolicy
    from pbpost.source import collect

    try:
        options = PasteOptions.from_env(
            password=args.password,
            format=args.format,
            expire=args.expire,
            compression=args.compression,
            discussion=args.discussion,
            burn=args.burn,
            policy=ValidationPolicy.PERMISSIVE if args.bypass else ValidationPolicy.STRICT,
        )
        record = collect(text=args.text, use_stdin=args.stdin, attachment=args.file)
        client = _get_client(args)
        result = post_paste(record, options, client)
    except (PasteError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print("Paste sent.")
    print(f"  paste:  {result.paste_url}")
    print(f"  delete: {result.delete_url}")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        parser.print_help()
        sys.exit(0)

    args = parser.parse_args(argv)
    _setup_logging(args.debug)
    cmd_send(args)


if __name__ == "__main__":
    main()
