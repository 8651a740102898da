"""Command line front end for the SHA-256 engine in `sha256.py`.

Usage:
    hash                   # hash everything read from standard input
    hash path/to/file      # hash the raw bytes of a file
    hash -s "message"      # hash the UTF-8 encoding of "message"
    hash --self-test       # check the engine against known-answer vectors

The whole input is read into memory, hashed in one `update` call, and the
digest is printed as 64 lowercase hex digits followed by a newline.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

from sha256 import sha256_hex
from vectors import load_vectors, run_self_test


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hash",
        description="Print the SHA-256 digest of a file or of standard input",
    )
    parser.add_argument(
        "input_file",
        nargs="?",
        help="File to hash (default: read standard input)",
    )
    parser.add_argument(
        "-s",
        "--string",
        help="Hash the UTF-8 encoding of STRING instead of reading input",
    )
    parser.add_argument(
        "--self-test",
        action="store_true",
        help="Verify the implementation against the bundled test vectors",
    )
    return parser


def read_input(filename: Optional[str]) -> bytes:
    """Return the full contents of `filename`, or of stdin when it is None."""
    if filename is None:
        return sys.stdin.buffer.read()
    with open(filename, "rb") as f:
        return f.read()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.self_test:
        if args.input_file is not None or args.string is not None:
            parser.error("--self-test takes no input")
        return 0 if run_self_test(load_vectors()) else 1

    if args.string is not None:
        if args.input_file is not None:
            parser.error("cannot combine --string with input_file")
        data = args.string.encode("utf-8")
    else:
        try:
            data = read_input(args.input_file)
        except OSError as e:
            source = args.input_file if args.input_file is not None else "<stdin>"
            sys.stderr.write(f"{source}: {e.strerror or e}\n")
            return 1

    sys.stdout.write(sha256_hex(data) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
