"""Command-line front end for linecrypt.

Reads lines from stdin, encrypts or decrypts each one with a password
prompted once per run, and prints the results on stdout:

    echo "hello world" | linecrypt -e > secret.txt
    linecrypt -d -m chacha20 < secret.txt

Empty lines are skipped. A line that fails to process is reported on stderr
as ``Line <index>: Error: <message>`` and the remaining lines still run.
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from typing import Iterable, Iterator, List, Optional, TextIO

import pyperclip

from linecrypt.core.exceptions import ConfigError, LineCryptError
from linecrypt.frontend.cli.clipboard import copy_lines_to_clipboard
from linecrypt.frontend.cli.context import build_context
from linecrypt.frontend.cli.logging_config import configure_logging
from linecrypt.security.algorithms import CipherMode
from linecrypt.security.crypter import StringCrypter
from linecrypt.security.kdf import kdf_params_to_dict


def _package_version() -> str:
    # single source is pyproject.toml; a bare checkout run via main.py has no metadata
    try:
        return version("linecrypt")
    except PackageNotFoundError:
        return "unknown"


PASSWORD_PROMPT = "Enter password: "

EXIT_OK = 0
EXIT_LINE_ERRORS = 1
EXIT_USAGE = 2

logger = logging.getLogger(__name__)


@dataclass
class LineResult:
    """Outcome of one input line: either ``output`` or ``error`` is set."""

    index: int
    output: Optional[str] = None
    error: Optional[LineCryptError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def process_lines(
    crypter: StringCrypter,
    lines: Iterable[str],
    password: str,
    encrypt: bool,
) -> Iterator[LineResult]:
    """
    Encrypt or decrypt each non-empty line independently.

    Lines are stripped before processing and empty lines are skipped; the
    reported index is the 0-based position in ``lines``. A failing line
    yields a LineResult carrying the error and does not stop the loop.
    """
    action = crypter.encrypt if encrypt else crypter.decrypt
    for index, line in enumerate(lines):
        line = line.strip()
        if not line:
            continue
        try:
            yield LineResult(index=index, output=action(line, password))
        except LineCryptError as e:
            logger.debug("line %d failed: %s", index, type(e).__name__)
            yield LineResult(index=index, error=e)


def read_password(prompt: str = PASSWORD_PROMPT) -> str:
    return getpass.getpass(prompt)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linecrypt",
        description="A simple command-line tool for encryption and decryption.",
    )
    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument(
        "-e",
        "--encrypt",
        action="store_true",
        help="Encrypt the input",
    )
    action.add_argument(
        "-d",
        "--decrypt",
        action="store_true",
        help="Decrypt the input",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=[m.value for m in CipherMode],
        default=None,
        help="Cipher mode to use (default: $LINECRYPT_MODE or chacha20)",
    )
    parser.add_argument(
        "--copy",
        action="store_true",
        help="Also copy the processed lines to the clipboard",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        ctx = build_context(mode=args.mode)
    except ConfigError as e:
        print(f"Error: {e}", file=stderr)
        return EXIT_USAGE
    logger.debug("cipher: %s", ctx.crypter.algorithm.info())
    logger.debug("kdf: %s", kdf_params_to_dict(ctx.kdf_params))

    password = ctx.password
    if password is None:
        try:
            password = read_password()
        except (EOFError, KeyboardInterrupt):
            print("Error: cannot read password!", file=stderr)
            return EXIT_USAGE
    if not password:
        print("Error: password must not be empty!", file=stderr)
        return EXIT_USAGE

    failures = 0
    produced: List[str] = []
    for result in process_lines(ctx.crypter, stdin, password, encrypt=args.encrypt):
        if result.ok:
            print(result.output, file=stdout)
            produced.append(result.output)
        else:
            failures += 1
            print(f"Line {result.index}: Error: {result.error}", file=stderr)

    if args.copy and produced:
        try:
            copy_lines_to_clipboard(produced)
        except pyperclip.PyperclipException as e:
            print(f"Error: cannot copy to clipboard: {e}", file=stderr)
            return EXIT_LINE_ERRORS

    return EXIT_LINE_ERRORS if failures else EXIT_OK


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
