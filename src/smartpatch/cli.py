"""Command-line interface.

Usage:
    smartpatch --src main.cpp --mp change.md --out build/main.cpp [--open]

Reads the source file and the markdown document holding the match/patch
sections, writes the patched text to the output path (creating parent
directories), and prints the insertion offset. Any failure prints an
error and exits with status 1 without writing the output file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from smartpatch import __version__
from smartpatch.config import PatchConfig
from smartpatch.editor import open_in_editor
from smartpatch.engine import PatchResult, apply_document
from smartpatch.errors import PatchIOError, SmartPatchError
from smartpatch.providers import available_providers
from smartpatch.utils.logger import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = PatchConfig()
    parser = argparse.ArgumentParser(
        prog="smartpatch",
        description="Apply a markdown match/patch snippet to a source file",
    )
    parser.add_argument("-s", "--src", required=True, help="Source file to patch")
    parser.add_argument(
        "-m", "--mp", required=True, help="Markdown document with match and patch sections"
    )
    parser.add_argument("-o", "--out", required=True, help="Where to write the patched file")
    parser.add_argument(
        "--tokenizer",
        default=defaults.tokenizer,
        choices=available_providers(),
        help="Source tokenizer (default: %(default)s)",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=defaults.max_steps,
        help="Abort the pattern search after this many steps (default: %(default)s)",
    )
    parser.add_argument(
        "--relative-depth",
        action="store_true",
        help="Compare nesting depth relative to the first matched token",
    )
    parser.add_argument(
        "--open", action="store_true", help="Open the result in VS Code and highlight the insertion"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _read(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PatchIOError(path, str(e)) from e


def _write(path: str, text: str) -> None:
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except OSError as e:
        raise PatchIOError(path, str(e)) from e


def run(args: argparse.Namespace) -> PatchResult:
    """Execute a parsed command line. Raises SmartPatchError on failure."""
    config = PatchConfig(
        max_steps=args.max_steps,
        relative_depth=args.relative_depth,
        tokenizer=args.tokenizer,
    )
    source = _read(args.src)
    document = _read(args.mp)
    result = apply_document(source, document, config=config, source_file=args.mp)
    _write(args.out, result.text)
    return result


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = run(args)
    except (SmartPatchError, ImportError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"Patched at byte offset {result.insertion_offset}")
    if args.open:
        open_in_editor(args.out, result.inserted.with_file(args.out))
    return 0
