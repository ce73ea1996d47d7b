from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pocompose.actions import _format_files, cat_file
from pocompose.config import CONFIG_FILENAME, ToolConfig

logger = logging.getLogger("pocompose")


def _configure_logging(verbosity: int) -> None:
    if verbosity < 0:
        level = logging.ERROR
    elif verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", force=True)


def _target_files(args: argparse.Namespace, config: ToolConfig) -> list[Path]:
    """Files named on the command line, else the ones configured in pocompose.toml."""
    if args.files:
        return [Path(name) for name in args.files]
    return config.resolve_files()


def _run_format(args: argparse.Namespace, config: ToolConfig) -> int:
    paths = _target_files(args, config)
    if not paths:
        print(
            f"Error: no PO files given and no 'files' configured in {CONFIG_FILENAME}",
            file=sys.stderr,
        )
        return 2

    encoding = args.encoding or config.encoding
    failed: list[Path] = []
    would_change = False
    for message in _format_files(
        paths, failed, encoding=encoding, check=args.check, allow_lossy=args.allow_lossy
    ):
        if message.startswith("would reformat"):
            would_change = True
        print(message)

    if failed:
        print("\nFailed files:")
        for path in failed:
            print(f"  - {path}")
        return 1
    if args.check and would_change:
        return 1
    return 0


def _run_cat(args: argparse.Namespace, config: ToolConfig) -> int:
    encoding = args.encoding or config.encoding
    try:
        cat_file(Path(args.file), sys.stdout, encoding=encoding)
    except (OSError, ValueError) as exc:
        logger.error("%s: %s", args.file, exc)
        return 1
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pocompose",
        description="Rewrite PO/POT files in canonical composed form.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Configuration file (default: ./{CONFIG_FILENAME})",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Show more log output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")

    subparsers = parser.add_subparsers(dest="command", required=True)

    sub = subparsers.add_parser("format", help="Rewrite PO/POT files in place")
    sub.add_argument("files", nargs="*", help="PO/POT files (default: 'files' from the config)")
    sub.add_argument("--check", action="store_true", help="Report files that would change, write nothing")
    sub.add_argument(
        "--allow-lossy",
        action="store_true",
        help="Rewrite files even when header flags or previous msgctxt/msgid_plural would be dropped",
    )
    sub.add_argument("--encoding", default=None, help="File encoding (default: utf-8)")
    sub.set_defaults(handler=_run_format)

    sub = subparsers.add_parser("cat", help="Print the composed text of a PO/POT file")
    sub.add_argument("file", help="PO/POT file")
    sub.add_argument("--encoding", default=None, help="File encoding (default: utf-8)")
    sub.set_defaults(handler=_run_cat)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(-1 if args.quiet else args.verbose)

    try:
        config = ToolConfig.load(args.config)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    return args.handler(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
