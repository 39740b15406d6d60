"""Command-line front door for lazypdf.

Parses CLI options, resolves the document list, and configures logging.
Then dispatches into the interactive viewer runtime.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from . import __version__
from .errors import LazyPdfError
from .logs import configure_logging
from .runtime import run_viewer
from .runtime.config import load_settings

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def discover_documents(directory: Path, pattern: str) -> list[Path]:
    """Return files matching ``pattern`` in ``directory``, in enumeration order."""
    return [path for path in directory.glob(pattern) if path.is_file()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazypdf",
        description="Browse PDF pages as inline images in the terminal.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Documents to browse, in order. Defaults to every PDF in the current directory.",
    )
    parser.add_argument("-p", "--page", type=_positive_int, default=None, help="Open the first document at page N.")
    parser.add_argument("--viewer", default=None, help="Command used by 'o' to open the document externally.")
    parser.add_argument(
        "--image-protocol",
        choices=("auto", "iterm", "kitty"),
        default=None,
        help="Inline image protocol (default: from config, else auto-detect).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write log records to PATH.")
    parser.add_argument("--debug", action="store_true", help="Log at debug level.")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None, default_directory: Path | None = None) -> None:
    """Parse CLI arguments and browse the resulting documents.

    ``default_directory`` is primarily for tests; when omitted the current
    working directory is searched when no paths are given. Prints the path of
    the last-viewed document on a clean quit.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.debug)

    settings = load_settings()
    if args.viewer:
        settings = replace(settings, viewer_command=args.viewer)
    if args.image_protocol:
        settings = replace(settings, image_protocol=args.image_protocol)

    if args.paths:
        paths = [Path(raw) for raw in args.paths]
    else:
        directory = default_directory if default_directory is not None else Path(".")
        paths = discover_documents(directory, settings.glob_pattern)
    if not paths:
        raise SystemExit("Couldn't find pdf files")

    if not sys.stdin.isatty():
        raise SystemExit("Not an interactive tty")

    start_page = args.page - 1 if args.page is not None else None
    try:
        last_path = run_viewer(paths, settings, start_page)
    except LazyPdfError as exc:
        logger.error("startup failed: %s", exc)
        raise SystemExit(f"lazypdf: {exc}") from exc
    sys.stdout.write(f"{last_path}\n")


if __name__ == "__main__":
    main()
