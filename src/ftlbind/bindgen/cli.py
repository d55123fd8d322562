"""Command-line entry point: generate localizer bindings.

Analyses the default-language directory under the translation root and
writes the bindings module. Intended to be run by the build whenever a
default-language resource file changes.

Exit codes:
    0: Bindings written, or up to date with --check
    1: --check found the output out of date
    2: Resources could not be parsed or analysed, or I/O failed

Usage:
    ftlbind-generate [--root DIR] [--default-language TAG] [--class-name NAME]
                     [--output FILE] [--check] [-v]

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ftlbind.diagnostics import LocalizationError
from ftlbind.localization import LocalizationConfig

from .analyzer import find_default_directory
from .emitter import DEFAULT_CLASS_NAME, generate_bindings

__all__ = ["main"]

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="ftlbind-generate",
        description="Generate typed localizer bindings from default-language .ftl files.",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Translation root directory (default: $TRANSLATION_DIR or ./localizations)",
    )
    parser.add_argument(
        "--default-language",
        default=None,
        help="Default language tag (default: $DEFAULT_LANG or en_US)",
    )
    parser.add_argument(
        "--class-name",
        default=DEFAULT_CLASS_NAME,
        help=f"Name of the generated class (default: {DEFAULT_CLASS_NAME})",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the module here instead of standard output",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Do not write; exit 1 if --output is missing or out of date",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress to standard error",
    )
    args = parser.parse_args(argv)
    if args.check and args.output is None:
        parser.error("--check requires --output")
    return args


def main(argv: list[str] | None = None) -> int:
    """Run the generator and return the process exit code."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = LocalizationConfig.from_env()
    root = args.root if args.root is not None else config.root_dir
    default_language = args.default_language or config.default_language

    try:
        directory = find_default_directory(root, default_language)
        source = generate_bindings(directory, class_name=args.class_name)
    except (LocalizationError, OSError, UnicodeDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.output is None:
        sys.stdout.write(source)
        return 0

    if args.check:
        try:
            current = args.output.read_text(encoding="utf-8")
        except FileNotFoundError:
            current = None
        if current != source:
            print(f"{args.output} is out of date; rerun ftlbind-generate", file=sys.stderr)
            return 1
        logger.info("%s is up to date", args.output)
        return 0

    try:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(source, encoding="utf-8")
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    logger.info("Wrote %s from %s", args.output, directory)
    return 0


if __name__ == "__main__":
    sys.exit(main())
