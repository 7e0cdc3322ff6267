from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from assertgen import __version__, config
from assertgen.errors import AssertionGeneratorError
from assertgen.generator.entry_points import AssertionsEntryPointType
from assertgen.pipeline import run_pipeline

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="assertgen",
        description="Generate AssertJ custom assertion classes for Java types.",
    )
    parser.add_argument(
        "names",
        nargs="+",
        metavar="CLASS_OR_PACKAGE",
        help="Fully qualified class names or packages (sub packages included).",
    )
    parser.add_argument(
        "-s",
        "--source",
        action="append",
        default=[],
        metavar="PATH",
        help="Java source file or directory scanned recursively. Repeatable.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=config.OUTPUT_DIR,
        help="Base directory of the generated sources (default: %(default)s).",
    )
    parser.add_argument(
        "-p",
        "--package",
        default=config.GENERATED_ASSERTIONS_PACKAGE,
        help="Put every generated class in this package instead of the subject's one.",
    )
    parser.add_argument(
        "-t",
        "--templates",
        type=Path,
        default=None,
        help="Directory of templates overriding the bundled ones file by file.",
    )
    parser.add_argument(
        "-H",
        "--hierarchical",
        action="store_true",
        help="Generate Abstract<Type>Assert + <Type>Assert pairs mirroring the class hierarchy.",
    )
    parser.add_argument(
        "-a",
        "--all-fields",
        action="store_true",
        default=config.GENERATE_ASSERTIONS_FOR_ALL_FIELDS,
        help="Also generate assertions for non public fields.",
    )
    parser.add_argument(
        "-e",
        "--entry-point",
        action="append",
        default=[],
        metavar="TYPE",
        help="Entry point class to generate: "
             + ", ".join(t.name.lower() for t in AssertionsEntryPointType) + ". Repeatable.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    try:
        entry_points = [AssertionsEntryPointType.from_name(name) for name in args.entry_point]
    except ValueError as exc:
        print(f"assertgen: error: {exc}", file=sys.stderr)
        return 2

    try:
        result = run_pipeline(
            args.names,
            args.source,
            args.output,
            package=args.package,
            templates_dir=args.templates,
            all_fields=args.all_fields,
            hierarchical=args.hierarchical,
            entry_points=entry_points,
        )
    except AssertionGeneratorError as exc:
        logger.error("%s", exc)
        return 1

    for error in result["parse_errors"]:
        logger.warning("Could not parse %s: %s", error["file"], error["error"])
    for path in result["files"]:
        logger.info("Generated %s", path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
