"""CLI entry point for varconcord."""

import argparse
import logging
import os
import sys
from typing import NoReturn

from . import __version__
from .reference import ReferencePanelError, check_unique_labels
from .report_writer import write_no_call_summary, write_report
from .scoring import ConcordanceEngine

logger = logging.getLogger(__name__)


def _fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _is_readable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


def _is_writable(path: str) -> bool:
    if os.path.isdir(path):
        return False
    if os.path.exists(path):
        return os.access(path, os.W_OK)
    parent = os.path.dirname(os.path.abspath(path))
    return os.path.isdir(parent) and os.access(parent, os.W_OK)


def _validate_args(args) -> None:
    """Fail before any processing when labels, inputs or outputs are unusable."""
    try:
        check_unique_labels([label for label, _ in args.ref_sites])
    except ReferencePanelError as exc:
        _fail(str(exc))

    for path in [p for _, p in args.ref_sites] + [args.variant]:
        if not _is_readable(path):
            _fail(f"Input file not found or not readable: {path}")

    for path in (args.output, args.no_call_summary):
        if path and not _is_writable(path):
            _fail(f"Output file is not writable: {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="varconcord",
        description=(
            "Score how well each sample's genotypes agree with one or more "
            "labeled reference panels of expected alleles."
        ),
    )
    parser.add_argument(
        "-r", "--ref-sites", nargs=2, action="append", required=True,
        metavar=("LABEL", "VCF"),
        help="Labeled reference panel VCF (repeatable; labels must be unique)",
    )
    parser.add_argument(
        "-V", "--variant", required=True,
        help="Query VCF containing sample genotypes (.vcf or .vcf.gz)",
    )
    parser.add_argument(
        "-O", "--output", required=True,
        help="File to which the tab-delimited report is written",
    )
    parser.add_argument(
        "--no-call-summary", default=None,
        help="Optional file for per-sample no-call counts",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version", action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    _validate_args(args)

    engine = ConcordanceEngine()
    try:
        engine.load((label, path) for label, path in args.ref_sites)
        samples = engine.run(args.variant)
        rows = engine.report()
    except (ReferencePanelError, OSError) as exc:
        _fail(str(exc))

    try:
        with open(args.output, "w", encoding="utf-8") as out:
            write_report(out, rows)
        if args.no_call_summary:
            with open(args.no_call_summary, "w", encoding="utf-8") as out:
                write_no_call_summary(out, samples)
    except OSError as exc:
        _fail(f"Unable to write report: {exc}")

    logger.info("Wrote %d report rows to %s", len(rows), args.output)


if __name__ == "__main__":
    main()
