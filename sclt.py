#!/usr/bin/env python3
"""SCLT - Scala scale file tool

Read, validate, rewrite and tabulate .scl tuning files.
"""

import argparse
import logging
import sys
from typing import List, Optional

import consts
import freqtables
import scl
import utils

logger = logging.getLogger("sclt")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sclt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=(
            "SCLT – Reader, validator and writer of Scala (.scl) tuning files\n"
            "\n"
            "Pitches are ratios (5/4, 2) or cents (386.3137); comment lines start with '!'.\n"
        ),
        epilog=(
            "EXAMPLES:\n"
            "  sclt.py meanquar.scl --freqs --diapason 261.626\n"
            "  sclt.py meanquar.scl --rewrite clean.scl --name meanquar.scl\n"
            "  sclt.py meanquar.scl --export-table meanquar\n"
            "  sclt.py --corpus scales/\n\n"
            "DEPENDENCIES:\n"
            "  Excel export: openpyxl\n"
        )
    )

    grp_base = parser.add_argument_group("Base", "Base")
    grp_out = parser.add_argument_group("Output", "Output")
    grp_log = parser.add_argument_group("Logging", "Logging")

    grp_base.add_argument("-v", "--version", action="version",
                          version=f"%(prog)s {consts.__version__}")
    grp_base.add_argument("files", nargs="*", metavar="FILE",
                          help="Scala .scl files to read")
    grp_base.add_argument("--corpus", metavar="DIR", default=None,
                          help="Validate every .scl file in DIR")
    grp_base.add_argument("--diapason", type=utils.positive_frequency, default=consts.DEFAULT_DIAPASON,
                          help=f"Base frequency in Hz for tables (default: {consts.DEFAULT_DIAPASON})")

    grp_out.add_argument("--freqs", action="store_true",
                         help="Print the Step/Pitch/Cents/Hz table of each scale")
    grp_out.add_argument("--rewrite", metavar="OUT.scl", default=None,
                         help="Write the scale back in canonical form (single FILE only)")
    grp_out.add_argument("--name", type=utils.non_empty_string, default=None,
                         help="Name for the '! name' header of --rewrite (default: output file name)")
    grp_out.add_argument("--export-table", metavar="OUTPUT_BASE", dest="export_table", default=None,
                         help="Export <OUTPUT_BASE>_system.txt and .xlsx (single FILE only)")

    grp_log.add_argument("--log-file", dest="log_file", default=consts.DEFAULT_LOG_FILE,
                         help=f"Log file (default: {consts.DEFAULT_LOG_FILE}); '' disables it")
    grp_log.add_argument("--verbose", action="store_true",
                         help="Log to the console as well")
    return parser


def _run_corpus(dir_path: str) -> int:
    try:
        report = scl.validate_corpus(dir_path)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        return consts.EXIT_FAILURE

    for fn, err in report.failures:
        print(f"Error: {fn}: {err}")
    print(f"{report.total} files, {len(report.scales)} valid, {len(report.failures)} failed")
    return consts.EXIT_OK if report.ok else consts.EXIT_FAILURE


def _run_file(path: str, args: argparse.Namespace) -> int:
    try:
        scale = scl.read_file(path)
    except (scl.SclError, OSError) as e:
        logger.error("%s: %s", path, e)
        print(f"Error: {path}: {e}")
        return consts.EXIT_FAILURE

    print(f"{path}: {scale.description!r}, {len(scale.pitches)} pitches")
    if args.freqs:
        freqtables.print_step_hz_table(scale, args.diapason)
    if args.rewrite:
        try:
            scl.write_file(args.rewrite, scale, args.name)
        except OSError as e:
            utils.log_export_error(args.rewrite, e)
            return consts.EXIT_FAILURE
        utils.log_export_success(args.rewrite)
    if args.export_table:
        freqtables.export_system_tables(args.export_table, scale, args.diapason)
    return consts.EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    utils.setup_logging(args.log_file or None, args.verbose)

    if not args.files and not args.corpus:
        parser.error("nothing to do: give FILE arguments or --corpus DIR")
    if (args.rewrite or args.export_table) and len(args.files) != 1:
        parser.error("--rewrite and --export-table need exactly one FILE")

    status = consts.EXIT_OK
    for path in args.files:
        status = max(status, _run_file(path, args))
    if args.corpus:
        status = max(status, _run_corpus(args.corpus))
    return status


if __name__ == "__main__":
    sys.exit(main())
