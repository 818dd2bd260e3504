#!/usr/bin/env python3
"""Create a minimal arXiv submission package from a LaTeX project.

Recursively discovers \\input, \\include and \\includegraphics from the main
file, keeps local .sty/.cls/.bst files that are used and the main .bbl, then
copies only the necessary files into the output directory. Supports a dry
run, an in-place prune of unneeded files, zipping the output and running
arxiv_latex_cleaner on it.
"""

import argparse
import sys
from pathlib import Path

from config.settings import MAIN_TEX, OUT_DIR, PROTECTED_FILES, RUN_CLEANER, setup_directories
from core.dependency_resolver import DependencyResolver
from core.errors import DependencyResolverError, SubmissionError
from core.submission_builder import SubmissionBuilder
from utils.file_utils import FileUtils
from utils.logging_utils import Logger


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("main_tex", nargs="?", default=MAIN_TEX, help=f"Main TeX file (default: {MAIN_TEX}).")
    parser.add_argument("-n", "--dry-run", action="store_true",
                        help="Show what would be kept/removed; do not modify files.")
    parser.add_argument("-o", "--out", default=OUT_DIR, help=f"Output directory (default: {OUT_DIR}).")
    parser.add_argument("--inplace", action="store_true",
                        help="Instead of copying to the output directory, delete unneeded files in-place.")
    parser.add_argument("--force", action="store_true", help="Overwrite the output directory if it exists.")
    parser.add_argument("--zip", action="store_true", help="Create a zip archive of the output directory.")
    cleaner = parser.add_mutually_exclusive_group()
    cleaner.add_argument("-c", "--run-cleaner", dest="run_cleaner", action="store_const", const="true",
                         help="Run arxiv_latex_cleaner on the output (default: auto if found).")
    cleaner.add_argument("--no-cleaner", dest="run_cleaner", action="store_const", const="false",
                         help="Do not run arxiv_latex_cleaner.")
    parser.add_argument("--cleaner-args", default="",
                        help="Extra args passed to arxiv_latex_cleaner (quoted string).")
    parser.add_argument("--manifest", type=Path, default=None,
                        help="Write the keep/remove lists to this CSV file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every scanned file and unresolved reference.")
    parser.set_defaults(run_cleaner=RUN_CLEANER)
    return parser.parse_args(argv)


def protected_paths() -> list:
    """Files never pruned: the configured ones plus this script when it lives in the project."""
    protected = list(PROTECTED_FILES)
    try:
        protected.append(Path(__file__).resolve().relative_to(Path.cwd().resolve()).as_posix())
    except ValueError:
        pass
    return protected


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_directories()
    logger = Logger("clean-arxiv", "DEBUG" if args.verbose else None)

    if args.inplace and args.zip:
        logger.error("--inplace cannot be combined with --zip")
        return 1

    try:
        resolver = DependencyResolver(".", args.out, protected=protected_paths(), logger=logger)
        result = resolver.resolve(args.main_tex)
    except DependencyResolverError as e:
        logger.error(str(e))
        return 1

    logger.print_resolution(result)
    if args.manifest is not None:
        path = FileUtils.save_manifest(result.to_records(), args.manifest)
        logger.info(f"Manifest written to: {path}")

    if args.dry_run:
        logger.info("Dry-run complete. No changes made.")
        return 0

    builder = SubmissionBuilder(".", args.out, logger=logger)
    if args.inplace:
        builder.prune_in_place(result)
        return 0

    try:
        builder.copy_to_output(result, force=args.force)
    except SubmissionError as e:
        logger.error(str(e))
        return 1

    builder.run_cleaner(args.run_cleaner, args.cleaner_args)

    if args.zip:
        builder.make_zip()

    logger.info("All done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
