"""
Command-Line Interface for the Course Planner.

This module reads OCR output from a file, resolves it against the catalog
and prints the course list and requirement progress.

MODES:
------
1. RESOLVE: courseplanner sheet.txt         (plain text, one cell per line)
            courseplanner response.json     (vision-model JSON response)
2. LOAD:    courseplanner --load plan.json  (a plan saved with --save)
3. SEARCH:  courseplanner --search spanish  (browse the catalog)

EXIT CODES:
-----------
0 success, 1 no courses found, 2 usage error (argparse's own convention).
"""

import argparse
import logging
from pathlib import Path

from .data import load_plan, save_plan
from .planner import CoursePlanner
from .ui import TerminalDisplay

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_COURSES = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="courseplanner",
        description="Resolve OCR'd course-planning sheets and track graduation and A-G progress.",
    )
    parser.add_argument("source", nargs="?",
                        help="OCR text file (one cell per line) or .json model response")
    parser.add_argument("--search", metavar="QUERY",
                        help="list catalog courses matching QUERY and exit")
    parser.add_argument("--load", metavar="PATH", help="read a saved plan instead of a source")
    parser.add_argument("--save", metavar="PATH", help="write the resolved plan to PATH")
    parser.add_argument("--top", action="store_true",
                        help="show the top catalog candidates for each input line")
    parser.add_argument("--plan", action="store_true", help="print the four-year plan by grade")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    parser.add_argument("--no-color", action="store_true", help="disable ANSI colors")
    return parser


def _read_source(planner: CoursePlanner, path: Path):
    """Resolve a source file; .json is treated as a model response."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return planner.resolve_ocr_response(text), planner.parser.parse(text)
    return planner.resolve_text(text), planner.parser.parse_text(text)


def main(argv=None) -> int:
    """
    Command-line entry point.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.no_color:
        TerminalDisplay.disable_colors()
    else:
        TerminalDisplay.enable_colors()

    planner = CoursePlanner()
    display = planner.display

    # =========================================================================
    #  MODE 3: CATALOG SEARCH
    # =========================================================================
    if args.search is not None:
        display.print_catalog_results(args.search, planner.search_catalog(args.search))
        return EXIT_OK

    if args.source and args.load:
        parser.print_usage()
        print("courseplanner: error: give either a source file or --load, not both")
        return EXIT_USAGE

    # =========================================================================
    #  MODE 2: SAVED PLAN
    # =========================================================================
    if args.load:
        try:
            courses = load_plan(args.load)
        except (FileNotFoundError, ValueError) as e:
            print(f"courseplanner: error: {e}")
            return EXIT_USAGE

    # =========================================================================
    #  MODE 1: RESOLVE OCR OUTPUT
    # =========================================================================
    elif args.source:
        path = Path(args.source)
        if not path.is_file():
            print(f"courseplanner: error: no such file: {path}")
            return EXIT_USAGE

        result, lines = _read_source(planner, path)

        if args.top:
            display.print_header("CANDIDATES")
            for line in lines:
                display.print_candidates(line.text, planner.suggest(line.text))

        if not result.ok:
            display.print_no_courses(result)
            return EXIT_NO_COURSES
        courses = result.courses

    else:
        parser.print_usage()
        print("courseplanner: error: a source file, --load or --search is required")
        return EXIT_USAGE

    planner.report(courses, show_plan=args.plan)

    if args.save:
        saved = save_plan(args.save, courses)
        logger.info("Saved %d course(s) to %s", len(courses), saved)
        print(f"  Plan saved to {saved}")

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
