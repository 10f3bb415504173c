"""
Terminal Display Implementation.

This module handles all console/terminal output formatting.
It's the ONLY place where printing happens in the courseplanner package.

To create a different UI (web, PDF, etc.), create a new class with
the same method signatures but different output handling.
"""

from ..models import ExtractionResult, RequirementCategory, RequirementsProgress


class TerminalDisplay:
    """
    Pretty terminal output for resolved courses and requirement progress.

    ═══════════════════════════════════════════════════════════════════════════
    HOW TO REPLACE THIS UI
    ═══════════════════════════════════════════════════════════════════════════

    1. FOR WEB UI:
       Create a WebDisplay class with the same method signatures.
       Instead of print(), return HTML or render templates.

    2. FOR API RESPONSE:
       Skip the display entirely and serialize the dataclasses
       (ResolvedCourse.to_dict() already gives a JSON-friendly shape).

    ═══════════════════════════════════════════════════════════════════════════
    """

    # ANSI color codes for terminal styling
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"

    BG_GREEN = "\033[42m"
    BG_RED = "\033[41m"

    GRADE_LABELS = {9: "9th Grade", 10: "10th Grade", 11: "11th Grade", 12: "12th Grade"}

    COLOR_ATTRS = ("RESET", "BOLD", "DIM", "GREEN", "YELLOW", "RED", "BLUE",
                   "CYAN", "WHITE", "BG_GREEN", "BG_RED")

    @classmethod
    def disable_colors(cls):
        """Blank every ANSI code (for --no-color and piped output)."""
        for attr in cls.COLOR_ATTRS:
            setattr(cls, attr, "")

    @classmethod
    def enable_colors(cls):
        """Restore the ANSI codes blanked by disable_colors()."""
        for attr in cls.COLOR_ATTRS:
            setattr(cls, attr, _ANSI_CODES[attr])

    @classmethod
    def print_header(cls, title: str):
        """Print a major section header with decorative borders."""
        width = 70
        print()
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}  {title}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")

    @classmethod
    def print_subheader(cls, title: str):
        """Print a subsection header."""
        print()
        print(f"{cls.BOLD}{cls.WHITE}  ── {title} ──{cls.RESET}")

    @classmethod
    def status_badge(cls, satisfied: bool) -> str:
        """Return a colored status badge."""
        if satisfied:
            return f"{cls.BG_GREEN}{cls.WHITE} ✓ MET {cls.RESET}"
        return f"{cls.BG_RED}{cls.WHITE} ✗ NOT MET {cls.RESET}"

    @staticmethod
    def _fmt(value: float) -> str:
        """5 -> "5", 1.5 -> "1.5"."""
        return f"{value:g}"

    @classmethod
    def print_courses(cls, courses: list):
        """Print the resolved course list as a table."""
        cls.print_header(f"COURSES FOUND ({len(courses)})")
        print(f"\n  {cls.BOLD}{'COURSE':<40} {'CATEGORY':<26} {'CR':>3}  {'A-G':<4} {'YEAR'}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 82}{cls.RESET}")

        for course in courses:
            ag = course.ag_designator.value if course.ag_designator else "-"
            year = str(course.year) if course.year else "-"
            marker = f" {cls.DIM}(added){cls.RESET}" if course.manually_added else ""
            print(f"  {course.name:<40} {course.category.value:<26} {course.credits:>3}  {ag:<4} {year}{marker}")

    @classmethod
    def print_no_courses(cls, result: ExtractionResult):
        """Report an empty extraction with the raw input echoed back."""
        cls.print_header("NO COURSES FOUND")
        print(f"\n  {cls.YELLOW}No courses could be read from this input.{cls.RESET}")
        print(f"  {cls.DIM}Try a clearer photo, or add courses by hand with --search.{cls.RESET}")
        if result.diagnostic:
            cls.print_subheader("Raw input")
            for line in result.diagnostic:
                print(f"  {cls.DIM}{line!r}{cls.RESET}")

    @classmethod
    def print_requirements(cls, progress: RequirementsProgress):
        """Print progress against one rule schema in tabular format."""
        unit = progress.unit
        cls.print_header(f"{progress.system.upper()} REQUIREMENTS")
        print(f"\n  {cls.BOLD}Overall Status:{cls.RESET} {cls.status_badge(progress.meets_requirements)}")
        print(f"  {cls.BOLD}Total:{cls.RESET} {cls._fmt(progress.total_earned)} / "
              f"{cls._fmt(progress.total_required)} {unit}")

        print(f"\n  {cls.BOLD}{'CATEGORY':<36} {'EARNED':>7} {'NEEDED':>7}  {'STATUS'}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 66}{cls.RESET}")

        for category in progress.categories:
            cls._print_category(category)

        for warning in progress.warnings:
            print(f"\n  {cls.YELLOW}⚠ {warning}{cls.RESET}")

    @classmethod
    def _print_category(cls, category: RequirementCategory):
        name = category.name + (" *" if category.starred else "")
        if category.is_satisfied:
            status = f"{cls.GREEN}✓ Done{cls.RESET}"
        else:
            status = f"{cls.RED}✗ Need {cls._fmt(category.remaining)}{cls.RESET}"
        print(f"  {name:<36} {cls._fmt(category.earned):>7} {cls._fmt(category.required):>7}  {status}")
        if category.note and not category.is_satisfied:
            print(f"  {cls.DIM}  └─ {category.note}{cls.RESET}")

    @classmethod
    def print_four_year_plan(cls, plan: dict):
        """
        Print the printable schedule: one block per grade, then unassigned.

        `plan` maps 9-12 (and None) to course lists, as returned by
        CoursePlanner.four_year_plan().
        """
        cls.print_header("FOUR-YEAR PLAN")
        for grade, label in cls.GRADE_LABELS.items():
            courses = plan.get(grade, [])
            credits = sum(c.credits for c in courses)
            cls.print_subheader(f"{label} ({credits} credits)")
            if not courses:
                print(f"  {cls.DIM}(none){cls.RESET}")
            for course in courses:
                print(f"    • {course.name:<40} {cls.DIM}{course.category.value}{cls.RESET}")

        unassigned = plan.get(None, [])
        if unassigned:
            cls.print_subheader("Unassigned")
            for course in unassigned:
                print(f"    • {course.name:<40} {cls.DIM}{course.category.value}{cls.RESET}")

    @classmethod
    def print_catalog_results(cls, query: str, courses: list):
        """Print catalog search results for a manual add."""
        cls.print_header(f"CATALOG SEARCH: {query!r}")
        if not courses:
            print(f"\n  {cls.YELLOW}No catalog courses match.{cls.RESET}")
            return
        print()
        for course in courses:
            ag = f" {cls.DIM}({course.ag_designator.value}){cls.RESET}" if course.ag_designator else ""
            code = f"{course.code}  " if course.code else ""
            print(f"  {cls.DIM}{code}{cls.RESET}{course.name}{ag}  "
                  f"{cls.DIM}{course.category.value}, {course.credits} cr{cls.RESET}")

    @classmethod
    def print_candidates(cls, text: str, candidates: list):
        """Print the top fuzzy candidates for one input line."""
        print(f"\n  {cls.BOLD}{text}{cls.RESET}")
        if not candidates:
            print(f"    {cls.DIM}(no candidates){cls.RESET}")
        for candidate in candidates:
            print(f"    {candidate.score:.2f}  {candidate.course}")

    @classmethod
    def print_summary(cls, results: dict):
        """Print a final one-line status per rule schema."""
        cls.print_header("SUMMARY")
        print()
        for progress in results.values():
            print(f"  {cls.BOLD}{progress.system + ':':<12}{cls.RESET} {cls.status_badge(progress.meets_requirements)}  "
                  f"{cls._fmt(progress.total_earned)} / {cls._fmt(progress.total_required)} {progress.unit}")
        print()


_ANSI_CODES = {attr: getattr(TerminalDisplay, attr) for attr in TerminalDisplay.COLOR_ATTRS}
