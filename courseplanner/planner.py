"""
Course Planner - Main Orchestrator.

This module contains the CoursePlanner class that connects the
resolution and requirements engines to the presentation layer.
"""

import dataclasses
import logging
from typing import Optional

from .config import TOP_MATCH_COUNT, VALID_GRADES
from .data import Catalog, DataLoader, OCRResponseParser
from .engines import CourseMatcher, CourseNormalizer, ExtractionPipeline, RequirementsEngine
from .engines.extraction import dedupe_courses
from .models import ExtractionResult, ResolvedCourse
from .ui import TerminalDisplay

logger = logging.getLogger(__name__)


class CoursePlanner:
    """
    Main interface for the course planner.

    ═══════════════════════════════════════════════════════════════════════════
    ROLE: ORCHESTRATOR
    ═══════════════════════════════════════════════════════════════════════════

    This class connects the engine layer to the presentation layer:

    1. Receives OCR output (lines, a model JSON response, or plain text)
    2. Calls the extraction pipeline and requirements engine (pure data)
    3. Passes that data to the display when asked to report

    Every edit method (add_course, remove_course, assign_year, merge)
    returns a NEW list and leaves its input untouched.

    ═══════════════════════════════════════════════════════════════════════════

    USAGE:
        planner = CoursePlanner()

        result = planner.resolve_courses(["Lit/Writing", "AP Calc-BC", "PE 9"])
        progress = planner.compute_requirements(result.courses)
        progress["local"].meets_requirements

        courses = planner.add_course(result.courses, "Health", year=9)
        planner.report(courses)
    """

    def __init__(self, data_loader: Optional[DataLoader] = None, display=None):
        # All components share one loader, so data files are read once
        self.loader = data_loader or DataLoader()
        self.catalog = Catalog.from_loader(self.loader)
        self.normalizer = CourseNormalizer(self.catalog)
        self.matcher = CourseMatcher(self.catalog)
        self.parser = OCRResponseParser()
        self.pipeline = ExtractionPipeline(self.catalog, self.normalizer, self.matcher, self.parser)
        self.requirements_engine = RequirementsEngine(self.loader)

        self.display = display or TerminalDisplay()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_courses(self, raw_lines) -> ExtractionResult:
        """
        Resolve OCR lines into catalog courses.

        Args:
            raw_lines: RawLine objects, {"text": ..., "grade": ...} mappings,
                       or bare strings

        Returns:
            ExtractionResult; `error` is "no_courses_found" when nothing
            survived filtering
        """
        return self.pipeline.run(raw_lines)

    def resolve_ocr_response(self, payload) -> ExtractionResult:
        """Resolve a vision-model response ({"courses": [...]} JSON or list)."""
        return self.pipeline.run(self.parser.parse(payload))

    def resolve_text(self, text: str) -> ExtractionResult:
        """Resolve plain OCR text, one cell per line, with optional grade headers."""
        return self.pipeline.run(self.parser.parse_text(text))

    def suggest(self, text: str, n: int = TOP_MATCH_COUNT) -> list:
        """Top catalog candidates for one line (for a "did you mean" picker)."""
        return self.matcher.find_top(text, n)

    # ------------------------------------------------------------------
    # Requirements
    # ------------------------------------------------------------------

    def compute_requirements(self, courses) -> dict:
        """
        Requirement progress under every schema.

        Returns:
            {"local": RequirementsProgress, "uc": ..., "csu": ...}
        """
        return self.requirements_engine.compute_all(courses)

    # ------------------------------------------------------------------
    # Manual edits
    # ------------------------------------------------------------------

    def search_catalog(self, query: str, limit: Optional[int] = None) -> list:
        return self.catalog.search(query, limit)

    def add_course(self, courses, name: str, year: Optional[int] = None) -> list:
        """
        Add a catalog course by name or alias.

        Adding a course already on the plan returns the plan unchanged.

        Raises:
            ValueError: `name` is not in the catalog, or `year` is not 9-12
        """
        course = self.catalog.lookup_exact(name)
        if course is None:
            raise ValueError(f"Unknown course: {name!r}")
        if year is not None and year not in VALID_GRADES:
            raise ValueError(f"Grade must be one of {VALID_GRADES}, got {year!r}")

        courses = list(courses)
        if any(c.name.lower() == course.name.lower() for c in courses):
            logger.debug("%s is already on the plan", course.name)
            return courses
        return courses + [ResolvedCourse.from_catalog(course, year=year, manually_added=True)]

    def remove_course(self, courses, name: str) -> list:
        """Remove every entry named `name` (case-insensitive)."""
        wanted = name.lower().strip()
        return [c for c in courses if c.name.lower() != wanted]

    def assign_year(self, courses, name: str, year: Optional[int]) -> list:
        """
        Place a course in a grade column (None clears it).

        Raises:
            ValueError: `year` is not 9-12 or None
        """
        if year is not None and year not in VALID_GRADES:
            raise ValueError(f"Grade must be one of {VALID_GRADES}, got {year!r}")
        wanted = name.lower().strip()
        return [dataclasses.replace(c, year=year) if c.name.lower() == wanted else c
                for c in courses]

    def merge(self, existing, new) -> list:
        """Combine two course lists (e.g. two uploaded photos); first occurrence wins."""
        return dedupe_courses(list(existing) + list(new))

    def four_year_plan(self, courses) -> dict:
        """
        Group courses by grade.

        Returns:
            {9: [...], 10: [...], 11: [...], 12: [...], None: [...unassigned]}
        """
        plan = {grade: [] for grade in VALID_GRADES}
        plan[None] = []
        for course in courses:
            plan[course.year if course.year in VALID_GRADES else None].append(course)
        return plan

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def report(self, courses, show_plan: bool = False) -> dict:
        """
        Display courses and requirement progress.

        Returns:
            The compute_requirements() dict that was displayed
        """
        results = self.compute_requirements(courses)

        self.display.print_courses(courses)
        if show_plan:
            self.display.print_four_year_plan(self.four_year_plan(courses))
        for progress in results.values():
            self.display.print_requirements(progress)
        self.display.print_summary(results)
        return results
