"""
Course extraction pipeline.

Takes the raw OCR lines of one planning-sheet photo and resolves them into a
deduplicated list of catalog courses:

    split -> normalize -> drop labels/noise -> dedupe
          -> exact lookup -> fuzzy match -> keyword fallback
          -> dedupe by canonical name

Nothing in here raises on bad input. A batch where nothing survives comes
back as ExtractionResult.no_courses_found() with the raw input echoed.
"""

import logging
from typing import Optional

from ..config import FALLBACK_CREDITS, LOW_CONFIDENCE_SCORE, MIN_COURSE_LENGTH
from ..data import Catalog, OCRResponseParser
from ..models import Category, ExtractionResult, RawLine, ResolvedCourse
from .matcher import CourseMatcher
from .normalizer import CourseNormalizer, is_label, split_multiline

logger = logging.getLogger(__name__)

# Keyword heuristic for lines the catalog cannot place, checked in order.
# World Language also accepts a bare "language" unless it reads as English or
# Language Arts (handled in categorize_fallback).
FALLBACK_KEYWORDS = (
    (Category.SOCIAL_STUDIES, ("history", "government", "economics", "ethnic studies",
                               "social studies", "civics")),
    (Category.ENGLISH, ("english", "literature", "writing", "composition",
                        "language arts", "eld")),
    (Category.MATH, ("math", "algebra", "geometry", "calculus", "trigonometry",
                     "precalc", "statistics", "multivariable", "differential equations")),
    (Category.SCIENCE, ("biology", "chemistry", "physics", "science", "physiology",
                        "anatomy", "environmental", "stem")),
    (Category.PHYSICAL_EDUCATION, ("pe ", "physical education", "racquet", "weight training",
                                   "total fitness", "team sport", "athletics", "basketball",
                                   "volleyball", "soccer", "wrestling", "softball", "baseball",
                                   "tennis", "golf", "swimming", "diving", "track",
                                   "cross country")),
    (Category.WORLD_LANGUAGE, ("spanish", "french", "german", "chinese", "mandarin",
                               "japanese", "korean", "italian", "latin")),
    (Category.VISUAL_PERFORMING_ARTS, ("art", "music", "theatre", "theater", "dance", "band",
                                       "orchestra", "choir", "chorus", "drama")),
    (Category.APPLIED_ACADEMICS, ("computer", "programming", "journalism", "yearbook",
                                  "stagecraft", "engineering", "business", "culinary",
                                  "law", "construction", "media")),
    (Category.HEALTH, ("health",)),
)


def categorize_fallback(name: str) -> Category:
    """Best-guess subject for a course name that is not in the catalog."""
    lower = name.lower()
    for category, keywords in FALLBACK_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return category
        if (category is Category.WORLD_LANGUAGE and "language" in lower
                and "english" not in lower and "arts" not in lower):
            return category
    return Category.ELECTIVES


def dedupe_courses(courses) -> list:
    """Drop repeated course names (case-insensitive), keeping the first."""
    seen = set()
    unique = []
    for course in courses:
        key = course.name.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(course)
    return unique


class ExtractionPipeline:
    """
    Resolves OCR'd lines into ResolvedCourse objects.

    Input lines may be RawLine objects, {"text"|"name": ..., "grade": ...}
    mappings, or bare strings. A grade outside 9-12 is dropped (the course
    is kept); a line whose text is not a string is skipped and logged.

    Usage:
        pipeline = ExtractionPipeline(catalog)
        result = pipeline.run(["Lit/Writing", "AP Calc-BC", "PE 9"])
        result.courses[1].name   # "AP Calculus BC"
    """

    def __init__(self, catalog: Catalog, normalizer: Optional[CourseNormalizer] = None,
                 matcher: Optional[CourseMatcher] = None,
                 parser: Optional[OCRResponseParser] = None):
        self.catalog = catalog
        self.normalizer = normalizer or CourseNormalizer(catalog)
        self.matcher = matcher or CourseMatcher(catalog)
        self.parser = parser or OCRResponseParser()

    def run(self, raw_lines) -> ExtractionResult:
        raw_lines = list(raw_lines or [])
        candidates = self.collect_candidates(raw_lines)

        if not candidates:
            logger.info("No courses found in %d raw line(s)", len(raw_lines))
            return ExtractionResult.no_courses_found([self._echo(item) for item in raw_lines])

        resolved = [self.resolve_line(text, grade) for text, grade in candidates]
        return ExtractionResult(courses=dedupe_courses(resolved))

    def collect_candidates(self, raw_lines) -> list:
        """
        Steps 1-4: split, normalize, filter and dedupe.

        Returns:
            List of (normalized_text, grade) tuples
        """
        candidates = []
        seen = set()

        for item in raw_lines:
            line = self.parser.parse_item(item)
            if line is None:
                continue

            for fragment in split_multiline(line.text):
                normalized = self.normalizer.normalize(fragment)

                if is_label(fragment) or is_label(normalized):
                    logger.debug("Dropped label %r", fragment)
                    continue
                if len(normalized) <= MIN_COURSE_LENGTH:
                    logger.debug("Dropped short fragment %r", fragment)
                    continue

                key = normalized.lower()
                if key in seen:
                    continue
                seen.add(key)
                candidates.append((normalized, line.grade))

        return candidates

    def resolve_line(self, text: str, grade: Optional[int] = None) -> ResolvedCourse:
        """Steps 5-6: exact lookup, then fuzzy match, then keyword fallback."""
        course = self.catalog.lookup_exact(text)
        if course is not None:
            logger.debug("Exact match %r -> %s", text, course.name)
            return ResolvedCourse.from_catalog(course, year=grade)

        match = self.matcher.find_best(text)
        if match is not None:
            if match.score < LOW_CONFIDENCE_SCORE:
                logger.warning("Low-confidence match %r -> %s (%.2f)", text, match.course, match.score)
            else:
                logger.debug("Fuzzy match %r -> %s (%.2f)", text, match.course, match.score)
            return ResolvedCourse(
                name=match.course,
                credits=match.credits,
                category=match.category,
                ag_designator=match.ag_designator,
                year=grade,
            )

        category = categorize_fallback(text)
        logger.debug("No catalog match for %r, categorized as %s", text, category.value)
        return ResolvedCourse(name=text, credits=FALLBACK_CREDITS, category=category, year=grade)

    @staticmethod
    def _echo(item):
        if isinstance(item, RawLine):
            return item.text
        if isinstance(item, dict):
            return item.get("name", item.get("text"))
        return item
