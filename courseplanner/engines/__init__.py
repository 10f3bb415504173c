"""
Resolution and requirements engines.

This package contains the engines that perform the core business logic of
the planner: normalizing OCR text, matching it against the catalog, running
the extraction pipeline, and computing requirement progress.
"""

from .normalizer import CourseNormalizer, is_label, split_multiline
from .matcher import CourseMatcher, similarity
from .extraction import ExtractionPipeline, categorize_fallback
from .requirements import RequirementsEngine

__all__ = [
    "CourseNormalizer",
    "CourseMatcher",
    "ExtractionPipeline",
    "RequirementsEngine",
    "is_label",
    "split_multiline",
    "similarity",
    "categorize_fallback",
]
