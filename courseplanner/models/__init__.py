"""
Data models for the course planner.

This package contains all dataclasses and enums used throughout the system.
These serve as "contracts" between different parts of the system.
"""

from .course import Category, AGDesignator, CatalogCourse, ResolvedCourse, CandidateMatch
from .requirements import RequirementCategory, RequirementsProgress
from .extraction import RawLine, ExtractionResult

__all__ = [
    # Course models
    "Category",
    "AGDesignator",
    "CatalogCourse",
    "ResolvedCourse",
    "CandidateMatch",
    # Requirement results
    "RequirementCategory",
    "RequirementsProgress",
    # Extraction
    "RawLine",
    "ExtractionResult",
]
