"""
Extraction data models.

These dataclasses are the contract between the OCR caller and the
resolution pipeline: what goes in (raw cell text with an optional grade
column) and what comes out (resolved courses, or a reportable failure).
"""

from dataclasses import dataclass, field
from typing import Optional

from ..config import NO_COURSES_FOUND


@dataclass(frozen=True)
class RawLine:
    """
    One OCR'd cell from a planning sheet.

    `text` may contain several courses separated by line breaks. `grade` is
    the column the cell sat under (9-12) when the OCR pass could tell.
    """
    text: str
    grade: Optional[int] = None


@dataclass
class ExtractionResult:
    """
    Outcome of one pipeline run.

    On success `courses` holds the deduplicated ResolvedCourse list and
    `error` is None. When nothing survives filtering, `error` is
    "no_courses_found" and `diagnostic` echoes the raw input so the caller
    can show it alongside a retry prompt.
    """
    courses: list = field(default_factory=list)
    error: Optional[str] = None
    diagnostic: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def no_courses_found(cls, raw_input: list) -> "ExtractionResult":
        return cls(courses=[], error=NO_COURSES_FOUND, diagnostic=list(raw_input))
