"""
Plan persistence.

Saves and restores a student's plan (a list of ResolvedCourse) as a plain
JSON list so a four-year grid survives between sessions.
"""

import json
import logging
from dataclasses import replace
from pathlib import Path

from ..models import ResolvedCourse
from .parser import OCRResponseParser

logger = logging.getLogger(__name__)


def save_plan(path, courses) -> Path:
    """Write courses to `path` as JSON. Returns the path written."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([c.to_dict() for c in courses], f, indent=2)
    return path


def load_plan(path) -> list:
    """
    Read a plan written by save_plan().

    Entries without a string name are skipped with a warning. A year outside
    9-12 is cleared rather than kept.

    Raises:
        FileNotFoundError: no file at `path`
        ValueError: the file is not JSON, or not a list of courses
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No saved plan at: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("courses", [])
    if not isinstance(data, list):
        raise ValueError(f"Saved plan is not a list of courses: {path}")

    courses = []
    for item in data:
        if not isinstance(item, dict) or not isinstance(item.get("name"), str) or not item["name"].strip():
            logger.warning("Skipping malformed plan entry: %r", item)
            continue
        course = ResolvedCourse.from_dict(item)
        year = OCRResponseParser.parse_grade(item.get("year"))
        if item.get("year") is not None and year is None:
            logger.warning("Clearing invalid year %r on %s", item.get("year"), course.name)
        courses.append(replace(course, year=year))
    return courses
