"""
OCR response parsing.

This module turns whatever the OCR oracle hands back into RawLine objects
for the extraction pipeline. Two shapes are supported:

- the vision model's JSON answer: {"courses": [{"name": ..., "grade": 9}, ...]}
  (a bare list, or a list of plain strings, is accepted too)
- plain text, one cell per line, where a grade-column header such as
  "9th Grade" or "[Grade 10]" applies to the lines that follow it, and a
  "11: AP Bio" prefix applies to a single line
"""

import json
import logging
import re

from ..config import VALID_GRADES
from ..models import RawLine

logger = logging.getLogger(__name__)

GRADE_HEADER = re.compile(r"(?i)^\[?\s*(?:grade\s*(9|10|11|12)|(9|10|11|12)(?:st|nd|rd|th)?\s*grade)\s*\]?:?$")
GRADE_PREFIX = re.compile(r"^(9|10|11|12)\s*:\s*(.+)$")


class OCRResponseParser:
    """
    Parses OCR output into RawLine objects.

    MALFORMED INPUT:
    A bad item (not a string or mapping, missing text, wrong type) is skipped
    and logged; the rest of the batch is kept. A payload that is not JSON at
    all yields an empty list, which the pipeline reports as
    "no courses found" instead of crashing.

    GRADES:
    Only 9, 10, 11 and 12 are kept. Anything else ("13", "Senior", 9.5)
    is dropped and the course keeps no grade.
    """

    def parse(self, payload) -> list:
        """
        Parse a model response (JSON string, dict, or list).

        Returns:
            List of RawLine, in payload order
        """
        if isinstance(payload, (bytes, bytearray)):
            payload = payload.decode("utf-8", errors="replace")
        if isinstance(payload, str):
            try:
                payload = json.loads(payload.strip())
            except ValueError:
                logger.warning("OCR response is not valid JSON; no lines extracted")
                return []

        if isinstance(payload, dict):
            items = payload.get("courses", [])
        elif isinstance(payload, list):
            items = payload
        else:
            logger.warning("Unexpected OCR response type: %s", type(payload).__name__)
            return []

        if not isinstance(items, list):
            logger.warning("OCR response 'courses' is not a list")
            return []

        lines = []
        for item in items:
            line = self.parse_item(item)
            if line is not None:
                lines.append(line)
        return lines

    def parse_item(self, item):
        """Parse one item; returns None when the item is unusable."""
        if isinstance(item, str):
            return RawLine(text=item.strip())
        if isinstance(item, RawLine):
            if not isinstance(item.text, str):
                logger.warning("Skipping malformed OCR item: %r", item)
                return None
            return RawLine(text=item.text.strip(), grade=self.parse_grade(item.grade))
        if isinstance(item, dict):
            text = item.get("name", item.get("text"))
            if not isinstance(text, str):
                logger.warning("Skipping malformed OCR item: %r", item)
                return None
            return RawLine(text=text.strip(), grade=self.parse_grade(item.get("grade")))
        logger.warning("Skipping malformed OCR item: %r", item)
        return None

    @staticmethod
    def parse_grade(value):
        """Return 9-12 as int, or None for anything else."""
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value if value in VALID_GRADES else None
        if isinstance(value, str) and value.strip().isdigit():
            grade = int(value.strip())
            return grade if grade in VALID_GRADES else None
        return None

    def parse_text(self, text: str) -> list:
        """
        Parse plain text (one cell per line) into RawLine objects.

        Grade-column headers set the grade for following lines and are
        not emitted themselves; blank lines are skipped.
        """
        lines = []
        current_grade = None
        for raw in text.splitlines():
            stripped = raw.strip()
            if not stripped:
                continue

            header = GRADE_HEADER.match(stripped)
            if header:
                current_grade = int(header.group(1) or header.group(2))
                continue

            prefixed = GRADE_PREFIX.match(stripped)
            if prefixed:
                lines.append(RawLine(text=prefixed.group(2).strip(), grade=int(prefixed.group(1))))
            else:
                lines.append(RawLine(text=stripped, grade=current_grade))
        return lines
