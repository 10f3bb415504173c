"""
Course catalog with exact-lookup index.

The Catalog is built once from the DataLoader and then shared, read-only,
by the normalizer, the matcher and the extraction pipeline.
"""

import logging
from typing import Optional

from ..models import CatalogCourse
from .loader import DataLoader

logger = logging.getLogger(__name__)


class Catalog:
    """
    Immutable view of the official course list.

    INDEX BUILD:
    Every course registers `name.lower()` and then each `alias.lower()`,
    course by course in declaration order. If two courses share an alias
    (e.g. "APEL" for both AP English courses), the later course wins. The
    alias list is curated, so this is left as a known ambiguity rather than
    an error.

    Usage:
        catalog = Catalog.from_loader(DataLoader())
        catalog.lookup_exact("ap calc bc").name   # "AP Calculus BC"
        catalog.search("spanish")                 # manual "add a course" list
    """

    def __init__(self, courses):
        self._courses = tuple(courses)
        self._by_name = {}
        self._index = {}
        for course in self._courses:
            self._by_name[course.name.lower()] = course
            for key in course.variations():
                self._register(key.lower().strip(), course)

    @classmethod
    def from_loader(cls, loader: DataLoader) -> "Catalog":
        return cls(loader.catalog_courses)

    def _register(self, key: str, course: CatalogCourse):
        existing = self._index.get(key)
        if existing is not None and existing.name != course.name:
            logger.debug("Alias %r re-registered: %s -> %s", key, existing.name, course.name)
        self._index[key] = course

    @property
    def courses(self) -> tuple:
        """All catalog courses in declaration order."""
        return self._courses

    def __iter__(self):
        return iter(self._courses)

    def __len__(self) -> int:
        return len(self._courses)

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and name.lower().strip() in self._by_name

    def lookup_exact(self, text: str) -> Optional[CatalogCourse]:
        """Case-insensitive lookup of a canonical name or alias."""
        if not isinstance(text, str):
            return None
        return self._index.get(text.lower().strip())

    def get(self, name: str) -> Optional[CatalogCourse]:
        """Lookup by canonical name only (aliases are ignored)."""
        if not isinstance(name, str):
            return None
        return self._by_name.get(name.lower().strip())

    def search(self, query: str, limit: Optional[int] = None) -> list:
        """
        Courses whose name, any alias, or category contains `query`.

        An empty query lists the whole catalog. Results keep declaration
        order so the list reads like the printed course guide.
        """
        wanted = (query or "").lower().strip()
        results = []
        for course in self._courses:
            haystack = [course.category.value] + list(course.variations())
            if not wanted or any(wanted in h.lower() for h in haystack):
                results.append(course)
                if limit is not None and len(results) >= limit:
                    break
        return results
