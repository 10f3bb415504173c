"""
Data loading and caching.

This module handles loading the reference data files with caching so the
catalog and rule tables are read from disk once per process.
"""

import json
import logging
from pathlib import Path

from ..config import CATALOG_FILE, REQUIREMENT_RULES_FILE
from ..models import AGDesignator, CatalogCourse, Category

logger = logging.getLogger(__name__)


class DataLoader:
    """
    Loads and caches all required data files.

    WHY LAZY LOADING: Properties only load files when first accessed.
    This means a caller that only needs the requirement tables never parses
    the course catalog.

    DATA SOURCES:
    - lynbrook_catalog.json: Official course list from the district's Course
      Selection & Planning Guide (SOURCE OF TRUTH for credits, categories,
      A-G letters and the alias vocabulary)
    - requirement_rules.json: Local graduation and A-G requirement tables

    Usage:
        loader = DataLoader()
        courses = loader.catalog_courses   # tuple of CatalogCourse
        rules = loader.requirement_rules   # raw dict
    """

    def __init__(self, catalog_path: Path = CATALOG_FILE,
                 rules_path: Path = REQUIREMENT_RULES_FILE):
        self.catalog_path = Path(catalog_path)
        self.rules_path = Path(rules_path)
        # Private cache variables - None means "not loaded yet"
        self._catalog_data = None
        self._catalog_courses = None
        self._requirement_rules = None

    @property
    def catalog_data(self) -> dict:
        """Raw catalog JSON (school name, source, course entries)."""
        if self._catalog_data is None:
            self._catalog_data = self._read_json(self.catalog_path)
        return self._catalog_data

    @property
    def catalog_courses(self) -> tuple:
        """
        Catalog entries as CatalogCourse objects, in declaration order.

        Declaration order matters: it is the tie-break order for fuzzy
        matching and the registration order for the alias index.
        """
        if self._catalog_courses is None:
            entries = self.catalog_data.get("courses", [])
            self._catalog_courses = tuple(self._parse_course(e) for e in entries)
            logger.debug("Loaded %d catalog courses from %s",
                         len(self._catalog_courses), self.catalog_path)
        return self._catalog_courses

    @property
    def requirement_rules(self) -> dict:
        """
        Requirement rule tables.

        Defines the "shape" of each schema - which categories exist, how much
        each requires, and which local categories are starred.
        """
        if self._requirement_rules is None:
            self._requirement_rules = self._read_json(self.rules_path)
        return self._requirement_rules

    def _read_json(self, path: Path) -> dict:
        if not path.exists():
            raise FileNotFoundError(f"Data file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _parse_course(self, entry: dict) -> CatalogCourse:
        """
        Parse a single catalog entry.

        Unknown category labels fall back to Electives rather than failing
        the whole load.
        """
        category = Category.parse(entry.get("category"))
        if category.value != entry.get("category"):
            logger.warning("Catalog course %r has unknown category %r, using %s",
                           entry.get("name"), entry.get("category"), category.value)
        return CatalogCourse(
            name=entry["name"],
            credits=int(entry["credits"]),
            category=category,
            ag_designator=AGDesignator.parse(entry.get("ag")),
            aliases=tuple(entry.get("aliases", [])),
            code=entry.get("code"),
        )
