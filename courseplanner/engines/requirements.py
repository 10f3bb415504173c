"""
Requirements Engine.

This module folds a student's course list into progress against three rule
schemas: the local graduation requirements and the UC and CSU "a-g"
admission patterns.
"""

import logging

from ..config import (
    AG_TOTAL_YEARS, CSU_SYSTEM, LOCAL_SYSTEM, LOCAL_TOTAL_CREDITS, STARRED_REQUIRED, UC_SYSTEM,
    credits_to_years,
)
from ..data import DataLoader
from ..models import RequirementCategory, RequirementsProgress

logger = logging.getLogger(__name__)

STARRED_WARNING = ("Must complete {required} of {total} starred areas ({names}). "
                   "Currently completed: {completed}")
AG_TOTAL_WARNING = "Need minimum {required} year-long a-g courses. Currently have: {earned:.1f} years"
AG_GRADE_WARNING = "All a-g courses must be passed with C or better"


class RequirementsEngine:
    """
    Computes requirement progress from a list of ResolvedCourse.

    LOCAL SCHEMA (credits):
    -----------------------
    Every course counts toward exactly one category, chosen by its subject
    category. A category missing from the rule table rolls into the
    catch-all (Electives). Graduation needs the credit total AND at least
    2 of the 3 starred categories (World Language, Visual & Performing Arts,
    Applied Academics) individually satisfied.

    A-G SCHEMA (years):
    -------------------
    10 credits = 1.0 year. A course counts only when it carries an a-g
    designator; its bucket comes from its subject category through the
    rule table's category_map, so a course's letter does not pick the
    bucket:
    - Algebra 1 (Math, "c")          -> (c) Mathematics
    - Economics (Social Studies, "g") -> (a) History/Social Science
    - Health (no letter)              -> not counted
    UC and CSU use the same table; only the label differs.

    All computations are pure functions of the course list.
    """

    def __init__(self, data_loader: DataLoader):
        self.loader = data_loader

    def _system_rules(self, key: str) -> dict:
        """Raises KeyError when the rules file has no block for `key`."""
        systems = self.loader.requirement_rules.get("systems", {})
        if key not in systems:
            raise KeyError(f"No '{key}' system in {self.loader.rules_path}")
        return systems[key]

    def local_progress(self, courses) -> RequirementsProgress:
        """
        Progress against local graduation requirements.

        Returns:
            RequirementsProgress with categories in rule-table order, credits
            as the unit
        """
        rules = self._system_rules("local")
        table = rules.get("categories", {})
        catch_all = rules.get("catch_all", "Electives")

        # Bucket courses by category name
        buckets = {name: [] for name in table}
        for course in courses:
            name = course.category.value
            if name not in buckets:
                logger.debug("Category %r not in local table, counting %s as %s",
                             name, course.name, catch_all)
                name = catch_all
            buckets.setdefault(name, []).append(course)

        categories = []
        for name, rule in table.items():
            bucket = buckets.get(name, [])
            required = rule.get("required", 0)
            earned = sum(c.credits for c in bucket)
            categories.append(RequirementCategory(
                name=name,
                required=required,
                earned=earned,
                remaining=max(0, required - earned),
                courses=bucket,
                note=rule.get("note"),
                starred=rule.get("starred", False),
            ))

        total_required = rules.get("total_required", LOCAL_TOTAL_CREDITS)
        total_earned = sum(c.earned for c in categories)

        starred = [c for c in categories if c.starred]
        starred_completed = sum(1 for c in starred if c.is_satisfied)
        starred_required = rules.get("starred_required", STARRED_REQUIRED)

        warnings = []
        if starred_completed < starred_required:
            warnings.append(STARRED_WARNING.format(
                required=starred_required,
                total=len(starred),
                names=", ".join(c.name for c in starred),
                completed=starred_completed,
            ))

        return RequirementsProgress(
            system=rules.get("name", LOCAL_SYSTEM),
            unit=rules.get("unit", "credits"),
            total_required=total_required,
            total_earned=total_earned,
            total_remaining=max(0, total_required - total_earned),
            categories=categories,
            meets_requirements=total_earned >= total_required and starred_completed >= starred_required,
            warnings=warnings,
        )

    def ag_progress(self, courses, system: str = UC_SYSTEM) -> RequirementsProgress:
        """
        Progress against the a-g pattern.

        Args:
            courses: ResolvedCourse list
            system: Display label, UC_SYSTEM or CSU_SYSTEM

        Returns:
            RequirementsProgress with years as the unit
        """
        rules = self._system_rules("ag")
        table = rules.get("categories", {})
        category_map = rules.get("category_map", {})

        buckets = {name: [] for name in table}
        for course in courses:
            if course.ag_designator is None:
                continue
            bucket = category_map.get(course.category.value)
            if bucket in buckets:
                buckets[bucket].append(course)

        categories = []
        for name, rule in table.items():
            bucket = buckets[name]
            required = rule.get("required", 0)
            earned = credits_to_years(sum(c.credits for c in bucket))
            categories.append(RequirementCategory(
                name=name,
                required=required,
                earned=earned,
                remaining=max(0, required - earned),
                courses=bucket,
                note=rule.get("note"),
            ))

        total_required = rules.get("total_required", AG_TOTAL_YEARS)
        total_earned = sum(c.earned for c in categories)
        meets = total_earned >= total_required

        warnings = []
        if not meets:
            warnings.append(AG_TOTAL_WARNING.format(required=total_required, earned=total_earned))
        warnings.append(AG_GRADE_WARNING)

        return RequirementsProgress(
            system=system,
            unit=rules.get("unit", "years"),
            total_required=total_required,
            total_earned=total_earned,
            total_remaining=max(0, total_required - total_earned),
            categories=categories,
            meets_requirements=meets,
            warnings=warnings,
        )

    def compute_all(self, courses) -> dict:
        """
        Progress under every schema.

        Returns:
            {"local": ..., "uc": ..., "csu": ...}
        """
        courses = list(courses)
        return {
            "local": self.local_progress(courses),
            "uc": self.ag_progress(courses, UC_SYSTEM),
            "csu": self.ag_progress(courses, CSU_SYSTEM),
        }
