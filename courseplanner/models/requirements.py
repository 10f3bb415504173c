"""
Requirement progress data models.

Contains dataclasses for representing the result of folding a course list
into one graduation or admissions rule schema.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RequirementCategory:
    """
    Progress within a single requirement category.

    Units follow the owning schema: credits for the local graduation schema,
    years for the A-G schemas.

    Example for local Math:
        name: "Math"
        required: 20
        earned: 10
        remaining: 10
        courses: [Algebra 1]
        note: "10 credits Algebra, 10 credits Geometry minimum"
    """
    name: str
    required: float
    earned: float
    remaining: float          # max(0, required - earned)
    courses: list             # ResolvedCourse objects counted here
    note: Optional[str] = None
    starred: bool = False     # One of the "2 of 3" local categories

    @property
    def is_satisfied(self) -> bool:
        return self.earned >= self.required


@dataclass
class RequirementsProgress:
    """
    Complete result for one rule schema.

    `system` is the display label ("Lynbrook", "UC A-G", "CSU A-G") and
    `unit` says whether the numbers are credits or years.
    """
    system: str
    unit: str
    total_required: float
    total_earned: float
    total_remaining: float
    categories: list          # RequirementCategory, in rule-table order
    meets_requirements: bool
    warnings: list = field(default_factory=list)

    def category(self, name: str) -> Optional[RequirementCategory]:
        """Find a category by name (case-insensitive)."""
        wanted = name.lower()
        for cat in self.categories:
            if cat.name.lower() == wanted:
                return cat
        return None
