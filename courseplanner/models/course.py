"""
Course data models.

Contains the catalog entry, the resolved per-student course record and the
ephemeral match candidate, plus the two closed vocabularies (subject
category and A-G designator) they are built from.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Category(Enum):
    """
    Subject-area buckets used by the local graduation schema.

    The value is the display label that appears in the catalog JSON and in
    requirement tables. ELECTIVES doubles as the "Other" bucket for anything
    that cannot be placed.
    """
    ENGLISH = "English"
    MATH = "Math"
    SCIENCE = "Science"
    SOCIAL_STUDIES = "Social Studies"
    PHYSICAL_EDUCATION = "Physical Education"
    WORLD_LANGUAGE = "World Language"
    VISUAL_PERFORMING_ARTS = "Visual & Performing Arts"
    APPLIED_ACADEMICS = "Applied Academics"
    HEALTH = "Health"
    ELECTIVES = "Electives"

    @classmethod
    def parse(cls, label) -> "Category":
        """Map a label (or member) to a Category, falling back to ELECTIVES."""
        if isinstance(label, cls):
            return label
        if isinstance(label, str):
            wanted = label.strip().rstrip("*").lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        return cls.ELECTIVES


class AGDesignator(Enum):
    """
    UC/CSU "a-g" subject letters.

    a: History/Social Science    e: Language Other than English
    b: English                   f: Visual & Performing Arts
    c: Mathematics               g: College Prep Elective
    d: Laboratory Science
    """
    A = "a"
    B = "b"
    C = "c"
    D = "d"
    E = "e"
    F = "f"
    G = "g"

    @classmethod
    def parse(cls, letter) -> Optional["AGDesignator"]:
        """Return the designator for a letter, or None when absent/unknown."""
        if isinstance(letter, cls):
            return letter
        if not isinstance(letter, str) or not letter.strip():
            return None
        try:
            return cls(letter.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class CatalogCourse:
    """
    One official course from the school's course catalog.

    Loaded once from the catalog JSON and never modified afterwards.

    Attributes:
        name: Canonical course name (e.g., "AP Calculus BC"), unique
        credits: 5 (semester) or 10 (full year)
        category: Subject category for the local graduation schema
        ag_designator: A-G letter, or None if not A-G approved
        aliases: Alternate spellings and abbreviations, in catalog order
        code: District course number when the guide lists one
    """
    name: str
    credits: int
    category: Category
    ag_designator: Optional[AGDesignator] = None
    aliases: tuple = ()
    code: Optional[str] = None

    def variations(self) -> tuple:
        """Canonical name followed by every alias."""
        return (self.name,) + tuple(self.aliases)


@dataclass(frozen=True)
class ResolvedCourse:
    """
    A course on one student's plan.

    Created by the extraction pipeline (one per OCR'd course) or by a manual
    add. Lists of these are replaced wholesale on every edit, never mutated.

    Attributes:
        name: Canonical name from the catalog (or the cleaned OCR text when
              nothing in the catalog matched)
        credits: Local graduation credits
        category: Subject category
        ag_designator: A-G letter or None
        year: Grade level 9-12 when known from the sheet's column
        manually_added: True when the student added it by hand
    """
    name: str
    credits: int
    category: Category
    ag_designator: Optional[AGDesignator] = None
    year: Optional[int] = None
    manually_added: bool = False

    @classmethod
    def from_catalog(cls, course: CatalogCourse, year: Optional[int] = None,
                     manually_added: bool = False) -> "ResolvedCourse":
        return cls(
            name=course.name,
            credits=course.credits,
            category=course.category,
            ag_designator=course.ag_designator,
            year=year,
            manually_added=manually_added,
        )

    def to_dict(self) -> dict:
        """Plain JSON-friendly shape (used for saving a plan)."""
        return {
            "name": self.name,
            "credits": self.credits,
            "category": self.category.value,
            "ag_designator": self.ag_designator.value if self.ag_designator else None,
            "year": self.year,
            "manually_added": self.manually_added,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ResolvedCourse":
        return cls(
            name=data["name"],
            credits=data.get("credits", 0),
            category=Category.parse(data.get("category")),
            ag_designator=AGDesignator.parse(data.get("ag_designator")),
            year=data.get("year"),
            manually_added=bool(data.get("manually_added", False)),
        )


@dataclass(frozen=True)
class CandidateMatch:
    """A scored catalog candidate for one input string."""
    course: str
    category: Category
    credits: int
    score: float
    ag_designator: Optional[AGDesignator] = field(default=None, compare=False)
