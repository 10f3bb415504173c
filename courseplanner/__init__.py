"""
High School Course Planner Package
==================================

Turns photographed four-year course-planning sheets into a clean course list
and tracks progress toward local graduation and UC/CSU "a-g" requirements.

ARCHITECTURE OVERVIEW
---------------------

┌─────────────────────────────────────────────────────────────────────────┐
│                         ENGINE LAYER                                     │
│        (Pure logic - returns data structures, NO UI/printing)           │
│                                                                         │
│  ┌─────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐  │
│  │ DataLoader  │  │ OCRResponse     │  │ Catalog                     │  │
│  │  (I/O)      │  │ Parser          │  │ (name + alias index)        │  │
│  └─────────────┘  └─────────────────┘  └─────────────────────────────┘  │
│                                                                         │
│  ┌──────────────────┐  ┌──────────────┐  ┌──────────────────────────┐  │
│  │ CourseNormalizer │  │ CourseMatcher│  │ ExtractionPipeline       │  │
│  │ (OCR rule table) │  │ (fuzzy score)│  │ (split/filter/resolve)   │  │
│  └──────────────────┘  └──────────────┘  └──────────────────────────┘  │
│                                                                         │
│  ┌─────────────────────────────────────────────────────────────────┐   │
│  │ RequirementsEngine (local credits, UC A-G, CSU A-G)             │   │
│  └─────────────────────────────────────────────────────────────────┘   │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   │ Returns dataclasses
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                      PRESENTATION LAYER                                  │
│  TerminalDisplay - formats and prints to console                        │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                     CoursePlanner                                        │
│          (Orchestrator - connects engines to presentation)              │
└─────────────────────────────────────────────────────────────────────────┘

PACKAGE STRUCTURE
-----------------

courseplanner/
├── __init__.py          # This file - main exports
├── config.py            # Configuration constants
├── planner.py           # CoursePlanner orchestrator
├── cli.py               # Command-line interface
│
├── models/              # Data classes and enums
│   ├── course.py        # Category, AGDesignator, CatalogCourse, ResolvedCourse
│   ├── requirements.py  # RequirementCategory, RequirementsProgress
│   └── extraction.py    # RawLine, ExtractionResult
│
├── data/                # Reference data and I/O
│   ├── loader.py        # DataLoader
│   ├── catalog.py       # Catalog
│   ├── parser.py        # OCRResponseParser
│   └── plan_store.py    # save_plan / load_plan
│
├── engines/
│   ├── normalizer.py    # CourseNormalizer, is_label, split_multiline
│   ├── matcher.py       # CourseMatcher, similarity
│   ├── extraction.py    # ExtractionPipeline
│   └── requirements.py  # RequirementsEngine
│
└── ui/
    └── terminal.py      # TerminalDisplay

USAGE
-----

    from courseplanner import CoursePlanner

    planner = CoursePlanner()
    result = planner.resolve_courses([
        {"text": "Lit/Writing", "grade": 9},
        {"text": "AP Calc-BC", "grade": 11},
    ])
    progress = planner.compute_requirements(result.courses)
    print(progress["uc"].total_earned)

Running from command line:

    courseplanner sheet.txt
    python -m courseplanner --search spanish

"""

# Version
__version__ = "1.0.0"

# Main exports
from .planner import CoursePlanner
from .cli import main

# Model exports (for programmatic use)
from .models import (
    Category,
    AGDesignator,
    CatalogCourse,
    ResolvedCourse,
    CandidateMatch,
    RequirementCategory,
    RequirementsProgress,
    RawLine,
    ExtractionResult,
)

# Engine exports (for advanced use)
from .engines import (
    CourseNormalizer,
    CourseMatcher,
    ExtractionPipeline,
    RequirementsEngine,
)

# Data exports
from .data import DataLoader, Catalog, OCRResponseParser, save_plan, load_plan

# UI exports
from .ui import TerminalDisplay

# Configuration exports
from .config import (
    DATA_DIR,
    CATALOG_FILE,
    REQUIREMENT_RULES_FILE,
    VALID_GRADES,
    NO_COURSES_FOUND,
    credits_to_years,
)

__all__ = [
    # Version
    "__version__",
    # Main entry points
    "CoursePlanner",
    "main",
    # Models
    "Category",
    "AGDesignator",
    "CatalogCourse",
    "ResolvedCourse",
    "CandidateMatch",
    "RequirementCategory",
    "RequirementsProgress",
    "RawLine",
    "ExtractionResult",
    # Engines
    "CourseNormalizer",
    "CourseMatcher",
    "ExtractionPipeline",
    "RequirementsEngine",
    # Data
    "DataLoader",
    "Catalog",
    "OCRResponseParser",
    "save_plan",
    "load_plan",
    # UI
    "TerminalDisplay",
    # Config
    "DATA_DIR",
    "CATALOG_FILE",
    "REQUIREMENT_RULES_FILE",
    "VALID_GRADES",
    "NO_COURSES_FOUND",
    "credits_to_years",
]
