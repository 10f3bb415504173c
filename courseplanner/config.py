"""
Configuration constants for the course planner.

This module contains all configuration values and constants used throughout
the resolution pipeline and the requirements engine. Centralizing these makes
it easy to adjust behavior as district policies change.
"""

from pathlib import Path

# =============================================================================
# FILE PATHS
# =============================================================================

# Reference data ships inside the package (courseplanner/data/*.json)
BASE_DIR = Path(__file__).parent
DATA_DIR = BASE_DIR / "data"
CATALOG_FILE = DATA_DIR / "lynbrook_catalog.json"
REQUIREMENT_RULES_FILE = DATA_DIR / "requirement_rules.json"


# =============================================================================
# CREDIT UNITS
# =============================================================================
# Local graduation credits:
#   - semester course = 5 credits
#   - full-year course = 10 credits
#   - team sport, per season = 5 credits
# The A-G systems count years instead: 10 credits = 1.0 year.

YEAR_CREDITS = 10
CREDITS_PER_YEAR = 10

# Credit weight given to a line that matched nothing in the catalog.
# This guesses full-year, so an unmatched semester course is overcounted.
FALLBACK_CREDITS = YEAR_CREDITS


def credits_to_years(credits: float) -> float:
    """Convert local credits (e.g., 5) to A-G years (e.g., 0.5)."""
    return credits / CREDITS_PER_YEAR


# =============================================================================
# GRADE LEVELS
# =============================================================================

VALID_GRADES = (9, 10, 11, 12)


# =============================================================================
# MATCHER THRESHOLDS
# =============================================================================
# These weights were tuned by hand against real planning-sheet photos.
# Inputs of SHORT_INPUT_LENGTH characters or fewer ("LA", "Bio") have a small
# absolute edit distance to almost everything, so they get a lower bar.

MATCH_THRESHOLD = 0.45
SHORT_MATCH_THRESHOLD = 0.35
SHORT_INPUT_LENGTH = 3
TOP_MATCH_THRESHOLD = 0.4
TOP_MATCH_COUNT = 3

# Fixed scores for the structural similarity signals
EXACT_SCORE = 1.0
CONTAINMENT_SCORE = 0.9
ABBREVIATION_SCORE = 0.9
ACRONYM_SCORE = 0.85

# Blend of word overlap and character similarity
WORD_WEIGHT = 0.6
CHAR_WEIGHT = 0.4

# Accepted matches below this score are reported as low confidence
LOW_CONFIDENCE_SCORE = 0.6


# =============================================================================
# EXTRACTION PIPELINE
# =============================================================================

# Normalized lines of this length or shorter are dropped as noise
MIN_COURSE_LENGTH = 3

NO_COURSES_FOUND = "no_courses_found"


# =============================================================================
# REQUIREMENT SYSTEMS
# =============================================================================

LOCAL_SYSTEM = "Lynbrook"
UC_SYSTEM = "UC A-G"
CSU_SYSTEM = "CSU A-G"

LOCAL_TOTAL_CREDITS = 220
AG_TOTAL_YEARS = 15

# 2 of these 3 categories must each be individually satisfied
STARRED_REQUIRED = 2
