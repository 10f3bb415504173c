"""
Fuzzy course matching.

Scores free text against every catalog name and alias and picks the best
candidate. Edit distance comes from rapidfuzz; the rest of the score is a
handful of structural signals that work well on short, abbreviated course
names:

    exact (after normalization) ........ 1.0
    one string contains the other ...... 0.9
    word-by-word abbreviation .......... 0.9
    2-3 letter acronym of the name ..... 0.85
    blend of word overlap and edit distance (0.6 / 0.4), or either
    component alone if that is higher

The final score is the maximum of the applicable signals.
"""

import logging
import re
from typing import Optional

from rapidfuzz.distance import Levenshtein

from ..config import (
    ABBREVIATION_SCORE, ACRONYM_SCORE, CHAR_WEIGHT, CONTAINMENT_SCORE,
    EXACT_SCORE, MATCH_THRESHOLD, SHORT_INPUT_LENGTH, SHORT_MATCH_THRESHOLD,
    TOP_MATCH_COUNT, TOP_MATCH_THRESHOLD, WORD_WEIGHT,
)
from ..data import Catalog
from ..models import CandidateMatch, CatalogCourse

logger = logging.getLogger(__name__)

# Ignored when comparing word lists
COMMON_WORDS = frozenset({"the", "and", "or", "a", "an", "to", "of", "in", "on", "at", "for", "with", "&"})

_PUNCTUATION = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")


def normalize_for_comparison(text: str) -> str:
    """Lower-case, turn punctuation into spaces, collapse whitespace."""
    text = _PUNCTUATION.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def key_words(text: str) -> list:
    """Words of `text` minus the common filler words."""
    return [w for w in text.lower().split() if w and w not in COMMON_WORDS]


def char_similarity(a: str, b: str) -> float:
    """1 - edit_distance / longer_length."""
    if a == b:
        return 1.0
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - Levenshtein.distance(a, b) / longest


def word_similarity(a: str, b: str) -> float:
    """
    Fraction of words in `a` that find a partner in `b`.

    Each word of `a` takes the first word of `b` that matches exactly (1.0),
    by containment (0.7), or closely by spelling (its char similarity, when
    both words are longer than 3 letters and above 0.7).
    """
    words1 = key_words(a)
    words2 = key_words(b)
    if not words1 or not words2:
        return 0.0

    matches = 0.0
    for w1 in words1:
        for w2 in words2:
            if w1 == w2:
                matches += 1.0
                break
            if w1 in w2 or w2 in w1:
                matches += 0.7
                break
            if len(w1) > 3 and len(w2) > 3:
                sim = char_similarity(w1, w2)
                if sim > 0.7:
                    matches += sim
                    break

    return matches / max(len(words1), len(words2))


def is_abbreviation(short: str, long: str) -> bool:
    """
    Whether the words of `short` abbreviate the words of `long`, in order.

    "ap calc bc" abbreviates "ap calculus bc", "geom" abbreviates "geometry".
    Words of `short` are consumed left to right as they match successive
    words of `long`.
    """
    short_words = key_words(short)
    long_words = key_words(long)
    if not short_words:
        return False

    index = 0
    matched = 0
    for lw in long_words:
        if index >= len(short_words):
            break
        sw = short_words[index]
        if (lw == sw
                or lw.startswith(sw)
                or sw.startswith(lw[:4])
                or (len(sw) >= 2 and sw in lw)
                or (len(sw) >= 3 and len(lw) >= len(sw)
                    and char_similarity(sw, lw[:len(sw) + 1]) > 0.7)):
            index += 1
            matched += 1

    if len(short_words) <= 2:
        return matched >= 1
    return matched >= min(len(short_words) * 0.5, 2)


def _initials_match(text: str, other: str) -> bool:
    if not 2 <= len(text) <= 3:
        return False
    initials = "".join(word[0] for word in key_words(other))
    return bool(initials) and initials.startswith(text.replace(" ", ""))


def similarity(a: str, b: str) -> float:
    """
    Similarity of two course strings in [0, 1].

    Symmetric except for the acronym signal, which only reads `a` as the
    acronym.
    """
    a_norm = normalize_for_comparison(a)
    b_norm = normalize_for_comparison(b)
    if not a_norm or not b_norm:
        return 0.0
    if a_norm == b_norm:
        return EXACT_SCORE

    best = 0.0
    if a_norm in b_norm or b_norm in a_norm:
        best = max(best, CONTAINMENT_SCORE)
    if is_abbreviation(a_norm, b_norm) or is_abbreviation(b_norm, a_norm):
        best = max(best, ABBREVIATION_SCORE)
    if _initials_match(a_norm, b_norm):
        best = max(best, ACRONYM_SCORE)

    word = word_similarity(a_norm, b_norm)
    char = char_similarity(a_norm, b_norm)
    blended = max(word * WORD_WEIGHT + char * CHAR_WEIGHT, word, char)
    return max(best, blended)


class CourseMatcher:
    """
    Finds the catalog course closest to a piece of free text.

    MATCHING ORDER:
    1. Exact lookup of the raw text, then of its comparison form
       ("AP Calc-BC" -> "ap calc bc"). A hit scores 1.0.
    2. Otherwise every course is scored as the best similarity over its
       name and aliases. Ties keep the course declared first.
    3. The winner must reach 0.45, or 0.35 for inputs of 3 characters or
       fewer.

    Usage:
        matcher = CourseMatcher(catalog)
        matcher.find_best("Geometery")     # CandidateMatch(course="Geometry", ...)
        matcher.find_top("chem")           # up to 3 candidates for a picker
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def score_course(self, text: str, course: CatalogCourse) -> float:
        """Best similarity of `text` over the course's name and aliases."""
        return max(similarity(text, variant) for variant in course.variations())

    def find_best(self, text: str) -> Optional[CandidateMatch]:
        if not isinstance(text, str) or not text.strip():
            return None

        normalized = normalize_for_comparison(text)
        exact = self.catalog.lookup_exact(text) or self.catalog.lookup_exact(normalized)
        if exact is not None:
            return self._candidate(exact, EXACT_SCORE)

        threshold = SHORT_MATCH_THRESHOLD if len(normalized) <= SHORT_INPUT_LENGTH else MATCH_THRESHOLD

        best_course = None
        best_score = 0.0
        for course in self.catalog:
            score = self.score_course(text, course)
            if score > best_score:
                best_course, best_score = course, score

        if best_course is None or best_score < threshold:
            logger.debug("No catalog match for %r (best %.2f)", text, best_score)
            return None
        return self._candidate(best_course, best_score)

    def find_top(self, text: str, n: int = TOP_MATCH_COUNT) -> list:
        """
        Up to `n` candidates scoring at least 0.4, best first.

        Equal scores keep catalog order.
        """
        if not isinstance(text, str) or not text.strip() or n <= 0:
            return []

        scored = []
        for course in self.catalog:
            score = self.score_course(text, course)
            if score >= TOP_MATCH_THRESHOLD:
                scored.append(self._candidate(course, score))

        scored.sort(key=lambda m: -m.score)
        return scored[:n]

    @staticmethod
    def _candidate(course: CatalogCourse, score: float) -> CandidateMatch:
        return CandidateMatch(
            course=course.name,
            category=course.category,
            credits=course.credits,
            score=score,
            ag_designator=course.ag_designator,
        )
