"""
Course name normalization.

This module turns one noisy OCR line into the most likely canonical course
label, decides whether a line is a sheet header rather than a course, and
splits multi-line cells.

RULE ORDER:
-----------
Rules run in a fixed order and the first rule that produces a name wins:

    cleanup  -> fix known OCR garbling ("Lit/Wnting", "stern")
    exact    -> catalog names/aliases and a few ambiguous short phrases
    ap       -> AP courses, only when the text contains "ap"
    subject  -> non-AP courses, specific patterns before generic ones
    fallback -> the cleaned text, unchanged

Within the AP phase the order is math, science, english, social studies,
languages, computer science, art. "physics" alone would otherwise match
several AP variants, and a generic rule placed early swallows specific ones
("world lit" must be seen before plain "lit/writing").
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from ..data import Catalog

PHASE_EXACT = "exact"
PHASE_AP = "ap"
PHASE_SUBJECT = "subject"

# Known OCR garbles, applied to the raw text before anything else
OCR_FIXES = (
    (re.compile(r"Lit\s*/\s*Writing", re.IGNORECASE), "Literature & Writing"),
    (re.compile(r"Lit\s*/\s*Wnting", re.IGNORECASE), "Literature & Writing"),
    (re.compile(r"Llt\s*/\s*Writing", re.IGNORECASE), "Literature & Writing"),
    (re.compile(r"\bstern\b", re.IGNORECASE), "STEM"),
)

# Short tokens that look like labels but are real course abbreviations
LABEL_ALLOW_LIST = ("la", "l.a.", "lit", "pe9", "pe10", "pe 9", "pe 10", "ap")
SPLIT_ALLOW_LIST = ("la", "l.a.", "lit", "pe", "pe9", "pe10")

# A line containing any of these is a course, never a header
COURSE_KEYWORDS = (
    "literature", "writing", "calculus", "algebra", "geometry",
    "chemistry", "biology", "physics", "history", "government",
    "economics", "spanish", "french", "mandarin", "chinese", "japanese",
    "story", "style", "pe ", "pe9", "pe10", "inclusion",
    "racquet", "weight training", "fitness", "statistics", "linear",
)

# Column and row headers printed on the planning sheet
IGNORE_LIST = (
    "9th grade", "10th grade", "11th grade", "12th grade",
    "9th", "10th", "11th", "12th", "grade",
    "economics &", "social studies", "electives", "applied academics",
    "world language", "visual & performing arts", "visual and performing arts",
)

GRADE_LABEL = re.compile(r"^\d+(st|nd|rd|th)?\s*(grade)?$", re.IGNORECASE)
SUBJECT_ROW_HEADERS = ("math", "science", "english", "pe")

HONORS = re.compile(r"honors|h\b")


@dataclass(frozen=True)
class Rule:
    """
    One step of the normalization cascade.

    `predicate` and `transform` both receive the lower-cased, cleaned text.
    `transform` may return None to pass the text on to the next rule, which
    is how a broad predicate ("mentions english") falls through when no
    specific variant is found.
    """
    name: str
    phase: str
    predicate: Callable[[str], bool]
    transform: Callable[[str], Optional[str]]


def _has(*words):
    return lambda s: any(w in s for w in words)


def _all(*words):
    return lambda s: all(w in s for w in words)


def _re(pattern):
    compiled = re.compile(pattern)
    return lambda s: compiled.search(s) is not None


def _is(*phrases):
    return lambda s: s in phrases


def _const(name):
    return lambda s: name


def _honors(honors_name, plain_name):
    return lambda s: honors_name if HONORS.search(s) else plain_name


def _ap_physics(s: str) -> str:
    if re.search(r"mech", s):
        return "AP Physics C: Mechanics"
    if re.search(r"e\s*&\s*m|electricity|magnetism", s):
        return "AP Physics C: Electricity & Magnetism"
    if re.search(r"\bc\b", s):
        return "AP Physics C: Mechanics"
    if "1" in s:
        return "AP Physics 1"
    if "2" in s:
        return "AP Physics 2"
    return "AP Physics 1"


def _ap_english(s: str) -> Optional[str]:
    if re.search(r"lang", s):
        return "AP English Language & Composition"
    if re.search(r"lit", s):
        return "AP English Literature & Composition"
    return None


def _ap_computer_science(s: str) -> Optional[str]:
    if "principles" in s or re.search(r"csp|cs\s*p", s):
        return "AP Computer Science Principles"
    if "a" in s or re.search(r"csa|cs\s*a", s):
        return "AP Computer Science A"
    return None


def _english_by_grade(s: str) -> Optional[str]:
    match = re.match(r"^(?:english|eng)\s*(9|10|11|12)\b", s)
    if not match:
        return None
    return {
        "9": "Literature & Writing",
        "10": "World Literature & Writing",
        "11": "American Literature & Writing",
        "12": "Story and Style",
    }[match.group(1)]


def _algebra(s: str) -> Optional[str]:
    if re.search(r"\b(2|ii)\b", s):
        return "Algebra 2/Trigonometry" if "trig" in s else "Algebra 2"
    if re.search(r"\b(1|i)\b", s):
        return "Algebra 1"
    return None


def _economics(s: str) -> str:
    if "macro" in s:
        return "AP Macroeconomics"
    if "micro" in s:
        return "AP Microeconomics"
    return "Economics"


def _pe_by_grade(s: str) -> Optional[str]:
    if "10" in s:
        return "PE 10"
    if "9" in s:
        return "PE 9"
    return None


def _language_level(language: str, pattern: str, honors_is_four: bool = False):
    """Level 1-4 of a world language, checked highest first ("iii" contains "ii")."""
    levels = (
        (4, r"\s*(?:4|iv)"),
        (3, r"\s*(?:3|iii)"),
        (2, r"\s*(?:2|ii)"),
        (1, r"\s*(?:1|i\b)"),
    )

    def transform(s: str) -> Optional[str]:
        if honors_is_four and re.search(pattern + r".*honors", s):
            return f"{language} 4"
        for level, suffix in levels:
            if re.search(pattern + suffix, s):
                return f"{language} {level}"
        return None

    return transform


def _art_level(s: str) -> Optional[str]:
    if "2" in s or s == "art ii":
        return "Art 2"
    if "1" in s or s in ("art i", "art"):
        return "Art 1"
    return None


RULES = (
    # ---------------- exact phrases ----------------
    Rule("pe_9", PHASE_EXACT, _is("pe 9", "pe9", "pe ninth"), _const("PE 9")),
    Rule("pe_10", PHASE_EXACT, _is("pe 10", "pe10", "pe tenth"), _const("PE 10")),
    Rule("pe_inclusion", PHASE_EXACT,
         _is("pe inclusion", "pe inc", "inclusion pe", "pe incl"), _const("PE Inclusion")),
    Rule("language_arts", PHASE_EXACT, _is("la", "l.a.", "l a"), _const("Literature & Writing")),
    Rule("lit", PHASE_EXACT, _is("lit"), _const("Literature & Writing")),
    Rule("stem", PHASE_EXACT, _is("stem", "stern"), _const("STEM")),

    # ---------------- AP: math ----------------
    Rule("ap_calculus_bc", PHASE_AP, _re(r"calc.*bc|bc.*calc"), _const("AP Calculus BC")),
    Rule("ap_calculus_ab", PHASE_AP, _re(r"calc.*ab|ab.*calc"), _const("AP Calculus AB")),
    Rule("ap_statistics", PHASE_AP, _has("statistics", "stats"), _const("AP Statistics")),
    # ---------------- AP: science ----------------
    Rule("ap_physics", PHASE_AP, _has("physics", "phys"), _ap_physics),
    Rule("ap_biology", PHASE_AP, _has("biology", "bio"), _const("AP Biology")),
    Rule("ap_chemistry", PHASE_AP, _has("chemistry", "chem"), _const("AP Chemistry")),
    Rule("ap_environmental", PHASE_AP, _re(r"environmental|enviro|env\s*sci"),
         _const("AP Environmental Science")),
    # ---------------- AP: english ----------------
    Rule("ap_english", PHASE_AP, _re(r"eng"), _ap_english),
    # ---------------- AP: social studies ----------------
    Rule("ap_us_history", PHASE_AP,
         lambda s: re.search(r"us|u\.?\s*s\.?|united states", s) is not None and "hist" in s,
         _const("AP US History")),
    Rule("ap_world_history", PHASE_AP, _all("world", "hist"), _const("AP World History")),
    Rule("ap_government", PHASE_AP, _has("gov"), _const("AP US Government & Politics")),
    Rule("ap_macroeconomics", PHASE_AP, _has("macro"), _const("AP Macroeconomics")),
    Rule("ap_microeconomics", PHASE_AP, _has("micro"), _const("AP Microeconomics")),
    Rule("ap_psychology", PHASE_AP, _has("psych"), _const("AP Psychology")),
    Rule("ap_human_geography", PHASE_AP, _all("human", "geo"), _const("AP Human Geography")),
    # ---------------- AP: world languages ----------------
    Rule("ap_spanish", PHASE_AP, _has("spanish", "span"), _const("AP Spanish Language & Culture")),
    Rule("ap_french", PHASE_AP, _has("french"), _const("AP French Language & Culture")),
    Rule("ap_chinese", PHASE_AP, _has("chinese", "mandarin"), _const("AP Chinese Language & Culture")),
    # ---------------- AP: computer science ----------------
    Rule("ap_computer_science", PHASE_AP, _has("comp", "computer"), _ap_computer_science),
    # ---------------- AP: art ----------------
    Rule("ap_studio_art", PHASE_AP, _has("art", "studio"), _const("AP Studio Art")),
    Rule("ap_music_theory", PHASE_AP, _all("music", "theory"), _const("AP Music Theory")),

    # ---------------- english ----------------
    Rule("world_literature", PHASE_SUBJECT, lambda s: "world" in s and "lit" in s,
         _const("World Literature & Writing")),
    Rule("world_history", PHASE_SUBJECT, _all("world", "hist"),
         _honors("World History Honors", "World History")),
    Rule("american_literature", PHASE_SUBJECT,
         lambda s: re.search(r"american|am\s", s) is not None and "lit" in s,
         _const("American Literature & Writing")),
    Rule("literature_writing", PHASE_SUBJECT,
         _re(r"lit.*writ|writ.*lit|lit\s*/\s*writ|lit\s*&\s*writ"), _const("Literature & Writing")),
    Rule("story_and_style", PHASE_SUBJECT, _all("story", "style"), _const("Story and Style")),
    Rule("english_by_grade", PHASE_SUBJECT, _re(r"^(?:english|eng)\s*\d"), _english_by_grade),
    # ---------------- math ----------------
    Rule("pre_calculus", PHASE_SUBJECT, _re(r"pre.*calc|precalc"),
         _honors("Pre-Calculus Honors", "Pre-Calculus")),
    Rule("calculus_bc", PHASE_SUBJECT, _re(r"calc.*bc|bc.*calc"), _const("AP Calculus BC")),
    Rule("calculus_ab", PHASE_SUBJECT, _re(r"calc.*ab|ab.*calc"), _const("AP Calculus AB")),
    Rule("linear_algebra", PHASE_SUBJECT, _re(r"linear.*alg|dual.*linear"), _const("Linear Algebra")),
    Rule("algebra", PHASE_SUBJECT, _has("algebra"), _algebra),
    Rule("geometry", PHASE_SUBJECT, _has("geometry", "geom"), _const("Geometry")),
    Rule("multivariable", PHASE_SUBJECT, _re(r"multi.*variable|multivariable|multi.*calc"),
         _const("Multivariable Calculus")),
    Rule("differential_equations", PHASE_SUBJECT, _re(r"diff.*eq"), _const("Differential Equations")),
    Rule("statistics", PHASE_SUBJECT, _has("statistics", "stats"), _const("AP Statistics")),
    # ---------------- science ----------------
    Rule("biology", PHASE_SUBJECT, _re(r"biology|^bio\b"), _honors("Biology Honors", "Biology")),
    Rule("chemistry", PHASE_SUBJECT, _has("chemistry", "chem"), _honors("Chemistry Honors", "Chemistry")),
    Rule("physiology", PHASE_SUBJECT, lambda s: "physiology" in s or s == "physio", _const("Physiology")),
    Rule("physics", PHASE_SUBJECT, _has("physics", "phys"), _honors("Physics Honors", "Physics")),
    Rule("science_and_society", PHASE_SUBJECT, _all("science", "society"), _const("Science & Society")),
    # ---------------- social studies ----------------
    Rule("us_history", PHASE_SUBJECT,
         lambda s: re.search(r"us|u\.s\.|united states", s) is not None and "history" in s,
         _const("US History")),
    Rule("government", PHASE_SUBJECT, _has("government", "gov"), _const("US Government")),
    Rule("economics", PHASE_SUBJECT, _has("econ"), _economics),
    Rule("ethnic_studies", PHASE_SUBJECT, _all("ethnic", "studies"),
         _const("Introduction to Ethnic Studies")),
    # ---------------- physical education ----------------
    Rule("pe_inclusion_keyword", PHASE_SUBJECT, _has("inclusion"), _const("PE Inclusion")),
    Rule("pe_by_grade", PHASE_SUBJECT, _re(r"pe|physical.*education"), _pe_by_grade),
    Rule("racquet_sports", PHASE_SUBJECT, _re(r"racquet|racket"), _const("Racquet Sports")),
    Rule("weight_training", PHASE_SUBJECT, _re(r"weight.*training|weights"), _const("Weight Training")),
    Rule("total_fitness", PHASE_SUBJECT, lambda s: re.search(r"total.*fitness", s) is not None or s == "fitness",
         _const("Total Fitness")),
    # ---------------- team sports ----------------
    Rule("basketball", PHASE_SUBJECT, _re(r"^(?:basketball|bball|bb)$"), _const("Basketball")),
    Rule("volleyball", PHASE_SUBJECT, _re(r"^(?:volleyball|vball|vb)$"), _const("Volleyball")),
    Rule("soccer", PHASE_SUBJECT, _is("soccer"), _const("Soccer")),
    Rule("track_and_field", PHASE_SUBJECT, _has("track"), _const("Track & Field")),
    Rule("cross_country", PHASE_SUBJECT, _re(r"cross.*country|^xc$|^cc$"), _const("Cross Country")),
    Rule("swimming", PHASE_SUBJECT, _re(r"^(?:swimming|swim)$"), _const("Swimming")),
    Rule("wrestling", PHASE_SUBJECT, _is("wrestling"), _const("Wrestling")),
    Rule("tennis", PHASE_SUBJECT, _is("tennis"), _const("Tennis")),
    Rule("softball", PHASE_SUBJECT, _is("softball"), _const("Softball")),
    Rule("baseball", PHASE_SUBJECT, _is("baseball"), _const("Baseball")),
    Rule("football", PHASE_SUBJECT, _is("football"), _const("Football")),
    # ---------------- world languages ----------------
    Rule("spanish", PHASE_SUBJECT, _has("spanish"), _language_level("Spanish", "spanish", honors_is_four=True)),
    Rule("french", PHASE_SUBJECT, _has("french"), _language_level("French", "french")),
    Rule("mandarin", PHASE_SUBJECT, _has("mandarin", "chinese"),
         _language_level("Mandarin", "(?:mandarin|chinese)")),
    Rule("japanese", PHASE_SUBJECT, _has("japanese"), _language_level("Japanese", "japanese")),
    # ---------------- applied academics ----------------
    Rule("journalism", PHASE_SUBJECT, lambda s: "journalism" in s or s == "journ", _const("Journalism")),
    Rule("yearbook", PHASE_SUBJECT, _has("yearbook"), _const("Yearbook")),
    Rule("stagecraft", PHASE_SUBJECT, _re(r"stagecraft|tech.*theat"), _const("Stagecraft Tech")),
    Rule("java_programming", PHASE_SUBJECT, _has("java", "programming"), _const("Computer Programming Java")),
    # ---------------- visual & performing arts ----------------
    Rule("art", PHASE_SUBJECT, _re(r"\bart\b"), _art_level),
    Rule("photography", PHASE_SUBJECT, lambda s: "photography" in s or s == "photo", _const("Photography")),
    Rule("drama", PHASE_SUBJECT, _has("drama", "theatre", "theater"), _const("Drama")),
    Rule("band", PHASE_SUBJECT, _is("band"), _const("Band")),
    Rule("orchestra", PHASE_SUBJECT, _is("orchestra"), _const("Orchestra")),
    Rule("choir", PHASE_SUBJECT, _re(r"choir|chorus"), _const("Choir")),
    # ---------------- health ----------------
    Rule("health", PHASE_SUBJECT, _is("health"), _const("Health")),
)


def clean_ocr(text: str) -> str:
    """Fix known OCR garbling and trim."""
    for pattern, replacement in OCR_FIXES:
        text = pattern.sub(replacement, text)
    return text.strip()


def _allow_listed(lower: str, allow_list) -> bool:
    return any(lower == abbr or lower.startswith(abbr + " ") for abbr in allow_list)


def is_label(text: str) -> bool:
    """
    True when `text` is a sheet header or label rather than a course.

    Examples: "9th Grade", "10th", "English" (bare row header), "World
    Language", "".  "LA", "PE 9" and "Lit" are courses.
    """
    stripped = text.strip()
    lower = stripped.lower()

    if _allow_listed(lower, LABEL_ALLOW_LIST):
        return False

    if any(keyword in lower for keyword in COURSE_KEYWORDS):
        return False

    if any(lower == ignore or ignore in lower for ignore in IGNORE_LIST):
        return True

    if GRADE_LABEL.match(lower):
        return True

    if lower in SUBJECT_ROW_HEADERS and len(stripped) < 10:
        return True

    if len(stripped) < 2:
        return True

    # Two-character strings are only courses when allow-listed (checked above)
    return len(stripped) == 2


def split_multiline(raw: str) -> list:
    """
    Split one OCR cell into candidate lines.

    Drops fragments under 2 characters, and 2-3 character fragments that are
    not known abbreviations, so stray glyphs do not become courses.
    """
    lines = []
    for part in raw.splitlines():
        part = part.strip()
        if len(part) < 2:
            continue
        if len(part) > 3 or _allow_listed(part.lower(), SPLIT_ALLOW_LIST):
            lines.append(part)
    return lines


class CourseNormalizer:
    """
    Maps a raw OCR line to its most likely canonical course name.

    The catalog is optional; with it, any canonical name or alias is
    resolved in the exact phase, which makes normalize() idempotent on
    catalog names.

    Usage:
        normalizer = CourseNormalizer(catalog)
        normalizer.normalize("AP Calc-BC")   # "AP Calculus BC"
        normalizer.explain("AP Calc-BC")     # ("AP Calculus BC", "ap_calculus_bc")
    """

    def __init__(self, catalog: Optional[Catalog] = None, rules=RULES):
        self.catalog = catalog
        self.rules = tuple(rules)

    def normalize(self, raw: str) -> str:
        return self.explain(raw)[0]

    def explain(self, raw: str) -> tuple:
        """
        Normalize and report which rule fired.

        Returns:
            (normalized_name, rule_name) where rule_name is "catalog" for a
            direct catalog hit and "fallback" when nothing matched
        """
        cleaned = clean_ocr(raw)
        lower = cleaned.lower()

        if self.catalog is not None:
            course = self.catalog.lookup_exact(cleaned)
            if course is not None:
                return course.name, "catalog"

        has_ap = "ap" in lower
        for rule in self.rules:
            if rule.phase == PHASE_AP and not has_ap:
                continue
            if not rule.predicate(lower):
                continue
            result = rule.transform(lower)
            if result is not None:
                return result, rule.name

        return cleaned, "fallback"

    def rule(self, name: str) -> Rule:
        """Look up a rule by name (KeyError if absent)."""
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise KeyError(name)
