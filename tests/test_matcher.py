import pytest

from courseplanner.engines.matcher import (
    char_similarity,
    is_abbreviation,
    normalize_for_comparison,
    similarity,
    word_similarity,
)


def test_normalize_for_comparison():
    assert normalize_for_comparison("  AP Calc-BC ") == "ap calc bc"
    assert normalize_for_comparison("Lit/Writing") == "lit writing"
    assert normalize_for_comparison("AP Physics C: E&M") == "ap physics c e m"


def test_char_similarity():
    assert char_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
    assert char_similarity("same", "same") == 1.0
    assert char_similarity("", "") == 1.0


def test_word_similarity():
    assert word_similarity("world history", "world history honors") == pytest.approx(2 / 3)
    assert word_similarity("", "anything") == 0.0


def test_is_abbreviation():
    assert is_abbreviation("ap calc bc", "ap calculus bc")
    assert is_abbreviation("geom", "geometry")
    assert not is_abbreviation("zz top", "geometry")


def test_similarity_signals():
    assert similarity("", "Geometry") == 0.0
    assert similarity("Geometry", "geometry") == 1.0
    assert similarity("AP Chem", "AP Chemistry") == pytest.approx(0.9)
    assert similarity("wh", "World History") == pytest.approx(0.85)


def test_similarity_is_bounded():
    for a, b in [("Bio", "Biology Honors"), ("Spanish 3", "French 3"), ("zzz", "Band")]:
        assert 0.0 <= similarity(a, b) <= 1.0


def test_find_best_typo(matcher):
    match = matcher.find_best("Geometery")
    assert match.course == "Geometry"
    assert match.score == pytest.approx(0.9)


def test_find_best_exact_after_comparison_normalization(matcher):
    match = matcher.find_best("ap calc-bc")
    assert match.course == "AP Calculus BC"
    assert match.score == 1.0
    assert match.credits == 10


@pytest.mark.parametrize("text", ["zzz", "", "   ", None])
def test_find_best_no_match(matcher, text):
    assert matcher.find_best(text) is None


def test_exact_alias_always_wins(matcher, catalog):
    for course in catalog:
        for alias in course.aliases:
            if catalog.lookup_exact(alias) is not course:
                continue  # shared alias, owned by a later course
            match = matcher.find_best(alias)
            assert match.course == course.name
            assert match.score == 1.0


@pytest.mark.parametrize("text", [
    "Geometery", "AP Bilogy", "Chemestry", "Spansh 2", "Wrld History", "Bio", "Gov", "LA", "qqqq",
])
def test_accepted_matches_clear_the_threshold(matcher, text):
    match = matcher.find_best(text)
    if match is not None:
        threshold = 0.35 if len(normalize_for_comparison(text)) <= 3 else 0.45
        assert match.score >= threshold


def test_find_top(matcher):
    top = matcher.find_top("chem")
    assert [m.course for m in top] == ["Chemistry", "Chemistry Honors", "AP Chemistry"]
    assert top[0].score == 1.0
    assert [m.score for m in top] == sorted((m.score for m in top), reverse=True)


def test_find_top_limits_and_floor(matcher):
    assert len(matcher.find_top("spanish", n=2)) == 2
    assert matcher.find_top("zzz") == []
    assert matcher.find_top("chem", n=0) == []
    assert all(m.score >= 0.4 for m in matcher.find_top("history", n=10))
