import logging

from courseplanner.engines import categorize_fallback
from courseplanner.models import AGDesignator, Category, RawLine


def test_resolves_noisy_sheet_lines(pipeline):
    result = pipeline.run(["Lit/Writing", "AP Calc-BC", "PE 9"])

    assert result.ok
    assert [(c.name, c.category, c.credits) for c in result.courses] == [
        ("Literature & Writing", Category.ENGLISH, 10),
        ("AP Calculus BC", Category.MATH, 10),
        ("PE 9", Category.PHYSICAL_EDUCATION, 10),
    ]


def test_headers_only_reports_no_courses_found(pipeline):
    result = pipeline.run(["9th Grade", "English", ""])

    assert not result.ok
    assert result.error == "no_courses_found"
    assert result.courses == []
    assert result.diagnostic == ["9th Grade", "English", ""]


def test_empty_input(pipeline):
    assert pipeline.run([]).error == "no_courses_found"
    assert pipeline.run(None).error == "no_courses_found"


def test_spelling_variants_collapse_to_one_course(pipeline):
    result = pipeline.run(["AP Physics C:Mech", "AP Physics C Mech", "AP Phys C Mech"])
    assert [c.name for c in result.courses] == ["AP Physics C: Mechanics"]


def test_grade_is_carried_and_first_occurrence_wins(pipeline):
    result = pipeline.run([
        {"text": "Geometry", "grade": 9},
        {"text": "Geom", "grade": 10},
        RawLine("Biology", 10),
    ])
    assert [(c.name, c.year) for c in result.courses] == [("Geometry", 9), ("Biology", 10)]


def test_invalid_grade_is_dropped_not_the_course(pipeline):
    result = pipeline.run([{"text": "Biology", "grade": 13}, RawLine("Chemistry", 8)])
    assert [(c.name, c.year) for c in result.courses] == [("Biology", None), ("Chemistry", None)]


def test_malformed_items_are_skipped(pipeline, caplog):
    with caplog.at_level(logging.WARNING):
        result = pipeline.run([{"text": 5}, 42, "Chemistry"])

    assert [c.name for c in result.courses] == ["Chemistry"]
    assert "malformed" in caplog.text


def test_multiline_cell_is_split(pipeline):
    result = pipeline.run([{"text": "Biology\nChem\n9th Grade", "grade": 9}])
    assert [(c.name, c.year) for c in result.courses] == [("Biology", 9), ("Chemistry", 9)]


def test_catalog_data_is_attached(pipeline):
    course = pipeline.run(["Econ"]).courses[0]
    assert course.name == "Economics"
    assert course.credits == 5
    assert course.ag_designator is AGDesignator.G


def test_unknown_course_falls_back_to_keywords(pipeline):
    course = pipeline.run(["Varsity Golf"]).courses[0]
    assert course.name == "Varsity Golf"
    assert course.category is Category.PHYSICAL_EDUCATION
    assert course.credits == 10
    assert course.ag_designator is None


def test_output_names_are_unique(pipeline):
    result = pipeline.run([
        "Lit/Writing", "LA", "English 9", "Literature & Writing", "Geometry", "geometry", "Geom",
        "AP Bio", "AP Biology", "Spanish II", "Spanish 2",
    ])
    names = [c.name.lower() for c in result.courses]
    assert len(names) == len(set(names))
    assert len(names) == 4


def test_categorize_fallback():
    assert categorize_fallback("Civics") is Category.SOCIAL_STUDIES
    assert categorize_fallback("German 1") is Category.WORLD_LANGUAGE
    assert categorize_fallback("Sign Language") is Category.WORLD_LANGUAGE
    assert categorize_fallback("Dance") is Category.VISUAL_PERFORMING_ARTS
    assert categorize_fallback("Intro to Robotics Engineering") is Category.APPLIED_ACADEMICS
    assert categorize_fallback("Peer Tutoring") is Category.ELECTIVES
