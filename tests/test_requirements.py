import json

import pytest

from courseplanner.data import DataLoader
from courseplanner.engines import RequirementsEngine
from courseplanner.models import AGDesignator, Category, ResolvedCourse


def make(category, credits=10, ag=None, name=None):
    make.counter += 1
    return ResolvedCourse(
        name=name or f"{category.value} course {make.counter}",
        credits=credits,
        category=category,
        ag_designator=ag,
    )


make.counter = 0


def test_local_total_without_two_starred_areas(requirements_engine):
    courses = [make(Category.WORLD_LANGUAGE)] + [make(Category.ELECTIVES) for _ in range(21)]
    local = requirements_engine.local_progress(courses)

    assert local.total_earned == 220
    assert not local.meets_requirements
    assert local.warnings == [
        "Must complete 2 of 3 starred areas (World Language, Visual & Performing Arts, "
        "Applied Academics). Currently completed: 1"
    ]


def test_local_requirements_met(requirements_engine):
    courses = ([make(Category.WORLD_LANGUAGE), make(Category.VISUAL_PERFORMING_ARTS)]
               + [make(Category.ELECTIVES) for _ in range(20)])
    local = requirements_engine.local_progress(courses)

    assert local.total_earned == 220
    assert local.total_remaining == 0
    assert local.meets_requirements
    assert local.warnings == []


def test_local_categories_follow_the_rule_table(requirements_engine, course):
    local = requirements_engine.local_progress([course("Algebra 1"), course("Health")])

    assert [c.name for c in local.categories] == [
        "Social Studies", "English", "Math", "Science", "Physical Education", "Health",
        "World Language", "Visual & Performing Arts", "Applied Academics", "Electives",
    ]
    math = local.category("math")
    assert (math.earned, math.remaining) == (10, 10)
    assert math.note == "10 credits Algebra, 10 credits Geometry minimum"
    assert local.category("Health").is_satisfied
    assert [c.starred for c in local.categories].count(True) == 3


def test_remaining_never_negative(requirements_engine):
    courses = [make(Category.ENGLISH, ag=AGDesignator.B) for _ in range(6)]
    results = requirements_engine.compute_all(courses)

    assert results["local"].category("English").earned == 60
    assert results["local"].category("English").remaining == 0
    assert results["uc"].category("(b) English").remaining == 0
    for progress in results.values():
        assert all(c.remaining >= 0 for c in progress.categories)
        assert progress.total_remaining >= 0


def test_empty_plan(requirements_engine):
    results = requirements_engine.compute_all([])
    assert results["local"].total_earned == 0
    assert results["local"].warnings[0].endswith("Currently completed: 0")
    assert results["uc"].total_earned == 0
    assert not any(p.meets_requirements for p in results.values())


def test_single_math_course_counts_one_year(requirements_engine, course):
    uc = requirements_engine.ag_progress([course("Algebra 1")])

    assert uc.system == "UC A-G"
    assert uc.unit == "years"
    assert uc.category("(c) Mathematics").earned == pytest.approx(1.0)
    assert uc.total_earned == pytest.approx(1.0)
    assert not uc.meets_requirements
    assert uc.warnings == [
        "Need minimum 15 year-long a-g courses. Currently have: 1.0 years",
        "All a-g courses must be passed with C or better",
    ]


def test_ag_buckets_by_category_and_skips_courses_without_a_letter(requirements_engine, course):
    uc = requirements_engine.ag_progress([course("Economics"), course("Health"), course("PE 9")])

    assert uc.category("(a) History/Social Science").earned == pytest.approx(0.5)
    assert uc.category("(g) College Prep Elective").earned == 0
    assert uc.total_earned == pytest.approx(0.5)


def test_ag_requirements_met(requirements_engine):
    courses = [make(Category.MATH, ag=AGDesignator.C) for _ in range(15)]
    uc = requirements_engine.ag_progress(courses)

    assert uc.meets_requirements
    assert uc.warnings == ["All a-g courses must be passed with C or better"]
    assert not uc.category("(b) English").is_satisfied


def test_uc_and_csu_differ_only_in_label(requirements_engine, course):
    courses = [course("Algebra 1"), course("Biology"), course("Spanish 1"), course("Band")]
    results = requirements_engine.compute_all(courses)
    uc, csu = results["uc"], results["csu"]

    assert csu.system == "CSU A-G"
    assert [(c.name, c.earned) for c in uc.categories] == [(c.name, c.earned) for c in csu.categories]
    assert uc.total_earned == csu.total_earned == pytest.approx(4.0)


def engine_for(tmp_path, systems):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"systems": systems}))
    return RequirementsEngine(DataLoader(rules_path=path))


def test_totals_default_to_district_numbers(tmp_path):
    engine = engine_for(tmp_path, {"local": {"categories": {}}, "ag": {"categories": {}}})

    local = engine.local_progress([])
    assert local.total_required == 220
    assert not local.meets_requirements
    assert local.warnings[0].startswith("Must complete 2 of 0")
    assert engine.ag_progress([]).total_required == 15


@pytest.mark.parametrize("present, missing", [("ag", "local"), ("local", "ag")])
def test_missing_system_block_raises(tmp_path, present, missing):
    engine = engine_for(tmp_path, {present: {"categories": {}}})
    with pytest.raises(KeyError, match=f"No '{missing}' system"):
        engine.compute_all([])
