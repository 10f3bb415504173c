import json

import pytest

from courseplanner import load_plan, save_plan


def test_resolve_and_compute(planner):
    result = planner.resolve_courses([{"text": "Lit/Writing", "grade": 9}, {"text": "AP Calc-BC", "grade": 11}])
    progress = planner.compute_requirements(result.courses)

    assert set(progress) == {"local", "uc", "csu"}
    assert progress["local"].total_earned == 20
    assert progress["uc"].total_earned == pytest.approx(2.0)


def test_resolve_ocr_response(planner):
    payload = json.dumps({"courses": [{"name": "AP Bio", "grade": 11}, {"name": "Spanish II", "grade": 12}]})
    result = planner.resolve_ocr_response(payload)
    assert [(c.name, c.year) for c in result.courses] == [("AP Biology", 11), ("Spanish 2", 12)]


def test_resolve_text(planner):
    result = planner.resolve_text("9th Grade\nLit/Writing\nPE 9\n10th Grade\nGeometry")
    assert [(c.name, c.year) for c in result.courses] == [
        ("Literature & Writing", 9), ("PE 9", 9), ("Geometry", 10),
    ]


def test_suggest(planner):
    assert planner.suggest("chem")[0].course == "Chemistry"


def test_add_course_by_alias(planner, course):
    plan = [course("Geometry", year=10)]
    updated = planner.add_course(plan, "apush", year=11)

    assert len(plan) == 1
    added = updated[-1]
    assert (added.name, added.year, added.manually_added) == ("AP US History", 11, True)


def test_add_course_already_on_plan_is_a_no_op(planner, course):
    plan = [course("Geometry")]
    assert planner.add_course(plan, "Geom") == plan


def test_add_course_rejects_bad_input(planner):
    with pytest.raises(ValueError):
        planner.add_course([], "Underwater Basket Weaving")
    with pytest.raises(ValueError):
        planner.add_course([], "Geometry", year=8)


def test_remove_course(planner, course):
    plan = [course("Geometry"), course("Biology")]
    assert [c.name for c in planner.remove_course(plan, "geometry")] == ["Biology"]
    assert len(plan) == 2


def test_assign_year(planner, course):
    plan = [course("Geometry"), course("Biology", year=9)]
    updated = planner.assign_year(plan, "Geometry", 10)

    assert [c.year for c in updated] == [10, 9]
    assert plan[0].year is None
    assert planner.assign_year(updated, "Geometry", None)[0].year is None
    with pytest.raises(ValueError):
        planner.assign_year(plan, "Geometry", 13)


def test_merge_keeps_first_occurrence(planner, course):
    first = [course("Geometry", year=9), course("Biology")]
    second = [course("Geometry", year=10), course("Band")]
    merged = planner.merge(first, second)
    assert [(c.name, c.year) for c in merged] == [("Geometry", 9), ("Biology", None), ("Band", None)]


def test_four_year_plan(planner, course):
    plan = planner.four_year_plan([course("Geometry", year=10), course("Band"), course("Biology", year=10)])

    assert list(plan) == [9, 10, 11, 12, None]
    assert [c.name for c in plan[10]] == ["Geometry", "Biology"]
    assert plan[9] == []
    assert [c.name for c in plan[None]] == ["Band"]


def test_search_catalog(planner):
    assert [c.name for c in planner.search_catalog("french", limit=2)] == ["French 1", "French 2"]


def test_save_and_load_plan(tmp_path, planner, course):
    plan = planner.add_course([course("Economics", year=12)], "Band", year=9)
    path = save_plan(tmp_path / "plan.json", plan)

    assert load_plan(path) == plan


def test_load_plan_accepts_wrapped_list(tmp_path):
    path = tmp_path / "plan.json"
    path.write_text(json.dumps({"courses": [
        {"name": "Biology", "credits": 10, "category": "Science", "ag_designator": "d", "year": 9},
    ]}))
    loaded = load_plan(path)
    assert loaded[0].name == "Biology"
    assert loaded[0].ag_designator.value == "d"


def test_load_missing_plan(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_plan(tmp_path / "nope.json")


def test_report_prints_every_system(planner, course, capsys):
    results = planner.report([course("Geometry", year=10)], show_plan=True)
    out = capsys.readouterr().out

    assert set(results) == {"local", "uc", "csu"}
    assert "Geometry" in out
    assert "FOUR-YEAR PLAN" in out
    assert "LYNBROOK REQUIREMENTS" in out
    assert "CSU A-G REQUIREMENTS" in out


def test_load_plan_skips_nameless_entries_and_clears_bad_years(tmp_path, caplog):
    path = tmp_path / "plan.json"
    path.write_text(json.dumps([
        {"name": "Biology", "credits": 10, "category": "Science", "year": 13},
        {"name": "Geometry", "credits": 10, "category": "Math", "year": "9"},
        {"credits": 10},
        "Band",
    ]))

    loaded = load_plan(path)

    assert [(c.name, c.year) for c in loaded] == [("Biology", None), ("Geometry", 9)]
    assert "Skipping malformed plan entry" in caplog.text
    assert "Clearing invalid year 13" in caplog.text


@pytest.mark.parametrize("content", ["{not json", "42", '{"courses": "Biology"}'])
def test_load_plan_rejects_corrupt_files(tmp_path, content):
    path = tmp_path / "plan.json"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_plan(path)
