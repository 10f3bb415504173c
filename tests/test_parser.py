import pytest

from courseplanner.data import OCRResponseParser
from courseplanner.models import RawLine


@pytest.fixture
def parser():
    return OCRResponseParser()


def test_parse_model_response(parser):
    payload = '{"courses": [{"name": "AP Bio", "grade": "11"}, {"name": " Spanish II ", "grade": 12}]}'
    assert parser.parse(payload) == [RawLine("AP Bio", 11), RawLine("Spanish II", 12)]


def test_parse_accepts_lists_and_bytes(parser):
    assert parser.parse(["Chemistry", {"text": "Band"}]) == [RawLine("Chemistry"), RawLine("Band")]
    assert parser.parse(b'[{"name": "Health", "grade": 9}]') == [RawLine("Health", 9)]


@pytest.mark.parametrize("payload", ["not json", '{"courses": "Biology"}', "42", 3.5])
def test_unusable_payload_yields_nothing(parser, payload):
    assert parser.parse(payload) == []


def test_malformed_items_are_skipped(parser):
    assert parser.parse([{"name": None}, 7, {"name": "Drama", "grade": 10}]) == [RawLine("Drama", 10)]


@pytest.mark.parametrize("value, expected", [
    (9, 9), (12, 12), ("10", 10), (" 11 ", 11),
    (13, None), (8, None), ("Senior", None), (9.5, None), (True, None), (None, None),
])
def test_parse_grade(value, expected):
    assert OCRResponseParser.parse_grade(value) == expected


def test_parse_text_with_grade_headers(parser):
    text = "\n".join([
        "9th Grade",
        "Lit/Writing",
        "Algebra 1",
        "",
        "[Grade 10]",
        "Geometry",
        "11: AP Bio",
        "Chemistry",
    ])
    assert parser.parse_text(text) == [
        RawLine("Lit/Writing", 9),
        RawLine("Algebra 1", 9),
        RawLine("Geometry", 10),
        RawLine("AP Bio", 11),
        RawLine("Chemistry", 10),
    ]


def test_parse_text_without_headers(parser):
    assert parser.parse_text("Band\nChoir") == [RawLine("Band"), RawLine("Choir")]
