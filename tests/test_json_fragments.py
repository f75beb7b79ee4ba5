import pytest

from sheetflow.core.errors import ExtractionError
from sheetflow.core.extraction.json_fragments import find_json_objects, iter_balanced_fragments


def test_single_object_in_prose():
    text = 'Prose before {"k": "v", "n": 2} and prose after.'
    assert find_json_objects(text) == [{"k": "v", "n": 2}]


def test_array_elements_are_spliced():
    text = 'rows: [{"a": 1}, {"a": 2}] done'
    assert find_json_objects(text) == [{"a": 1}, {"a": 2}]


def test_unparsable_candidates_are_skipped():
    text = 'bad {not json} good {"ok": true}'
    assert find_json_objects(text) == [{"ok": True}]


def test_curly_quotes_and_broken_lines_are_repaired():
    text = 'Record:\n{\n  \u201cname\u201d: \u201cBob\u201d,\n  "tags": ["a", "b"]\n}\n'
    assert find_json_objects(text) == [{"name": "Bob", "tags": ["a", "b"]}]


def test_escaped_newlines_inside_strings():
    assert find_json_objects('{"text": "line1\\nline2"}') == [{"text": "line1 line2"}]


def test_pattern_strategy_tolerates_one_nesting_level_only():
    text = '{"a": {"b": {"c": 1}}}'
    assert find_json_objects(text) == [{"b": {"c": 1}}]
    assert find_json_objects(text, strategy="balanced") == [{"a": {"b": {"c": 1}}}]


def test_balanced_strategy_ignores_braces_in_strings():
    text = 'note {"note": "use } carefully"} end'
    assert find_json_objects(text) == []
    assert find_json_objects(text, strategy="balanced") == [{"note": "use } carefully"}]


def test_balanced_scanner_yields_outermost_spans():
    text = 'a [1, 2] b {"x": [3]} c ] {"open": '
    assert list(iter_balanced_fragments(text)) == ["[1, 2]", '{"x": [3]}']


def test_balanced_scanner_resumes_after_unclosed_opener():
    text = 'Use { to group things. Data: {"a": 1}'
    assert find_json_objects(text, strategy="balanced") == [{"a": 1}]
    assert list(iter_balanced_fragments("[ open [1] and { x {\"b\": 2}")) == ["[1]", '{"b": 2}']


def test_no_fragments():
    assert find_json_objects("plain sentence without structure") == []


def test_unknown_strategy():
    with pytest.raises(ExtractionError):
        find_json_objects("{}", strategy="magic")
