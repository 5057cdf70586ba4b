import pytest

from llm.response_parser import extract_ranking
from todo_ai.errors import ParseError


def test_plain_json_array():
    out = extract_ranking('[{"index":1,"priority":2},{"index":2,"priority":1}]')
    assert out == [{"index": 1, "priority": 2}, {"index": 2, "priority": 1}]


def test_array_surrounded_by_prose():
    text = 'Sure! Here is the ranking:\n[{"index":2,"priority":1}]\nLet me know if you need more.'
    assert extract_ranking(text) == [{"index": 2, "priority": 1}]


def test_markdown_code_fence():
    text = '```json\n[{"index": 1, "priority": 1}]\n```'
    assert extract_ranking(text) == [{"index": 1, "priority": 1}]


def test_no_brackets_raises():
    with pytest.raises(ParseError):
        extract_ranking("I cannot help with that.")


def test_invalid_json_raises():
    with pytest.raises(ParseError):
        extract_ranking("[index 1, priority high]")


def test_malformed_elements_pass_through():
    out = extract_ranking('[1, "two", {"index": "x"}, null]')
    assert out == [1, "two", {"index": "x"}, None]


def test_greedy_spans_to_last_bracket():
    # Brackets in trailing prose get swallowed by the greedy match.
    text = '[{"index":1,"priority":1}] note: see [docs]'
    with pytest.raises(ParseError):
        extract_ranking(text)


def test_balanced_stops_at_first_complete_array():
    text = '[{"index":1,"priority":1}] note: see [docs]'
    assert extract_ranking(text, strategy="balanced") == [{"index": 1, "priority": 1}]


def test_balanced_ignores_brackets_inside_strings():
    text = 'Answer: [{"index":1,"priority":1,"why":"see ] here"}] done'
    out = extract_ranking(text, strategy="balanced")
    assert out[0]["why"] == "see ] here"


def test_balanced_unterminated_raises():
    with pytest.raises(ParseError):
        extract_ranking('[{"index":1', strategy="balanced")


def test_unknown_strategy():
    with pytest.raises(ValueError):
        extract_ranking("[]", strategy="lenient")
