import math

from reviewscore.parsing import clamp, extract_json_object, finite_numbers, round_half_up, string_items


def test_extract_json_object_from_surrounding_prose():
    text = 'Sure! Here you go:\n```json\n{"fake_probs": [0.1, 0.2], "note": "a } brace"}\n```\nThanks.'
    assert extract_json_object(text) == {"fake_probs": [0.1, 0.2], "note": "a } brace"}


def test_extract_json_object_skips_unparseable_braces():
    text = 'Format {like this} then {"verdict": "Mixed"}'
    assert extract_json_object(text) == {"verdict": "Mixed"}


def test_extract_json_object_returns_empty_sentinel():
    assert extract_json_object("no json here") == {}
    assert extract_json_object('{"unterminated": [1, 2') == {}
    assert extract_json_object("[1, 2, 3]") == {}
    assert extract_json_object(None) == {}


def test_finite_numbers_drops_non_numeric_entries():
    values = [0.5, "0.25", None, "abc", True, float("nan"), float("inf"), 1]
    assert finite_numbers(values) == [0.5, 0.25, 1.0]
    assert finite_numbers("not a list") == []


def test_clamp_and_rounding():
    assert clamp(1.7, 0, 1) == 1
    assert clamp(-3, 0, 10) == 0
    assert clamp("x", 0, 10) == 0
    assert clamp(math.nan, 0, 1) == 0
    assert round_half_up(12.5) == 13
    assert round_half_up(0.29 * 100) == 29
    assert round_half_up(6.45, 1) == 6.5
    assert round_half_up(7.04, 1) == 7.0


def test_string_items_limits_and_trims():
    assert string_items([" a ", "", 3, "b", "c", "d", "e"]) == ["a", "b", "c", "d"]
    assert string_items(None) == []
