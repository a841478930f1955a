"""Tests for the "=" key contract: formatting and outcome mapping."""

import pytest

from calcengine.config import Settings
from calcengine.display import EqualsOutcome, OutcomeKind, format_result, press_equals


@pytest.fixture
def settings():
    return Settings()


# --- Result formatting ---

@pytest.mark.parametrize("value, text", [
    (14.0, "14"),
    (-5.0, "-5"),
    (512.0, "512"),
    (3.75, "3.75"),
    (-0.0, "0"),
    (0.1 + 0.2, "0.30000000000000004"),
    (1e-07, "0.0000001"),
    (1e20, "100000000000000000000"),
])
def test_format_result(value, text):
    assert format_result(value) == text


# --- Outcomes ---

def test_success(settings):
    outcome = press_equals("2+3×4", settings)
    assert outcome == EqualsOutcome(OutcomeKind.SUCCESS, "14", value=14.0)
    assert outcome.ok


def test_fractional_success(settings):
    assert press_equals("1÷(3)", settings).text == "0.3333333333333333"


@pytest.mark.parametrize("text", ["5÷0", "√-9", "10^400"])
def test_undefined_shows_error_sentinel(text, settings):
    outcome = press_equals(text, settings)
    assert outcome.kind is OutcomeKind.UNDEFINED
    assert outcome.text == "Error"
    assert outcome.value is None
    assert outcome.error
    assert not outcome.ok


@pytest.mark.parametrize("text", ["3+", "(3+4", "2×", ".", "1.2.3"])
def test_invalid_leaves_text_unchanged(text, settings):
    outcome = press_equals(text, settings)
    assert outcome.kind is OutcomeKind.INVALID
    assert outcome.text == text
    assert outcome.error


def test_error_sentinel_counts_as_zero(settings):
    outcome = press_equals("Error", settings)
    assert outcome.kind is OutcomeKind.SUCCESS
    assert outcome.text == "0"


def test_custom_error_text():
    custom = Settings(error_text="E")
    assert press_equals("√-1", custom).text == "E"
    assert press_equals("E", custom).text == "0"


def test_result_feeds_back_into_display(settings):
    """A formatted result is valid display text for the next calculation."""
    first = press_equals("1÷(4)", settings)
    second = press_equals(first.text + "×4", settings)
    assert second.text == "1"


def test_reciprocal_toggle_round_trip(settings):
    assert press_equals("1÷(2+2)", settings).text == "0.25"
    assert press_equals("1÷(1÷(2+2))", settings).text == "4"


def test_runaway_nesting_with_high_limit_is_invalid():
    text = "(" * 1000 + "1" + ")" * 1000
    outcome = press_equals(text, Settings(max_depth=5000))
    assert outcome.kind is OutcomeKind.INVALID
    assert outcome.text == text
