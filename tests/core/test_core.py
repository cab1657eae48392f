"""
Tests for dice rolling, display helpers and error handling.
"""

import random

import pytest
from combat_tracker.core.constants import LogType, Status
from combat_tracker.core.dice import roll_d20, roll_initiative
from combat_tracker.core.error_handling import ErrorHandler, ErrorSeverity
from combat_tracker.core.utils import make_bar, modifier_to_string


@pytest.fixture
def handler():
    return ErrorHandler()


def test_d20_range():
    rng = random.Random(7)
    rolls = {roll_d20(rng) for _ in range(500)}

    assert rolls == set(range(1, 21))


def test_initiative_is_not_clamped():
    rng = random.Random(7)
    rolls = [roll_initiative(-5, rng) for _ in range(200)]

    assert min(rolls) >= -4
    assert max(rolls) <= 15
    assert any(r <= 0 for r in rolls)


def test_enum_display_names():
    assert str(Status.UNCONSCIOUS) == "Unconscious"
    assert str(LogType.HEAL) == "Heal"
    assert Status.DEAD.colorize("x") == "[bold red]x[/]"


def test_modifier_to_string():
    assert modifier_to_string(3) == "+3"
    assert modifier_to_string(0) == "+0"
    assert modifier_to_string(-2) == "-2"


def test_make_bar_handles_zero_max():
    assert "▮" not in make_bar(5, 0)
    assert make_bar(10, 10, length=4).count("▮") == 4


def test_safe_execute_returns_result(handler):
    assert handler.safe_execute(lambda: 42, 0, "unused") == 42
    assert handler.error_history == []


def test_safe_execute_returns_default_and_records(handler):
    def boom():
        raise OSError("disk full")

    result = handler.safe_execute(boom, None, "Saving failed", ErrorSeverity.MEDIUM, {"key": "k"})

    assert result is None
    assert len(handler.error_history) == 1
    error = handler.error_history[0]
    assert error.message == "Saving failed: disk full"
    assert error.severity == ErrorSeverity.MEDIUM
    assert error.context == {"key": "k"}
    assert isinstance(error.exception, OSError)

    handler.clear_history()
    assert handler.error_history == []
