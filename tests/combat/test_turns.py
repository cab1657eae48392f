"""
Tests for the turn cursor.
"""

import pytest
from combat_tracker.combat import CombatTracker, monster_key
from combat_tracker.core.constants import LogType
from combat_tracker.entities import Monster


def make_tracker(*initiatives: int) -> CombatTracker:
    """
    Builds a started tracker with monsters M1, M2, ... in turn order.

    Initiatives must be given in descending order. They are set after the
    whole roster is built, since every roster change resets them.
    """
    tracker = CombatTracker()
    for i in range(1, len(initiatives) + 1):
        tracker.add_monster(Monster(name=f"M{i}", hp=10, ac=10))
    for i, initiative in enumerate(initiatives, 1):
        tracker.set_initiative(monster_key(i), initiative)
    tracker.start_combat()

    ordered = [data.name for _, data in tracker.get_combatants_with_data()]
    assert ordered == [f"M{i}" for i in range(1, len(initiatives) + 1)]
    assert [c.initiative for c in tracker.active_combat.combatants] == list(initiatives)
    return tracker


@pytest.fixture
def tracker():
    return make_tracker(20, 15, 10)


def test_next_turn_advances(tracker):
    tracker.next_turn()

    assert tracker.active_combat.turn_index == 1
    assert tracker.combat_log[-1].message == "M2's turn"
    assert tracker.combat_log[-1].turn_index == 1


def test_full_cycle_increments_round(tracker):
    """
    Test that n calls to next_turn with everyone alive start the next round.
    """
    for _ in range(3):
        tracker.next_turn()

    assert tracker.active_combat.round == 2
    assert tracker.active_combat.turn_index == 0
    messages = [e.message for e in tracker.combat_log]
    assert "Round 2 begins" in messages


def test_next_turn_skips_unconscious_and_wraps():
    """
    Test that an unconscious last combatant is skipped into the next round.
    """
    tracker = make_tracker(15, 10)
    tracker.apply_damage(1, 10)

    tracker.next_turn()

    assert tracker.active_combat.round == 2
    assert tracker.active_combat.turn_index == 0


def test_next_turn_skips_middle_unconscious(tracker):
    tracker.apply_damage(1, 10)
    tracker.next_turn()

    assert tracker.active_combat.turn_index == 2
    assert tracker.active_combat.round == 1


def test_previous_turn_in_round_one_stays_at_zero(tracker):
    tracker.previous_turn()

    assert tracker.active_combat.round == 1
    assert tracker.active_combat.turn_index == 0
    assert tracker.combat_log[-1].message == "Back to M1's turn"


def test_previous_turn_goes_back_a_round(tracker):
    for _ in range(3):
        tracker.next_turn()
    tracker.previous_turn()

    assert tracker.active_combat.round == 1
    assert tracker.active_combat.turn_index == 2
    messages = [e.message for e in tracker.combat_log]
    assert messages[-2:] == ["Back to Round 1", "Back to M3's turn"]


def test_previous_turn_skips_unconscious(tracker):
    tracker.next_turn()
    tracker.next_turn()
    tracker.apply_damage(1, 10)
    tracker.previous_turn()

    assert tracker.active_combat.turn_index == 0


def test_single_combatant_cycles_rounds():
    tracker = make_tracker(12)

    tracker.next_turn()
    tracker.next_turn()

    assert tracker.active_combat.round == 3
    assert tracker.active_combat.turn_index == 0


def test_all_unconscious_terminates():
    """
    Test that advancing with nobody alive terminates and changes the round.
    """
    tracker = make_tracker(15, 10)
    tracker.apply_damage(0, 10)
    tracker.apply_damage(1, 10)

    tracker.next_turn()
    assert tracker.active_combat.round >= 2
    assert 0 <= tracker.active_combat.turn_index < 2

    tracker.previous_turn()
    assert 0 <= tracker.active_combat.turn_index < 2


def test_turns_without_combat_are_noops():
    tracker = CombatTracker()
    calls = []
    tracker.subscribe(lambda: calls.append(1))

    tracker.next_turn()
    tracker.previous_turn()

    assert tracker.active_combat is None
    assert calls == []


def test_round_and_turn_entries_are_turn_type(tracker):
    for _ in range(4):
        tracker.next_turn()

    assert all(e.type == LogType.TURN for e in tracker.combat_log)
