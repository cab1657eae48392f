"""
Tests for damage, healing and status transitions.
"""

import pytest
from combat_tracker.combat import CombatTracker, monster_key
from combat_tracker.core.constants import LogType, Status
from combat_tracker.entities import Monster


@pytest.fixture
def tracker():
    """A started combat with one 40/40 combatant."""
    tracker = CombatTracker()
    tracker.add_monster(Monster(name="Ogre", hp=40, ac=11))
    tracker.start_combat()
    return tracker


def new_entries(tracker, before):
    return tracker.combat_log[before:]


def test_damage_to_zero_then_heal(tracker):
    """
    Test the unconscious/alive round trip through damage and healing.
    """
    before = len(tracker.combat_log)
    tracker.apply_damage(0, 1000)

    ogre = tracker.active_combat.combatants[0]
    assert ogre.hp_current == 0
    assert ogre.status == Status.UNCONSCIOUS
    entries = new_entries(tracker, before)
    assert [e.type for e in entries] == [LogType.DAMAGE, LogType.STATUS]
    assert entries[0].message == "Ogre takes 1000 damage (40 → 0 HP)"
    assert entries[1].message == "Ogre is now Unconscious!"

    before = len(tracker.combat_log)
    tracker.apply_healing(0, 10)

    assert ogre.hp_current == 10
    assert ogre.status == Status.ALIVE
    entries = new_entries(tracker, before)
    assert [e.type for e in entries] == [LogType.HEAL, LogType.STATUS]
    assert entries[0].message == "Ogre heals 10 HP (0 → 10 HP)"
    assert entries[1].message == "Ogre is now Alive!"


def test_partial_damage_keeps_status(tracker):
    before = len(tracker.combat_log)
    tracker.apply_damage(0, 15)

    assert tracker.active_combat.combatants[0].hp_current == 25
    assert [e.type for e in new_entries(tracker, before)] == [LogType.DAMAGE]


def test_healing_is_capped_at_max(tracker):
    tracker.apply_damage(0, 5)
    tracker.apply_healing(0, 100)

    assert tracker.active_combat.combatants[0].hp_current == 40
    assert tracker.combat_log[-1].message == "Ogre heals 100 HP (35 → 40 HP)"


def test_negative_amounts_are_clamped(tracker):
    tracker.apply_damage(0, -50)
    assert tracker.active_combat.combatants[0].hp_current == 40

    tracker.apply_healing(0, -100)
    ogre = tracker.active_combat.combatants[0]
    assert ogre.hp_current == 0
    assert ogre.status == Status.ALIVE


def test_dead_combatant_stays_dead(tracker):
    ogre = tracker.active_combat.combatants[0]
    ogre.status = Status.DEAD
    ogre.hp_current = 5

    tracker.apply_damage(0, 10)
    assert ogre.status == Status.DEAD

    tracker.apply_healing(0, 10)
    assert ogre.status == Status.DEAD
    assert ogre.hp_current == 10


@pytest.mark.parametrize("index", [-1, 1, 99])
def test_out_of_range_index_is_noop(tracker, index):
    before = tracker.combat_log
    calls = []
    tracker.subscribe(lambda: calls.append(1))

    tracker.apply_damage(index, 5)
    tracker.apply_healing(index, 5)

    assert tracker.combat_log == before
    assert tracker.active_combat.combatants[0].hp_current == 40
    assert calls == []


def test_damage_without_combat_is_noop():
    tracker = CombatTracker()
    tracker.add_monster(Monster(name="Ogre", hp=40, ac=11))

    tracker.apply_damage(0, 5)

    assert tracker.active_combat is None
    assert tracker.combatants[monster_key(1)].hp_current == 40


def test_damage_does_not_move_turn_cursor(tracker):
    tracker.apply_damage(0, 40)

    assert tracker.active_combat.turn_index == 0
    assert tracker.active_combat.round == 1


def test_damage_does_not_touch_setup_entry(tracker):
    tracker.apply_damage(0, 12)

    assert tracker.combatants[monster_key(1)].hp_current == 40


@pytest.mark.parametrize("amount", [0, 1, 39, 40, 41, 1000])
def test_hp_stays_within_bounds(tracker, amount):
    """
    Test that hit points stay in [0, max] after any damage or healing.
    """
    ogre = tracker.active_combat.combatants[0]
    for apply in (
        tracker.apply_damage,
        tracker.apply_healing,
        tracker.apply_healing,
        tracker.apply_damage,
        tracker.apply_damage,
    ):
        apply(0, amount)
        assert 0 <= ogre.hp_current <= 40
        assert ogre.status == (Status.UNCONSCIOUS if ogre.hp_current == 0 else Status.ALIVE)


def test_combat_log_is_read_only(tracker):
    log = tracker.combat_log

    with pytest.raises(AttributeError):
        log.append(log[0])
    assert len(tracker.combat_log) == len(log)
