"""
Tests for change notifications, the combat log and state snapshots.
"""

import pytest
from combat_tracker.combat import CombatSnapshot, CombatTracker, character_key, monster_key
from combat_tracker.core.constants import LogType
from combat_tracker.entities import Character, Monster, Party


@pytest.fixture
def party():
    return Party(
        id=1,
        name="Heroes",
        characters=[Character(id=1, name="Aelar", hp_max=44, hp_current=44)],
    )


@pytest.fixture
def tracker(party):
    tracker = CombatTracker()
    tracker.select_party(party)
    tracker.add_monster_group(Monster(name="Goblin", hp=7, ac=15), 2)
    tracker.set_initiative(character_key(1), 15)
    return tracker


def test_every_mutation_notifies(tracker):
    calls = []
    tracker.subscribe(lambda: calls.append(1))

    tracker.roll_initiative_for_all()
    tracker.roll_initiative_for_monsters()
    tracker.start_combat()
    tracker.next_turn()
    tracker.previous_turn()
    tracker.apply_damage(0, 1)
    tracker.apply_healing(0, 1)
    tracker.end_combat()
    tracker.reset()

    assert len(calls) == 9


def test_notification_fires_after_mutation(tracker):
    seen = []
    tracker.subscribe(lambda: seen.append(tracker.is_combat_active))

    tracker.start_combat()

    assert seen == [True]


def test_unsubscribe(tracker):
    calls = []
    listener = lambda: calls.append(1)  # noqa: E731
    tracker.subscribe(listener)
    tracker.unsubscribe(listener)
    tracker.unsubscribe(listener)

    tracker.start_combat()

    assert calls == []


def test_log_entries_are_stamped_and_chronological(tracker):
    tracker.start_combat()
    tracker.next_turn()
    tracker.apply_damage(1, 2)

    entry = tracker.combat_log[-1]
    assert entry.type == LogType.DAMAGE
    assert entry.round == 1
    assert entry.turn_index == 1
    stamps = [e.timestamp for e in tracker.combat_log]
    assert stamps == sorted(stamps)


def test_log_is_empty_outside_combat(tracker):
    tracker.log.add_entry(LogType.TURN, "ignored")

    assert tracker.combat_log == ()


def test_internal_state_absent_for_empty_tracker():
    assert CombatTracker().get_internal_state() is None


def test_internal_state_round_trip(tracker):
    """
    Test that a snapshot restores an equivalent tracker.
    """
    tracker.start_combat()
    tracker.next_turn()
    tracker.apply_damage(2, 3)
    snapshot = tracker.get_internal_state()

    restored = CombatTracker()
    restored.restore_internal_state(CombatSnapshot.model_validate_json(snapshot.model_dump_json()))

    assert restored.active_combat == tracker.active_combat
    assert restored.combatants == tracker.combatants
    assert restored.combatant_key_mapping == tracker.combatant_key_mapping
    assert [e.message for e in restored.combat_log] == [e.message for e in tracker.combat_log]
    assert restored.selected_party == tracker.selected_party
    assert restored.get_current_combatant_data().name == tracker.get_current_combatant_data().name

    # The id counter is restored too.
    added = restored.add_monster(Monster(name="Wolf", hp=11, ac=13))
    assert added.id == 3


def test_snapshot_is_a_copy(tracker):
    snapshot = tracker.get_internal_state()
    snapshot.combatants[monster_key(1)].initiative = 99
    snapshot.monsters.clear()

    assert tracker.combatants[monster_key(1)].initiative == 0
    assert len(tracker.monsters) == 2


def test_restore_none_resets(tracker):
    calls = []
    tracker.subscribe(lambda: calls.append(1))

    tracker.restore_internal_state(None)

    assert tracker.get_internal_state() is None
    assert tracker.combatants == {}
    assert tracker.add_monster(Monster(name="Wolf", hp=11, ac=13)).id == 1
    assert len(calls) == 2
