"""
Tests for starting and ending combat.
"""

import pytest
from combat_tracker.combat import CombatTracker, character_key, monster_key
from combat_tracker.core.constants import LogType, Status
from combat_tracker.entities import Character, Monster, Party


@pytest.fixture
def party():
    return Party(
        id=7,
        name="Heroes",
        characters=[
            Character(id=1, name="Aelar", hp_max=44, hp_current=30),
            Character(id=2, name="Lyra", hp_max=24, hp_current=24),
        ],
    )


@pytest.fixture
def tracker(party):
    tracker = CombatTracker()
    tracker.select_party(party)
    tracker.add_monster(Monster(name="Goblin", hp=7, ac=15))
    tracker.set_initiative(character_key(1), 12)
    tracker.set_initiative(character_key(2), 18)
    tracker.set_initiative(monster_key(1), 12)
    return tracker


def test_empty_roster_cannot_start():
    """
    Test that starting with an empty roster leaves the tracker in setup.
    """
    tracker = CombatTracker()

    assert not tracker.is_valid_for_combat()
    tracker.start_combat()
    assert tracker.active_combat is None
    assert not tracker.is_combat_active
    assert tracker.combat_log == ()


def test_start_orders_by_initiative_then_key(tracker):
    tracker.start_combat()

    combat = tracker.active_combat
    assert [c.initiative for c in combat.combatants] == [18, 12, 12]
    # Ties are broken by ascending key: "character-1" < "monster-1".
    assert tracker.combatant_key_mapping == {
        character_key(2): 0,
        character_key(1): 1,
        monster_key(1): 2,
    }
    assert [c.index for c in combat.combatants] == [0, 1, 2]


def test_start_builds_fresh_combat(tracker, party):
    tracker.start_combat()

    combat = tracker.active_combat
    assert combat.round == 1
    assert combat.turn_index == 0
    assert combat.party_id == party.id
    assert all(c.status == Status.ALIVE for c in combat.combatants)
    aelar = tracker.get_combatant_data(1)
    assert aelar.name == "Aelar"
    assert combat.combatants[1].hp_current == 30


def test_start_seeds_log(tracker):
    tracker.start_combat()

    messages = [e.message for e in tracker.combat_log]
    assert messages == ["Combat started! Round 1", "Lyra's turn (Initiative: 18)"]
    assert all(e.type == LogType.TURN for e in tracker.combat_log)
    assert all(e.round == 1 and e.turn_index == 0 for e in tracker.combat_log)


def test_key_mapping_resolves_every_instance(tracker):
    tracker.start_combat()

    for instance, data in tracker.get_combatants_with_data():
        key = next(k for k, v in tracker.combatant_key_mapping.items() if v == instance.index)
        assert tracker.combatants[key] is data
        assert data.reference_id == instance.reference_id


def test_current_combatant(tracker):
    assert tracker.get_current_combatant_instance() is None
    assert tracker.get_current_combatant_data() is None

    tracker.start_combat()

    assert tracker.get_current_combatant_instance().index == 0
    assert tracker.get_current_combatant_data().name == "Lyra"


def test_end_combat_clears_log(tracker):
    """
    Test that ending combat returns to setup with an empty log.
    """
    tracker.start_combat()
    tracker.next_turn()
    tracker.apply_damage(2, 3)
    assert tracker.combat_log

    tracker.end_combat()

    assert tracker.active_combat is None
    assert len(tracker.combat_log) == 0
    assert monster_key(1) in tracker.combatants


def test_start_after_end_builds_new_combat(tracker):
    tracker.start_combat()
    tracker.apply_damage(0, 100)
    tracker.end_combat()
    tracker.start_combat()

    assert tracker.active_combat.combatants[0].status == Status.ALIVE
    assert tracker.active_combat.combatants[0].hp_current == 24


def test_order_fixed_after_post_start_initiative_edits(tracker):
    """
    Test that initiative changes after the start never reorder the combat.
    """
    tracker.start_combat()
    combatants = [c.model_copy() for c in tracker.active_combat.combatants]
    mapping = tracker.combatant_key_mapping

    tracker.set_initiative(monster_key(1), 30)
    tracker.roll_initiative_for_all()
    tracker.roll_initiative_for_monsters()

    assert tracker.active_combat.combatants == combatants
    assert tracker.combatant_key_mapping == mapping
    assert tracker.get_current_combatant_data().name == "Lyra"
