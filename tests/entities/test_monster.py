"""
Tests for monster statblocks and bestiary loading.
"""

import json

import pytest
from combat_tracker.entities import (
    Monster,
    MonsterAction,
    MonsterTrait,
    clone_monster,
    load_monsters,
    monster_from_dict,
    save_monsters,
)


@pytest.fixture
def owlbear():
    return Monster(
        id=4,
        group_id=4,
        instance_number=1,
        name="Owlbear",
        size="Large",
        type="Monstrosity",
        ac=13,
        hp=59,
        hp_formula="7d10+21",
        initiative_modifier=1,
        traits=[MonsterTrait(name="Keen Sight and Smell", description="Advantage on Perception.")],
        actions=[
            MonsterAction(
                name="Beak",
                description="Melee Weapon Attack.",
                attack_bonus=7,
                damage_formula="1d10+5",
                damage_type="piercing",
            )
        ],
    )


def test_display_name_includes_instance_number(owlbear):
    assert owlbear.display_name == "Owlbear 1"
    assert owlbear.model_copy(update={"instance_number": None}).display_name == "Owlbear"


def test_ability_modifiers():
    monster = Monster.model_validate(
        {"name": "Brute", "ac": 12, "hp": 30, "abilities": {"strength": 18, "dexterity": 7}}
    )

    assert monster.abilities.STR == 4
    assert monster.abilities.DEX == -2
    assert monster.abilities.CON == 0


def test_clone_is_deep_and_drops_identity(owlbear):
    clone = clone_monster(owlbear)

    assert (clone.id, clone.group_id, clone.instance_number) == (0, None, None)
    clone.traits[0].name = "Changed"
    clone.actions.append(MonsterAction(name="Claws", description=""))

    assert owlbear.traits[0].name == "Keen Sight and Smell"
    assert len(owlbear.actions) == 1


def test_monster_from_dict_ignores_identity_fields():
    monster = monster_from_dict({"id": 9, "group_id": 9, "name": "Wolf", "ac": 13, "hp": 11})

    assert monster.id == 0
    assert monster.group_id is None


def test_monster_from_dict_rejects_invalid():
    with pytest.raises(ValueError, match="Wolf"):
        monster_from_dict({"name": "Wolf", "ac": 13})


def test_save_and_load_bestiary(tmp_path, owlbear):
    path = tmp_path / "bestiary.json"
    save_monsters(path, [owlbear, Monster(name="Wolf", ac=13, hp=11)])

    loaded = load_monsters(path)

    assert sorted(loaded) == ["Owlbear", "Wolf"]
    assert loaded["Owlbear"].actions[0].damage_formula == "1d10+5"
    assert loaded["Owlbear"].id == 0


def test_load_bestiary_errors(tmp_path):
    with pytest.raises(ValueError):
        load_monsters(tmp_path / "missing.json")

    path = tmp_path / "object.json"
    path.write_text(json.dumps({"name": "Wolf"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_monsters(path)
