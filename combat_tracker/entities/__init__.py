"""
Entity models for the combat tracker.

This module holds the roster source data: player characters, parties, and
monster statblocks, plus bestiary loading.
"""

from .character import Character, Party
from .monster import AbilityScores, Monster, MonsterAction, MonsterTrait, clone_monster
from .monster_serialization import (
    load_monsters,
    monster_from_dict,
    monster_to_dict,
    save_monsters,
)

__all__ = [
    # Import from character.py
    "Character",
    "Party",
    # Import from monster.py
    "AbilityScores",
    "Monster",
    "MonsterAction",
    "MonsterTrait",
    "clone_monster",
    # Import from monster_serialization.py
    "load_monsters",
    "monster_from_dict",
    "monster_to_dict",
    "save_monsters",
]
