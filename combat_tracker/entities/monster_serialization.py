"""
Monster serialization and bestiary loading.

A bestiary is a JSON file holding a list of monster statblocks. Loaded
templates enter the roster through CombatTracker.add_monster or
CombatTracker.add_monster_group.
"""

import json
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import ValidationError

from .monster import Monster


def monster_from_dict(data: dict[str, Any]) -> Monster:
    """
    Creates a Monster template from a dictionary of data.

    Roster identity fields are ignored: a template has no id until it is
    added to an encounter.

    Args:
        data (dict[str, Any]):
            The dictionary containing monster data.

    Returns:
        Monster:
            The created Monster template.

    Raises:
        ValueError: If the data does not describe a valid monster.

    """
    payload = {
        key: value
        for key, value in data.items()
        if key not in ("id", "group_id", "instance_number")
    }
    try:
        return Monster.model_validate(payload)
    except ValidationError as e:
        raise ValueError(
            f"Invalid monster '{data.get('name', 'Unknown')}': {e}"
        ) from e


def monster_to_dict(monster: Monster) -> dict[str, Any]:
    """Converts a Monster into a JSON-serializable dictionary."""
    return monster.model_dump(mode="json")


def load_monsters(filepath: Path) -> dict[str, Monster]:
    """
    Loads a bestiary file into a name-indexed dictionary of templates.

    Args:
        filepath (Path):
            The path to the JSON bestiary.

    Returns:
        dict[str, Monster]:
            The templates, indexed by monster name.

    Raises:
        ValueError: If the file is missing, malformed, or holds an invalid entry.

    """
    try:
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}") from e

    monsters: dict[str, Monster] = {}
    for entry in data:
        monster = monster_from_dict(entry)
        if monster.name in monsters:
            log_warning(
                f"Duplicate monster '{monster.name}' in bestiary, keeping the last one",
                {"file": str(filepath), "monster": monster.name},
            )
        monsters[monster.name] = monster
    return monsters


def save_monsters(filepath: Path, monsters: list[Monster]) -> None:
    """Writes the given templates to a JSON bestiary file."""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump([monster_to_dict(m) for m in monsters], f, indent=2)
