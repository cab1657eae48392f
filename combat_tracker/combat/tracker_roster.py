"""
Roster module for the combat tracker.

Holds the selected party and the monster list, and regenerates the setup map
whenever either changes. The map is fully replaced on every rebuild, so a
roster change always discards previously rolled initiative.
"""

from typing import Any

from catchery import log_debug

from ..core.constants import CHARACTER_KEY_PREFIX, MONSTER_KEY_PREFIX
from ..entities.character import Party
from ..entities.monster import Monster, clone_monster
from .models import CombatantSetupData


def character_key(character_id: int) -> str:
    """Returns the setup key of a party character."""
    return f"{CHARACTER_KEY_PREFIX}-{character_id}"


def monster_key(monster_id: int) -> str:
    """Returns the setup key of a monster."""
    return f"{MONSTER_KEY_PREFIX}-{monster_id}"


class TrackerRoster:
    """
    Manages the roster of candidate combatants for a CombatTracker.

    Attributes:
        owner (Any):
            The CombatTracker instance that owns this roster.
        selected_party (Party | None):
            The party taking part in the encounter.
        monsters (list[Monster]):
            The monsters added to the encounter, in insertion order.
        next_monster_id (int):
            The id assigned to the next monster added.

    """

    def __init__(self, owner: Any) -> None:
        self.owner: Any = owner
        self.selected_party: Party | None = None
        self.monsters: list[Monster] = []
        self.next_monster_id: int = 1

    def get_monster_by_id(self, monster_id: int) -> Monster | None:
        return next((m for m in self.monsters if m.id == monster_id), None)

    def select_party(self, party: Party | None) -> None:
        """
        Replaces the active party and rebuilds the setup map.

        Args:
            party (Party | None): The party to select, None to clear it.

        """
        self.selected_party = party
        self.rebuild_combatants()

    def add_monster(self, monster: Monster) -> Monster:
        """
        Adds a monster to the roster under the next sequential id.

        Args:
            monster (Monster): The monster template.

        Returns:
            Monster: The stored copy, with its id populated.

        """
        stored = monster.model_copy(deep=True, update={"id": self.next_monster_id})
        self.next_monster_id += 1
        self.monsters.append(stored)
        self.rebuild_combatants()
        return stored

    def add_monster_group(self, monster: Monster, count: int) -> list[Monster]:
        """
        Adds several independent copies of a monster that share one group.

        The group id is the id assigned to the first copy and instance numbers
        start at 1. A count of zero or less is treated as 1.

        Args:
            monster (Monster): The monster template.
            count (int): The number of copies to create.

        Returns:
            list[Monster]: The stored copies.

        """
        if count <= 0:
            count = 1

        group_id = self.next_monster_id
        created: list[Monster] = []
        for i in range(count):
            instance = clone_monster(monster)
            instance.id = self.next_monster_id
            instance.group_id = group_id
            instance.instance_number = i + 1
            self.next_monster_id += 1
            self.monsters.append(instance)
            created.append(instance)

        self.rebuild_combatants()
        return created

    def remove_monster(self, monster_id: int) -> bool:
        """
        Removes a single monster (not its whole group).

        Returns:
            bool: True if the monster was found and removed.

        """
        monster = self.get_monster_by_id(monster_id)
        if monster is None:
            log_debug(
                "Cannot remove monster, id not found",
                {"monster_id": monster_id, "context": "remove_monster"},
            )
            return False
        self.monsters.remove(monster)
        self.rebuild_combatants()
        return True

    def reset(self) -> None:
        """Clears the party, the monster list and the setup map."""
        self.selected_party = None
        self.monsters.clear()
        self.owner.combatants.clear()

    def rebuild_combatants(self) -> None:
        """Regenerates the setup map from the party and the monster list."""
        combatants: dict[str, CombatantSetupData] = {}

        if self.selected_party is not None:
            for character in self.selected_party.characters:
                combatants[character_key(character.id)] = CombatantSetupData(
                    name=character.name,
                    type="Character",
                    hp_max=character.hp_max,
                    hp_current=character.hp_current,
                    ac=character.ac,
                    initiative_modifier=character.initiative_modifier,
                    initiative=0,
                    reference_id=character.id,
                    is_character=True,
                )

        for monster in self.monsters:
            combatants[monster_key(monster.id)] = CombatantSetupData(
                name=monster.display_name,
                type=monster.type,
                hp_max=monster.hp,
                hp_current=monster.hp,
                ac=monster.ac,
                initiative_modifier=monster.initiative_modifier,
                initiative=0,
                reference_id=monster.id,
                is_character=False,
                group_id=monster.group_id,
                instance_number=monster.instance_number,
            )

        self.owner.combatants = combatants
