"""
Initiative module for the combat tracker.

Rolls or assigns initiative on the setup entries. Monsters that share a group
id act on one initiative count: the first member rolled sets the value for
the rest of the group.
"""

from typing import Any, Iterable

from catchery import log_debug

from ..core.dice import roll_initiative
from .models import CombatantSetupData


class TrackerInitiative:
    """
    Assigns initiative values to the setup entries of a CombatTracker.

    Attributes:
        owner (Any):
            The CombatTracker instance that owns this module.

    """

    def __init__(self, owner: Any) -> None:
        self.owner: Any = owner

    def _roll(self, combatants: Iterable[CombatantSetupData]) -> None:
        """Rolls 1d20 + modifier for each entry, sharing rolls within groups."""
        group_initiatives: dict[int, int] = {}

        for combatant in combatants:
            if combatant.group_id is not None:
                # Use cached group initiative if already rolled.
                if combatant.group_id not in group_initiatives:
                    group_initiatives[combatant.group_id] = roll_initiative(
                        combatant.initiative_modifier, self.owner.rng
                    )
                combatant.initiative = group_initiatives[combatant.group_id]
            else:
                combatant.initiative = roll_initiative(
                    combatant.initiative_modifier, self.owner.rng
                )

    def roll_for_all(self) -> None:
        """Rolls initiative for every setup entry."""
        self._roll(self.owner.combatants.values())

    def roll_for_monsters(self) -> None:
        """Rolls initiative for monsters only; characters keep their value."""
        self._roll(c for c in self.owner.combatants.values() if not c.is_character)

    def set_initiative(self, key: str, initiative: int) -> bool:
        """
        Overrides the initiative of one setup entry.

        Args:
            key (str): The setup key of the combatant.
            initiative (int): The new initiative value.

        Returns:
            bool: True if the key exists and the value was set.

        """
        combatant = self.owner.combatants.get(key)
        if combatant is None:
            log_debug(
                "Cannot set initiative, unknown combatant key",
                {"key": key, "initiative": initiative},
            )
            return False
        combatant.initiative = initiative
        return True
