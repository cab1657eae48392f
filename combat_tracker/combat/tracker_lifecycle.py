"""
Lifecycle module for the combat tracker.

Owns the Setup -> Active -> Setup transitions. Starting combat freezes the
setup map into an ordered, indexed Combat together with the key mapping that
resolves every combatant instance back to its setup entry.
"""

from typing import Any

from catchery import log_debug

from ..core.constants import LogType, Status
from ..core.logging import log_info
from .models import Combat, CombatantInstance, CombatantSetupData


class TrackerLifecycle:
    """
    Starts and ends encounters for a CombatTracker.

    Attributes:
        owner (Any):
            The CombatTracker instance that owns this module.
        key_mapping (dict[str, int]):
            Maps each setup key to the index of its combatant instance.

    """

    def __init__(self, owner: Any) -> None:
        self.owner: Any = owner
        self.key_mapping: dict[str, int] = {}

    def is_valid_for_combat(self) -> bool:
        """Returns True if the roster holds at least one combatant."""
        return len(self.owner.combatants) > 0

    def start_combat(self) -> bool:
        """
        Freezes the setup map into a new active combat.

        Entries are sorted by initiative descending, ties broken by ascending
        setup key. Instances copy the entry's current HP and start alive.

        Returns:
            bool: False if the roster is empty and nothing was started.

        """
        if not self.is_valid_for_combat():
            log_debug(
                "Cannot start combat with an empty roster",
                {"context": "start_combat"},
            )
            return False

        party = self.owner.roster.selected_party
        combat = Combat(
            id=1,
            party_id=party.id if party is not None else 0,
            round=1,
            turn_index=0,
        )

        # Sort by initiative descending, then by key ascending.
        ordered = sorted(
            self.owner.combatants.items(),
            key=lambda item: (-item[1].initiative, item[0]),
        )

        self.key_mapping = {}
        for index, (key, data) in enumerate(ordered):
            combat.combatants.append(
                CombatantInstance(
                    index=index,
                    reference_id=data.reference_id,
                    group_id=data.group_id,
                    instance_number=data.instance_number,
                    initiative=data.initiative,
                    hp_current=data.hp_current,
                    status=Status.ALIVE,
                )
            )
            self.key_mapping[key] = index

        self.owner.active_combat = combat

        # Re-seed the combat log.
        self.owner.log.clear()
        self.owner.log.add_entry(LogType.TURN, f"Combat started! Round {combat.round}")
        first = self.get_combatant_data(combat.turn_index)
        if first is not None:
            self.owner.log.add_entry(
                LogType.TURN,
                f"{first.name}'s turn (Initiative: {combat.combatants[0].initiative})",
            )

        log_info(
            "Combat started",
            {"combatants": len(combat.combatants), "party_id": combat.party_id},
        )
        return True

    def end_combat(self) -> None:
        """Discards the active combat and clears the log."""
        had_combat = self.owner.active_combat is not None
        self.owner.active_combat = None
        self.owner.log.clear()
        if had_combat:
            log_info("Combat ended")

    def get_combatant_key(self, index: int) -> str | None:
        """Returns the setup key mapped to the given instance index."""
        return next(
            (key for key, value in self.key_mapping.items() if value == index),
            None,
        )

    def get_combatant_data(self, index: int) -> CombatantSetupData | None:
        """
        Resolves a combatant instance index back to its setup entry.

        Args:
            index (int): The instance index.

        Returns:
            CombatantSetupData | None:
                The setup entry, or None if the index is not mapped.

        """
        key = self.get_combatant_key(index)
        if key is None:
            return None
        return self.owner.combatants.get(key)
