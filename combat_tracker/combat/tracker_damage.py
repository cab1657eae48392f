"""
Damage and status module for the combat tracker.

Applies damage and healing to combatant instances, keeps hit points within
[0, max HP], and derives the alive/unconscious transitions from the result.
"""

from typing import Any

from catchery import log_warning

from ..core.constants import LogType, Status


class TrackerDamage:
    """
    Applies damage and healing to the combatants of a CombatTracker.

    Amounts are taken as given; only the resulting hit points are clamped.
    Neither operation touches the turn cursor.

    Attributes:
        owner (Any):
            The CombatTracker instance that owns this module.

    """

    def __init__(self, owner: Any) -> None:
        self.owner: Any = owner

    def _resolve(self, index: int, operation: str) -> tuple[Any, Any] | None:
        """Returns the (instance, setup entry) pair at the index, if any."""
        combat = self.owner.active_combat
        if combat is None or not 0 <= index < len(combat.combatants):
            log_warning(
                f"Cannot apply {operation}, no combatant at index {index}",
                {"index": index, "active": combat is not None},
            )
            return None

        data = self.owner.get_combatant_data(index)
        if data is None:
            log_warning(
                f"Cannot apply {operation}, combatant {index} has no setup entry",
                {"index": index},
            )
            return None
        return combat.combatants[index], data

    def apply_damage(self, index: int, amount: int) -> bool:
        """
        Subtracts damage from a combatant's hit points.

        Reaching 0 HP knocks an alive combatant unconscious; a dead combatant
        stays dead.

        Args:
            index (int): The combatant instance index.
            amount (int): The damage to apply.

        Returns:
            bool: False if the index does not resolve to a combatant.

        """
        resolved = self._resolve(index, "damage")
        if resolved is None:
            return False
        combatant, data = resolved

        old_hp = combatant.hp_current
        combatant.hp_current = max(0, min(data.hp_max, combatant.hp_current - amount))

        old_status = combatant.status
        if combatant.hp_current == 0 and combatant.status == Status.ALIVE:
            combatant.status = Status.UNCONSCIOUS

        self.owner.log.add_entry(
            LogType.DAMAGE,
            f"{data.name} takes {amount} damage ({old_hp} → {combatant.hp_current} HP)",
        )
        if old_status != combatant.status:
            self.owner.log.add_entry(
                LogType.STATUS, f"{data.name} is now {combatant.status}!"
            )
        return True

    def apply_healing(self, index: int, amount: int) -> bool:
        """
        Adds healing to a combatant's hit points, capped at the max HP.

        Healing an unconscious combatant above 0 HP brings it back to alive.

        Args:
            index (int): The combatant instance index.
            amount (int): The healing to apply.

        Returns:
            bool: False if the index does not resolve to a combatant.

        """
        resolved = self._resolve(index, "healing")
        if resolved is None:
            return False
        combatant, data = resolved

        old_hp = combatant.hp_current
        combatant.hp_current = max(0, min(data.hp_max, combatant.hp_current + amount))

        old_status = combatant.status
        if combatant.hp_current > 0 and combatant.status == Status.UNCONSCIOUS:
            combatant.status = Status.ALIVE

        self.owner.log.add_entry(
            LogType.HEAL,
            f"{data.name} heals {amount} HP ({old_hp} → {combatant.hp_current} HP)",
        )
        if old_status != combatant.status:
            self.owner.log.add_entry(
                LogType.STATUS, f"{data.name} is now {combatant.status}!"
            )
        return True
