"""
Turn cursor module for the combat tracker.

Moves the active-turn pointer forward and backward across rounds, skipping
combatants that are not alive. Each skip pass is bounded by the number of
combatants, so an encounter where nobody is alive still terminates.
"""

from typing import Any

from catchery import log_debug

from ..core.constants import LogType


class TrackerTurns:
    """
    Advances and retreats the turn pointer of a CombatTracker.

    Attributes:
        owner (Any):
            The CombatTracker instance that owns this module.

    """

    def __init__(self, owner: Any) -> None:
        self.owner: Any = owner

    def next_turn(self) -> bool:
        """
        Advances to the next alive combatant, wrapping into a new round.

        Returns:
            bool: False if there is no active combat to advance.

        """
        combat = self.owner.active_combat
        if combat is None or not combat.combatants:
            log_debug("Cannot advance turn, no active combat", {"context": "next_turn"})
            return False

        count = len(combat.combatants)

        next_index = combat.turn_index + 1
        if next_index >= count:
            next_index = self._start_next_round()

        # Skip combatants that are not alive, at most one full pass.
        attempts = 0
        while attempts < count:
            if combat.combatants[next_index].is_alive():
                break
            next_index += 1
            if next_index >= count:
                next_index = self._start_next_round()
            attempts += 1

        combat.turn_index = next_index

        current = self.owner.get_current_combatant_data()
        if current is not None:
            self.owner.log.add_entry(LogType.TURN, f"{current.name}'s turn")
        return True

    def previous_turn(self) -> bool:
        """
        Goes back to the previous alive combatant.

        Crossing index 0 returns to the last combatant of the previous round;
        in round 1 the cursor stays at index 0.

        Returns:
            bool: False if there is no active combat to move.

        """
        combat = self.owner.active_combat
        if combat is None or not combat.combatants:
            log_debug(
                "Cannot go back a turn, no active combat", {"context": "previous_turn"}
            )
            return False

        count = len(combat.combatants)

        prev_index = combat.turn_index - 1
        if prev_index < 0:
            prev_index = self._back_to_previous_round()

        # Skip combatants that are not alive, going backwards.
        attempts = 0
        while attempts < count:
            if combat.combatants[prev_index].is_alive():
                break
            prev_index -= 1
            if prev_index < 0:
                if combat.round <= 1:
                    prev_index = 0
                    break
                prev_index = self._back_to_previous_round()
            attempts += 1

        combat.turn_index = prev_index

        current = self.owner.get_current_combatant_data()
        if current is not None:
            self.owner.log.add_entry(LogType.TURN, f"Back to {current.name}'s turn")
        return True

    def _start_next_round(self) -> int:
        """Increments the round and returns the index of its first turn."""
        combat = self.owner.active_combat
        combat.round += 1
        self.owner.log.add_entry(LogType.TURN, f"Round {combat.round} begins")
        return 0

    def _back_to_previous_round(self) -> int:
        """
        Decrements the round and returns the index of its last turn.

        In round 1 there is no earlier round and index 0 is returned.
        """
        combat = self.owner.active_combat
        if combat.round <= 1:
            return 0
        combat.round -= 1
        self.owner.log.add_entry(LogType.TURN, f"Back to Round {combat.round}")
        return len(combat.combatants) - 1
