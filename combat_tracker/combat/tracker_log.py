"""
Combat log module for the combat tracker.

Keeps the append-only, chronological record of state machine events. Each
entry is stamped with the round and turn index current at append time.
"""

from typing import Any

from catchery import log_debug

from ..core.constants import LogType
from .models import CombatLogEntry


class TrackerLog:
    """
    Append-only combat log owned by a CombatTracker.

    Attributes:
        owner (Any):
            The CombatTracker instance that owns this log.
        entries (list[CombatLogEntry]):
            The log entries, in append order.

    """

    def __init__(self, owner: Any) -> None:
        self.owner: Any = owner
        self.entries: list[CombatLogEntry] = []

    def add_entry(self, log_type: LogType, message: str) -> CombatLogEntry | None:
        """
        Appends an entry stamped with the current round and turn index.

        Args:
            log_type (LogType):
                The category of the entry.
            message (str):
                The free-text message.

        Returns:
            CombatLogEntry | None:
                The appended entry, or None when there is no active combat
                to stamp it with.

        """
        combat = self.owner.active_combat
        if combat is None:
            log_debug(
                "Dropping log entry, no active combat",
                {"type": log_type.name, "log_message": message},
            )
            return None

        entry = CombatLogEntry(
            round=combat.round,
            turn_index=combat.turn_index,
            message=message,
            type=log_type,
        )
        self.entries.append(entry)
        return entry

    def clear(self) -> None:
        self.entries.clear()

    def replace(self, entries: list[CombatLogEntry]) -> None:
        """Replaces the whole log, used when restoring a snapshot."""
        self.entries = list(entries)
