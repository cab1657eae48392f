"""
Combat system module for the combat tracker.

This module holds the combat state machine: roster building, initiative,
the combat lifecycle, the turn cursor, damage and status bookkeeping, and
the combat log.
"""

from .main import ChangeListener, CombatTracker
from .models import (
    Combat,
    CombatantInstance,
    CombatantSetupData,
    CombatLogEntry,
    CombatSnapshot,
)
from .tracker_roster import character_key, monster_key

__all__ = [
    # Import from main.py
    "ChangeListener",
    "CombatTracker",
    # Import from models.py
    "Combat",
    "CombatantInstance",
    "CombatantSetupData",
    "CombatLogEntry",
    "CombatSnapshot",
    # Import from tracker_roster.py
    "character_key",
    "monster_key",
]
