"""
Constants and enumerations for the combat tracker.

Defines global configuration values, storage keys, and the enumerations used
by the combat state machine (combatant status and log entry categories).
"""

from enum import Enum
from pathlib import Path

# Number of faces of the initiative die.
D20_SIDES = 20

# Version stamped into every persisted payload.
CURRENT_STORAGE_VERSION = 1

# Keys used by the key-value store.
PARTIES_KEY = "combattracker_parties"
COMBAT_STATE_KEY = "combattracker_combat_state"

# Default location of the persisted state.
DEFAULT_DATA_DIR = Path.home() / ".combat_tracker"

# Name of the sample party created by the seeding helper.
SAMPLE_PARTY_NAME = "The Silver Blades"

# Prefixes of the composite setup keys.
CHARACTER_KEY_PREFIX = "character"
MONSTER_KEY_PREFIX = "monster"


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.display_name

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class Status(NiceEnum):
    """Defines the consciousness status of a combatant."""

    ALIVE = "ALIVE"
    UNCONSCIOUS = "UNCONSCIOUS"
    DEAD = "DEAD"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this status."""
        return {
            Status.ALIVE: "💚",
            Status.UNCONSCIOUS: "💤",
            Status.DEAD: "💀",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this status."""
        return {
            Status.ALIVE: "bold green",
            Status.UNCONSCIOUS: "bold yellow",
            Status.DEAD: "bold red",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies status color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class LogType(NiceEnum):
    """Defines the category of a combat log entry."""

    TURN = "TURN"
    DAMAGE = "DAMAGE"
    HEAL = "HEAL"
    STATUS = "STATUS"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this log category."""
        return {
            LogType.TURN: "⏱",
            LogType.DAMAGE: "🗡",
            LogType.HEAL: "✚",
            LogType.STATUS: "⚠",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this log category."""
        return {
            LogType.TURN: "bold cyan",
            LogType.DAMAGE: "bold red",
            LogType.HEAL: "bold green",
            LogType.STATUS: "bold yellow",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies log category color formatting to a message."""
        return f"[{self.color}]{message}[/]"
