"""
Combat data models for the combat tracker.

Defines the pre-combat setup entries, the frozen per-encounter combatant
records, the active combat aggregate, the combat log entries, and the
snapshot exchanged with the persistence layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ..core.constants import CURRENT_STORAGE_VERSION, LogType, Status
from ..entities.character import Party
from ..entities.monster import Monster


class CombatantSetupData(BaseModel):
    """
    Pre-combat descriptor of a combatant (party member or monster).

    Setup entries are keyed by a composite string key ("character-<id>" or
    "monster-<id>") and rebuilt wholesale whenever the roster changes.
    """

    name: str = Field(
        description="Display name; grouped monsters carry their instance number.",
    )
    type: str = Field(
        default="",
        description="Category label (Character, or the monster type).",
    )
    hp_max: int = Field(
        description="Maximum hit points.",
    )
    hp_current: int = Field(
        description="Hit points at the time the entry was built.",
    )
    ac: int = Field(
        default=10,
        description="Armor Class.",
    )
    initiative_modifier: int = Field(
        default=0,
        description="Modifier added to the d20 initiative roll.",
    )
    initiative: int = Field(
        default=0,
        description="Current initiative, 0 until rolled or assigned.",
    )
    reference_id: int = Field(
        description="Id of the source character or monster.",
    )
    is_character: bool = Field(
        default=False,
        description="True for party characters, False for monsters.",
    )
    group_id: int | None = Field(
        default=None,
        description="Group shared by monsters spawned together.",
    )
    instance_number: int | None = Field(
        default=None,
        description="Instance number within the group.",
    )


class CombatantInstance(BaseModel):
    """
    Frozen per-encounter record of a combatant.

    Created once when combat starts and never reordered; only the hit points
    and status change during the encounter.
    """

    index: int = Field(
        description="Stable 0-based position in the initiative order.",
        ge=0,
    )
    reference_id: int = Field(
        description="Id of the source character or monster.",
    )
    group_id: int | None = Field(default=None)
    instance_number: int | None = Field(default=None)
    initiative: int = Field(
        description="Initiative rolled for turn order.",
    )
    hp_current: int = Field(
        description="Current hit points during this combat.",
        ge=0,
    )
    status: Status = Field(
        default=Status.ALIVE,
        description="Consciousness status of the combatant.",
    )

    def is_alive(self) -> bool:
        return self.status == Status.ALIVE


class Combat(BaseModel):
    """Represents an active combat encounter."""

    id: int = Field(
        default=1,
        description="Unique identifier for the combat encounter.",
    )
    party_id: int = Field(
        default=0,
        description="Id of the party participating in this combat, 0 if none.",
    )
    round: int = Field(
        default=1,
        description="Current round number (starts at 1).",
        ge=1,
    )
    turn_index: int = Field(
        default=0,
        description="Index of the current turn in the initiative order (0-based).",
        ge=0,
    )
    combatants: list[CombatantInstance] = Field(
        default_factory=list,
        description="Combatants sorted by initiative, indexed by position.",
    )


class CombatLogEntry(BaseModel):
    """Immutable record of a combat event, stamped with round and turn."""

    model_config = {"frozen": True}

    round: int = Field(
        description="Round number when the entry was created.",
    )
    turn_index: int = Field(
        description="Turn index when the entry was created.",
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="Wall-clock time when the entry was created.",
    )
    message: str = Field(
        description="Message describing the event.",
    )
    type: LogType = Field(
        description="Category of the entry.",
    )


class CombatSnapshot(BaseModel):
    """
    Serializable snapshot of the whole combat tracker state.

    Exchanged with the persistence layer as an opaque blob.
    """

    combatants: dict[str, CombatantSetupData] = Field(default_factory=dict)
    monsters: list[Monster] = Field(default_factory=list)
    next_monster_id: int = Field(default=1, ge=1)
    selected_party: Party | None = Field(default=None)
    active_combat: Combat | None = Field(default=None)
    combat_log: list[CombatLogEntry] = Field(default_factory=list)
    combatant_key_mapping: dict[str, int] = Field(default_factory=dict)
    version: int = Field(default=CURRENT_STORAGE_VERSION)
    last_saved: datetime | None = Field(default=None)
