"""
Combat tracker module.

Defines the CombatTracker, the combat state machine: it owns the roster and
setup map, the Setup -> Active -> Setup lifecycle, the turn cursor, damage and
healing, and the combat log. Every mutating operation fires a synchronous
change notification to the subscribed observers (UI refresh, persistence).
"""

import random
from typing import Callable

from ..core.logging import log_info
from ..entities.character import Party
from ..entities.monster import Monster
from .models import (
    Combat,
    CombatantInstance,
    CombatantSetupData,
    CombatLogEntry,
    CombatSnapshot,
)
from .tracker_damage import TrackerDamage
from .tracker_initiative import TrackerInitiative
from .tracker_lifecycle import TrackerLifecycle
from .tracker_log import TrackerLog
from .tracker_roster import TrackerRoster
from .tracker_turns import TrackerTurns

ChangeListener = Callable[[], None]


class CombatTracker:
    """
    Manages a combat encounter from roster setup to the end of combat.

    The tracker keeps two views of the same roster: the mutable setup map
    (keyed by "character-<id>" / "monster-<id>") and, while combat is active,
    the frozen list of combatant instances ordered by initiative. The key
    mapping built when combat starts correlates the two.

    Expected edge cases (unknown key, out-of-range index, no active combat,
    empty roster) never raise: the operation is a silent no-op.

    Attributes:
        combatants (dict[str, CombatantSetupData]):
            The setup map, rebuilt whenever the roster changes.
        active_combat (Combat | None):
            The active encounter, None while in setup.
        rng (random.Random):
            The random generator used for initiative rolls.

    """

    # === State ===

    combatants: dict[str, CombatantSetupData]
    active_combat: Combat | None
    rng: random.Random

    # === Management Modules ===

    roster: TrackerRoster
    initiative: TrackerInitiative
    lifecycle: TrackerLifecycle
    turns: TrackerTurns
    damage: TrackerDamage
    log: TrackerLog

    def __init__(self, rng: random.Random | None = None) -> None:
        """
        Initializes an empty tracker in the setup state.

        Args:
            rng (random.Random | None):
                The random generator for initiative rolls. A fresh generator
                is created when omitted.

        """
        self.combatants = {}
        self.active_combat = None
        self.rng = rng or random.Random()
        self._listeners: list[ChangeListener] = []

        # Initialize modules.
        self.roster = TrackerRoster(owner=self)
        self.initiative = TrackerInitiative(owner=self)
        self.lifecycle = TrackerLifecycle(owner=self)
        self.turns = TrackerTurns(owner=self)
        self.damage = TrackerDamage(owner=self)
        self.log = TrackerLog(owner=self)

    # ============================================================================
    # CHANGE NOTIFICATION
    # ============================================================================

    def subscribe(self, listener: ChangeListener) -> None:
        """Registers a callback fired after every mutating operation."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        """Removes a callback; unknown callbacks are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_state_changed(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ============================================================================
    # READ ACCESSORS
    # ============================================================================

    @property
    def selected_party(self) -> Party | None:
        return self.roster.selected_party

    @property
    def monsters(self) -> tuple[Monster, ...]:
        return tuple(self.roster.monsters)

    @property
    def combat_log(self) -> tuple[CombatLogEntry, ...]:
        return tuple(self.log.entries)

    @property
    def combatant_key_mapping(self) -> dict[str, int]:
        return dict(self.lifecycle.key_mapping)

    @property
    def is_combat_active(self) -> bool:
        return self.active_combat is not None

    def get_monster_by_id(self, monster_id: int) -> Monster | None:
        return self.roster.get_monster_by_id(monster_id)

    def get_combatant_data(self, index: int) -> CombatantSetupData | None:
        """Resolves a combatant instance index back to its setup entry."""
        return self.lifecycle.get_combatant_data(index)

    def get_current_combatant_instance(self) -> CombatantInstance | None:
        """Returns the combatant whose turn it is, or None outside combat."""
        if self.active_combat is None or not self.active_combat.combatants:
            return None
        return self.active_combat.combatants[self.active_combat.turn_index]

    def get_current_combatant_data(self) -> CombatantSetupData | None:
        """Returns the setup entry of the combatant whose turn it is."""
        if self.get_current_combatant_instance() is None:
            return None
        return self.get_combatant_data(self.active_combat.turn_index)

    def get_combatants_with_data(
        self,
    ) -> list[tuple[CombatantInstance, CombatantSetupData]]:
        """
        Returns every combatant paired with its setup entry, in turn order.

        Instances whose setup entry can no longer be resolved are skipped.
        """
        if self.active_combat is None:
            return []
        result: list[tuple[CombatantInstance, CombatantSetupData]] = []
        for instance in self.active_combat.combatants:
            data = self.get_combatant_data(instance.index)
            if data is not None:
                result.append((instance, data))
        return result

    # ============================================================================
    # ROSTER
    # ============================================================================

    def select_party(self, party: Party | None) -> None:
        """Selects the party for the encounter (None clears it)."""
        self.roster.select_party(party)
        self._notify_state_changed()

    def add_monster(self, monster: Monster) -> Monster:
        """Adds a monster and returns the stored copy with its id populated."""
        stored = self.roster.add_monster(monster)
        self._notify_state_changed()
        return stored

    def add_monster_group(self, monster: Monster, count: int) -> list[Monster]:
        """Adds `count` copies of a monster sharing one initiative roll."""
        created = self.roster.add_monster_group(monster, count)
        self._notify_state_changed()
        return created

    def remove_monster(self, monster_id: int) -> None:
        if self.roster.remove_monster(monster_id):
            self._notify_state_changed()

    def reset(self) -> None:
        """Clears the party, the monsters and the setup map."""
        self.roster.reset()
        self._notify_state_changed()

    # ============================================================================
    # INITIATIVE
    # ============================================================================

    def roll_initiative_for_all(self) -> None:
        self.initiative.roll_for_all()
        self._notify_state_changed()

    def roll_initiative_for_monsters(self) -> None:
        self.initiative.roll_for_monsters()
        self._notify_state_changed()

    def set_initiative(self, key: str, initiative: int) -> None:
        if self.initiative.set_initiative(key, initiative):
            self._notify_state_changed()

    # ============================================================================
    # LIFECYCLE
    # ============================================================================

    def is_valid_for_combat(self) -> bool:
        """Returns True if combat can start (the roster is not empty)."""
        return self.lifecycle.is_valid_for_combat()

    def start_combat(self) -> None:
        """Freezes the roster into an active combat; no-op on an empty roster."""
        if self.lifecycle.start_combat():
            self._notify_state_changed()

    def end_combat(self) -> None:
        """Discards the active combat and clears the log."""
        self.lifecycle.end_combat()
        self._notify_state_changed()

    # ============================================================================
    # TURNS
    # ============================================================================

    def next_turn(self) -> None:
        if self.turns.next_turn():
            self._notify_state_changed()

    def previous_turn(self) -> None:
        if self.turns.previous_turn():
            self._notify_state_changed()

    # ============================================================================
    # DAMAGE AND HEALING
    # ============================================================================

    def apply_damage(self, index: int, amount: int) -> None:
        if self.damage.apply_damage(index, amount):
            self._notify_state_changed()

    def apply_healing(self, index: int, amount: int) -> None:
        if self.damage.apply_healing(index, amount):
            self._notify_state_changed()

    # ============================================================================
    # SNAPSHOTS
    # ============================================================================

    def get_internal_state(self) -> CombatSnapshot | None:
        """
        Captures the whole tracker state for persistence or export.

        Returns:
            CombatSnapshot | None:
                A deep copy of the state, or None when there is no combat, no
                monster and no selected party.

        """
        if (
            self.active_combat is None
            and not self.roster.monsters
            and self.roster.selected_party is None
        ):
            return None

        return CombatSnapshot(
            combatants=self.combatants,
            monsters=self.roster.monsters,
            next_monster_id=self.roster.next_monster_id,
            selected_party=self.roster.selected_party,
            active_combat=self.active_combat,
            combat_log=self.log.entries,
            combatant_key_mapping=self.lifecycle.key_mapping,
        ).model_copy(deep=True)

    def restore_internal_state(self, snapshot: CombatSnapshot | None) -> None:
        """
        Replaces the whole tracker state with a snapshot.

        Args:
            snapshot (CombatSnapshot | None):
                The state to restore. None resets the tracker to an empty
                setup, including the monster id counter.

        """
        snapshot = snapshot.model_copy(deep=True) if snapshot else CombatSnapshot()

        self.roster.monsters = list(snapshot.monsters)
        self.roster.next_monster_id = snapshot.next_monster_id
        self.roster.selected_party = snapshot.selected_party
        self.combatants = dict(snapshot.combatants)
        self.active_combat = snapshot.active_combat
        self.log.replace(snapshot.combat_log)
        self.lifecycle.key_mapping = dict(snapshot.combatant_key_mapping)

        log_info(
            "Restored combat state",
            {
                "monsters": len(self.roster.monsters),
                "active": self.active_combat is not None,
            },
        )
        self._notify_state_changed()

