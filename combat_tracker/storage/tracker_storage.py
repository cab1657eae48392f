"""
Persistence service for the combat tracker.

Saves and loads versioned snapshots of the party registry and of the combat
tracker, exports and imports everything as one JSON document, and can attach
itself to the change notifications so the latest state is saved after every
mutation. Storage failures are logged and reported as False/None; they never
propagate into the in-memory state.
"""

from datetime import datetime, timezone
from typing import Callable

from pydantic import BaseModel, Field

from ..combat.main import CombatTracker
from ..combat.models import CombatSnapshot
from ..core.constants import COMBAT_STATE_KEY, CURRENT_STORAGE_VERSION, PARTIES_KEY
from ..core.error_handling import ERROR_HANDLER, ErrorSeverity
from ..core.logging import log_info, log_warning
from ..entities.character import Party
from ..party.party_registry import PartyRegistry
from .json_store import JsonFileStore

StorageListener = Callable[[str, bool], None]


class PartyStorageData(BaseModel):
    """Persisted form of the party registry."""

    parties: list[Party] = Field(default_factory=list)
    next_party_id: int = Field(default=1, ge=1)
    next_character_id: int = Field(default=1, ge=1)
    version: int = Field(default=CURRENT_STORAGE_VERSION)
    last_saved: datetime | None = Field(default=None)


class ExportData(BaseModel):
    """Document produced by export and consumed by import."""

    party_data: PartyStorageData | None = Field(default=None)
    combat_data: CombatSnapshot | None = Field(default=None)
    exported_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = Field(default=CURRENT_STORAGE_VERSION)


class TrackerStorage:
    """
    Persists party and combat state through a JsonFileStore.

    Attributes:
        store (JsonFileStore):
            The key-value store the state is written to.

    """

    def __init__(self, store: JsonFileStore) -> None:
        self.store = store
        self._listeners: list[StorageListener] = []

    # ============================================================================
    # STORAGE OPERATION NOTIFICATION
    # ============================================================================

    def subscribe(self, listener: StorageListener) -> None:
        """Registers a callback receiving (message, success) after each operation."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StorageListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _report(self, message: str, success: bool) -> None:
        for listener in list(self._listeners):
            listener(message, success)

    def _run(self, operation: Callable[[], bool], message: str) -> bool:
        """Executes a storage operation, reporting and logging failures."""
        success = ERROR_HANDLER.safe_execute(
            operation,
            False,
            f"Error during '{message}'",
            ErrorSeverity.HIGH,
            {"data_dir": self.store.data_dir},
        )
        self._report(message if success else f"Error: {message}", success)
        return success

    # ============================================================================
    # PARTY DATA
    # ============================================================================

    def save_parties(
        self, parties: list[Party], next_party_id: int, next_character_id: int
    ) -> bool:
        data = PartyStorageData(
            parties=parties,
            next_party_id=next_party_id,
            next_character_id=next_character_id,
            last_saved=datetime.now(timezone.utc),
        )
        return self._run(lambda: self.store.set_item(PARTIES_KEY, data), "Party data saved")

    def load_parties(self) -> PartyStorageData | None:
        data = ERROR_HANDLER.safe_execute(
            lambda: self.store.get_item(PARTIES_KEY, PartyStorageData),
            None,
            "Error loading party data",
        )
        if data is not None:
            log_info("Loaded parties from storage", {"count": len(data.parties)})
            self._report("Party data loaded", True)
        return data

    # ============================================================================
    # COMBAT STATE
    # ============================================================================

    def save_combat_state(self, snapshot: CombatSnapshot | None) -> bool:
        """
        Saves the combat snapshot; None removes the stored state.

        Args:
            snapshot (CombatSnapshot | None): The state to save.

        Returns:
            bool: True if the operation succeeded.

        """
        if snapshot is None:
            return self._run(
                lambda: self.store.remove_item(COMBAT_STATE_KEY), "Combat state cleared"
            )
        stamped = snapshot.model_copy(
            update={
                "version": CURRENT_STORAGE_VERSION,
                "last_saved": datetime.now(timezone.utc),
            }
        )
        return self._run(
            lambda: self.store.set_item(COMBAT_STATE_KEY, stamped), "Combat state saved"
        )

    def load_combat_state(self) -> CombatSnapshot | None:
        data = ERROR_HANDLER.safe_execute(
            lambda: self.store.get_item(COMBAT_STATE_KEY, CombatSnapshot),
            None,
            "Error loading combat state",
        )
        if data is not None:
            log_info(
                "Loaded combat state from storage",
                {"round": data.active_combat.round if data.active_combat else 0},
            )
            self._report("Combat state loaded", True)
        return data

    # ============================================================================
    # IMPORT / EXPORT
    # ============================================================================

    def export_all_data(
        self,
        parties: list[Party],
        next_party_id: int,
        next_character_id: int,
        combat_data: CombatSnapshot | None,
    ) -> str | None:
        """
        Exports the party data and the combat state as an indented JSON string.

        Returns:
            str | None: The JSON document, or None if serialization failed.

        """
        export = ExportData(
            party_data=PartyStorageData(
                parties=parties,
                next_party_id=next_party_id,
                next_character_id=next_character_id,
                last_saved=datetime.now(timezone.utc),
            ),
            combat_data=combat_data,
        )
        return ERROR_HANDLER.safe_execute(
            lambda: export.model_dump_json(indent=2),
            None,
            "Error exporting data",
        )

    def import_data(
        self, json_data: str
    ) -> tuple[PartyStorageData | None, CombatSnapshot | None]:
        """
        Parses a document produced by export_all_data.

        Returns:
            tuple[PartyStorageData | None, CombatSnapshot | None]:
                The party data and the combat state; (None, None) if the
                document cannot be parsed.

        """
        export = ERROR_HANDLER.safe_execute(
            lambda: ExportData.model_validate_json(json_data),
            None,
            "Error importing data",
        )
        if export is None:
            return None, None
        if export.version != CURRENT_STORAGE_VERSION:
            log_warning(
                "Importing data from a different storage version",
                {"version": export.version, "expected": CURRENT_STORAGE_VERSION},
            )
        return export.party_data, export.combat_data

    def clear_all_data(self) -> bool:
        return self._run(
            lambda: self.store.remove_item(PARTIES_KEY)
            and self.store.remove_item(COMBAT_STATE_KEY),
            "All data cleared",
        )

    # ============================================================================
    # WIRING
    # ============================================================================

    def attach(self, tracker: CombatTracker) -> Callable[[], None]:
        """
        Saves the tracker state after every change notification.

        Returns:
            Callable[[], None]: The registered listener, for unsubscribing.

        """

        def _save() -> None:
            self.save_combat_state(tracker.get_internal_state())

        tracker.subscribe(_save)
        return _save

    def attach_registry(self, registry: PartyRegistry) -> Callable[[], None]:
        """Saves the registry state after every change notification."""

        def _save() -> None:
            self.save_parties(*registry.get_internal_state())

        registry.subscribe(_save)
        return _save

    def restore(self, tracker: CombatTracker) -> bool:
        """Loads the stored combat state into the tracker, if any."""
        snapshot = self.load_combat_state()
        if snapshot is None:
            return False
        tracker.restore_internal_state(snapshot)
        return True

    def restore_registry(self, registry: PartyRegistry) -> bool:
        """Loads the stored parties into the registry, if any."""
        data = self.load_parties()
        if data is None or not data.parties:
            return False
        registry.restore_internal_state(
            data.parties, data.next_party_id, data.next_character_id
        )
        return True
