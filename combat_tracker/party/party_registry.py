"""
Party registry module for the combat tracker.

Owns the parties and their characters. A party selected from the registry is
handed to CombatTracker.select_party as the roster source.
"""

from typing import Callable

from catchery import log_debug

from ..core.constants import SAMPLE_PARTY_NAME
from ..core.error_handling import PartyNotFoundError
from ..entities.character import Character, Party


class PartyRegistry:
    """
    In-memory registry of parties and characters.

    Party ids and character ids are assigned sequentially from 1; character
    ids are unique across all parties.
    """

    def __init__(self) -> None:
        self._parties: list[Party] = []
        self._next_party_id: int = 1
        self._next_character_id: int = 1
        self._listeners: list[Callable[[], None]] = []

    def subscribe(self, listener: Callable[[], None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_state_changed(self) -> None:
        for listener in list(self._listeners):
            listener()

    def get_all_parties(self) -> tuple[Party, ...]:
        return tuple(self._parties)

    def get_party_by_id(self, party_id: int) -> Party | None:
        return next((p for p in self._parties if p.id == party_id), None)

    def _require_party(self, party_id: int) -> Party:
        party = self.get_party_by_id(party_id)
        if party is None:
            raise PartyNotFoundError(party_id)
        return party

    def create_party(self, name: str) -> Party:
        """Creates an empty party under the next sequential id."""
        party = Party(id=self._next_party_id, name=name)
        self._next_party_id += 1
        self._parties.append(party)
        self._notify_state_changed()
        return party

    def update_party(self, party: Party) -> None:
        """Renames an existing party; unknown ids are ignored."""
        existing = self.get_party_by_id(party.id)
        if existing is None:
            log_debug("Cannot update party, id not found", {"party_id": party.id})
            return
        existing.name = party.name
        self._notify_state_changed()

    def delete_party(self, party_id: int) -> None:
        party = self.get_party_by_id(party_id)
        if party is None:
            log_debug("Cannot delete party, id not found", {"party_id": party_id})
            return
        self._parties.remove(party)
        self._notify_state_changed()

    def add_character(self, party_id: int, character: Character) -> Character:
        """
        Adds a character to a party under the next sequential character id.

        Args:
            party_id (int): The id of the party.
            character (Character): The character to add.

        Returns:
            Character: The stored character, with its id populated.

        Raises:
            PartyNotFoundError: If the party does not exist.

        """
        party = self._require_party(party_id)
        stored = character.model_copy(update={"id": self._next_character_id})
        self._next_character_id += 1
        party.characters.append(stored)
        self._notify_state_changed()
        return stored

    def update_character(self, party_id: int, character: Character) -> None:
        """
        Copies the editable fields of a character onto the stored one.

        Raises:
            PartyNotFoundError: If the party does not exist.

        """
        party = self._require_party(party_id)
        existing = party.get_character(character.id)
        if existing is None:
            log_debug(
                "Cannot update character, id not found",
                {"party_id": party_id, "character_id": character.id},
            )
            return
        existing.name = character.name
        existing.char_class = character.char_class
        existing.level = character.level
        existing.hp_current = character.hp_current
        existing.hp_max = character.hp_max
        existing.ac = character.ac
        existing.initiative_modifier = character.initiative_modifier
        existing.notes = character.notes
        self._notify_state_changed()

    def delete_character(self, party_id: int, character_id: int) -> None:
        """
        Removes a character from a party.

        Raises:
            PartyNotFoundError: If the party does not exist.

        """
        party = self._require_party(party_id)
        character = party.get_character(character_id)
        if character is None:
            log_debug(
                "Cannot delete character, id not found",
                {"party_id": party_id, "character_id": character_id},
            )
            return
        party.characters.remove(character)
        self._notify_state_changed()

    def seed_sample_party(self) -> Party:
        """
        Creates a sample party of four level 5 adventurers.

        Returns the existing sample party instead of creating a duplicate.
        """
        existing = next((p for p in self._parties if p.name == SAMPLE_PARTY_NAME), None)
        if existing is not None:
            return existing

        party = self.create_party(SAMPLE_PARTY_NAME)
        for character in (
            Character(
                name="Aelar",
                char_class="Fighter",
                level=5,
                hp_max=44,
                hp_current=44,
                ac=18,
                initiative_modifier=2,
                notes="Human fighter, frontline tank",
            ),
            Character(
                name="Lyra",
                char_class="Wizard",
                level=5,
                hp_max=24,
                hp_current=24,
                ac=12,
                initiative_modifier=1,
                notes="Elven wizard, ranged caster",
            ),
            Character(
                name="Thokk",
                char_class="Rogue",
                level=5,
                hp_max=34,
                hp_current=34,
                ac=15,
                initiative_modifier=4,
                notes="Halfling rogue, scout and skirmisher",
            ),
            Character(
                name="Miri",
                char_class="Cleric",
                level=5,
                hp_max=40,
                hp_current=40,
                ac=17,
                initiative_modifier=0,
                notes="Dwarf cleric, healer and support",
            ),
        ):
            self.add_character(party.id, character)
        return party

    def get_internal_state(self) -> tuple[list[Party], int, int]:
        """Returns deep copies of the parties and the two id counters."""
        return (
            [p.model_copy(deep=True) for p in self._parties],
            self._next_party_id,
            self._next_character_id,
        )

    def restore_internal_state(
        self, parties: list[Party], next_party_id: int, next_character_id: int
    ) -> None:
        """Replaces the registry content, e.g. after loading from storage."""
        self._parties = [p.model_copy(deep=True) for p in parties]
        self._next_party_id = next_party_id
        self._next_character_id = next_character_id
        self._notify_state_changed()
