"""
Character and party models for the combat tracker.

Parties are the roster source for player characters: selecting a party for an
encounter adds one setup entry per character.
"""

from pydantic import BaseModel, Field


class Character(BaseModel):
    """
    Represents a player character in a party.

    The hit point and armor values are design-time values; live combat damage
    is tracked on the combatant instance, never written back here.
    """

    id: int = Field(
        default=0,
        description="Unique identifier for the character, assigned by the party registry.",
        ge=0,
    )
    name: str = Field(
        description="Name of the character.",
        min_length=1,
        max_length=100,
    )
    char_class: str = Field(
        default="",
        description="Class of the character (e.g., Fighter, Wizard, Rogue).",
        max_length=50,
    )
    level: int = Field(
        default=1,
        description="Character level (1-20 in D&D 5e).",
        ge=1,
        le=20,
    )
    hp_current: int = Field(
        description="Current hit points.",
        ge=0,
    )
    hp_max: int = Field(
        description="Maximum hit points.",
        ge=1,
    )
    ac: int = Field(
        default=10,
        description="Armor Class (defense rating).",
        ge=1,
        le=30,
    )
    initiative_modifier: int = Field(
        default=0,
        description="Initiative modifier (added to the d20 roll for initiative).",
        ge=-5,
        le=10,
    )
    notes: str | None = Field(
        default=None,
        description="Additional notes about the character.",
        max_length=1000,
    )


class Party(BaseModel):
    """Represents a group of player characters."""

    id: int = Field(
        default=0,
        description="Unique identifier for the party.",
        ge=0,
    )
    name: str = Field(
        description="Name of the party or campaign.",
        min_length=1,
        max_length=100,
    )
    characters: list[Character] = Field(
        default_factory=list,
        description="Collection of characters in this party.",
    )

    def get_character(self, character_id: int) -> Character | None:
        """Returns the character with the given id, or None if not found."""
        return next((c for c in self.characters if c.id == character_id), None)
