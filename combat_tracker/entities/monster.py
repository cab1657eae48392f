"""
Monster statblock models for the combat tracker.

A Monster is the template the roster is built from. Grouped monsters are
independent deep copies of one template that share a group id and therefore
a single initiative roll.
"""

from pydantic import BaseModel, Field

from ..core.utils import get_stat_modifier


class AbilityScores(BaseModel):
    """Represents the six ability scores in D&D 5e."""

    strength: int = Field(default=10, ge=1, le=30)
    dexterity: int = Field(default=10, ge=1, le=30)
    constitution: int = Field(default=10, ge=1, le=30)
    intelligence: int = Field(default=10, ge=1, le=30)
    wisdom: int = Field(default=10, ge=1, le=30)
    charisma: int = Field(default=10, ge=1, le=30)

    @property
    def STR(self) -> int:
        return get_stat_modifier(self.strength)

    @property
    def DEX(self) -> int:
        return get_stat_modifier(self.dexterity)

    @property
    def CON(self) -> int:
        return get_stat_modifier(self.constitution)

    @property
    def INT(self) -> int:
        return get_stat_modifier(self.intelligence)

    @property
    def WIS(self) -> int:
        return get_stat_modifier(self.wisdom)

    @property
    def CHA(self) -> int:
        return get_stat_modifier(self.charisma)


class MonsterTrait(BaseModel):
    """Represents a special trait of a monster (e.g., Pack Tactics)."""

    name: str = Field(
        description="Name of the trait.",
        max_length=100,
    )
    description: str = Field(
        default="",
        description="Description of what the trait does.",
        max_length=2000,
    )


class MonsterAction(BaseModel):
    """
    Represents an action, bonus action, reaction, legendary or lair action a
    monster can take.
    """

    name: str = Field(
        description="Name of the action (e.g., Multiattack, Greataxe).",
        max_length=100,
    )
    description: str = Field(
        default="",
        description="Description of the action.",
        max_length=2000,
    )
    attack_type: str | None = Field(
        default=None,
        description="Type of attack, e.g. 'Melee Weapon Attack'.",
    )
    attack_bonus: int | None = Field(
        default=None,
        description="Attack bonus to hit.",
    )
    reach: int | None = Field(
        default=None,
        description="Reach in feet, for melee attacks.",
    )
    range: str | None = Field(
        default=None,
        description="Range in feet, e.g. '30/120'.",
    )
    damage_formula: str | None = Field(
        default=None,
        description="Damage formula, e.g. '1d12 + 3'.",
    )
    damage_type: str | None = Field(
        default=None,
        description="Damage type, e.g. 'slashing'.",
    )
    additional_damage_formula: str | None = Field(default=None)
    additional_damage_type: str | None = Field(default=None)
    legendary_action_cost: int = Field(
        default=0,
        description="Legendary action points this action costs.",
        ge=0,
        le=3,
    )


class Monster(BaseModel):
    """
    Represents a monster or enemy creature with full statblock support.

    Only name, type, hp, ac and initiative_modifier feed the combat roster;
    the rest of the statblock is reference material for the game master.
    """

    id: int = Field(
        default=0,
        description="Unique identifier, assigned when the monster joins the roster.",
        ge=0,
    )
    group_id: int | None = Field(
        default=None,
        description="Shared by every instance spawned from one template.",
    )
    instance_number: int | None = Field(
        default=None,
        description="Instance number within a group (1, 2, 3 for 'Orc 1', 'Orc 2', ...).",
    )
    name: str = Field(
        description="Name of the monster.",
        min_length=1,
        max_length=100,
    )
    size: str = Field(default="Medium")
    type: str = Field(
        default="",
        description="Type of the monster (e.g., Humanoid, Beast, Undead).",
        max_length=50,
    )
    subtype: str | None = Field(default=None)
    alignment: str = Field(default="Unaligned")
    ac: int = Field(
        description="Armor Class (defense rating).",
        ge=1,
        le=30,
    )
    armor_type: str | None = Field(default=None)
    hp: int = Field(
        description="Maximum hit points.",
        ge=1,
    )
    hp_formula: str | None = Field(default=None)
    speed: int = Field(default=30, ge=0, le=200)
    fly_speed: int = Field(default=0, ge=0, le=200)
    swim_speed: int = Field(default=0, ge=0, le=200)
    climb_speed: int = Field(default=0, ge=0, le=200)
    burrow_speed: int = Field(default=0, ge=0, le=200)
    abilities: AbilityScores = Field(default_factory=AbilityScores)
    saving_throws: str | None = Field(default=None)
    skills: str | None = Field(default=None)
    vulnerabilities: str | None = Field(default=None)
    resistances: str | None = Field(default=None)
    immunities: str | None = Field(default=None)
    condition_immunities: str | None = Field(default=None)
    senses: str | None = Field(default=None)
    languages: str | None = Field(default=None)
    challenge_rating: str = Field(default="0")
    experience_points: int = Field(default=0, ge=0)
    proficiency_bonus: int = Field(default=2, ge=2, le=9)
    initiative_modifier: int = Field(
        default=0,
        description="Initiative modifier, typically the Dexterity modifier.",
        ge=-5,
        le=10,
    )
    traits: list[MonsterTrait] = Field(default_factory=list)
    actions: list[MonsterAction] = Field(default_factory=list)
    bonus_actions: list[MonsterAction] = Field(default_factory=list)
    reactions: list[MonsterAction] = Field(default_factory=list)
    legendary_actions: list[MonsterAction] = Field(default_factory=list)
    legendary_actions_per_round: int = Field(default=0, ge=0, le=5)
    lair_actions: list[MonsterAction] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        """Returns the name suffixed with the instance number, if any."""
        if self.instance_number is not None:
            return f"{self.name} {self.instance_number}"
        return self.name


def clone_monster(src: Monster) -> Monster:
    """
    Creates a structural copy of a monster template.

    Every field is copied, including the ability scores and every trait and
    action list, so the copy never shares nested state with the source. The
    roster identity fields (id, group id, instance number) are cleared.

    Args:
        src (Monster): The template to copy.

    Returns:
        Monster: The independent copy.

    """
    return src.model_copy(
        deep=True,
        update={"id": 0, "group_id": None, "instance_number": None},
    )
