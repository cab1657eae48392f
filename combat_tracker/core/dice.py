"""
Dice rolling for the combat tracker.

Only the flat initiative roll is supported: a single d20.
"""

import random

from .constants import D20_SIDES


def roll_d20(rng: random.Random | None = None) -> int:
    """
    Rolls a single twenty-sided die.

    Args:
        rng (random.Random | None):
            The random generator to draw from. The module-level generator is
            used when omitted.

    Returns:
        int: A uniformly distributed integer in [1, 20].

    """
    return (rng or random).randint(1, D20_SIDES)


def roll_initiative(modifier: int, rng: random.Random | None = None) -> int:
    """
    Rolls initiative as 1d20 plus the given modifier.

    The result is not clamped and may be negative or exceed 20.
    """
    return roll_d20(rng) + modifier
