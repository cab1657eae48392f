"""
Console helpers for the combat tracker.

All output goes through one rich console, so tables, rules and markup render
the same way whether they are printed or captured as ANSI text for a
prompt_toolkit prompt.
"""

from typing import Any

from rich.console import Console
from rich.rule import Rule

_console = Console(markup=True, width=120, force_jupyter=False)

FILLED_CELL = "▮"
EMPTY_CELL = "▯"


def cprint(*args: Any, **kwargs: Any) -> None:
    """Prints renderables or markup strings on the shared console."""
    _console.print(*args, **kwargs)


def crule(title: str = "", **kwargs: Any) -> None:
    """Prints a horizontal rule, with an optional title."""
    _console.print(Rule(title, **kwargs))


def ccapture(content: Any) -> str:
    """Renders content to a string instead of printing it."""
    with _console.capture() as capture:
        _console.print(content, end="")
    return capture.get()


def get_stat_modifier(score: int) -> int:
    """Returns the ability modifier of a score (10 and 11 give +0)."""
    return (score - 10) // 2


def modifier_to_string(modifier: int) -> str:
    return f"{modifier:+d}"


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Renders a value as a fixed-width gauge in rich markup.

    Args:
        current (int): The value to show.
        maximum (int): The value of a full gauge.
        length (int): The number of cells. Defaults to 10.
        color (str): The color of the filled cells. Defaults to "white".

    Returns:
        str: The gauge markup. A non-positive maximum gives an empty gauge.

    """
    filled = 0
    if maximum > 0:
        filled = max(0, min(length, current * length // maximum))
    gauge = ""
    if filled:
        gauge += f"[{color}]{FILLED_CELL * filled}[/]"
    if filled < length:
        gauge += f"[dim white]{EMPTY_CELL * (length - filled)}[/]"
    return gauge
