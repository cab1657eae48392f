"""
Module for rendering the tracker state as rich tables.
"""

from rich.table import Table

from ..combat.main import CombatTracker
from ..core.constants import Status
from ..core.utils import cprint, make_bar, modifier_to_string
from ..entities.character import Party


def hp_color(current: int, maximum: int) -> str:
    """
    Picks the HP bar color from the remaining hit points.

    Args:
        current (int): The current hit points.
        maximum (int): The maximum hit points.

    Returns:
        str: A rich color name.

    """
    if maximum <= 0 or current <= 0:
        return "red"
    ratio = current / maximum
    if ratio > 0.5:
        return "green"
    if ratio > 0.25:
        return "yellow"
    return "red"


def build_party_table(party: Party) -> Table:
    """Builds the table listing the characters of a party."""
    table = Table(title=f"Party #{party.id}: {party.name}", pad_edge=False)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Class", style="magenta")
    table.add_column("Lvl", justify="right")
    table.add_column("HP", justify="right")
    table.add_column("AC", justify="right")
    table.add_column("Init", justify="right")
    for character in party.characters:
        table.add_row(
            str(character.id),
            character.name,
            character.char_class,
            str(character.level),
            f"{character.hp_current:>3}/{character.hp_max:<3}",
            str(character.ac),
            modifier_to_string(character.initiative_modifier),
        )
    return table


def build_setup_table(tracker: CombatTracker) -> Table:
    """
    Builds the table of the pre-combat roster.

    Rows are keyed by the composite setup key, which is what the `init`
    command expects.
    """
    table = Table(title="Encounter Setup", pad_edge=False)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Type", style="magenta")
    table.add_column("HP", justify="right")
    table.add_column("AC", justify="right")
    table.add_column("Mod", justify="right")
    table.add_column("Init", justify="right", style="bold yellow")
    for key, data in tracker.combatants.items():
        table.add_row(
            key,
            data.name,
            data.type,
            f"{data.hp_current:>3}/{data.hp_max:<3}",
            str(data.ac),
            modifier_to_string(data.initiative_modifier),
            str(data.initiative) if data.initiative else "-",
        )
    return table


def build_initiative_table(tracker: CombatTracker) -> Table:
    """
    Builds the initiative order table of the active combat.

    The current turn is marked with an arrow; each row shows the HP bar and
    the status badge of the combatant.
    """
    combat = tracker.active_combat
    round_number = combat.round if combat else 0
    table = Table(title=f"Round {round_number}", pad_edge=False)
    table.add_column("", no_wrap=True)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Init", justify="right", style="bold yellow")
    table.add_column("Name", style="bold")
    table.add_column("HP", no_wrap=True)
    table.add_column("AC", justify="right")
    table.add_column("Status")
    if combat is None:
        return table
    for instance, data in tracker.get_combatants_with_data():
        current = instance.index == combat.turn_index
        name = data.name if instance.status == Status.ALIVE else f"[dim]{data.name}[/]"
        bar = make_bar(
            instance.hp_current, data.hp_max, color=hp_color(instance.hp_current, data.hp_max)
        )
        table.add_row(
            "[bold green]▶[/]" if current else "",
            str(instance.index),
            str(instance.initiative),
            name,
            f"{bar} {instance.hp_current:>3}/{data.hp_max:<3}",
            str(data.ac),
            f"{instance.status.emoji} {instance.status.colored_name}",
        )
    return table


def build_log_table(tracker: CombatTracker, limit: int | None = None) -> Table:
    """
    Builds the combat log table, newest entry first.

    Args:
        tracker (CombatTracker): The tracker holding the log.
        limit (int | None): The maximum number of rows; all rows when None.

    Returns:
        Table: The rendered log.

    """
    table = Table(title="Combat Log", pad_edge=False)
    table.add_column("Time", style="dim", no_wrap=True)
    table.add_column("Rnd", justify="right")
    table.add_column("", no_wrap=True)
    table.add_column("Message")
    entries = list(reversed(tracker.combat_log))
    if limit is not None:
        entries = entries[:limit]
    for entry in entries:
        table.add_row(
            entry.timestamp.strftime("%H:%M:%S"),
            str(entry.round),
            entry.type.emoji,
            entry.type.colorize(entry.message),
        )
    return table


def print_tracker_sheet(tracker: CombatTracker) -> None:
    """Prints the setup roster or, during combat, the initiative order."""
    if tracker.is_combat_active:
        cprint(build_initiative_table(tracker))
        current = tracker.get_current_combatant_data()
        if current is not None:
            cprint(f"It is [bold]{current.name}[/]'s turn.")
    else:
        party = tracker.selected_party
        cprint(f"Party: [bold]{party.name if party else 'none'}[/]")
        cprint(build_setup_table(tracker))


def print_log_sheet(tracker: CombatTracker, limit: int | None = None) -> None:
    cprint(build_log_table(tracker, limit))
