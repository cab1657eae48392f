"""
Interactive shell for the combat tracker.

Drives a CombatTracker and a PartyRegistry from typed commands. Tables are
rendered with rich; input is read with prompt_toolkit, with command
completion and history.
"""

import shlex
from pathlib import Path
from typing import Callable

from prompt_toolkit import ANSI, PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory
from pydantic import ValidationError

from ..combat.main import CombatTracker
from ..core.logging import log_debug
from ..core.utils import ccapture, cprint, crule
from ..entities.monster import Monster
from ..entities.monster_serialization import load_monsters
from ..party.party_registry import PartyRegistry
from ..storage.tracker_storage import TrackerStorage
from .sheets import build_party_table, print_log_sheet, print_tracker_sheet

HELP_TEXT: list[tuple[str, str]] = [
    ("party [ID|none]", "List the parties, or select the party for the encounter"),
    ("seed", "Create the sample party and select it"),
    ("bestiary FILE", "Load monster templates from a JSON bestiary"),
    ("monster NAME [HP AC [MOD]]", "Add a monster (from the bestiary or ad hoc)"),
    ("group COUNT NAME [HP AC [MOD]]", "Add a group of monsters sharing initiative"),
    ("remove ID", "Remove a monster from the encounter"),
    ("roll", "Roll initiative for everyone"),
    ("rollm", "Roll initiative for the monsters only"),
    ("init KEY VALUE", "Set the initiative of a combatant (e.g. character-1 15)"),
    ("start", "Start combat"),
    ("next / prev", "Advance or rewind the turn"),
    ("dmg INDEX AMOUNT", "Damage the combatant at INDEX"),
    ("heal INDEX AMOUNT", "Heal the combatant at INDEX"),
    ("end", "End combat and return to setup"),
    ("reset", "Clear the party, the monsters and the setup"),
    ("export FILE / import FILE", "Export or import all the data"),
    ("show", "Show the encounter"),
    ("log [N]", "Show the combat log, newest first"),
    ("help", "Show this help"),
    ("quit", "Leave the tracker"),
]


class CommandError(ValueError):
    """Raised by a command handler when its arguments are invalid."""


def parse_int(value: str, what: str) -> int:
    """
    Parses an integer command argument.

    Raises:
        CommandError: If the value is not an integer.

    """
    try:
        return int(value)
    except ValueError:
        raise CommandError(f"{what} must be an integer, got '{value}'.") from None


class TrackerShell:
    """
    Command interpreter bound to a tracker, a registry and a storage.

    Attributes:
        tracker (CombatTracker):
            The combat state machine driven by the commands.
        registry (PartyRegistry):
            The source of the parties.
        storage (TrackerStorage):
            Used by the export and import commands.
        bestiary (dict[str, Monster]):
            Monster templates loaded with the `bestiary` command.

    """

    def __init__(
        self,
        tracker: CombatTracker,
        registry: PartyRegistry,
        storage: TrackerStorage,
    ) -> None:
        self.tracker = tracker
        self.registry = registry
        self.storage = storage
        self.bestiary: dict[str, Monster] = {}
        self.commands: dict[str, Callable[[list[str]], None]] = {
            "party": self.cmd_party,
            "seed": self.cmd_seed,
            "bestiary": self.cmd_bestiary,
            "monster": self.cmd_monster,
            "group": self.cmd_group,
            "remove": self.cmd_remove,
            "roll": self.cmd_roll,
            "rollm": self.cmd_rollm,
            "init": self.cmd_init,
            "start": self.cmd_start,
            "next": self.cmd_next,
            "prev": self.cmd_prev,
            "dmg": self.cmd_dmg,
            "heal": self.cmd_heal,
            "end": self.cmd_end,
            "reset": self.cmd_reset,
            "export": self.cmd_export,
            "import": self.cmd_import,
            "show": self.cmd_show,
            "log": self.cmd_log,
            "help": self.cmd_help,
        }

    # ============================================================================
    # DISPATCH
    # ============================================================================

    def execute(self, line: str) -> bool:
        """
        Executes a single command line.

        Args:
            line (str): The raw line typed by the user.

        Returns:
            bool: False if the user asked to quit, True otherwise.

        """
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            cprint(f"[red]Cannot parse the command: {e}[/]")
            return True
        if not tokens:
            return True
        name, args = tokens[0].lower(), tokens[1:]
        if name in ("quit", "exit", "q"):
            return False
        handler = self.commands.get(name)
        if handler is None:
            cprint(f"[red]Unknown command '{name}'. Type 'help' for the list.[/]")
            return True
        log_debug("Executing command", {"command": name, "args": args})
        try:
            handler(args)
        except CommandError as e:
            cprint(f"[red]{e}[/]")
        return True

    def run(self) -> None:
        """Reads and executes commands until the user quits."""
        session: PromptSession = PromptSession(history=InMemoryHistory())
        completer = WordCompleter([*self.commands, "quit"], ignore_case=True)
        crule(":crossed_swords:  Combat Tracker", style="bold green")
        cprint("Type [bold]help[/] for the list of commands.")
        while True:
            try:
                prompt = self._prompt_text()
                line = session.prompt(ANSI(ccapture(prompt)), completer=completer)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            if not self.execute(line):
                break
        crule(":crossed_swords:  Goodbye", style="bold green")

    def _prompt_text(self) -> str:
        combat = self.tracker.active_combat
        if combat is None:
            return "\n[bold cyan]setup[/] > "
        current = self.tracker.get_current_combatant_data()
        who = current.name if current else "?"
        return f"\n[bold red]round {combat.round}[/] [bold]{who}[/] > "

    # ============================================================================
    # ROSTER COMMANDS
    # ============================================================================

    def _require_setup(self) -> None:
        if self.tracker.is_combat_active:
            raise CommandError("End combat before changing the roster.")

    def cmd_party(self, args: list[str]) -> None:
        if not args:
            parties = self.registry.get_all_parties()
            if not parties:
                cprint("No parties yet. Use [bold]seed[/] to create a sample party.")
            for party in parties:
                cprint(build_party_table(party))
            return
        self._require_setup()
        if args[0].lower() == "none":
            self.tracker.select_party(None)
            cprint("Party deselected.")
            return
        party_id = parse_int(args[0], "Party id")
        party = self.registry.get_party_by_id(party_id)
        if party is None:
            raise CommandError(f"Party with ID {party_id} not found.")
        self.tracker.select_party(party)
        cprint(f"Selected party [bold]{party.name}[/].")

    def cmd_seed(self, args: list[str]) -> None:
        self._require_setup()
        party = self.registry.seed_sample_party()
        self.tracker.select_party(party)
        cprint(f"Selected party [bold]{party.name}[/].")

    def cmd_bestiary(self, args: list[str]) -> None:
        if len(args) != 1:
            raise CommandError("Usage: bestiary FILE")
        try:
            loaded = load_monsters(Path(args[0]))
        except ValueError as e:
            raise CommandError(str(e)) from e
        self.bestiary.update(loaded)
        cprint(f"Loaded {len(loaded)} monsters: {', '.join(sorted(loaded))}")

    def _make_monster(self, args: list[str]) -> Monster:
        """Builds a monster from `NAME [HP AC [MOD]]` or a bestiary template."""
        if not args:
            raise CommandError("A monster name is required.")
        name = args[0]
        if len(args) == 1:
            template = self.bestiary.get(name)
            if template is None:
                raise CommandError(
                    f"Monster '{name}' is not in the bestiary; give its HP and AC."
                )
            return template
        if len(args) not in (3, 4):
            raise CommandError("Usage: NAME [HP AC [MOD]]")
        hp = parse_int(args[1], "HP")
        ac = parse_int(args[2], "AC")
        modifier = parse_int(args[3], "Modifier") if len(args) == 4 else 0
        try:
            return Monster(name=name, hp=hp, ac=ac, initiative_modifier=modifier)
        except ValidationError as e:
            raise CommandError(
                f"Invalid monster '{name}': {e.error_count()} invalid field(s)."
            ) from e

    def cmd_monster(self, args: list[str]) -> None:
        self._require_setup()
        stored = self.tracker.add_monster(self._make_monster(args))
        cprint(f"Added [bold]{stored.name}[/] (id {stored.id}).")

    def cmd_group(self, args: list[str]) -> None:
        self._require_setup()
        if len(args) < 2:
            raise CommandError("Usage: group COUNT NAME [HP AC [MOD]]")
        count = parse_int(args[0], "Count")
        created = self.tracker.add_monster_group(self._make_monster(args[1:]), count)
        cprint(f"Added {', '.join(m.display_name for m in created)}.")

    def cmd_remove(self, args: list[str]) -> None:
        self._require_setup()
        if len(args) != 1:
            raise CommandError("Usage: remove ID")
        monster_id = parse_int(args[0], "Monster id")
        if self.tracker.get_monster_by_id(monster_id) is None:
            raise CommandError(f"Monster with ID {monster_id} not found.")
        self.tracker.remove_monster(monster_id)

    def cmd_reset(self, args: list[str]) -> None:
        self._require_setup()
        self.tracker.reset()
        cprint("Encounter cleared.")

    # ============================================================================
    # INITIATIVE COMMANDS
    # ============================================================================

    def cmd_roll(self, args: list[str]) -> None:
        self.tracker.roll_initiative_for_all()
        print_tracker_sheet(self.tracker)

    def cmd_rollm(self, args: list[str]) -> None:
        self.tracker.roll_initiative_for_monsters()
        print_tracker_sheet(self.tracker)

    def cmd_init(self, args: list[str]) -> None:
        if len(args) != 2:
            raise CommandError("Usage: init KEY VALUE")
        key = args[0]
        if key not in self.tracker.combatants:
            raise CommandError(f"Unknown combatant key '{key}'.")
        self.tracker.set_initiative(key, parse_int(args[1], "Initiative"))

    # ============================================================================
    # COMBAT COMMANDS
    # ============================================================================

    def _require_combat(self) -> None:
        if not self.tracker.is_combat_active:
            raise CommandError("No combat is active. Use 'start' first.")

    def cmd_start(self, args: list[str]) -> None:
        if self.tracker.is_combat_active:
            raise CommandError("Combat is already active.")
        if not self.tracker.is_valid_for_combat():
            raise CommandError("Add a party or some monsters before starting combat.")
        self.tracker.start_combat()
        print_tracker_sheet(self.tracker)

    def cmd_next(self, args: list[str]) -> None:
        self._require_combat()
        self.tracker.next_turn()
        print_tracker_sheet(self.tracker)

    def cmd_prev(self, args: list[str]) -> None:
        self._require_combat()
        self.tracker.previous_turn()
        print_tracker_sheet(self.tracker)

    def _index_and_amount(self, args: list[str], usage: str) -> tuple[int, int]:
        self._require_combat()
        if len(args) != 2:
            raise CommandError(f"Usage: {usage} INDEX AMOUNT")
        index = parse_int(args[0], "Index")
        amount = parse_int(args[1], "Amount")
        if not 0 <= index < len(self.tracker.active_combat.combatants):
            raise CommandError(f"No combatant at index {index}.")
        if amount < 0:
            raise CommandError("Amount must not be negative.")
        return index, amount

    def cmd_dmg(self, args: list[str]) -> None:
        self.tracker.apply_damage(*self._index_and_amount(args, "dmg"))
        print_log_sheet(self.tracker, limit=2)

    def cmd_heal(self, args: list[str]) -> None:
        self.tracker.apply_healing(*self._index_and_amount(args, "heal"))
        print_log_sheet(self.tracker, limit=2)

    def cmd_end(self, args: list[str]) -> None:
        self._require_combat()
        self.tracker.end_combat()
        cprint("Combat ended.")

    # ============================================================================
    # DATA COMMANDS
    # ============================================================================

    def cmd_export(self, args: list[str]) -> None:
        if len(args) != 1:
            raise CommandError("Usage: export FILE")
        document = self.storage.export_all_data(
            *self.registry.get_internal_state(), self.tracker.get_internal_state()
        )
        if document is None:
            raise CommandError("Export failed, see the log for details.")
        try:
            Path(args[0]).write_text(document, encoding="utf-8")
        except OSError as e:
            raise CommandError(f"Cannot write {args[0]}: {e}") from e
        cprint(f"Exported to [bold]{args[0]}[/].")

    def cmd_import(self, args: list[str]) -> None:
        if len(args) != 1:
            raise CommandError("Usage: import FILE")
        try:
            document = Path(args[0]).read_text(encoding="utf-8")
        except OSError as e:
            raise CommandError(f"Cannot read {args[0]}: {e}") from e
        party_data, combat_data = self.storage.import_data(document)
        if party_data is None and combat_data is None:
            raise CommandError(f"{args[0]} is not a valid export file.")
        if party_data is not None:
            self.registry.restore_internal_state(
                party_data.parties,
                party_data.next_party_id,
                party_data.next_character_id,
            )
        self.tracker.restore_internal_state(combat_data)
        cprint(f"Imported [bold]{args[0]}[/].")

    # ============================================================================
    # DISPLAY COMMANDS
    # ============================================================================

    def cmd_show(self, args: list[str]) -> None:
        print_tracker_sheet(self.tracker)

    def cmd_log(self, args: list[str]) -> None:
        limit = parse_int(args[0], "Count") if args else None
        print_log_sheet(self.tracker, limit)

    def cmd_help(self, args: list[str]) -> None:
        for usage, description in HELP_TEXT:
            cprint(f"  [bold cyan]{usage:<32}[/] {description}")
