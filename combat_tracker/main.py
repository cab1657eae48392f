"""
Main entry point for the combat tracker.

Restores the parties and the combat state saved in the data directory,
attaches the storage so that every change is saved, and runs the
interactive shell.
"""

import argparse
import logging
from pathlib import Path

from .combat.main import CombatTracker
from .core.constants import DEFAULT_DATA_DIR
from .core.logging import log_debug, log_error, setup_logging
from .party.party_registry import PartyRegistry
from .storage.json_store import JsonFileStore
from .storage.tracker_storage import TrackerStorage
from .ui.cli_interface import TrackerShell


def report_storage(message: str, success: bool) -> None:
    """Storage observer forwarding the operation outcome to the log."""
    if success:
        log_debug(message)
    else:
        log_error(message)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="combat-tracker",
        description="Tabletop RPG combat tracker: initiative, turns, damage and status.",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help=f"Directory holding the saved state (default: {DEFAULT_DATA_DIR}).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    storage = TrackerStorage(JsonFileStore(args.data_dir))
    storage.subscribe(report_storage)

    registry = PartyRegistry()
    tracker = CombatTracker()

    # Restore before attaching, so loading does not write the state back.
    storage.restore_registry(registry)
    storage.restore(tracker)
    storage.attach_registry(registry)
    storage.attach(tracker)

    TrackerShell(tracker, registry, storage).run()


if __name__ == "__main__":
    main()
