"""
User interface module for the combat tracker.

This module provides the interactive shell and the rich rendering of the
encounter, the initiative order and the combat log.
"""

from .cli_interface import CommandError, TrackerShell
from .sheets import (
    build_initiative_table,
    build_log_table,
    build_party_table,
    build_setup_table,
    print_log_sheet,
    print_tracker_sheet,
)

__all__ = [
    # Import from cli_interface.py
    "CommandError",
    "TrackerShell",
    # Import from sheets.py
    "build_initiative_table",
    "build_log_table",
    "build_party_table",
    "build_setup_table",
    "print_log_sheet",
    "print_tracker_sheet",
]
