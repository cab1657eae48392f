"""
Core system module for the combat tracker.

This module contains the fundamental components shared by the rest of the
tracker: constants and enumerations, logging, error handling, dice rolling,
and console utilities.
"""

from .constants import (
    COMBAT_STATE_KEY,
    CURRENT_STORAGE_VERSION,
    DEFAULT_DATA_DIR,
    PARTIES_KEY,
    LogType,
    NiceEnum,
    Status,
)
from .dice import roll_d20, roll_initiative
from .error_handling import (
    ERROR_HANDLER,
    ErrorHandler,
    ErrorSeverity,
    PartyNotFoundError,
    StorageError,
    TrackerException,
)
from .logging import get_logger, setup_logging
from .utils import ccapture, cprint, crule, get_stat_modifier, make_bar, modifier_to_string

__all__ = [
    # Import from constants.py
    "COMBAT_STATE_KEY",
    "CURRENT_STORAGE_VERSION",
    "DEFAULT_DATA_DIR",
    "PARTIES_KEY",
    "LogType",
    "NiceEnum",
    "Status",
    # Import from dice.py
    "roll_d20",
    "roll_initiative",
    # Import from error_handling.py
    "ERROR_HANDLER",
    "ErrorHandler",
    "ErrorSeverity",
    "PartyNotFoundError",
    "StorageError",
    "TrackerException",
    # Import from logging.py
    "get_logger",
    "setup_logging",
    # Import from utils.py
    "ccapture",
    "cprint",
    "crule",
    "get_stat_modifier",
    "make_bar",
    "modifier_to_string",
]
