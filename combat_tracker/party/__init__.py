"""
Party management module for the combat tracker.

This module holds the registry of parties and characters that feed the
combat roster.
"""

from .party_registry import PartyRegistry

__all__ = [
    "PartyRegistry",
]
