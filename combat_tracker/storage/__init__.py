"""
Persistence module for the combat tracker.

This module stores party data and combat snapshots as JSON documents and
handles import and export of the whole tracker state.
"""

from .json_store import JsonFileStore
from .tracker_storage import ExportData, PartyStorageData, TrackerStorage

__all__ = [
    # Import from json_store.py
    "JsonFileStore",
    # Import from tracker_storage.py
    "ExportData",
    "PartyStorageData",
    "TrackerStorage",
]
