"""
Combat Tracker for tabletop RPG encounters.

Assembles party characters and monsters into a combat roster, rolls initiative,
and steps through the turn cycle while tracking hit points, consciousness
status, and a chronological combat log.
"""

__version__ = "0.1.0"
