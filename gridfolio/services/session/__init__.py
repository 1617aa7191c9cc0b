"""Editing session: modes, intents, key bindings and the state machine."""

from .intents import Intent
from .keymap import intent_for_key, shortcuts_for
from .machine import DEFAULT_GRID, EditingSession
from .modes import Create, Delete, Edit, Mode, Quit, Select, anchor_index

__all__ = [
    "Create",
    "DEFAULT_GRID",
    "Delete",
    "Edit",
    "EditingSession",
    "Intent",
    "Mode",
    "Quit",
    "Select",
    "anchor_index",
    "intent_for_key",
    "shortcuts_for",
]
