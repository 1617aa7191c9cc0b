"""Key bindings per mode and the status-bar shortcut hints."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from .intents import Intent
from .modes import Create, Delete, Edit, Mode, Quit, Select

SELECT_KEYS: Mapping[str, Intent] = {
    "q": Intent.QUIT,
    "n": Intent.NEW_CARD,
    "d": Intent.DELETE_CARD,
    "j": Intent.MOVE_DOWN,
    "k": Intent.MOVE_UP,
    "r": Intent.RESHAPE,
    "enter": Intent.OPEN,
    "up": Intent.CURSOR_UP,
    "down": Intent.CURSOR_DOWN,
}

EDIT_KEYS: Mapping[str, Intent] = {
    "escape": Intent.COMMIT,
}

CREATE_KEYS: Mapping[str, Intent] = {
    "enter": Intent.CONFIRM,
    "escape": Intent.CANCEL,
    "up": Intent.CURSOR_UP,
    "down": Intent.CURSOR_DOWN,
}

DELETE_KEYS: Mapping[str, Intent] = {
    "enter": Intent.CONFIRM,
    "escape": Intent.CANCEL,
}

_KEYMAPS: Dict[type, Mapping[str, Intent]] = {
    Select: SELECT_KEYS,
    Edit: EDIT_KEYS,
    Create: CREATE_KEYS,
    Delete: DELETE_KEYS,
}

SHORTCUTS: Dict[type, str] = {
    Select: "Shortcuts: Move Cursor(↑↓) Select(↵) Move Card(JK) Reshape Card(R) Create New(N) Delete(D) Quit(Q)",
    Edit: "Shortcuts: Go Back(Esc)",
    Create: "Shortcuts: Move Cursor(↑↓) Confirm Create(↵) Cancel(Esc)",
    Delete: "Shortcuts: Confirm Delete(↵) Cancel(Esc)",
    Quit: "Bye~",
}


def normalize_key(key: str) -> str:
    """Fold single letters to lower case; named keys pass through."""

    return key.lower() if len(key) == 1 else key


def intent_for_key(mode: Mode, key: str) -> Optional[Intent]:
    keymap = _KEYMAPS.get(type(mode))
    if keymap is None:
        return None
    return keymap.get(normalize_key(key))


def shortcuts_for(mode: Mode) -> str:
    return SHORTCUTS[type(mode)]


__all__ = [
    "CREATE_KEYS",
    "DELETE_KEYS",
    "EDIT_KEYS",
    "SELECT_KEYS",
    "intent_for_key",
    "normalize_key",
    "shortcuts_for",
]
