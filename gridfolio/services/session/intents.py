"""User intents, abstracted from raw keys."""

from __future__ import annotations

from enum import Enum


class Intent(str, Enum):
    QUIT = "quit"
    NEW_CARD = "new_card"
    DELETE_CARD = "delete_card"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    RESHAPE = "reshape"
    OPEN = "open"
    CURSOR_UP = "cursor_up"
    CURSOR_DOWN = "cursor_down"
    COMMIT = "commit"
    CONFIRM = "confirm"
    CANCEL = "cancel"


__all__ = ["Intent"]
