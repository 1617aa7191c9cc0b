"""Session modes: a closed set of frozen variants carrying their indices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class Select:
    index: int


@dataclass(frozen=True, slots=True)
class Edit:
    index: int


@dataclass(frozen=True, slots=True)
class Create:
    """Creating a card after ``index``.

    ``shape_index`` is None while the card type is being chosen.
    """

    index: int
    card_index: int = 0
    shape_index: Optional[int] = None

    @property
    def choosing_type(self) -> bool:
        return self.shape_index is None


@dataclass(frozen=True, slots=True)
class Delete:
    index: int


@dataclass(frozen=True, slots=True)
class Quit:
    pass


Mode = Union[Select, Edit, Create, Delete, Quit]


def anchor_index(mode: Mode) -> int:
    """Card store index the mode originated from (0 for Quit)."""

    return getattr(mode, "index", 0)


__all__ = ["Create", "Delete", "Edit", "Mode", "Quit", "Select", "anchor_index"]
