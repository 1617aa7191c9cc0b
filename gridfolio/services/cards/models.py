"""Card entities and the ordered card store edited by a session."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Sequence

JSON_INDENT = 2
PROFILE_INDEX = 0


def format_json(text: str) -> List[str]:
    """Pretty-print JSON text into lines; unparsable text is returned as one line."""

    try:
        value = json.loads(text)
    except ValueError:
        return [text]
    return format_json_value(value)


def format_json_value(value: Any) -> List[str]:
    return json.dumps(value, indent=JSON_INDENT, ensure_ascii=False).split("\n")


@dataclass(slots=True)
class Card:
    """One content unit of the document."""

    title: str
    shape: str
    lines: List[str] = field(default_factory=lambda: ["{}"])

    @classmethod
    def from_value(cls, title: str, shape: str, value: Any) -> "Card":
        return cls(title=title, shape=shape, lines=format_json_value(value))

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def parse(self) -> Any:
        """Return the parsed content; raises ``ValueError`` on malformed JSON."""

        return json.loads(self.text)

    def set_lines(self, lines: Sequence[str]) -> None:
        self.lines = list(lines)

    def set_lines_and_format(self, lines: Sequence[str]) -> None:
        self.lines = format_json("\n".join(lines))

    def label(self, index: int) -> str:
        """Title-list entry, e.g. ``> Profile`` or ``3. Note-2x2``."""

        if index == PROFILE_INDEX:
            return f"> {self.title}"
        return f"{index}. {self.title}-{self.shape}"


class CardStore:
    """Ordered cards; index 0 is the profile, the rest form the showcase."""

    def __init__(self, cards: Iterable[Card] | None = None) -> None:
        self._cards: List[Card] = list(cards or [])

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __getitem__(self, index: int) -> Card:
        return self._cards[index]

    def __repr__(self) -> str:
        return f"CardStore({[f'{c.title}-{c.shape}' for c in self._cards]})"

    @property
    def last_index(self) -> int:
        return len(self._cards) - 1

    def showcase(self) -> List[Card]:
        return self._cards[PROFILE_INDEX + 1 :]

    def shape_pairs(self) -> List[tuple[str, str]]:
        """``(card_type, shape)`` pairs of the showcase, the arrangement input."""

        return [(card.title, card.shape) for card in self.showcase()]

    def insert(self, index: int, card: Card) -> None:
        self._cards.insert(index, card)

    def remove(self, index: int) -> Card:
        if index == PROFILE_INDEX:
            raise IndexError("the profile card cannot be removed")
        return self._cards.pop(index)

    def swap(self, first: int, second: int) -> None:
        cards = self._cards
        cards[first], cards[second] = cards[second], cards[first]


__all__ = [
    "Card",
    "CardStore",
    "JSON_INDENT",
    "PROFILE_INDEX",
    "format_json",
    "format_json_value",
]
