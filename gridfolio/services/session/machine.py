"""Editing session state machine.

The session owns the card store for the duration of a run. Each call to
``dispatch`` applies one intent to the current mode and returns the next
mode; intents that do not apply to the current state are ignored.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from gridfolio.core.logger import get_logger
from gridfolio.services.arrange import Placement, arrange_grid
from gridfolio.services.cards import PROFILE_INDEX, Card, CardStore, SchemaCatalog, ValidationResult

from .intents import Intent
from .modes import Create, Delete, Edit, Mode, Quit, Select, anchor_index

DEFAULT_GRID: Tuple[int, int] = (50, 8)


class EditingSession:
    """Mode, selection and editable buffer over a ``CardStore``."""

    def __init__(
        self,
        store: CardStore,
        catalog: SchemaCatalog,
        *,
        grid: Tuple[int, int] = DEFAULT_GRID,
        logger: logging.Logger | None = None,
    ) -> None:
        self.logger = logger or get_logger().getChild("session")
        self.store = store
        self.catalog = catalog
        self.grid = grid
        if not len(store):
            self.logger.warning("Empty card store, seeding a placeholder %s card", catalog.profile_type)
            store.insert(PROFILE_INDEX, catalog.profile_card())
        self.mode: Mode = Select(PROFILE_INDEX)
        self.invalid_attempts = 0
        self.buffer: List[str] = list(store[PROFILE_INDEX].lines)

    # Queries ------------------------------------------------------------------

    @property
    def finished(self) -> bool:
        return isinstance(self.mode, Quit)

    @property
    def selected_index(self) -> int:
        return anchor_index(self.mode)

    @property
    def buffer_text(self) -> str:
        return "\n".join(self.buffer)

    def buffer_validity(self) -> ValidationResult:
        card = self.store[self.selected_index]
        return self.catalog.validate(self.buffer_text, card.title)

    def indicator(self) -> str:
        """Editor title: ``OK`` or an ``Oooops!`` that grows with failed commits."""

        if not isinstance(self.mode, Edit):
            return "Edit"
        if self._viewing_unknown_type():
            return f"View only: no schema for {self.store[self.selected_index].title}"
        result = self.buffer_validity()
        if result.ok:
            return "OK"
        return f"O{'o' * self.invalid_attempts}ps! {result.message}"

    def _viewing_unknown_type(self) -> bool:
        card = self.store[self.selected_index]
        return self.catalog.fields_for(card.title) is None and self.buffer == card.lines

    def preview(self) -> List[Placement]:
        """Arrangement of every card except the profile."""

        return arrange_grid(self.grid, self.store.shape_pairs())

    # Mutation -----------------------------------------------------------------

    def edit_buffer(self, lines: Sequence[str] | str) -> bool:
        """Replace the editable buffer; only honoured in Edit mode."""

        if not isinstance(self.mode, Edit):
            return False
        if isinstance(lines, str):
            lines = lines.split("\n")
        self.buffer = list(lines)
        return True

    def dispatch(self, intent: Intent) -> Mode:
        mode = self.mode
        if isinstance(mode, Select):
            self._select(mode, intent)
        elif isinstance(mode, Edit):
            self._edit(mode, intent)
        elif isinstance(mode, Create):
            self._create(mode, intent)
        elif isinstance(mode, Delete):
            self._delete(mode, intent)
        if self.mode != mode:
            self.logger.debug("%s --%s--> %s", mode, intent.value, self.mode)
        return self.mode

    def _load_buffer(self, index: int) -> None:
        self.buffer = list(self.store[index].lines)

    def _select(self, mode: Select, intent: Intent) -> None:
        i = mode.index
        store = self.store
        if intent is Intent.QUIT:
            self.mode = Quit()
        elif intent is Intent.NEW_CARD:
            self.mode = Create(i, 0, None)
        elif intent is Intent.DELETE_CARD:
            if i != PROFILE_INDEX:
                self.mode = Delete(i)
        elif intent is Intent.MOVE_DOWN:
            if PROFILE_INDEX < i < store.last_index:
                store.swap(i, i + 1)
                self.mode = Select(i + 1)
                self.logger.info("Moved card %s down to %d", store[i + 1].title, i + 1)
        elif intent is Intent.MOVE_UP:
            if i > PROFILE_INDEX + 1:
                store.swap(i, i - 1)
                self.mode = Select(i - 1)
                self.logger.info("Moved card %s up to %d", store[i - 1].title, i - 1)
        elif intent is Intent.RESHAPE:
            self._reshape(i)
        elif intent is Intent.OPEN:
            self.mode = Edit(i)
            self.invalid_attempts = 0
            self._load_buffer(i)
        elif intent is Intent.CURSOR_UP:
            if i > 0:
                self.mode = Select(i - 1)
                self._load_buffer(i - 1)
        elif intent is Intent.CURSOR_DOWN:
            if i < store.last_index:
                self.mode = Select(i + 1)
                self._load_buffer(i + 1)

    def _reshape(self, index: int) -> None:
        card = self.store[index]
        if index == PROFILE_INDEX or self.catalog.is_full_row(card.title):
            return
        card.shape = self.catalog.next_shape(card.shape)
        self.logger.info("Reshape - %s-%s", card.title, card.shape)

    def _edit(self, mode: Edit, intent: Intent) -> None:
        if intent is not Intent.COMMIT:
            return
        card = self.store[mode.index]
        if self._viewing_unknown_type():
            self.mode = Select(mode.index)
            self.logger.info("Closed %s at %d without changes (no schema)", card.title, mode.index)
            return
        result = self.catalog.validate(self.buffer_text, card.title)
        if not result.ok:
            self.invalid_attempts += 1
            self.logger.info("Rejected edit of %s: %s", card.title, result.message)
            return
        card.set_lines_and_format(self.buffer)
        self.buffer = list(card.lines)
        self.invalid_attempts = 0
        self.mode = Select(mode.index)
        self.logger.info("Committed edit of %s at %d", card.title, mode.index)

    def _create(self, mode: Create, intent: Intent) -> None:
        catalog = self.catalog
        if intent is Intent.CANCEL:
            self.mode = Select(mode.index)
        elif intent is Intent.CONFIRM:
            if mode.choosing_type and not catalog.is_section_index(mode.card_index):
                self.mode = Create(mode.index, mode.card_index, 0)
            else:
                self._insert(mode.index + 1, catalog.create_card(mode.card_index, mode.shape_index))
        elif intent in (Intent.CURSOR_UP, Intent.CURSOR_DOWN):
            step = -1 if intent is Intent.CURSOR_UP else 1
            if mode.choosing_type:
                card_index = _clamp(mode.card_index + step, len(catalog.card_types) - 1)
                self.mode = Create(mode.index, card_index, None)
            else:
                shape_index = _clamp(mode.shape_index + step, len(catalog.shapes) - 1)
                self.mode = Create(mode.index, mode.card_index, shape_index)

    def _insert(self, index: int, card: Card) -> None:
        self.store.insert(index, card)
        self.mode = Edit(index)
        self.invalid_attempts = 0
        self._load_buffer(index)
        self.logger.info("Created %s-%s at %d", card.title, card.shape, index)

    def _delete(self, mode: Delete, intent: Intent) -> None:
        if intent is Intent.CANCEL:
            self.mode = Select(mode.index)
        elif intent is Intent.CONFIRM and mode.index != PROFILE_INDEX:
            removed = self.store.remove(mode.index)
            self.mode = Select(mode.index - 1)
            self._load_buffer(mode.index - 1)
            self.logger.info("Deleted %s at %d", removed.title, mode.index)


def _clamp(value: int, upper: int) -> int:
    return max(0, min(value, upper))


__all__ = ["DEFAULT_GRID", "EditingSession"]
