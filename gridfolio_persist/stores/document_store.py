"""
RESPONSIBILITIES
- Manage the JSON document backing an editing session.
- Map the profile + showcase layout to an ordered CardStore and back.
PROCESS OVERVIEW
1. load() parses the file, validates it with ShowcaseDocument and builds cards.
2. Showcase shapes come from an optional "shape" key inside each value, which is
   lifted out of the editable content and written back on save.
3. save() serializes every card before touching the disk; any card whose content
   is not valid JSON aborts the save and leaves the previous file in place.
4. The new document is written to a temporary sibling and swapped in with os.replace.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple

from pydantic import ValidationError

from gridfolio.core.errors import ShapeError
from gridfolio.services.arrange import parse_shape
from gridfolio.services.cards import PROFILE_INDEX, Card, CardStore, SchemaCatalog
from gridfolio_persist.schemas.document import ShowcaseDocument
from gridfolio_persist.stores.base_store import BaseStore, StoreLoadError, StoreSaveError
from gridfolio_persist.utils.log import get_logger

SHAPE_KEY = "shape"


def _tmp_path(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def _atomic_write(text: str, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = _tmp_path(path)
    try:
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def _lift_shape(value: Any, fallback: str) -> Tuple[str, Any]:
    """Split an optional ``"shape"`` key off a card value."""

    if not isinstance(value, dict) or not isinstance(value.get(SHAPE_KEY), str):
        return fallback, value
    content = {k: v for k, v in value.items() if k != SHAPE_KEY}
    shape = value[SHAPE_KEY]
    try:
        parse_shape(shape)
    except ShapeError as exc:
        raise StoreLoadError(str(exc)) from exc
    return shape, content


def cards_from_document(document: ShowcaseDocument, catalog: SchemaCatalog) -> CardStore:
    profile_shape, profile = _lift_shape(dict(document.profile), catalog.full_row_shape)
    cards: List[Card] = [Card.from_value(catalog.profile_type, profile_shape, profile)]
    for title, value in document.entries():
        if catalog.is_full_row(title):
            shape, content = catalog.full_row_shape, value
        else:
            shape, content = _lift_shape(value, catalog.default_shape_for(title))
        cards.append(Card.from_value(title, shape, content))
    return CardStore(cards)


def _parse_card(card: Card, index: int) -> Any:
    try:
        return card.parse()
    except ValueError as exc:
        raise StoreSaveError(f"Card {index} ({card.title}) is not valid JSON: {exc}") from exc


def document_from_cards(cards: CardStore, catalog: SchemaCatalog) -> Dict[str, Any]:
    """Inverse of ``cards_from_document``; raises ``StoreSaveError`` on bad content."""

    if not len(cards):
        raise StoreSaveError("No profile found")
    profile_card = cards[PROFILE_INDEX]
    profile = _parse_card(profile_card, PROFILE_INDEX)
    if isinstance(profile, dict) and profile_card.shape != catalog.full_row_shape:
        profile = {**profile, SHAPE_KEY: profile_card.shape}

    showcase: List[Dict[str, Any]] = []
    for index, card in enumerate(cards.showcase(), start=PROFILE_INDEX + 1):
        value = _parse_card(card, index)
        if isinstance(value, dict) and not catalog.is_full_row(card.title):
            value = {**value, SHAPE_KEY: card.shape}
        showcase.append({card.title: value})
    return {"profile": profile, "showcase": showcase}


class DocumentStore(BaseStore):
    """Profile + showcase JSON document on disk."""

    def __init__(self, path: Path | str, catalog: SchemaCatalog, *, logger: logging.Logger | None = None) -> None:
        super().__init__(logger=logger or get_logger("document_store"))
        self.path = Path(path).expanduser()
        self.catalog = catalog

    def load(self) -> CardStore:
        self.logger.info("Loading document %s", self.path)
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreLoadError(f"Cannot read {self.path}: {exc}") from exc
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise StoreLoadError(f"{self.path} is not valid JSON: {exc}") from exc
        try:
            document = ShowcaseDocument.model_validate(data)
        except ValidationError as exc:
            raise StoreLoadError(f"{self.path} is not a profile/showcase document: {exc}") from exc
        cards = cards_from_document(document, self.catalog)
        self.logger.debug("Loaded %d cards", len(cards))
        return cards

    def save(self, cards: CardStore) -> Path:
        payload = document_from_cards(cards, self.catalog)
        text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
        try:
            _atomic_write(text, self.path)
        except OSError as exc:
            raise StoreSaveError(f"Cannot write {self.path}: {exc}") from exc
        self.logger.info("Saved %d cards to %s", len(cards), self.path)
        return self.path


# Convenience facade ---------------------------------------------------------------


def load_document(path: Path | str, catalog: SchemaCatalog) -> CardStore:
    return DocumentStore(path, catalog).load()


def save_document(cards: CardStore, path: Path | str, catalog: SchemaCatalog) -> Path:
    return DocumentStore(path, catalog).save(cards)
