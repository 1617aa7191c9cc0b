"""
Persistence facade exposing the JSON document store.
"""

from .stores.base_store import StoreError, StoreLoadError, StoreSaveError
from .stores.document_store import (
    DocumentStore,
    cards_from_document,
    document_from_cards,
    load_document,
    save_document,
)

__all__ = [
    "DocumentStore",
    "StoreError",
    "StoreLoadError",
    "StoreSaveError",
    "cards_from_document",
    "document_from_cards",
    "load_document",
    "save_document",
]
