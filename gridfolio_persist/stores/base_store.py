"""
RESPONSIBILITIES
- Define shared interfaces and exceptions for document-backed card stores.
- Outline the load/save workflow used by concrete stores.
PROCESS OVERVIEW
1. load -> read the backing file, validate its structure, build a CardStore.
2. save -> serialize every card first, then swap the file in atomically.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from gridfolio.core.errors import DocumentError
from gridfolio.services.cards import CardStore


class StoreError(DocumentError):
    """Base exception type for persistence-layer failures."""


class StoreLoadError(StoreError):
    """Raised when a document cannot be read or has the wrong structure."""


class StoreSaveError(StoreError):
    """Raised when cards cannot be serialized or written; the old file is kept."""


class BaseStore(ABC):
    """Abstract class shared by concrete card stores."""

    path: Path

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def load(self) -> CardStore:
        """Read the backing document and return its cards."""

    @abstractmethod
    def save(self, cards: CardStore) -> Path:
        """Persist ``cards``, returning the written path."""
