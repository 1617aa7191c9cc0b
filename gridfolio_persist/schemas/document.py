"""
RESPONSIBILITIES
- Describe the on-disk profile + showcase document.
- Validate the top-level structure before cards are built from it.
PROCESS OVERVIEW
1. Stores call ShowcaseDocument.model_validate() on the parsed JSON.
2. entries() flattens showcase objects into (title, value) pairs in order.
3. Both keys are required; save builds its payload with document_from_cards().
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class ShowcaseDocument(BaseModel):
    """``{"profile": {...}, "showcase": [{"<title>": {...}}, ...]}``"""

    model_config = ConfigDict(extra="allow")

    profile: Dict[str, Any]
    showcase: List[Dict[str, Any]]

    @field_validator("showcase")
    @classmethod
    def _entries_not_empty(cls, value: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        for idx, entry in enumerate(value):
            if not entry:
                raise ValueError(f"showcase[{idx}] must name a card type")
        return value

    def entries(self) -> Iterator[Tuple[str, Any]]:
        for entry in self.showcase:
            for title, value in entry.items():
                yield title, value
