"""Schema catalog: card types, shapes, per-type fields and colours.

The catalog is built once at startup and shared read-only by the session,
the document store and the front end. Skeleton generation and commit-time
validation are pure functions of (card type, catalog).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from gridfolio.core.errors import CardValidationError

from .models import Card, format_json_value

OPTIONAL_MARKER = "?"
DEFAULT_PROFILE_TYPE = "Profile"
DEFAULT_COLOR = "grey50"


def is_optional(field_name: str) -> bool:
    return field_name.endswith(OPTIONAL_MARKER)


def field_key(field_name: str) -> str:
    """JSON key of a declared field (the optional marker is never part of it)."""

    return field_name[: -len(OPTIONAL_MARKER)] if is_optional(field_name) else field_name


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating card content against its type."""

    ok: bool
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_error(self, card_type: str | None = None) -> None:
        if not self.ok:
            raise CardValidationError(self.message, card_type=card_type)


VALID = ValidationResult(ok=True)


@dataclass(frozen=True)
class SchemaCatalog:
    """Static metadata describing valid cards."""

    card_types: Tuple[str, ...]
    shapes: Tuple[str, ...]
    fields: Mapping[str, Tuple[str, ...]]
    theme: Mapping[str, str] = field(default_factory=dict)
    profile_type: str = DEFAULT_PROFILE_TYPE
    section_type: str | None = None
    full_row_shape: str = "1x8"
    default_shape: str = "2x2"

    # Lookups ------------------------------------------------------------------

    def card_type(self, index: int) -> str:
        return self.card_types[index]

    def shape(self, index: int) -> str:
        return self.shapes[index]

    def shape_index(self, shape: str) -> int:
        """Position of ``shape`` in the catalog; unknown shapes count as 0."""

        try:
            return self.shapes.index(shape)
        except ValueError:
            return 0

    def next_shape(self, shape: str) -> str:
        return self.shapes[(self.shape_index(shape) + 1) % len(self.shapes)]

    def fields_for(self, card_type: str) -> Tuple[str, ...] | None:
        if card_type in self.fields:
            return self.fields[card_type]
        if card_type == self.profile_type:
            return ()
        return None

    def color_for(self, card_type: str) -> str:
        return self.theme.get(card_type, DEFAULT_COLOR)

    def is_full_row(self, card_type: str) -> bool:
        return card_type == self.section_type

    def is_section_index(self, card_index: int) -> bool:
        return self.section_type is not None and self.card_types[card_index] == self.section_type

    def default_shape_for(self, card_type: str) -> str:
        if card_type == self.profile_type or self.is_full_row(card_type):
            return self.full_row_shape
        return self.default_shape

    # Skeleton + validation ----------------------------------------------------

    def skeleton(self, card_type: str) -> Dict[str, Any]:
        """Template object: every declared field mapped to an empty string."""

        declared = self.fields_for(card_type) or ()
        return {field_key(name): "" for name in declared}

    def create_card(self, card_index: int, shape_index: int | None) -> Card:
        """Instantiate a new card of ``card_types[card_index]`` with skeleton content."""

        card_type = self.card_types[card_index]
        if self.is_full_row(card_type) or shape_index is None:
            shape = self.full_row_shape
        else:
            shape = self.shapes[shape_index]
        return Card(title=card_type, shape=shape, lines=format_json_value(self.skeleton(card_type)))

    def profile_card(self) -> Card:
        """Placeholder profile used when a run starts without a document."""

        return Card(
            title=self.profile_type,
            shape=self.full_row_shape,
            lines=format_json_value(self.skeleton(self.profile_type)),
        )

    def validate(self, text: str, card_type: str) -> ValidationResult:
        """Check ``text`` is a JSON object holding every required field of ``card_type``."""

        try:
            value = json.loads(text)
        except ValueError:
            return ValidationResult(ok=False, message="Invalid json format!")
        if not isinstance(value, dict):
            return ValidationResult(ok=False, message="Content must be a json object!")
        declared = self.fields_for(card_type)
        if declared is None:
            return ValidationResult(ok=False, message=f"No schema for card type {card_type}!")
        missing = [name for name in declared if not is_optional(name) and name not in value]
        if missing:
            return ValidationResult(ok=False, message=f"Missing necessary field: {', '.join(missing)}")
        return VALID


__all__ = [
    "DEFAULT_COLOR",
    "DEFAULT_PROFILE_TYPE",
    "OPTIONAL_MARKER",
    "SchemaCatalog",
    "VALID",
    "ValidationResult",
    "field_key",
    "is_optional",
]
