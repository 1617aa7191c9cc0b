"""Card data model: cards, the card store and the schema catalog."""

from .catalog import SchemaCatalog, ValidationResult, field_key, is_optional
from .models import Card, CardStore, PROFILE_INDEX, format_json, format_json_value

__all__ = [
    "Card",
    "CardStore",
    "PROFILE_INDEX",
    "SchemaCatalog",
    "ValidationResult",
    "field_key",
    "format_json",
    "format_json_value",
    "is_optional",
]
