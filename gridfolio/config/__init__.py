"""Configuration helpers for the Gridfolio schema catalog.

Loads ``metadata.yaml`` (card types, shapes, per-type fields, preview grid
and colour themes), validates it with pydantic and builds the immutable
``SchemaCatalog`` shared by the rest of the application.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gridfolio.core.errors import ConfigError, ShapeError
from gridfolio.core.logger import get_logger
from gridfolio.core.workspace import resolve_config_path
from gridfolio.services.arrange import parse_shape
from gridfolio.services.cards import SchemaCatalog
from gridfolio.services.cards.catalog import DEFAULT_PROFILE_TYPE

DEFAULT_THEME = "mondrian"


class CardsSection(BaseModel):
    """``cards`` node: what may be created and how it is validated."""

    model_config = ConfigDict(extra="allow")

    types: List[str]
    shapes: List[str]
    fields: Dict[str, List[str]] = Field(default_factory=dict)
    profile_type: str = DEFAULT_PROFILE_TYPE
    section_type: str | None = None
    default_shape: str = "2x2"
    full_row_shape: str | None = None


class PreviewSection(BaseModel):
    """``preview`` node: the arrangement grid."""

    model_config = ConfigDict(extra="allow")

    rows: int = Field(default=50, gt=0)
    cols: int = Field(default=8, gt=0)


class MetadataConfig(BaseModel):
    """Complete metadata file model."""

    model_config = ConfigDict(extra="allow")

    cards: CardsSection
    preview: PreviewSection = Field(default_factory=PreviewSection)
    themes: Dict[str, List[Union[int, str]]] = Field(default_factory=dict)


@dataclass(frozen=True)
class EditorConfig:
    """Resolved configuration for one editing run."""

    catalog: SchemaCatalog
    grid: Tuple[int, int]
    source: Path
    theme_name: str | None = None


def load_editor_config(path: str | Path | None = None, *, theme: str = DEFAULT_THEME) -> EditorConfig:
    """Load and validate the metadata file, selecting ``theme`` by name."""

    config_path = resolve_config_path(path)
    raw = _load_yaml(config_path)
    try:
        model = MetadataConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid metadata file {config_path}: {exc}") from exc
    catalog = build_catalog(model, theme=theme)
    grid = (model.preview.rows, model.preview.cols)
    get_logger().getChild("config").info(
        "Loaded %d card types, %d shapes from %s", len(catalog.card_types), len(catalog.shapes), config_path
    )
    return EditorConfig(
        catalog=catalog,
        grid=grid,
        source=config_path,
        theme_name=theme if model.themes else None,
    )


def load_catalog(path: str | Path | None = None, *, theme: str = DEFAULT_THEME) -> SchemaCatalog:
    return load_editor_config(path, theme=theme).catalog


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Metadata file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse metadata file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Metadata file must hold a mapping")
    return data


def build_catalog(model: MetadataConfig, *, theme: str = DEFAULT_THEME) -> SchemaCatalog:
    cards = model.cards
    types = _distinct(cards.types, "cards.types")
    shapes = _distinct(cards.shapes, "cards.shapes")
    for shape in shapes:
        _check_shape(shape, "cards.shapes")
    _check_shape(cards.default_shape, "cards.default_shape")

    missing = [name for name in types if name not in cards.fields]
    if missing:
        raise ConfigError(f"cards.fields has no entry for: {', '.join(missing)}")

    section_type = cards.section_type or types[0]
    if section_type not in types:
        raise ConfigError(f"cards.section_type {section_type!r} is not a card type")
    full_row_shape = cards.full_row_shape or f"1x{model.preview.cols}"
    _check_shape(full_row_shape, "cards.full_row_shape")

    return SchemaCatalog(
        card_types=types,
        shapes=shapes,
        fields={name: tuple(values) for name, values in cards.fields.items()},
        theme=_resolve_theme(model.themes, types, theme),
        profile_type=cards.profile_type,
        section_type=section_type,
        full_row_shape=full_row_shape,
        default_shape=cards.default_shape,
    )


def _distinct(values: List[str], node: str) -> Tuple[str, ...]:
    if not values:
        raise ConfigError(f"{node} must not be empty")
    seen: list[str] = []
    for value in values:
        if value in seen:
            raise ConfigError(f"{node} contains {value!r} twice")
        seen.append(value)
    return tuple(seen)


def _check_shape(shape: str, node: str) -> None:
    try:
        parse_shape(shape)
    except ShapeError as exc:
        raise ConfigError(f"{node}: {exc}") from exc


def _resolve_theme(themes: Dict[str, List[Union[int, str]]], types: Tuple[str, ...], name: str) -> Dict[str, str]:
    if not themes:
        return {}
    colors = themes.get(name)
    if colors is None:
        raise ConfigError(f"No such theme: {name} (available: {', '.join(sorted(themes))})")
    return {card_type: _color_name(color) for card_type, color in zip(types, colors)}


def _color_name(value: Union[int, str]) -> str:
    if isinstance(value, int):
        return f"color({value})"
    return str(value)


__all__ = [
    "CardsSection",
    "DEFAULT_THEME",
    "EditorConfig",
    "MetadataConfig",
    "PreviewSection",
    "build_catalog",
    "load_catalog",
    "load_editor_config",
]
