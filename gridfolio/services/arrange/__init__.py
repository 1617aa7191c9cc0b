"""Card arrangement engine used by the live preview."""

from .engine import Placement, arrange_grid, parse_shape, place_card, render_ascii

__all__ = [
    "Placement",
    "arrange_grid",
    "parse_shape",
    "place_card",
    "render_ascii",
]
