"""Rich renderables for the editor panels, built from session state only."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from rich.markup import escape
from rich.text import Text

from gridfolio.services.arrange import Placement
from gridfolio.services.session import Create, Edit, EditingSession, Select

SELECTED_STYLE = "black on yellow"
HIGHLIGHT_COLOR = "yellow"
BLOCK = "█"

CELL_WIDTH = 4
CELL_HEIGHT = 2


def title_list(session: EditingSession) -> Text:
    """``> Profile`` followed by ``<n>. <type>-<shape>`` per showcase card."""

    catalog = session.catalog
    selected = session.mode.index if isinstance(session.mode, Select) else None
    text = Text()
    for index, card in enumerate(session.store):
        style = SELECTED_STYLE if index == selected else catalog.color_for(card.title)
        text.append(card.label(index), style=style)
        text.append("\n")
    return text


def create_menu(session: EditingSession) -> Text:
    mode = session.mode
    if not isinstance(mode, Create):
        return Text()
    catalog = session.catalog
    if mode.choosing_type:
        options: Sequence[str] = catalog.card_types
        current = mode.card_index
        heading = "Create: card type"
    else:
        options = catalog.shapes
        current = mode.shape_index
        heading = f"Create {catalog.card_type(mode.card_index)}: shape"
    text = Text(heading + "\n", style="bold cyan")
    for idx, option in enumerate(options):
        text.append(f"  {option}\n", style=HIGHLIGHT_COLOR if idx == current else "white")
    return text


def delete_prompt(session: EditingSession) -> Text:
    card = session.store[session.selected_index]
    text = Text(f"Delete {card.label(session.selected_index)}?\n", style="bold red")
    text.append("Confirm(↵)    Cancel(Esc)")
    return text


def editor_title(session: EditingSession) -> str:
    """Border title markup for the editor: green when valid, red otherwise."""

    label = escape(session.indicator())
    if not isinstance(session.mode, Edit):
        return label
    color = "green" if session.buffer_validity().ok else "red"
    return f"[{color}]{label}[/]"


def scroll_offset(placements: Sequence[Placement], selected: int, visible_rows: int) -> int:
    """Grid-row offset that keeps the selected card's bottom edge in view."""

    if selected < 1 or selected - 1 >= len(placements) or visible_rows <= 0:
        return 0
    bottom = placements[selected - 1].end_row
    return max(0, bottom - visible_rows)


def preview_canvas(
    session: EditingSession,
    *,
    visible_rows: int | None = None,
    cell_width: int = CELL_WIDTH,
    cell_height: int = CELL_HEIGHT,
) -> Text:
    """Draw the arrangement as coloured blocks, the selected card in yellow.

    Each card leaves a one-character gap on its right and bottom edges so
    neighbours stay distinguishable.
    """

    rows, cols = session.grid
    placements = session.preview()
    used_rows = max((p.end_row for p in placements), default=0)
    visible = used_rows if visible_rows is None else min(visible_rows, rows)
    offset = scroll_offset(placements, session.selected_index, visible)

    height = visible * cell_height
    width = cols * cell_width
    canvas: List[List[Tuple[str, str]]] = [[(" ", "")] * width for _ in range(height)]
    for position, placement in enumerate(placements, start=1):
        color = HIGHLIGHT_COLOR if position == session.selected_index else session.catalog.color_for(placement.card_type)
        top = (placement.start_row - offset) * cell_height
        left = placement.start_col * cell_width
        for y in range(top, top + placement.height * cell_height - 1):
            if not 0 <= y < height:
                continue
            for x in range(left, left + placement.width * cell_width - 1):
                canvas[y][x] = (BLOCK, color)

    text = Text()
    for line in canvas:
        for char, style in line:
            text.append(char, style=style or None)
        text.append("\n")
    return text


__all__ = [
    "create_menu",
    "delete_prompt",
    "editor_title",
    "preview_canvas",
    "scroll_offset",
    "title_list",
]
