from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import gridfolio.core.logger as core_logger
from gridfolio.services.cards import Card, CardStore, SchemaCatalog


@pytest.fixture(autouse=True)
def _isolated_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep log files and config lookups out of the developer's home."""

    monkeypatch.setattr(core_logger, "_work_dir", lambda: tmp_path / "work")
    monkeypatch.setattr(core_logger, "_LOGGER", None, raising=False)
    monkeypatch.delenv("GRIDFOLIO_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def catalog() -> SchemaCatalog:
    return SchemaCatalog(
        card_types=("Section", "Note", "Link", "Photo"),
        shapes=("4x4", "4x2", "2x4", "2x2", "1x4"),
        fields={
            "Profile": ("name", "bio?"),
            "Section": ("title",),
            "Note": ("text", "title?"),
            "Link": ("url",),
            "Photo": ("src", "caption?"),
        },
        theme={"Section": "color(9)", "Note": "color(10)", "Link": "color(12)", "Photo": "color(13)"},
        section_type="Section",
        full_row_shape="1x8",
        default_shape="2x2",
    )


@pytest.fixture()
def make_store() -> Callable[[int], CardStore]:
    """Profile plus ``count - 1`` Note cards whose text names their position."""

    def _build(count: int) -> CardStore:
        cards = [Card.from_value("Profile", "1x8", {"name": "Ada"})]
        cards.extend(Card.from_value("Note", "2x2", {"text": f"note {i}"}) for i in range(1, count))
        return CardStore(cards)

    return _build
