from __future__ import annotations

import json
from pathlib import Path

import pytest

import gridfolio_persist.stores.document_store as document_store
from gridfolio.services.cards import Card, CardStore, SchemaCatalog
from gridfolio_persist import (
    DocumentStore,
    StoreLoadError,
    StoreSaveError,
    load_document,
    save_document,
)


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture()
def document(tmp_path: Path) -> Path:
    return _write(
        tmp_path / "portfolio.json",
        {
            "profile": {"name": "Ada", "bio": "engineer"},
            "showcase": [
                {"Section": {"title": "Writing"}},
                {"Note": {"text": "hello", "shape": "2x4"}},
                {"Link": {"url": "https://example.org"}},
            ],
        },
    )


def test_load_builds_cards_in_document_order(document: Path, catalog: SchemaCatalog) -> None:
    cards = DocumentStore(document, catalog).load()

    assert [(c.title, c.shape) for c in cards] == [
        ("Profile", "1x8"),
        ("Section", "1x8"),
        ("Note", "2x4"),
        ("Link", "2x2"),
    ]
    assert cards[0].parse() == {"name": "Ada", "bio": "engineer"}
    assert cards[2].parse() == {"text": "hello"}


def test_save_round_trips_shapes_and_content(document: Path, catalog: SchemaCatalog, tmp_path: Path) -> None:
    cards = load_document(document, catalog)
    cards[3].shape = "4x4"
    out = save_document(cards, tmp_path / "out" / "saved.json", catalog)

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["profile"] == {"name": "Ada", "bio": "engineer"}
    assert data["showcase"] == [
        {"Section": {"title": "Writing"}},
        {"Note": {"text": "hello", "shape": "2x4"}},
        {"Link": {"url": "https://example.org", "shape": "4x4"}},
    ]
    assert [(c.title, c.shape) for c in load_document(out, catalog)] == [(c.title, c.shape) for c in cards]


def test_section_shape_key_is_editable_content(tmp_path: Path, catalog: SchemaCatalog) -> None:
    path = _write(tmp_path / "doc.json", {"profile": {"name": "x"}, "showcase": [{"Section": {"title": "t", "shape": "2x2"}}]})

    cards = load_document(path, catalog)

    assert cards[1].shape == "1x8"
    assert cards[1].parse() == {"title": "t", "shape": "2x2"}


def test_multi_key_showcase_entry_expands_to_several_cards(tmp_path: Path, catalog: SchemaCatalog) -> None:
    path = _write(
        tmp_path / "doc.json",
        {"profile": {"name": "x"}, "showcase": [{"Note": {"text": "a"}, "Photo": {"src": "p.png"}}]},
    )

    cards = load_document(path, catalog)

    assert [c.title for c in cards] == ["Profile", "Note", "Photo"]


def test_empty_showcase_means_profile_only(tmp_path: Path, catalog: SchemaCatalog) -> None:
    path = _write(tmp_path / "doc.json", {"profile": {"name": "x"}, "showcase": []})

    cards = load_document(path, catalog)

    assert len(cards) == 1
    assert cards.shape_pairs() == []


@pytest.mark.parametrize(
    "payload",
    [
        {"showcase": []},
        {"profile": {"name": "Ada"}},
        {"profile": {"name": "Ada"}, "showcase": {"Note": {"text": "a"}}},
        {"profile": "Ada", "showcase": []},
        {"profile": {}, "showcase": [{}]},
        {"profile": {}, "showcase": [{"Note": {"text": "a", "shape": "big"}}]},
        ["not", "an", "object"],
    ],
)
def test_load_rejects_malformed_documents(tmp_path: Path, catalog: SchemaCatalog, payload: object) -> None:
    path = _write(tmp_path / "doc.json", payload)

    with pytest.raises(StoreLoadError):
        load_document(path, catalog)


def test_load_reports_unreadable_and_invalid_files(tmp_path: Path, catalog: SchemaCatalog) -> None:
    with pytest.raises(StoreLoadError, match="Cannot read"):
        load_document(tmp_path / "missing.json", catalog)

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreLoadError, match="not valid JSON"):
        load_document(broken, catalog)


def test_save_refuses_invalid_card_and_keeps_previous_file(document: Path, catalog: SchemaCatalog) -> None:
    before = document.read_text(encoding="utf-8")
    cards = load_document(document, catalog)
    cards[2].set_lines(['{"text": "unfinished"'])

    with pytest.raises(StoreSaveError, match=r"Card 2 \(Note\)"):
        save_document(cards, document, catalog)

    assert document.read_text(encoding="utf-8") == before


def test_failed_replace_leaves_old_file_and_no_temp(
    document: Path, catalog: SchemaCatalog, monkeypatch: pytest.MonkeyPatch
) -> None:
    before = document.read_text(encoding="utf-8")
    cards = load_document(document, catalog)

    def boom(src: object, dst: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(document_store.os, "replace", boom)

    with pytest.raises(StoreSaveError, match="disk full"):
        save_document(cards, document, catalog)

    assert document.read_text(encoding="utf-8") == before
    assert not document.with_name(document.name + ".tmp").exists()


def test_save_without_profile_fails(tmp_path: Path, catalog: SchemaCatalog) -> None:
    with pytest.raises(StoreSaveError, match="No profile found"):
        save_document(CardStore(), tmp_path / "empty.json", catalog)


def test_reshaped_profile_keeps_its_shape(tmp_path: Path, catalog: SchemaCatalog) -> None:
    cards = CardStore([Card.from_value("Profile", "2x8", {"name": "x"})])
    path = save_document(cards, tmp_path / "doc.json", catalog)

    assert json.loads(path.read_text(encoding="utf-8"))["profile"] == {"name": "x", "shape": "2x8"}
    assert load_document(path, catalog)[0].shape == "2x8"


def test_save_writes_two_space_indented_json(document: Path, catalog: SchemaCatalog) -> None:
    save_document(load_document(document, catalog), document, catalog)

    text = document.read_text(encoding="utf-8")
    assert text.startswith('{\n  "profile": {\n    "name": "Ada"')
    assert text.endswith("}\n")


def test_full_row_profile_shape_is_normalised_away(tmp_path: Path, catalog: SchemaCatalog) -> None:
    path = _write(tmp_path / "doc.json", {"profile": {"name": "x", "shape": "1x8"}, "showcase": []})

    cards = load_document(path, catalog)
    assert cards[0].shape == "1x8"
    assert cards[0].parse() == {"name": "x"}

    save_document(cards, path, catalog)
    assert json.loads(path.read_text(encoding="utf-8"))["profile"] == {"name": "x"}
