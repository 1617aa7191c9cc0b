from __future__ import annotations

import random
from itertools import combinations

import pytest

from gridfolio.core.errors import ShapeError
from gridfolio.services.arrange import Placement, arrange_grid, parse_shape, place_card, render_ascii
from gridfolio.services.arrange.engine import new_grid

SHAPES = ["4x4", "4x2", "2x4", "2x2", "1x4", "1x8", "3x1", "1x1", "2x9", "6x3"]


def _coords(placements: list[Placement]) -> list[tuple[int, int, int, int]]:
    return [(p.start_row, p.start_col, p.height, p.width) for p in placements]


def test_tall_narrow_grid_wraps_third_card_below() -> None:
    placements = arrange_grid((50, 8), [("Note", "4x4"), ("Note", "4x2"), ("Note", "2x4")])
    assert _coords(placements) == [(0, 0, 4, 4), (0, 4, 4, 2), (4, 0, 2, 4)]


def test_wide_grid_keeps_third_card_on_first_row() -> None:
    placements = arrange_grid((8, 50), [("Note", "4x4"), ("Note", "4x2"), ("Note", "2x4")])
    assert _coords(placements) == [(0, 0, 4, 4), (0, 4, 4, 2), (0, 6, 2, 4)]


def test_mixed_showcase_layout() -> None:
    cards = [
        ("Section", "1x8"),
        ("Note", "4x4"),
        ("Note", "4x2"),
        ("Note", "2x4"),
        ("Social", "2x2"),
        ("Counter", "1x4"),
        ("Section", "1x8"),
        ("Social", "2x2"),
    ]
    placements = arrange_grid((50, 8), cards)
    assert _coords(placements) == [
        (0, 0, 1, 8),
        (1, 0, 4, 4),
        (1, 4, 4, 2),
        (5, 0, 2, 4),
        (5, 4, 2, 2),
        (7, 0, 1, 4),
        (8, 0, 1, 8),
        (9, 0, 2, 2),
    ]
    assert [p.card_type for p in placements] == [c[0] for c in cards]


def test_floor_prevents_backfilling_earlier_rows() -> None:
    # The 1x1 would fit at (0, 7) but the floor already moved to row 1.
    placements = arrange_grid((10, 8), [("A", "1x7"), ("B", "2x8"), ("C", "1x1")])
    assert _coords(placements) == [(0, 0, 1, 7), (1, 0, 2, 8), (3, 0, 1, 1)]


def test_same_row_gap_is_filled() -> None:
    placements = arrange_grid((10, 8), [("A", "2x3"), ("B", "1x3"), ("C", "1x2")])
    assert _coords(placements) == [(0, 0, 2, 3), (0, 3, 1, 3), (0, 6, 1, 2)]


def test_too_wide_card_is_skipped_without_error() -> None:
    placements = arrange_grid((10, 8), [("A", "2x2"), ("Wide", "1x9"), ("B", "2x2")])
    assert [p.card_type for p in placements] == ["A", "B"]
    assert _coords(placements) == [(0, 0, 2, 2), (0, 2, 2, 2)]


def test_overflow_leaves_floor_unchanged() -> None:
    grid = new_grid(4, 4)
    placement, floor = place_card(grid, "A", "2x4", 0)
    assert placement == Placement(0, 0, 4, 2, "A")
    assert floor == 0
    placement, floor = place_card(grid, "B", "2x4", floor)
    assert placement is not None and placement.start_row == 2
    assert floor == 2
    placement, floor = place_card(grid, "C", "1x1", floor)
    assert placement is None
    assert floor == 2


def test_too_tall_card_is_skipped() -> None:
    assert arrange_grid((3, 8), [("A", "4x2")]) == []


def test_empty_inputs() -> None:
    assert arrange_grid((50, 8), []) == []
    assert arrange_grid((0, 0), [("A", "1x1")]) == []


@pytest.mark.parametrize("shape", ["", "4", "4x", "x4", "axb", "0x2", "2x0", "4*4"])
def test_malformed_shape_fails_fast(shape: str) -> None:
    with pytest.raises(ShapeError):
        arrange_grid((10, 8), [("A", shape)])


def test_parse_shape_is_height_then_width() -> None:
    assert parse_shape("4x2") == (4, 2)
    assert parse_shape(" 1x8 ") == (1, 8)


def test_render_ascii_marks_each_card() -> None:
    placements = arrange_grid((5, 4), [("A", "1x4"), ("B", "2x2"), ("C", "1x1")])
    assert render_ascii(placements, 5, 4) == [
        "1111",
        "223.",
        "22..",
    ]


def _random_inputs(seed: int) -> tuple[tuple[int, int], list[tuple[str, str]]]:
    rng = random.Random(seed)
    grid = (rng.randint(1, 30), rng.randint(1, 12))
    cards = [(f"c{i}", rng.choice(SHAPES)) for i in range(rng.randint(0, 40))]
    return grid, cards


@pytest.mark.parametrize("seed", range(40))
def test_packing_properties(seed: int) -> None:
    (rows, cols), cards = _random_inputs(seed)
    placements = arrange_grid((rows, cols), cards)

    for p in placements:
        assert 0 <= p.start_row and p.start_row + p.height <= rows
        assert 0 <= p.start_col and p.start_col + p.width <= cols

    for a, b in combinations(placements, 2):
        assert not set(a.cells()) & set(b.cells())

    order = [int(p.card_type[1:]) for p in placements]
    assert order == sorted(order)

    for earlier, later in zip(placements, placements[1:]):
        assert later.start_row >= earlier.start_row

    for card_type, shape in cards:
        if parse_shape(shape)[1] > cols:
            assert card_type not in {p.card_type for p in placements}

    assert arrange_grid((rows, cols), cards) == placements
