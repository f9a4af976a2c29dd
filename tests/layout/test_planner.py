"""Tests for the adjacency placement planner."""

import pytest

from panegrid.layout.grid import build_grid_model
from panegrid.layout.planner import (
    PlacementPlanner,
    adjacency_candidates,
    plan_placements,
    round_half_up,
)
from panegrid.models import BoundingBox, PlacementOp, SizeHint, Viewport
from panegrid.telemetry import metrics

VIEWPORT = Viewport(width=1280, height=720)


def _box(min_row, max_row, min_col, max_col) -> BoundingBox:
    return BoundingBox(min_row=min_row, max_row=max_row, min_col=min_col, max_col=max_col)


class TestScenarios:
    """Concrete grids and their expected plans."""

    def test_two_side_by_side(self):
        ops = plan_placements([[0, 1]], 2, VIEWPORT)

        assert ops == [
            PlacementOp(pane_index=0),
            PlacementOp(pane_index=1, reference=0, direction="right", size_hint=SizeHint(width=640)),
        ]

    def test_left_spanning_pane(self):
        """Pane 0 spans both rows, pane 2 goes below pane 1."""
        ops = plan_placements([[0, 1], [0, 2]], 3, VIEWPORT)

        assert ops[0] == PlacementOp(pane_index=0)
        assert ops[1].pane_index == 1
        assert ops[1].reference == 0
        assert ops[1].direction == "right"
        assert ops[1].size_hint == SizeHint(width=640)
        assert ops[1].size_hint.height is None
        assert ops[2] == PlacementOp(
            pane_index=2, reference=1, direction="below", size_hint=SizeHint(height=360)
        )

    def test_out_of_range_index_excluded(self):
        ops = plan_placements([[0, 1], [2, 5]], 3, VIEWPORT)

        assert len(ops) == 3
        assert 5 not in [op.pane_index for op in ops]

    def test_single_cell(self):
        ops = plan_placements([[0]], 1, VIEWPORT)

        assert ops == [PlacementOp(pane_index=0)]
        assert ops[0].size_hint is None

    def test_empty_grid(self):
        assert plan_placements([], 2, VIEWPORT) == []
        assert plan_placements([[0, 1]], 0, VIEWPORT) == []

    def test_two_by_two(self):
        """Quad layout: right, below, then right of the bottom-left pane."""
        ops = plan_placements([[0, 1], [2, 3]], 4, VIEWPORT)

        assert [(op.pane_index, op.reference, op.direction) for op in ops] == [
            (0, None, None),
            (1, 0, "right"),
            (2, 0, "below"),
            (3, 1, "below"),
        ]
        assert ops[2].size_hint == SizeHint(height=360)

    def test_top_spanning_pane(self):
        """A full-width header: both bottom panes attach below or beside."""
        ops = plan_placements([[0, 0], [1, 2]], 3, Viewport(width=1000, height=600))

        assert ops[1] == PlacementOp(
            pane_index=1, reference=0, direction="below", size_hint=SizeHint(height=300)
        )
        assert ops[2] == PlacementOp(
            pane_index=2, reference=1, direction="right", size_hint=SizeHint(width=500)
        )

    def test_reading_order_independent_of_index(self):
        """Higher indices in the top-left corner are placed first."""
        ops = plan_placements([[2, 0, 1]], 3, VIEWPORT)

        assert [op.pane_index for op in ops] == [2, 0, 1]
        assert ops[1].reference == 2
        assert ops[2].reference == 0

    def test_spanning_pane_with_higher_index(self):
        """Placement follows cell position, not pane index."""
        ops = plan_placements([[1, 0], [1, 2]], 3, VIEWPORT)

        # reading order places 1 (row 0, col 0) first
        assert ops[0].pane_index == 1
        assert ops[1] == PlacementOp(
            pane_index=0, reference=1, direction="right", size_hint=SizeHint(width=640)
        )
        assert ops[2].direction == "below"
        assert ops[2].reference == 0

    def test_left_direction(self):
        """A wide bottom pane fits best to the left of the tall right pane."""
        ops = plan_placements([[0, 3, 1], [2, 2, 1]], 4, VIEWPORT)

        # 1280 / 3 = 426.67 -> 427 per column
        assert [(op.pane_index, op.reference, op.direction) for op in ops] == [
            (0, None, None),
            (3, 0, "right"),
            (1, 3, "right"),
            (2, 1, "left"),
        ]
        assert ops[3].size_hint == SizeHint(width=854)

    def test_wide_span_size(self):
        """Size hints scale with the span of the placed pane."""
        ops = plan_placements([[0, 1, 1]], 2, Viewport(width=900, height=300))

        assert ops[1].size_hint == SizeHint(width=600)

    def test_rounded_cell_size(self):
        """Cell sizes round half up."""
        ops = plan_placements([[0, 1, 2, 3]], 4, Viewport(width=1002, height=500))

        # 1002 / 4 = 250.5 -> 251
        assert ops[1].size_hint == SizeHint(width=251)


class TestFallback:
    """Panes that touch nothing already placed."""

    def test_disconnected_pane_attaches_right_of_root(self):
        # pane 1 sits diagonally from pane 0 with a hole in between
        ops = plan_placements([[0, 5], [5, 1]], 2, VIEWPORT)

        assert ops[1] == PlacementOp(
            pane_index=1, reference=0, direction="right", size_hint=SizeHint(width=640)
        )
        assert metrics.get_counter("plan.fallback") == 1

    def test_fallback_never_raises(self):
        ops = plan_placements([[0, 9, 1], [9, 2, 9], [3, 9, 4]], 5, VIEWPORT)

        assert len(ops) == 5
        assert all(op.reference == 0 for op in ops[1:])


class TestAdjacencyCandidates:
    """Tests for adjacency_candidates()."""

    def test_right(self):
        assert adjacency_candidates(_box(0, 0, 1, 1), _box(0, 0, 0, 0)) == [("right", 1.0)]

    def test_below(self):
        assert adjacency_candidates(_box(1, 1, 0, 0), _box(0, 0, 0, 0)) == [("below", 1.0)]

    def test_left(self):
        assert adjacency_candidates(_box(0, 0, 0, 0), _box(0, 0, 1, 1)) == [("left", 1.0)]

    def test_above(self):
        assert adjacency_candidates(_box(0, 0, 0, 0), _box(1, 1, 0, 0)) == [("above", 1.0)]

    def test_not_adjacent(self):
        assert adjacency_candidates(_box(0, 0, 2, 2), _box(0, 0, 0, 0)) == []
        assert adjacency_candidates(_box(1, 1, 1, 1), _box(0, 0, 0, 0)) == []

    def test_partial_edge_and_size_mismatch(self):
        """Half-covered edge of a two-row pane next to a one-row pane."""
        candidates = adjacency_candidates(_box(0, 1, 1, 1), _box(1, 1, 0, 0))

        assert candidates == [("right", pytest.approx(0.25))]


class TestDeterminism:
    @pytest.mark.parametrize(
        "grid, pane_count",
        [
            ([[0, 1], [0, 2]], 3),
            ([[0, 0, 1], [2, 3, 1], [2, 4, 4]], 5),
            ([[3, 1], [0, 2]], 4),
        ],
    )
    def test_repeated_planning_is_identical(self, grid, pane_count):
        first = plan_placements(grid, pane_count, VIEWPORT)
        for _ in range(5):
            assert plan_placements(grid, pane_count, VIEWPORT) == first

    @pytest.mark.parametrize(
        "grid",
        [
            [[0, 1, 2]],
            [[0], [1], [2]],
            [[0, 1], [2, 3]],
            [[0, 0, 1], [2, 3, 1], [2, 4, 4]],
            [[0, 1, 1], [0, 2, 3]],
        ],
    )
    def test_every_pane_placed_once_with_earlier_reference(self, grid):
        pane_count = len({idx for row in grid for idx in row})
        ops = plan_placements(grid, pane_count, VIEWPORT)

        assert sorted(op.pane_index for op in ops) == list(range(pane_count))
        assert ops[0].is_root and ops[0].size_hint is None
        placed = {ops[0].pane_index}
        for op in ops[1:]:
            assert op.reference in placed
            assert op.direction is not None
            assert op.size_hint is not None
            placed.add(op.pane_index)


class TestPlacementPlanner:
    def test_order(self):
        model = build_grid_model([[1, 0], [2, 2]], 3)
        assert PlacementPlanner(VIEWPORT).order(model) == [1, 0, 2]

    def test_ops_metric(self):
        PlacementPlanner(VIEWPORT).plan(build_grid_model([[0, 1, 2]], 3))
        assert metrics.get_counter("plan.ops") == 3


def test_round_half_up():
    assert round_half_up(250.5) == 251
    assert round_half_up(640.0) == 640
    assert round_half_up(359.4) == 359
