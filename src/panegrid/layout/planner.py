"""Adjacency placement planner.

Converts a GridModel into an ordered list of docking operations for a
binary-split workspace. Every pane after the first is docked next to the
already-placed pane it shares the best-fitting edge with.
"""

import logging
import math

from panegrid.models import (
    HORIZONTAL_DIRECTIONS,
    BoundingBox,
    Direction,
    GridModel,
    GridSpec,
    PlacementOp,
    SizeHint,
    Viewport,
)
from panegrid.telemetry import metrics

from .grid import GridModelBuilder

logger = logging.getLogger(__name__)

FALLBACK_DIRECTION: Direction = "right"


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def _ranges_overlap(a_min: int, a_max: int, b_min: int, b_max: int) -> bool:
    return a_min <= b_max and a_max >= b_min


def _overlap_len(a_min: int, a_max: int, b_min: int, b_max: int) -> int:
    return min(a_max, b_max) - max(a_min, b_min) + 1


def _score(overlap: int, own_span: int, ref_span: int) -> float:
    # edge coverage of the new pane times size similarity along that edge
    coverage = overlap / own_span
    similarity = min(own_span, ref_span) / max(own_span, ref_span)
    return coverage * similarity


def adjacency_candidates(box: BoundingBox, ref: BoundingBox) -> list[tuple[Direction, float]]:
    """Directions in which ``box`` touches ``ref``, with their scores.

    Candidates are returned in the order right, below, left, above.
    """
    candidates: list[tuple[Direction, float]] = []
    rows_touch = _ranges_overlap(box.min_row, box.max_row, ref.min_row, ref.max_row)
    cols_touch = _ranges_overlap(box.min_col, box.max_col, ref.min_col, ref.max_col)

    if rows_touch:
        row_overlap = _overlap_len(box.min_row, box.max_row, ref.min_row, ref.max_row)
        row_score = _score(row_overlap, box.span_rows, ref.span_rows)
    if cols_touch:
        col_overlap = _overlap_len(box.min_col, box.max_col, ref.min_col, ref.max_col)
        col_score = _score(col_overlap, box.span_cols, ref.span_cols)

    if rows_touch and box.min_col == ref.max_col + 1:
        candidates.append(("right", row_score))
    if cols_touch and box.min_row == ref.max_row + 1:
        candidates.append(("below", col_score))
    if rows_touch and box.max_col == ref.min_col - 1:
        candidates.append(("left", row_score))
    if cols_touch and box.max_row == ref.min_row - 1:
        candidates.append(("above", col_score))
    return candidates


class PlacementPlanner:
    """Orders panes and picks a reference, direction and size for each.

    Panes are placed in reading order (top row first, then left column
    first). The first pane is the root; each following pane is docked to
    the placed pane with the highest adjacency score. Ties keep the first
    candidate found. A pane that touches nothing placed so far is docked
    to the right of the root.
    """

    def __init__(self, viewport: Viewport):
        self.viewport = viewport

    def order(self, model: GridModel) -> list[int]:
        """Pane indices in reading order."""
        return sorted(
            model.boxes,
            key=lambda idx: (model.boxes[idx].min_row, model.boxes[idx].min_col, idx),
        )

    def plan(self, model: GridModel) -> list[PlacementOp]:
        if model.is_empty:
            return []

        cell_w = round_half_up(self.viewport.width / model.cols)
        cell_h = round_half_up(self.viewport.height / model.rows)

        ops: list[PlacementOp] = []
        placed: list[int] = []

        for idx in self.order(model):
            box = model.boxes[idx]
            if not placed:
                ops.append(PlacementOp(pane_index=idx))
                placed.append(idx)
                continue

            best_ref: int | None = None
            best_dir: Direction | None = None
            best_score = -1.0
            for placed_idx in placed:
                for direction, score in adjacency_candidates(box, model.boxes[placed_idx]):
                    if score > best_score:
                        best_score = score
                        best_ref = placed_idx
                        best_dir = direction

            if best_ref is None or best_dir is None:
                best_ref, best_dir = placed[0], FALLBACK_DIRECTION
                metrics.inc("plan.fallback")
                logger.warning(
                    f"[Planner] Pane {idx} touches no placed pane, docking {best_dir} of {best_ref}"
                )

            ops.append(
                PlacementOp(
                    pane_index=idx,
                    reference=best_ref,
                    direction=best_dir,
                    size_hint=self._size_hint(box, best_dir, cell_w, cell_h),
                )
            )
            placed.append(idx)

        metrics.inc("plan.ops", value=len(ops))
        return ops

    def _size_hint(self, box: BoundingBox, direction: Direction, cell_w: int, cell_h: int) -> SizeHint:
        if direction in HORIZONTAL_DIRECTIONS:
            return SizeHint(width=box.span_cols * cell_w)
        return SizeHint(height=box.span_rows * cell_h)


def plan_placements(
    grid: GridSpec,
    pane_count: int,
    viewport: Viewport,
    strict: bool | None = None,
) -> list[PlacementOp]:
    """Build the grid model and plan it in one call."""
    model = GridModelBuilder(strict=strict).build(grid, pane_count)
    return PlacementPlanner(viewport).plan(model)
