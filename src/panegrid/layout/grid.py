"""Grid model builder.

Scans a GridSpec and collects one bounding box per pane index.
"""

import logging

from panegrid import config
from panegrid.errors import GridShapeError
from panegrid.models import BoundingBox, GridModel, GridSpec, ScenarioGridConfig
from panegrid.telemetry import metrics

from .presets import resolve_layout

logger = logging.getLogger(__name__)


def effective_grid(grid_config: ScenarioGridConfig) -> GridSpec:
    """Grid to lay out for a scenario config.

    An explicit grid wins over a layout name; with neither, every pane is
    placed side by side.
    """
    if grid_config.grid is not None:
        return grid_config.grid
    pane_count = len(grid_config.panes)
    return resolve_layout(grid_config.layout or config.DEFAULT_LAYOUT, pane_count)


class GridModelBuilder:
    """Builds a GridModel from a grid specification.

    Indices outside 0..pane_count-1 are recorded in ``skipped`` and left out
    of ``boxes``. Regions that do not fill their bounding box are recorded
    in ``irregular``; in strict mode they raise GridShapeError instead.
    """

    def __init__(self, strict: bool | None = None):
        self._strict = config.STRICT_GRID_SHAPES if strict is None else strict

    def build(self, grid: GridSpec, pane_count: int) -> GridModel:
        if pane_count <= 0 or not grid:
            return GridModel()

        rows = len(grid)
        cols = max(len(row) for row in grid)
        if cols <= 0:
            return GridModel()

        boxes: dict[int, BoundingBox] = {}
        cell_counts: dict[int, int] = {}
        skipped: set[int] = set()

        for r, row in enumerate(grid):
            for c, idx in enumerate(row):
                if idx < 0 or idx >= pane_count:
                    skipped.add(idx)
                    continue
                box = boxes.get(idx)
                if box is None:
                    boxes[idx] = BoundingBox(min_row=r, max_row=r, min_col=c, max_col=c)
                else:
                    box.expand(r, c)
                cell_counts[idx] = cell_counts.get(idx, 0) + 1

        irregular = sorted(idx for idx, box in boxes.items() if cell_counts[idx] != box.area)
        if irregular:
            metrics.inc("grid.irregular", value=len(irregular))
            if self._strict:
                raise GridShapeError(irregular)
            logger.warning(f"[GridBuilder] Non-rectangular regions for panes {irregular}")

        if skipped:
            metrics.inc("plan.skipped", value=len(skipped))
            logger.debug(f"[GridBuilder] Ignoring indices without a pane: {sorted(skipped)}")

        return GridModel(
            boxes=boxes,
            rows=rows,
            cols=cols,
            skipped=sorted(skipped),
            irregular=irregular,
        )


def build_grid_model(grid: GridSpec, pane_count: int, strict: bool | None = None) -> GridModel:
    """Convenience wrapper around GridModelBuilder.build()."""
    return GridModelBuilder(strict=strict).build(grid, pane_count)


def validate_grid(grid: GridSpec, pane_count: int) -> GridModel:
    """Build a model and reject non-rectangular regions.

    Raises:
        GridShapeError: If any pane region is not an axis-aligned rectangle
    """
    return GridModelBuilder(strict=True).build(grid, pane_count)

