"""Grid layout engine: grid model builder, placement planner and presets."""

from .grid import GridModelBuilder, build_grid_model, effective_grid, validate_grid
from .planner import PlacementPlanner, adjacency_candidates, plan_placements
from .presets import LAYOUT_PRESETS, get_preset, resolve_layout, row_grid

__all__ = [
    "GridModelBuilder",
    "build_grid_model",
    "effective_grid",
    "validate_grid",
    "PlacementPlanner",
    "adjacency_candidates",
    "plan_placements",
    "LAYOUT_PRESETS",
    "get_preset",
    "resolve_layout",
    "row_grid",
]
