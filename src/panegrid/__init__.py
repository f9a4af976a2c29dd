"""panegrid: multi-pane grid layout engine for scenario recordings."""

from panegrid.errors import ConfigError, GridShapeError, PanegridError, WorkspaceError
from panegrid.executor import PlanExecutor
from panegrid.layout import GridModelBuilder, PlacementPlanner, plan_placements
from panegrid.models import (
    BoundingBox,
    GridModel,
    PaneSpec,
    PlacementOp,
    ScenarioGridConfig,
    SizeHint,
    Viewport,
)
from panegrid.scenario import BuildResult, GridPlan, ScenarioGrid, plan_config
from panegrid.workspace import DockWorkspace

__version__ = "0.1.0"

__all__ = [
    "PaneSpec",
    "BoundingBox",
    "SizeHint",
    "PlacementOp",
    "Viewport",
    "GridModel",
    "ScenarioGridConfig",
    "GridModelBuilder",
    "PlacementPlanner",
    "plan_placements",
    "PlanExecutor",
    "DockWorkspace",
    "ScenarioGrid",
    "GridPlan",
    "BuildResult",
    "plan_config",
    "PanegridError",
    "ConfigError",
    "GridShapeError",
    "WorkspaceError",
]
