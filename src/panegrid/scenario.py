"""ScenarioGrid: owns a workspace and rebuilds it on every grid config."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from panegrid.executor import PlanExecutor
from panegrid.layout import GridModelBuilder, PlacementPlanner, effective_grid
from panegrid.models import GridModel, GridSpec, PlacementOp, ScenarioGridConfig
from panegrid.render.content import ContentRegistry
from panegrid.workspace import DockWorkspace, PanelHandle

logger = logging.getLogger(__name__)


@dataclass
class GridPlan:
    """Pure planning result for one config (no workspace involved)."""

    grid: GridSpec
    model: GridModel
    ops: list[PlacementOp] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "grid": self.grid,
            "rows": self.model.rows,
            "cols": self.model.cols,
            "skipped": self.model.skipped,
            "irregular": self.model.irregular,
            "ops": [op.to_dict() for op in self.ops],
        }


def plan_config(grid_config: ScenarioGridConfig, strict: bool | None = None) -> GridPlan:
    """Grid model + placement plan for a scenario config.

    Raises:
        ConfigError: Unknown layout preset
        GridShapeError: Non-rectangular region in strict mode
    """
    grid = effective_grid(grid_config)
    model = GridModelBuilder(strict=strict).build(grid, len(grid_config.panes))
    ops = PlacementPlanner(grid_config.viewport).plan(model)
    return GridPlan(grid=grid, model=model, ops=ops)


@dataclass
class BuildResult:
    """State of the workspace after a build."""

    config: ScenarioGridConfig
    plan: GridPlan
    panels: list[PanelHandle] = field(default_factory=list)


# 更新回调类型
UpdateCallback = Callable[[BuildResult], Awaitable[None]]


class ScenarioGrid:
    """Host component for one docking workspace.

    ``build`` is synchronous: plan, clear, replay. ``apply`` wraps it with a
    lock so config updates are serialized, then notifies listeners.
    """

    def __init__(
        self,
        workspace: DockWorkspace,
        registry: ContentRegistry | None = None,
        strict: bool | None = None,
    ):
        self.workspace = workspace
        self._executor = PlanExecutor(workspace, registry)
        self._strict = strict
        self._lock = asyncio.Lock()
        self._callbacks: list[UpdateCallback] = []
        self.current: BuildResult | None = None

    def on_update(self, callback: UpdateCallback) -> None:
        """注册更新回调"""
        self._callbacks.append(callback)

    def build(self, grid_config: ScenarioGridConfig) -> BuildResult:
        """Rebuild the workspace for a new config.

        The viewport of the config replaces the workspace viewport.
        """
        plan = plan_config(grid_config, strict=self._strict)
        self.workspace.viewport = grid_config.viewport
        try:
            panels = self._executor.execute(plan.ops, grid_config.panes, grid_config.terminal_base_url)
        except Exception as e:
            logger.error(f"[ScenarioGrid] Build failed: {e}")
            raise
        self.current = BuildResult(config=grid_config, plan=plan, panels=panels)
        return self.current

    async def apply(self, grid_config: ScenarioGridConfig) -> BuildResult:
        """Serialized build followed by listener notification."""
        async with self._lock:
            result = self.build(grid_config)
        await self._notify_callbacks(result)
        return result

    async def _notify_callbacks(self, result: BuildResult) -> None:
        for callback in self._callbacks:
            try:
                await callback(result)
            except Exception as e:
                logger.error(f"[ScenarioGrid] Callback error: {e}")

    def get_layout_dict(self) -> dict:
        """Current plan, panels and geometry as a JSON-ready dict."""
        if self.current is None:
            return {"type": "layout", "plan": None, **self.workspace.to_dict()}

        layout = self.workspace.to_dict()
        for entry in layout["panels"]:
            panel = self.workspace.get_panel(entry["id"])
            if panel is not None:
                entry["content"] = panel.content.to_dict()
        return {"type": "layout", "plan": self.current.plan.to_dict(), **layout}
