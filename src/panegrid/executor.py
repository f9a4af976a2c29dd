"""Plan executor: replays a placement plan against a docking workspace."""

import logging

from panegrid import config
from panegrid.errors import ConfigError
from panegrid.models import PaneSpec, PlacementOp
from panegrid.render.content import ContentRegistry, default_registry
from panegrid.telemetry import metrics
from panegrid.workspace import PanelHandle, PanelPosition, Workspace

logger = logging.getLogger(__name__)


def panel_id(pane_index: int) -> str:
    """Workspace panel id of a pane."""
    return f"{config.PANEL_ID_PREFIX}{pane_index}"


class PlanExecutor:
    """Applies placement plans to one workspace.

    Every build starts from an empty workspace, so nothing from a previous
    grid survives. WorkspaceError from the workspace propagates unchanged.
    """

    def __init__(self, workspace: Workspace, registry: ContentRegistry | None = None):
        self.workspace = workspace
        self.registry = registry or default_registry()

    def clear(self) -> None:
        """Close every panel in the workspace."""
        for panel in list(self.workspace.panels):
            panel.close()

    def execute(
        self,
        plan: list[PlacementOp],
        panes: list[PaneSpec],
        terminal_base_url: str = "",
    ) -> list[PanelHandle]:
        """Clear the workspace, then create, size and lock one panel per op.

        Returns:
            Created panels in plan order

        Raises:
            ConfigError: An op names a pane index missing from panes; the
                workspace is left untouched
        """
        panes_by_index = {pane.index: pane for pane in panes}
        missing = sorted({op.pane_index for op in plan} - panes_by_index.keys())
        if missing:
            raise ConfigError(f"No pane for plan index(es): {missing}")

        self.clear()
        created: list[PanelHandle] = []

        for op in plan:
            pane = panes_by_index[op.pane_index]
            content = self.registry.render(pane, terminal_base_url)
            position = None
            if op.reference is not None and op.direction is not None:
                position = PanelPosition(reference_id=panel_id(op.reference), direction=op.direction)

            panel = self.workspace.add_panel(panel_id(op.pane_index), content, position)
            if op.size_hint is not None:
                panel.set_size(width=op.size_hint.width, height=op.size_hint.height)
            created.append(panel)

        self.lock_groups()
        metrics.inc("executor.builds")
        metrics.gauge("executor.panels", len(created))
        logger.info(f"[Executor] Built {len(created)} panel(s)")
        return created

    def lock_groups(self) -> None:
        """Stop every group from acting as a drag-and-drop target."""
        for group in self.workspace.groups:
            if not group.locked:
                group.locked = config.GROUP_LOCK_MODE
