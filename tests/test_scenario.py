"""Tests for ScenarioGrid."""

from unittest.mock import AsyncMock

import pytest

from panegrid.errors import ConfigError, GridShapeError
from panegrid.models import PaneSpec, ScenarioGridConfig, Viewport
from panegrid.scenario import ScenarioGrid, plan_config
from panegrid.workspace import DockWorkspace


@pytest.fixture
def grid(viewport) -> ScenarioGrid:
    return ScenarioGrid(DockWorkspace(viewport))


class TestPlanConfig:
    def test_plan(self, three_pane_config):
        plan = plan_config(three_pane_config)

        assert plan.grid == [[0, 1], [0, 2]]
        assert [op.pane_index for op in plan.ops] == [0, 1, 2]
        data = plan.to_dict()
        assert data["rows"] == 2
        assert data["cols"] == 2
        assert data["ops"][2] == {
            "pane_index": 2,
            "reference": 1,
            "direction": "below",
            "size_hint": {"height": 360},
        }

    def test_default_row(self, three_panes, viewport):
        plan = plan_config(ScenarioGridConfig(panes=three_panes, viewport=viewport))

        assert plan.grid == [[0, 1, 2]]
        assert [op.direction for op in plan.ops] == [None, "right", "right"]

    def test_strict(self, three_panes, viewport):
        config = ScenarioGridConfig(panes=three_panes, viewport=viewport, grid=[[0, 1, 0], [2, 2, 2]])
        with pytest.raises(GridShapeError):
            plan_config(config, strict=True)

    def test_unknown_layout(self, three_panes, viewport):
        config = ScenarioGridConfig(panes=three_panes, viewport=viewport, layout="nope")
        with pytest.raises(ConfigError):
            plan_config(config)


class TestScenarioGrid:
    def test_build(self, grid, three_pane_config):
        result = grid.build(three_pane_config)

        assert grid.current is result
        assert [p.id for p in result.panels] == ["panel-0", "panel-1", "panel-2"]

    def test_build_takes_config_viewport(self, grid, three_panes):
        config = ScenarioGridConfig(panes=three_panes[:1], viewport=Viewport(800, 600), grid=[[0]])
        grid.build(config)

        assert grid.workspace.geometry()["panel-0"].width == 800

    def test_layout_switch(self, grid, three_pane_config):
        grid.build(three_pane_config)
        three_pane_config.grid = None
        three_pane_config.layout = "top-bottom"
        grid.build(three_pane_config)

        # preset only references panes 0 and 1
        assert [p.id for p in grid.workspace.panels] == ["panel-0", "panel-1"]

    def test_layout_dict(self, grid, three_pane_config):
        grid.build(three_pane_config)
        data = grid.get_layout_dict()

        assert data["type"] == "layout"
        assert data["plan"]["grid"] == [[0, 1], [0, 2]]
        assert data["panels"][0]["content"]["kind"] == "browser"
        assert data["panels"][1]["locked"] == "no-drop-target"
        assert data["panels"][2]["rect"] == {"x": 640, "y": 360, "width": 640, "height": 360}

    def test_layout_dict_before_build(self, grid):
        data = grid.get_layout_dict()

        assert data["plan"] is None
        assert data["panels"] == []

    @pytest.mark.asyncio
    async def test_apply_notifies(self, grid, three_pane_config):
        callback = AsyncMock()
        grid.on_update(callback)

        result = await grid.apply(three_pane_config)

        callback.assert_awaited_once_with(result)

    @pytest.mark.asyncio
    async def test_callback_error_does_not_fail_apply(self, grid, three_pane_config):
        failing = AsyncMock(side_effect=RuntimeError("boom"))
        ok = AsyncMock()
        grid.on_update(failing)
        grid.on_update(ok)

        await grid.apply(three_pane_config)

        ok.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_build_keeps_previous_result(self, grid, three_pane_config, three_panes):
        first = await grid.apply(three_pane_config)
        bad = ScenarioGridConfig(panes=three_panes, viewport=Viewport(1280, 720), layout="nope")

        with pytest.raises(ConfigError):
            await grid.apply(bad)
        assert grid.current is first
