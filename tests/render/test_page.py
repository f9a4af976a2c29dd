"""Tests for the workspace HTML page."""

from panegrid.models import PaneSpec, ScenarioGridConfig, Viewport
from panegrid.render.page import build_page_context, render_workspace_html
from panegrid.scenario import ScenarioGrid
from panegrid.workspace import DockWorkspace


def _built_workspace() -> DockWorkspace:
    panes = [
        PaneSpec(index=0, kind="browser", title="App", content_ref="http://localhost:3000"),
        PaneSpec(index=1, kind="terminal", title="Server", content_ref="npm start"),
        PaneSpec(index=2, kind="browser", title="Docs"),
    ]
    grid_config = ScenarioGridConfig(
        panes=panes,
        viewport=Viewport(1280, 720),
        terminal_base_url="ws://localhost:9800",
        grid=[[0, 1], [0, 2]],
    )
    grid = ScenarioGrid(DockWorkspace(grid_config.viewport))
    grid.build(grid_config)
    return grid.workspace


class TestPage:
    def test_context(self):
        context = build_page_context(_built_workspace(), title="demo")

        assert context["title"] == "demo"
        assert (context["width"], context["height"]) == (1280, 720)
        assert [slot["id"] for slot in context["slots"]] == ["panel-0", "panel-1", "panel-2"]
        assert context["slots"][1]["kind"] == "terminal"
        assert context["slots"][2]["kind"] == "placeholder"

    def test_html(self):
        html = render_workspace_html(_built_workspace())

        assert '<iframe name="pane-0" src="http://localhost:3000"' in html
        assert 'data-ws-url="ws://localhost:9800/cmd%3Anpm%20start"' in html
        assert "Browser URL is missing" in html
        assert "left: 640px; top: 360px; width: 640px; height: 360px;" in html

    def test_empty_workspace(self):
        html = render_workspace_html(DockWorkspace(Viewport(800, 600)))

        assert "width: 800px; height: 600px;" in html
        assert 'class="slot"' not in html
