"""Pytest 配置"""

import pytest

from panegrid.models import PaneSpec, ScenarioGridConfig, Viewport
from panegrid.telemetry import metrics


@pytest.fixture
def anyio_backend():
    """指定 anyio 只使用 asyncio backend"""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_metrics():
    """每个测试前清空全局指标"""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def viewport() -> Viewport:
    return Viewport(width=1280, height=720)


@pytest.fixture
def three_panes() -> list[PaneSpec]:
    return [
        PaneSpec(index=0, kind="browser", title="App", content_ref="http://localhost:3000"),
        PaneSpec(index=1, kind="terminal", title="Server", content_ref="npm run dev"),
        PaneSpec(index=2, kind="terminal", title="Shell"),
    ]


@pytest.fixture
def three_pane_config(three_panes, viewport) -> ScenarioGridConfig:
    return ScenarioGridConfig(
        panes=three_panes,
        viewport=viewport,
        terminal_base_url="ws://localhost:9800",
        grid=[[0, 1], [0, 2]],
    )
