"""Scenario grid config request bodies (pydantic).

Accepts the camelCase keys sessions send ("testId", "terminalBaseUrl") as
well as snake_case.
"""

import json
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from panegrid import config
from panegrid.errors import ConfigError
from panegrid.models import PaneSpec, ScenarioGridConfig, Viewport


class PaneRequest(BaseModel):
    """One pane of a scenario grid config"""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["terminal", "browser"]
    title: str = ""
    cmd: str | None = None
    url: str | None = None
    test_id: str | None = Field(default=None, alias="testId")

    def to_pane(self, index: int) -> PaneSpec:
        content_ref = (self.cmd if self.type == "terminal" else self.url) or ""
        title = self.title or content_ref or f"{self.type}-{index}"
        return PaneSpec(
            index=index,
            kind=self.type,
            title=title,
            content_ref=content_ref,
            test_id=self.test_id,
        )


class ViewportRequest(BaseModel):
    """Viewport size in pixels"""

    width: int = Field(default=config.DEFAULT_VIEWPORT_WIDTH, gt=0)
    height: int = Field(default=config.DEFAULT_VIEWPORT_HEIGHT, gt=0)


class ScenarioGridRequest(BaseModel):
    """Scenario grid config request body"""

    model_config = ConfigDict(populate_by_name=True)

    panes: list[PaneRequest]
    grid: list[list[int]] | None = None
    layout: str | None = None
    viewport: ViewportRequest = Field(default_factory=ViewportRequest)
    terminal_base_url: str = Field(default=config.TERMINAL_BASE_URL, alias="terminalBaseUrl")

    def to_config(self) -> ScenarioGridConfig:
        return ScenarioGridConfig(
            panes=[pane.to_pane(i) for i, pane in enumerate(self.panes)],
            viewport=Viewport(width=self.viewport.width, height=self.viewport.height),
            terminal_base_url=self.terminal_base_url,
            grid=self.grid,
            layout=self.layout,
        )


def parse_config(data: str | bytes | dict) -> ScenarioGridConfig:
    """Parse a JSON string or dict into a ScenarioGridConfig.

    Raises:
        ConfigError: Invalid JSON or a body that fails validation
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid config JSON: {e}") from e
    try:
        return ScenarioGridRequest.model_validate(data).to_config()
    except ValidationError as e:
        raise ConfigError(f"Invalid scenario grid config: {e}") from e
