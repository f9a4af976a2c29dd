"""Web 服务器"""

import logging

from fastapi import FastAPI, HTTPException, Query, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from panegrid import config
from panegrid.errors import ConfigError, GridShapeError, WorkspaceError
from panegrid.layout import LAYOUT_PRESETS
from panegrid.models import Viewport
from panegrid.render.page import TEMPLATES_DIR, GRID_TEMPLATE, build_page_context
from panegrid.scenario import BuildResult, ScenarioGrid, plan_config
from panegrid.schemas import ScenarioGridRequest, parse_config
from panegrid.workspace import DockWorkspace

logger = logging.getLogger(__name__)


class WebServer:
    """HTTP + WebSocket 服务器

    持有一个 ScenarioGrid，每次收到新 grid config 时重建并广播布局。
    """

    def __init__(self, grid: ScenarioGrid):
        self.app = FastAPI(title="panegrid")
        self.grid = grid
        self.clients: list[WebSocket] = []
        self.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

        self._setup_routes()
        grid.on_update(self._on_layout_update)

    async def _on_layout_update(self, result: BuildResult):
        """布局更新回调"""
        await self.broadcast(self.grid.get_layout_dict())

    def _setup_routes(self):
        @self.app.get("/", response_class=HTMLResponse)
        async def index(request: Request):
            context = build_page_context(self.grid.workspace)
            return self.templates.TemplateResponse(request, GRID_TEMPLATE, context)

        @self.app.get("/grid", response_class=HTMLResponse)
        async def grid_page(
            request: Request,
            config_json: str | None = Query(default=None, alias="config"),
        ):
            """渲染临时 grid config（不影响当前 workspace）"""
            if not config_json:
                raise HTTPException(status_code=400, detail="Missing config parameter")
            try:
                grid_config = parse_config(config_json)
                scratch = ScenarioGrid(DockWorkspace(grid_config.viewport))
                scratch.build(grid_config)
            except (ConfigError, GridShapeError) as e:
                raise HTTPException(status_code=400, detail=str(e))
            context = build_page_context(scratch.workspace)
            return self.templates.TemplateResponse(request, GRID_TEMPLATE, context)

        @self.app.get("/api/grid")
        async def get_grid():
            return self.grid.get_layout_dict()

        @self.app.post("/api/grid")
        async def apply_grid(body: ScenarioGridRequest):
            try:
                await self.grid.apply(body.to_config())
            except (ConfigError, GridShapeError) as e:
                raise HTTPException(status_code=422, detail=str(e))
            except WorkspaceError as e:
                raise HTTPException(status_code=500, detail=str(e))
            return self.grid.get_layout_dict()

        @self.app.post("/api/plan")
        async def plan_grid(body: ScenarioGridRequest):
            try:
                plan = plan_config(body.to_config())
            except (ConfigError, GridShapeError) as e:
                raise HTTPException(status_code=422, detail=str(e))
            return plan.to_dict()

        @self.app.get("/api/presets")
        async def presets():
            return {"presets": LAYOUT_PRESETS}

        @self.app.websocket("/ws")
        async def websocket_endpoint(websocket: WebSocket):
            await websocket.accept()
            self.clients.append(websocket)
            try:
                await websocket.send_json(self.grid.get_layout_dict())
                while True:
                    await websocket.receive_text()
            except WebSocketDisconnect:
                # broadcast may already have dropped it
                if websocket in self.clients:
                    self.clients.remove(websocket)

    async def broadcast(self, data: dict):
        """广播消息给所有客户端"""
        for client in list(self.clients):
            try:
                await client.send_json(data)
            except Exception as e:
                logger.debug(f"[WebServer] Dropping client after send error: {e}")
                self.clients.remove(client)


def default_grid() -> ScenarioGrid:
    """空 workspace 的 ScenarioGrid（默认视口）"""
    viewport = Viewport(config.DEFAULT_VIEWPORT_WIDTH, config.DEFAULT_VIEWPORT_HEIGHT)
    return ScenarioGrid(DockWorkspace(viewport))
