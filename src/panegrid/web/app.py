"""FastAPI 应用初始化"""

import logging

import uvicorn

from panegrid import config
from panegrid.scenario import ScenarioGrid
from panegrid.telemetry import setup_logging
from panegrid.web.server import WebServer, default_grid

logger = logging.getLogger(__name__)


def create_app(grid: ScenarioGrid | None = None) -> WebServer:
    """创建 Web 应用"""
    return WebServer(grid or default_grid())


def main(host: str | None = None, port: int | None = None):
    """入口函数"""
    setup_logging()
    server = create_app()
    host = host or config.HOST
    port = port or config.PORT
    logger.info(f"[WebServer] panegrid starting at http://{host}:{port}")
    try:
        uvicorn.run(server.app, host=host, port=port, log_level=config.LOG_LEVEL.lower())
    except KeyboardInterrupt:
        print("\nServer stopped")
