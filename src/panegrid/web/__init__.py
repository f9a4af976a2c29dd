"""Web 服务模块"""

from panegrid.web.app import create_app
from panegrid.web.server import WebServer

__all__ = ["create_app", "WebServer"]
