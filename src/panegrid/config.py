"""panegrid 配置

配置分为以下几类：
- 视口配置：默认录制视口尺寸
- 内容配置：终端服务地址、test id 派生
- 布局配置：panel id、group 锁定、网格校验
- 服务配置：HTTP 监听地址
- 日志/指标配置
"""

import os

# === 视口配置 ===
DEFAULT_VIEWPORT_WIDTH = 1280  # 默认视口宽度（像素）
DEFAULT_VIEWPORT_HEIGHT = 720  # 默认视口高度（像素）

# === 内容配置 ===
TERMINAL_BASE_URL = os.environ.get("PANEGRID_TERMINAL_URL", "ws://localhost:9800")
TERMINAL_TEST_ID_PREFIX = "xterm-term-"
TERMINAL_SAFE_NAME_MAX_LEN = 30  # 命令派生 test id 的最大长度

# === 布局配置 ===
PANEL_ID_PREFIX = "panel-"  # panel id = panel-<paneIndex>
GROUP_LOCK_MODE = "no-drop-target"  # 构建完成后 group 的锁定模式
STRICT_GRID_SHAPES = os.environ.get("PANEGRID_STRICT_GRID", "") in ("1", "true", "yes")
DEFAULT_LAYOUT = "row"  # 未提供 grid/layout 时的默认布局

# === 服务配置 ===
HOST = os.environ.get("PANEGRID_HOST", "127.0.0.1")
PORT = int(os.environ.get("PANEGRID_PORT", "8766"))

# === 日志配置 ===
LOG_LEVEL = os.environ.get("PANEGRID_LOG_LEVEL", "INFO")  # 日志级别

# === 指标配置 ===
METRICS_ENABLED = True  # 是否启用指标收集
