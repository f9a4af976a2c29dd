"""Workspace 抽象接口

定义 docking workspace 的统一接口，plan executor 只通过此接口操作 panel：
- DockWorkspace（内存二叉分割实现）
- 未来: 浏览器端 dockview 桥接等

设计原则：
1. 最小接口：add_panel / set_size / close / groups
2. 内容无关：panel 绑定的内容对 workspace 不透明
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from panegrid.models import Direction


@dataclass(frozen=True)
class PanelPosition:
    """Where to dock a new panel relative to an existing one."""

    reference_id: str
    direction: Direction


@dataclass
class PanelGroup:
    """Panel group（拖放目标单元）

    Attributes:
        group_id: 唯一标识符
        panel_ids: 组内 panel
        locked: False 或锁定模式（如 "no-drop-target"）
    """

    group_id: str
    panel_ids: list[str] = field(default_factory=list)
    locked: bool | str = False


class PanelHandle(ABC):
    """已创建 panel 的句柄"""

    @property
    @abstractmethod
    def id(self) -> str:
        """Panel 标识符"""
        pass

    @property
    @abstractmethod
    def content(self) -> Any:
        """Panel 绑定的内容"""
        pass

    @abstractmethod
    def set_size(self, width: int | None = None, height: int | None = None) -> None:
        """请求 panel 尺寸（像素）"""
        pass

    @abstractmethod
    def close(self) -> None:
        """关闭 panel"""
        pass


class Workspace(ABC):
    """Docking workspace 抽象接口

    使用示例:
        workspace = DockWorkspace(Viewport(1280, 720))
        root = workspace.add_panel("panel-0", content)
        side = workspace.add_panel("panel-1", content, PanelPosition("panel-0", "right"))
        side.set_size(width=640)
    """

    @property
    @abstractmethod
    def panels(self) -> list[PanelHandle]:
        """当前所有 panel（按创建顺序）"""
        pass

    @property
    @abstractmethod
    def groups(self) -> list[PanelGroup]:
        """当前所有 group"""
        pass

    @abstractmethod
    def add_panel(
        self,
        panel_id: str,
        content: Any,
        position: PanelPosition | None = None,
    ) -> PanelHandle:
        """创建 panel

        Args:
            panel_id: 新 panel 的标识符
            content: 绑定的内容
            position: 相对位置，None 表示根位置

        Returns:
            新 panel 的句柄

        Raises:
            WorkspaceError: workspace 拒绝该操作
        """
        pass

    def get_panel(self, panel_id: str) -> PanelHandle | None:
        """按 id 查找 panel"""
        for panel in self.panels:
            if panel.id == panel_id:
                return panel
        return None
