"""Docking workspace contract and the in-memory split implementation."""

from .base import PanelGroup, PanelHandle, PanelPosition, Workspace
from .dock import DockPanel, DockWorkspace, Rect

__all__ = [
    "Workspace",
    "PanelHandle",
    "PanelGroup",
    "PanelPosition",
    "DockWorkspace",
    "DockPanel",
    "Rect",
]
