"""Pane content binding and page rendering."""

from .content import (
    BrowserPaneRenderer,
    ContentRegistry,
    PaneContent,
    TerminalPaneRenderer,
    build_terminal_ws_url,
    default_registry,
    derive_test_id,
    normalize_browser_url,
)
from .page import build_page_context, render_workspace_html

__all__ = [
    "PaneContent",
    "ContentRegistry",
    "TerminalPaneRenderer",
    "BrowserPaneRenderer",
    "default_registry",
    "build_terminal_ws_url",
    "derive_test_id",
    "normalize_browser_url",
    "build_page_context",
    "render_workspace_html",
]
