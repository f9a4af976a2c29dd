"""Workspace → HTML page renderer (Jinja2)."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from panegrid.workspace import DockWorkspace

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
GRID_TEMPLATE = "grid.html"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


def build_page_context(workspace: DockWorkspace, title: str = "panegrid") -> dict:
    """Template context for a built workspace.

    Each slot carries the panel geometry plus the bound PaneContent fields.
    """
    geometry = workspace.geometry()
    slots = []
    for panel in workspace.panels:
        rect = geometry[panel.id]
        content = panel.content
        slots.append(
            {
                "id": panel.id,
                "rect": rect,
                "kind": content.kind,
                "test_id": content.test_id,
                "title": content.title,
                "src": content.src,
                "message": content.message,
            }
        )
    return {
        "title": title,
        "width": workspace.viewport.width,
        "height": workspace.viewport.height,
        "slots": slots,
    }


def render_workspace_html(workspace: DockWorkspace, title: str = "panegrid") -> str:
    """Render the workspace as a standalone HTML page."""
    template = _env.get_template(GRID_TEMPLATE)
    return template.render(**build_page_context(workspace, title))
