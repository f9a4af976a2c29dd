"""
CLI entry point (Typer).

Subcommands:
  - plan: print the placement plan of a scenario grid config
  - render: write the HTML page of a built grid
  - presets: list the named layout presets
  - serve: start the web service
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from panegrid.errors import PanegridError
from panegrid.layout import LAYOUT_PRESETS
from panegrid.render.page import render_workspace_html
from panegrid.scenario import ScenarioGrid, plan_config
from panegrid.schemas import parse_config
from panegrid.telemetry import setup_logging
from panegrid.workspace import DockWorkspace

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="panegrid - lay out terminal and browser panes from a grid spec",
    no_args_is_help=True,
)
console = Console()


def _load_config(path: Path):
    try:
        return parse_config(path.read_text(encoding="utf-8"))
    except OSError as e:
        console.print(f"[red]Cannot read {path}: {e}[/red]")
        raise typer.Exit(code=1)
    except PanegridError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def plan(
    config_path: Path = typer.Argument(..., help="Scenario grid config (JSON)"),
    strict: bool = typer.Option(False, "--strict", help="Reject non-rectangular pane regions"),
) -> None:
    """Print the placement plan for a scenario grid config."""
    setup_logging()
    grid_config = _load_config(config_path)
    try:
        result = plan_config(grid_config, strict=strict or None)
    except PanegridError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"{result.model.rows}x{result.model.cols} grid, {len(result.ops)} op(s)")
    table.add_column("pane", justify="right")
    table.add_column("title")
    table.add_column("reference", justify="right")
    table.add_column("direction")
    table.add_column("size")
    for op in result.ops:
        pane = grid_config.panes[op.pane_index]
        size = ""
        if op.size_hint is not None:
            size = ", ".join(f"{k}={v}" for k, v in op.size_hint.to_dict().items())
        table.add_row(
            str(op.pane_index),
            pane.title,
            "-" if op.reference is None else str(op.reference),
            op.direction or "root",
            size,
        )
    console.print(table)

    if result.model.skipped:
        console.print(f"[yellow]Ignored grid indices: {result.model.skipped}[/yellow]")
    if result.model.irregular:
        console.print(f"[yellow]Non-rectangular regions: {result.model.irregular}[/yellow]")


@app.command()
def render(
    config_path: Path = typer.Argument(..., help="Scenario grid config (JSON)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output HTML file"),
) -> None:
    """Build the grid and write its HTML page."""
    setup_logging()
    grid_config = _load_config(config_path)
    grid = ScenarioGrid(DockWorkspace(grid_config.viewport))
    try:
        grid.build(grid_config)
    except PanegridError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    html = render_workspace_html(grid.workspace, title=config_path.stem)
    if output is None:
        typer.echo(html)
        return
    output.write_text(html, encoding="utf-8")
    console.print(f"Wrote {output}")


@app.command()
def presets() -> None:
    """List the named layout presets."""
    table = Table(title="Layout presets")
    table.add_column("name")
    table.add_column("grid")
    for name, grid in LAYOUT_PRESETS.items():
        table.add_row(name, str(grid))
    console.print(table)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Listen address"),
    port: Optional[int] = typer.Option(None, help="Listen port"),
) -> None:
    """Start the web service."""
    from panegrid.web.app import main

    main(host=host, port=port)


if __name__ == "__main__":
    app()
