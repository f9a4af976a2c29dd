"""Named grid presets.

Each preset is a GridSpec; pane indices are assigned in reading order.
"""

from panegrid.errors import ConfigError
from panegrid.models import GridSpec

LAYOUT_PRESETS: dict[str, GridSpec] = {
    "1x1": [[0]],
    "side-by-side": [[0, 1]],
    "top-bottom": [[0], [1]],
    "1-left-2-right": [[0, 1], [0, 2]],
    "3-cols": [[0, 1, 2]],
    "2x2": [[0, 1], [2, 3]],
}

# pane count -> preset used by the "auto" layout
_AUTO_PRESETS = {
    1: "1x1",
    2: "side-by-side",
    3: "1-left-2-right",
    4: "2x2",
}


def row_grid(pane_count: int) -> GridSpec:
    """All panes side by side in a single row."""
    return [list(range(pane_count))] if pane_count > 0 else []


def get_preset(name: str) -> GridSpec:
    """Return a copy of the named preset grid.

    Raises:
        ConfigError: If the preset name is unknown
    """
    try:
        grid = LAYOUT_PRESETS[name]
    except KeyError:
        known = ", ".join(LAYOUT_PRESETS)
        raise ConfigError(f"Unknown layout preset: {name!r} (known: {known})") from None
    return [list(row) for row in grid]


def resolve_layout(layout: str, pane_count: int) -> GridSpec:
    """Turn a layout name into a grid for pane_count panes.

    "row" is the default single-row layout, "auto" picks a preset by pane
    count and falls back to "row" when no preset fits.
    """
    if layout == "row":
        return row_grid(pane_count)
    if layout == "auto":
        preset = _AUTO_PRESETS.get(pane_count)
        return get_preset(preset) if preset else row_grid(pane_count)
    return get_preset(layout)
