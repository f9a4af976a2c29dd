"""Grid layout data model.

DTOs shared by the grid builder, the planner, the executor and the web layer.
"""

from dataclasses import asdict, dataclass, field
from typing import Literal

PaneKind = Literal["terminal", "browser"]
Direction = Literal["left", "right", "above", "below"]

# rows[row][col] = pane index; rows may differ in length
GridSpec = list[list[int]]

HORIZONTAL_DIRECTIONS: tuple[str, ...] = ("left", "right")


@dataclass(frozen=True)
class PaneSpec:
    """One content slot of a scenario grid.

    Attributes:
        index: Position of the pane in the scenario's pane list
        kind: "terminal" or "browser"
        title: Panel title
        content_ref: Command (terminal) or URL (browser); empty when absent
        test_id: Optional stable test id for the rendered slot
    """

    index: int
    kind: PaneKind
    title: str
    content_ref: str = ""
    test_id: str | None = None

    @property
    def cmd(self) -> str | None:
        """Terminal command, if this is a terminal pane with one."""
        if self.kind == "terminal" and self.content_ref:
            return self.content_ref
        return None

    @property
    def url(self) -> str | None:
        """Page URL, if this is a browser pane with one."""
        if self.kind == "browser" and self.content_ref:
            return self.content_ref
        return None


@dataclass
class BoundingBox:
    """Cell range occupied by one pane index (inclusive on both ends)."""

    min_row: int
    max_row: int
    min_col: int
    max_col: int

    @property
    def span_rows(self) -> int:
        return self.max_row - self.min_row + 1

    @property
    def span_cols(self) -> int:
        return self.max_col - self.min_col + 1

    @property
    def area(self) -> int:
        return self.span_rows * self.span_cols

    def expand(self, row: int, col: int) -> None:
        """Grow the box to cover (row, col)."""
        self.min_row = min(self.min_row, row)
        self.max_row = max(self.max_row, row)
        self.min_col = min(self.min_col, col)
        self.max_col = max(self.max_col, col)


@dataclass(frozen=True)
class SizeHint:
    """Requested panel size in pixels; only one axis is ever set."""

    width: int | None = None
    height: int | None = None

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class PlacementOp:
    """One docking instruction of a placement plan.

    The root op has neither reference nor direction nor size hint.
    """

    pane_index: int
    reference: int | None = None
    direction: Direction | None = None
    size_hint: SizeHint | None = None

    @property
    def is_root(self) -> bool:
        return self.reference is None

    def to_dict(self) -> dict:
        data: dict = {"pane_index": self.pane_index}
        if self.reference is not None:
            data["reference"] = self.reference
            data["direction"] = self.direction
        if self.size_hint is not None:
            data["size_hint"] = self.size_hint.to_dict()
        return data


@dataclass(frozen=True)
class Viewport:
    """Pixel size of the surface the grid is laid out on."""

    width: int
    height: int


@dataclass
class GridModel:
    """Output of the grid builder.

    Attributes:
        boxes: Bounding box per pane index that is eligible for placement
        rows: Number of grid rows
        cols: Number of grid columns (longest row)
        skipped: Indices found in the grid but outside the pane list
        irregular: Indices whose cells do not fill their bounding box
    """

    boxes: dict[int, BoundingBox] = field(default_factory=dict)
    rows: int = 0
    cols: int = 0
    skipped: list[int] = field(default_factory=list)
    irregular: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.boxes


@dataclass
class ScenarioGridConfig:
    """One atomic grid config as delivered by the owning session.

    Attributes:
        panes: Panes in index order
        grid: Explicit grid; None means "use layout" (or the default row)
        viewport: Surface size in pixels
        terminal_base_url: Base URL of the terminal multiplexing service
        layout: Optional preset name used when grid is None
    """

    panes: list[PaneSpec]
    viewport: Viewport
    terminal_base_url: str = ""
    grid: GridSpec | None = None
    layout: str | None = None
