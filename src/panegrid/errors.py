"""Error types raised by panegrid."""


class PanegridError(Exception):
    """Base class for all panegrid errors."""


class ConfigError(PanegridError):
    """A scenario grid config could not be parsed or resolved."""


class GridShapeError(PanegridError):
    """One or more pane regions in a grid are not axis-aligned rectangles.

    Attributes:
        indices: Pane indices whose cells do not fill their bounding box.
    """

    def __init__(self, indices: list[int]):
        self.indices = sorted(indices)
        joined = ", ".join(str(i) for i in self.indices)
        super().__init__(f"Grid regions are not rectangular for pane(s): {joined}")


class WorkspaceError(PanegridError):
    """The workspace manager refused a panel operation."""
