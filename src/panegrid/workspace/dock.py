"""In-memory split docking workspace.

Panels live in the leaves of a split tree. Consecutive splits along the same
axis form one branch with any number of children: docking next to a panel
inside a branch of the matching orientation inserts a sibling, otherwise the
reference leaf is replaced by a new branch holding both. Closing a panel
drops its leaf and collapses a branch left with a single child.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any

from panegrid.errors import WorkspaceError
from panegrid.models import HORIZONTAL_DIRECTIONS, Viewport

from .base import PanelGroup, PanelHandle, PanelPosition, Workspace

logger = logging.getLogger(__name__)

MIN_PANEL_SIZE = 20  # px; set_size never shrinks a sibling below this


@dataclass(frozen=True)
class Rect:
    """Absolute pixel rectangle inside the workspace viewport."""

    x: int
    y: int
    width: int
    height: int

    def to_dict(self) -> dict:
        return asdict(self)


class _Leaf:
    def __init__(self, panel: "DockPanel"):
        self.panel = panel
        self.parent: "_Branch | None" = None


class _Branch:
    """Children side by side ("horizontal") or stacked ("vertical").

    ``shares`` holds each child's fraction of the branch extent. A branch
    never has a direct child branch of its own orientation.
    """

    def __init__(self, orientation: str, children: list["_Node"]):
        self.orientation = orientation
        self.parent: "_Branch | None" = None
        self.children: list[_Node] = list(children)
        for child in self.children:
            child.parent = self
        self.shares: list[float] = []
        self.distribute()

    def distribute(self) -> None:
        """Give every child the same share."""
        self.shares = [1 / len(self.children)] * len(self.children)

    def insert(self, index: int, node: "_Node") -> None:
        node.parent = self
        self.children.insert(index, node)
        self.distribute()

    def resize_child(self, index: int, size: int, extent: int) -> None:
        """Set one child to ``size`` px; later siblings absorb the difference first."""
        sizes = [share * extent for share in self.shares]
        upper = extent - MIN_PANEL_SIZE * (len(sizes) - 1)
        sizes[index] = max(MIN_PANEL_SIZE, min(upper, size))
        delta = extent - sum(sizes)
        for i in reversed(range(len(sizes))):
            if i == index or not delta:
                continue
            resized = max(MIN_PANEL_SIZE, sizes[i] + delta)
            delta -= resized - sizes[i]
            sizes[i] = resized
        self.shares = [s / extent for s in sizes]


_Node = _Leaf | _Branch


class DockPanel(PanelHandle):
    """Panel handle returned by DockWorkspace.add_panel()."""

    def __init__(self, workspace: "DockWorkspace", panel_id: str, content: Any, group: PanelGroup):
        self._workspace = workspace
        self._id = panel_id
        self._content = content
        self.group = group
        self.closed = False

    @property
    def id(self) -> str:
        return self._id

    @property
    def content(self) -> Any:
        return self._content

    @property
    def rect(self) -> Rect | None:
        """Current geometry, or None once closed."""
        return self._workspace.geometry().get(self._id)

    def set_size(self, width: int | None = None, height: int | None = None) -> None:
        self._workspace._resize(self, width=width, height=height)

    def close(self) -> None:
        self._workspace._remove(self)

    def __repr__(self) -> str:
        return f"DockPanel(id={self._id!r}, group={self.group.group_id!r})"


class DockWorkspace(Workspace):
    """Split-tree workspace laid out over a fixed viewport.

    Each panel gets its own group. A panel added without a position becomes
    the root when the workspace is empty, otherwise it is docked at the
    right edge of the whole layout. Docking into an existing branch shares
    the branch extent equally between its children.
    """

    def __init__(self, viewport: Viewport):
        self.viewport = viewport
        self._root: _Node | None = None
        self._panels: dict[str, DockPanel] = {}
        self._leaves: dict[str, _Leaf] = {}
        self._groups: dict[str, PanelGroup] = {}
        self._group_counter = 0

    @property
    def panels(self) -> list[PanelHandle]:
        return list(self._panels.values())

    @property
    def groups(self) -> list[PanelGroup]:
        return list(self._groups.values())

    def add_panel(
        self,
        panel_id: str,
        content: Any,
        position: PanelPosition | None = None,
    ) -> DockPanel:
        if panel_id in self._panels:
            raise WorkspaceError(f"Panel already exists: {panel_id}")

        reference: _Leaf | None = None
        if position is not None:
            reference = self._leaves.get(position.reference_id)
            if reference is None:
                raise WorkspaceError(f"Reference panel not found: {position.reference_id}")

        self._group_counter += 1
        group = PanelGroup(group_id=f"group-{self._group_counter}", panel_ids=[panel_id])
        panel = DockPanel(self, panel_id, content, group)
        leaf = _Leaf(panel)

        if self._root is None:
            self._root = leaf
        elif reference is None:
            self._dock(self._root, leaf, "right")
        else:
            assert position is not None
            self._dock(reference, leaf, position.direction)

        self._panels[panel_id] = panel
        self._leaves[panel_id] = leaf
        self._groups[group.group_id] = group
        logger.debug(f"[DockWorkspace] Added {panel_id} ({position.direction if position else 'root'})")
        return panel

    def _dock(self, target: _Node, leaf: _Leaf, direction: str) -> None:
        orientation = "horizontal" if direction in HORIZONTAL_DIRECTIONS else "vertical"
        after = direction in ("right", "below")
        parent = target.parent

        if isinstance(target, _Branch) and target.orientation == orientation:
            target.insert(len(target.children) if after else 0, leaf)
        elif parent is not None and parent.orientation == orientation:
            index = parent.children.index(target)
            parent.insert(index + 1 if after else index, leaf)
        else:
            branch = _Branch(orientation, [target, leaf] if after else [leaf, target])
            self._replace(parent, target, branch)

    def _replace(self, parent: _Branch | None, old: _Node, new: _Node) -> None:
        new.parent = parent
        if parent is None:
            self._root = new
        else:
            parent.children[parent.children.index(old)] = new

    def _remove(self, panel: DockPanel) -> None:
        if panel.closed:
            return
        leaf = self._leaves.pop(panel.id)
        branch = leaf.parent
        if branch is None:
            self._root = None
        else:
            index = branch.children.index(leaf)
            del branch.children[index]
            del branch.shares[index]
            total = sum(branch.shares)
            branch.shares = [share / total for share in branch.shares]
            if len(branch.children) == 1:
                self._collapse(branch)

        del self._panels[panel.id]
        self._groups.pop(panel.group.group_id, None)
        panel.closed = True
        logger.debug(f"[DockWorkspace] Closed {panel.id}")

    def _collapse(self, branch: _Branch) -> None:
        """Replace a single-child branch by its child."""
        child = branch.children[0]
        parent = branch.parent
        if isinstance(child, _Branch) and parent is not None:
            # child runs along the parent's axis: splice its children in
            index = parent.children.index(branch)
            share = parent.shares[index]
            for grandchild in child.children:
                grandchild.parent = parent
            parent.children[index : index + 1] = child.children
            parent.shares[index : index + 1] = [share * s for s in child.shares]
        else:
            self._replace(parent, branch, child)

    def _resize(self, panel: DockPanel, width: int | None, height: int | None) -> None:
        if panel.closed:
            raise WorkspaceError(f"Panel is closed: {panel.id}")
        leaf = self._leaves[panel.id]
        for size, orientation in ((width, "horizontal"), (height, "vertical")):
            if size is None:
                continue
            node: _Node = leaf
            branch = node.parent
            while branch is not None and branch.orientation != orientation:
                node, branch = branch, branch.parent
            if branch is None:
                # panel already spans the full axis
                continue

            rect = self._node_rects()[id(branch)]
            extent = rect.width if orientation == "horizontal" else rect.height
            if extent <= MIN_PANEL_SIZE * len(branch.children):
                continue
            branch.resize_child(branch.children.index(node), size, extent)

    def _node_rects(self) -> dict[int, Rect]:
        """Rect per tree node, keyed by id(node)."""
        rects: dict[int, Rect] = {}
        if self._root is None:
            return rects

        stack: list[tuple[_Node, Rect]] = [
            (self._root, Rect(0, 0, self.viewport.width, self.viewport.height))
        ]
        while stack:
            node, rect = stack.pop()
            rects[id(node)] = rect
            if isinstance(node, _Leaf):
                continue
            horizontal = node.orientation == "horizontal"
            extent = rect.width if horizontal else rect.height
            offset = 0.0
            start = 0
            for i, (child, share) in enumerate(zip(node.children, node.shares)):
                offset += share * extent
                # last child takes the rounding remainder
                end = extent if i == len(node.children) - 1 else int(offset + 0.5)
                if horizontal:
                    child_rect = Rect(rect.x + start, rect.y, end - start, rect.height)
                else:
                    child_rect = Rect(rect.x, rect.y + start, rect.width, end - start)
                stack.append((child, child_rect))
                start = end
        return rects

    def geometry(self) -> dict[str, Rect]:
        """Absolute rectangle of every open panel."""
        rects = self._node_rects()
        return {panel_id: rects[id(leaf)] for panel_id, leaf in self._leaves.items()}

    def to_dict(self) -> dict:
        """转换为可序列化的字典"""
        geometry = self.geometry()
        return {
            "viewport": {"width": self.viewport.width, "height": self.viewport.height},
            "panels": [
                {
                    "id": panel.id,
                    "group": panel.group.group_id,
                    "locked": panel.group.locked,
                    "rect": geometry[panel.id].to_dict(),
                }
                for panel in self._panels.values()
            ],
        }
