"""Pane content binding.

Turns a PaneSpec into the content a panel shows: a terminal connection, an
embedded page, or a placeholder when the source is missing.
"""

import logging
import re
from dataclasses import asdict, dataclass
from urllib.parse import quote, urlsplit

from panegrid import config
from panegrid.models import PaneSpec
from panegrid.telemetry import metrics

logger = logging.getLogger(__name__)

# characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"
_UNSAFE_NAME_RE = re.compile(r"[^a-zA-Z0-9_-]")
_DASH_RUN_RE = re.compile(r"-+")
_KNOWN_SCHEMES = {"http", "https", "file", "about", "data"}
_RELATIVE_PREFIXES = ("/", ".", "?", "#")


@dataclass(frozen=True)
class PaneContent:
    """Content bound to one panel.

    Attributes:
        kind: "terminal", "browser" or "placeholder"
        pane_index: Index of the pane in the scenario
        test_id: Test id of the rendered slot
        title: Panel title
        src: WebSocket URL (terminal) or page URL (browser)
        message: Placeholder text when the source is missing
    """

    kind: str
    pane_index: int
    test_id: str
    title: str
    src: str | None = None
    message: str | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.kind == "placeholder"

    def to_dict(self) -> dict:
        return asdict(self)


def safe_terminal_name(cmd: str) -> str:
    """Reduce a command to a short id-safe name ("htop -d 5" -> "htop-d-5")."""
    name = _DASH_RUN_RE.sub("-", _UNSAFE_NAME_RE.sub("-", cmd))
    return name[: config.TERMINAL_SAFE_NAME_MAX_LEN]


def derive_test_id(pane: PaneSpec) -> str:
    """Test id for a pane's slot.

    An explicit test id wins, terminal commands derive "xterm-term-<name>",
    anything else falls back to "pane-<index>".
    """
    if pane.test_id:
        return pane.test_id
    if pane.cmd:
        return f"{config.TERMINAL_TEST_ID_PREFIX}{safe_terminal_name(pane.cmd)}"
    return f"pane-{pane.index}"


def build_terminal_ws_url(base_url: str, pane: PaneSpec) -> str | None:
    """Connection URL of a terminal pane on the multiplexing service.

    Returns None when there is no base URL to connect to.
    """
    base_url = base_url.rstrip("/")
    if not base_url:
        return None
    terminal_id = f"cmd:{pane.cmd}" if pane.cmd else (pane.test_id or "shell")
    return f"{base_url}/{quote(terminal_id, safe=_URI_COMPONENT_SAFE)}"


def normalize_browser_url(url: str | None) -> str | None:
    """Trim a page URL and add https:// when it starts with a bare host.

    URLs with a known scheme and relative URLs ("/app", "./page", "?q=1")
    pass through. Returns None for a blank URL.
    """
    raw = (url or "").strip()
    if not raw:
        return None
    if raw.startswith(_RELATIVE_PREFIXES) or urlsplit(raw).scheme.lower() in _KNOWN_SCHEMES:
        return raw
    return f"https://{raw}"


def placeholder(pane: PaneSpec, message: str) -> PaneContent:
    """Placeholder content shown in a slot whose source is missing."""
    metrics.inc("render.placeholder", labels={"kind": pane.kind})
    logger.warning(f"[PaneContent] Pane {pane.index} ({pane.title}): {message}")
    return PaneContent(
        kind="placeholder",
        pane_index=pane.index,
        test_id=derive_test_id(pane),
        title=pane.title,
        message=message,
    )


class TerminalPaneRenderer:
    """Binds terminal panes to the terminal multiplexing service."""

    kind = "terminal"

    def render(self, pane: PaneSpec, terminal_base_url: str) -> PaneContent:
        ws_url = build_terminal_ws_url(terminal_base_url, pane)
        if not ws_url:
            return placeholder(pane, "Terminal WebSocket URL is missing")
        return PaneContent(
            kind=self.kind,
            pane_index=pane.index,
            test_id=derive_test_id(pane),
            title=pane.title,
            src=ws_url,
        )


class BrowserPaneRenderer:
    """Binds browser panes to an embedded page."""

    kind = "browser"

    def render(self, pane: PaneSpec, terminal_base_url: str) -> PaneContent:
        url = normalize_browser_url(pane.url)
        if not url:
            return placeholder(pane, "Browser URL is missing")
        return PaneContent(
            kind=self.kind,
            pane_index=pane.index,
            test_id=derive_test_id(pane),
            title=pane.title,
            src=url,
        )


class ContentRegistry:
    """Pane renderers keyed by pane kind."""

    def __init__(self):
        self._renderers: dict[str, TerminalPaneRenderer | BrowserPaneRenderer] = {}

    def register(self, renderer) -> None:
        """Register (or replace) the renderer for ``renderer.kind``."""
        self._renderers[renderer.kind] = renderer

    @property
    def kinds(self) -> list[str]:
        return list(self._renderers)

    def render(self, pane: PaneSpec, terminal_base_url: str = "") -> PaneContent:
        renderer = self._renderers.get(pane.kind)
        if renderer is None:
            return placeholder(pane, f"No renderer for pane kind {pane.kind!r}")
        return renderer.render(pane, terminal_base_url)


def default_registry() -> ContentRegistry:
    """Registry with the terminal and browser renderers."""
    registry = ContentRegistry()
    registry.register(TerminalPaneRenderer())
    registry.register(BrowserPaneRenderer())
    return registry
