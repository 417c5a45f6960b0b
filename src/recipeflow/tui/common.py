"""Layout plumbing shared by the browse and recipe screens.

The app resolves one layout mode and density per resize; screens and the
timer tray read them back from the app and restyle themselves here.
"""

from __future__ import annotations

from textual.dom import DOMNode

from .layout import resolve_layout_mode, show_cuisine_pane, timer_bar_width, timer_tray_width
from .theme import TUI_THEME_NAME, TUI_THEMES

FALLBACK_ICON = "🍳"
LAYOUT_MODES = ("compact", "normal", "wide")
DENSITIES = ("cozy", "compact")


def header_icon(node: DOMNode) -> str:
    cfg = getattr(node.app, "cfg", None)
    icon = str(cfg.tui.header_icon).strip() if cfg is not None else ""
    return icon or FALLBACK_ICON


def install_theme(app) -> None:
    app.register_theme(TUI_THEMES[TUI_THEME_NAME])
    app.theme = TUI_THEME_NAME


def layout_mode(node: DOMNode) -> str:
    return str(getattr(node.app, "tui_layout_mode", "normal"))


def refresh_layout(app) -> str:
    """Resolve the layout mode for the current terminal size and restyle every screen."""
    app.tui_layout_mode = resolve_layout_mode(app.size.width, app.size.height, app.cfg.tui.layout)
    for screen in app.screen_stack:
        style_screen(screen)
    return app.tui_layout_mode


def style_screen(screen: DOMNode) -> None:
    mode = layout_mode(screen)
    density = str(getattr(screen.app, "tui_density", "cozy"))
    for name in LAYOUT_MODES:
        screen.set_class(name == mode, f"layout-{name}")
    for name in DENSITIES:
        screen.set_class(name == density, f"density-{name}")
    for pane in screen.query("#cuisine-pane"):
        set_hidden(pane, not show_cuisine_pane(mode))


def size_timer_tray(tray: DOMNode) -> int:
    """Fit the tray to the layout mode and return the progress bar width."""
    width = timer_tray_width(tray.app.size.width or 80, layout_mode(tray))
    tray.styles.width = width
    return timer_bar_width(width)


def set_hidden(widget: DOMNode, hidden: bool) -> None:
    widget.set_class(hidden, "is-hidden")
