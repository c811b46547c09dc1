"""
Demo host app for the command palette.

A fake page router plus the palette on Ctrl+K. Single-letter shortcuts
work only while the palette is closed, as a real host would do it.
"""

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.events import Key
from textual.widgets import Footer, Static

from cmdpal.config.palette_config import cycle_theme_mode, get_theme_mode
from cmdpal.services.kv_store import KeyValueStore

from .command_palette.palette_screen import CommandPaletteScreen
from .demo_data import build_presenter

logger = logging.getLogger(__name__)

SHORTCUT_ROUTES = {
    "n": "/sessions?new=true",
    "s": "/squads",
    "m": "/messages",
    "p": "/party",
    "h": "/home",
}

HELP_TEXT = """[b]Keyboard shortcuts[/b]
Ctrl+K  command palette
h  home      s  squads     m  messages
p  party     n  new session
t  cycle theme     ?  this help
Esc  close"""


class PaletteDemoApp(App):
    """Minimal host that routes between fake pages."""

    CSS = """
    #page {
        height: 1fr;
        content-align: center middle;
    }

    #help {
        display: none;
        border: solid $primary;
        padding: 1 2;
        width: 50;
    }
    """

    BINDINGS = [
        Binding("ctrl+k", "toggle_palette", "Palette"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, store: KeyValueStore | None = None, **kwargs):
        super().__init__(**kwargs)
        self.route = "/home"
        self.presenter = build_presenter(
            navigate=self.navigate,
            store=store,
            toggle_theme=self.action_cycle_theme,
        )
        self.presenter.on_state_update = self._on_palette_update
        self._page = Static("", id="page")
        self._help = Static(HELP_TEXT, id="help")

    def compose(self) -> ComposeResult:
        with Vertical():
            yield self._page
            yield self._help
        yield Footer()

    def on_mount(self) -> None:
        self._apply_theme(get_theme_mode())
        self._render_page()

    def on_unmount(self) -> None:
        self.presenter.teardown()

    def navigate(self, route: str) -> None:
        logger.info(f"Navigate to {route}")
        self.route = route
        self._render_page()

    def _render_page(self) -> None:
        self._page.update(
            f"[b]{self.route}[/b]\n\n[dim]Ctrl+K to open the palette, ? for shortcuts[/dim]"
        )

    def _on_palette_update(self, view) -> None:
        self._help.display = view.help_open

    def _apply_theme(self, mode: str) -> None:
        if mode == "light":
            self.theme = "textual-light"
        else:
            self.theme = "textual-dark"

    def action_cycle_theme(self) -> None:
        self._apply_theme(cycle_theme_mode())

    def run_static_command(self, command_id: str) -> None:
        """Run a palette command from a shortcut so both paths share one action."""
        for command in self.presenter.corpus.static_commands():
            if command.id == command_id and command.execute is not None:
                command.execute()
                return
        logger.warning(f"Shortcut command not found: {command_id}")

    def action_toggle_palette(self) -> None:
        if self.presenter.is_open:
            self.presenter.close()
            return
        self.push_screen(CommandPaletteScreen(self.presenter))

    def on_key(self, event: Key) -> None:
        if event.key == "escape" and self.presenter.help_open:
            self.presenter.press_escape()
            event.stop()
            return

        if not self.presenter.shortcuts_enabled(focus_in_text_input=False):
            return

        key = event.character or ""
        if key in SHORTCUT_ROUTES:
            self.navigate(SHORTCUT_ROUTES[key])
        elif key == "t":
            self.run_static_command("toggle-theme")
        elif key == "?":
            self.presenter.open_help()
        else:
            return
        event.stop()
