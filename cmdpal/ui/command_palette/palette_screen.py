"""
Command Palette Screen - modal overlay.

Renders a PalettePresenter's view and forwards keys and input to it.
All behaviour lives in the presenter; this screen only draws.
"""

import asyncio
import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, ListItem, ListView, Static

from cmdpal.config.constants import PALETTE_TITLE

from .palette_commands import CommandNode
from .palette_presenter import PalettePresenter, PaletteView

logger = logging.getLogger(__name__)


class PaletteResultWidget(ListItem):
    """Widget for a single palette row."""

    DEFAULT_CSS = """
    PaletteResultWidget {
        height: 2;
        padding: 0 1;
    }
    """

    def __init__(self, node: CommandNode, category_label: str, **kwargs):
        super().__init__(**kwargs)
        self.node = node
        self.category_label = category_label

    def compose(self) -> ComposeResult:
        label = self.node.label
        description = self.node.description or ""

        # Truncate long labels
        if len(label) > 40:
            label = label[:37] + "..."

        if len(description) > 30:
            description = description[:27] + "..."

        marker = " ›" if self.node.children else ""
        yield Static(
            f"{label}{marker}  [dim]{description}[/dim]  [italic dim]{self.category_label}[/italic dim]"
        )


def format_preview(preview: object) -> str:
    """Render an opaque preview payload as a few lines of text."""
    if preview is None:
        return "[dim]No preview[/dim]"
    if isinstance(preview, dict):
        lines = [f"[b]{preview.get('type', 'command')}[/b]"]
        for key, value in preview.items():
            if key != "type" and value is not None:
                lines.append(f"{key}: {value}")
        return "\n".join(lines)
    return str(preview)


class CommandPaletteScreen(ModalScreen):
    """
    Command palette modal overlay.

    Opens the presenter on mount and dismisses itself as soon as the
    presenter reports it is closed.
    """

    CSS = """
    CommandPaletteScreen {
        align: center top;
        padding-top: 5;
    }

    #palette-container {
        width: 100;
        height: auto;
        max-height: 30;
        background: $surface;
        border: solid $primary;
    }

    #palette-breadcrumb {
        height: auto;
        color: $accent;
        padding: 0 1;
    }

    #palette-input {
        width: 100%;
        height: 3;
        border: none;
        border-bottom: solid $primary-darken-1;
        background: $surface-darken-1;
        padding: 0 1;
    }

    #palette-body {
        height: auto;
    }

    #palette-results {
        width: 2fr;
        height: auto;
        max-height: 20;
        min-height: 5;
        padding: 0;
    }

    #palette-preview {
        width: 1fr;
        padding: 0 1;
        border-left: solid $primary-darken-1;
    }

    #palette-hints {
        height: 1;
        background: $surface-darken-1;
        color: $text-muted;
        padding: 0 1;
    }

    ListItem.--highlight {
        background: $accent;
    }
    """

    # Priority so they win over the Input's own enter/backspace bindings
    BINDINGS = [
        Binding("escape", "palette_key('escape')", "Back", show=False, priority=True),
        Binding("enter", "palette_key('enter')", "Select", show=False, priority=True),
        Binding("up", "palette_key('up')", "Up", show=False, priority=True),
        Binding("down", "palette_key('down')", "Down", show=False, priority=True),
        Binding("ctrl+p", "palette_key('up')", "Up", show=False, priority=True),
        Binding("ctrl+n", "palette_key('down')", "Down", show=False, priority=True),
        Binding("backspace", "palette_backspace", "Back", show=False, priority=True),
    ]

    def __init__(self, presenter: PalettePresenter, **kwargs):
        super().__init__(**kwargs)
        self.presenter = presenter
        self._previous_listener = presenter.on_state_update
        self._render_id = 0
        self._rows: list[CommandNode] = []
        self._dismissed = False
        self._rendered_depth = 0

    def compose(self) -> ComposeResult:
        with Vertical(id="palette-container"):
            yield Static("", id="palette-breadcrumb")
            yield Input(
                placeholder="Search a command, squad, session...",
                id="palette-input",
            )
            with Horizontal(id="palette-body"):
                yield ListView(id="palette-results")
                yield Static("", id="palette-preview")
            yield Static(
                "↑↓ Navigate │ Enter Select │ Esc Back/Close │ Ctrl+K Toggle",
                id="palette-hints",
            )

    async def on_mount(self) -> None:
        """Hook into the presenter and draw the first frame."""
        self.presenter.on_state_update = self._on_state_update
        if not self.presenter.is_open:
            self.presenter.toggle_open()
        else:
            self._on_state_update(self.presenter.view())
        self.query_one("#palette-input", Input).focus()

    def on_unmount(self) -> None:
        self.presenter.on_state_update = self._previous_listener

    def _on_state_update(self, view: PaletteView) -> None:
        """Handle state updates from presenter."""
        if not view.is_open:
            if not self._dismissed:
                self._dismissed = True
                self.dismiss(None)
            return

        # Unique render id so a slow render can't overwrite a newer one
        self._render_id += 1
        current_render = self._render_id
        self.call_later(lambda: asyncio.create_task(self._render_view(view, current_render)))

    async def _render_view(self, view: PaletteView, render_id: int) -> None:
        """Render a view to the widgets."""
        if render_id != self._render_id:
            logger.debug(f"Skipping stale render {render_id}")
            return

        try:
            breadcrumb = self.query_one("#palette-breadcrumb", Static)
            if view.stack:
                breadcrumb.update(f"← {view.back_label}  │  {view.breadcrumb}")
                breadcrumb.display = True
            else:
                breadcrumb.update(PALETTE_TITLE)
                breadcrumb.display = False

            # Only drill-down and back reset the query behind the user's back
            if len(view.stack) != self._rendered_depth:
                self._rendered_depth = len(view.stack)
                self.query_one("#palette-input", Input).value = view.query

            results_view = self.query_one("#palette-results", ListView)
            await results_view.clear()
            self._rows = list(view.ranked)

            if not view.ranked:
                results_view.append(ListItem(Static("[dim]No results found[/dim]")))
            else:
                category_of = {
                    id(node): view.category_label(category)
                    for category, nodes in view.groups
                    for node in nodes
                }
                for node in view.ranked:
                    results_view.append(PaletteResultWidget(node, category_of.get(id(node), "")))
                results_view.index = view.selected_index

            self.query_one("#palette-preview", Static).update(format_preview(view.preview))
        except Exception as e:
            logger.error(f"Error rendering palette: {e}")

    async def on_input_changed(self, event: Input.Changed) -> None:
        """Forward query edits; remote search debouncing lives in the presenter."""
        if event.input.id != "palette-input":
            return
        if event.value == self.presenter.state.query:
            return
        self.presenter.type(event.value)

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        index = event.list_view.index
        if index is not None and index != self.presenter.state.selected_index:
            self.presenter.hover_select(index)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        index = event.list_view.index
        if index is not None and 0 <= index < len(self._rows):
            self.presenter.enter_node(self._rows[index])

    def action_palette_key(self, key: str) -> None:
        self.presenter.handle_key(key)

    def action_palette_backspace(self) -> None:
        """Back out of a group on an empty query, otherwise edit the text."""
        if not self.presenter.press_backspace():
            self.query_one("#palette-input", Input).action_delete_left()
