"""
Presenter for the command palette.

Owns the navigation state machine: open/closed, the drill-down stack, the
query and the selected row. Every transition is a pure function of
(state, event) -> state; the presenter applies them, runs the side effects
(recency, actions, remote search) and notifies the view.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any

from cmdpal.config.constants import CATEGORY_LABELS, PALETTE_TITLE

from .palette_commands import CommandNode
from .palette_corpus import CorpusBuilder
from .palette_ranking import group_by_category, rank
from .palette_recent import RecencyLedger
from .palette_search import RemoteSearchCoordinator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationState:
    """Current state of the palette. Closed is the all-defaults value."""

    is_open: bool = False
    stack: tuple[CommandNode, ...] = ()
    query: str = ""
    selected_index: int = 0


CLOSED = NavigationState()


# =============================================================================
# Pure transitions
# =============================================================================


def toggle_open(state: NavigationState) -> NavigationState:
    if state.is_open:
        return CLOSED
    return NavigationState(is_open=True)


def close(state: NavigationState) -> NavigationState:
    return CLOSED


def type_query(state: NavigationState, text: str) -> NavigationState:
    if not state.is_open:
        return state
    return replace(state, query=text, selected_index=0)


def push(state: NavigationState, node: CommandNode) -> NavigationState:
    """Drill into a group. Drilling down always clears the search."""
    return replace(state, stack=state.stack + (node,), query="", selected_index=0)


def pop(state: NavigationState) -> tuple[NavigationState, bool]:
    """Leave the current group. The flag reports whether anything was popped."""
    if not state.stack:
        return state, False
    return replace(state, stack=state.stack[:-1], query="", selected_index=0), True


def move_selection(state: NavigationState, delta: int, length: int) -> NavigationState:
    """Move the selection by `delta`, wrapping around both ends."""
    if not state.is_open or length <= 0:
        return state
    return replace(state, selected_index=(state.selected_index + delta) % length)


def select_index(state: NavigationState, index: int, length: int) -> NavigationState:
    if not state.is_open or not 0 <= index < length:
        return state
    return replace(state, selected_index=index)


def clamp_selection(state: NavigationState, length: int) -> NavigationState:
    """Keep the selection a valid row index, or 0 for an empty list."""
    if length <= 0:
        index = 0
    else:
        index = min(max(state.selected_index, 0), length - 1)
    if index == state.selected_index:
        return state
    return replace(state, selected_index=index)


# =============================================================================
# Projection
# =============================================================================


@dataclass
class PaletteView:
    """Everything the host UI needs to draw the palette."""

    is_open: bool = False
    stack: list[CommandNode] = field(default_factory=list)
    query: str = ""
    ranked: list[CommandNode] = field(default_factory=list)
    groups: list[tuple[str, list[CommandNode]]] = field(default_factory=list)
    selected_index: int = 0
    preview: Any = None
    help_open: bool = False

    @property
    def selected(self) -> CommandNode | None:
        if 0 <= self.selected_index < len(self.ranked):
            return self.ranked[self.selected_index]
        return None

    @property
    def breadcrumb(self) -> str:
        return " / ".join(node.label for node in self.stack)

    @property
    def back_label(self) -> str:
        """Where Back leads: the parent group, or the palette itself."""
        if len(self.stack) >= 2:
            return self.stack[-2].label
        return PALETTE_TITLE

    @staticmethod
    def category_label(category: str) -> str:
        return CATEGORY_LABELS.get(category, category.title())


# =============================================================================
# Presenter
# =============================================================================


class PalettePresenter:
    """
    Handles command palette business logic.

    Keys understood by `handle_key`:
    - escape → close help, else back, else close
    - backspace → back, when the query is empty and we're in a group
    - up / down (ctrl+p / ctrl+n) → wrap-around selection
    - enter → activate the selected row
    """

    def __init__(
        self,
        corpus: CorpusBuilder,
        ledger: RecencyLedger,
        remote: RemoteSearchCoordinator | None = None,
        on_state_update: Callable[["PaletteView"], None] | None = None,
        is_blocked: Callable[[], bool] | None = None,
    ):
        self.corpus = corpus
        self.ledger = ledger
        self.remote = remote
        self.on_state_update = on_state_update
        self.is_blocked = is_blocked
        self._state = CLOSED
        self._help_open = False

        if self.remote is not None:
            self.remote.on_results = self._on_remote_results

    @property
    def state(self) -> NavigationState:
        """Get current state."""
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    @property
    def help_open(self) -> bool:
        return self._help_open

    def _notify_update(self) -> None:
        """Notify listeners of state change."""
        if self.on_state_update:
            self.on_state_update(self.view())

    def _apply(self, new_state: NavigationState) -> None:
        old_query = self._state.query
        self._state = new_state
        if self.remote is not None and new_state.query != old_query:
            self.remote.on_query_change(new_state.query)
        if self._state.is_open:
            self._state = clamp_selection(self._state, len(self.current_list()))
        self._notify_update()

    def _on_remote_results(self) -> None:
        if not self._state.is_open:
            return
        self._state = clamp_selection(self._state, len(self.current_list()))
        self._notify_update()

    # ---------------------------------------------------------------------
    # Reads
    # ---------------------------------------------------------------------

    def current_corpus(self) -> list[CommandNode]:
        """Children of the open group, or the full root corpus."""
        if self._state.stack:
            return list(self._state.stack[-1].children)
        remote = self.remote.results if self.remote is not None else []
        return self.corpus.build(self._state.query, remote)

    def current_list(self) -> list[CommandNode]:
        """The ranked, filtered rows the user is looking at."""
        return rank(self.current_corpus(), self._state.query, self.ledger.list())

    def view(self) -> PaletteView:
        """Project state into a PaletteView. Reading never mutates."""
        if not self._state.is_open:
            return PaletteView(help_open=self._help_open)

        ranked = self.current_list()
        recent_ids = self.ledger.list()
        # Domain data may have shrunk since the last transition
        index = clamp_selection(self._state, len(ranked)).selected_index
        selected = ranked[index] if ranked else None
        return PaletteView(
            is_open=True,
            stack=list(self._state.stack),
            query=self._state.query,
            ranked=ranked,
            groups=group_by_category(ranked, self._state.query, recent_ids),
            selected_index=index,
            preview=selected.preview if selected else None,
            help_open=self._help_open,
        )

    def shortcuts_enabled(self, focus_in_text_input: bool = False) -> bool:
        """Single-letter global shortcuts only fire when nothing is capturing keys."""
        return not self._state.is_open and not focus_in_text_input

    # ---------------------------------------------------------------------
    # Transitions
    # ---------------------------------------------------------------------

    def toggle_open(self) -> None:
        if self.is_blocked and self.is_blocked():
            logger.debug("Palette toggle ignored: blocked by another modal")
            return
        if self._state.is_open:
            self.close()
            return
        self._apply(toggle_open(self._state))

    def close(self) -> None:
        if self.remote is not None:
            self.remote.reset()
        self._apply(close(self._state))

    def type(self, text: str) -> None:
        if not self._state.is_open:
            return
        self._apply(type_query(self._state, text))

    def enter_node(self, node: CommandNode) -> None:
        """Drill into a group, or run a leaf and close."""
        if not self._state.is_open:
            return
        if node.children:
            self._apply(push(self._state, node))
            return

        self.ledger.record_activation(node.id)
        if node.execute is None:
            logger.warning(f"Leaf command has no action: {node.id}")
        else:
            try:
                node.execute()
            except Exception:
                logger.exception(f"Command action failed: {node.id}")
        self.close()

    def back(self) -> bool:
        new_state, went_back = pop(self._state)
        if went_back:
            self._apply(new_state)
        return went_back

    def open_help(self) -> None:
        self._help_open = True
        self._notify_update()

    def close_help(self) -> None:
        self._help_open = False
        self._notify_update()

    def hover_select(self, index: int) -> None:
        new_state = select_index(self._state, index, len(self.current_list()))
        if new_state is not self._state:
            self._apply(new_state)

    # ---------------------------------------------------------------------
    # Keys
    # ---------------------------------------------------------------------

    def press_escape(self) -> bool:
        if self._help_open:
            self.close_help()
            return True
        if not self._state.is_open:
            return False
        if not self.back():
            self.close()
        return True

    def press_backspace(self) -> bool:
        """Returns True when the key was consumed and must not edit the query."""
        if self._state.is_open and self._state.query == "" and self._state.stack:
            self.back()
            return True
        return False

    def arrow_down(self) -> None:
        items = self.current_list()
        if self._state.is_open and items:
            current = clamp_selection(self._state, len(items))
            self._apply(move_selection(current, 1, len(items)))

    def arrow_up(self) -> None:
        items = self.current_list()
        if self._state.is_open and items:
            current = clamp_selection(self._state, len(items))
            self._apply(move_selection(current, -1, len(items)))

    def press_enter(self) -> None:
        items = self.current_list()
        if self._state.is_open and items:
            index = clamp_selection(self._state, len(items)).selected_index
            self.enter_node(items[index])

    def handle_key(self, key: str) -> bool:
        """Route a Textual key name. Returns True when the key was consumed."""
        if key == "escape":
            return self.press_escape()
        if not self._state.is_open:
            return False
        if key == "backspace":
            return self.press_backspace()
        if key in ("down", "ctrl+n"):
            self.arrow_down()
            return True
        if key in ("up", "ctrl+p"):
            self.arrow_up()
            return True
        if key == "enter":
            self.press_enter()
            return True
        return False

    def teardown(self) -> None:
        """Stop remote search timers before the host goes away."""
        if self.remote is not None:
            self.remote.teardown()
        self._state = CLOSED
        self._help_open = False
