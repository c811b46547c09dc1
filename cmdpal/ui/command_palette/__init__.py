"""
Command Palette - keyboard-driven quick access overlay.

Provides:
- PalettePresenter: navigation state machine and view projection
- RemoteSearchCoordinator: debounced, sequence-fenced remote lookups
- RecencyLedger: persisted most-recently-used command ids
- CommandPaletteScreen: Textual modal rendering the presenter
"""

from .palette_commands import CommandCategory, CommandNode, CommandRegistry, validate_command_tree
from .palette_corpus import CorpusBuilder, DomainSource, RemoteCandidate
from .palette_presenter import NavigationState, PalettePresenter, PaletteView
from .palette_ranking import group_by_category, rank
from .palette_recent import RecencyLedger
from .palette_screen import CommandPaletteScreen
from .palette_scoring import command_score, fuzzy_score
from .palette_search import RemoteSearchCoordinator

__all__ = [
    "CommandCategory",
    "CommandNode",
    "CommandPaletteScreen",
    "CommandRegistry",
    "CorpusBuilder",
    "DomainSource",
    "NavigationState",
    "PalettePresenter",
    "PaletteView",
    "RecencyLedger",
    "RemoteCandidate",
    "RemoteSearchCoordinator",
    "command_score",
    "fuzzy_score",
    "group_by_category",
    "rank",
    "validate_command_tree",
]
