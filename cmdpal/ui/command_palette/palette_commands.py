"""
Command model and registry for the command palette.

A command is either a navigable group (it has children) or an executable
leaf (it has an action). Static commands are kept in a registry that
preserves registration order, since that order is the ranking tie-break.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cmdpal.exceptions import CommandTreeError

logger = logging.getLogger(__name__)


class CommandCategory(str, Enum):
    """Built-in categories. Any other string is accepted as a category too."""

    NAVIGATION = "navigation"
    ACTIONS = "actions"
    SQUADS = "squads"
    SESSIONS = "sessions"
    REMOTE = "remote"


@dataclass(eq=False)
class CommandNode:
    """A command that can be executed or entered from the palette.

    Nodes compare by identity: the navigation stack holds references into
    the caller's tree, never copies.
    """

    id: str  # Unique among siblings; globally unique for leaves
    label: str  # Display name: "Settings"
    description: str | None = None
    category: str = CommandCategory.ACTIONS.value
    children: list["CommandNode"] = field(default_factory=list)
    preview: Any = None  # Opaque payload for the preview panel
    execute: Callable[[], None] | None = None

    def __post_init__(self) -> None:
        if isinstance(self.category, Enum):
            self.category = self.category.value

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __repr__(self) -> str:
        return f"CommandNode(id={self.id!r}, label={self.label!r}, category={self.category!r})"


def validate_command_tree(nodes: Iterable[CommandNode]) -> None:
    """
    Check a command tree built from untrusted input.

    Raises:
        CommandTreeError: on a cycle, a duplicate sibling id, a leaf without
            an action, or a group that also carries an action.
    """

    def _walk(siblings: Iterable[CommandNode], path: tuple[int, ...]) -> None:
        seen: set[str] = set()
        for node in siblings:
            if node.id in seen:
                logger.error(f"Duplicate command id among siblings: {node.id}")
                raise CommandTreeError("Duplicate sibling command id", command_id=node.id)
            seen.add(node.id)

            if id(node) in path:
                logger.error(f"Command tree cycle through: {node.id}")
                raise CommandTreeError("Command tree contains a cycle", command_id=node.id)

            if node.is_leaf and node.execute is None:
                raise CommandTreeError("Leaf command has no action", command_id=node.id)
            if not node.is_leaf and node.execute is not None:
                raise CommandTreeError("Group command must not have an action", command_id=node.id)

            if node.children:
                _walk(node.children, path + (id(node),))

    _walk(nodes, ())


class CommandRegistry:
    """Ordered registry of the palette's static commands."""

    def __init__(self, commands: Iterable[CommandNode] | None = None):
        self._commands: dict[str, CommandNode] = {}
        for command in commands or ():
            self.register(command)

    def register(self, command: CommandNode) -> None:
        """Register a command. Re-registering an id replaces it in place."""
        self._commands[command.id] = command
        logger.debug(f"Registered command: {command.id}")

    def unregister(self, command_id: str) -> bool:
        """Unregister a command. Returns True if found."""
        if command_id in self._commands:
            del self._commands[command_id]
            return True
        return False

    def get(self, command_id: str) -> CommandNode | None:
        """Get a command by ID."""
        return self._commands.get(command_id)

    def get_all(self) -> list[CommandNode]:
        """All commands in registration order."""
        return list(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)


def navigation_commands(navigate: Callable[[str], None]) -> list[CommandNode]:
    """The eight top-level navigation commands, in display order."""
    targets = [
        ("home", "Home", "Back to the main page", "/home"),
        ("squads", "My Squads", "See all my squads", "/squads"),
        ("party", "Voice Party", "Join a voice party", "/party"),
        ("messages", "Messages", "See my conversations", "/messages"),
        ("sessions", "Sessions", "See my sessions", "/sessions"),
        ("profile", "My Profile", "See my profile", "/profile"),
        ("settings", "Settings", "App preferences", "/settings"),
        ("premium", "Premium", "Upgrade to Premium", "/premium"),
    ]
    return [
        CommandNode(
            id=command_id,
            label=label,
            description=description,
            category=CommandCategory.NAVIGATION,
            preview={"type": "navigation", "route": route},
            execute=lambda route=route: navigate(route),
        )
        for command_id, label, description, route in targets
    ]


def action_commands(
    create_session: Callable[[], None],
    toggle_theme: Callable[[], None],
    theme_mode: str = "dark",
) -> list[CommandNode]:
    """Standalone actions that don't navigate anywhere."""
    mode_label = {"system": "Auto", "dark": "Dark", "light": "Light"}.get(theme_mode, theme_mode)
    return [
        CommandNode(
            id="create-session",
            label="Create a session",
            description="Schedule a new gaming session",
            category=CommandCategory.ACTIONS,
            preview={"type": "action"},
            execute=create_session,
        ),
        CommandNode(
            id="toggle-theme",
            label="Change theme",
            description=f"Current: {mode_label}",
            category=CommandCategory.ACTIONS,
            preview={"type": "action"},
            execute=toggle_theme,
        ),
    ]
