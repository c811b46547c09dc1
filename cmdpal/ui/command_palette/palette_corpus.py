"""
Corpus building for the command palette.

The corpus is the flat list of commands eligible for ranking at the root
of the palette: static commands first, then each domain group in a fixed
order, then whatever the remote search last returned. It is rebuilt on
every read and never cached here.
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from cmdpal.config.constants import DEFAULT_DOMAIN_LIMIT
from cmdpal.exceptions import CommandTreeError

from .palette_commands import CommandCategory, CommandNode, validate_command_tree

logger = logging.getLogger(__name__)


@dataclass
class RemoteCandidate:
    """A single hit from the remote search provider."""

    id: str
    label: str
    avatar_url: str | None = None


@dataclass
class DomainSource:
    """
    One collection of domain entities turned into commands.

    `fetch` is called on every build; caching, if any, is the provider's
    business. `match` narrows entities for a non-empty query before the
    `limit` cap is applied.
    """

    name: str
    fetch: Callable[[], Iterable[Any]]
    to_node: Callable[[Any], CommandNode]
    match: Callable[[Any, str], bool] | None = None
    limit: int = DEFAULT_DOMAIN_LIMIT

    def build(self, query: str = "") -> list[CommandNode]:
        entities: Iterable[Any] = self.fetch() or ()
        if query and self.match is not None:
            entities = (e for e in entities if self.match(e, query))

        nodes: list[CommandNode] = []
        for entity in entities:
            if len(nodes) >= self.limit:
                break
            nodes.append(self.to_node(entity))
        return nodes


@dataclass
class CorpusBuilder:
    """
    Assemble static, domain and remote commands into one ordered corpus.

    With `validate` on, domain and remote nodes are checked as untrusted
    data: a node whose id is already in the corpus, or whose subtree breaks
    the leaf/group contract, is logged and dropped. `build` never raises
    for bad data; static commands are trusted as-is.
    """

    static_commands: Callable[[], Sequence[CommandNode]]
    domains: list[DomainSource] = field(default_factory=list)
    validate: bool = False

    def build(self, query: str = "", remote: Sequence[CommandNode] = ()) -> list[CommandNode]:
        corpus = list(self.static_commands())
        seen = {node.id for node in corpus}
        for domain in self.domains:
            corpus.extend(self._admit(domain.build(query), seen, domain.name))
        corpus.extend(self._admit(remote, seen, "remote"))
        return corpus

    def _admit(self, nodes: Iterable[CommandNode], seen: set[str], source: str) -> list[CommandNode]:
        if not self.validate:
            return list(nodes)

        admitted: list[CommandNode] = []
        for node in nodes:
            if node.id in seen:
                logger.error(f"Dropping duplicate command id from {source}: {node.id}")
                continue
            try:
                validate_command_tree([node])
            except CommandTreeError as e:
                logger.error(f"Dropping invalid command from {source}: {e}")
                continue
            seen.add(node.id)
            admitted.append(node)
        return admitted


def text_match(*keys: str) -> Callable[[Mapping[str, Any], str], bool]:
    """Case-insensitive substring predicate over the given entity fields."""

    def _match(entity: Mapping[str, Any], query: str) -> bool:
        needle = query.lower()
        return any(needle in str(entity.get(key) or "").lower() for key in keys)

    return _match


def squad_command(squad: Mapping[str, Any], navigate: Callable[[str], None]) -> CommandNode:
    """A squad group with open/chat/party sub-commands."""
    squad_id = squad["id"]
    return CommandNode(
        id=f"squad-{squad_id}",
        label=squad["name"],
        description=squad.get("game") or "Squad",
        category=CommandCategory.SQUADS,
        preview={"type": "squad", "id": squad_id, "name": squad["name"], "game": squad.get("game")},
        children=[
            CommandNode(
                id=f"squad-{squad_id}-open",
                label="Open",
                description="View the squad",
                category=CommandCategory.SQUADS,
                execute=lambda: navigate(f"/squad/{squad_id}"),
            ),
            CommandNode(
                id=f"squad-{squad_id}-chat",
                label="Chat",
                description="Open the chat",
                category=CommandCategory.SQUADS,
                execute=lambda: navigate("/messages"),
            ),
            CommandNode(
                id=f"squad-{squad_id}-party",
                label="Voice Party",
                description="Join the party",
                category=CommandCategory.SQUADS,
                execute=lambda: navigate("/party"),
            ),
        ],
    )


def session_command(session: Mapping[str, Any], navigate: Callable[[str], None]) -> CommandNode:
    """A scheduled session as a leaf command."""
    session_id = session["id"]
    scheduled = session.get("scheduled_at")
    if isinstance(scheduled, datetime):
        description = scheduled.strftime("%d/%m/%Y")
    else:
        description = str(scheduled or "")
    return CommandNode(
        id=f"session-{session_id}",
        label=session.get("title") or "Session",
        description=description,
        category=CommandCategory.SESSIONS,
        preview={"type": "session", "id": session_id, "game": session.get("game")},
        execute=lambda: navigate(f"/session/{session_id}"),
    )


def remote_candidate_command(
    candidate: RemoteCandidate, navigate: Callable[[str], None]
) -> CommandNode:
    """A remote search hit (a player profile) as a leaf command."""
    return CommandNode(
        id=f"player-{candidate.id}",
        label=candidate.label,
        description="Player profile",
        category=CommandCategory.REMOTE,
        preview={"type": "player", "id": candidate.id, "avatar_url": candidate.avatar_url},
        execute=lambda: navigate(f"/profile/{candidate.id}"),
    )
