"""
Sample data and engine wiring for the demo app and the CLI.

Shows how a host application feeds the palette: static commands, two
domain collections, and an async directory search.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime

from cmdpal.config.palette_config import (
    get_debounce_seconds,
    get_theme_mode,
    load_palette_config,
)
from cmdpal.services.kv_store import JsonFileStore, KeyValueStore

from .command_palette.palette_commands import (
    CommandRegistry,
    action_commands,
    navigation_commands,
)
from .command_palette.palette_corpus import (
    CorpusBuilder,
    DomainSource,
    RemoteCandidate,
    remote_candidate_command,
    session_command,
    squad_command,
    text_match,
)
from .command_palette.palette_presenter import PalettePresenter, PaletteView
from .command_palette.palette_recent import RecencyLedger
from .command_palette.palette_search import RemoteSearchCoordinator

SAMPLE_SQUADS = [
    {"id": "1", "name": "Night Owls", "game": "Valorant"},
    {"id": "2", "name": "Weekend Raiders", "game": "Destiny 2"},
    {"id": "3", "name": "Rocket Crew", "game": "Rocket League"},
    {"id": "4", "name": "Dust Devils", "game": "Counter-Strike 2"},
    {"id": "5", "name": "Lane Kings", "game": "League of Legends"},
    {"id": "6", "name": "Pixel Pals", "game": None},
]

SAMPLE_SESSIONS = [
    {"id": "s1", "title": "Ranked grind", "game": "Valorant", "scheduled_at": datetime(2026, 11, 2, 21)},
    {"id": "s2", "title": "Raid night", "game": "Destiny 2", "scheduled_at": datetime(2026, 11, 4, 20)},
    {"id": "s3", "title": None, "game": "Rocket League", "scheduled_at": datetime(2026, 11, 7, 18)},
]

SAMPLE_PLAYERS = [
    RemoteCandidate(id="u1", label="alice"),
    RemoteCandidate(id="u2", label="alfred", avatar_url="https://example.invalid/a.png"),
    RemoteCandidate(id="u3", label="bob"),
    RemoteCandidate(id="u4", label="bobby_tables"),
    RemoteCandidate(id="u5", label="carol"),
]


async def search_players(query: str) -> list[RemoteCandidate]:
    """Pretend directory lookup with a little network latency."""
    await asyncio.sleep(0.15)
    needle = query.lower()
    return [p for p in SAMPLE_PLAYERS if needle in p.label.lower()]


def build_presenter(
    navigate: Callable[[str], None],
    store: KeyValueStore | None = None,
    create_session: Callable[[], None] | None = None,
    toggle_theme: Callable[[], None] | None = None,
    on_state_update: Callable[[PaletteView], None] | None = None,
    is_blocked: Callable[[], bool] | None = None,
) -> PalettePresenter:
    """Wire the demo commands, domains and remote search into a presenter."""
    config = load_palette_config()
    domain_limit = int(config["domain_limit"])
    registry = CommandRegistry(navigation_commands(navigate))

    def register_actions() -> None:
        for command in action_commands(
            create_session or (lambda: navigate("/sessions?new=true")),
            run_toggle_theme,
            get_theme_mode(),
        ):
            registry.register(command)

    def run_toggle_theme() -> None:
        if toggle_theme is not None:
            toggle_theme()
        # The theme action's label shows the current mode
        register_actions()

    register_actions()

    corpus = CorpusBuilder(
        static_commands=registry.get_all,
        domains=[
            DomainSource(
                name="squads",
                fetch=lambda: SAMPLE_SQUADS,
                to_node=lambda squad: squad_command(squad, navigate),
                match=text_match("name", "game"),
                limit=domain_limit,
            ),
            DomainSource(
                name="sessions",
                fetch=lambda: SAMPLE_SESSIONS,
                to_node=lambda session: session_command(session, navigate),
                match=text_match("title", "game"),
                limit=domain_limit,
            ),
        ],
        validate=True,
    )
    remote = RemoteSearchCoordinator(
        search=search_players,
        to_node=lambda candidate: remote_candidate_command(candidate, navigate),
        debounce_seconds=get_debounce_seconds(),
        limit=int(config["remote_limit"]),
        timeout_seconds=config.get("remote_timeout_seconds"),
    )
    return PalettePresenter(
        corpus=corpus,
        ledger=RecencyLedger(store if store is not None else JsonFileStore()),
        remote=remote,
        on_state_update=on_state_update,
        is_blocked=is_blocked,
    )
