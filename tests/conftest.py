"""Shared pytest fixtures for cmdpal tests."""

from unittest.mock import Mock

import pytest

from cmdpal.services.kv_store import MemoryStore
from cmdpal.ui.command_palette.palette_commands import CommandNode
from cmdpal.ui.command_palette.palette_corpus import CorpusBuilder
from cmdpal.ui.command_palette.palette_presenter import PalettePresenter
from cmdpal.ui.command_palette.palette_recent import RecencyLedger

ROOT_COMMANDS = [
    ("home", "Accueil", "Retour à la page principale"),
    ("squads", "Mes Squads", "Voir toutes mes squads"),
    ("party", "Party Vocale", "Rejoindre une party"),
    ("messages", "Messages", "Voir mes conversations"),
    ("sessions", "Sessions", "Voir mes sessions"),
    ("profile", "Mon Profil", "Voir mon profil"),
    ("settings", "Paramètres", "Réglages de l'app"),
    ("premium", "Premium", "Passer Premium"),
]


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config/cmdpal."""
    config_dir = tmp_path / "cmdpal-config"
    monkeypatch.setenv("CMDPAL_CONFIG_DIR", str(config_dir))
    monkeypatch.setattr("cmdpal.services.kv_store.CMDPAL_CONFIG_DIR", config_dir)
    monkeypatch.setattr("cmdpal.config.palette_config.CMDPAL_CONFIG_DIR", config_dir)
    return config_dir


@pytest.fixture
def root_commands():
    """The eight navigation commands, each with a mock action."""
    return [
        CommandNode(
            id=command_id,
            label=label,
            description=description,
            category="navigation",
            execute=Mock(name=f"execute_{command_id}"),
        )
        for command_id, label, description in ROOT_COMMANDS
    ]


@pytest.fixture
def squad_group():
    """A navigable group with three leaf children."""
    return CommandNode(
        id="squad-42",
        label="Night Owls",
        description="Valorant",
        category="squads",
        preview={"type": "squad", "id": "42"},
        children=[
            CommandNode(id="squad-42-open", label="Open", category="squads", execute=Mock()),
            CommandNode(id="squad-42-chat", label="Chat", category="squads", execute=Mock()),
            CommandNode(id="squad-42-party", label="Voice Party", category="squads", execute=Mock()),
        ],
    )


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def ledger(memory_store):
    return RecencyLedger(memory_store)


@pytest.fixture
def presenter(root_commands, ledger):
    """A presenter over the root commands, without remote search."""
    return PalettePresenter(
        corpus=CorpusBuilder(static_commands=lambda: root_commands),
        ledger=ledger,
    )
