"""Tests for corpus building and domain mapping."""

from datetime import datetime
from unittest.mock import Mock

from cmdpal.ui.command_palette.palette_commands import CommandNode
from cmdpal.ui.command_palette.palette_corpus import (
    CorpusBuilder,
    DomainSource,
    RemoteCandidate,
    remote_candidate_command,
    session_command,
    squad_command,
    text_match,
)

SQUADS = [{"id": str(i), "name": f"Squad {i}", "game": "Valorant" if i % 2 else "Dota"} for i in range(8)]


def squad_source(navigate=None, limit=5):
    navigate = navigate or Mock()
    return DomainSource(
        name="squads",
        fetch=lambda: SQUADS,
        to_node=lambda s: squad_command(s, navigate),
        match=text_match("name", "game"),
        limit=limit,
    )


class TestDomainSource:
    """Test capping and filtering of domain entities."""

    def test_capped_at_limit(self):
        nodes = squad_source().build()
        assert [n.id for n in nodes] == [f"squad-{i}" for i in range(5)]

    def test_filtered_before_cap(self):
        nodes = squad_source(limit=2).build("valorant")
        assert [n.id for n in nodes] == ["squad-1", "squad-3"]

    def test_no_match_predicate_ignores_query(self):
        source = DomainSource(name="x", fetch=lambda: SQUADS, to_node=lambda s: squad_command(s, Mock()))
        assert len(source.build("nothing matches this")) == 5

    def test_empty_provider(self):
        source = DomainSource(name="x", fetch=lambda: None, to_node=Mock())
        assert source.build() == []


class TestCorpusBuilder:
    """Test corpus ordering: static, domains in order, remote."""

    def test_order(self, root_commands):
        remote = [CommandNode(id="player-1", label="alice", category="remote", execute=Mock())]
        sessions = DomainSource(
            name="sessions",
            fetch=lambda: [{"id": "s1", "title": "Raid", "scheduled_at": "soon"}],
            to_node=lambda s: session_command(s, Mock()),
        )
        builder = CorpusBuilder(static_commands=lambda: root_commands, domains=[squad_source(), sessions])

        corpus = builder.build("", remote)
        corpus_ids = [n.id for n in corpus]

        assert corpus_ids[:8] == [n.id for n in root_commands]
        assert corpus_ids[8:13] == [f"squad-{i}" for i in range(5)]
        assert corpus_ids[13] == "session-s1"
        assert corpus_ids[-1] == "player-1"

    def test_recomputed_each_build(self):
        items = [{"id": "a", "name": "A"}]
        source = DomainSource(name="x", fetch=lambda: items, to_node=lambda s: squad_command(s, Mock()))
        builder = CorpusBuilder(static_commands=list, domains=[source])
        assert len(builder.build()) == 1
        items.append({"id": "b", "name": "B"})
        assert len(builder.build()) == 2

    def test_validate_drops_duplicate_remote_ids(self, caplog):
        """Repeated remote hits are logged and dropped, never raised."""
        remote = [remote_candidate_command(RemoteCandidate(id="u1", label="alice"), Mock()) for _ in range(2)]
        builder = CorpusBuilder(static_commands=list, validate=True)

        corpus = builder.build("al", remote)

        assert [n.id for n in corpus] == ["player-u1"]
        assert "Dropping duplicate command id from remote: player-u1" in caplog.text

    def test_validate_drops_invalid_domain_nodes(self, root_commands, caplog):
        broken = DomainSource(
            name="broken",
            fetch=lambda: ["a", "b"],
            to_node=lambda s: CommandNode(id=f"orphan-{s}", label=s),
        )
        builder = CorpusBuilder(static_commands=lambda: root_commands, domains=[broken], validate=True)

        corpus = builder.build()

        assert [n.id for n in corpus] == [n.id for n in root_commands]
        assert "Dropping invalid command from broken" in caplog.text

    def test_validate_drops_ids_clashing_with_static(self, root_commands):
        clash = DomainSource(
            name="clash",
            fetch=lambda: [{"id": "x", "title": "Home again"}],
            to_node=lambda s: CommandNode(id=root_commands[0].id, label=s["title"], execute=Mock()),
        )
        builder = CorpusBuilder(static_commands=lambda: root_commands, domains=[clash], validate=True)

        corpus = builder.build()

        assert len(corpus) == len(root_commands)
        assert corpus[0] is root_commands[0]

    def test_validate_keeps_good_domain_groups(self):
        builder = CorpusBuilder(static_commands=list, domains=[squad_source()], validate=True)
        assert [n.id for n in builder.build()] == [f"squad-{i}" for i in range(5)]

    def test_validate_off_by_default(self):
        builder = CorpusBuilder(static_commands=lambda: [CommandNode(id="orphan", label="Orphan")])
        assert [n.id for n in builder.build()] == ["orphan"]


class TestMappers:
    """Test deterministic ids and actions of mapped commands."""

    def test_squad_group(self):
        navigate = Mock()
        node = squad_command({"id": "7", "name": "Night Owls", "game": None}, navigate)

        assert node.id == "squad-7"
        assert node.description == "Squad"
        assert not node.is_leaf
        assert [c.id for c in node.children] == ["squad-7-open", "squad-7-chat", "squad-7-party"]

        node.children[0].execute()
        navigate.assert_called_once_with("/squad/7")

    def test_session_leaf(self):
        navigate = Mock()
        node = session_command(
            {"id": "s9", "title": None, "scheduled_at": datetime(2026, 11, 2, 21)}, navigate
        )
        assert node.id == "session-s9"
        assert node.label == "Session"
        assert node.description == "02/11/2026"
        node.execute()
        navigate.assert_called_once_with("/session/s9")

    def test_remote_candidate(self):
        navigate = Mock()
        node = remote_candidate_command(RemoteCandidate(id="u1", label="alice"), navigate)
        assert node.id == "player-u1"
        assert node.category == "remote"
        assert node.preview["type"] == "player"
        node.execute()
        navigate.assert_called_once_with("/profile/u1")
