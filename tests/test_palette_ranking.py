"""Tests for palette ranking and display grouping."""

from cmdpal.ui.command_palette.palette_commands import CommandNode
from cmdpal.ui.command_palette.palette_ranking import group_by_category, rank


def ids(nodes):
    return [n.id for n in nodes]


class TestEmptyQuery:
    """Ranking without a query: recents first, then corpus order."""

    def test_recents_first_then_corpus_order(self, root_commands):
        ranked = rank(root_commands, "", ["settings", "profile"])
        assert ids(ranked) == [
            "settings",
            "profile",
            "home",
            "squads",
            "party",
            "messages",
            "sessions",
            "premium",
        ]

    def test_missing_recent_ids_are_skipped(self, root_commands):
        ranked = rank(root_commands, "", ["gone", "premium"])
        assert ids(ranked)[0] == "premium"
        assert "gone" not in ids(ranked)
        assert len(ranked) == 8

    def test_truncated_to_ten(self):
        corpus = [CommandNode(id=f"c{i}", label=f"Command {i}") for i in range(15)]
        ranked = rank(corpus, "", ["c14"])
        assert len(ranked) == 10
        assert ids(ranked)[:2] == ["c14", "c0"]

    def test_no_recents(self, root_commands):
        assert ids(rank(root_commands, "", [])) == ids(root_commands)


class TestQuery:
    """Ranking with a query: fuzzy scores, stable ties, no truncation."""

    def test_label_substring_wins(self, root_commands):
        ranked = rank(root_commands, "Accueil", [])
        assert ranked[0].id == "home"

    def test_subsequence_included(self, root_commands):
        assert "premium" in ids(rank(root_commands, "prm", []))

    def test_non_matches_dropped(self, root_commands):
        assert rank(root_commands, "zzzz", []) == []

    def test_recency_ignored_with_query(self, root_commands):
        ranked = rank(root_commands, "Messages", ["home"])
        assert ranked[0].id == "messages"

    def test_ties_keep_corpus_order(self):
        corpus = [
            CommandNode(id="b", label="Alpha"),
            CommandNode(id="a", label="Alpha"),
            CommandNode(id="c", label="Alpha"),
        ]
        assert ids(rank(corpus, "alp", [])) == ["b", "a", "c"]

    def test_no_truncation(self):
        corpus = [CommandNode(id=f"c{i}", label=f"Command {i}") for i in range(15)]
        assert len(rank(corpus, "command", [])) == 15


class TestGrouping:
    """Test group_by_category."""

    def test_recent_group_when_query_empty(self, root_commands):
        recent = ["settings", "profile"]
        ranked = rank(root_commands, "", recent)
        groups = group_by_category(ranked, "", recent)

        assert groups[0][0] == "recent"
        assert ids(groups[0][1]) == ["settings", "profile"]
        assert groups[1][0] == "navigation"
        assert len(groups[1][1]) == 6

    def test_own_category_when_querying(self, root_commands):
        ranked = rank(root_commands, "mes", ["messages"])
        groups = dict(group_by_category(ranked, "mes", ["messages"]))
        assert "recent" not in groups
        assert "messages" in ids(groups["navigation"])

    def test_first_seen_category_order(self):
        ranked = [
            CommandNode(id="1", label="a", category="squads"),
            CommandNode(id="2", label="b", category="navigation"),
            CommandNode(id="3", label="c", category="squads"),
        ]
        groups = group_by_category(ranked, "x", [])
        assert [g[0] for g in groups] == ["squads", "navigation"]
        assert ids(groups[0][1]) == ["1", "3"]
