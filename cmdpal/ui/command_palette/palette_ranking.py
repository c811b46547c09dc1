"""
Ranking and grouping of palette results.

With no query the palette shows recent commands first, then everything
else in corpus order, capped. With a query every command is fuzzy-scored
and sorted; ties keep corpus order because `sorted` is stable.
"""

from collections.abc import Sequence

from cmdpal.config.constants import EMPTY_QUERY_RESULT_LIMIT, RECENT_CATEGORY

from .palette_commands import CommandNode
from .palette_scoring import command_score


def rank(
    corpus: Sequence[CommandNode],
    query: str,
    recent_ids: Sequence[str],
    limit: int = EMPTY_QUERY_RESULT_LIMIT,
) -> list[CommandNode]:
    """Order `corpus` for `query`, biased by `recent_ids` when the query is empty."""
    if not query:
        by_id: dict[str, CommandNode] = {}
        for node in corpus:
            by_id.setdefault(node.id, node)
        recent_nodes = [by_id[rid] for rid in recent_ids if rid in by_id]
        recent_set = set(recent_ids)
        rest_nodes = [node for node in corpus if node.id not in recent_set]
        return (recent_nodes + rest_nodes)[:limit]

    scored = [(command_score(node, query), node) for node in corpus]
    matches = [pair for pair in scored if pair[0] > 0]
    matches.sort(key=lambda pair: -pair[0])
    return [node for _, node in matches]


def group_by_category(
    ranked: Sequence[CommandNode],
    query: str,
    recent_ids: Sequence[str],
) -> list[tuple[str, list[CommandNode]]]:
    """
    Group ranked commands for display, in first-seen category order.

    Recent commands go under the synthetic "recent" category, but only while
    the query is empty.
    """
    recent_set = set(recent_ids) if not query else set()
    groups: dict[str, list[CommandNode]] = {}
    for node in ranked:
        category = RECENT_CATEGORY if node.id in recent_set else node.category
        groups.setdefault(category, []).append(node)
    return list(groups.items())
