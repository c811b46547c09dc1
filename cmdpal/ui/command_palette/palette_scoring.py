"""Fuzzy scoring for palette commands.

Two tiers:
- Contiguous substring: 100 plus up to 50 for how much of the text it covers
- Subsequence: 10 per matched character, +5 per character of the running
  streak, +15 when the match starts a word

Zero means no match.
"""

from cmdpal.config.constants import (
    DESCRIPTION_SCORE_WEIGHT,
    SUBSEQUENCE_MATCH_SCORE,
    SUBSEQUENCE_STREAK_BONUS,
    SUBSTRING_BASE_SCORE,
    SUBSTRING_COVERAGE_WEIGHT,
    WORD_BOUNDARY_BONUS,
    WORD_SEPARATORS,
)

from .palette_commands import CommandNode


def fuzzy_score(text: str, pattern: str) -> float:
    """Score `text` against a non-empty `pattern`, case-insensitively."""
    t = text.lower()
    p = pattern.lower()

    if p in t:
        return SUBSTRING_BASE_SCORE + (len(p) / len(t)) * SUBSTRING_COVERAGE_WEIGHT

    score = 0.0
    streak = 0
    pi = 0
    for ti, char in enumerate(t):
        if pi == len(p):
            break
        if char == p[pi]:
            score += SUBSEQUENCE_MATCH_SCORE + SUBSEQUENCE_STREAK_BONUS * streak
            if ti == 0 or t[ti - 1] in WORD_SEPARATORS:
                score += WORD_BOUNDARY_BONUS
            streak += 1
            pi += 1
        else:
            streak = 0

    return score if pi == len(p) else 0.0


def command_score(node: CommandNode, query: str) -> float:
    """Best of the label score and the down-weighted description score."""
    return max(
        fuzzy_score(node.label, query),
        fuzzy_score(node.description or "", query) * DESCRIPTION_SCORE_WEIGHT,
    )
