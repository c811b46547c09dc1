"""
Centralized constants for cmdpal.

Engine limits, timing and storage keys live here so the palette's behaviour
can be read in one place rather than hunted across modules.
"""

import os
from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

CMDPAL_CONFIG_DIR = Path(
    os.environ.get("CMDPAL_CONFIG_DIR", str(Path.home() / ".config" / "cmdpal"))
)

STORE_FILENAME = "store.json"  # Persistent key-value store
PALETTE_CONFIG_FILENAME = "palette_config.json"

# =============================================================================
# RECENCY
# =============================================================================

MAX_RECENT_COMMANDS = 8  # Ledger capacity, most-recent-first
RECENT_COMMANDS_KEY = "cmdpal:recent-commands"

# =============================================================================
# RANKING
# =============================================================================

EMPTY_QUERY_RESULT_LIMIT = 10  # Rows shown before the user types anything
DESCRIPTION_SCORE_WEIGHT = 0.7  # Description matches count for less than labels

# Scorer weights
SUBSTRING_BASE_SCORE = 100
SUBSTRING_COVERAGE_WEIGHT = 50
SUBSEQUENCE_MATCH_SCORE = 10
SUBSEQUENCE_STREAK_BONUS = 5
WORD_BOUNDARY_BONUS = 15
WORD_SEPARATORS = (" ", "-")

# =============================================================================
# CORPUS
# =============================================================================

DEFAULT_DOMAIN_LIMIT = 5  # Max domain-derived commands per domain

# =============================================================================
# REMOTE SEARCH
# =============================================================================

REMOTE_SEARCH_DEBOUNCE_SECONDS = 0.3
REMOTE_SEARCH_MIN_QUERY_LENGTH = 2
REMOTE_SEARCH_LIMIT = 5
REMOTE_SEARCH_TIMEOUT_SECONDS = 5.0

# =============================================================================
# DISPLAY
# =============================================================================

PALETTE_TITLE = "Command palette"
RECENT_CATEGORY = "recent"

CATEGORY_LABELS = {
    "recent": "Recent",
    "navigation": "Navigation",
    "actions": "Actions",
    "squads": "Squads",
    "sessions": "Sessions",
    "remote": "Players",
}

THEME_MODES = ("dark", "light", "system")
