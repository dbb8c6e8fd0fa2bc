"""
High Score Ledger
=================

Ranks, bounds and persists the local top scores.

The ledger is a short list of HighScoreEntry records sorted by score
(descending) with earlier entries winning ties. Persistence goes through an
injected KeyValueStore; bad stored data reads as an empty ledger and failed
writes are logged and dropped so gameplay never stops for storage.
"""

from __future__ import annotations

import json
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from daily_snake.snake_core.config_loader import GameConfig, get_config
from daily_snake.snake_core.storage import KeyValueStore

logger = logging.getLogger(__name__)

# Defaults of the shipped config (v1 storage schema)
MAX_HIGH_SCORES = 3
HIGH_SCORE_STORAGE_KEY = "snake-highscores-v1"


@dataclass(frozen=True)
class HighScoreEntry:
    """One ledger row. ``created_at`` is epoch milliseconds or an insertion index."""
    name: str
    score: float
    created_at: float

    def to_dict(self) -> Dict[str, Any]:
        """Stored representation (camelCase keys match the v1 schema)."""
        return {"name": self.name, "score": self.score, "createdAt": self.created_at}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int = 0) -> "HighScoreEntry":
        """
        Normalize a stored row.

        Non-finite numbers become 0 and a zero timestamp falls back to
        ``index`` so insertion order still breaks ties.
        """
        return cls(
            name=sanitize_name(data.get("name")),
            score=safe_number(data.get("score")),
            created_at=safe_number(data.get("createdAt")) or index,
        )


def safe_number(value: Any) -> float:
    """Return ``value`` if it is a finite number, else 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # ints past the float range
        return 0
    return value if finite else 0


def sanitize_name(raw: Any, config: Optional[GameConfig] = None) -> str:
    """Trim, cap the length and fall back to the default player name."""
    if config is None:
        config = get_config()
    hs = config.highscores
    trimmed = str("" if raw is None else raw).strip()[:hs.name_max_length]
    return trimmed or hs.default_name


def sort_high_scores(entries: Sequence[HighScoreEntry]) -> List[HighScoreEntry]:
    """Highest score first; earlier ``created_at`` wins ties."""
    return sorted(entries, key=lambda e: (-e.score, e.created_at))


def qualifies_for_high_score(
    entries: Sequence[HighScoreEntry],
    score: float,
    max_entries: Optional[int] = None,
    config: Optional[GameConfig] = None
) -> bool:
    """
    Check whether ``score`` earns a place on the ledger.

    Scores of zero or less never qualify. On a full ledger the score must
    beat the current lowest entry outright. ``max_entries`` defaults to
    ``highscores.max_entries`` from the config.
    """
    if max_entries is None:
        max_entries = (config or get_config()).highscores.max_entries
    normalized = safe_number(score)
    if normalized <= 0:
        return False
    if len(entries) < max_entries:
        return True
    if not entries:
        return False
    floor = min(safe_number(entry.score) for entry in entries)
    return normalized > floor


def add_high_score(
    entries: Sequence[HighScoreEntry],
    name: Any,
    score: float,
    max_entries: Optional[int] = None,
    now: Optional[float] = None,
    config: Optional[GameConfig] = None
) -> List[HighScoreEntry]:
    """
    Insert a new entry and return the re-ranked, truncated ledger.

    Args:
        entries: Current ledger.
        name: Raw player name; sanitized before storing.
        score: Final score of the run.
        max_entries: Ledger capacity. Uses the config value if None.
        now: Timestamp in epoch milliseconds. Current time if None.
        config: Game configuration. Uses default if None.

    Returns:
        New ledger list; ``entries`` is left untouched.
    """
    if config is None:
        config = get_config()
    if max_entries is None:
        max_entries = config.highscores.max_entries
    if now is None:
        now = time.time() * 1000
    entry = HighScoreEntry(
        name=sanitize_name(name, config),
        score=safe_number(score),
        created_at=now,
    )
    return sort_high_scores([*entries, entry])[:max_entries]


def load_high_scores(
    store: KeyValueStore,
    key: Optional[str] = None,
    max_entries: Optional[int] = None,
    config: Optional[GameConfig] = None
) -> List[HighScoreEntry]:
    """
    Read the ledger from ``store``.

    Missing, unparseable or non-list data yields an empty ledger. Rows that
    are not objects or whose score is not positive are dropped. ``key`` and
    ``max_entries`` default to the ``highscores`` config section.
    """
    hs = (config or get_config()).highscores
    if key is None:
        key = hs.storage_key
    if max_entries is None:
        max_entries = hs.max_entries

    try:
        raw = store.get_item(key)
    except Exception:
        logger.warning("Could not read high scores from %r", key, exc_info=True)
        return []

    if not raw:
        return []

    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        logger.warning("Discarding unparseable high score data under %r", key)
        return []

    if not isinstance(parsed, list):
        return []

    normalized = [
        HighScoreEntry.from_dict(item, index)
        for index, item in enumerate(parsed)
        if isinstance(item, Mapping)
    ]
    normalized = [entry for entry in normalized if entry.score > 0]
    return sort_high_scores(normalized)[:max_entries]


def save_high_scores(
    store: KeyValueStore,
    entries: Sequence[HighScoreEntry],
    key: Optional[str] = None,
    max_entries: Optional[int] = None,
    config: Optional[GameConfig] = None
) -> bool:
    """
    Write the ledger to ``store``.

    Failures are logged and swallowed. ``key`` and ``max_entries`` default
    to the ``highscores`` config section.

    Returns:
        True if the write went through.
    """
    hs = (config or get_config()).highscores
    if key is None:
        key = hs.storage_key
    if max_entries is None:
        max_entries = hs.max_entries

    ranked = sort_high_scores(entries)[:max_entries]
    try:
        payload = json.dumps([entry.to_dict() for entry in ranked])
        store.set_item(key, payload)
    except Exception:
        logger.warning("Could not save high scores under %r", key, exc_info=True)
        return False
    return True
