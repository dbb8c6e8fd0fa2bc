"""
RNG - Daily Seeded Stream
=========================

Provides the reproducible random stream behind every spawn decision.

A run is fully determined by its seed label: the label is hashed into an
integer seed for a private ``random.Random`` instance, so two generators
built from the same label yield the same infinite sequence of floats in
[0, 1) and never share state with each other.
"""

from __future__ import annotations

import hashlib
import random
from datetime import date, datetime, timezone
from typing import Callable, Optional, Union

RandomSource = Callable[[], float]


def _label_to_seed(seed_label: str) -> int:
    """Hash a seed label into a 64-bit integer seed."""
    digest = hashlib.sha256(seed_label.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


class SeededRng:
    """
    Callable random source seeded from a string label.

    Calling the instance returns the next float in [0, 1), which makes it a
    drop-in ``RandomSource`` for the game engine.
    """

    def __init__(self, seed_label: str):
        """
        Initialize the stream.

        Args:
            seed_label: Any string; usually a daily label such as "2026-02-18".
        """
        self._seed_label = str(seed_label)
        self._rng = random.Random(_label_to_seed(self._seed_label))
        self._draws: int = 0

    @property
    def seed_label(self) -> str:
        """Label this stream was seeded from."""
        return self._seed_label

    @property
    def draws(self) -> int:
        """Number of values produced since construction or last reset."""
        return self._draws

    def random(self) -> float:
        """Return the next float in [0, 1)."""
        self._draws += 1
        return self._rng.random()

    def __call__(self) -> float:
        return self.random()

    def reset(self) -> None:
        """Restart the stream from its first value."""
        self._rng = random.Random(_label_to_seed(self._seed_label))
        self._draws = 0

    def __repr__(self) -> str:
        return f"SeededRng({self._seed_label!r}, draws={self._draws})"


def create_seeded_rng(seed_label: str) -> RandomSource:
    """
    Create a reproducible random source from a seed label.

    Args:
        seed_label: Seed string.

    Returns:
        Zero-argument callable producing floats in [0, 1).
    """
    return SeededRng(seed_label)


def get_daily_seed_label(when: Optional[Union[datetime, date]] = None) -> str:
    """
    Format a calendar day as a UTC "YYYY-MM-DD" label.

    Naive datetimes are taken to already be UTC; aware datetimes are
    converted. Plain dates are formatted as given.

    Args:
        when: Instant or day to label. Defaults to now.

    Returns:
        Sortable day label.
    """
    if when is None:
        when = datetime.now(timezone.utc)

    if isinstance(when, datetime):
        if when.tzinfo is not None:
            when = when.astimezone(timezone.utc)
        return when.strftime("%Y-%m-%d")

    return when.isoformat()
