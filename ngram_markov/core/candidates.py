# ngram_markov/core/candidates.py
"""
CandidateSet - every word observed after one context, with its frequency.

Entries keep insertion order and each word appears at most once. `total` is the
number of observations and always equals the sum of the entry frequencies;
weighted sampling relies on that.

A CandidateSet does no locking of its own. It is only ever reached through the
chain's table, and the chain holds its lock around every call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

RandFunc = Callable[[int], int]  # bound -> int in [0, bound)


@dataclass(frozen=True)
class WordFrequency:
    """Read-only copy of one (word, frequency) entry."""
    word: str
    frequency: int


class _Entry:
    __slots__ = ("word", "frequency")

    def __init__(self, word: str, frequency: int = 0) -> None:
        self.word = word
        self.frequency = frequency


class CandidateSet:
    """Ordered (word, frequency) list plus a running total of observations."""

    __slots__ = ("_entries", "_total")

    def __init__(self) -> None:
        self._entries: List[_Entry] = []
        self._total = 0

    @property
    def total(self) -> int:
        return self._total

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, word: str) -> None:
        """Count one more observation of `word` after this context."""
        self._total += 1
        for entry in self._entries:
            if entry.word == word:
                entry.frequency += 1
                return
        self._entries.append(_Entry(word, 1))

    def sample(self, rand_func: RandFunc) -> Optional[str]:
        """
        Pick a word with probability frequency / total.

        Draws r in [0, total) and walks the entries in insertion order until the
        running sum of frequencies passes r. Returns None when there is nothing
        to pick: an empty set, or a walk that never passes r (total out of sync
        with the frequencies).
        """
        if self._total <= 0:
            return None

        r = rand_func(self._total)
        running = 0
        for entry in self._entries:
            running += entry.frequency
            if running > r:
                return entry.word

        logger.warning(
            "candidate walk exhausted: draw=%d total=%d sum=%d",
            r, self._total, running,
        )
        return None

    def lookup(self, word: str) -> Optional[WordFrequency]:
        for entry in self._entries:
            if entry.word == word:
                return WordFrequency(entry.word, entry.frequency)
        return None

    def entries(self) -> List[WordFrequency]:
        return [WordFrequency(e.word, e.frequency) for e in self._entries]

    def as_dict(self) -> Dict[str, int]:
        return {e.word: e.frequency for e in self._entries}

    def __repr__(self) -> str:
        return f"CandidateSet({self.as_dict()!r}, total={self._total})"
