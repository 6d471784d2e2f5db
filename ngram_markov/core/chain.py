# ngram_markov/core/chain.py
"""
NGramChain - n-gram Markov model over word sequences.

The chain maps every (n-1)-word context to the CandidateSet of words seen right
after it. Training slides an n-token window over a token stream; generation
starts from a seed context and repeatedly samples the next word.

Concurrency:
 - one RWLock guards the table, the context order and the seeds together
 - training takes the write lock once per window, not per stream
 - generate() holds the read lock for the whole walk, so one call sees one
   consistent table; two calls in a row may see different tables
 - next_candidate(), candidate_probability() and the introspection helpers
   take the read lock for their own duration

Randomness comes from `rand_func(bound) -> int in [0, bound)`, random.randrange
by default. Tests swap in deterministic functions.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .candidates import CandidateSet, RandFunc, WordFrequency
from .errors import ArityError, ContextNotFoundError, InvalidArityError
from .rwlock import RWLock
from ..context.tokenizer import TextSource, iter_words

logger = logging.getLogger(__name__)

Context = Tuple[str, ...]


def _is_seed(key: str) -> bool:
    # capitalised first word ~ start of a sentence
    return "A" <= key[:1] <= "Z"


class NGramChain:
    """In-memory n-gram store, safe for concurrent training and generation."""

    def __init__(self, n: int, rand_func: Optional[RandFunc] = None) -> None:
        if isinstance(n, bool) or not isinstance(n, int) or n <= 1:
            raise InvalidArityError(n)
        self._n = n
        self._rand = rand_func or random.randrange
        self._lock = RWLock()

        # joined context -> candidates
        self._table: Dict[str, CandidateSet] = {}
        # contexts in first-seen order, for the uniform "any context" pick
        self._contexts: List[Context] = []
        self._seeds: List[Context] = []

    @property
    def n(self) -> int:
        return self._n

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    def train(self, tokens: Iterable[str]) -> int:
        """
        Consume `tokens` lazily and record every n-token window.
        Returns the number of windows recorded; fewer than n tokens is a no-op.
        """
        window: deque = deque(maxlen=self._n)
        processed = 0
        for tok in tokens:
            window.append(tok)
            if len(window) == self._n:
                self._process_ngram(tuple(window))
                processed += 1
        logger.debug("trained %d windows (n=%d)", processed, self._n)
        return processed

    def train_text(self, source: TextSource) -> int:
        """Tokenize a string or text stream on whitespace and train on it."""
        return self.train(iter_words(source))

    def _process_ngram(self, window: Sequence[str]) -> None:
        if len(window) != self._n:
            raise ArityError(self._n, len(window))

        context: Context = tuple(window[:-1])
        candidate = window[-1]
        # single space keeps "a bc" and "ab c" apart
        key = " ".join(context)

        with self._lock.write_locked():
            cands = self._table.get(key)
            if cands is not None:
                cands.record(candidate)
                return

            cands = CandidateSet()
            cands.record(candidate)
            self._table[key] = cands
            self._contexts.append(context)
            if _is_seed(key):
                self._seeds.append(context)
        logger.debug("new context %r", key)

    # ------------------------------------------------------------------
    # Generation / queries
    # ------------------------------------------------------------------
    def generate(self, max_words: int) -> str:
        """
        Generate text from a random start context, adding at most `max_words`
        sampled words. Stops early when the current context has no
        continuation. Returns "" for an empty model; otherwise the text always
        ends with a period.
        """
        with self._lock.read_locked():
            if not self._table:
                return ""

            context = self._random_context()
            out: List[str] = list(context)

            for _ in range(max(0, max_words)):
                cands = self._table.get(" ".join(context))
                if cands is None:
                    break
                word = cands.sample(self._rand)
                if word is None:
                    break
                out.append(word)
                context = context[1:] + (word,)

        text = " ".join(out)
        if not text.endswith("."):
            text += "."
        return text

    def _random_context(self) -> Context:
        # caller holds the read lock and the table is non-empty
        if self._seeds:
            return self._seeds[self._rand(len(self._seeds))]
        return self._contexts[self._rand(len(self._contexts))]

    def next_candidate(self, context: str) -> Optional[str]:
        """Sample one word following `context`; None if the context is unknown."""
        with self._lock.read_locked():
            cands = self._table.get(context)
            if cands is None:
                return None
            return cands.sample(self._rand)

    def candidate_probability(self, context: str, word: str) -> float:
        """
        Observed probability of `word` after `context`, in [0, 1].
        0.0 for a word never seen after a known context.
        Raises ContextNotFoundError for an unknown context.
        """
        with self._lock.read_locked():
            cands = self._table.get(context)
            if cands is None:
                raise ContextNotFoundError(context)
            wf = cands.lookup(word)
            if wf is None:
                return 0.0
            return wf.frequency / cands.total

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------
    def candidates(self, context: str) -> List[WordFrequency]:
        with self._lock.read_locked():
            cands = self._table.get(context)
            if cands is None:
                raise ContextNotFoundError(context)
            return cands.entries()

    def total(self, context: str) -> int:
        with self._lock.read_locked():
            cands = self._table.get(context)
            if cands is None:
                raise ContextNotFoundError(context)
            return cands.total

    @property
    def seeds(self) -> List[str]:
        with self._lock.read_locked():
            return [" ".join(c) for c in self._seeds]

    def contexts(self) -> List[str]:
        with self._lock.read_locked():
            return [" ".join(c) for c in self._contexts]

    def stats(self) -> Dict[str, int]:
        with self._lock.read_locked():
            return {
                "n": self._n,
                "contexts": len(self._table),
                "seeds": len(self._seeds),
                "observations": sum(c.total for c in self._table.values()),
            }

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._table)

    def __contains__(self, context: object) -> bool:
        with self._lock.read_locked():
            return context in self._table

    def __repr__(self) -> str:
        return f"NGramChain(n={self._n})"
