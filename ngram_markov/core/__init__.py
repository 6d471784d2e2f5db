"""
ngram_markov.core

The model itself:
 - CandidateSet: weighted (word, frequency) list for one context
 - NGramChain: context table, training, generation and probability queries
 - RWLock: the reader/writer lock guarding the table
 - error taxonomy (ChainError and subclasses)
"""

from .candidates import CandidateSet, WordFrequency
from .chain import NGramChain
from .errors import ArityError, ChainError, ContextNotFoundError, InvalidArityError
from .rwlock import RWLock

__all__ = [
    "CandidateSet",
    "WordFrequency",
    "NGramChain",
    "RWLock",
    "ChainError",
    "ArityError",
    "ContextNotFoundError",
    "InvalidArityError",
]
