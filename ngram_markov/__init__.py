"""
ngram_markov - trainable n-gram Markov text generator.

    from ngram_markov import NGramChain
    chain = NGramChain(3)
    chain.train_text("I am batman and I am here.")
    print(chain.generate(20))
"""

from .core import (
    ArityError,
    CandidateSet,
    ChainError,
    ContextNotFoundError,
    InvalidArityError,
    NGramChain,
    WordFrequency,
)

__all__ = [
    "NGramChain",
    "CandidateSet",
    "WordFrequency",
    "ChainError",
    "ArityError",
    "ContextNotFoundError",
    "InvalidArityError",
]

__version__ = "0.1.0"
