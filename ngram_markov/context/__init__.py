# ngram_markov/context/__init__.py
# token sources that feed text into the chain

from .tokenizer import iter_words, iter_file_words

__all__ = [
    "iter_words",
    "iter_file_words",
]
