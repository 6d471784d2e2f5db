# ngram_markov/context/tokenizer.py
# lazy whitespace tokenizer feeding the chain. Tokens are opaque: no casing,
# no punctuation stripping, "end." and "end" are different words.

import sys
from typing import Iterable, Iterator, Union

TextSource = Union[str, Iterable[str]]


def iter_words(source: TextSource) -> Iterator[str]:
    """
    Yield whitespace-delimited tokens from a string or any iterable of lines
    (an open text file works). Same splitting rules as str.split().
    """
    if isinstance(source, str):
        source = source.splitlines()
    for line in source:
        yield from line.split()


def iter_file_words(path: str, encoding: str = "utf-8") -> Iterator[str]:
    """Yield the tokens of a file, read line by line. "-" reads stdin."""
    if path == "-":
        yield from iter_words(sys.stdin)
        return
    with open(path, "r", encoding=encoding) as fh:
        yield from iter_words(fh)
