# ngram_markov/core/errors.py
# error taxonomy raised by the chain. Nothing here is retried or logged by the core.


class ChainError(Exception):
    """Base class for every error raised by NGramChain."""


class InvalidArityError(ChainError, ValueError):
    """Raised when a chain is built with n <= 1."""

    def __init__(self, n: int):
        self.n = n
        super().__init__(f"error initialising NGramChain: n must be an integer, at least 2, got {n!r}")


class ArityError(ChainError, ValueError):
    """Raised when a training window does not hold exactly n tokens."""

    def __init__(self, expected: int, got: int):
        self.expected = expected
        self.got = got
        super().__init__(
            f"error processing ngram, expected input length {expected}, got {got}"
        )


class ContextNotFoundError(ChainError, LookupError):
    """Raised by probability queries against a context the chain never saw."""

    def __init__(self, context: str):
        self.context = context
        super().__init__(f"context does not exist: {context!r}")
