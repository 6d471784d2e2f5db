# logger_utils.py -  logging setup for the package plus a small timing helper

import logging
import time
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# every module logs under this namespace via logging.getLogger(__name__)
ROOT_LOGGER = "ngram_markov"

# file lines look like: [YYYY-MM-DD HH:MM:SS] INFO    | message
FILE_FORMAT = "[%(asctime)s] %(levelname)-7s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_TAG = "_ngram_markov_handler"


def configure_logging(
    level: str = "INFO",
    path: Optional[str] = None,
    use_color: bool = True,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Attach handlers to the package logger. Console output goes through Rich
    (colored levels, timestamps) unless use_color is False; `path` adds a plain
    append-only log file. Calling it again replaces the handlers it installed.
    """
    log = logging.getLogger(ROOT_LOGGER)
    log.setLevel(str(level).upper())

    for h in list(log.handlers):
        if getattr(h, _HANDLER_TAG, False):
            log.removeHandler(h)
            h.close()

    if use_color:
        stream: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        stream.setFormatter(logging.Formatter("%(message)s", datefmt=DATE_FORMAT))
    else:
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    setattr(stream, _HANDLER_TAG, True)
    log.addHandler(stream)

    if path:
        fh = logging.FileHandler(path, mode="a", encoding="utf-8")
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        setattr(fh, _HANDLER_TAG, True)
        log.addHandler(fh)

    log.propagate = False
    return log


def time_block(label: str, logger: Optional[logging.Logger] = None) -> "_Timer":
    """
    Measure how long a block takes and log it as a metric.
    To use:
        with time_block("training"):
            chain.train(tokens)
    """
    return _Timer(label, logger or logging.getLogger(ROOT_LOGGER))


class _Timer:
    """Context manager used internally to measure time for a code block."""
    def __init__(self, label: str, logger: logging.Logger):
        self.label = label
        self.logger = logger
        self.start = 0.0
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        self.logger.info("%s done: %.3fs", self.label, self.elapsed)
        return False
