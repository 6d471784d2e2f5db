# ngram_markov/utils/__init__.py
# config, logging and threading helpers shared by the CLI and tests

from .config_manager import Config
from .logger_utils import configure_logging, time_block
from .threaded_runner import repeat, run_parallel

__all__ = [
    "Config",
    "configure_logging",
    "time_block",
    "run_parallel",
    "repeat",
]
