# tests/conftest.py
# shared fixtures: deterministic random sources and a clean package logger

import logging

import pytest

from ngram_markov.utils.logger_utils import ROOT_LOGGER


def fixed(value):
    """Random source that always answers `value`."""
    return lambda bound: value


def last(bound):
    """Random source that always picks the last slot."""
    return bound - 1


@pytest.fixture
def first_rand():
    return fixed(0)


@pytest.fixture
def last_rand():
    return last


@pytest.fixture(autouse=True)
def _reset_package_logger():
    # configure_logging() turns propagation off, which hides records from caplog
    yield
    log = logging.getLogger(ROOT_LOGGER)
    for h in list(log.handlers):
        log.removeHandler(h)
        h.close()
    log.propagate = True
    log.setLevel(logging.NOTSET)
