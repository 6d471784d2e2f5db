# tests/test_logger_utils.py
import logging

from ngram_markov.utils.logger_utils import ROOT_LOGGER, configure_logging, time_block


def test_configure_logging_is_idempotent(tmp_path):
    configure_logging("DEBUG", use_color=False)
    log = configure_logging("DEBUG", str(tmp_path / "a.log"), use_color=False)
    assert log.name == ROOT_LOGGER
    assert log.level == logging.DEBUG
    assert len(log.handlers) == 2


def test_file_handler_line_format(tmp_path):
    path = tmp_path / "chain.log"
    configure_logging("INFO", str(path), use_color=False)
    logging.getLogger("ngram_markov.core.chain").info("hello %s", "there")
    logging.getLogger("ngram_markov.core.chain").debug("hidden")
    for h in logging.getLogger(ROOT_LOGGER).handlers:
        h.flush()

    text = path.read_text(encoding="utf-8")
    assert "INFO    | hello there" in text
    assert "hidden" not in text
    assert text.startswith("[")


def test_rich_handler_used_with_color():
    from rich.logging import RichHandler

    log = configure_logging("INFO", use_color=True)
    assert any(isinstance(h, RichHandler) for h in log.handlers)


def test_time_block_logs_duration(caplog):
    with caplog.at_level(logging.INFO, logger=ROOT_LOGGER):
        with time_block("training") as t:
            sum(range(1000))
    assert t.elapsed >= 0
    assert "training done:" in caplog.text
