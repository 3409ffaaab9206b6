"""Tests for the console logging helpers."""

import logging
from io import StringIO
from unittest.mock import patch

from playqueue.utils.logging import (
    NOISY_LOGGERS,
    LevelColorFormatter,
    console_handler,
    quiet_noisy_loggers,
    wants_color,
)


class _Terminal(StringIO):
    def isatty(self) -> bool:
        return True


def _record(level: int = logging.WARNING, msg: str = "queue file rewritten") -> logging.LogRecord:
    return logging.makeLogRecord({"name": "playqueue.store", "levelno": level, "levelname": logging.getLevelName(level), "msg": msg})


class TestWantsColor:
    def test_terminal_gets_color(self):
        with patch.dict("os.environ", clear=True):
            assert wants_color(_Terminal()) is True

    def test_redirected_stream_gets_no_color(self):
        with patch.dict("os.environ", clear=True):
            assert wants_color(StringIO()) is False

    def test_no_color_wins_even_when_empty(self):
        with patch.dict("os.environ", {"NO_COLOR": ""}, clear=True):
            assert wants_color(_Terminal()) is False


class TestLevelColorFormatter:
    def test_plain_output_when_color_disabled(self):
        output = LevelColorFormatter("%(levelname)s %(message)s").format(_record())

        assert output == "WARNING queue file rewritten"

    def test_level_name_wrapped_when_color_enabled(self):
        output = LevelColorFormatter("%(levelname)s %(message)s", color=True).format(_record(logging.ERROR))

        assert output == "\033[31mERROR\033[0m queue file rewritten"

    def test_custom_level_left_uncolored(self):
        logging.addLevelName(25, "NOTICE")
        output = LevelColorFormatter("%(levelname)s", color=True).format(_record(25))

        assert output == "NOTICE"

    def test_shared_record_left_untouched(self):
        record = _record(logging.INFO)

        LevelColorFormatter(color=True).format(record)

        assert record.levelname == "INFO"


class TestConsoleHandler:
    def test_color_follows_stream(self):
        with patch.dict("os.environ", clear=True):
            tty_handler = console_handler(_Terminal())
            file_handler = console_handler(StringIO())

        assert tty_handler.formatter.color is True
        assert file_handler.formatter.color is False

    def test_writes_to_given_stream(self):
        stream = StringIO()
        handler = console_handler(stream)

        handler.emit(_record(msg="loaded 3 entries"))

        assert "loaded 3 entries" in stream.getvalue()
        assert "playqueue.store" in stream.getvalue()


def test_quiet_noisy_loggers():
    quiet_noisy_loggers(logging.ERROR)

    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.ERROR

    quiet_noisy_loggers()
