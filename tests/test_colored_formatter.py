"""Tests for ColoredFormatter."""

import logging
from io import StringIO

import pytest

from discord_playlist.utils.logging import ColoredFormatter

RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}


def _make_record(level: int, name: str = "test.logger") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=1,
        msg="test",
        args=(),
        exc_info=None,
    )


def _tty_stream() -> StringIO:
    stream = StringIO()
    stream.isatty = lambda: True  # type: ignore[method-assign]
    return stream


class TestColoredFormatter:
    """Tests for ANSI color formatting."""

    @pytest.mark.parametrize(
        "level",
        [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL],
    )
    def test_color_applied_per_level(self, level: int, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_tty_stream())

        output = fmt.format(_make_record(level))

        assert LEVEL_COLORS[level] in output
        assert RESET in output

    def test_no_color_when_no_color_env_set(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_tty_stream())

        assert fmt.format(_make_record(logging.INFO)) == "INFO | test"

    def test_no_color_when_not_tty(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=StringIO())

        assert fmt.format(_make_record(logging.WARNING)) == "WARNING | test"

    def test_package_prefix_stripped(self):
        fmt = ColoredFormatter("%(name)s", stream=StringIO())
        record = _make_record(logging.INFO, name="discord_playlist.application.services.registry")

        assert fmt.format(record) == "application.services.registry"

    def test_foreign_logger_name_kept(self):
        fmt = ColoredFormatter("%(name)s", stream=StringIO())

        assert fmt.format(_make_record(logging.INFO, name="discord.gateway")) == "discord.gateway"

    def test_record_not_mutated(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        fmt = ColoredFormatter("%(levelname)s %(name)s", stream=_tty_stream())
        record = _make_record(logging.ERROR, name="discord_playlist.main")

        fmt.format(record)

        assert record.levelname == "ERROR"
        assert record.name == "discord_playlist.main"
