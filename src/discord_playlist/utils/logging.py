"""Console logging formatter with level colors and short logger names."""

from __future__ import annotations

import logging
import os
import sys

PACKAGE_PREFIX = "discord_playlist."


class ColoredFormatter(logging.Formatter):
    """Colors the levelname and drops the package prefix from logger names.

    Colors are disabled when ``NO_COLOR`` is set or the stream is not a TTY.
    The record passed in is never mutated.
    """

    COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, *args, stream=None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._stream = stream

    def _use_color(self) -> bool:
        if os.environ.get("NO_COLOR") is not None:
            return False
        stream = self._stream or sys.stdout
        return hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)
        if record.name.startswith(PACKAGE_PREFIX):
            record.name = record.name[len(PACKAGE_PREFIX) :]
        if self._use_color():
            color = self.COLORS.get(record.levelno, "")
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)
