"""Console log formatting for the listening room."""

from __future__ import annotations

import logging
import os
import sys
from typing import IO


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name with ANSI escape codes.

    Color is used only when the target stream is a terminal and the
    ``NO_COLOR`` environment variable is unset, unless ``use_color`` forces
    the choice either way.
    """

    COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        *,
        stream: IO[str] | None = None,
        use_color: bool | None = None,
    ) -> None:
        super().__init__(fmt, datefmt)
        self._stream = stream
        self._use_color_override = use_color

    def _use_color(self) -> bool:
        if self._use_color_override is not None:
            return self._use_color_override
        if "NO_COLOR" in os.environ:
            return False
        stream = self._stream or sys.stderr
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    def format(self, record: logging.LogRecord) -> str:
        if not self._use_color():
            return super().format(record)

        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelno, "")
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)
