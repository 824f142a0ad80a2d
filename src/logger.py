"""
Logging for the reconciler.

One console handler on the `LOGGER` named in settings. Lines are optionally
coloured by level, and `table_logger()` prefixes every message with the table a
pass is working on, so interleaved passes stay readable.
"""

import logging
import typing
from collections.abc import MutableMapping
from enum import StrEnum

from src import settings

LINE_FORMAT = "{asctime} - {name} - {levelname} - {message}"


class ConsoleFormat(StrEnum):
    """ANSI codes used to colour console lines."""

    RESET = "\033[0m"
    BLACK = "\033[30m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    LIGHT_GREY = "\033[37m"
    HIGHLIGHT_RED = "\033[41m"
    BOLD = "\033[1m"


LEVEL_COLOURS: typing.Final[dict[int, str]] = {
    logging.DEBUG: ConsoleFormat.LIGHT_GREY,
    logging.INFO: ConsoleFormat.BLUE,
    logging.WARNING: ConsoleFormat.YELLOW,
    logging.ERROR: ConsoleFormat.RED,
    logging.CRITICAL: ConsoleFormat.BOLD + ConsoleFormat.HIGHLIGHT_RED + ConsoleFormat.BLACK,
}


class ConsoleFormatter(logging.Formatter):
    """Formats `LINE_FORMAT`, wrapped in the level's colour when `colour` is set."""

    def __init__(self, colour: bool = False) -> None:
        super().__init__(LINE_FORMAT, style="{")
        self.colour = colour
        self._by_level: dict[int, logging.Formatter] = {}

    def format(self, record: logging.LogRecord) -> str:
        formatter = self._by_level.get(record.levelno)
        if formatter is None:
            formatter = logging.Formatter(self._line_format(record.levelno), style="{")
            self._by_level[record.levelno] = formatter
        return formatter.format(record)

    def _line_format(self, levelno: int) -> str:
        if not self.colour:
            return LINE_FORMAT
        colour = LEVEL_COLOURS.get(levelno, ConsoleFormat.RESET)
        return f"{colour}{LINE_FORMAT}{ConsoleFormat.RESET}"


class TableLoggerAdapter(logging.LoggerAdapter):
    """Prefix every message with the table it concerns."""

    def process(
        self, msg: typing.Any, kwargs: MutableMapping[str, typing.Any]
    ) -> tuple[typing.Any, MutableMapping[str, typing.Any]]:
        return f"[{self.extra['table_name']}] {msg}", kwargs


def configure_logger(
    name: str = settings.LOGGER_NAME,
    level: str = settings.LOG_LEVEL,
    colour: bool = settings.LOG_COLOUR_ENABLED,
) -> logging.Logger:
    """Attach the console handler once; calling again only updates level and colour."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    handler = next(
        (h for h in logger.handlers if isinstance(h.formatter, ConsoleFormatter)), None
    )
    if handler is None:
        handler = logging.StreamHandler()
        logger.addHandler(handler)
    handler.setLevel(level)
    handler.setFormatter(ConsoleFormatter(colour=colour))
    return logger


def table_logger(table_name: str) -> TableLoggerAdapter:
    """Return a logger that tags messages with `table_name`."""
    return TableLoggerAdapter(LOGGER, {"table_name": table_name})


LOGGER = configure_logger()
