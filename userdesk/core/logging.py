import logging
import sys
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name with ANSI escape codes."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        color = self.COLORS.get(levelname)
        if color:
            record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def configure_logging(
    level: Union[str, int] = "INFO",
    fmt: Optional[str] = None,
    colored: bool = True,
    custom_formatter: Optional[logging.Formatter] = None,
    sqlalchemy_echo: bool = False,
) -> logging.Logger:
    """
    Install the userdesk stream handler on the root logger.

    Calling this again replaces the handler it installed before; handlers
    added by anything else (test harnesses, embedding servers) are kept.

    Args:
        level: Root log level
        fmt: Log record format string
        colored: Use ColoredFormatter instead of a plain Formatter
        custom_formatter: Formatter to use instead of the built-in ones
        sqlalchemy_echo: Emit SQL statements through the sqlalchemy.engine logger

    Returns:
        The root logger
    """
    root_logger = logging.getLogger()

    for handler in list(root_logger.handlers):
        if getattr(handler, "_userdesk_handler", False):
            root_logger.removeHandler(handler)

    if custom_formatter is not None:
        formatter = custom_formatter
    elif colored:
        formatter = ColoredFormatter(fmt or DEFAULT_FORMAT)
    else:
        formatter = logging.Formatter(fmt or DEFAULT_FORMAT)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler._userdesk_handler = True
    root_logger.addHandler(handler)

    if isinstance(level, str):
        level = level.upper()
    root_logger.setLevel(level)

    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if sqlalchemy_echo else logging.WARNING
    )

    return root_logger


def configure_logging_from_config(config) -> logging.Logger:
    return configure_logging(
        level=config.get("logging.level", "INFO"),
        fmt=config.get("logging.format"),
        colored=config.get_bool("logging.colored", True),
        sqlalchemy_echo=config.get_bool("logging.sqlalchemy"),
    )
