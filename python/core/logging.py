"""
Logging setup for the API, the page routes and the API client.

One stdout handler on the root logger; chatty third-party loggers
(httpx, uvicorn access log, SQLAlchemy engine) are turned down.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class ColoredFormatter(logging.Formatter):
    """Paints the level name for terminal output."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[2m",
        logging.INFO: "\033[34m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        plain = record.levelname
        record.levelname = f"{color}{plain}\033[0m"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


def setup_logging(
    level: str = "INFO",
    echo_sql: bool = False,
    use_colors: Optional[bool] = None,
) -> None:
    """
    Install the stdout handler on the root logger.

    Args:
        level: Root level name; unknown names fall back to INFO
        echo_sql: Let SQLAlchemy print every statement (DATABASE_ECHO)
        use_colors: Force colors on/off; by default only when stdout is a TTY
    """
    if use_colors is None:
        use_colors = sys.stdout.isatty()
    formatter_class = ColoredFormatter if use_colors else logging.Formatter

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter_class(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers = [handler]

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if echo_sql else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_request(logger: logging.Logger, method: str, path: str, status: int, duration_ms: float) -> None:
    """One line per handled request; server errors are logged as warnings."""
    level = logging.WARNING if status >= 500 else logging.INFO
    logger.log(level, f"{method} {path} -> {status} in {duration_ms:.1f} ms")


def log_error(logger: logging.Logger, error: Exception, context: Optional[str] = None) -> None:
    """Log an unexpected exception with its traceback."""
    where = f" during {context}" if context else ""
    logger.error(f"Unhandled {type(error).__name__}{where}: {error}", exc_info=error)
