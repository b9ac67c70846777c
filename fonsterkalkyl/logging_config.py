import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Optional

from loguru import logger

# Context variables voor offert-sessie en offert-id
session_id_var: ContextVar[Optional[str]] = ContextVar("session_id", default=None)
quote_id_var: ContextVar[Optional[str]] = ContextVar("quote_id", default=None)

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<blue>session_id={extra[session_id]}</blue> | <magenta>quote_id={extra[quote_id]}</magenta> | "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | "
    "session_id={extra[session_id]} | quote_id={extra[quote_id]} | {message}"
)


def _inject_context(record) -> None:
    # resolved per record, so module-level loggers pick up the request context too
    session_id = session_id_var.get()
    if session_id is not None:
        record["extra"]["session_id"] = session_id
    quote_id = quote_id_var.get()
    if quote_id is not None:
        record["extra"]["quote_id"] = quote_id


# records logged via the bare logger still need the extra keys for the format
logger.configure(extra={"session_id": None, "quote_id": None}, patcher=_inject_context)


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[str] = "logs",
    rotation: str = "1 day",
    retention: str = "30 days",
) -> None:
    """Configure loguru sinks: console always, rotating files when log_dir is set."""
    logger.remove()

    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if not log_dir:
        return

    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)

    logger.add(
        path / "app.log",
        format=FILE_FORMAT,
        level="DEBUG",
        rotation=rotation,
        retention=retention,
        compression="zip",
    )

    logger.add(
        path / "errors.log",
        format=FILE_FORMAT,
        level="ERROR",
        rotation=rotation,
        retention=retention,
        compression="zip",
    )


def get_logger(name: Optional[str] = None):
    """Logger tagged with the component name; session/quote ids come from the patcher."""
    if name:
        return logger.bind(component=name)
    return logger


class LoggingContext:
    """Sets session/quote ids for the duration of a block and restores the previous ones."""

    def __init__(self, session_id: Optional[str] = None, quote_id: Optional[str] = None):
        self.session_id = session_id
        self.quote_id = quote_id
        self._tokens = []

    def __enter__(self):
        if self.session_id is not None:
            self._tokens.append((session_id_var, session_id_var.set(self.session_id)))
        if self.quote_id is not None:
            self._tokens.append((quote_id_var, quote_id_var.set(self.quote_id)))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens = []
