"""
App logging: one rotating file plus the console, shared by the api, the
grading library and the Ollama client. Every record carries the request id
and, once authenticated, the learner id.
"""
from __future__ import annotations

import copy
import logging
import os
import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator, Optional

REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")
LEARNER_ID: ContextVar[str] = ContextVar("learner_id", default="-")

APP_LOGGER = "leoaxis"
# Library loggers (logging.getLogger(__name__)) that share the app handlers.
LIBRARY_LOGGERS = ("learning", "infra")

LOG_FORMAT = (
    "%(asctime)s %(levelname)-8s %(name)s "
    "rid=%(request_id)s learner=%(learner_id)s %(filename)s:%(lineno)d "
    "%(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.request_id = REQUEST_ID.get()
        record.learner_id = LEARNER_ID.get()
        return True


class ColorFormatter(logging.Formatter):
    """ANSI colors for the console handler. NO_COLOR or a non-TTY stream turns them off."""

    RESET = "\x1b[0m"
    DIM = "\x1b[2m"
    LEVEL_COLORS = {
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARNING": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "CRITICAL": "\x1b[1;31m",
    }

    def __init__(self, fmt: str, datefmt: str, use_color: bool):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)
        r = copy.copy(record)
        color = self.LEVEL_COLORS.get(r.levelname, "")
        r.levelname = f"{color}{r.levelname}{self.RESET}"
        for attr in ("name", "request_id", "learner_id"):
            setattr(r, attr, f"{self.DIM}{getattr(r, attr, '-')}{self.RESET}")
        return super().format(r)


def _use_color(stream) -> bool:
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _build_handlers(log_path: Path, level: int) -> list[logging.Handler]:
    context = ContextFilter()

    file_handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColorFormatter(LOG_FORMAT, DATE_FORMAT, use_color=_use_color(sys.stdout)))

    handlers: list[logging.Handler] = [file_handler, console_handler]
    for h in handlers:
        h.setLevel(level)
        h.addFilter(context)
    return handlers


def configure_logging(
    *,
    log_dir: str | Path | None = None,
    log_file: str = "leoaxis.log",
    level: str | None = None,
) -> logging.Logger:
    """
    Return the app logger, attaching handlers on the first call only.
    LOG_LEVEL and LOG_DIR env vars apply when the arguments are omitted.
    """
    logger = logging.getLogger(APP_LOGGER)
    if getattr(logger, "_configured", False):
        return logger

    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    numeric_level = logging.getLevelNamesMapping().get(level_name, logging.INFO)
    directory = Path(log_dir or os.getenv("LOG_DIR") or "logs")
    directory.mkdir(parents=True, exist_ok=True)

    handlers = _build_handlers(directory / log_file, numeric_level)
    for name in (APP_LOGGER, *LIBRARY_LOGGERS):
        target = logging.getLogger(name)
        target.setLevel(numeric_level)
        target.propagate = False
        for h in handlers:
            target.addHandler(h)

    logger._configured = True  # type: ignore[attr-defined]
    logger.debug("logging ready file=%s level=%s", directory / log_file, level_name)
    return logger


def set_request_id(request_id: Optional[str] = None) -> str:
    rid = request_id or uuid.uuid4().hex[:12]
    REQUEST_ID.set(rid)
    return rid


def set_learner_id(learner_id) -> None:
    LEARNER_ID.set(str(learner_id))


def clear_request_id() -> None:
    REQUEST_ID.set("-")
    LEARNER_ID.set("-")


@contextmanager
def log_request(logger: logging.Logger, name: str) -> Iterator[None]:
    """
    Time an operation and log its outcome:
        with log_request(logger, "grade_and_update course=c1"):
            ...
    """
    start = time.perf_counter()
    logger.debug("start %s", name)
    try:
        yield
    except Exception as e:
        logger.warning("%s failed duration_ms=%d error=%s", name, (time.perf_counter() - start) * 1000, e)
        raise
    logger.info("%s ok duration_ms=%d", name, (time.perf_counter() - start) * 1000)
