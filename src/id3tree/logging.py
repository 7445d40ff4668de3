"""Opt-in loguru logging for id3tree, including the SPLIT level for split decisions."""

from __future__ import annotations

import contextlib
import sys
import threading
import warnings
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

# Handlers added by enable_logging replace loguru's default stderr sink
with contextlib.suppress(ValueError):
    logger.remove(0)

# Between DEBUG (10) and INFO (20)
SPLIT_LEVEL: Final[str] = "SPLIT"
SPLIT_LEVEL_NUMBER: Final[int] = 15

type LogLevel = Literal["TRACE", "DEBUG", "SPLIT", "INFO", "WARNING", "ERROR", "CRITICAL"]

type LogFormat = Literal["short", "full"]

_FORMAT_PREFIX: Final[str] = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
_FORMATS: Final[dict[str, str]] = {
    "short": _FORMAT_PREFIX + "<cyan>{function}</cyan> - <level>{message}</level> {extra}",
    "full": _FORMAT_PREFIX
    + "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> {extra}",
}


def _register_split_level() -> None:
    """Register SPLIT with loguru, warning if it already exists under another number."""
    try:
        existing_level = logger.level(SPLIT_LEVEL)
    except ValueError:
        logger.level(SPLIT_LEVEL, no=SPLIT_LEVEL_NUMBER)
        return
    if existing_level.no != SPLIT_LEVEL_NUMBER:
        warnings.warn(
            f"SPLIT level already registered with numeric value {existing_level.no}, expected {SPLIT_LEVEL_NUMBER}",
            stacklevel=2,
        )


_register_split_level()


class LoggingHandle:
    """One stderr handler added by `enable_logging`.

    Handles are counted across the process; disabling the last one turns
    id3tree logging off again.

    Examples:
        >>> with enable_logging(level="SPLIT"):  # doctest: +SKIP
        ...     induce("play", weather)
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's handler. Calling it again does nothing."""
        with LoggingHandle._lock:
            if self.handler_id is None:
                return
            LoggingHandle._active_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not LoggingHandle._active_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        """Return the number of handles not yet disabled."""
        with cls._lock:
            return len(cls._active_ids)


def enable_logging(
    *,
    level: LogLevel = "INFO",
    log_format: LogFormat = "short",
) -> LoggingHandle:
    """Write id3tree log records to stderr until the returned handle is disabled.

    Args:
        level (LogLevel): Minimum level shown. "INFO" (default) reports one
            line per induction pipeline run, "SPLIT" adds every chosen split
            attribute with its gain, and "TRACE" adds every termination case.
        log_format (LogFormat): "short" (default) shows the function name;
            "full" adds module and line number.

    Returns:
        LoggingHandle: Handle owning the new handler; usable as a context manager.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(sys.stderr, level=level, filter=_is_id3tree_record, format=_FORMATS[log_format])
    return LoggingHandle(handler_id)


def _is_id3tree_record(record: Record) -> bool:
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
