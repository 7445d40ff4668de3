"""Shared fixtures: the classic 14-row weather table and a small defect table."""

from __future__ import annotations

import contextlib
from collections.abc import Generator

import loguru
import polars as pl
import pytest
from loguru import logger

from id3tree.logging import PACKAGE_NAME, LoggingHandle

_WEATHER_ROWS: list[tuple[str, str, str, str, str]] = [
    ("sunny", "hot", "high", "false", "no"),
    ("sunny", "hot", "high", "true", "no"),
    ("overcast", "hot", "high", "false", "yes"),
    ("rainy", "mild", "high", "false", "yes"),
    ("rainy", "cool", "normal", "false", "yes"),
    ("rainy", "cool", "normal", "true", "no"),
    ("overcast", "cool", "normal", "true", "yes"),
    ("sunny", "mild", "high", "false", "no"),
    ("sunny", "cool", "normal", "false", "yes"),
    ("rainy", "mild", "normal", "false", "yes"),
    ("sunny", "mild", "normal", "true", "yes"),
    ("overcast", "mild", "high", "true", "yes"),
    ("overcast", "hot", "normal", "false", "yes"),
    ("rainy", "mild", "high", "true", "no"),
]


@pytest.fixture
def weather_df() -> pl.DataFrame:
    """Return Quinlan's play-tennis weather table.

    Returns:
        pl.DataFrame: 14 rows with attributes `outlook`, `temp`, `humidity`,
            `windy` and label `play`.
    """
    return pl.DataFrame(
        _WEATHER_ROWS,
        schema=["outlook", "temp", "humidity", "windy", "play"],
        orient="row",
    )


@pytest.fixture
def defect_df() -> pl.DataFrame:
    """Return a table whose induced tree has a branch with no supporting rows.

    `shift` and `machine` tie on gain at the root, so `shift` wins by column
    order. The `day` subset never uses machine `m3`, which exists only on the
    `night` shift.

    Returns:
        pl.DataFrame: 6 rows with attributes `shift`, `machine` and label `defect`.
    """
    return pl.DataFrame({
        "shift": ["day", "day", "day", "night", "night", "night"],
        "machine": ["m1", "m2", "m1", "m3", "m1", "m2"],
        "defect": ["yes", "no", "yes", "no", "no", "no"],
    })


@pytest.fixture
def log_records() -> Generator[list[loguru.Record]]:
    """Capture every id3tree log record emitted during a test.

    Yields:
        Generator[list[loguru.Record]]: Records in arrival order.
    """
    captured_records: list[loguru.Record] = []

    def sink(message: loguru.Message) -> None:
        captured_records.append(message.record)

    handler_id = logger.add(sink, level="TRACE")
    logger.enable(PACKAGE_NAME)
    try:
        yield captured_records
    finally:
        logger.disable(PACKAGE_NAME)
        logger.remove(handler_id)


@pytest.fixture(autouse=True)
def restore_active_ids() -> Generator[None]:
    """Save and restore LoggingHandle._active_ids around each test.

    Yields:
        None: Nothing; used only for setup/teardown side effects.
    """
    saved_ids: set[int] = set(LoggingHandle._active_ids)

    yield

    for handler_id in LoggingHandle._active_ids - saved_ids:
        with contextlib.suppress(ValueError):
            logger.remove(handler_id)
    LoggingHandle._active_ids.clear()
    LoggingHandle._active_ids.update(saved_ids)
