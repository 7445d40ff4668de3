"""Read comma-delimited text into a table of string cells.

A header row is recognized when the second line starts with `=`, as in
a `=====` rule or a per-column `=====,=====` rule; header names are
trimmed and lowercased. Without a header, columns are named `x1..xn`.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import polars as pl
from loguru import logger

from id3tree.exceptions import DuplicateColumnsError, TableShapeError

_HEADER_RULE_CHAR: str = "="


def parse_delimited(lines: Sequence[str], *, separator: str = ",") -> pl.DataFrame:
    """Parse delimited lines into a table with one String column per field.

    Args:
        lines (Sequence[str]): Raw text lines. Blank lines are skipped.
        separator (str): Field separator. Defaults to `","`.

    Returns:
        pl.DataFrame: The parsed table; every cell is whitespace-trimmed.

    Raises:
        ValueError: If there are no non-blank lines.
        DuplicateColumnsError: If the header names a column twice.
        TableShapeError: If a row has a different number of fields than the header.

    Examples:
        >>> parse_delimited(["Outlook, Play", "=====", "sunny, no"]).columns
        ['outlook', 'play']
        >>> parse_delimited(["sunny, no", "rainy, yes"]).columns
        ['x1', 'x2']
    """
    content = [line for line in lines if line.strip()]
    if not content:
        raise ValueError("Cannot parse a table from empty input")

    if len(content) >= 2 and _is_header_rule(content[1]):
        headers = [name.strip().lower() for name in content[0].split(separator)]
        body = content[2:]
    else:
        headers = [f"x{i + 1}" for i in range(len(content[0].split(separator)))]
        body = content
        logger.debug("No header row found, synthesized column names", columns=headers)

    if len(headers) != len(set(headers)):
        raise DuplicateColumnsError(columns=headers)

    rows: list[list[str]] = []
    for line_number, line in enumerate(body, start=1):
        cells = [cell.strip() for cell in line.split(separator)]
        if len(cells) != len(headers):
            raise TableShapeError(f"Row {line_number} has {len(cells)} fields, expected {len(headers)}: {line!r}")
        rows.append(cells)

    return pl.DataFrame(rows, schema=dict.fromkeys(headers, pl.String), orient="row")


def read_delimited(path: str | Path, *, separator: str = ",", encoding: str = "utf-8") -> pl.DataFrame:
    """Read a delimited text file into a table.

    Args:
        path (str | Path): File to read.
        separator (str): Field separator. Defaults to `","`.
        encoding (str): Text encoding. Defaults to `"utf-8"`.

    Returns:
        pl.DataFrame: The parsed table.
    """
    lines = Path(path).read_text(encoding=encoding).splitlines()
    df = parse_delimited(lines, separator=separator)
    logger.info("Table read", path=str(path), shape=df.shape)
    return df


def _is_header_rule(line: str) -> bool:
    return line.strip().startswith(_HEADER_RULE_CHAR)
