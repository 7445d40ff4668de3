"""Table helpers for induction: construction, validation, attribute universes, and partitioning.

A table is a Polars DataFrame whose cells are treated as opaque categorical
atoms. Column order and row order are significant: they fix the order in
which tied candidates are considered during induction.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import polars as pl

from id3tree.exceptions import (
    ColumnLengthMismatchError,
    ColumnsNotFoundError,
    DuplicateColumnsError,
    LabelColumnNotFoundError,
    MissingAttributeDomainError,
    NaNValueError,
    UnknownAttributeValueError,
)

type Atom = str | int | float | bool

type ColumnData = Mapping[str, Sequence[Any]]

type TableLike = pl.DataFrame | ColumnData


# ---------------------------------------------------------------------------
# Public interface -- Construction and validation
# ---------------------------------------------------------------------------


def build_table(columns: ColumnData) -> pl.DataFrame:
    """Build a table from a mapping of column name to cell values.

    Args:
        columns (ColumnData): Column name to sequence of cells. Insertion
            order becomes column order.

    Returns:
        pl.DataFrame: The constructed table.

    Raises:
        ColumnLengthMismatchError: If the columns do not all have the same length.

    Examples:
        >>> build_table({"outlook": ["sunny", "rainy"], "play": ["no", "yes"]}).shape
        (2, 2)
    """
    lengths = {name: len(values) for name, values in columns.items()}
    if len(set(lengths.values())) > 1:
        raise ColumnLengthMismatchError(lengths)
    return pl.DataFrame({name: list(values) for name, values in columns.items()})


def as_table(table: TableLike) -> pl.DataFrame:
    """Return `table` as a DataFrame, building one from column data if needed.

    Args:
        table (TableLike): A DataFrame or a mapping of column name to cells.

    Returns:
        pl.DataFrame: The table as a DataFrame. DataFrames are returned as-is.
    """
    if isinstance(table, pl.DataFrame):
        return table
    return build_table(table)


def validate_label_column(df: pl.DataFrame, label: str) -> None:
    """Raise if the label column is not present in the table.

    Args:
        df (pl.DataFrame): The table to check.
        label (str): The label column name.

    Raises:
        LabelColumnNotFoundError: If `label` is not one of `df.columns`.
    """
    if label not in df.columns:
        raise LabelColumnNotFoundError(label=label, available_columns=list(df.columns))


def select_attributes(df: pl.DataFrame, label: str, attributes: Sequence[str] | None) -> pl.DataFrame:
    """Restrict a table to the given attribute columns plus the label column.

    Args:
        df (pl.DataFrame): The source table.
        label (str): The label column name; always kept, as the last column
            if it is not already among `attributes`.
        attributes (Sequence[str] | None): Attribute columns to keep, in the
            order they should be considered. `None` keeps every column.

    Returns:
        pl.DataFrame: The restricted table.

    Raises:
        LabelColumnNotFoundError: If `label` is absent from `df`.
        ValueError: If `attributes` is empty.
        DuplicateColumnsError: If `attributes` contains duplicates.
        ColumnsNotFoundError: If any attribute is absent from `df`.
    """
    validate_label_column(df, label)
    if attributes is None:
        return df
    if len(attributes) == 0:
        raise ValueError("attributes must not be empty; pass None to use every column")
    if len(attributes) != len(set(attributes)):
        raise DuplicateColumnsError(columns=list(attributes))
    missing = [col for col in attributes if col not in df.columns]
    if missing:
        raise ColumnsNotFoundError(missing_columns=missing, available_columns=list(df.columns))
    return df.select([col for col in attributes if col != label] + [label])


def attribute_columns(df: pl.DataFrame, label: str) -> list[str]:
    """Return the non-label columns of a table, in column order.

    Args:
        df (pl.DataFrame): The table.
        label (str): The label column name.

    Returns:
        list[str]: Every column name except `label`.
    """
    return [col for col in df.columns if col != label]


def reject_nan(df: pl.DataFrame) -> None:
    """Raise if any float column of a table holds NaN.

    Args:
        df (pl.DataFrame): The table to check.

    Raises:
        NaNValueError: For the first float column, in column order, that holds NaN.
    """
    for column in df.columns:
        if df[column].dtype.is_float() and df[column].is_nan().any():
            raise NaNValueError(column)


# ---------------------------------------------------------------------------
# Public interface -- Attribute universe
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AttributeUniverse(Mapping[str, tuple[Any, ...]]):
    """Read-only mapping of column name to every value the column takes.

    Captured once from the full dataset before induction starts and passed
    unchanged to every recursive call, so that every split considers the
    global value domain of its attribute rather than the values left in a
    shrinking subset.

    Attributes:
        domains (Mapping[str, tuple[Any, ...]]): Column name to distinct
            values in first-appearance order.

    Examples:
        >>> universe = AttributeUniverse.from_table(
        ...     pl.DataFrame({"windy": ["false", "true", "false"]})
        ... )
        >>> universe["windy"]
        ('false', 'true')
    """

    domains: Mapping[str, tuple[Any, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the domain mapping."""
        frozen = MappingProxyType({name: tuple(values) for name, values in self.domains.items()})
        object.__setattr__(self, "domains", frozen)

    @classmethod
    def from_table(cls, df: pl.DataFrame) -> AttributeUniverse:
        """Capture the distinct values of every column of a table.

        Args:
            df (pl.DataFrame): The full dataset.

        Returns:
            AttributeUniverse: One domain per column, values in first-appearance order.

        Raises:
            NaNValueError: If a float column holds NaN.
        """
        reject_nan(df)
        return cls({name: tuple(df[name].unique(maintain_order=True).to_list()) for name in df.columns})

    def __getitem__(self, column: str) -> tuple[Any, ...]:
        return self.domains[column]

    def __iter__(self) -> Iterator[str]:
        return iter(self.domains)

    def __len__(self) -> int:
        return len(self.domains)

    def domain(self, column: str) -> tuple[Any, ...]:
        """Return the domain of a column.

        Args:
            column (str): The column name.

        Returns:
            tuple[Any, ...]: The column's distinct values.

        Raises:
            MissingAttributeDomainError: If the universe has no entry for `column`.
        """
        if column not in self.domains:
            raise MissingAttributeDomainError(column)
        return self.domains[column]

    def validate_covers(self, df: pl.DataFrame) -> None:
        """Raise if the universe does not describe every cell of a table.

        Args:
            df (pl.DataFrame): The table to check.

        Raises:
            NaNValueError: If a float column of `df` holds NaN.
            MissingAttributeDomainError: If a column of `df` has no domain.
            UnknownAttributeValueError: If a column holds a value outside its domain.
        """
        reject_nan(df)
        for column in df.columns:
            domain = set(self.domain(column))
            unknown = [value for value in df[column].unique(maintain_order=True).to_list() if value not in domain]
            if unknown:
                raise UnknownAttributeValueError(column, unknown)


# ---------------------------------------------------------------------------
# Public interface -- Partitioning
# ---------------------------------------------------------------------------


def partition_table(
    df: pl.DataFrame,
    attribute: str,
    values: Sequence[Any],
) -> dict[Any, pl.DataFrame]:
    """Split a table's rows by the value of one attribute, dropping that attribute.

    Every child is an independent DataFrame; values without any supporting
    rows map to an empty table with the same reduced schema.

    Args:
        df (pl.DataFrame): The table to split.
        attribute (str): The column to split on.
        values (Sequence[Any]): The values to produce a child for, in the
            order the children should appear.

    Returns:
        dict[Any, pl.DataFrame]: Value to child table without `attribute`,
            rows kept in their original order.
    """
    groups = df.partition_by(attribute, maintain_order=True, include_key=False, as_dict=True)
    empty = df.clear().drop(attribute)
    return {value: groups.get((value,), empty) for value in values}
