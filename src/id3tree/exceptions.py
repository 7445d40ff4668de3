"""Custom exceptions for ID3 tree induction.

Schema errors (the table does not have the columns the caller asked for):
- LabelColumnNotFoundError: Raised when the label column is absent from a table.
- ColumnsNotFoundError: Raised when requested attribute columns do not exist.
- DuplicateColumnsError: Raised when duplicate column names are provided.

Shape errors (the table and its companion data do not line up), all
subclasses of TableShapeError:
- ColumnLengthMismatchError: Raised when columns have unequal lengths.
- MissingAttributeDomainError: Raised when the attribute universe has no
  entry for a column present in the table.
- UnknownAttributeValueError: Raised when a cell holds a value outside its
  column's attribute universe.
- NaNValueError: Raised when a float column holds NaN.

Every exception subclasses ValueError: all of them are precondition
violations on caller-supplied data.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class LabelColumnNotFoundError(ValueError):
    """Raised when the label column does not exist in a table.

    Attributes:
        label (str): The requested label column name.
        available_columns (list[str]): Column names present in the table.

    Examples:
        >>> err = LabelColumnNotFoundError(label="play", available_columns=["outlook", "windy"])
        >>> str(err)
        "Label column 'play' not found in table. Available columns: ['outlook', 'windy']"
    """

    label: str
    available_columns: list[str]

    def __init__(self, label: str, available_columns: list[str]) -> None:
        """Initialize LabelColumnNotFoundError.

        Args:
            label (str): The requested label column name.
            available_columns (list[str]): Column names present in the table.
        """
        super().__init__(f"Label column '{label}' not found in table. Available columns: {available_columns}")
        self.label = label
        self.available_columns = available_columns


class ColumnsNotFoundError(ValueError):
    """Raised when requested attribute columns do not exist in a table.

    Attributes:
        missing_columns (list[str]): Column names that were not found.
        available_columns (list[str]): Column names present in the table.

    Examples:
        >>> err = ColumnsNotFoundError(
        ...     missing_columns=["x", "y"],
        ...     available_columns=["a", "b", "c"],
        ... )
        >>> err.missing_columns
        ['x', 'y']
    """

    missing_columns: list[str]
    available_columns: list[str]

    def __init__(
        self,
        missing_columns: list[str],
        available_columns: list[str],
    ) -> None:
        """Initialize ColumnsNotFoundError.

        Args:
            missing_columns (list[str]): Column names not found in the table.
            available_columns (list[str]): Column names present in the table.
        """
        super().__init__(f"Columns not found in table: {sorted(missing_columns)}")
        self.missing_columns = missing_columns
        self.available_columns = available_columns


class DuplicateColumnsError(ValueError):
    """Raised when duplicate column names are provided.

    Attributes:
        columns (list[str]): The column list that contains duplicates.
        duplicate_columns (list[str]): The specific column names that are
            duplicated (each listed once).

    Examples:
        >>> err = DuplicateColumnsError(columns=["a", "a", "b"])
        >>> err.duplicate_columns
        ['a']
    """

    columns: list[str]
    duplicate_columns: list[str]

    def __init__(self, columns: list[str]) -> None:
        """Initialize DuplicateColumnsError.

        Args:
            columns (list[str]): The column list containing duplicates.
        """
        super().__init__("Duplicate column names are not allowed")
        self.columns = columns
        seen: set[str] = set()
        self.duplicate_columns = []
        for col in columns:
            if col in seen and col not in self.duplicate_columns:
                self.duplicate_columns.append(col)
            seen.add(col)


class EmptySequenceError(ValueError):
    """Raised when entropy is requested for an empty label sequence."""

    def __init__(self) -> None:
        """Initialize EmptySequenceError."""
        super().__init__("Entropy is undefined for an empty sequence")


class TableShapeError(ValueError):
    """Base exception for tables whose shape does not match their companion data.

    Catch this to handle any shape failure raised during induction.

    Attributes:
        column (str | None): The column that triggered the error, when a single
            column is to blame.
    """

    column: str | None

    def __init__(self, message: str, column: str | None = None) -> None:
        """Initialize TableShapeError.

        Args:
            message (str): Description of the shape error.
            column (str | None): The offending column name, if any.
        """
        super().__init__(message)
        self.column = column

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including message and column.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, column={self.column!r})"


class ColumnLengthMismatchError(TableShapeError):
    """Raised when columns of a table have unequal lengths.

    Attributes:
        lengths (dict[str, int]): Length of every column, keyed by column name.

    Examples:
        >>> err = ColumnLengthMismatchError({"outlook": 3, "play": 2})
        >>> err.column
        'play'
    """

    lengths: dict[str, int]

    def __init__(self, lengths: Mapping[str, int]) -> None:
        """Initialize ColumnLengthMismatchError.

        The first column whose length differs from the first column's length
        is reported as `column`.

        Args:
            lengths (Mapping[str, int]): Length of every column, keyed by column name.
        """
        self.lengths = dict(lengths)
        expected = next(iter(self.lengths.values()), 0)
        offender = next((name for name, length in self.lengths.items() if length != expected), None)
        super().__init__(f"Columns must all have the same length, got {self.lengths}", column=offender)


class MissingAttributeDomainError(TableShapeError):
    """Raised when the attribute universe has no entry for a table column.

    Examples:
        >>> err = MissingAttributeDomainError("humidity")
        >>> err.column
        'humidity'
    """

    def __init__(self, column: str) -> None:
        """Initialize MissingAttributeDomainError.

        Args:
            column (str): The column missing from the attribute universe.
        """
        super().__init__(f"Attribute universe has no domain for column '{column}'", column=column)


class UnknownAttributeValueError(TableShapeError):
    """Raised when a table cell holds a value outside its column's domain.

    Attributes:
        values (list[Any]): The offending values, in first-appearance order.
    """

    values: list[Any]

    def __init__(self, column: str, values: list[Any]) -> None:
        """Initialize UnknownAttributeValueError.

        Args:
            column (str): The column holding the unknown values.
            values (list[Any]): The values not present in the column's domain.
        """
        super().__init__(f"Column '{column}' holds values outside its attribute universe: {values}", column=column)
        self.values = values

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including message, column, and values.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, column={self.column!r}, values={self.values!r})"


class NaNValueError(TableShapeError):
    """Raised when a float column holds NaN.

    NaN is not equal to itself, so it cannot name a branch or match a domain value.

    Examples:
        >>> err = NaNValueError("humidity")
        >>> err.column
        'humidity'
    """

    def __init__(self, column: str) -> None:
        """Initialize NaNValueError.

        Args:
            column (str): The float column holding NaN.
        """
        super().__init__(f"Column '{column}' holds NaN, which is not a valid categorical value", column=column)
