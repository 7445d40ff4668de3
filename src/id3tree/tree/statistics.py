"""Information-theoretic statistics over categorical columns: entropy, conditional information, and gain."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import polars as pl

from id3tree.exceptions import ColumnLengthMismatchError, EmptySequenceError
from id3tree.table import attribute_columns, validate_label_column

# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------


def entropy(labels: pl.Series | Sequence[Any]) -> float:
    """Compute the Shannon entropy, in bits, of the empirical distribution of `labels`.

    Each distinct value `v` with relative frequency `p(v)` contributes
    `-p(v) * log2(p(v))`. Values with zero frequency contribute nothing.

    Args:
        labels (pl.Series | Sequence[Any]): Non-empty sequence of categorical values.

    Returns:
        float: Entropy in bits; exactly 0.0 when all values are identical and
            `log2(k)` for `k` equally frequent values.

    Raises:
        EmptySequenceError: If `labels` is empty.

    Examples:
        >>> entropy(["yes", "no"])
        1.0
        >>> entropy(["yes", "yes", "yes"])
        0.0
    """
    series = _as_series(labels)
    n_values = series.len()
    if n_values == 0:
        raise EmptySequenceError()
    counts = series.to_frame("value").group_by("value", maintain_order=True).len()["len"]
    probabilities = counts / n_values
    probabilities = probabilities.filter(probabilities > 0.0)
    return _non_negative(-float((probabilities * probabilities.log(2)).sum()))


def conditional_info(
    attribute: pl.Series | Sequence[Any],
    labels: pl.Series | Sequence[Any],
) -> float:
    """Compute the expected label entropy after conditioning on an attribute.

    Rows are grouped by attribute value; the result is the sum over groups of
    `(group size / row count) * entropy(group labels)`.

    Args:
        attribute (pl.Series | Sequence[Any]): Attribute values, positionally
            aligned with `labels`.
        labels (pl.Series | Sequence[Any]): Label values.

    Returns:
        float: Expected post-split entropy in bits; 0.0 for empty input.

    Raises:
        ColumnLengthMismatchError: If `attribute` and `labels` differ in length.
    """
    attribute_series = _as_series(attribute)
    label_series = _as_series(labels)
    if attribute_series.len() != label_series.len():
        raise ColumnLengthMismatchError({"attribute": attribute_series.len(), "labels": label_series.len()})

    n_rows = label_series.len()
    if n_rows == 0:
        return 0.0

    grouped = (
        pl.DataFrame({"attribute": attribute_series, "label": label_series})
        .group_by("attribute", maintain_order=True)
        .agg(pl.col("label"))
    )
    info = 0.0
    for subset in grouped["label"]:
        info += subset.len() / n_rows * entropy(subset)
    return info


def gain(
    attribute: pl.Series | Sequence[Any],
    labels: pl.Series | Sequence[Any],
) -> float:
    """Compute the information gain of splitting `labels` on `attribute`.

    Args:
        attribute (pl.Series | Sequence[Any]): Attribute values, positionally
            aligned with `labels`.
        labels (pl.Series | Sequence[Any]): Non-empty label values.

    Returns:
        float: `entropy(labels) - conditional_info(attribute, labels)`, never
            below 0.0. Larger is better.

    Raises:
        EmptySequenceError: If `labels` is empty.
        ColumnLengthMismatchError: If `attribute` and `labels` differ in length.
    """
    return _non_negative(entropy(labels) - conditional_info(attribute, labels))


def gains(df: pl.DataFrame, label: str) -> dict[str, float]:
    """Compute the information gain of every non-label column of a table.

    Args:
        df (pl.DataFrame): Non-empty table.
        label (str): The label column name.

    Returns:
        dict[str, float]: Column name to gain, in column order.

    Raises:
        LabelColumnNotFoundError: If `label` is absent from `df`.
    """
    validate_label_column(df, label)
    labels = df[label]
    return {column: gain(df[column], labels) for column in attribute_columns(df, label)}


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _as_series(values: pl.Series | Sequence[Any]) -> pl.Series:
    if isinstance(values, pl.Series):
        return values
    return pl.Series("values", list(values))


def _non_negative(value: float) -> float:
    # Rounding noise can leave a mathematically zero quantity slightly below 0.
    return max(0.0, value)
