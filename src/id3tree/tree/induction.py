"""ID3 tree induction, prediction, rule extraction, and result orchestration."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import polars as pl
from loguru import logger

from id3tree.config import InductionSettings
from id3tree.exceptions import EmptySequenceError
from id3tree.logging import SPLIT_LEVEL
from id3tree.table import (
    AttributeUniverse,
    TableLike,
    as_table,
    attribute_columns,
    partition_table,
    select_attributes,
    validate_label_column,
)
from id3tree.tree.models import (
    ClassificationRule,
    DecisionTree,
    InductionResult,
    InternalNode,
    Leaf,
    Predicate,
)
from id3tree.tree.statistics import entropy, gains

# ---------------------------------------------------------------------------
# Public interface -- Induction
# ---------------------------------------------------------------------------


def induce(
    label: str,
    table: TableLike,
    universe: AttributeUniverse | Mapping[str, Sequence[Any]] | None = None,
    *,
    settings: InductionSettings | None = None,
) -> DecisionTree:
    """Induce a decision tree from a categorical table with ID3.

    Each recursive call handles one row subset and resolves to the first
    matching case:

    1. No rows: a no-data leaf.
    2. One distinct label: a leaf with that label.
    3. No attribute columns left: a leaf with the majority label.
    4. Otherwise: split on the attribute with the highest information gain,
       partition the rows by every value of that attribute's universe, drop
       the attribute from each partition, and recurse.

    Every split removes one column, so the tree is never deeper than the
    number of attribute columns.

    Args:
        label (str): Name of the label column.
        table (TableLike): The training table, as a DataFrame or a mapping of
            column name to cells.
        universe (AttributeUniverse | Mapping[str, Sequence[Any]] | None):
            Possible values of every column. `None` captures it from `table`.
            Pass it explicitly when `table` is a subset of a larger dataset
            whose value domains should shape the branches.
        settings (InductionSettings | None): No-data label and missing-branch
            policy. `None` reads the defaults and the environment.

    Returns:
        DecisionTree: The induced tree.

    Raises:
        LabelColumnNotFoundError: If `label` is not a column of `table`.
        ColumnLengthMismatchError: If `table` is column data of unequal lengths.
        MissingAttributeDomainError: If `universe` lacks a column of `table`.
        UnknownAttributeValueError: If a cell lies outside its column's universe.
        NaNValueError: If a float column of `table` holds NaN.

    Examples:
        >>> tree = induce("play", {"windy": ["true", "false"], "play": ["no", "yes"]})
        >>> tree.attribute
        'windy'
    """
    df = as_table(table)
    validate_label_column(df, label)
    if universe is None:
        universe = AttributeUniverse.from_table(df)
    elif not isinstance(universe, AttributeUniverse):
        universe = AttributeUniverse(universe)
    universe.validate_covers(df)

    context = _InductionContext(label=label, universe=universe, settings=settings or InductionSettings())
    tree = _induce(df, context, depth=0)
    logger.debug("Tree induced", label=label, rows=df.height, depth=tree.depth, leaves=tree.leaf_count)
    return tree


def majority_label(labels: pl.Series | Sequence[Any]) -> Any:
    """Return the most frequent value, ties going to the value seen first.

    Args:
        labels (pl.Series | Sequence[Any]): Non-empty label values in row order.

    Returns:
        Any: The most frequent value.

    Raises:
        EmptySequenceError: If `labels` is empty.

    Examples:
        >>> majority_label(["no", "yes", "yes", "no"])
        'no'
    """
    series = labels if isinstance(labels, pl.Series) else pl.Series("labels", list(labels))
    if series.len() == 0:
        raise EmptySequenceError()
    counts = series.to_frame("label").group_by("label", maintain_order=True).len()
    best_label: Any = None
    best_count = 0
    for value, count in counts.iter_rows():
        if count > best_count:
            best_label, best_count = value, count
    return best_label


def select_split_attribute(df: pl.DataFrame, label: str) -> tuple[str, float]:
    """Pick the attribute column with the highest information gain.

    Ties go to the attribute that comes first in column order.

    Args:
        df (pl.DataFrame): Non-empty table with at least one attribute column.
        label (str): The label column name.

    Returns:
        tuple[str, float]: The winning attribute and its gain.

    Raises:
        LabelColumnNotFoundError: If `label` is absent from `df`.
        ValueError: If `df` has no attribute columns.
    """
    best_attribute: str | None = None
    best_gain = -1.0
    for attribute, attribute_gain in gains(df, label).items():
        if attribute_gain > best_gain:
            best_attribute, best_gain = attribute, attribute_gain
    if best_attribute is None:
        raise ValueError(f"Table has no attribute columns besides label '{label}'")
    return best_attribute, best_gain


# ---------------------------------------------------------------------------
# Public interface -- Prediction and rules
# ---------------------------------------------------------------------------


def predict(tree: DecisionTree, row: Mapping[str, Any]) -> Any:
    """Classify one row by walking the tree.

    Args:
        tree (DecisionTree): An induced tree.
        row (Mapping[str, Any]): Attribute name to value.

    Returns:
        Any: The label of the reached leaf, or `None` when no branch matches.
    """
    return tree.classify(row)


def predict_table(tree: DecisionTree, table: TableLike) -> pl.Series:
    """Classify every row of a table.

    Args:
        tree (DecisionTree): An induced tree.
        table (TableLike): Rows to classify; extra columns are ignored.

    Returns:
        pl.Series: One prediction per row, named `"prediction"`; null where no
            branch matches.
    """
    df = as_table(table)
    return pl.Series("prediction", [tree.classify(row) for row in df.iter_rows(named=True)])


def evaluate_accuracy(tree: DecisionTree, table: TableLike, label: str) -> float:
    """Return the fraction of rows whose label the tree predicts correctly.

    Args:
        tree (DecisionTree): An induced tree.
        table (TableLike): Labeled rows.
        label (str): The label column name.

    Returns:
        float: Accuracy between 0.0 and 1.0.

    Raises:
        LabelColumnNotFoundError: If `label` is absent from `table`.
        ValueError: If `table` has no rows.
    """
    df = as_table(table)
    validate_label_column(df, label)
    if df.height == 0:
        raise ValueError("Cannot evaluate accuracy on an empty table")
    correct = 0
    for row in df.iter_rows(named=True):
        prediction = tree.classify(row)
        if prediction is not None and prediction == row[label]:
            correct += 1
    return correct / df.height


def extract_rules(tree: DecisionTree) -> list[ClassificationRule]:
    """Read one rule per leaf off an induced tree.

    Args:
        tree (DecisionTree): An induced tree.

    Returns:
        list[ClassificationRule]: Rules in depth-first leaf order.
    """
    rules: list[ClassificationRule] = []
    _walk_tree(tree, path_predicates=[], rules=rules)
    return rules


# ---------------------------------------------------------------------------
# Public interface -- Pipeline orchestration
# ---------------------------------------------------------------------------


def build_induction_result(
    table: TableLike,
    label: str,
    *,
    attributes: Sequence[str] | None = None,
    settings: InductionSettings | None = None,
) -> InductionResult:
    """Validate a table, induce a tree, and summarize it.

    Args:
        table (TableLike): The training table.
        label (str): The label column name.
        attributes (Sequence[str] | None): Candidate attribute columns, in the
            order ties should be broken. `None` uses every non-label column.
        settings (InductionSettings | None): Settings forwarded to `induce`.

    Returns:
        InductionResult: The tree together with its rules, label entropy,
            root gains, training accuracy, depth, and leaf count.

    Raises:
        ValueError: On any validation failure (missing or duplicate columns,
            unequal column lengths, or an empty table).
    """
    try:
        df = select_attributes(as_table(table), label, attributes)
        if df.height == 0:
            raise ValueError("Cannot induce a tree from a table with no rows")
    except ValueError as exc:
        logger.warning("Induction input rejected", label=label, error_type=type(exc).__name__, reason=str(exc))
        raise

    root_gains = gains(df, label)
    tree = induce(label, df, AttributeUniverse.from_table(df), settings=settings)
    attributes_used = tree.attributes()
    attributes_unused = [col for col in attribute_columns(df, label) if col not in attributes_used]

    result = InductionResult(
        label=label,
        attributes_used=attributes_used,
        attributes_unused=attributes_unused,
        tree=tree,
        rules=extract_rules(tree),
        label_entropy=entropy(df[label]),
        root_gains=root_gains,
        metrics={"accuracy": evaluate_accuracy(tree, df, label)},
        sample_count=df.height,
        depth=tree.depth,
        leaf_count=tree.leaf_count,
    )
    logger.info(
        "Induction complete",
        label=label,
        rows=df.height,
        depth=result.depth,
        leaves=result.leaf_count,
        attributes_used=attributes_used,
    )
    return result


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _InductionContext:
    """Read-only values shared by every recursive induction call.

    Attributes:
        label (str): The label column name.
        universe (AttributeUniverse): Value domains captured from the full dataset.
        settings (InductionSettings): No-data label and missing-branch policy.
    """

    label: str
    universe: AttributeUniverse
    settings: InductionSettings


def _induce(df: pl.DataFrame, context: _InductionContext, depth: int) -> DecisionTree:
    """Build the subtree for one row subset.

    Args:
        df (pl.DataFrame): The row subset, owned by this call.
        context (_InductionContext): Shared read-only induction values.
        depth (int): Number of splits above this subset.

    Returns:
        DecisionTree: The subtree for `df`.
    """
    if df.height == 0:
        logger.trace("Empty subset", depth=depth)
        return Leaf(label=context.settings.no_data_label, no_data=True)

    labels = df[context.label]
    if labels.n_unique() == 1:
        logger.trace("Pure subset", depth=depth, rows=df.height)
        return Leaf(label=labels[0], samples=df.height)

    if df.width == 1:
        logger.trace("Attributes exhausted", depth=depth, rows=df.height)
        return Leaf(label=majority_label(labels), samples=df.height)

    attribute, attribute_gain = select_split_attribute(df, context.label)
    logger.log(SPLIT_LEVEL, "Split selected", attribute=attribute, gain=attribute_gain, depth=depth, rows=df.height)

    children: dict[Any, DecisionTree] = {}
    for value, child_df in partition_table(df, attribute, context.universe.domain(attribute)).items():
        if child_df.height == 0 and context.settings.missing_branches == "omit":
            continue
        children[value] = _induce(child_df, context, depth + 1)
    return InternalNode(attribute=attribute, children=children)


def _walk_tree(
    node: DecisionTree,
    *,
    path_predicates: list[Predicate],
    rules: list[ClassificationRule],
) -> None:
    """Recursively walk a tree node and accumulate leaf rules.

    Args:
        node (DecisionTree): The current node.
        path_predicates (list[Predicate]): Predicates from the root to `node`.
        rules (list[ClassificationRule]): Accumulator; leaf rules are appended in-place.
    """
    if isinstance(node, Leaf):
        rules.append(
            ClassificationRule(
                predicates=path_predicates,
                prediction=node.label,
                samples=node.samples,
                no_data=node.no_data,
            )
        )
        return

    for value, child in node.children.items():
        predicate = Predicate(variable=node.attribute, value=value)
        _walk_tree(child, path_predicates=[*path_predicates, predicate], rules=rules)
