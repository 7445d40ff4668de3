"""Pydantic tree node models, rule models, and the induction result model."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

# ---------------------------------------------------------------------------
# Public models -- Tree nodes
# ---------------------------------------------------------------------------


class Leaf(BaseModel):
    """Terminal tree node holding a single decided label.

    Attributes:
        kind (Literal["leaf"]): Discriminator field; always `"leaf"`.
        label (Any): The decided label value, or the no-data sentinel label.
        samples (int): Number of training rows that reached this leaf.
        no_data (bool): `True` when the leaf was built from an empty row
            subset and `label` is the no-data sentinel.

    Examples:
        >>> leaf = Leaf(label="yes", samples=4)
        >>> leaf.depth, leaf.leaf_count
        (0, 1)
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["leaf"] = Field(default="leaf", description='Discriminator field. Always "leaf".')
    label: Any = Field(description="Decided label value, or the no-data sentinel label.")
    samples: int = Field(default=0, ge=0, description="Number of training rows that reached this leaf.")
    no_data: bool = Field(default=False, description="Whether the leaf was built from an empty row subset.")

    @model_validator(mode="after")
    def _validate_no_data_has_no_samples(self) -> Leaf:
        """Validate that a no-data leaf is not backed by any training rows.

        Returns:
            Leaf: The validated model instance.

        Raises:
            ValueError: If `no_data` is set while `samples` is positive.
        """
        if self.no_data and self.samples > 0:
            raise ValueError(f"no-data leaf cannot have samples, got {self.samples}")
        return self

    @property
    def display(self) -> str:
        """Text shown for this node when rendering a tree."""
        return str(self.label)

    @property
    def depth(self) -> int:
        """Number of splits between this node and its deepest leaf."""
        return 0

    @property
    def leaf_count(self) -> int:
        """Number of leaves under this node, itself included."""
        return 1

    def leaves(self) -> Iterator[Leaf]:
        """Yield every leaf under this node, depth-first.

        Yields:
            Leaf: This leaf.
        """
        yield self

    def attributes(self) -> list[str]:
        """Return the split attributes used under this node.

        Returns:
            list[str]: Always empty for a leaf.
        """
        return []

    def classify(self, row: Mapping[str, Any]) -> Any:
        """Return this leaf's label.

        Args:
            row (Mapping[str, Any]): Attribute name to value; unused by a leaf.

        Returns:
            Any: The leaf label.
        """
        return self.label


class InternalNode(BaseModel):
    """Tree node that splits rows on the value of one attribute.

    Attributes:
        kind (Literal["node"]): Discriminator field; always `"node"`.
        attribute (str): Name of the splitting attribute.
        children (Mapping[Any, DecisionTree]): Read-only map of attribute value to child subtree.
            Keys are drawn from the attribute's universe; branches without
            supporting rows are either no-data leaves or absent, depending
            on the missing-branch policy used for induction.

    Examples:
        >>> node = InternalNode(
        ...     attribute="windy",
        ...     children={"true": Leaf(label="no", samples=2), "false": Leaf(label="yes", samples=3)},
        ... )
        >>> node.classify({"windy": "false"})
        'yes'
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["node"] = Field(default="node", description='Discriminator field. Always "node".')
    attribute: str = Field(description="Name of the splitting attribute.")
    children: Mapping[Any, DecisionTree] = Field(description="Attribute value to child subtree.")

    @field_validator("children", mode="after")
    @classmethod
    def _freeze_children(cls, value: Mapping[Any, DecisionTree]) -> Mapping[Any, DecisionTree]:
        """Wrap the validated children in a read-only view.

        Args:
            value (Mapping[Any, DecisionTree]): The validated children.

        Returns:
            Mapping[Any, DecisionTree]: A read-only mapping over a private copy.
        """
        return MappingProxyType(dict(value))

    @field_serializer("children")
    def _serialize_children(self, value: Mapping[Any, DecisionTree]) -> dict[Any, Any]:
        return dict(value)

    @property
    def display(self) -> str:
        """Text shown for this node when rendering a tree."""
        return self.attribute

    @property
    def depth(self) -> int:
        """Number of splits between this node and its deepest leaf."""
        return 1 + max((child.depth for child in self.children.values()), default=0)

    @property
    def leaf_count(self) -> int:
        """Number of leaves under this node."""
        return sum(child.leaf_count for child in self.children.values())

    def leaves(self) -> Iterator[Leaf]:
        """Yield every leaf under this node, depth-first in child order.

        Yields:
            Leaf: Each leaf of the subtree.
        """
        for child in self.children.values():
            yield from child.leaves()

    def attributes(self) -> list[str]:
        """Return the split attributes used under this node, in depth-first first-use order.

        Returns:
            list[str]: Distinct attribute names, this node's attribute first.
        """
        seen = [self.attribute]
        for child in self.children.values():
            seen.extend(name for name in child.attributes() if name not in seen)
        return seen

    def classify(self, row: Mapping[str, Any]) -> Any:
        """Walk the subtree for one row and return the decided label.

        Args:
            row (Mapping[str, Any]): Attribute name to value.

        Returns:
            Any: The label of the reached leaf, or `None` when the row's value
                has no branch or the row lacks the splitting attribute.
        """
        if self.attribute not in row:
            return None
        child = self.children.get(row[self.attribute])
        if child is None:
            return None
        return child.classify(row)


# Use this alias wherever a node of either kind is accepted; Pydantic selects the model from `kind`.
DecisionTree = Annotated[Leaf | InternalNode, Field(discriminator="kind")]

InternalNode.model_rebuild()


# ---------------------------------------------------------------------------
# Public models -- Rules and results
# ---------------------------------------------------------------------------


class Predicate(BaseModel):
    """A single equality condition on one attribute.

    Attributes:
        variable (str): Attribute the condition applies to, e.g. `"outlook"`.
        value (Any): The attribute value the branch was taken for.

    Examples:
        >>> p = Predicate(variable="outlook", value="sunny")
        >>> str(p)
        'outlook == sunny'
        >>> p.eval("rainy")
        False
    """

    model_config = ConfigDict(frozen=True)

    variable: str = Field(description="Attribute the condition applies to, e.g. 'outlook'.")
    value: Any = Field(description="The attribute value the branch was taken for.")

    def __str__(self) -> str:
        """Return a human-readable representation of this predicate.

        Returns:
            str: The predicate as `"<variable> == <value>"`.
        """
        return f"{self.variable} == {self.value}"

    def eval(self, x: Any) -> bool:
        """Evaluate this predicate against an attribute value.

        Args:
            x (Any): The attribute value to test.

        Returns:
            bool: `True` if `x` equals the predicate value.
        """
        return x == self.value


class ClassificationRule(BaseModel):
    """A decision rule read off one leaf of an induced tree.

    Attributes:
        predicates (list[Predicate]): Conditions along the path from the root
            to the leaf. Empty for a single-leaf tree.
        prediction (Any): The leaf label.
        samples (int): Number of training rows that reached the leaf.
        no_data (bool): Whether the leaf is a no-data leaf.
    """

    predicates: list[Predicate] = Field(description="Conditions along the path from the root to the leaf.")
    prediction: Any = Field(description="Label decided at the leaf.")
    samples: int = Field(ge=0, description="Number of training rows that reached the leaf.")
    no_data: bool = Field(default=False, description="Whether the leaf is a no-data leaf.")

    def __str__(self) -> str:
        """Return the rule as `IF <predicates> THEN <prediction>`.

        Returns:
            str: Human-readable rule text.
        """
        condition = " AND ".join(str(predicate) for predicate in self.predicates) or "TRUE"
        return f"IF {condition} THEN {self.prediction}"

    def matches(self, row: Mapping[str, Any]) -> bool:
        """Return whether every predicate holds for a row.

        Args:
            row (Mapping[str, Any]): Attribute name to value.

        Returns:
            bool: `True` if the row satisfies every predicate.
        """
        return all(p.variable in row and p.eval(row[p.variable]) for p in self.predicates)


class InductionResult(BaseModel):
    """Structured output of a full induction run.

    Attributes:
        label (str): Label column the tree predicts.
        attributes_used (list[str]): Attributes that appear as a split
            somewhere in the tree, in first-use order.
        attributes_unused (list[str]): Candidate attributes never chosen for
            a split.
        tree (DecisionTree): The induced tree.
        rules (list[ClassificationRule]): One rule per leaf.
        label_entropy (float): Entropy of the label column, in bits.
        root_gains (dict[str, float]): Information gain of every candidate
            attribute on the full table, in column order.
        metrics (dict[str, float]): Training metrics, e.g. `{"accuracy": 1.0}`.
        sample_count (int): Number of training rows.
        depth (int): Depth of the induced tree.
        leaf_count (int): Number of leaves of the induced tree.
    """

    label: str = Field(description="Label column the tree predicts.")
    attributes_used: list[str] = Field(description="Attributes used as a split, in first-use order.")
    attributes_unused: list[str] = Field(description="Candidate attributes never chosen for a split.")
    tree: DecisionTree = Field(description="The induced tree.")
    rules: list[ClassificationRule] = Field(description="One rule per leaf of the tree.")
    label_entropy: float = Field(ge=0.0, description="Entropy of the label column, in bits.")
    root_gains: dict[str, float] = Field(description="Information gain of every candidate attribute on the full table.")
    metrics: dict[str, float] = Field(description='Training metrics, e.g. {"accuracy": 1.0}.')
    sample_count: int = Field(ge=1, description="Number of training rows.")
    depth: int = Field(ge=0, description="Depth of the induced tree.")
    leaf_count: int = Field(ge=1, description="Number of leaves of the induced tree.")

    @model_validator(mode="after")
    def _validate_rules_count_matches_leaf_count(self) -> InductionResult:
        """Validate that the number of rules equals the number of leaves.

        Returns:
            InductionResult: The validated model instance.

        Raises:
            ValueError: If `len(rules)` does not equal `leaf_count`.
        """
        if len(self.rules) != self.leaf_count:
            raise ValueError(f"rules length ({len(self.rules)}) must equal leaf_count ({self.leaf_count})")
        return self

    @model_validator(mode="after")
    def _validate_attribute_partition(self) -> InductionResult:
        """Validate that used and unused attributes split the candidate set exactly.

        Returns:
            InductionResult: The validated model instance.

        Raises:
            ValueError: If an attribute is both used and unused, or the two
                lists together differ from the keys of `root_gains`.
        """
        used = set(self.attributes_used)
        unused = set(self.attributes_unused)
        errors: list[str] = []
        if used & unused:
            errors.append(f"attributes both used and unused: {sorted(used & unused)}")
        if used | unused != set(self.root_gains):
            errors.append(f"attributes {sorted(used | unused)} do not match root_gains keys {sorted(self.root_gains)}")
        if errors:
            raise ValueError("; ".join(errors))
        return self
