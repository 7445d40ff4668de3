"""Decision tree sub-package: statistics, node models, and ID3 induction."""

from __future__ import annotations

from id3tree.tree.induction import (
    build_induction_result,
    evaluate_accuracy,
    extract_rules,
    induce,
    majority_label,
    predict,
    predict_table,
    select_split_attribute,
)
from id3tree.tree.models import (
    ClassificationRule,
    DecisionTree,
    InductionResult,
    InternalNode,
    Leaf,
    Predicate,
)
from id3tree.tree.statistics import conditional_info, entropy, gain, gains

__all__ = [
    "ClassificationRule",
    "DecisionTree",
    "InductionResult",
    "InternalNode",
    "Leaf",
    "Predicate",
    "build_induction_result",
    "conditional_info",
    "entropy",
    "evaluate_accuracy",
    "extract_rules",
    "gain",
    "gains",
    "induce",
    "majority_label",
    "predict",
    "predict_table",
    "select_split_attribute",
]
