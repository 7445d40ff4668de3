"""id3tree: ID3 decision tree induction over categorical tables."""

from loguru import logger

from id3tree.config import InductionSettings
from id3tree.logging import PACKAGE_NAME, enable_logging
from id3tree.table import AttributeUniverse, build_table
from id3tree.tree import (
    DecisionTree,
    InductionResult,
    InternalNode,
    Leaf,
    build_induction_result,
    entropy,
    gain,
    induce,
)

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the id3tree package by default

__all__ = [
    "AttributeUniverse",
    "DecisionTree",
    "InductionResult",
    "InductionSettings",
    "InternalNode",
    "Leaf",
    "build_induction_result",
    "build_table",
    "enable_logging",
    "entropy",
    "gain",
    "induce",
]
