"""Render an induced tree as indented text."""

from __future__ import annotations

import sys
from typing import TextIO

from id3tree.config import InductionSettings
from id3tree.tree.models import DecisionTree


def render_tree(tree: DecisionTree, *, settings: InductionSettings | None = None) -> str:
    """Render a tree depth-first, one node per line.

    The root shows its attribute (or label, for a single-leaf tree). Every
    other node shows `value --> child`, where `child` is the child's
    attribute or leaf label, indented one level deeper than its parent.

    Args:
        tree (DecisionTree): The tree to render.
        settings (InductionSettings | None): Supplies the indent width.

    Returns:
        str: The rendered tree, without a trailing newline.

    Examples:
        >>> from id3tree.tree.models import InternalNode, Leaf
        >>> tree = InternalNode(attribute="windy", children={"true": Leaf(label="no"), "false": Leaf(label="yes")})
        >>> print(render_tree(tree))
        windy
          true --> no
          false --> yes
    """
    indent_width = (settings or InductionSettings()).indent_width
    lines = [tree.display]
    _render_children(tree, level=1, indent_width=indent_width, lines=lines)
    return "\n".join(lines)


def print_tree(
    tree: DecisionTree,
    *,
    settings: InductionSettings | None = None,
    file: TextIO | None = None,
) -> None:
    """Write the rendered tree to a text stream.

    Args:
        tree (DecisionTree): The tree to print.
        settings (InductionSettings | None): Supplies the indent width.
        file (TextIO | None): Destination stream. Defaults to `sys.stdout`.
    """
    print(render_tree(tree, settings=settings), file=file or sys.stdout)


def _render_children(tree: DecisionTree, *, level: int, indent_width: int, lines: list[str]) -> None:
    if tree.kind == "leaf":
        return
    indent = " " * (indent_width * level)
    for value, child in tree.children.items():
        lines.append(f"{indent}{value} --> {child.display}")
        _render_children(child, level=level + 1, indent_width=indent_width, lines=lines)
