"""Demonstrates how to enable logging while inducing a tree.

id3tree logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.

Key concepts shown here:

- ``level``: the custom ``SPLIT`` level (numeric value 15, between DEBUG and
  INFO) shows every chosen split attribute with its gain, depth and row count.
- ``log_format``: ``"full"`` adds the module and line number to each line.
- Error logging: rejected inputs are logged as warnings before being raised.
"""

import polars as pl

from id3tree import build_induction_result, enable_logging
from id3tree.exceptions import LabelColumnNotFoundError
from id3tree.rendering import print_tree

weather = pl.DataFrame(
    [
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
    ],
    schema=["outlook", "temp", "humidity", "windy", "play"],
    orient="row",
)

with enable_logging(level="SPLIT", log_format="full"):
    result = build_induction_result(weather, "play")

    print()
    print_tree(result.tree)
    print(f"\nEntropy: {result.label_entropy:.3f}")
    for rule in result.rules:
        print(rule)

    # Try an error to show error logging
    try:
        build_induction_result(weather, "golf")
    except LabelColumnNotFoundError as exc:
        print(f"\nRejected: {exc}")

# Logging automatically disabled here
