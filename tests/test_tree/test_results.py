"""Tests for prediction, rule extraction, and the build_induction_result pipeline."""

from __future__ import annotations

import loguru
import polars as pl
import pytest
from pytest_check import check

from id3tree.exceptions import ColumnsNotFoundError, DuplicateColumnsError, LabelColumnNotFoundError
from id3tree.tree.induction import (
    build_induction_result,
    evaluate_accuracy,
    extract_rules,
    induce,
    predict,
    predict_table,
)
from id3tree.tree.models import Leaf, Predicate


class TestPredict:
    """Tests for `predict` and `predict_table`."""

    def test_predict_follows_branches(self, weather_df: pl.DataFrame) -> None:
        """A sunny, humid day should be classified as not playable.

        Args:
            weather_df (pl.DataFrame): The weather table fixture.
        """
        # Arrange
        tree = induce("play", weather_df)

        # Act / Assert
        with check:
            assert predict(tree, {"outlook": "sunny", "humidity": "high", "windy": "false"}) == "no"
        with check:
            assert predict(tree, {"outlook": "rainy", "humidity": "high", "windy": "false"}) == "yes"
        with check:
            assert predict(tree, {"outlook": "overcast"}) == "yes"

    def test_predict_returns_none_for_unknown_value(self, weather_df: pl.DataFrame) -> None:
        """A value with no branch should yield None rather than a guess.

        Args:
            weather_df (pl.DataFrame): The weather table fixture.
        """
        # Arrange
        tree = induce("play", weather_df)

        # Act / Assert
        with check:
            assert predict(tree, {"outlook": "foggy"}) is None
        with check:
            assert predict(tree, {"humidity": "high"}) is None

    def test_predict_table_reproduces_training_labels(self, weather_df: pl.DataFrame) -> None:
        """The weather tree is consistent with its training data.

        Args:
            weather_df (pl.DataFrame): The weather table fixture.
        """
        # Arrange
        tree = induce("play", weather_df)

        # Act
        predictions = predict_table(tree, weather_df)

        # Assert
        with check:
            assert predictions.name == "prediction"
        with check:
            assert predictions.to_list() == weather_df["play"].to_list()

    def test_accuracy_counts_unmatched_rows_as_wrong(self, weather_df: pl.DataFrame) -> None:
        """Rows without a branch should lower accuracy.

        Args:
            weather_df (pl.DataFrame): The weather table fixture.
        """
        # Arrange
        tree = induce("play", weather_df)
        test_df = pl.DataFrame({
            "outlook": ["overcast", "foggy", "sunny", "rainy"],
            "humidity": ["high", "high", "normal", "high"],
            "windy": ["true", "false", "false", "true"],
            "play": ["yes", "yes", "no", "no"],
        })

        # Act
        accuracy = evaluate_accuracy(tree, test_df, "play")

        # Assert -- overcast and rainy/true are right; foggy has no branch; sunny/normal predicts yes
        assert accuracy == pytest.approx(0.5)

    def test_accuracy_on_empty_table_raises(self, weather_df: pl.DataFrame) -> None:
        """Accuracy is undefined without rows.

        Args:
            weather_df (pl.DataFrame): The weather table fixture.
        """
        # Arrange
        tree = induce("play", weather_df)

        # Act / Assert
        with pytest.raises(ValueError, match="empty table"):
            evaluate_accuracy(tree, weather_df.clear(), "play")


class TestExtractRules:
    """Tests for `extract_rules`."""

    def test_one_rule_per_leaf_in_depth_first_order(self, weather_df: pl.DataFrame) -> None:
        """Rules should follow leaves depth-first in branch order.

        Args:
            weather_df (pl.DataFrame): The weather table fixture.
        """
        # Arrange
        tree = induce("play", weather_df)

        # Act
        rules = extract_rules(tree)

        # Assert
        with check:
            assert len(rules) == tree.leaf_count == 5
        with check:
            assert [str(rule) for rule in rules] == [
                "IF outlook == sunny AND humidity == high THEN no",
                "IF outlook == sunny AND humidity == normal THEN yes",
                "IF outlook == overcast THEN yes",
                "IF outlook == rainy AND windy == false THEN yes",
                "IF outlook == rainy AND windy == true THEN no",
            ]

    def test_single_leaf_tree_has_unconditional_rule(self) -> None:
        """A one-leaf tree yields one rule without predicates."""
        # Act
        rules = extract_rules(Leaf(label="yes", samples=3))

        # Assert
        with check:
            assert len(rules) == 1
        with check:
            assert rules[0].predicates == []
        with check:
            assert str(rules[0]) == "IF TRUE THEN yes"

    def test_rules_carry_no_data_flag(self, defect_df: pl.DataFrame) -> None:
        """The rule for an unsupported branch should be flagged as no-data.

        Args:
            defect_df (pl.DataFrame): The defect table fixture.
        """
        # Act
        rules = extract_rules(induce("defect", defect_df))

        # Assert
        no_data_rules = [rule for rule in rules if rule.no_data]
        with check:
            assert len(no_data_rules) == 1
        with check:
            assert no_data_rules[0].predicates == [
                Predicate(variable="shift", value="day"),
                Predicate(variable="machine", value="m3"),
            ]


class TestBuildInductionResult:
    """Tests for `build_induction_result`: validation, induction, and summary."""

    def test_weather_result_summary(self, weather_df: pl.DataFrame) -> None:
        """The weather result should report the textbook tree and statistics.

        Args:
            weather_df (pl.DataFrame): The weather table fixture.
        """
        # Act
        result = build_induction_result(weather_df, "play")

        # Assert
        with check:
            assert result.label == "play"
        with check:
            assert result.attributes_used == ["outlook", "humidity", "windy"]
        with check:
            assert result.attributes_unused == ["temp"]
        with check:
            assert result.label_entropy == pytest.approx(0.940, abs=1e-3)
        with check:
            assert max(result.root_gains, key=result.root_gains.__getitem__) == "outlook"
        with check:
            assert result.metrics == {"accuracy": 1.0}
        with check:
            assert result.sample_count == 14
        with check:
            assert result.depth == 2
        with check:
            assert result.leaf_count == len(result.rules) == 5

    def test_attribute_subset_restricts_candidates(self, weather_df: pl.DataFrame) -> None:
        """Only the requested attributes should be considered for splits.

        Args:
            weather_df (pl.DataFrame): The weather table fixture.
        """
        # Act
        result = build_induction_result(weather_df, "play", attributes=["windy", "humidity"])

        # Assert
        with check:
            assert set(result.root_gains) == {"windy", "humidity"}
        with check:
            assert result.tree.attribute == "humidity"
        with check:
            assert "outlook" not in result.attributes_used

    def test_attribute_subset_order_breaks_ties(self) -> None:
        """Candidate order given by the caller should decide gain ties."""
        # Arrange
        df = pl.DataFrame({
            "a": ["x", "y", "x", "y"],
            "b": ["x", "y", "x", "y"],
            "label": ["1", "0", "1", "0"],
        })

        # Act
        result = build_induction_result(df, "label", attributes=["b", "a"])

        # Assert
        with check:
            assert result.tree.attribute == "b"
        with check:
            assert result.attributes_unused == ["a"]

    @pytest.mark.parametrize(
        ("attributes", "label", "error_type"),
        [
            (None, "golf", LabelColumnNotFoundError),
            (["outlook", "fog"], "play", ColumnsNotFoundError),
            (["outlook", "outlook"], "play", DuplicateColumnsError),
        ],
    )
    def test_invalid_inputs_raise_and_log_warning(
        self,
        weather_df: pl.DataFrame,
        log_records: list[loguru.Record],
        attributes: list[str] | None,
        label: str,
        error_type: type[ValueError],
    ) -> None:
        """Schema problems should be logged as a warning and then raised.

        Args:
            weather_df (pl.DataFrame): The weather table fixture.
            log_records (list[loguru.Record]): Captured id3tree log records.
            attributes (list[str] | None): Candidate attributes to request.
            label (str): Label column to request.
            error_type (type[ValueError]): Expected exception type.
        """
        with pytest.raises(error_type):
            build_induction_result(weather_df, label, attributes=attributes)

        warning_records = [r for r in log_records if r["level"].name == "WARNING"]
        with check:
            assert len(warning_records) == 1
        with check:
            assert warning_records[0]["extra"]["error_type"] == error_type.__name__

    def test_empty_table_raises(self, weather_df: pl.DataFrame) -> None:
        """A result needs at least one training row.

        Args:
            weather_df (pl.DataFrame): The weather table fixture.
        """
        with pytest.raises(ValueError, match="no rows"):
            build_induction_result(weather_df.clear(), "play")

    def test_success_logs_info(self, weather_df: pl.DataFrame, log_records: list[loguru.Record]) -> None:
        """A completed run should log one INFO record with the tree shape.

        Args:
            weather_df (pl.DataFrame): The weather table fixture.
            log_records (list[loguru.Record]): Captured id3tree log records.
        """
        # Act
        build_induction_result(weather_df, "play")

        # Assert
        info_records = [r for r in log_records if r["level"].name == "INFO"]
        with check:
            assert len(info_records) == 1
        with check:
            assert info_records[0]["extra"]["leaves"] == 5
