"""
Tests for BinaryConfusionMatrix
"""
import numpy as np
import pandas as pd
import pytest

from evalmatrix.matrices import BinaryConfusionMatrix


class TestBinaryMetrics:
    """Tests for metrics of a directly constructed matrix"""

    def test_perfect_score(self):
        """Test all metrics are 1.0 without any error"""
        cm = BinaryConfusionMatrix(
            true_positive=100, false_positive=0, false_negative=0, true_negative=100
        )

        assert cm.recall == 1.0
        assert cm.precision == 1.0
        assert cm.accuracy == 1.0
        assert cm.f1_score == 1.0

    def test_balanced_confusion(self):
        """Test 80/20/20/80 gives 0.8 everywhere"""
        cm = BinaryConfusionMatrix(
            true_positive=80, false_positive=20, false_negative=20, true_negative=80
        )

        assert cm.recall == pytest.approx(0.8, abs=0.001)
        assert cm.precision == pytest.approx(0.8, abs=0.001)
        assert cm.accuracy == pytest.approx(0.8, abs=0.001)
        assert cm.f1_score == pytest.approx(0.8, abs=0.001)

    def test_half_correct(self):
        """Test 50/50/50/50 gives 0.5 everywhere"""
        cm = BinaryConfusionMatrix(50, 50, 50, 50)

        assert cm.recall == pytest.approx(0.5)
        assert cm.precision == pytest.approx(0.5)
        assert cm.accuracy == pytest.approx(0.5)
        assert cm.f1_score == pytest.approx(0.5)

    def test_zero_division(self):
        """Test an all-zero matrix falls back to 0.0"""
        cm = BinaryConfusionMatrix(0, 0, 0, 0)

        assert cm.recall == 0.0
        assert cm.precision == 0.0
        assert cm.accuracy == 0.0
        assert cm.f1_score == 0.0

    def test_matrix_layout(self):
        """Test the grid is indexed [actual][predicted] with positive at index 1"""
        cm = BinaryConfusionMatrix(
            true_positive=4, false_positive=3, false_negative=2, true_negative=1
        )

        np.testing.assert_array_equal(cm.matrix, [[1, 3], [2, 4]])
        assert cm.total == 10

    def test_negative_count_rejected(self):
        """Test negative counts raise ValueError"""
        with pytest.raises(ValueError):
            BinaryConfusionMatrix(1, -1, 0, 0)

    def test_labels_must_differ(self):
        """Test two identical labels raise ValueError"""
        with pytest.raises(ValueError):
            BinaryConfusionMatrix(1, 1, 1, 1, labels=("cat", "cat"))

    def test_calculate_metrics_reports_positive_class(self):
        """Test calculate_metrics returns the positive class only"""
        cm = BinaryConfusionMatrix(80, 20, 20, 80, labels=("cat", "dog"))
        metrics = cm.calculate_metrics()

        assert len(metrics) == 1
        assert metrics[0].label == "dog"
        assert metrics[0].recall == pytest.approx(0.8)
        assert metrics[0].support == 100


class TestBinaryFromFrame:
    """Tests for building a BinaryConfusionMatrix from a table"""

    def test_counts_from_aggregated_frame(self, binary_frame):
        """Test TP/FP/FN/TN come from the Count column"""
        cm = BinaryConfusionMatrix.from_frame(binary_frame, "Predicted", "True Label")

        assert cm is not None
        assert cm.labels == ("cat", "dog")
        assert cm.positive_label == "dog"
        assert cm.negative_label == "cat"
        assert cm.true_positive == 80
        assert cm.false_positive == 20
        assert cm.false_negative == 20
        assert cm.true_negative == 80

    def test_positive_class_sorts_last(self):
        """Test the label sorting last is positive regardless of row order"""
        frame = pd.DataFrame({
            "Predicted": ["yes", "no", "yes"],
            "True Label": ["yes", "no", "no"],
        })
        cm = BinaryConfusionMatrix.from_frame(frame, "Predicted", "True Label")

        assert cm.positive_label == "yes"
        assert cm.true_positive == 1
        assert cm.false_positive == 1
        assert cm.true_negative == 1
        assert cm.false_negative == 0

    def test_integer_labels_with_missing_cell(self):
        """Test integer class ids survive a skipped row with a missing label"""
        frame = pd.DataFrame({
            "Predicted": [0, 1, 1, 0],
            "True Label": [0, 1, np.nan, 1],
        })
        cm = BinaryConfusionMatrix.from_frame(frame, "Predicted", "True Label")

        assert cm is not None
        assert cm.positive_label == "1"
        assert cm.true_positive == 1
        assert cm.false_negative == 1
        assert cm.true_negative == 1
        assert cm.false_positive == 0

    def test_from_pairs(self):
        """Test row-per-item pairs each count once"""
        pairs = [("cat", "cat")] * 3 + [("dog", "cat")] * 2 + [("dog", "dog")] * 5
        cm = BinaryConfusionMatrix.from_pairs(pairs)

        assert cm.true_positive == 5
        assert cm.false_negative == 2
        assert cm.true_negative == 3
        assert cm.false_positive == 0
        assert cm.accuracy == pytest.approx(0.8)

    def test_empty_frame(self):
        """Test an empty table builds nothing"""
        frame = pd.DataFrame({"Predicted": [], "True Label": [], "Count": []})

        assert BinaryConfusionMatrix.from_frame(frame, "Predicted", "True Label") is None

    def test_missing_column(self, binary_frame):
        """Test a missing role column builds nothing"""
        assert BinaryConfusionMatrix.from_frame(binary_frame, "Prediction", "True Label") is None

    def test_single_class(self):
        """Test one ground-truth label builds nothing"""
        pairs = [("cat", "cat"), ("cat", "cat")]

        assert BinaryConfusionMatrix.from_pairs(pairs) is None

    def test_three_classes(self):
        """Test three ground-truth labels build nothing"""
        pairs = [("cat", "cat"), ("dog", "dog"), ("bird", "bird")]

        assert BinaryConfusionMatrix.from_pairs(pairs) is None

    def test_unknown_predicted_label(self):
        """Test a predicted label never seen as ground truth builds nothing"""
        pairs = [("cat", "cat"), ("dog", "bird")]

        assert BinaryConfusionMatrix.from_pairs(pairs) is None

    def test_predicted_subset_is_accepted(self):
        """Test predictions covering only one of the two classes are valid"""
        pairs = [("cat", "cat"), ("dog", "cat")]
        cm = BinaryConfusionMatrix.from_pairs(pairs)

        assert cm is not None
        assert cm.true_positive == 0
        assert cm.false_negative == 1
        assert cm.precision == 0.0


class TestBinaryRendering:
    """Tests for get_matrix_graph()"""

    def test_graph_layout(self):
        """Test header row plus one row per actual label"""
        cm = BinaryConfusionMatrix(80, 20, 10, 90, labels=("cat", "dog"))

        assert cm.get_matrix_graph() == (
            "Actual\\Predicted | cat | dog\n"
            "cat | 90 | 20\n"
            "dog | 10 | 80\n"
        )

    def test_matrix_is_read_only(self):
        """Test the exposed grid cannot be modified"""
        cm = BinaryConfusionMatrix(1, 2, 3, 4)

        with pytest.raises(ValueError):
            cm.matrix[0, 0] = 99
