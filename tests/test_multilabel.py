"""
Tests for MultiLabelConfusionMatrix
"""
import math

import pytest

from evalmatrix.matrices import LabelCounts, MultiLabelConfusionMatrix


def _by_label(cm):
    return {m.label: m for m in cm.calculate_metrics()}


class TestMultiLabelCounts:
    """Tests for the per-label TP/FP/FN counters"""

    def test_counts(self, half_correct_predictions, animal_labels):
        """Test each label is counted independently"""
        cm = MultiLabelConfusionMatrix(half_correct_predictions, labels=animal_labels)

        assert cm.get_label_counts("dog") == LabelCounts(1, 1, 0)
        assert cm.get_label_counts("cat") == LabelCounts(0, 0, 1)
        assert cm.get_label_counts("horse") == LabelCounts(1, 0, 0)
        assert cm.n_observations == 3

    def test_unknown_label_has_no_counts(self, half_correct_predictions, animal_labels):
        """Test asking for a label outside the universe returns None"""
        cm = MultiLabelConfusionMatrix(half_correct_predictions, labels=animal_labels)

        assert cm.get_label_counts("parrot") is None

    def test_labels_outside_universe_ignored(self):
        """Test labels missing from the universe never reach the counters"""
        predictions = [({"dog", "parrot"}, {"dog", "parrot"}), ({"cat"}, {"parrot"})]
        cm = MultiLabelConfusionMatrix(predictions, labels=["cat", "dog"])

        assert set(cm.counts) == {"cat", "dog"}
        assert cm.get_label_counts("dog") == LabelCounts(1, 0, 0)
        assert cm.get_label_counts("cat") == LabelCounts(0, 0, 1)

    def test_counts_view_is_a_copy(self, half_correct_predictions, animal_labels):
        """Test mutating the counts mapping leaves the matrix untouched"""
        cm = MultiLabelConfusionMatrix(half_correct_predictions, labels=animal_labels)
        counts = cm.counts
        counts["dog"] = LabelCounts(100, 100, 100)

        assert cm.get_label_counts("dog") == LabelCounts(1, 1, 0)

    def test_generator_input(self, animal_labels):
        """Test observations may be a one-shot iterator"""
        predictions = (({"dog"}, {"dog"}) for _ in range(4))
        cm = MultiLabelConfusionMatrix(predictions, labels=animal_labels)

        assert cm.n_observations == 4
        assert cm.get_label_counts("dog").true_positives == 4

    def test_malformed_observations_skipped(self):
        """Test entries that are not two label collections are dropped"""
        predictions = [
            ({"a"}, {"a"}),
            (None, {"a"}),
            ({"a"},),
            42,
            ({"a"}, set()),
        ]
        cm = MultiLabelConfusionMatrix(predictions, labels=["a"])

        assert cm.n_observations == 2
        assert cm.get_label_counts("a") == LabelCounts(1, 0, 1)

    def test_duplicate_universe_labels_collapse(self):
        """Test a repeated universe label is counted once"""
        cm = MultiLabelConfusionMatrix([({"dog"}, {"dog"})], labels=["dog", "dog", "cat"])

        assert cm.labels == ("dog", "cat")
        assert cm.get_label_counts("dog").true_positives == 1


class TestMultiLabelMetrics:
    """Tests for the undefined-value metric policy"""

    def test_never_predicted_label(self, half_correct_predictions, animal_labels):
        """Test a missed label has recall 0.0 but undefined precision and F1"""
        cat = _by_label(MultiLabelConfusionMatrix(half_correct_predictions, animal_labels))["cat"]

        assert cat.recall == 0.0
        assert cat.precision is None
        assert cat.f1 is None

    def test_over_predicted_label(self, half_correct_predictions, animal_labels):
        """Test TP=1, FP=1 gives recall 1.0, precision 0.5, F1 2/3"""
        dog = _by_label(MultiLabelConfusionMatrix(half_correct_predictions, animal_labels))["dog"]

        assert dog.recall == pytest.approx(1.0)
        assert dog.precision == pytest.approx(0.5)
        assert dog.f1 == pytest.approx(2 / 3, abs=0.001)

    def test_label_never_true(self):
        """Test a label only ever predicted has undefined recall"""
        cm = MultiLabelConfusionMatrix([({"cat"}, {"cat", "dog"})], labels=["cat", "dog"])
        dog = _by_label(cm)["dog"]

        assert dog.recall is None
        assert dog.precision == 0.0
        assert dog.f1 is None

    def test_metrics_sorted_by_label(self, half_correct_predictions, animal_labels):
        """Test metrics come back in label-name order"""
        cm = MultiLabelConfusionMatrix(half_correct_predictions, labels=animal_labels)

        assert [m.label for m in cm.calculate_metrics()] == ["cat", "dog", "horse"]

    def test_no_observations(self, animal_labels):
        """Test an empty observation list leaves every metric undefined"""
        cm = MultiLabelConfusionMatrix([], labels=animal_labels)

        for m in cm.calculate_metrics():
            assert m.recall is None
            assert m.precision is None
            assert m.f1 is None
        assert cm.average_metrics() == {"recall": None, "precision": None, "f1": None}

    def test_empty_universe(self, half_correct_predictions):
        """Test an empty label universe yields no metrics"""
        cm = MultiLabelConfusionMatrix(half_correct_predictions, labels=[])

        assert cm.calculate_metrics() == []
        assert cm.average_metrics() is None
        assert cm.metrics_frame().empty

    def test_average_skips_undefined(self, half_correct_predictions, animal_labels):
        """Test macro averages ignore undefined values"""
        cm = MultiLabelConfusionMatrix(half_correct_predictions, labels=animal_labels)
        averages = cm.average_metrics()

        assert averages["recall"] == pytest.approx(2 / 3)
        assert averages["precision"] == pytest.approx(0.75)
        assert averages["f1"] == pytest.approx(5 / 6)

    def test_metrics_frame_marks_undefined_as_nan(self, half_correct_predictions, animal_labels):
        """Test undefined values become NaN in the metrics table"""
        frame = MultiLabelConfusionMatrix(half_correct_predictions, animal_labels).metrics_frame()

        assert list(frame.index) == ["cat", "dog", "horse"]
        assert math.isnan(frame.loc["cat", "precision"])
        assert frame.loc["dog", "support"] == 1
        assert frame.loc["dog", "false_positives"] == 1


class TestMultiLabelConfiguration:
    """Tests for the prediction threshold and rendering"""

    def test_default_threshold(self, animal_labels):
        """Test the threshold defaults to 0.5"""
        assert MultiLabelConfusionMatrix([], animal_labels).prediction_threshold == 0.5

    def test_threshold_does_not_change_counts(self, half_correct_predictions, animal_labels):
        """Test the threshold is recorded but never applied"""
        low = MultiLabelConfusionMatrix(half_correct_predictions, animal_labels, 0.1)
        high = MultiLabelConfusionMatrix(half_correct_predictions, animal_labels, 0.9)

        assert low.counts == high.counts
        assert high.prediction_threshold == 0.9

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_out_of_range(self, animal_labels, threshold):
        """Test thresholds outside [0, 1] raise ValueError"""
        with pytest.raises(ValueError):
            MultiLabelConfusionMatrix([], animal_labels, prediction_threshold=threshold)

    def test_graph_layout(self, half_correct_predictions, animal_labels):
        """Test one row per label with true positives and actual totals"""
        cm = MultiLabelConfusionMatrix(half_correct_predictions, labels=animal_labels)

        assert cm.get_matrix_graph() == (
            "Label\tTrue Positives\tTotal Actual\n"
            "cat\t0\t1\n"
            "dog\t1\t1\n"
            "horse\t1\t1\n"
        )
