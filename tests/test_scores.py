"""
Tests for the scalar metric math
"""
import pytest

from evalmatrix.evaluation.scores import accuracy, f1_score, precision, recall


class TestRecallPrecision:
    """Tests for recall() and precision()"""

    def test_recall(self):
        """Test recall is TP / (TP + FN)"""
        assert recall(80, 20) == pytest.approx(0.8)

    def test_precision(self):
        """Test precision is TP / (TP + FP)"""
        assert precision(1, 1) == pytest.approx(0.5)

    def test_zero_denominator_falls_back_to_zero(self):
        """Test zero denominators give 0.0 by default"""
        assert recall(0, 0) == 0.0
        assert precision(0, 0) == 0.0

    def test_zero_denominator_undefined(self):
        """Test zero_division=None marks the value as undefined"""
        assert recall(0, 0, zero_division=None) is None
        assert precision(0, 0, zero_division=None) is None

    def test_zero_true_positives_with_misses_is_defined(self):
        """Test a non-zero denominator is never undefined"""
        assert recall(0, 1, zero_division=None) == 0.0
        assert precision(0, 3, zero_division=None) == 0.0

    def test_negative_counts_rejected(self):
        """Test negative counts raise ValueError"""
        with pytest.raises(ValueError):
            recall(-1, 2)
        with pytest.raises(ValueError):
            precision(1, -2)


class TestF1Score:
    """Tests for f1_score()"""

    def test_harmonic_mean(self):
        """Test F1 of precision 0.5 and recall 1.0 is 2/3"""
        assert f1_score(0.5, 1.0) == pytest.approx(2 / 3, abs=0.001)

    def test_zero_sum(self):
        """Test F1 is 0.0 when precision and recall are both zero"""
        assert f1_score(0.0, 0.0) == 0.0

    def test_undefined_propagates(self):
        """Test an undefined input gives an undefined F1"""
        assert f1_score(None, 1.0) is None
        assert f1_score(0.5, None) is None


class TestAccuracy:
    """Tests for accuracy()"""

    def test_accuracy(self):
        """Test accuracy is correct / total"""
        assert accuracy(160, 200) == pytest.approx(0.8)

    def test_empty_total(self):
        """Test an empty total gives 0.0"""
        assert accuracy(0, 0) == 0.0

    def test_correct_exceeding_total(self):
        """Test correct > total raises ValueError"""
        with pytest.raises(ValueError):
            accuracy(3, 2)
