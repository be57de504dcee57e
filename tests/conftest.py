"""
Shared pytest fixtures for evalmatrix tests
"""
import matplotlib
matplotlib.use("Agg")

import pandas as pd
import pytest


@pytest.fixture
def make_count_frame():
    """Build a pre-aggregated prediction table from a square count grid"""
    def _make(matrix, labels):
        rows = []
        for actual_index, actual in enumerate(labels):
            for predicted_index, predicted in enumerate(labels):
                count = matrix[actual_index][predicted_index]
                if count > 0:
                    rows.append({"Predicted": predicted, "True Label": actual, "Count": count})
        return pd.DataFrame(rows, columns=["Predicted", "True Label", "Count"])
    return _make


@pytest.fixture
def three_class_frame(make_count_frame):
    """Diagonal-heavy bird/cat/dog table, 100 items per class"""
    matrix = [
        [80, 10, 10],
        [10, 80, 10],
        [10, 10, 80],
    ]
    return make_count_frame(matrix, ["bird", "cat", "dog"])


@pytest.fixture
def binary_frame():
    """cat vs dog table with TP=80, FP=20, FN=20, TN=80 (dog is positive)"""
    return pd.DataFrame({
        "Predicted": ["dog", "dog", "cat", "cat"],
        "True Label": ["dog", "cat", "dog", "cat"],
        "Count": [80, 20, 20, 80],
    })


@pytest.fixture
def half_correct_predictions():
    """Multi-label pairs: one hit, one miss, one over-prediction"""
    return [
        ({"dog"}, {"dog"}),
        ({"cat"}, set()),
        ({"horse"}, {"horse", "dog"}),
    ]


@pytest.fixture
def animal_labels():
    """Multi-label universe, deliberately unsorted"""
    return ["dog", "cat", "horse"]
