"""evalmatrix: Confusion matrices and classification metrics

Builds binary, multi-class and multi-label confusion matrices from
classifier predictions and derives recall, precision, F1 and accuracy.
"""

from .matrices import (
    AVAILABLE_MATRICES,
    BinaryConfusionMatrix,
    ClassMetrics,
    MultiClassConfusionMatrix,
    MultiLabelConfusionMatrix,
    get_matrix_class,
)
from .pipeline import Pipeline, evaluate_predictions

__version__ = "0.1.0"
__all__ = [
    "AVAILABLE_MATRICES",
    "BinaryConfusionMatrix",
    "ClassMetrics",
    "MultiClassConfusionMatrix",
    "MultiLabelConfusionMatrix",
    "Pipeline",
    "evaluate_predictions",
    "get_matrix_class",
]
