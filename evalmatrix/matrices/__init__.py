"""Confusion matrix variants for binary, multi-class and multi-label problems."""

from typing import Type

from .base import BaseConfusionMatrix, ClassMetrics
from .binary import BinaryConfusionMatrix
from .multiclass import MultiClassConfusionMatrix
from .multilabel import LabelCounts, MultiLabelConfusionMatrix
from .validation import LabelCardinality, validate_label_sets, validate_observations

# Matrix registry
AVAILABLE_MATRICES = {
    'binary': BinaryConfusionMatrix,
    'multiclass': MultiClassConfusionMatrix,
    'multilabel': MultiLabelConfusionMatrix,
}


def get_matrix_class(mode: str) -> Type[BaseConfusionMatrix]:
    """Get a confusion matrix class by classification mode.

    Parameters
    ----------
    mode : str
        One of 'binary', 'multiclass', 'multilabel'

    Returns
    -------
    matrix_class : type
        Confusion matrix class for the mode
    """
    if mode not in AVAILABLE_MATRICES:
        raise ValueError(
            f"Unknown mode '{mode}'. Available: {list(AVAILABLE_MATRICES.keys())}"
        )
    return AVAILABLE_MATRICES[mode]


__all__ = [
    'AVAILABLE_MATRICES',
    'BaseConfusionMatrix',
    'BinaryConfusionMatrix',
    'ClassMetrics',
    'LabelCardinality',
    'LabelCounts',
    'MultiClassConfusionMatrix',
    'MultiLabelConfusionMatrix',
    'get_matrix_class',
    'validate_label_sets',
    'validate_observations',
]
