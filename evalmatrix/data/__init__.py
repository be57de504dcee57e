"""Data utilities for loading, column detection and generating predictions."""

from .column_config import (
    DEFAULT_COUNT_COLUMN,
    detect_column,
    get_actual_column,
    get_predicted_column,
    list_columns,
)
from .loader import load_predictions, frame_to_label_sets, label_universe, split_labels
from .synthetic import generate_synthetic_predictions, generate_synthetic_multilabel

__all__ = [
    'DEFAULT_COUNT_COLUMN',
    'detect_column',
    'get_actual_column',
    'get_predicted_column',
    'list_columns',
    'load_predictions',
    'frame_to_label_sets',
    'label_universe',
    'split_labels',
    'generate_synthetic_predictions',
    'generate_synthetic_multilabel',
]
