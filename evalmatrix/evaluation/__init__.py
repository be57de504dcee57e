"""Metric math and visualization helpers."""

from .scores import accuracy, f1_score, precision, recall
from .visualization import plot_confusion_matrix, plot_class_metrics

__all__ = [
    'accuracy',
    'f1_score',
    'precision',
    'recall',
    'plot_confusion_matrix',
    'plot_class_metrics',
]
