"""Generate synthetic prediction tables for testing."""

import logging
from typing import Optional, List
import numpy as np
import pandas as pd

from .column_config import DEFAULT_ACTUAL_COLUMNS, DEFAULT_COUNT_COLUMN, DEFAULT_PREDICTED_COLUMNS
from .loader import DEFAULT_LABEL_SEPARATOR

logger = logging.getLogger(__name__)

PREDICTED_COLUMN = DEFAULT_PREDICTED_COLUMNS[0]
ACTUAL_COLUMN = DEFAULT_ACTUAL_COLUMNS[0]


def generate_synthetic_predictions(
    n_samples: int = 1000,
    n_classes: int = 3,
    accuracy: float = 0.8,
    labels: Optional[List[str]] = None,
    aggregate: bool = False,
    seed: int = 42,
) -> pd.DataFrame:
    """Generate (actual, predicted) pairs from a classifier of known accuracy.

    Every class appears at least once as ground truth and as a prediction,
    so the table always yields a valid multi-class (or, with two classes,
    binary) confusion matrix.

    Parameters
    ----------
    n_samples : int, default=1000
        Number of items
    n_classes : int, default=3
        Number of classes (ignored when ``labels`` is given)
    accuracy : float, default=0.8
        Probability that an item is predicted correctly
    labels : list of str, optional
        Class names. Default: Class_1 ... Class_n
    aggregate : bool, default=False
        If True, collapse identical pairs into one row with a 'Count'
        column (the pre-aggregated layout of validation reports)
    seed : int, default=42
        Random seed for reproducibility

    Returns
    -------
    frame : pd.DataFrame
        Columns 'True Label', 'Predicted' and, if aggregated, 'Count'

    Examples
    --------
    >>> # Row-per-item table
    >>> df = generate_synthetic_predictions(n_samples=500, n_classes=4)
    >>>
    >>> # Aggregated table for a binary problem
    >>> df = generate_synthetic_predictions(labels=['cat', 'dog'], aggregate=True)
    """
    if labels is None:
        labels = [f"Class_{i+1}" for i in range(n_classes)]
    labels = list(labels)

    if len(labels) < 2:
        raise ValueError(f"Need at least 2 classes, got {len(labels)}")
    if n_samples < 2 * len(labels):
        raise ValueError(
            f"n_samples must be at least {2 * len(labels)} for {len(labels)} classes"
        )
    if not 0.0 <= accuracy <= 1.0:
        raise ValueError(f"accuracy must be within [0, 1], got {accuracy}")

    np.random.seed(seed)

    logger.info(f"Generating synthetic predictions: {n_samples} items x {len(labels)} classes")

    # Seed each class once as a hit and once as a miss so all labels show up
    # in both columns; the rest is drawn at random.
    n_classes = len(labels)
    actual_idx = list(range(n_classes)) * 2
    predicted_idx = list(range(n_classes)) + [(i + 1) % n_classes for i in range(n_classes)]

    n_random = n_samples - len(actual_idx)
    random_actual = np.random.randint(0, n_classes, size=n_random)
    correct = np.random.rand(n_random) < accuracy
    offsets = np.random.randint(1, n_classes, size=n_random)
    random_predicted = np.where(correct, random_actual, (random_actual + offsets) % n_classes)

    actual_idx = np.concatenate([actual_idx, random_actual])
    predicted_idx = np.concatenate([predicted_idx, random_predicted])

    frame = pd.DataFrame({
        ACTUAL_COLUMN: np.asarray(labels, dtype=object)[actual_idx],
        PREDICTED_COLUMN: np.asarray(labels, dtype=object)[predicted_idx],
    })

    if aggregate:
        frame = (
            frame.groupby([ACTUAL_COLUMN, PREDICTED_COLUMN])
            .size()
            .reset_index(name=DEFAULT_COUNT_COLUMN)
        )

    logger.info(f"Generated {n_samples} predictions with target accuracy {accuracy}")
    return frame


def generate_synthetic_multilabel(
    n_samples: int = 500,
    labels: Optional[List[str]] = None,
    label_probability: float = 0.3,
    error_rate: float = 0.1,
    separator: str = DEFAULT_LABEL_SEPARATOR,
    seed: int = 42,
) -> pd.DataFrame:
    """Generate multi-label ground truth and noisy predictions.

    Each item carries each label independently with ``label_probability``;
    each (item, label) membership is flipped in the prediction with
    ``error_rate``.

    Parameters
    ----------
    n_samples : int, default=500
        Number of items
    labels : list of str, optional
        Label universe. Default: ['black', 'orange', 'white', 'tabby']
    label_probability : float, default=0.3
        Chance an item carries a given label
    error_rate : float, default=0.1
        Chance a label membership is predicted wrongly
    separator : str, default='|'
        Separator used to join labels within a cell
    seed : int, default=42
        Random seed

    Returns
    -------
    frame : pd.DataFrame
        Columns 'True Label' and 'Predicted' holding joined label sets
        (empty string for no label)
    """
    if labels is None:
        labels = ['black', 'orange', 'white', 'tabby']
    labels = list(labels)

    np.random.seed(seed)

    actual = np.random.rand(n_samples, len(labels)) < label_probability
    flips = np.random.rand(n_samples, len(labels)) < error_rate
    predicted = actual ^ flips

    def join(row):
        return separator.join(label for label, present in zip(labels, row) if present)

    frame = pd.DataFrame({
        ACTUAL_COLUMN: [join(row) for row in actual],
        PREDICTED_COLUMN: [join(row) for row in predicted],
    })

    logger.info(
        f"Generated {n_samples} multi-label items over {len(labels)} labels "
        f"({int(flips.sum())} flipped memberships)"
    )
    return frame
