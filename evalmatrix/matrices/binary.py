"""Fixed 2 x 2 confusion matrix for two-class problems."""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..evaluation.scores import accuracy, f1_score, precision, recall
from .base import BaseConfusionMatrix, ClassMetrics
from .ingest import (
    ACTUAL,
    PREDICTED,
    clean_observations,
    freeze,
    pairs_to_frame,
    tabulate,
)
from .validation import LabelCardinality, column_labels, validate_observations

logger = logging.getLogger(__name__)

DEFAULT_COUNT_COLUMN = 'Count'
DEFAULT_LABELS = ('negative', 'positive')


class BinaryConfusionMatrix(BaseConfusionMatrix):
    """Two-class confusion matrix.

    Labels are sorted ascending and the label that sorts *last* is the
    positive class: ``labels[1]`` is positive, ``labels[0]`` is negative.
    For cat vs dog, ``dog`` is therefore the positive class. Rename labels
    upstream if a different class should be positive.

    Parameters
    ----------
    true_positive : int
        Actual positive, predicted positive
    false_positive : int
        Actual negative, predicted positive
    false_negative : int
        Actual positive, predicted negative
    true_negative : int
        Actual negative, predicted negative
    labels : tuple of str, default=('negative', 'positive')
        ``(negative_label, positive_label)``

    Examples
    --------
    >>> cm = BinaryConfusionMatrix(80, 20, 20, 80)
    >>> cm.recall, cm.precision, cm.accuracy
    (0.8, 0.8, 0.8)
    """

    mode = 'binary'

    def __init__(
        self,
        true_positive: int,
        false_positive: int,
        false_negative: int,
        true_negative: int,
        labels: Tuple[str, str] = DEFAULT_LABELS,
    ):
        counts = {
            'true_positive': true_positive,
            'false_positive': false_positive,
            'false_negative': false_negative,
            'true_negative': true_negative,
        }
        for name, value in counts.items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

        labels = tuple(str(label) for label in labels)
        if len(labels) != 2 or labels[0] == labels[1]:
            raise ValueError(f"Binary matrix needs two distinct labels, got {list(labels)}")

        self._labels = labels
        self._matrix = freeze([
            [true_negative, false_positive],
            [false_negative, true_positive],
        ])

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        predicted_column: str,
        actual_column: str,
        count_column: Optional[str] = DEFAULT_COUNT_COLUMN,
    ) -> Optional['BinaryConfusionMatrix']:
        """Build a matrix from an observation table.

        Parameters
        ----------
        frame : pd.DataFrame
            Observation table
        predicted_column : str
            Column holding predicted labels
        actual_column : str
            Column holding ground-truth labels
        count_column : str, optional, default='Count'
            Column holding pre-aggregated frequencies. Ignored when absent
            from ``frame``, in which case each row counts once.

        Returns
        -------
        matrix : BinaryConfusionMatrix or None
            ``None`` if the table is empty, a column is missing, a predicted
            label was never seen as ground truth, or there are not exactly
            two ground-truth labels.
        """
        if not validate_observations(
            frame, predicted_column, actual_column, LabelCardinality.EXACTLY_TWO
        ):
            return None

        observations = clean_observations(
            frame, predicted_column, actual_column, count_column
        )
        labels = sorted(column_labels(frame, actual_column))
        by_count = count_column is not None and count_column in frame.columns
        grid = tabulate(observations, labels, by_count=by_count)

        logger.info(
            f"Built binary confusion matrix from {int(grid.sum())} observations "
            f"(positive class: '{labels[1]}')"
        )
        return cls(
            true_positive=int(grid[1, 1]),
            false_positive=int(grid[0, 1]),
            false_negative=int(grid[1, 0]),
            true_negative=int(grid[0, 0]),
            labels=(labels[0], labels[1]),
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence]) -> Optional['BinaryConfusionMatrix']:
        """Build a matrix from ``(actual, predicted)`` pairs, one count each."""
        frame = pairs_to_frame(pairs)
        return cls.from_frame(frame, PREDICTED, ACTUAL, count_column=None)

    @property
    def labels(self) -> tuple:
        return self._labels

    @property
    def negative_label(self) -> str:
        return self._labels[0]

    @property
    def positive_label(self) -> str:
        return self._labels[1]

    @property
    def matrix(self) -> np.ndarray:
        """Read-only 2 x 2 grid indexed by ``[actual][predicted]``."""
        return self._matrix

    @property
    def true_positive(self) -> int:
        return int(self._matrix[1, 1])

    @property
    def false_positive(self) -> int:
        return int(self._matrix[0, 1])

    @property
    def false_negative(self) -> int:
        return int(self._matrix[1, 0])

    @property
    def true_negative(self) -> int:
        return int(self._matrix[0, 0])

    @property
    def total(self) -> int:
        return int(self._matrix.sum())

    @property
    def recall(self) -> float:
        return recall(self.true_positive, self.false_negative)

    @property
    def precision(self) -> float:
        return precision(self.true_positive, self.false_positive)

    @property
    def accuracy(self) -> float:
        return accuracy(self.true_positive + self.true_negative, self.total)

    @property
    def f1_score(self) -> float:
        return f1_score(self.precision, self.recall)

    def calculate_metrics(self) -> List[ClassMetrics]:
        """Metrics of the positive class."""
        return [ClassMetrics(
            label=self.positive_label,
            recall=self.recall,
            precision=self.precision,
            f1=self.f1_score,
            true_positives=self.true_positive,
            false_positives=self.false_positive,
            false_negatives=self.false_negative,
        )]

    def get_matrix_graph(self) -> str:
        """Pipe-delimited 2 x 2 table with a header row of predicted labels.

        Examples
        --------
        >>> print(BinaryConfusionMatrix(80, 20, 20, 80, labels=('cat', 'dog')).get_matrix_graph())
        Actual\\Predicted | cat | dog
        cat | 80 | 20
        dog | 20 | 80
        """
        negative, positive = self._labels
        return (
            f"Actual\\Predicted | {negative} | {positive}\n"
            f"{negative} | {self.true_negative} | {self.false_positive}\n"
            f"{positive} | {self.false_negative} | {self.true_positive}\n"
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(TP={self.true_positive}, FP={self.false_positive}, "
            f"FN={self.false_negative}, TN={self.true_negative}, labels={list(self._labels)})"
        )
