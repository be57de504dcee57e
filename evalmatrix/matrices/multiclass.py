"""Confusion matrix for single-label, mutually exclusive classes."""

import logging
from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..evaluation.scores import accuracy, f1_score, precision, recall
from .base import BaseConfusionMatrix, ClassMetrics
from .ingest import (
    ACTUAL,
    PREDICTED,
    check_square,
    clean_observations,
    freeze,
    pairs_to_frame,
    tabulate,
)
from .validation import LabelCardinality, column_labels, validate_observations

logger = logging.getLogger(__name__)

DEFAULT_COUNT_COLUMN = 'Count'


class MultiClassConfusionMatrix(BaseConfusionMatrix):
    """N x N confusion matrix indexed by ``[actual][predicted]``.

    Parameters
    ----------
    matrix : array-like of int
        Square grid of counts; ``matrix[i][j]`` is the number of items whose
        actual label is ``labels[i]`` and predicted label is ``labels[j]``
    labels : sequence of str
        Labels defining the index of each row and column

    Examples
    --------
    >>> cm = MultiClassConfusionMatrix(
    ...     [[80, 10, 10], [10, 80, 10], [10, 10, 80]],
    ...     labels=['bird', 'cat', 'dog'],
    ... )
    >>> [round(m.recall, 2) for m in cm.calculate_metrics()]
    [0.8, 0.8, 0.8]
    """

    mode = 'multiclass'

    def __init__(self, matrix, labels: Sequence[str]):
        labels = tuple(str(label) for label in labels)
        grid = np.asarray(matrix, dtype=np.int64)
        if grid.size == 0 and len(labels) == 0:
            grid = grid.reshape(0, 0)
        check_square(grid, labels)

        self._labels = labels
        self._matrix = freeze(grid)

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        predicted_column: str,
        actual_column: str,
        count_column: Optional[str] = DEFAULT_COUNT_COLUMN,
    ) -> Optional['MultiClassConfusionMatrix']:
        """Build a matrix from an observation table.

        When ``count_column`` is present in ``frame`` each row adds its
        count to the matrix; otherwise each row counts once. Rows with a
        missing label or count are skipped.

        Parameters
        ----------
        frame : pd.DataFrame
            Observation table
        predicted_column : str
            Column holding predicted labels
        actual_column : str
            Column holding ground-truth labels
        count_column : str, optional, default='Count'
            Column holding pre-aggregated frequencies

        Returns
        -------
        matrix : MultiClassConfusionMatrix or None
            ``None`` if the table is empty, a column is missing, or the
            predicted and actual label sets differ.
        """
        if not validate_observations(
            frame, predicted_column, actual_column, LabelCardinality.MATCHING
        ):
            return None

        observations = clean_observations(
            frame, predicted_column, actual_column, count_column
        )
        labels = sorted(column_labels(frame, actual_column))
        by_count = count_column is not None and count_column in frame.columns
        grid = tabulate(observations, labels, by_count=by_count)

        logger.info(
            f"Built {len(labels)}-class confusion matrix from "
            f"{int(grid.sum())} observations"
        )
        return cls(grid, labels)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence]) -> Optional['MultiClassConfusionMatrix']:
        """Build a matrix from ``(actual, predicted)`` pairs, one count each."""
        frame = pairs_to_frame(pairs)
        return cls.from_frame(frame, PREDICTED, ACTUAL, count_column=None)

    @property
    def labels(self) -> tuple:
        return self._labels

    @property
    def matrix(self) -> np.ndarray:
        """Read-only count grid indexed by ``[actual][predicted]``."""
        return self._matrix

    @property
    def total(self) -> int:
        return int(self._matrix.sum())

    @property
    def accuracy(self) -> float:
        return accuracy(int(np.trace(self._matrix)), self.total)

    def calculate_metrics(self) -> List[ClassMetrics]:
        """One-vs-rest metrics for each label, in label order.

        A class that never occurs and is never predicted reports 0.0 recall
        and precision.
        """
        row_sums = self._matrix.sum(axis=1)
        column_sums = self._matrix.sum(axis=0)

        metrics = []
        for index, label in enumerate(self._labels):
            true_positives = int(self._matrix[index, index])
            false_positives = int(column_sums[index]) - true_positives
            false_negatives = int(row_sums[index]) - true_positives

            class_recall = recall(true_positives, false_negatives)
            class_precision = precision(true_positives, false_positives)

            metrics.append(ClassMetrics(
                label=label,
                recall=class_recall,
                precision=class_precision,
                f1=f1_score(class_precision, class_recall),
                true_positives=true_positives,
                false_positives=false_positives,
                false_negatives=false_negatives,
            ))

        return metrics

    def get_matrix_graph(self) -> str:
        """Pipe-delimited table: predicted labels across, actual labels down.

        Examples
        --------
        >>> print(cm.get_matrix_graph())
        Actual\\Predicted | bird | cat | dog
        bird | 80 | 10 | 10
        cat | 10 | 80 | 10
        dog | 10 | 10 | 80
        """
        lines = ["Actual\\Predicted" + "".join(f" | {label}" for label in self._labels)]
        for label, row in zip(self._labels, self._matrix):
            lines.append(label + "".join(f" | {int(value)}" for value in row))
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(labels={list(self._labels)}, total={self.total})"
