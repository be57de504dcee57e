"""Per-label counters for multi-label classification.

An item may carry zero, one or many labels at once, so there is no single
shared confusion matrix. Each label of the universe is scored
independently against every (true labels, predicted labels) pair.
"""

import logging
from dataclasses import dataclass
from typing import Collection, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from sklearn.preprocessing import MultiLabelBinarizer

from ..evaluation.scores import f1_score, precision, recall
from .base import BaseConfusionMatrix, ClassMetrics
from .validation import LabelCardinality, validate_label_sets

logger = logging.getLogger(__name__)

DEFAULT_PREDICTION_THRESHOLD = 0.5


@dataclass(frozen=True)
class LabelCounts:
    """True positive, false positive and false negative counts of one label."""

    true_positives: int = 0
    false_positives: int = 0
    false_negatives: int = 0


class MultiLabelConfusionMatrix(BaseConfusionMatrix):
    """Independent TP/FP/FN counters for every label of a fixed universe.

    True negatives are not tracked. Metrics whose denominator is zero are
    reported as ``None`` rather than ``0.0``: a label that was never
    predicted has no precision, and a label that never occurred has no
    recall.

    Parameters
    ----------
    predictions : iterable of (set, set)
        ``(true_labels, predicted_labels)`` per item. Predicted labels must
        already be thresholded by the caller. Malformed entries are
        skipped.
    labels : sequence of str
        Label universe. Labels outside it are ignored.
    prediction_threshold : float, default=0.5
        Confidence threshold used upstream to binarize predictions. Kept for
        reporting; it is not applied here.

    Examples
    --------
    >>> cm = MultiLabelConfusionMatrix(
    ...     [({'dog'}, {'dog'}), ({'cat'}, set()), ({'horse'}, {'horse', 'dog'})],
    ...     labels=['dog', 'cat', 'horse'],
    ... )
    >>> cm.get_label_counts('dog')
    LabelCounts(true_positives=1, false_positives=1, false_negatives=0)
    """

    mode = 'multilabel'

    def __init__(
        self,
        predictions: Iterable[Tuple[Collection[str], Collection[str]]],
        labels: Sequence[str],
        prediction_threshold: float = DEFAULT_PREDICTION_THRESHOLD,
    ):
        if not 0.0 <= prediction_threshold <= 1.0:
            raise ValueError(
                f"prediction_threshold must be within [0, 1], got {prediction_threshold}"
            )

        self._labels = tuple(dict.fromkeys(str(label) for label in labels))
        self._prediction_threshold = float(prediction_threshold)

        true_sets, predicted_sets = [], []
        skipped = 0
        for observation in predictions:
            try:
                true_labels, predicted_labels = observation
                true_set = {str(label) for label in true_labels}
                predicted_set = {str(label) for label in predicted_labels}
            except (TypeError, ValueError):
                skipped += 1
                continue
            true_sets.append(true_set)
            predicted_sets.append(predicted_set)

        if skipped:
            logger.debug(f"Skipped {skipped} malformed observations")

        observed_true = set().union(*true_sets)
        observed_predicted = set().union(*predicted_sets)
        if not validate_label_sets(
            actual_labels=observed_true,
            predicted_labels=observed_predicted,
            cardinality=LabelCardinality.UNCONSTRAINED,
        ):
            raise ValueError("Multi-label observations failed label validation")
        outside = (observed_true | observed_predicted) - set(self._labels)
        if outside:
            logger.debug(f"Ignoring labels outside the universe: {sorted(outside)}")

        self._n_observations = len(true_sets)
        self._counts = self._count(true_sets, predicted_sets)

        logger.info(
            f"Counted {len(self._labels)} labels over {self._n_observations} observations"
        )

    def _count(self, true_sets, predicted_sets) -> Dict[str, LabelCounts]:
        if not self._labels or not true_sets:
            return {label: LabelCounts() for label in self._labels}

        universe = set(self._labels)
        binarizer = MultiLabelBinarizer(classes=list(self._labels))
        actual = binarizer.fit_transform([s & universe for s in true_sets]).astype(bool)
        predicted = binarizer.transform([s & universe for s in predicted_sets]).astype(bool)

        true_positives = np.sum(actual & predicted, axis=0)
        false_positives = np.sum(~actual & predicted, axis=0)
        false_negatives = np.sum(actual & ~predicted, axis=0)

        return {
            label: LabelCounts(
                true_positives=int(true_positives[i]),
                false_positives=int(false_positives[i]),
                false_negatives=int(false_negatives[i]),
            )
            for i, label in enumerate(binarizer.classes_)
        }

    @property
    def labels(self) -> tuple:
        return self._labels

    @property
    def prediction_threshold(self) -> float:
        return self._prediction_threshold

    @property
    def n_observations(self) -> int:
        return self._n_observations

    @property
    def counts(self) -> Mapping[str, LabelCounts]:
        """Read-only view of the per-label counters."""
        return dict(self._counts)

    def get_label_counts(self, label: str) -> Optional[LabelCounts]:
        return self._counts.get(label)

    def calculate_metrics(self) -> List[ClassMetrics]:
        """Per-label metrics sorted by label name.

        Examples
        --------
        >>> cat = next(m for m in cm.calculate_metrics() if m.label == 'cat')
        >>> cat.recall, cat.precision, cat.f1
        (0.0, None, None)
        """
        metrics = []
        for label in sorted(self._labels):
            counts = self._counts[label]
            label_recall = recall(
                counts.true_positives, counts.false_negatives, zero_division=None
            )
            label_precision = precision(
                counts.true_positives, counts.false_positives, zero_division=None
            )
            metrics.append(ClassMetrics(
                label=label,
                recall=label_recall,
                precision=label_precision,
                f1=f1_score(label_precision, label_recall),
                true_positives=counts.true_positives,
                false_positives=counts.false_positives,
                false_negatives=counts.false_negatives,
            ))
        return metrics

    def get_matrix_graph(self) -> str:
        """Tab-delimited table of true positives and actual totals per label.

        Examples
        --------
        >>> print(cm.get_matrix_graph())
        Label	True Positives	Total Actual
        cat	0	1
        dog	1	1
        horse	1	1
        """
        lines = ["Label\tTrue Positives\tTotal Actual"]
        for metric in self.calculate_metrics():
            lines.append(f"{metric.label}\t{metric.true_positives}\t{metric.support}")
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(labels={sorted(self._labels)}, "
            f"n_observations={self._n_observations}, "
            f"prediction_threshold={self._prediction_threshold})"
        )
