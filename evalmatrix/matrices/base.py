"""Base class and shared records for confusion matrix variants."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

import numpy as np
import pandas as pd


METRIC_COLUMNS = [
    'recall',
    'precision',
    'f1',
    'true_positives',
    'false_positives',
    'false_negatives',
    'support',
]


@dataclass(frozen=True)
class ClassMetrics:
    """Per-class (or per-label) metrics derived from a confusion matrix.

    ``recall``, ``precision`` and ``f1`` are ``None`` when the value is
    undefined for the class (multi-label regime only).
    """

    label: str
    recall: Optional[float]
    precision: Optional[float]
    f1: Optional[float]
    true_positives: int = 0
    false_positives: int = 0
    false_negatives: int = 0

    @property
    def support(self) -> int:
        """Number of actual occurrences of the class."""
        return self.true_positives + self.false_negatives

    def to_dict(self) -> Dict[str, object]:
        record = asdict(self)
        record['support'] = self.support
        return record


class BaseConfusionMatrix(ABC):
    """Capability interface shared by all confusion matrix variants.

    Every variant is built once from a complete set of observations and is
    read-only afterwards. Subclasses provide the per-class metric
    derivation and a plain-text rendering; tabular and averaged views are
    derived here from :meth:`calculate_metrics`.
    """

    mode: str = ''

    @abstractmethod
    def calculate_metrics(self) -> List[ClassMetrics]:
        """Compute per-class metrics in a deterministic label order.

        Returns
        -------
        metrics : list of ClassMetrics
        """

    @abstractmethod
    def get_matrix_graph(self) -> str:
        """Render the underlying counts as a plain-text table."""

    def metrics_frame(self) -> pd.DataFrame:
        """Per-class metrics as a DataFrame indexed by label.

        Undefined metric values become ``NaN``.

        Returns
        -------
        frame : pd.DataFrame
            Columns: recall, precision, f1, true_positives,
            false_positives, false_negatives, support

        Examples
        --------
        >>> cm.metrics_frame().loc['cat', 'recall']
        0.8
        """
        records = [m.to_dict() for m in self.calculate_metrics()]
        if not records:
            frame = pd.DataFrame(columns=METRIC_COLUMNS)
            frame.index.name = 'label'
            return frame

        frame = pd.DataFrame.from_records(records).set_index('label')
        for column in ('recall', 'precision', 'f1'):
            frame[column] = frame[column].astype(float)
        return frame[METRIC_COLUMNS]

    def average_metrics(self) -> Optional[Dict[str, Optional[float]]]:
        """Macro-average recall, precision and F1 across classes.

        Undefined per-class values are left out of the average; a metric
        with no defined value at all averages to ``None``.

        Returns
        -------
        averages : dict or None
            Keys 'recall', 'precision', 'f1'. ``None`` when there are no
            classes.
        """
        metrics = self.calculate_metrics()
        if not metrics:
            return None

        averages = {}
        for name in ('recall', 'precision', 'f1'):
            values = [getattr(m, name) for m in metrics if getattr(m, name) is not None]
            averages[name] = float(np.mean(values)) if values else None
        return averages

    def __str__(self) -> str:
        return self.get_matrix_graph()
