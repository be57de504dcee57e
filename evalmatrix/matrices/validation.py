"""Validation shared by the binary, multi-class and multi-label matrices."""

import logging
from enum import Enum
from typing import Iterable, Optional, Set

import pandas as pd

logger = logging.getLogger(__name__)


class LabelCardinality(Enum):
    """Constraint applied to the ground-truth and predicted label sets.

    EXACTLY_TWO
        Binary regime: exactly two actual labels, predicted labels must be
        a subset of them.
    MATCHING
        Multi-class regime: predicted and actual label sets must be equal.
    UNCONSTRAINED
        Multi-label regime: any label sets are accepted.
    """

    EXACTLY_TWO = 'exactly_two'
    MATCHING = 'matching'
    UNCONSTRAINED = 'unconstrained'


def _join(labels: Iterable[str]) -> str:
    return ", ".join(sorted(labels))


def _label_text(value) -> str:
    # A missing cell upcasts an integer column to float; read 1.0 back as 1
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def label_strings(values: pd.Series) -> pd.Series:
    """Non-missing labels of a column as text.

    Whole-number floats are written without the decimal part, so integer
    class ids read the same whether or not their column held a missing
    value.
    """
    return values.dropna().map(_label_text)


def column_labels(frame: pd.DataFrame, column: str) -> Set[str]:
    """Distinct non-missing values of a column, as strings."""
    return set(label_strings(frame[column]).unique())


def validate_label_sets(
    actual_labels: Set[str],
    predicted_labels: Set[str],
    cardinality: LabelCardinality,
) -> bool:
    """Check ground-truth and predicted label sets against a constraint.

    Parameters
    ----------
    actual_labels : set of str
        Labels observed as ground truth
    predicted_labels : set of str
        Labels observed as predictions
    cardinality : LabelCardinality
        Constraint for the classification regime

    Returns
    -------
    valid : bool
        ``True`` if the label sets satisfy the constraint. The reason for a
        failure is logged.
    """
    if cardinality is LabelCardinality.UNCONSTRAINED:
        return True

    if not actual_labels or not predicted_labels:
        logger.error(
            "No labels found. "
            f"Predicted labels: [{_join(predicted_labels)}], "
            f"actual labels: [{_join(actual_labels)}]"
        )
        return False

    if cardinality is LabelCardinality.MATCHING:
        if predicted_labels != actual_labels:
            logger.error(
                "Predicted and actual label sets do not match. "
                f"Predicted labels: [{_join(predicted_labels)}], "
                f"actual labels: [{_join(actual_labels)}]"
            )
            return False
        return True

    unknown = predicted_labels - actual_labels
    if unknown:
        logger.error(
            f"Predicted labels never seen as ground truth: [{_join(unknown)}]"
        )
        return False

    if len(actual_labels) != 2:
        logger.error(
            f"Binary classification needs exactly 2 classes, "
            f"found {len(actual_labels)}: [{_join(actual_labels)}]"
        )
        return False

    return True


def validate_observations(
    frame: Optional[pd.DataFrame],
    predicted_column: str,
    actual_column: str,
    cardinality: LabelCardinality,
) -> bool:
    """Validate a table of (actual, predicted) observations.

    Checks, in order: the table is not empty, both role columns exist, and
    the label sets satisfy ``cardinality``.

    Parameters
    ----------
    frame : pd.DataFrame
        Observation table
    predicted_column : str
        Column holding predicted labels
    actual_column : str
        Column holding ground-truth labels
    cardinality : LabelCardinality
        Constraint for the classification regime

    Returns
    -------
    valid : bool

    Examples
    --------
    >>> validate_observations(df, 'Predicted', 'True Label', LabelCardinality.MATCHING)
    True
    """
    if frame is None or len(frame) == 0:
        logger.error("Observation table is empty")
        return False

    for role, column in (('predicted', predicted_column), ('actual', actual_column)):
        if column not in frame.columns:
            logger.error(
                f"The {role} column '{column}' does not exist. "
                f"Available columns: {list(frame.columns)}"
            )
            return False

    return validate_label_sets(
        actual_labels=column_labels(frame, actual_column),
        predicted_labels=column_labels(frame, predicted_column),
        cardinality=cardinality,
    )
