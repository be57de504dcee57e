"""Scalar metric math shared by every confusion matrix variant."""

from typing import Optional


def _check_counts(**counts: int) -> None:
    for name, value in counts.items():
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")


def recall(
    true_positives: int,
    false_negatives: int,
    zero_division: Optional[float] = 0.0,
) -> Optional[float]:
    """Fraction of actual positives that were recovered.

    Parameters
    ----------
    true_positives : int
        Items of the class that were predicted as the class
    false_negatives : int
        Items of the class that were predicted as something else
    zero_division : float or None, default=0.0
        Value returned when there are no actual positives.
        ``None`` marks the metric as undefined.

    Returns
    -------
    recall : float or None

    Examples
    --------
    >>> recall(80, 20)
    0.8
    >>> recall(0, 0, zero_division=None) is None
    True
    """
    _check_counts(true_positives=true_positives, false_negatives=false_negatives)
    denominator = true_positives + false_negatives
    if denominator == 0:
        return zero_division
    return true_positives / denominator


def precision(
    true_positives: int,
    false_positives: int,
    zero_division: Optional[float] = 0.0,
) -> Optional[float]:
    """Fraction of positive predictions that were correct.

    Parameters
    ----------
    true_positives : int
        Predictions of the class that were correct
    false_positives : int
        Predictions of the class that were wrong
    zero_division : float or None, default=0.0
        Value returned when the class was never predicted.
        ``None`` marks the metric as undefined.

    Returns
    -------
    precision : float or None
    """
    _check_counts(true_positives=true_positives, false_positives=false_positives)
    denominator = true_positives + false_positives
    if denominator == 0:
        return zero_division
    return true_positives / denominator


def f1_score(
    precision_value: Optional[float],
    recall_value: Optional[float],
) -> Optional[float]:
    """Harmonic mean of precision and recall.

    Undefined inputs propagate: if either value is ``None`` the result is
    ``None``. A zero sum gives ``0.0``.
    """
    if precision_value is None or recall_value is None:
        return None
    denominator = precision_value + recall_value
    if denominator == 0:
        return 0.0
    return 2 * precision_value * recall_value / denominator


def accuracy(correct: int, total: int) -> float:
    """Share of correct predictions, ``0.0`` for an empty total."""
    _check_counts(correct=correct, total=total)
    if correct > total:
        raise ValueError(f"correct ({correct}) cannot exceed total ({total})")
    if total == 0:
        return 0.0
    return correct / total
