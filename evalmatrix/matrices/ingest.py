"""Turn observation tables into square count grids."""

import logging
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix

from .validation import label_strings

logger = logging.getLogger(__name__)

ACTUAL = 'actual'
PREDICTED = 'predicted'
COUNT = 'count'


def pairs_to_frame(pairs: Iterable[Sequence]) -> pd.DataFrame:
    """Build an observation table from ``(actual, predicted)`` pairs.

    Entries that are not two-element sequences are skipped.
    """
    rows = []
    skipped = 0
    for pair in pairs:
        try:
            actual, predicted = pair
        except (TypeError, ValueError):
            skipped += 1
            continue
        rows.append((actual, predicted))

    if skipped:
        logger.debug(f"Skipped {skipped} malformed observation pairs")

    return pd.DataFrame(rows, columns=[ACTUAL, PREDICTED])


def clean_observations(
    frame: pd.DataFrame,
    predicted_column: str,
    actual_column: str,
    count_column: Optional[str] = None,
) -> pd.DataFrame:
    """Normalize an observation table to ``actual``/``predicted``/``count``.

    Rows missing a label, or carrying a missing, negative or fractional
    count, are dropped. Without a count column every row weighs 1.

    Returns
    -------
    observations : pd.DataFrame
        Columns 'actual' (str), 'predicted' (str), 'count' (int)
    """
    by_count = count_column is not None and count_column in frame.columns

    observations = pd.DataFrame({
        ACTUAL: frame[actual_column],
        PREDICTED: frame[predicted_column],
    })
    if by_count:
        observations[COUNT] = pd.to_numeric(frame[count_column], errors='coerce')
    else:
        observations[COUNT] = 1

    valid = observations[ACTUAL].notna() & observations[PREDICTED].notna()
    if by_count:
        counts = observations[COUNT]
        valid &= counts.notna() & (counts >= 0) & (counts % 1 == 0)

    skipped = int((~valid).sum())
    if skipped:
        logger.debug(f"Skipped {skipped} malformed rows out of {len(frame)}")

    observations = observations[valid]
    return pd.DataFrame({
        ACTUAL: label_strings(observations[ACTUAL]),
        PREDICTED: label_strings(observations[PREDICTED]),
        COUNT: observations[COUNT].astype(int),
    })


def tabulate(
    observations: pd.DataFrame,
    labels: Sequence[str],
    by_count: bool,
) -> np.ndarray:
    """Cross-tabulate observations into a ``len(labels)`` square grid.

    Rows are indexed by actual label, columns by predicted label, both in
    the order of ``labels``. Observations with a label outside ``labels``
    are not counted.
    """
    size = len(labels)
    if observations.empty:
        return np.zeros((size, size), dtype=np.int64)

    if not by_count:
        grid = confusion_matrix(
            observations[ACTUAL].to_numpy(),
            observations[PREDICTED].to_numpy(),
            labels=list(labels),
        )
        return grid.astype(np.int64)

    table = (
        observations
        .groupby([ACTUAL, PREDICTED])[COUNT]
        .sum()
        .unstack(fill_value=0)
        .reindex(index=list(labels), columns=list(labels), fill_value=0)
    )
    return table.to_numpy(dtype=np.int64)


def freeze(grid: np.ndarray) -> np.ndarray:
    """Return a read-only integer copy of ``grid``."""
    frozen = np.array(grid, dtype=np.int64, copy=True)
    frozen.setflags(write=False)
    return frozen


def check_square(grid: np.ndarray, labels: Tuple[str, ...]) -> None:
    """Raise ``ValueError`` unless ``grid`` is a valid count grid for ``labels``."""
    if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
        raise ValueError(f"Confusion matrix must be square, got shape {grid.shape}")
    if grid.shape[0] != len(labels):
        raise ValueError(
            f"Matrix size {grid.shape[0]} does not match {len(labels)} labels"
        )
    if len(set(labels)) != len(labels):
        raise ValueError(f"Labels must be unique, got {list(labels)}")
    if (grid < 0).any():
        raise ValueError("Confusion matrix cells must be non-negative")
