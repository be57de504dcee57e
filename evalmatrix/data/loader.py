"""Prediction table loading utilities."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple, Union

import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_LABEL_SEPARATOR = '|'


def load_predictions(path: Union[str, Path]) -> pd.DataFrame:
    """Load a table of predictions from file.

    Supports .csv, .tsv and .json (records) formats.

    Parameters
    ----------
    path : str or Path
        Path to data file

    Returns
    -------
    frame : pd.DataFrame
        Loaded prediction table

    Examples
    --------
    >>> df = load_predictions("outputs/validation_predictions.csv")
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Prediction file not found: {path}")

    logger.info(f"Loading predictions from {path}")

    # Load based on file extension
    suffix = path.suffix.lower()

    if suffix == '.csv':
        frame = pd.read_csv(path)
    elif suffix == '.tsv':
        frame = pd.read_csv(path, sep='\t')
    elif suffix == '.json':
        frame = pd.read_json(path, orient='records')
    else:
        raise ValueError(
            f"Unsupported file format: {suffix}. "
            f"Supported: .csv, .tsv, .json"
        )

    logger.info(f"Loaded {len(frame)} rows x {len(frame.columns)} columns")

    return frame


def split_labels(value, separator: str = DEFAULT_LABEL_SEPARATOR) -> Set[str]:
    """Parse a joined label cell such as ``'cat|dog'`` into a set.

    Missing cells and empty strings give an empty set.
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return set()
    return {label.strip() for label in str(value).split(separator) if label.strip()}


def frame_to_label_sets(
    frame: pd.DataFrame,
    predicted_column: str,
    actual_column: str,
    separator: str = DEFAULT_LABEL_SEPARATOR,
) -> List[Tuple[Set[str], Set[str]]]:
    """Convert a multi-label prediction table into ``(true, predicted)`` set pairs.

    Parameters
    ----------
    frame : pd.DataFrame
        Table with one row per item and joined label cells
    predicted_column : str
        Column holding predicted labels
    actual_column : str
        Column holding ground-truth labels
    separator : str, default='|'
        Separator between labels within a cell

    Returns
    -------
    pairs : list of (set, set)
    """
    return [
        (split_labels(actual, separator), split_labels(predicted, separator))
        for actual, predicted in zip(frame[actual_column], frame[predicted_column])
    ]


def label_universe(
    pairs: Iterable[Tuple[Set[str], Set[str]]],
    labels: Optional[Iterable[str]] = None,
) -> List[str]:
    """Return ``labels`` sorted, or every label seen in ``pairs`` when omitted."""
    if labels is not None:
        return sorted(set(labels))

    universe = set()
    for true_labels, predicted_labels in pairs:
        universe |= set(true_labels) | set(predicted_labels)

    logger.info(f"Inferred label universe of {len(universe)} labels")
    return sorted(universe)
