"""Column name configuration and detection utilities."""

import logging
from typing import Optional, List
import pandas as pd

logger = logging.getLogger(__name__)


# Default column name aliases
DEFAULT_PREDICTED_COLUMNS = ['Predicted', 'predicted', 'prediction', 'predicted_label', 'y_pred']
DEFAULT_ACTUAL_COLUMNS = ['True Label', 'actual', 'true_label', 'label', 'ground_truth', 'y_true']
DEFAULT_COUNT_COLUMN = 'Count'


def detect_column(
    frame: pd.DataFrame,
    candidates: List[str],
    column_type: str = "column"
) -> Optional[str]:
    """Auto-detect a column from a list of candidates.

    Parameters
    ----------
    frame : pd.DataFrame
        Prediction table
    candidates : list of str
        List of candidate column names to try
    column_type : str
        Type of column for log messages (e.g., "predicted", "actual")

    Returns
    -------
    column_name : str or None
        Detected column name, or None if not found
    """
    for col in candidates:
        if col in frame.columns:
            logger.info(f"Auto-detected {column_type} column: '{col}'")
            return col

    logger.warning(f"No {column_type} column detected from candidates: {candidates}")
    return None


def _resolve_column(
    frame: pd.DataFrame,
    explicit: Optional[str],
    candidates: List[str],
    column_type: str,
    parameter: str,
) -> str:
    if explicit is not None:
        if explicit not in frame.columns:
            raise ValueError(
                f"Specified {column_type} column '{explicit}' not found. "
                f"Available columns: {list(frame.columns)}"
            )
        return explicit

    detected = detect_column(frame, candidates, column_type)
    if detected is None:
        raise ValueError(
            f"No {column_type} column found. Available columns: {list(frame.columns)}. "
            f"Specify {parameter} parameter explicitly."
        )

    return detected


def get_predicted_column(frame: pd.DataFrame, predicted_col: Optional[str] = None) -> str:
    """Get or detect the predicted-label column name.

    Parameters
    ----------
    frame : pd.DataFrame
        Prediction table
    predicted_col : str, optional
        Explicit column name. If None, will auto-detect.

    Returns
    -------
    column_name : str
        Predicted column name

    Raises
    ------
    ValueError
        If column not found

    Examples
    --------
    >>> # Auto-detect
    >>> predicted_col = get_predicted_column(df)
    >>>
    >>> # Use custom column
    >>> predicted_col = get_predicted_column(df, predicted_col='model_output')
    """
    return _resolve_column(
        frame, predicted_col, DEFAULT_PREDICTED_COLUMNS, "predicted", "predicted_col"
    )


def get_actual_column(frame: pd.DataFrame, actual_col: Optional[str] = None) -> str:
    """Get or detect the ground-truth column name.

    Parameters
    ----------
    frame : pd.DataFrame
        Prediction table
    actual_col : str, optional
        Explicit column name. If None, will auto-detect.

    Returns
    -------
    column_name : str
        Ground-truth column name

    Raises
    ------
    ValueError
        If column not found
    """
    return _resolve_column(
        frame, actual_col, DEFAULT_ACTUAL_COLUMNS, "actual", "actual_col"
    )


def list_columns(frame: pd.DataFrame, verbose: bool = True) -> dict:
    """List and detect key columns in a prediction table.

    Parameters
    ----------
    frame : pd.DataFrame
        Prediction table
    verbose : bool, default=True
        Whether to print information

    Returns
    -------
    columns : dict
        Dictionary with detected column names ('predicted', 'actual',
        'count'; None when absent)

    Examples
    --------
    >>> cols = list_columns(df)
    >>> print(cols['predicted'])  # 'Predicted'
    >>> print(cols['count'])  # 'Count'
    """
    result = {}

    result['predicted'] = detect_column(frame, DEFAULT_PREDICTED_COLUMNS, "predicted")
    result['actual'] = detect_column(frame, DEFAULT_ACTUAL_COLUMNS, "actual")
    result['count'] = DEFAULT_COUNT_COLUMN if DEFAULT_COUNT_COLUMN in frame.columns else None

    if verbose:
        print("="*60)
        print("COLUMN DETECTION")
        print("="*60)
        print(f"Total columns: {len(frame.columns)}")
        print(f"\nDetected columns:")
        print(f"  Predicted column: {result['predicted']}")
        print(f"  Actual column:    {result['actual']}")
        print(f"  Count column:     {result['count']}")
        print(f"\nAll columns: {list(frame.columns)}")
        print("="*60)

    return result
