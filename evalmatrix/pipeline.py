"""Evaluation pipeline turning prediction tables into confusion matrices."""

import logging
from typing import Optional, Dict, Any, List

import pandas as pd

from .data import (
    DEFAULT_COUNT_COLUMN,
    frame_to_label_sets,
    get_actual_column,
    get_predicted_column,
    label_universe,
    load_predictions,
)
from .data.loader import DEFAULT_LABEL_SEPARATOR
from .matrices import AVAILABLE_MATRICES, BaseConfusionMatrix, get_matrix_class
from .matrices.multilabel import DEFAULT_PREDICTION_THRESHOLD

logger = logging.getLogger(__name__)


class Pipeline:
    """Evaluate classifier predictions with the matching confusion matrix.

    This class provides a unified interface for:
    - Resolving the predicted/actual columns of a prediction table
    - Building the binary, multi-class or multi-label confusion matrix
    - Summarizing per-class and averaged metrics
    - Comparing several prediction runs

    Parameters
    ----------
    mode : str
        Classification mode ('binary', 'multiclass', 'multilabel')
    predicted_column : str, optional
        Predicted-label column (auto-detected if None)
    actual_column : str, optional
        Ground-truth column (auto-detected if None)
    count_column : str, default='Count'
        Frequency column used when present in the table
    labels : list of str, optional
        Label universe for multi-label mode (inferred if None)
    label_separator : str, default='|'
        Separator of joined label cells in multi-label mode
    prediction_threshold : float, default=0.5
        Threshold applied upstream to multi-label confidences

    Examples
    --------
    >>> from evalmatrix import Pipeline
    >>> import pandas as pd
    >>>
    >>> df = pd.read_csv("validation_predictions.csv")
    >>> pipeline = Pipeline(mode="multiclass")
    >>> result = pipeline.evaluate(df)
    >>> print(result['graph'])
    >>> result['metrics'].loc['cat', 'recall']
    """

    def __init__(
        self,
        mode: str,
        predicted_column: Optional[str] = None,
        actual_column: Optional[str] = None,
        count_column: Optional[str] = DEFAULT_COUNT_COLUMN,
        labels: Optional[List[str]] = None,
        label_separator: str = DEFAULT_LABEL_SEPARATOR,
        prediction_threshold: float = DEFAULT_PREDICTION_THRESHOLD,
    ):
        """Initialize the pipeline."""
        self.matrix_class = get_matrix_class(mode)
        self.mode = mode
        self.predicted_column = predicted_column
        self.actual_column = actual_column
        self.count_column = count_column
        self.labels = labels
        self.label_separator = label_separator
        self.prediction_threshold = prediction_threshold

        logger.info(f"Initialized pipeline in {mode} mode")

    def build_matrix(self, frame: pd.DataFrame) -> Optional[BaseConfusionMatrix]:
        """Build the confusion matrix for a prediction table.

        Parameters
        ----------
        frame : pd.DataFrame
            Prediction table

        Returns
        -------
        matrix : BaseConfusionMatrix or None
            ``None`` if the table fails validation for the mode.

        Raises
        ------
        ValueError
            If a role column cannot be resolved
        """
        predicted_column = get_predicted_column(frame, self.predicted_column)
        actual_column = get_actual_column(frame, self.actual_column)

        if self.mode == 'multilabel':
            pairs = frame_to_label_sets(
                frame, predicted_column, actual_column, separator=self.label_separator
            )
            return self.matrix_class(
                pairs,
                labels=label_universe(pairs, self.labels),
                prediction_threshold=self.prediction_threshold,
            )

        return self.matrix_class.from_frame(
            frame,
            predicted_column=predicted_column,
            actual_column=actual_column,
            count_column=self.count_column,
        )

    def evaluate(self, frame: pd.DataFrame) -> Optional[Dict[str, Any]]:
        """Evaluate one prediction table.

        Parameters
        ----------
        frame : pd.DataFrame
            Prediction table

        Returns
        -------
        results : dict or None
            Dictionary with:
            - 'matrix': the confusion matrix object
            - 'metrics': per-class metrics DataFrame
            - 'averages': macro-averaged recall/precision/f1
            - 'graph': plain-text rendering of the counts
            ``None`` if no matrix could be built.
        """
        logger.info("Starting evaluation...")

        matrix = self.build_matrix(frame)
        if matrix is None:
            logger.warning(f"Could not build a {self.mode} confusion matrix; skipping metrics")
            return None

        results = {
            'matrix': matrix,
            'metrics': matrix.metrics_frame(),
            'averages': matrix.average_metrics(),
            'graph': matrix.get_matrix_graph(),
        }

        logger.info("Evaluation completed")
        logger.info(f"Averages: {results['averages']}")

        return results

    def compare_runs(self, frames: Dict[str, pd.DataFrame]) -> pd.DataFrame:
        """Compare several prediction runs on averaged metrics.

        Parameters
        ----------
        frames : dict
            Mapping of run name to prediction table

        Returns
        -------
        comparison : pd.DataFrame
            DataFrame with runs as rows and recall/precision/f1 (plus
            accuracy where the mode defines it) as columns. Runs that fail
            validation are left out.
        """
        logger.info(f"Comparing runs: {list(frames)}")

        rows = []
        for name, frame in frames.items():
            results = self.evaluate(frame)
            if results is None:
                logger.warning(f"Run '{name}' produced no confusion matrix")
                continue

            row = dict(results['averages'] or {})
            accuracy = getattr(results['matrix'], 'accuracy', None)
            if accuracy is not None:
                row['accuracy'] = accuracy
            row['run'] = name
            rows.append(row)

        if not rows:
            return pd.DataFrame(columns=['recall', 'precision', 'f1']).rename_axis('run')

        df = pd.DataFrame(rows).set_index('run')

        logger.info("\n" + "="*50)
        logger.info("COMPARISON RESULTS")
        logger.info("="*50)
        logger.info("\n" + str(df))

        return df


def evaluate_predictions(
    frame: pd.DataFrame,
    mode: str = 'multiclass',
    **kwargs,
) -> Optional[Dict[str, Any]]:
    """Shortcut for ``Pipeline(mode, **kwargs).evaluate(frame)``."""
    return Pipeline(mode=mode, **kwargs).evaluate(frame)


def run_pipeline_from_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Run evaluation from a configuration dictionary.

    Parameters
    ----------
    config : dict
        Configuration dictionary with keys:
        - 'data': 'path', 'mode', and optionally 'predicted_column',
          'actual_column', 'count_column', 'labels', 'label_separator'
        - 'evaluation': optionally 'prediction_threshold'

    Returns
    -------
    results : dict
        Dictionary with 'results' (from ``Pipeline.evaluate``, may be
        None) and 'config'
    """
    logger.info("Running pipeline from configuration")

    data_config = config['data']
    mode = data_config.get('mode', 'multiclass')
    if mode not in AVAILABLE_MATRICES:
        raise ValueError(
            f"Unknown mode '{mode}'. Available modes: {list(AVAILABLE_MATRICES.keys())}"
        )

    frame = load_predictions(data_config['path'])

    eval_config = config.get('evaluation') or {}

    pipeline = Pipeline(
        mode=mode,
        predicted_column=data_config.get('predicted_column'),
        actual_column=data_config.get('actual_column'),
        count_column=data_config.get('count_column', DEFAULT_COUNT_COLUMN),
        labels=data_config.get('labels'),
        label_separator=data_config.get('label_separator', DEFAULT_LABEL_SEPARATOR),
        prediction_threshold=eval_config.get('prediction_threshold', DEFAULT_PREDICTION_THRESHOLD),
    )

    return {
        'results': pipeline.evaluate(frame),
        'config': config,
    }
