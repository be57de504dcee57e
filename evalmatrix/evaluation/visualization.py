"""Visualization utilities for confusion matrices and per-class metrics."""

import logging
from typing import Optional, List
import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns

logger = logging.getLogger(__name__)


def plot_confusion_matrix(
    confusion,
    normalize: bool = True,
    save: Optional[str] = None,
    figsize: tuple = (10, 8),
) -> plt.Figure:
    """Plot confusion matrix as a heatmap.

    Parameters
    ----------
    confusion : BinaryConfusionMatrix or MultiClassConfusionMatrix
        Matrix to plot
    normalize : bool, default=True
        Whether to normalize by row (true class counts). Rows without any
        observation stay at zero.
    save : str, optional
        Path to save figure
    figsize : tuple, default=(10, 8)
        Figure size

    Returns
    -------
    fig : matplotlib.figure.Figure
        Figure object

    Examples
    --------
    >>> fig = plot_confusion_matrix(cm)
    >>> fig.savefig('confusion_matrix.pdf')
    """
    cm = np.asarray(confusion.matrix)
    labels = list(confusion.labels)

    if normalize:
        row_sums = cm.sum(axis=1)[:, np.newaxis]
        cm = np.divide(
            cm.astype('float'), row_sums,
            out=np.zeros(cm.shape, dtype=float), where=row_sums > 0,
        )
        fmt = '.2f'
        vmax = 1.0
    else:
        fmt = 'd'
        vmax = None

    # Plot
    fig, ax = plt.subplots(figsize=figsize)

    sns.heatmap(
        cm,
        annot=True,
        fmt=fmt,
        cmap='Blues',
        xticklabels=labels,
        yticklabels=labels,
        vmin=0,
        vmax=vmax,
        ax=ax,
    )

    ax.set_xlabel('Predicted')
    ax.set_ylabel('Actual')
    ax.set_title('Confusion Matrix' + (' (Normalized)' if normalize else ''))

    plt.tight_layout()

    if save:
        fig.savefig(save, dpi=300, bbox_inches='tight')
        logger.info(f"Saved confusion matrix to {save}")

    return fig


def plot_class_metrics(
    confusion,
    metrics: Optional[List[str]] = None,
    save: Optional[str] = None,
    figsize: tuple = (12, 6),
) -> plt.Figure:
    """Plot per-class metrics as bar charts, one panel per metric.

    Undefined (multi-label) values are drawn as missing bars.

    Parameters
    ----------
    confusion : BaseConfusionMatrix
        Any confusion matrix variant
    metrics : list of str, optional
        Metrics to plot. Default: ['recall', 'precision', 'f1']
    save : str, optional
        Path to save figure
    figsize : tuple, default=(12, 6)
        Figure size

    Returns
    -------
    fig : matplotlib.figure.Figure
        Figure object

    Examples
    --------
    >>> fig = plot_class_metrics(cm, metrics=['recall', 'precision'])
    """
    if metrics is None:
        metrics = ['recall', 'precision', 'f1']

    frame = confusion.metrics_frame()

    n_metrics = len(metrics)
    fig, axes = plt.subplots(1, n_metrics, figsize=figsize)

    if n_metrics == 1:
        axes = [axes]

    for i, metric in enumerate(metrics):
        if metric not in frame.columns:
            logger.warning(f"Metric '{metric}' not in metrics frame")
            continue

        ax = axes[i]

        # Plot bars
        frame[metric].plot(kind='bar', ax=ax, color='steelblue')

        ax.set_title(metric.upper())
        ax.set_xlabel('Label')
        ax.set_ylabel('Score')
        ax.set_ylim(0, 1)
        ax.tick_params(axis='x', rotation=45)
        ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()

    if save:
        fig.savefig(save, dpi=300, bbox_inches='tight')
        logger.info(f"Saved class metrics plot to {save}")

    return fig
