#!/usr/bin/env python3
"""Example 2: Multi-label evaluation and run comparison.

This example demonstrates:
1. Scoring items that carry several labels at once
2. Reading undefined (not applicable) metrics
3. Comparing binary runs side by side
"""

from evalmatrix import MultiLabelConfusionMatrix, Pipeline
from evalmatrix.data import (
    frame_to_label_sets,
    generate_synthetic_multilabel,
    generate_synthetic_predictions,
)

print("="*60)
print("EXAMPLE 2: Multi-label Evaluation")
print("="*60)

# Step 1: Multi-label predictions, already thresholded
print("\nStep 1: Scoring coat colors...")

df = generate_synthetic_multilabel(n_samples=500, error_rate=0.1)
pairs = frame_to_label_sets(df, 'Predicted', 'True Label')

cm = MultiLabelConfusionMatrix(
    pairs,
    labels=['black', 'orange', 'white', 'tabby', 'calico'],
    prediction_threshold=0.5,
)
print(cm.get_matrix_graph())

# 'calico' never occurs and is never predicted: every metric is undefined
print(cm.metrics_frame()[['recall', 'precision', 'f1', 'support']])

# Step 2: Compare binary runs
print("\nStep 2: Comparing runs...")

runs = {
    f"accuracy_{acc}": generate_synthetic_predictions(
        n_samples=400, labels=['negative', 'positive'], accuracy=acc, seed=0
    )
    for acc in (0.6, 0.75, 0.9)
}
comparison = Pipeline(mode='binary').compare_runs(runs)
print(comparison)

print("\n✓ Example completed successfully!")
