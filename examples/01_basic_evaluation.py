#!/usr/bin/env python3
"""Example 1: Basic evaluation workflow.

This example demonstrates:
1. Generating a prediction table
2. Building a multi-class confusion matrix
3. Reading per-class metrics
4. Plotting the matrix
"""

from evalmatrix import MultiClassConfusionMatrix, Pipeline
from evalmatrix.data import generate_synthetic_predictions
from evalmatrix.evaluation import plot_confusion_matrix

print("="*60)
print("EXAMPLE 1: Basic Evaluation Workflow")
print("="*60)

# Step 1: Generate or load predictions
print("\nStep 1: Loading predictions...")

# Option A: Generate synthetic predictions
df = generate_synthetic_predictions(
    n_samples=1000, labels=['bird', 'cat', 'dog'], accuracy=0.8, aggregate=True
)

# Option B: Load a real validation report (uncomment to use)
# from evalmatrix.data import load_predictions
# df = load_predictions("outputs/validation_predictions.csv")

print(f"Loaded {len(df)} rows, columns: {list(df.columns)}")

# Step 2: Build the matrix directly
print("\nStep 2: Building confusion matrix...")

cm = MultiClassConfusionMatrix.from_frame(df, 'Predicted', 'True Label')
print(cm.get_matrix_graph())

# Step 3: Per-class metrics
print("Step 3: Per-class metrics")
print("="*60)
for m in cm.calculate_metrics():
    print(f"{m.label:20s}: recall={m.recall:.4f}  precision={m.precision:.4f}  f1={m.f1:.4f}")
print(f"{'accuracy':20s}: {cm.accuracy:.4f}")
print("="*60)

# Same thing through the pipeline, with auto-detected columns
results = Pipeline(mode='multiclass').evaluate(df)
print("\nMacro averages:", results['averages'])

# Step 4: Plot
print("\nStep 4: Plotting...")
fig = plot_confusion_matrix(cm, save='confusion_matrix.png')

print("\n✓ Example completed successfully!")
