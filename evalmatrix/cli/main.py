"""Main CLI entry point for evalmatrix.

Provides subcommands:
    evalmatrix evaluate    Build a confusion matrix from a prediction file and print metrics
    evalmatrix generate    Generate a synthetic prediction file
    evalmatrix info        Inspect a prediction file's columns
    evalmatrix list-modes  Show available classification modes
    evalmatrix run         Run an evaluation from a YAML config file
"""

import argparse
import logging
import math
import sys
from pathlib import Path

import yaml

from ..data import (
    generate_synthetic_multilabel,
    generate_synthetic_predictions,
    list_columns,
    load_predictions,
)
from ..matrices import AVAILABLE_MATRICES
from ..pipeline import Pipeline, run_pipeline_from_config

logger = logging.getLogger(__name__)

EXIT_NO_MATRIX = 2


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool) -> None:
    """Set up logging based on --verbose flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )


def _parse_labels(raw):
    """Parse 'a,b,c' into a list of labels."""
    if not raw:
        return None
    return [label.strip() for label in raw.split(",") if label.strip()]


def _format_value(value):
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "n/a"
    return f"{value:.4f}"


def _print_results(results):
    """Pretty-print matrix, per-class metrics and averages to stdout."""
    print()
    print("=" * 60)
    print("CONFUSION MATRIX")
    print("=" * 60)
    print(results["graph"].rstrip("\n"))

    print()
    print("=" * 60)
    print("PER-CLASS METRICS")
    print("=" * 60)
    print(f"  {'label':20s}  {'recall':>8s}  {'precision':>9s}  {'f1':>8s}")
    for label, row in results["metrics"].iterrows():
        print(
            f"  {str(label):20s}  {_format_value(row['recall']):>8s}  "
            f"{_format_value(row['precision']):>9s}  {_format_value(row['f1']):>8s}"
        )

    averages = results["averages"] or {}
    accuracy = getattr(results["matrix"], "accuracy", None)
    print()
    print("=" * 60)
    print("AVERAGES")
    print("=" * 60)
    for name in ("recall", "precision", "f1"):
        print(f"  {name:20s}  {_format_value(averages.get(name))}")
    if accuracy is not None:
        print(f"  {'accuracy':20s}  {_format_value(accuracy)}")
    print("=" * 60)


def _save_metrics(results, output):
    out = Path(output)
    out.parent.mkdir(parents=True, exist_ok=True)
    results["metrics"].to_csv(out)
    print(f"\nSaved per-class metrics to {out}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_evaluate(args):
    """Build the confusion matrix for a prediction file and print metrics."""
    frame = load_predictions(args.data)

    pipeline = Pipeline(
        mode=args.mode,
        predicted_column=args.predicted,
        actual_column=args.actual,
        labels=_parse_labels(args.labels),
        label_separator=args.separator,
        prediction_threshold=args.threshold,
    )

    results = pipeline.evaluate(frame)
    if results is None:
        print(
            f"Error: could not build a {args.mode} confusion matrix from {args.data}",
            file=sys.stderr,
        )
        return EXIT_NO_MATRIX

    _print_results(results)

    if args.output:
        _save_metrics(results, args.output)
    return 0


def cmd_generate(args):
    """Generate a synthetic prediction file."""
    if args.mode == "multilabel":
        frame = generate_synthetic_multilabel(
            n_samples=args.n_samples,
            labels=_parse_labels(args.labels),
            error_rate=1.0 - args.accuracy,
            seed=args.seed,
        )
    else:
        n_classes = 2 if args.mode == "binary" else args.n_classes
        frame = generate_synthetic_predictions(
            n_samples=args.n_samples,
            n_classes=n_classes,
            accuracy=args.accuracy,
            labels=_parse_labels(args.labels),
            aggregate=args.aggregate,
            seed=args.seed,
        )

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output, index=False)

    print(f"Saved synthetic {args.mode} predictions to {output}")
    print(f"  {len(frame)} rows, columns: {list(frame.columns)}")
    return 0


def cmd_info(args):
    """Inspect the columns of a prediction file."""
    frame = load_predictions(args.data)

    print(f"File:       {args.data}")
    print(f"Rows:       {len(frame):,}")
    list_columns(frame, verbose=True)
    return 0


def cmd_list_modes(_args):
    """List available classification modes."""
    print("Available modes:\n")
    for name in sorted(AVAILABLE_MATRICES):
        cls = AVAILABLE_MATRICES[name]
        doc = (cls.__doc__ or "").strip().split("\n")[0]
        print(f"  {name:15s}  {doc}")
    return 0


def cmd_run(args):
    """Run an evaluation from a YAML config file."""
    with open(args.config) as f:
        config = yaml.safe_load(f)

    results = run_pipeline_from_config(config)["results"]
    if results is None:
        print("Error: could not build a confusion matrix from the configured data", file=sys.stderr)
        return EXIT_NO_MATRIX

    _print_results(results)

    if args.output:
        _save_metrics(results, args.output)
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_common_args(parser):
    """Add flags shared across several subcommands."""
    parser.add_argument(
        "--mode", default="multiclass", choices=sorted(AVAILABLE_MATRICES),
        help="Classification mode (default: multiclass)",
    )
    parser.add_argument(
        "--labels",
        help="Comma-separated labels (label universe for multilabel)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=argparse.SUPPRESS,
        help="Show debug-level logging",
    )


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="evalmatrix",
        description="evalmatrix: confusion matrices and classification metrics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  evalmatrix list-modes
  evalmatrix generate -o preds.csv --n-classes 4
  evalmatrix info --data preds.csv
  evalmatrix evaluate --data preds.csv
  evalmatrix evaluate --data preds.csv --mode binary --predicted Predicted --actual "True Label"
  evalmatrix evaluate --data tags.csv --mode multilabel --labels black,orange,white
  evalmatrix run --config evaluation.yaml
""",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Show debug-level logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- evaluate ------------------------------------------------------------
    p = subparsers.add_parser(
        "evaluate",
        help="Build a confusion matrix from a prediction file and print metrics",
    )
    p.add_argument("--data", required=True, help="Prediction file (.csv, .tsv, .json)")
    p.add_argument("--predicted", help="Predicted-label column (auto-detected if omitted)")
    p.add_argument("--actual", help="Ground-truth column (auto-detected if omitted)")
    p.add_argument("--separator", default="|",
                   help="Label separator within multilabel cells (default: '|')")
    p.add_argument("--threshold", type=float, default=0.5,
                   help="Prediction threshold used upstream for multilabel (default: 0.5)")
    p.add_argument("-o", "--output", help="Save per-class metrics to CSV")
    _add_common_args(p)
    p.set_defaults(func=cmd_evaluate)

    # --- generate ------------------------------------------------------------
    p = subparsers.add_parser(
        "generate",
        help="Generate a synthetic prediction file",
    )
    p.add_argument("-o", "--output", required=True, help="Output .csv file")
    p.add_argument("--n-samples", type=int, default=1000,
                   help="Number of items (default: 1000)")
    p.add_argument("--n-classes", type=int, default=3,
                   help="Number of classes for multiclass (default: 3)")
    p.add_argument("--accuracy", type=float, default=0.8,
                   help="Target accuracy (default: 0.8)")
    p.add_argument("--aggregate", action="store_true",
                   help="Aggregate identical pairs into a Count column")
    p.add_argument("--seed", type=int, default=42,
                   help="Random seed (default: 42)")
    _add_common_args(p)
    p.set_defaults(func=cmd_generate)

    # --- info ----------------------------------------------------------------
    p = subparsers.add_parser(
        "info",
        help="Inspect a prediction file's columns",
    )
    p.add_argument("--data", required=True, help="Prediction file")
    p.set_defaults(func=cmd_info)

    # --- list-modes ----------------------------------------------------------
    p = subparsers.add_parser(
        "list-modes",
        help="List available classification modes",
    )
    p.set_defaults(func=cmd_list_modes)

    # --- run (config) --------------------------------------------------------
    p = subparsers.add_parser(
        "run",
        help="Run an evaluation from a YAML config file",
    )
    p.add_argument("--config", required=True, help="Path to YAML config")
    p.add_argument("-o", "--output", help="Save per-class metrics to CSV")
    p.set_defaults(func=cmd_run)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args.verbose if hasattr(args, "verbose") else False)

    try:
        code = args.func(args)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if hasattr(args, "verbose") and args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    sys.exit(code)


if __name__ == "__main__":
    main()
