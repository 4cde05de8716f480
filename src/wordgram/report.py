"""Evaluation reports and metric plots."""

from typing import Optional

METRIC_LABELS = {
    "recall": "Recall",
    "bool_accuracy": "Top-1 accuracy",
    "real_accuracy": "Mean reciprocal rank",
    "top7_accuracy": "Top-7 accuracy",
}


def print_evaluation_results(report: dict, test_file: str = "test data") -> None:
    """
    Print final evaluation results in a formatted way.

    Args:
        report: Dictionary returned from EvaluationMetrics.report()
        test_file: Name of test file for display
    """
    print("\nPrediction Evaluation")
    print("=" * 50)
    print(f"Test file: {test_file}")
    print()
    print(f"  Predictions:     {report['predictions']:>8,}")
    print(f"  Recall:          {report['recall'] * 100:>7.2f}%")
    print(f"  Top-1 accuracy:  {report['bool_accuracy'] * 100:>7.2f}%")
    print(f"  Top-7 accuracy:  {report['top7_accuracy'] * 100:>7.2f}%")
    print(f"  Mean recip rank: {report['real_accuracy']:>8.4f}")


def plot_metrics_history(history: list[dict], use_matplotlib: bool = True, output_file: Optional[str] = None) -> None:
    """
    Show how the running metrics developed over a test run.

    Always prints a text summary of the first and last snapshot. With
    matplotlib installed, also draws one line per metric against the
    number of predictions and saves it to output_file.

    Args:
        history: Snapshots collected by NgramModel.test()
        use_matplotlib: Try to use matplotlib if installed (default: True)
        output_file: Path to save the figure (e.g., "metrics.png")

    Example:
        lm.test("test.txt")
        plot_metrics_history(lm.history, output_file="metrics.png")
    """
    if not history:
        print("No results to plot")
        return

    first = history[0]
    last = history[-1]

    print()
    print("=" * 70)
    print("METRIC HISTORY")
    print("=" * 70)
    print(f"{'Metric':<22} {'First':>10} {'Last':>10}")
    print("-" * 44)
    print(f"{'Predictions':<22} {first['predictions']:>10,} {last['predictions']:>10,}")
    for name, label in METRIC_LABELS.items():
        print(f"{label:<22} {first[name] * 100:>9.2f}% {last[name] * 100:>9.2f}%")

    if not use_matplotlib:
        return

    try:
        import matplotlib

        if output_file:
            matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        print()
        print("Note: matplotlib not installed. Install with:")
        print("  pip install matplotlib")
        return

    predictions = [snapshot["predictions"] for snapshot in history]

    fig, ax = plt.subplots(figsize=(10, 6))
    for name, label in METRIC_LABELS.items():
        ax.plot(predictions, [snapshot[name] * 100 for snapshot in history], marker="o", markersize=3, label=label)

    ax.set_xlabel("Predictions")
    ax.set_ylabel("Percent")
    ax.set_title("Running prediction metrics")
    ax.set_ylim(0, 100)
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()

    if output_file:
        fig.savefig(output_file, dpi=150)
        print()
        print(f"Plot saved to: {output_file}")
    plt.close(fig)
