"""Accuracy and recall metrics for ranked next-word predictions."""

import sys
from typing import Optional, TextIO

# Rank window counted by top-7 accuracy, a typical user-satisfaction window.
TOP_K_WINDOW = 7


class EvaluationMetrics:
    """
    Running evaluation accumulators for one test run.

    Each call to score() consumes one ranked prediction list and the word
    that actually came next:

    - predictions: number of scored positions
    - top1_hits: the first candidate was the actual word
    - recall_hits: the actual word was somewhere in the list
    - reciprocal_rank_sum: sum of 1/rank of the actual word
    - top7_hits: the actual word was ranked 7th or better

    Example:
        metrics = EvaluationMetrics()
        metrics.score(actual_key, predictor.predict(keys, i))
        print(metrics.report()["recall"])
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.predictions = 0
        self.top1_hits = 0
        self.recall_hits = 0
        self.reciprocal_rank_sum = 0.0
        self.top7_hits = 0

    def score(self, actual: int, results: list[tuple[int, float]]) -> None:
        """Record one prediction. results must be ranked best first."""
        self.predictions += 1

        if results and results[0][0] == actual:
            self.top1_hits += 1

        for rank, (word, _score) in enumerate(results, start=1):
            if word == actual:
                self.recall_hits += 1
                self.reciprocal_rank_sum += 1.0 / rank
                if rank <= TOP_K_WINDOW:
                    self.top7_hits += 1
                break

    def report(self) -> dict:
        """
        Rates for every accumulator, each divided by the number of predictions.

        Returns:
            {
                "predictions": int,
                "recall": float,         # actual word anywhere in the list
                "bool_accuracy": float,  # top-1 accuracy
                "real_accuracy": float,  # mean reciprocal rank
                "top7_accuracy": float,
            }
        """
        n = self.predictions
        if n == 0:
            return {
                "predictions": 0,
                "recall": 0.0,
                "bool_accuracy": 0.0,
                "real_accuracy": 0.0,
                "top7_accuracy": 0.0,
            }

        return {
            "predictions": n,
            "recall": self.recall_hits / n,
            "bool_accuracy": self.top1_hits / n,
            "real_accuracy": self.reciprocal_rank_sum / n,
            "top7_accuracy": self.top7_hits / n,
        }

    def snapshot(self) -> dict:
        return self.report()

    def print_results(self, outfile: Optional[TextIO] = None) -> None:
        """Print the running rates as percentages."""
        outfile = outfile if outfile is not None else sys.stdout
        report = self.report()
        print("~" * 24, file=outfile)
        print(f"nPredictions: {report['predictions']}", file=outfile)
        print(f"recall: {report['recall'] * 100:.2f}%", file=outfile)
        print(f"bool accuracy: {report['bool_accuracy'] * 100:.2f}%", file=outfile)
        print(f"real accuracy: {report['real_accuracy'] * 100:.2f}%", file=outfile)
        print(f"top7 accuracy: {report['top7_accuracy'] * 100:.2f}%", file=outfile)
