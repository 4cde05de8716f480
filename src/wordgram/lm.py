#!/usr/bin/env python

import sys
from datetime import datetime
from typing import Iterable, Optional, TextIO

from wordgram.debug import debug_context, interactive_debug
from wordgram.interpolation import (
    DEFAULT_WEIGHTS,
    MIN_CONTEXT,
    InterpolatedPredictor,
    estimate_weights,
    refine_weights,
)
from wordgram.keys import NGRAM
from wordgram.normalize import TokenStream
from wordgram.scoring import EvaluationMetrics
from wordgram.sequence import prune_sequence, register_words, to_key_sequence
from wordgram.stats import table_statistics
from wordgram.tables import NgramTables
from wordgram.vocab import INVALID_KEY, Vocabulary

# Predictions between two periodic test reports
DEFAULT_REPORT_EVERY = 100
DEFAULT_TOP_K = 7


class NgramModel:
    """
    Word-level 4-gram model that predicts the next word from up to three preceding words.

    Training prunes words seen only once, gives every remaining word a
    16-bit key, counts 1- to 4-grams over the key sequence and turns the
    counts into conditional probabilities. A separate held-out text then
    sets the interpolation weights from how often each order's best guess
    is right.

    Prediction interpolates all four orders. Candidates come from the 4-,
    3- and 2-gram tables of the current context; a candidate missing from a
    more specific table is smoothed with that table's smallest value for
    the context.

    Example:
        lm = NgramModel(verbose=True)
        lm.train("train.txt", heldout_path="heldout.txt")
        metrics = lm.test("test.txt")
        print(metrics.report()["top7_accuracy"])
        print(lm.suggest(["one", "of", "the"]))

    Key layout:
        - exact_keys=False (default): masked composite keys, compatible
          with tables built by earlier versions; some 3- and 4-gram
          contexts share a key
        - exact_keys=True: collision-free composite keys
    """

    def __init__(
        self,
        exact_keys: bool = False,
        refine: bool = False,
        refine_positions: int = 100,
        report_every: int = DEFAULT_REPORT_EVERY,
        weights: Optional[dict[int, float]] = None,
        verbose: bool = False,
        logfile: Optional[TextIO] = None,
    ):
        if report_every < 1:
            raise ValueError(f"report_every must be >= 1, got {report_every}")

        self.exact_keys = exact_keys
        self.refine = refine
        self.refine_positions = refine_positions
        self.report_every = report_every
        self.verbose = verbose

        self.logfile = logfile if logfile is not None else sys.stderr
        self.start_time = datetime.now()

        if self.verbose:
            print("Started", self.start_time.strftime("%Y-%m-%d %H:%M:%S"), file=self.logfile)

        self.vocab = Vocabulary(logfile=self.logfile)
        self.tables = NgramTables(exact_keys=exact_keys, verbose=verbose, logfile=self.logfile)
        self.predictor = InterpolatedPredictor(self.tables, weights if weights is not None else DEFAULT_WEIGHTS)

        self.trained = False
        self.sequence_length = 0
        self.accuracy: dict[int, float] = {}
        self.metrics: Optional[EvaluationMetrics] = None
        self.history: list[dict] = []

    @property
    def weights(self) -> dict[int, float]:
        return self.predictor.weights

    # ========================
    # Input
    # ========================

    def _read_tokens(self, path: str) -> Optional[list[str]]:
        """Read every valid token of a file, or log and return None if it cannot be read."""
        if self.verbose:
            print(f"Reading {path}...", file=self.logfile)

        try:
            tokens = list(TokenStream(path))
        except OSError as e:
            print(f"ERROR could not open file: {path} ({e})", file=self.logfile)
            return None

        if self.verbose:
            print(f"{len(tokens)} tokens", file=self.logfile)
        return tokens

    # ========================
    # Training
    # ========================

    def train(self, source_path: str, heldout_path: Optional[str] = None) -> None:
        """
        Build the vocabulary, tables and weights from text files.

        Args:
            source_path: Training text
            heldout_path: Separate text used only to estimate interpolation
                weights. Without it the current weights are kept.

        A file that cannot be opened is logged and training is abandoned
        before anything in the model changes.
        """
        tokens = self._read_tokens(source_path)
        if tokens is None:
            return

        heldout_tokens = None
        if heldout_path is not None:
            heldout_tokens = self._read_tokens(heldout_path)
            if heldout_tokens is None:
                return

        self.train_tokens(tokens, heldout_tokens)

    def train_tokens(self, tokens: Iterable[str], heldout_tokens: Optional[Iterable[str]] = None) -> None:
        """Same as train(), from already tokenized text.

        Training again replaces the tables with ones built from the new
        text alone. Word keys already given out stay the same.
        """
        words = prune_sequence(list(tokens), verbose=self.verbose, logfile=self.logfile)
        register_words(self.vocab, words)
        keys = to_key_sequence(self.vocab, words)

        # Normalized tables cannot take more counts
        self.tables = NgramTables(exact_keys=self.exact_keys, verbose=self.verbose, logfile=self.logfile)
        self.predictor.tables = self.tables
        self.trained = False
        self.accuracy = {}
        self.sequence_length = len(keys)

        if self.verbose:
            print(
                f"sequence build complete. key sequence size={len(keys)} vocabulary size={len(self.vocab)}",
                file=self.logfile,
            )
            print("Building n-gram models...", file=self.logfile)

        self.tables.build(keys)

        if self.verbose:
            print("N-gram model training completed, processing tables...", file=self.logfile)

        self.tables.normalize()
        self.trained = True

        if self.verbose:
            print("Processing complete.", file=self.logfile)

        if heldout_tokens is not None:
            self.estimate_weights(heldout_tokens)
        elif self.verbose:
            print("No held-out data, keeping current weights.", file=self.logfile)

    def estimate_weights(self, heldout_tokens: Iterable[str]) -> dict[int, float]:
        """Set interpolation weights from held-out text (not pruned).

        Runs the optional refinement search afterwards when the model was
        created with refine=True.
        """
        if self.verbose:
            print("Beginning weight estimation...", file=self.logfile)

        keys = to_key_sequence(self.vocab, list(heldout_tokens))
        weights, accuracy = estimate_weights(
            self.tables, keys, weights=self.predictor.weights, verbose=self.verbose, logfile=self.logfile
        )
        self.predictor.weights = weights
        self.accuracy = accuracy

        if self.refine:
            refine_weights(
                self.predictor, keys, max_positions=self.refine_positions, verbose=self.verbose, logfile=self.logfile
            )

        return self.predictor.weights

    # ========================
    # Evaluation
    # ========================

    def test(self, source_path: str) -> Optional[EvaluationMetrics]:
        """
        Predict every position of a test file and score the predictions.

        Returns:
            EvaluationMetrics for this run, or None if the file could not be read
        """
        tokens = self._read_tokens(source_path)
        if tokens is None:
            return None
        return self.test_tokens(tokens)

    def test_tokens(self, tokens: Iterable[str]) -> EvaluationMetrics:
        """
        Same as test(), from already tokenized text.

        Each run starts from fresh metrics. Every report_every predictions a
        snapshot of the rates is appended to history, and printed when
        verbose.
        """
        keys = to_key_sequence(self.vocab, list(tokens))
        metrics = EvaluationMetrics()
        self.history = []

        for i in range(len(keys) - NGRAM - 1):
            results = self.predictor.predict(keys, i)
            metrics.score(keys[i], results)

            if i % self.report_every == self.report_every - 1:
                self.history.append(metrics.snapshot())
                if self.verbose:
                    metrics.print_results(self.logfile)

        self.metrics = metrics
        return metrics

    def suggest(self, words: list[str], top_k: int = DEFAULT_TOP_K) -> list[tuple[str, float]]:
        """
        Most likely next words after 1-3 preceding words.

        Only the last three words are used. Unknown words, and missing
        positions when fewer than three words are given, count as key 0.

        Args:
            words: Preceding words, oldest first
            top_k: Maximum number of suggestions

        Returns:
            List of (word, score) tuples, best first

        Example:
            lm.suggest(["at", "the"])  # [("end", 0.21), ("same", 0.09), ...]
        """
        if not words:
            raise ValueError("suggest() needs at least one preceding word")
        if top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {top_k}")

        recent = list(words)[-MIN_CONTEXT:]
        context = [INVALID_KEY] * (MIN_CONTEXT - len(recent)) + [self.vocab.lookup(w) for w in recent]

        suggestions = []
        for key, score in self.predictor.predict_context(context):
            word = self.vocab.word_of(key)
            if word is not None:
                suggestions.append((word, score))
            if len(suggestions) >= top_k:
                break
        return suggestions

    # ========================
    # Statistics
    # ========================

    def get_statistics(self) -> dict:
        """
        Get model statistics.

        Returns:
            {
                "vocab_size": int,
                "sequence_length": int,
                "exact_keys": bool,
                "ngram_counts": {order: entries, ...},
                "tables": {order: table_statistics(...), ...},
                "weights": {order: weight, ...},
                "heldout_accuracy": {order: accuracy, ...},
            }
        """
        if not self.trained:
            raise ValueError("Model has not been trained yet. Call train() first.")

        return {
            "vocab_size": len(self.vocab),
            "sequence_length": self.sequence_length,
            "exact_keys": self.exact_keys,
            "ngram_counts": self.tables.counts(),
            "tables": {order: table_statistics(self.tables[order]) for order in range(1, NGRAM + 1)},
            "weights": dict(self.predictor.weights),
            "heldout_accuracy": dict(self.accuracy),
        }

    def print_statistics(self) -> None:
        """Print model statistics in formatted output."""
        stats = self.get_statistics()

        print("\nModel Statistics")
        print("=" * 50)
        print(f"Vocabulary:  {stats['vocab_size']:,} words")
        print(f"Sequence:    {stats['sequence_length']:,} keys")
        print(f"Key layout:  {'exact' if stats['exact_keys'] else 'packed'}")
        print()
        print(f"{'Order':<8} {'Entries':>10} {'Entropy':>9} {'Sub-H':>7} {'Sub-PPL':>9} {'Weight':>8} {'Held-out':>9}")
        print("-" * 66)
        for order in range(1, NGRAM + 1):
            table = stats["tables"][order]
            accuracy = stats["heldout_accuracy"].get(order)
            accuracy_text = f"{accuracy * 100:>8.2f}%" if accuracy is not None else f"{'-':>9}"
            print(
                f"{order}-gram  {stats['ngram_counts'][order]:>10,} {table['total_entropy']:>9.3f}"
                f" {table['expected_sub_entropy']:>7.3f} {table['expected_sub_perplexity']:>9.2f}"
                f" {stats['weights'][order]:>8.4f} {accuracy_text}"
            )

    # ========================
    # Configuration
    # ========================

    @classmethod
    def from_preset(cls, preset_name: str, **overrides) -> "NgramModel":
        """
        Create an NgramModel from a preset configuration.

        Args:
            preset_name: Name of preset ("compatible", "exact", "refined")
            **overrides: Override any preset parameter (e.g., verbose=True)

        Raises:
            ValueError: If preset_name is unknown

        Example:
            lm = NgramModel.from_preset("exact", verbose=True)
        """
        from wordgram.presets import model_parameters

        params = model_parameters(preset_name)
        params.update(overrides)

        return cls(**params)

    # ========================
    # Debug & Interactive Tools
    # ========================

    def debug_context(self, words: list[str]) -> None:
        """Show how the prediction after some words is put together."""
        debug_context(self, words)

    def interactive_debug(self) -> None:
        """Start an interactive debug session."""
        interactive_debug(self)
