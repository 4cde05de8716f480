"""wordgram - Word-level 4-gram next-word prediction

This package builds an interpolated 1- to 4-gram word model from plain
text, predicts the next word from up to three preceding words and scores
those predictions against held-out text.

Library Usage:
    from wordgram import NgramModel

    lm = NgramModel(verbose=True)
    lm.train("train.txt", heldout_path="heldout.txt")
    metrics = lm.test("test.txt")
    print(metrics.report())
    print(lm.suggest(["one", "of", "the"]))

Command Line Usage:
    wordgram train.txt --heldout heldout.txt --test test.txt
    wordgram train.txt --suggest "one of the"
    wordgram-tokenize corpus.txt -o tokens.txt
"""

from wordgram.interpolation import (
    DEFAULT_WEIGHTS,
    InterpolatedPredictor,
    estimate_weights,
    refine_weights,
    weights_from_accuracy,
)
from wordgram.keys import NGRAM, pack_exact_key, pack_key
from wordgram.lm import NgramModel
from wordgram.normalize import (
    TokenStream,
    is_valid_word,
    iter_tokens,
    normalize_line,
    normalize_text,
    text_to_words,
)
from wordgram.presets import get_preset, list_presets, print_presets
from wordgram.report import plot_metrics_history, print_evaluation_results
from wordgram.scoring import EvaluationMetrics
from wordgram.sequence import prune_sequence, register_words, to_key_sequence
from wordgram.stats import table_statistics
from wordgram.tables import FrequencyTable, NgramTables, UnigramTable
from wordgram.vocab import INVALID_KEY, MAX_KEY, Vocabulary

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_WEIGHTS",
    "EvaluationMetrics",
    "FrequencyTable",
    "INVALID_KEY",
    "InterpolatedPredictor",
    "MAX_KEY",
    "NGRAM",
    "NgramModel",
    "NgramTables",
    "TokenStream",
    "UnigramTable",
    "Vocabulary",
    "estimate_weights",
    "get_preset",
    "is_valid_word",
    "iter_tokens",
    "list_presets",
    "normalize_line",
    "normalize_text",
    "pack_exact_key",
    "pack_key",
    "plot_metrics_history",
    "print_evaluation_results",
    "print_presets",
    "prune_sequence",
    "refine_weights",
    "register_words",
    "table_statistics",
    "text_to_words",
    "to_key_sequence",
    "weights_from_accuracy",
]
