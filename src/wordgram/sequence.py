"""Turning token streams into word-key sequences."""

import sys
from collections import Counter
from typing import Iterable, Optional, TextIO

from wordgram.keys import NGRAM
from wordgram.vocab import Vocabulary

# Tokens seen this many times or fewer are dropped from training text.
PRUNE_THRESHOLD = 1


def prune_sequence(tokens: list[str], verbose: bool = False, logfile: Optional[TextIO] = None) -> list[str]:
    """Drop every occurrence of tokens seen at most once, preserving order.

    Trimming the tail of the word distribution keeps the vocabulary within
    the 16-bit key space and barely affects the top of the predictions.

    Args:
        tokens: Full training token sequence
        verbose: Report how many distinct tokens were eliminated
        logfile: Where to write the report (default: stderr)

    Returns:
        New list with only tokens whose total count exceeds the threshold
    """
    logfile = logfile if logfile is not None else sys.stderr
    counts = Counter(tokens)

    if verbose:
        print("Beginning low-frequency term (<= 1 count) pruning...", file=logfile)

    pruned = [token for token in tokens if counts[token] > PRUNE_THRESHOLD]

    if verbose:
        eliminated = sum(1 for count in counts.values() if count <= PRUNE_THRESHOLD)
        print(
            f"Prune completed. {eliminated} elements of {len(counts)} unique elements eliminated,",
            f"for {len(counts) - eliminated} keys",
            file=logfile,
        )

    return pruned


def register_words(vocab: Vocabulary, tokens: Iterable[str]) -> None:
    """Give every token a key, in order of first appearance."""
    for token in tokens:
        if token not in vocab:
            vocab.key_of(token)


def to_key_sequence(vocab: Vocabulary, tokens: list[str]) -> list[int]:
    """Resolve tokens to keys, stopping NGRAM + 1 tokens before the end.

    The trailing tokens only ever serve as context for earlier positions,
    so they are never converted. Short inputs give an empty sequence.
    """
    stop = len(tokens) - NGRAM - 1
    return [vocab.key_of(tokens[i]) for i in range(max(stop, 0))]
