"""Interpolated next-word prediction and interpolation weight estimation."""

import sys
from typing import Optional, TextIO

from wordgram.keys import NGRAM
from wordgram.tables import NgramTables
from wordgram.vocab import INVALID_KEY

# Weights used until estimate_weights() has seen held-out data.
DEFAULT_WEIGHTS = {1: 0.05, 2: 0.3, 3: 0.4, 4: 0.2}

# Preceding words needed before a prediction can be made.
MIN_CONTEXT = NGRAM - 1


class InterpolatedPredictor:
    """
    Ranks next-word candidates by mixing the probabilities of all four orders.

    score(w) = w1*P1(w) + w2*P2(w|h1) + w3*P3(w|h2) + w4*P4(w|h3)

    Candidates come from the order-4, order-3 and order-2 groups of the
    current context, in that order. A word is scored once, by the most
    specific order that proposed it. When a candidate is missing from a
    more specific order, that order contributes the smallest value it
    reported for this context (or 0 when the context was unseen).

    Example:
        predictor = InterpolatedPredictor(tables, weights={1: 0.1, 2: 0.3, 3: 0.4, 4: 0.2})
        results = predictor.predict(keys, 10)
        best_key, best_score = results[0]
    """

    def __init__(self, tables: NgramTables, weights: Optional[dict[int, float]] = None):
        self.tables = tables
        self.weights = dict(weights if weights is not None else DEFAULT_WEIGHTS)

    def predict(self, keys: list[int], i: int) -> list[tuple[int, float]]:
        """Ranked (candidate key, score) list for the word at position i.

        Uses keys[i-3:i] as context. Positions before 3 have no full
        context and give an empty list.
        """
        if i < MIN_CONTEXT:
            return []

        context = keys[i - MIN_CONTEXT : i]
        return self.predict_context(context)

    def predict_context(self, context: list[int]) -> list[tuple[int, float]]:
        """Ranked candidates following exactly three context keys (oldest first)."""
        tables = self.tables
        w = self.weights

        key4 = tables.context_key(4, context)
        key3 = tables.context_key(3, context)
        key2 = tables.context_key(2, context)

        results: list[tuple[int, float]] = []
        seen: set[int] = set()

        group4 = tables[4].group(key4)
        if group4 is not None:
            min4 = min(group4.values(), default=0.0)
            for word, value in group4.items():
                seen.add(word)
                score = w[1] * tables.get_prob(1, word, word)
                score += w[2] * tables.get_prob(2, key2, word)
                score += w[3] * tables.get_prob(3, key3, word)
                score += w[4] * value
                results.append((word, score))
        else:
            min4 = 0.0

        group3 = tables[3].group(key3)
        if group3 is not None:
            min3 = None
            for word, value in group3.items():
                if word in seen:
                    continue
                seen.add(word)
                score = w[1] * tables.get_prob(1, word, word)
                score += w[2] * tables.get_prob(2, key2, word)
                score += w[3] * value
                score += w[4] * min4
                results.append((word, score))
                if min3 is None or value < min3:
                    min3 = value
            # every candidate was already proposed by the 4-gram group
            if min3 is None:
                min3 = 0.0
        else:
            min3 = 0.0

        group2 = tables[2].group(key2)
        if group2 is not None:
            for word, value in group2.items():
                if word in seen:
                    continue
                seen.add(word)
                score = w[1] * tables.get_prob(1, word, word)
                score += w[2] * value
                score += w[3] * min3
                score += w[4] * min4
                results.append((word, score))

        results.sort(key=lambda result: result[1], reverse=True)
        return results


def order_accuracy(tables: NgramTables, keys: list[int], order: int) -> float:
    """Fraction of held-out positions where an order's single best guess is right.

    Positions run from NGRAM + 1 up to len(keys) - NGRAM - 1; the context
    ends at position i and the guess is compared with keys[i + 1]. An
    unseen context guesses INVALID_KEY, which never counts as a hit.
    """
    hits = 0
    positions = 0

    for i in range(NGRAM + 1, len(keys) - NGRAM - 1):
        key = tables.context_key(order, keys[i - order + 2 : i + 1])
        guess = tables.get_max(order, key)
        if guess != INVALID_KEY and guess == keys[i + 1]:
            hits += 1
        positions += 1

    if positions == 0:
        return 0.0
    return hits / positions


def weights_from_accuracy(accuracy: dict[int, float]) -> dict[int, float]:
    """Turn per-order top-1 accuracies into interpolation weights.

    The unigram weight is half the bigram weight. Raises ZeroDivisionError
    when every accuracy is zero; callers guard against that.
    """
    normal = accuracy[2] + accuracy[3] + accuracy[4]
    return {
        1: accuracy[2] / (2 * normal),
        2: accuracy[2] / normal,
        3: accuracy[3] / normal,
        4: accuracy[4] / normal,
    }


def estimate_weights(
    tables: NgramTables,
    keys: list[int],
    weights: Optional[dict[int, float]] = None,
    verbose: bool = False,
    logfile: Optional[TextIO] = None,
) -> tuple[dict[int, float], dict[int, float]]:
    """
    Estimate interpolation weights from held-out single-best accuracy.

    Each of the 2-, 3- and 4-gram tables guesses the next word of every
    held-out position; its weight is its accuracy as a share of the total.
    This is a one-shot proportional heuristic, not an iterative EM loop.

    Args:
        tables: Normalized tables
        keys: Held-out key sequence (not pruned)
        weights: Weights to fall back on if no order ever guesses right
        verbose: Report accuracies and the resulting weights
        logfile: Where to write reports (default: stderr)

    Returns:
        Tuple of (weights, accuracy), both keyed by order

    Example:
        weights, accuracy = estimate_weights(tables, heldout_keys)
        predictor = InterpolatedPredictor(tables, weights)
    """
    logfile = logfile if logfile is not None else sys.stderr
    fallback = dict(weights if weights is not None else DEFAULT_WEIGHTS)

    accuracy = {}
    for order in (2, 3, 4):
        if verbose:
            print(f"Calculating {order}-gram model precision...", file=logfile)
        accuracy[order] = order_accuracy(tables, keys, order)

    if accuracy[2] + accuracy[3] + accuracy[4] <= 0.0:
        print("ERROR held-out accuracy is zero for every order; keeping previous weights", file=logfile)
        return fallback, accuracy

    new_weights = weights_from_accuracy(accuracy)

    if verbose:
        positions = max(len(keys) - 2 * NGRAM - 2, 0)
        print(
            f"Model weights (uni, bi, tri, quad), per {positions} held-out predictions:",
            " ".join(f"{new_weights[order]:.4f}" for order in sorted(new_weights)),
            file=logfile,
        )

    return new_weights, accuracy


def _rank_score(results: list[tuple[int, float]], actual: int) -> float:
    for rank, (word, _score) in enumerate(results):
        if word == actual:
            return 1.0 - rank / len(results)
    return 0.0


def refine_weights(
    predictor: InterpolatedPredictor,
    keys: list[int],
    max_positions: int = 100,
    steps: int = 40,
    step_size: float = 0.02,
    verbose: bool = False,
    logfile: Optional[TextIO] = None,
) -> dict[int, float]:
    """
    Refine weights one order at a time with a local grid search.

    For each order 1..4 the current weight is shifted across
    [-steps/2 * step_size, +steps/2 * step_size) and every non-negative
    trial is scored on the first held-out positions by the mean of
    1 - rank / len(results) for the word actually at that position. The best trial is
    kept before moving to the next order. Finally the weights are
    renormalized to sum to 1.

    The predictor's weights are updated in place and also returned.
    """
    logfile = logfile if logfile is not None else sys.stderr
    weights = predictor.weights
    start = NGRAM + 1
    stop = min(len(keys) - NGRAM - 1, start + max_positions)

    if stop <= start:
        print("ERROR not enough held-out data to refine weights", file=logfile)
        return weights

    offsets = [(step - steps // 2) * step_size for step in range(steps)]

    for order in range(1, NGRAM + 1):
        original = weights[order]
        best_value = original
        best_score = -1.0

        for offset in offsets:
            trial = original + offset
            if trial < 0.0:
                continue

            weights[order] = trial
            total = sum(_rank_score(predictor.predict(keys, i), keys[i]) for i in range(start, stop))
            score = total / (stop - start)

            if score > best_score:
                best_score = score
                best_value = trial

        weights[order] = best_value
        if verbose:
            print(f"order {order}: weight {best_value:.4f} scored {best_score:.4f}", file=logfile)

    normal = sum(weights.values())
    if normal > 0.0:
        for order in weights:
            weights[order] /= normal
    else:
        print("ERROR refined weights sum to zero", file=logfile)

    if verbose:
        print("final weights:", " ".join(f"{weights[o]:.4f}" for o in sorted(weights)), file=logfile)

    return weights
