"""Entropy and perplexity statistics for normalized frequency tables."""

import math
from typing import Union

from wordgram.tables import FrequencyTable, UnigramTable


def _entropy(probs) -> float:
    return -sum(p * math.log2(p) for p in probs if p > 0.0)


def table_statistics(table: Union[FrequencyTable, UnigramTable]) -> dict:
    """
    Compute entropy statistics for a normalized table.

    Sub-entropy is the entropy of the next-word distribution within one
    context group. Its expected value weights each group by its share of
    the raw counts; the mean is a plain average over groups. Total entropy
    is taken over the joint (context, next word) distribution, which for
    higher orders is mostly a sparsity measure.

    Returns:
        {
            "sum_frequency": float,          # raw count total
            "groups": int,
            "entries": int,
            "total_entropy": float,          # bits
            "expected_sub_entropy": float,   # bits
            "mean_sub_entropy": float,       # bits
            "total_perplexity": float,       # 2 ** total_entropy
            "expected_sub_perplexity": float,
        }
    """
    if isinstance(table, UnigramTable):
        total = table.total
        entropy = _entropy(table.weights.values()) if total > 0 else 0.0
        return {
            "sum_frequency": total,
            "groups": len(table),
            "entries": len(table),
            "total_entropy": entropy,
            "expected_sub_entropy": entropy,
            "mean_sub_entropy": entropy,
            "total_perplexity": 2.0**entropy,
            "expected_sub_perplexity": 2.0**entropy,
        }

    total = sum(table.group_totals.values())
    expected_sub = 0.0
    sub_entropies = []
    joint = 0.0

    for key, group in table.groups.items():
        group_total = table.group_totals.get(key, 0.0)
        if group_total <= 0.0:
            continue
        sub_entropy = _entropy(group.values())
        sub_entropies.append(sub_entropy)

        mass = group_total / total
        expected_sub += mass * sub_entropy
        # H(context, word) = H(context) + sum_g P(g) * H(word | g)
        joint += -mass * math.log2(mass) + mass * sub_entropy

    mean_sub = sum(sub_entropies) / len(sub_entropies) if sub_entropies else 0.0

    return {
        "sum_frequency": total,
        "groups": len(table),
        "entries": table.num_entries(),
        "total_entropy": joint,
        "expected_sub_entropy": expected_sub,
        "mean_sub_entropy": mean_sub,
        "total_perplexity": 2.0**joint,
        "expected_sub_perplexity": 2.0**expected_sub,
    }
