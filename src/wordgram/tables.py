"""Frequency tables for n-gram orders 1-4.

Orders 2-4 are two-level tables: a composite context key maps to the
next-word keys seen after that context, each with a count. After
normalize() the counts become conditional probabilities P(next | context).

The unigram table is a flat word-key -> weight mapping. It still answers
the same (key, candidate) lookups as the other tables, treating each word
as a group containing only itself.
"""

import sys
from typing import Optional, TextIO, Union

from wordgram.keys import NGRAM, pack_exact_key, pack_key

# How often (in positions) the build pass reports progress.
PROGRESS_INTERVAL = 10000


class FrequencyTable:
    """Context key -> {next word key -> weight} table for one order."""

    def __init__(self, order: int, logfile: Optional[TextIO] = None):
        self.order = order
        self.logfile = logfile if logfile is not None else sys.stderr
        self.groups: dict[int, dict[int, float]] = {}
        self.group_totals: dict[int, float] = {}
        self.normalized = False

    def __len__(self) -> int:
        return len(self.groups)

    def __contains__(self, key: int) -> bool:
        return key in self.groups

    def num_entries(self) -> int:
        return sum(len(group) for group in self.groups.values())

    def update(self, key: int, next_word: int) -> None:
        """Count one occurrence of next_word after context key."""
        group = self.groups.setdefault(key, {})
        group[next_word] = group.get(next_word, 0) + 1

    def group(self, key: int) -> Optional[dict[int, float]]:
        return self.groups.get(key)

    def normalize(self) -> None:
        """Convert raw counts into conditional probabilities per context.

        Groups whose sum is not positive are left as they are and an error
        is logged for each.
        """
        for key, group in self.groups.items():
            total = sum(group.values())
            self.group_totals[key] = total

            if total > 0.0:
                for word in group:
                    group[word] /= total
            else:
                print(f"ERROR div zero attempted in normalize() for {self.order}-gram table", file=self.logfile)

        self.normalized = True

    def get_prob(self, key: int, candidate: int) -> float:
        group = self.groups.get(key)
        if group is None:
            return 0.0
        return group.get(candidate, 0.0)

    def get_max(self, key: int) -> int:
        """Most likely next word after context key, or 0 if the context is unknown.

        Ties go to the candidate inserted first.
        """
        group = self.groups.get(key)
        if group is None:
            return 0

        best_word = 0
        best = 0.0
        for word, value in group.items():
            if value > best:
                best_word = word
                best = value
        return best_word


class UnigramTable:
    """Word key -> weight table. Normalizes against the global total."""

    order = 1

    def __init__(self, logfile: Optional[TextIO] = None):
        self.logfile = logfile if logfile is not None else sys.stderr
        self.weights: dict[int, float] = {}
        self.total = 0.0
        self.normalized = False

    def __len__(self) -> int:
        return len(self.weights)

    def __contains__(self, key: int) -> bool:
        return key in self.weights

    def num_entries(self) -> int:
        return len(self.weights)

    def update(self, key: int) -> None:
        self.weights[key] = self.weights.get(key, 0) + 1

    def group(self, key: int) -> Optional[dict[int, float]]:
        if key not in self.weights:
            return None
        return {key: self.weights[key]}

    def normalize(self) -> None:
        total = sum(self.weights.values())
        self.total = total

        if total > 0.0:
            for word in self.weights:
                self.weights[word] /= total
        else:
            print("ERROR div zero attempted in normalize() for unigram table", file=self.logfile)

        self.normalized = True

    def get_prob(self, key: int, candidate: Optional[int] = None) -> float:
        if candidate is not None and candidate != key:
            return 0.0
        return self.weights.get(key, 0.0)

    def get_max(self, key: int) -> int:
        return key if key in self.weights else 0


Table = Union[UnigramTable, FrequencyTable]


class NgramTables:
    """
    The four frequency tables of a model and the key layout used to address them.

    Example:
        tables = NgramTables()
        tables.build(key_sequence)
        tables.normalize()
        prob = tables.get_prob(2, tables.context_key(2, [the_key]), cat_key)
    """

    def __init__(self, exact_keys: bool = False, verbose: bool = False, logfile: Optional[TextIO] = None):
        self.exact_keys = exact_keys
        self.verbose = verbose
        self.logfile = logfile if logfile is not None else sys.stderr
        self._pack = pack_exact_key if exact_keys else pack_key

        self.unigrams = UnigramTable(logfile=self.logfile)
        self.tables: dict[int, Table] = {1: self.unigrams}
        for order in range(2, NGRAM + 1):
            self.tables[order] = FrequencyTable(order, logfile=self.logfile)

    def __getitem__(self, order: int) -> Table:
        return self.tables[order]

    def pack(self, order: int, k1: int, k2: int = 0, k3: int = 0) -> int:
        return self._pack(order, k1, k2, k3, logfile=self.logfile)

    def context_key(self, order: int, context: list[int]) -> int:
        """Lookup key for an order from the preceding word keys (oldest first).

        Only the last order - 1 keys of context are used.
        """
        if order == 1:
            return 0
        if order == 2:
            return self.pack(2, context[-1])
        if order == 3:
            return self.pack(3, context[-2], context[-1])
        return self.pack(order, context[-3], context[-2], context[-1])

    def build(self, keys: list[int]) -> None:
        """Count all 1- to 4-grams of a key sequence in a single pass."""
        stop = len(keys) - NGRAM - 1

        for i in range(max(stop, 0)):
            self.unigrams.update(keys[i])
            self.tables[2].update(self.pack(2, keys[i]), keys[i + 1])
            self.tables[3].update(self.pack(3, keys[i], keys[i + 1]), keys[i + 2])
            self.tables[4].update(self.pack(4, keys[i], keys[i + 1], keys[i + 2]), keys[i + 3])

            if self.verbose and i % PROGRESS_INTERVAL == PROGRESS_INTERVAL - 1:
                print(f"{(i * 100) / len(keys):.1f}% complete", file=self.logfile)

    def normalize(self) -> None:
        for order in sorted(self.tables):
            self.tables[order].normalize()

    def get_prob(self, order: int, key: int, candidate: int) -> float:
        """Stored probability of candidate after context key, or 0.0 when absent."""
        table = self.tables.get(order)
        if table is None:
            print(f"ERROR model {order} not found in get_prob()", file=self.logfile)
            return 0.0
        return table.get_prob(key, candidate)

    def get_max(self, order: int, key: int) -> int:
        table = self.tables.get(order)
        if table is None:
            print(f"ERROR model {order} not found in get_max()", file=self.logfile)
            return 0
        return table.get_max(key)

    def counts(self) -> dict[int, int]:
        """Number of distinct (context, word) entries per order."""
        return {order: table.num_entries() for order, table in sorted(self.tables.items())}
