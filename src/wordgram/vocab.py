"""Bidirectional word <-> integer key registry."""

import sys
from typing import Iterator, Optional, TextIO

# Word keys are unsigned 16-bit integers; 0 is reserved as the invalid key.
INVALID_KEY = 0
MAX_KEY = 65535


class Vocabulary:
    """
    Maps word strings to compact integer keys and back.

    Keys are allocated monotonically starting at 1, so the first word seen
    gets key 1, the second key 2, and so on. Keys are never reused or
    deleted. Once all 65535 keys are taken, new words resolve to
    INVALID_KEY and an error is logged; known words keep working.

    Example:
        vocab = Vocabulary()
        key = vocab.key_of("the")
        assert vocab.word_of(key) == "the"
    """

    def __init__(self, max_key: int = MAX_KEY, logfile: Optional[TextIO] = None):
        self.max_key = max_key
        self.logfile = logfile if logfile is not None else sys.stderr
        self.next_key = 1
        self.word_to_key: dict[str, int] = {}
        self.key_to_word: dict[int, str] = {}

    def __len__(self) -> int:
        return len(self.word_to_key)

    def __contains__(self, word: str) -> bool:
        return word in self.word_to_key

    def __iter__(self) -> Iterator[str]:
        return iter(self.word_to_key)

    def key_of(self, word: str) -> int:
        """Return the key for word, allocating a new one if the word is unseen."""
        key = self.word_to_key.get(word)
        if key is not None:
            return key

        key = self._alloc_key(word)
        if key == INVALID_KEY:
            print("ERROR could not alloc new key in key_of()", file=self.logfile)
        return key

    def lookup(self, word: str) -> int:
        """Return the key for a known word, or INVALID_KEY. Never allocates."""
        return self.word_to_key.get(word, INVALID_KEY)

    def word_of(self, key: int) -> Optional[str]:
        """Return the word for key, or None (with an error logged) if unknown."""
        word = self.key_to_word.get(key)
        if word is None:
            print(f"ERROR key {key} not found in vocabulary", file=self.logfile)
        return word

    def _alloc_key(self, word: str) -> int:
        if self.next_key > self.max_key:
            print("ERROR out of word keys for new words!", file=self.logfile)
            print(f"vocabulary size={len(self.word_to_key)}", file=self.logfile)
            return INVALID_KEY

        key = self.next_key
        self.word_to_key[word] = key
        self.key_to_word[key] = word
        self.next_key += 1
        return key
