"""Tests for pruning and key sequence building"""

from collections import Counter

from wordgram.sequence import prune_sequence, register_words, to_key_sequence
from wordgram.vocab import Vocabulary


class TestPruneSequence:
    """Test low-frequency token pruning"""

    def test_drops_singletons(self):
        tokens = ["a", "b", "a", "c", "b", "a"]
        assert prune_sequence(tokens) == ["a", "b", "a", "b", "a"]

    def test_no_survivor_seen_once(self):
        tokens = "x y z x y q r x s t y".split()
        pruned = prune_sequence(tokens)
        counts = Counter(tokens)
        assert all(counts[token] > 1 for token in pruned)

    def test_preserves_order(self):
        tokens = "b a c b d a e".split()
        assert prune_sequence(tokens) == ["b", "a", "b", "a"]

    def test_does_not_modify_input(self):
        tokens = ["a", "b", "a"]
        prune_sequence(tokens)
        assert tokens == ["a", "b", "a"]

    def test_empty(self):
        assert prune_sequence([]) == []

    def test_verbose_report(self, capsys):
        prune_sequence(["a", "b", "a"], verbose=True)
        err = capsys.readouterr().err
        assert "1 elements of 2 unique elements eliminated" in err

    def test_cat_scenario(self):
        tokens = "the cat sat the cat ran".split()
        counts = Counter(tokens)
        assert counts == {"the": 2, "cat": 2, "sat": 1, "ran": 1}

        pruned = prune_sequence(tokens)
        assert pruned == ["the", "cat", "the", "cat"]

        vocab = Vocabulary()
        register_words(vocab, pruned)
        assert len(vocab) == 2


class TestToKeySequence:
    """Test token to key conversion"""

    def test_stops_before_trailing_context(self):
        vocab = Vocabulary()
        tokens = "a b c d e f g h i j".split()
        keys = to_key_sequence(vocab, tokens)
        # NGRAM + 1 = 5 trailing tokens are never converted
        assert len(keys) == 5
        assert keys == [1, 2, 3, 4, 5]
        assert "f" not in vocab

    def test_short_input(self):
        vocab = Vocabulary()
        assert to_key_sequence(vocab, ["a", "b", "c"]) == []
        assert to_key_sequence(vocab, "a b c d e".split()) == []

    def test_repeated_words_share_keys(self):
        vocab = Vocabulary()
        keys = to_key_sequence(vocab, "a b a b a b a b a b".split())
        assert keys == [1, 2, 1, 2, 1]

    def test_register_keeps_first_appearance_order(self):
        vocab = Vocabulary()
        register_words(vocab, ["z", "y", "z", "x"])
        assert vocab.lookup("z") == 1
        assert vocab.lookup("y") == 2
        assert vocab.lookup("x") == 3
