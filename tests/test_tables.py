"""Tests for n-gram frequency tables"""

import pytest

from wordgram.tables import FrequencyTable, NgramTables, UnigramTable


class TestFrequencyTable:
    """Test a single context -> next word table"""

    def test_update_counts(self):
        table = FrequencyTable(2)
        table.update(5, 9)
        table.update(5, 9)
        assert table.group(5) == {9: 2}

    def test_normalize_single_entry(self):
        table = FrequencyTable(2)
        table.update(5, 9)
        table.update(5, 9)
        table.normalize()
        assert table.get_prob(5, 9) == pytest.approx(1.0)
        assert table.group_totals[5] == 2

    def test_normalized_groups_sum_to_one(self):
        table = FrequencyTable(3)
        for key, word in [(1, 2), (1, 3), (1, 3), (2, 4), (2, 5), (2, 6), (2, 6)]:
            table.update(key, word)
        table.normalize()

        for group in table.groups.values():
            assert abs(sum(group.values()) - 1.0) < 1e-9
        assert table.get_prob(1, 3) == pytest.approx(2 / 3)

    def test_missing_lookups(self):
        table = FrequencyTable(2)
        table.update(1, 2)
        table.normalize()
        assert table.get_prob(7, 2) == 0.0
        assert table.get_prob(1, 7) == 0.0
        assert table.group(7) is None

    def test_get_max(self):
        table = FrequencyTable(2)
        table.groups[1] = {9: 0.7, 4: 0.3}
        assert table.get_max(1) == 9

    def test_get_max_tie_keeps_first(self):
        table = FrequencyTable(2)
        table.groups[1] = {4: 0.5, 9: 0.5}
        assert table.get_max(1) == 4

    def test_get_max_unknown_context(self):
        assert FrequencyTable(2).get_max(1) == 0

    def test_zero_sum_group(self, capsys):
        table = FrequencyTable(3)
        table.groups[3] = {1: 0, 2: 0}
        table.normalize()
        assert "ERROR div zero" in capsys.readouterr().err
        assert table.groups[3] == {1: 0, 2: 0}

    def test_num_entries(self):
        table = FrequencyTable(2)
        table.update(1, 2)
        table.update(1, 3)
        table.update(2, 3)
        assert len(table) == 2
        assert table.num_entries() == 3


class TestUnigramTable:
    """Test the flat unigram table"""

    def test_global_normalization(self):
        table = UnigramTable()
        for key in [1, 1, 2]:
            table.update(key)
        table.normalize()
        assert table.get_prob(1) == pytest.approx(2 / 3)
        assert table.get_prob(2, 2) == pytest.approx(1 / 3)
        assert table.total == 3

    def test_lookup_with_other_candidate(self):
        table = UnigramTable()
        table.update(1)
        table.normalize()
        assert table.get_prob(1, 2) == 0.0

    def test_group_is_singleton(self):
        table = UnigramTable()
        table.update(4)
        assert table.group(4) == {4: 1}
        assert table.group(5) is None

    def test_get_max(self):
        table = UnigramTable()
        table.update(4)
        assert table.get_max(4) == 4
        assert table.get_max(5) == 0

    def test_empty_normalize(self, capsys):
        UnigramTable().normalize()
        assert "ERROR div zero" in capsys.readouterr().err


class TestNgramTables:
    """Test building all four tables from a key sequence"""

    KEYS = [1, 2, 3, 4, 1, 2, 3, 4, 1, 2]

    def test_build_counts(self):
        tables = NgramTables(exact_keys=True)
        tables.build(self.KEYS)

        # Positions 0..4 are counted
        assert tables[1].weights == {1: 2, 2: 1, 3: 1, 4: 1}
        assert tables[2].group(1) == {2: 2}
        assert tables[3].group(tables.pack(3, 1, 2)) == {3: 2}
        assert tables[4].group(tables.pack(4, 1, 2, 3)) == {4: 2}

    def test_normalized_sums(self):
        tables = NgramTables()
        tables.build(self.KEYS)
        tables.normalize()

        assert abs(sum(tables[1].weights.values()) - 1.0) < 1e-9
        for order in (2, 3, 4):
            for group in tables[order].groups.values():
                assert abs(sum(group.values()) - 1.0) < 1e-9

    def test_short_sequence_builds_nothing(self):
        tables = NgramTables()
        tables.build([1, 2, 3, 4, 5])
        assert tables.counts() == {1: 0, 2: 0, 3: 0, 4: 0}

    def test_context_key_uses_last_words(self):
        tables = NgramTables(exact_keys=True)
        context = [7, 8, 9]
        assert tables.context_key(2, context) == 9
        assert tables.context_key(3, context) == (8 << 16) | 9
        assert tables.context_key(4, context) == (7 << 32) | (8 << 16) | 9

    def test_packed_context_keys_collide(self):
        tables = NgramTables()
        assert tables.context_key(3, [7, 8, 9]) == tables.context_key(3, [7, 1, 9])

    def test_get_prob_unknown_order(self, capsys):
        tables = NgramTables()
        assert tables.get_prob(6, 1, 1) == 0.0
        assert "ERROR model 6" in capsys.readouterr().err

    def test_verbose_progress(self, capsys):
        tables = NgramTables(verbose=True)
        tables.build([1, 2] * 5005)
        assert "% complete" in capsys.readouterr().err
