"""Tests for table entropy statistics"""

import pytest

from wordgram.stats import table_statistics
from wordgram.tables import FrequencyTable, NgramTables, UnigramTable


class TestFrequencyTableStatistics:
    """Test statistics of context tables"""

    def test_two_groups(self):
        table = FrequencyTable(2)
        table.update(1, 10)
        table.update(1, 11)
        table.update(2, 12)
        table.update(2, 12)
        table.normalize()

        stats = table_statistics(table)
        assert stats["sum_frequency"] == 4
        assert stats["groups"] == 2
        assert stats["entries"] == 3
        # Context 1 is a fair coin, context 2 is certain
        assert stats["expected_sub_entropy"] == pytest.approx(0.5)
        assert stats["mean_sub_entropy"] == pytest.approx(0.5)
        assert stats["total_entropy"] == pytest.approx(1.5)
        assert stats["total_perplexity"] == pytest.approx(2**1.5)
        assert stats["expected_sub_perplexity"] == pytest.approx(2**0.5)

    def test_weighted_by_group_mass(self):
        table = FrequencyTable(2)
        for word in (10, 11):
            table.update(1, word)
        for _ in range(6):
            table.update(2, 12)
        table.normalize()

        stats = table_statistics(table)
        assert stats["expected_sub_entropy"] == pytest.approx(0.25)
        assert stats["mean_sub_entropy"] == pytest.approx(0.5)

    def test_deterministic_table(self):
        table = FrequencyTable(3)
        table.update(1, 2)
        table.update(3, 4)
        table.normalize()

        stats = table_statistics(table)
        assert stats["expected_sub_entropy"] == 0.0
        assert stats["expected_sub_perplexity"] == 1.0

    def test_empty_table(self):
        table = FrequencyTable(4)
        table.normalize()
        stats = table_statistics(table)
        assert stats["groups"] == 0
        assert stats["total_entropy"] == 0.0
        assert stats["mean_sub_entropy"] == 0.0


class TestUnigramStatistics:
    """Test statistics of the unigram table"""

    def test_uniform(self):
        table = UnigramTable()
        for key in (1, 2, 3, 4):
            table.update(key)
        table.normalize()

        stats = table_statistics(table)
        assert stats["sum_frequency"] == 4
        assert stats["total_entropy"] == pytest.approx(2.0)
        assert stats["total_perplexity"] == pytest.approx(4.0)

    def test_built_tables(self):
        tables = NgramTables(exact_keys=True)
        tables.build([1, 2, 3, 4] * 10)
        tables.normalize()

        for order in (2, 3, 4):
            stats = table_statistics(tables[order])
            assert stats["expected_sub_entropy"] == pytest.approx(0.0)
            assert stats["groups"] == 4
        assert table_statistics(tables[1])["total_entropy"] == pytest.approx(2.0, abs=0.01)
