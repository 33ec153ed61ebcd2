import io

import pytest

from str_merge.config.config_loader import MergeConfig
from str_merge.core.block import Block, CopyTally
from str_merge.core.block_store import BlockStore
from str_merge.core.emitter import passes_filter, render_block, select_copies, write_blocks


def make_block(tallies, support=None, seq="AAAAACAGGGG", qual="IIIII!!JJJJ",
               zstart=5, end=7):
    supports = [CopyTally(copies, n) for copies, n in tallies]
    if support is None:
        support = sum(n for _, n in tallies)
    return Block(seq, qual, zstart, end, support=support, supports=supports)


def emit(blocks, **config_args):
    store = BlockStore(5)
    for key, block in blocks:
        store.insert_new(key, block)
    handle = io.StringIO()
    count = write_blocks(store, MergeConfig(**config_args), handle)
    return count, handle.getvalue()


class TestSelectCopies:
    """Test choice of reported copy numbers"""

    def test_singletons_are_ignored(self):
        block = make_block([(5, 1), (7, 2), (9, 1), (11, 4)])
        assert [t.copies for t in select_copies(block)] == [7, 11]

    def test_first_three_in_insertion_order(self):
        block = make_block([(5, 1), (7, 2), (9, 3), (11, 2), (13, 5)])
        assert [t.copies for t in select_copies(block)] == [7, 9, 11]

    def test_max_alleles_limit(self):
        block = make_block([(7, 2), (9, 3), (11, 2)])
        assert [t.copies for t in select_copies(block, max_alleles=2)] == [7, 9]


class TestPassesFilter:
    """Test support and allele count filters"""

    def test_biallelic_passes(self):
        block = make_block([(10, 2), (12, 2)])
        assert passes_filter(block, select_copies(block), MergeConfig())

    @pytest.mark.parametrize("support", [3, 10001])
    def test_support_out_of_range(self, support):
        block = make_block([(10, 2), (12, 2)], support=support)
        assert not passes_filter(block, select_copies(block), MergeConfig())

    def test_support_bounds_inclusive(self):
        block = make_block([(10, 2), (12, 2)], support=4)
        assert passes_filter(block, select_copies(block), MergeConfig(min_threshold=4, max_threshold=4))

    def test_single_allele_needs_include_all(self):
        block = make_block([(10, 2), (12, 1)])
        kept = select_copies(block)
        assert not passes_filter(block, kept, MergeConfig(min_threshold=1))
        assert passes_filter(block, kept, MergeConfig(min_threshold=1, include_all=True))

    def test_three_alleles_never_pass(self):
        block = make_block([(5, 1), (7, 2), (9, 3), (11, 2), (13, 5)])
        kept = select_copies(block)
        assert not passes_filter(block, kept, MergeConfig())
        assert not passes_filter(block, kept, MergeConfig(include_all=True))

    def test_no_alleles_never_pass(self):
        block = make_block([(10, 1), (12, 1), (14, 1), (16, 1)])
        kept = select_copies(block)
        assert kept == []
        assert not passes_filter(block, kept, MergeConfig(include_all=True))


class TestRender:
    """Test record formatting"""

    def test_repeat_expanded_to_largest_copy(self):
        block = make_block([(3, 2), (2, 2)])
        record = render_block(1, "CA", block, select_copies(block))

        assert record == (
            "@Block1\tCA\t3,2\t5\t11\n"
            "AAAAACACACAGGGG\n"
            "+\n"
            "IIIII!!!!!!JJJJ\n"
        )

    def test_sequence_and_quality_lengths_match(self):
        block = make_block([(2, 2), (7, 3)])
        lines = render_block(4, "CA", block, select_copies(block)).splitlines()
        assert lines[0] == "@Block4\tCA\t2,7\t5\t19"
        assert len(lines[1]) == len(lines[3]) == 5 + 14 + 4


class TestWriteBlocks:
    """Test draining the store to output"""

    def test_only_passing_blocks_are_numbered(self):
        blocks = [
            ("CA AAAAA GGGGG", make_block([(3, 2), (2, 2)])),
            ("CA CCCCC GGGGG", make_block([(3, 4)])),
            ("CA TTTTT GGGGG", make_block([(4, 2), (6, 2)])),
        ]
        count, text = emit(blocks)

        assert count == 2
        headers = [line for line in text.splitlines() if line.startswith("@")]
        assert headers == ["@Block1\tCA\t3,2\t5\t11", "@Block2\tCA\t4,6\t5\t17"]

    def test_include_all_single_allele(self):
        count, text = emit([("CA AAAAA GGGGG", make_block([(10, 4)]))], include_all=True)
        assert count == 1
        assert text.splitlines()[0] == "@Block1\tCA\t10\t5\t25"

    def test_empty_store(self):
        assert emit([]) == (0, "")

    def test_store_is_drained(self):
        store = BlockStore(5)
        store.insert_new("CA AAAAA GGGGG", make_block([(3, 2), (2, 2)]))
        write_blocks(store, MergeConfig(), io.StringIO())
        assert len(store) == 0

    def test_unparsable_key(self):
        with pytest.raises(ValueError, match="Error in parsing key"):
            emit([("CAAAAAAGGGGG", make_block([(3, 2), (2, 2)]))])

    def test_broken_repeat_span(self):
        block = make_block([(3, 2), (2, 2)], end=8)
        with pytest.raises(AssertionError):
            emit([("CA AAAAA GGGGG", block)])


if __name__ == "__main__":
    import sys
    sys.exit(pytest.main([__file__, "-v"]))
