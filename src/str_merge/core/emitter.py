"""
Final pass over the block store: filter blocks on support and copy-number
tallies, and write the survivors as FASTQ-shaped records.
"""

import logging
from typing import List, TextIO

from ..config.config_loader import MergeConfig
from .block import Block, CopyTally
from .block_store import BlockStore
from .flank_key import key_motif

logger = logging.getLogger('str_merge')


def select_copies(block: Block, max_alleles: int = 3) -> List[CopyTally]:
    """
    First tallies seen by at least two reads, in the order they were added.

    At most max_alleles are returned; later tallies are not consulted even
    if better supported.
    """
    kept = []
    for tally in block.supports:
        if tally.nsupport >= 2:
            kept.append(tally)
            if len(kept) == max_alleles:
                break
    return kept


def passes_filter(block: Block, kept: List[CopyTally], config: MergeConfig) -> bool:
    """
    Support within thresholds, and either exactly two alleles or, with
    include_all, one or two.
    """
    if not config.min_threshold <= block.support <= config.max_threshold:
        return False
    if config.include_all:
        return 1 <= len(kept) <= 2
    return len(kept) == 2


def render_block(index: int, motif: str, block: Block, kept: List[CopyTally],
                 filler: str = '!') -> str:
    """
    Format a block as a FASTQ record with the repeat expanded to the
    largest kept copy number.
    """
    maxcopies = max(tally.copies for tally in kept)
    copies = ','.join(str(tally.copies) for tally in kept[:2])
    span = maxcopies * len(motif)

    header = f"@Block{index}\t{motif}\t{copies}\t{block.zstart}\t{block.zstart + span}"
    seq = block.seq[:block.zstart] + motif * maxcopies + block.seq[block.end:]
    qual = block.qual[:block.zstart] + filler * span + block.qual[block.end:]
    return f"{header}\n{seq}\n+\n{qual}\n"


def write_blocks(store: BlockStore, config: MergeConfig, handle: TextIO) -> int:
    """
    Drain the store, writing every block that passes the filters.

    Returns:
        Number of blocks written
    """
    index = 1
    for key, block in store.drain():
        motif = key_motif(key)
        kept = select_copies(block, config.max_alleles)

        if passes_filter(block, kept, config):
            if block.end != block.zstart + len(motif):
                raise AssertionError(
                    f"Block for {key} has repeat span [{block.zstart}, {block.end}) "
                    f"for motif {motif}"
                )
            handle.write(render_block(index, motif, block, kept, config.filler))
            index += 1

    return index - 1


__all__ = [
    'select_copies',
    'passes_filter',
    'render_block',
    'write_blocks',
]
