"""
Flank-keyed store of consensus blocks.

Each key maps to a chain of blocks: alleles that share both flanking k-mers
but whose flanks did not align well enough to merge. Reads are merged into
the first chain member that accepts them.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from ..algorithms.local_align import LocalAligner
from ..config.config_loader import MergeConfig
from .block import Block
from .flank_key import FlankBoundsError, build_flank_key
from .merger import align_flanks

logger = logging.getLogger('str_merge')

# Outcomes of BlockStore.add_read
MERGED_FORWARD = 'merged_forward'
MERGED_REVERSE = 'merged_reverse'
NEW_BLOCK = 'new_block'
SKIPPED = 'skipped'


class BlockStore:
    """Mapping from flank key to a chain of Blocks."""

    def __init__(self, klength: int, config: Optional[MergeConfig] = None,
                 aligner: Optional[LocalAligner] = None):
        self.klength = klength
        self.config = config or MergeConfig()
        self.aligner = aligner or LocalAligner(quality_floor=self.config.quality_floor)
        self._chains: Dict[str, List[Block]] = {}

    def __len__(self) -> int:
        return len(self._chains)

    def __contains__(self, key: str) -> bool:
        return key in self._chains

    @property
    def num_blocks(self) -> int:
        return sum(len(chain) for chain in self._chains.values())

    def lookup_chain(self, key: str) -> Optional[List[Block]]:
        return self._chains.get(key)

    def try_merge_into_chain(self, chain: List[Block], read, annotation) -> bool:
        """Merge into the first block of the chain that accepts the read."""
        for block in chain:
            if align_flanks(block, read, annotation, self.aligner, self.config):
                return True
        return False

    def insert_new(self, key: str, block: Block) -> None:
        """Start a chain for a new key, or append another allele to it."""
        chain = self._chains.get(key)
        if chain is None:
            self._chains[key] = [block]
        else:
            chain.append(block)

    def _attempt(self, read, annotation) -> Tuple[Optional[str], bool]:
        """Key one orientation of a read and try its chain."""
        try:
            key = build_flank_key(annotation.motif, read.bases, self.klength,
                                  annotation.zstart, annotation.end)
        except FlankBoundsError as e:
            logger.debug(f"{read.name}: {e}")
            return None, False

        logger.debug(key)
        chain = self.lookup_chain(key)
        if chain is None:
            return key, False
        return key, self.try_merge_into_chain(chain, read, annotation)

    def add_read(self, read) -> str:
        """
        Place a read in the store.

        The read is tried as given with its forward annotation, then reverse
        complemented and tried with its reverse annotation. If neither merges,
        a new block is seeded from the reverse-complemented read and its
        reverse annotation.

        Returns:
            One of MERGED_FORWARD, MERGED_REVERSE, NEW_BLOCK, SKIPPED
        """
        _, merged = self._attempt(read, read.forward)
        if merged:
            return MERGED_FORWARD

        read = read.reverse_complemented()
        key, merged = self._attempt(read, read.reverse)
        if merged:
            return MERGED_REVERSE

        if key is None:
            logger.debug(f"{read.name}: flanks out of bounds, read skipped")
            return SKIPPED

        self.insert_new(key, Block.from_read(read, read.reverse, self.config.filler))
        return NEW_BLOCK

    def drain(self) -> Iterator[Tuple[str, Block]]:
        """Yield every (key, block) in store order, releasing the store."""
        chains, self._chains = self._chains, {}
        for key, chain in chains.items():
            for block in chain:
                yield key, block
            chain.clear()


__all__ = [
    'MERGED_FORWARD',
    'MERGED_REVERSE',
    'NEW_BLOCK',
    'SKIPPED',
    'BlockStore',
]
