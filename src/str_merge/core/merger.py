"""
Fold a read into a consensus block when both flanks align well enough.
"""

import logging

from ..algorithms.local_align import LocalAligner
from ..config.config_loader import MergeConfig
from .block import Block

logger = logging.getLogger('str_merge')


def _describe(result) -> str:
    pid = result.percent_identity
    pid_text = "undefined" if pid is None else f"{pid:2.2f}"
    return f"pid {pid_text}, {result.gaps} gaps"


def align_flanks(block: Block, read, annotation, aligner: LocalAligner,
                 config: MergeConfig) -> bool:
    """
    Try to merge one orientation of a read into a block.

    The left flank is aligned first; the right flank is only aligned if the
    left one is accepted. The block is modified only when both are.

    Returns:
        True if the read was merged
    """
    block_seq, block_qual = block.left_flank()
    left = aligner.align(
        block_seq, block_qual,
        read.bases[:annotation.zstart], read.quals[:annotation.zstart],
        right_flank=False,
    )
    if not config.accepts(left):
        logger.debug(f"Low pid or too many gaps for the left flank ({_describe(left)})")
        return False

    block_seq, block_qual = block.right_flank()
    right = aligner.align(
        block_seq, block_qual,
        read.bases[annotation.end:], read.quals[annotation.end:],
        right_flank=True,
    )
    if not config.accepts(right):
        logger.debug(f"Low pid or too many gaps for the right flank ({_describe(right)})")
        return False

    block.absorb(left, right, annotation.motif, annotation.copies, config.filler)
    return True


__all__ = ['align_flanks']
