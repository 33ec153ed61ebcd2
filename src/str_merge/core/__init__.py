"""
Core modules for str-merge: flank keys, blocks, merging and emission.
"""

from .flank_key import (
    FlankBoundsError,
    build_flank_key,
    key_motif
)

from .block import (
    CopyTally,
    Block
)

from .merger import align_flanks

from .block_store import (
    MERGED_FORWARD,
    MERGED_REVERSE,
    NEW_BLOCK,
    SKIPPED,
    BlockStore
)

from .emitter import (
    select_copies,
    passes_filter,
    render_block,
    write_blocks
)

__all__ = [
    # Flank keys
    'FlankBoundsError',
    'build_flank_key',
    'key_motif',

    # Blocks
    'CopyTally',
    'Block',
    'align_flanks',

    # Store
    'MERGED_FORWARD',
    'MERGED_REVERSE',
    'NEW_BLOCK',
    'SKIPPED',
    'BlockStore',

    # Emission
    'select_copies',
    'passes_filter',
    'render_block',
    'write_blocks',
]
