"""
str-merge: collapse reads supporting the same short tandem repeat into
consensus blocks annotated with copy-number support.
"""

__version__ = "1.0.0"
__description__ = "Merge reads that support the same STR"
__license__ = "MIT"

from .config.config_loader import MergeConfig, load_config
from .algorithms.local_align import AlignmentResult, LocalAligner
from .core.block import Block, CopyTally
from .core.block_store import BlockStore
from .core.emitter import write_blocks
from .io.fastq_reader import StrRead, StrAnnotation, read_str_reads

__all__ = [
    '__version__',
    '__description__',
    '__license__',
    'MergeConfig',
    'load_config',
    'AlignmentResult',
    'LocalAligner',
    'Block',
    'CopyTally',
    'BlockStore',
    'write_blocks',
    'StrRead',
    'StrAnnotation',
    'read_str_reads',
]
