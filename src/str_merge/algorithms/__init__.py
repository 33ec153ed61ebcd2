from .local_align import *

__all__ = [
    'MATCH_SCORE',
    'MISMATCH_SCORE',
    'GAP_SCORE',
    'AlignmentResult',
    'LocalAligner',
]
