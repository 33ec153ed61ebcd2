"""
Diagnostic modules for str-merge.
"""

from .performance import *
from .validation import *

__all__ = [
    'MergeStats',
    'PerformanceMetrics',
    'PerformanceMonitor',
    'validate_kmer_length',
    'validate_inputs',
]
