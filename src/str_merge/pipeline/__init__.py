from .main_pipeline import main, merge_str_reads, setup_logging

# Alias for convenience
run_pipeline = main

__all__ = [
    'main',
    'run_pipeline',
    'merge_str_reads',
    'setup_logging',
]
