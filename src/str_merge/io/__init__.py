from .fastq_reader import (
    HeaderParseError,
    StrAnnotation,
    StrRead,
    parse_str_header,
    read_str_reads,
    validate_fastq_file
)

from .file_handler import (
    open_text,
    open_output,
    get_file_size
)

__all__ = [
    # FASTQ reader
    'HeaderParseError',
    'StrAnnotation',
    'StrRead',
    'parse_str_header',
    'read_str_reads',
    'validate_fastq_file',

    # File handling
    'open_text',
    'open_output',
    'get_file_size',
]
