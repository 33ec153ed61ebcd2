"""
Reader for STR-annotated FASTQ files.

Each record title carries nine whitespace-delimited fields:

    name  fmotif fcopies fzstart fend  rmotif rcopies rzstart rend

The first group annotates the repeat on the read as given, the second on its
reverse complement. Coordinates are zero-based, end exclusive.
"""

import os
from dataclasses import dataclass, replace
from typing import Iterator, Tuple

from Bio.Seq import reverse_complement
from Bio.SeqIO.QualityIO import FastqGeneralIterator

from .file_handler import open_text

HEADER_FIELDS = 9


class HeaderParseError(ValueError):
    """Raised when a read title does not carry the STR annotation."""


@dataclass(frozen=True)
class StrAnnotation:
    """Repeat location on one orientation of a read."""
    motif: str
    copies: int
    zstart: int
    end: int


@dataclass(frozen=True)
class StrRead:
    name: str
    bases: str
    quals: str
    forward: StrAnnotation
    reverse: StrAnnotation

    def __len__(self) -> int:
        return len(self.bases)

    def reverse_complemented(self) -> "StrRead":
        """The read as seen from the opposite strand, qualities reversed."""
        return replace(
            self,
            bases=reverse_complement(self.bases),
            quals=self.quals[::-1],
        )


def parse_str_header(title: str) -> Tuple[str, StrAnnotation, StrAnnotation]:
    """
    Split a record title into the read name and its two annotations.

    Raises:
        HeaderParseError: wrong field count or non-integer coordinates
    """
    fields = title.split()
    if len(fields) != HEADER_FIELDS:
        raise HeaderParseError(f"Error in parsing read name {title}")

    try:
        forward = StrAnnotation(fields[1], int(fields[2]), int(fields[3]), int(fields[4]))
        reverse = StrAnnotation(fields[5], int(fields[6]), int(fields[7]), int(fields[8]))
    except ValueError:
        raise HeaderParseError(f"Error in parsing read name {title}")

    return fields[0], forward, reverse


def read_str_reads(filepath: str) -> Iterator[StrRead]:
    """
    Stream annotated reads from a FASTQ file (plain or gzipped).

    Quality strings are kept as raw ASCII, no offset is applied.
    """
    with open_text(filepath) as handle:
        for title, bases, quals in FastqGeneralIterator(handle):
            name, forward, reverse = parse_str_header(title)
            yield StrRead(name, bases, quals, forward, reverse)


def validate_fastq_file(filepath: str) -> Tuple[bool, str]:
    """
    Check that a file exists, is not empty and looks like FASTQ.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not os.path.exists(filepath):
        return False, f"File does not exist: {filepath}"

    if not os.path.isfile(filepath):
        return False, f"Not a file: {filepath}"

    if os.path.getsize(filepath) == 0:
        return False, f"File is empty: {filepath}"

    try:
        with open_text(filepath) as f:
            first_line = f.readline().strip()
    except (UnicodeDecodeError, OSError):
        return False, f"File is not a valid text file: {filepath}"

    if not first_line.startswith('@'):
        return False, f"File does not start with '@' character: {filepath}"

    return True, f"Valid FASTQ file: {filepath}"


__all__ = [
    'HEADER_FIELDS',
    'HeaderParseError',
    'StrAnnotation',
    'StrRead',
    'parse_str_header',
    'read_str_reads',
    'validate_fastq_file',
]
