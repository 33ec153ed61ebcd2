"""
Input validation.
"""

from typing import Dict, List, Optional, Tuple

from ..io.fastq_reader import validate_fastq_file


def validate_kmer_length(value, large: bool = False,
                         kmer_config: Optional[Dict] = None) -> Tuple[int, List[str]]:
    """
    Check the flank k-mer length given on the command line.

    Even lengths are reduced by one. Lengths at or above the configured
    bound (max_length, or max_length_large with large=True) are rejected.

    Returns:
        Tuple of (klength, warnings)

    Raises:
        ValueError: not an integer, not positive, or too large
    """
    kmer_config = kmer_config or {}
    bound = int(kmer_config.get('max_length_large' if large else 'max_length',
                                64 if large else 32))

    try:
        klength = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Kmer length should be an odd integer < {bound}: {value}")

    if klength < 1 or klength >= bound:
        raise ValueError(f"Kmer length should be an odd integer < {bound}: {value}")

    warnings = []
    if klength % 2 == 0:
        klength -= 1
        warnings.append(f"Kmer length should be an odd integer, using {klength}")

    return klength, warnings


def validate_inputs(reads_path: str, klength, large: bool = False,
                    config: Optional[Dict] = None) -> Tuple[bool, List[str], List[str], int]:
    """
    Validate all pipeline inputs.

    Returns:
        Tuple of (is_valid, error_messages, warnings, klength)
    """
    errors = []
    warnings = []
    config = config or {}

    valid, msg = validate_fastq_file(reads_path)
    if not valid:
        errors.append(f"Reads file: {msg}")

    try:
        klength, kmer_warnings = validate_kmer_length(klength, large, config.get('kmer'))
        warnings.extend(kmer_warnings)
    except ValueError as e:
        errors.append(str(e))
        klength = 0

    return len(errors) == 0, errors, warnings, klength


__all__ = [
    'validate_kmer_length',
    'validate_inputs',
]
