"""
Flank keys group reads that share a repeat motif and the k-mers on both
sides of the repeat.
"""


class FlankBoundsError(ValueError):
    """Raised when a read is too short to supply both flanking k-mers."""


def build_flank_key(motif: str, bases: str, klength: int, zstart: int, end: int) -> str:
    """
    Build "<motif> <left k-mer> <right k-mer>" for one orientation of a read.

    Args:
        motif: Repeat unit
        bases: Read bases in the orientation the coordinates refer to
        klength: Flank k-mer length
        zstart: Zero-based repeat start
        end: Repeat end, exclusive

    Raises:
        FlankBoundsError: if either k-mer would fall outside the read
    """
    if zstart < klength or end < zstart or end + klength > len(bases):
        raise FlankBoundsError(
            f"Cannot take {klength}-mer flanks around [{zstart}, {end}) "
            f"in a read of length {len(bases)}"
        )

    left = bases[zstart - klength:zstart]
    right = bases[end:end + klength]
    return f"{motif} {left} {right}"


def key_motif(key: str) -> str:
    """Recover the motif from a flank key."""
    parts = key.split(' ')
    if len(parts) != 3 or not parts[0]:
        raise ValueError(f"Error in parsing key : {key}")
    return parts[0]


__all__ = [
    'FlankBoundsError',
    'build_flank_key',
    'key_motif',
]
