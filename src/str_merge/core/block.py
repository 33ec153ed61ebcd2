"""
Consensus blocks and their copy-number tallies.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class CopyTally:
    """Number of merged reads that observed a given repeat copy number."""
    copies: int
    nsupport: int = 1


@dataclass
class Block:
    """
    Consensus for one candidate allele.

    The repeat is stored as a single copy of the motif at seq[zstart:end];
    its quality positions hold the filler character. Tallies are kept in
    the order their copy number was first seen.
    """
    seq: str
    qual: str
    zstart: int
    end: int
    support: int = 1
    supports: List[CopyTally] = field(default_factory=list)

    @property
    def slen(self) -> int:
        return len(self.seq)

    @classmethod
    def from_read(cls, read, annotation, filler: str = '!') -> "Block":
        """Seed a block from one orientation of a read."""
        motif = annotation.motif
        zstart, end = annotation.zstart, annotation.end
        return cls(
            seq=read.bases[:zstart] + motif + read.bases[end:],
            qual=read.quals[:zstart] + filler * len(motif) + read.quals[end:],
            zstart=zstart,
            end=zstart + len(motif),
            support=1,
            supports=[CopyTally(annotation.copies, 1)],
        )

    def left_flank(self):
        return self.seq[:self.zstart], self.qual[:self.zstart]

    def right_flank(self):
        return self.seq[self.end:], self.qual[self.end:]

    def add_copies(self, copies: int) -> None:
        for tally in self.supports:
            if tally.copies == copies:
                tally.nsupport += 1
                return
        self.supports.append(CopyTally(copies, 1))

    def absorb(self, left, right, motif: str, copies: int, filler: str = '!') -> None:
        """
        Replace the consensus with merged flanks around one motif copy.

        Args:
            left: Accepted AlignmentResult for the flank before the repeat
            right: Accepted AlignmentResult for the flank after the repeat
            motif: Repeat unit
            copies: Copy number observed on the merged read
        """
        zstart = len(left.seq)
        self.seq = left.seq + motif + right.seq
        self.qual = left.qual + filler * len(motif) + right.qual
        self.zstart = zstart
        self.end = zstart + len(motif)
        self.support += 1
        self.add_copies(copies)


__all__ = [
    'CopyTally',
    'Block',
]
