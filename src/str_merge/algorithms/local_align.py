"""
Quality-aware Smith-Waterman alignment of STR flanks.

The aligner compares the flank of a consensus block (region 1) with the
matching flank of a read (region 2) and builds a merged consensus in the same
pass: aligned columns keep the base with the better quality, bases skipped by
a gap are kept only when their quality clears the floor.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

# Fixed scoring scheme
MATCH_SCORE = 1
MISMATCH_SCORE = -1
GAP_SCORE = -3

# Traceback moves
DIAG = 0
LEFT = 1   # consumes a base of region 1
UP = 2     # consumes a base of region 2

_INITIAL_SCRATCH = 128


@dataclass
class AlignmentResult:
    """Merged flank plus the statistics used to accept or reject it."""
    seq: str
    qual: str
    gaps: int
    matches: int
    mismatches: int

    @property
    def percent_identity(self) -> Optional[float]:
        """Matches over aligned columns, in percent. None if nothing aligned."""
        aligned = self.matches + self.mismatches
        if aligned == 0:
            return None
        return self.matches * 100.0 / aligned


class LocalAligner:
    """
    Smith-Waterman aligner that owns its DP scratch space.

    The score and traceback matrices grow to the largest request seen and are
    reused by every later call, so aligning millions of flanks does not
    allocate a matrix pair per call.
    """

    def __init__(self, quality_floor: str = '5', initial_size: int = _INITIAL_SCRATCH):
        self.quality_floor = quality_floor
        self._scores = np.zeros((initial_size, initial_size), dtype=np.int32)
        self._trace = np.zeros((initial_size, initial_size), dtype=np.int8)

    @property
    def scratch_shape(self):
        return self._scores.shape

    def _scratch(self, rows: int, cols: int):
        """Return zeroed (rows x cols) views into the scratch matrices."""
        cap_rows, cap_cols = self._scores.shape
        if rows > cap_rows or cols > cap_cols:
            cap_rows = max(rows, cap_rows)
            cap_cols = max(cols, cap_cols)
            self._scores = np.zeros((cap_rows, cap_cols), dtype=np.int32)
            self._trace = np.zeros((cap_rows, cap_cols), dtype=np.int8)

        scores = self._scores[:rows, :cols]
        trace = self._trace[:rows, :cols]
        scores.fill(0)
        trace.fill(DIAG)
        return scores, trace

    def align(self, seq1: str, qual1: str, seq2: str, qual2: str,
              right_flank: bool = False) -> AlignmentResult:
        """
        Align region 1 against region 2 and merge them.

        Args:
            seq1, qual1: Block flank bases and qualities
            seq2, qual2: Read flank bases and qualities
            right_flank: True for the flank after the repeat. Unaligned
                bases at the far end of the longer region are then kept,
                and the gap count becomes the offset between the two
                regions where the alignment starts.

        Returns:
            AlignmentResult with the merged flank in left-to-right order
        """
        n1, n2 = len(seq1), len(seq2)
        scores, trace = self._scratch(n1 + 1, n2 + 1)

        best = 0
        best_i = best_j = 0

        # =========================
        # DP fill
        # =========================
        # Row 0 and column 0 stay at zero
        for i in range(1, n1 + 1):
            c1 = seq1[i - 1]

            for j in range(1, n2 + 1):
                up = scores[i, j - 1] + GAP_SCORE
                left = scores[i - 1, j] + GAP_SCORE
                if c1 == seq2[j - 1]:
                    diag = scores[i - 1, j - 1] + MATCH_SCORE
                else:
                    diag = scores[i - 1, j - 1] + MISMATCH_SCORE

                score = max(up, left, diag, 0)
                scores[i, j] = score

                if score == diag:
                    trace[i, j] = DIAG
                elif score == left:
                    trace[i, j] = LEFT
                elif score == up:
                    trace[i, j] = UP

                # Last maximum wins
                if score >= best:
                    best = score
                    best_i = i
                    best_j = j

        # =========================
        # Traceback
        # =========================
        # Built back to front, reversed at the end
        out_seq = []
        out_qual = []
        matches = mismatches = gaps = 0
        floor = self.quality_floor

        if right_flank:
            if n1 > n2:
                out_seq.extend(reversed(seq1[best_i:]))
                out_qual.extend(reversed(qual1[best_i:]))
            else:
                out_seq.extend(reversed(seq2[best_j:]))
                out_qual.extend(reversed(qual2[best_j:]))
        else:
            gaps = n2 - best_j

        i, j = best_i, best_j
        score = best
        while score > 0 and i >= 1 and j >= 1:
            move = trace[i, j]
            if move == DIAG:
                if qual1[i - 1] >= qual2[j - 1]:
                    out_seq.append(seq1[i - 1])
                    out_qual.append(qual1[i - 1])
                else:
                    out_seq.append(seq2[j - 1])
                    out_qual.append(qual2[j - 1])
                if seq1[i - 1] == seq2[j - 1]:
                    matches += 1
                else:
                    mismatches += 1
                i -= 1
                j -= 1
            elif move == LEFT:
                if qual1[i - 1] > floor:
                    out_seq.append(seq1[i - 1])
                    out_qual.append(qual1[i - 1])
                i -= 1
                gaps += 1
            else:
                if qual2[j - 1] > floor:
                    out_seq.append(seq2[j - 1])
                    out_qual.append(qual2[j - 1])
                j -= 1
                gaps += 1

            score = scores[i, j]

        if right_flank:
            gaps = abs(i - j)
        else:
            # Unaligned start of the longer region
            if n1 > n2:
                out_seq.extend(reversed(seq1[:i]))
                out_qual.extend(reversed(qual1[:i]))
            else:
                out_seq.extend(reversed(seq2[:j]))
                out_qual.extend(reversed(qual2[:j]))

        out_seq.reverse()
        out_qual.reverse()

        return AlignmentResult(
            seq=''.join(out_seq),
            qual=''.join(out_qual),
            gaps=int(gaps),
            matches=matches,
            mismatches=mismatches,
        )


__all__ = [
    'MATCH_SCORE',
    'MISMATCH_SCORE',
    'GAP_SCORE',
    'AlignmentResult',
    'LocalAligner',
]
