import pytest
from Bio.Seq import reverse_complement

from str_merge.io.fastq_reader import StrAnnotation, StrRead

# One synthetic locus: LEFT_FLANK + MOTIF * copies + RIGHT_FLANK
LEFT_FLANK = "GATTACAGGCTA"
RIGHT_FLANK = "CCGTATGAGGTC"
MOTIF = "CA"

# The same locus seen from the opposite strand
RC_LEFT_FLANK = "GACCTCATACGG"    # reverse complement of RIGHT_FLANK
RC_RIGHT_FLANK = "TAGCCTGTAATC"   # reverse complement of LEFT_FLANK
RC_MOTIF = "TG"


def build_read(copies, name="read", left=LEFT_FLANK, right=RIGHT_FLANK,
               motif=MOTIF, qual_char="I"):
    """Build an annotated read for a perfect repeat between two flanks."""
    bases = left + motif * copies + right
    span = len(motif) * copies
    return StrRead(
        name=name,
        bases=bases,
        quals=qual_char * len(bases),
        forward=StrAnnotation(motif, copies, len(left), len(left) + span),
        reverse=StrAnnotation(reverse_complement(motif), copies, len(right), len(right) + span),
    )


def fastq_record(read):
    f, r = read.forward, read.reverse
    fields = [read.name,
              f.motif, str(f.copies), str(f.zstart), str(f.end),
              r.motif, str(r.copies), str(r.zstart), str(r.end)]
    return "@" + "\t".join(fields) + f"\n{read.bases}\n+\n{read.quals}\n"


@pytest.fixture
def make_read():
    return build_read


@pytest.fixture
def write_fastq(tmp_path):
    """Write reads to an annotated FASTQ file and return its path."""
    def _write(reads, name="reads.str.fq"):
        path = tmp_path / name
        path.write_text("".join(fastq_record(read) for read in reads))
        return path
    return _write
