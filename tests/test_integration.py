"""
End-to-end tests: annotated FASTQ in, merged blocks out.
"""
import io
import os
import tempfile

import pytest

from str_merge.config.config_loader import MergeConfig
from str_merge.core.block_store import MERGED_REVERSE, NEW_BLOCK
from str_merge.pipeline.main_pipeline import merge_str_reads
from str_merge.scripts.run_pipeline import main

from tests.conftest import RC_LEFT_FLANK, RC_RIGHT_FLANK, build_read, fastq_record

# Second locus, different flanks and motif
LEFT_FLANK_2 = "TCGAAGCTTGAC"
RIGHT_FLANK_2 = "AGTCCATGGCTT"

BIALLELIC_BLOCK = (
    "@Block1\tTG\t10,12\t12\t36\n"
    + RC_LEFT_FLANK + "TG" * 12 + RC_RIGHT_FLANK + "\n"
    + "+\n"
    + "I" * 12 + "!" * 24 + "I" * 12 + "\n"
)


def sample_reads():
    reads = []
    for i in range(3):
        reads.append(build_read(10, name=f"l1_c10_{i}"))
        reads.append(build_read(12, name=f"l1_c12_{i}"))
    for i in range(4):
        reads.append(build_read(8, name=f"l2_c8_{i}", left=LEFT_FLANK_2,
                                right=RIGHT_FLANK_2, motif="AG"))
    return reads


@pytest.fixture
def reads_file(write_fastq):
    return str(write_fastq(sample_reads()))


def test_merge_str_reads():
    """Run the merge loop directly and check per-read outcomes."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "reads.str.fq")
        with open(path, "w") as f:
            for read in sample_reads():
                f.write(fastq_record(read))

        handle = io.StringIO()
        stats = merge_str_reads(path, 5, MergeConfig(), handle)

    assert stats.reads_processed == 10
    assert stats.count(NEW_BLOCK) == 2
    assert stats.count(MERGED_REVERSE) == 8
    assert stats.blocks_emitted == 1
    assert handle.getvalue() == BIALLELIC_BLOCK


def test_cli_polymorphic_only(reads_file, capsys):
    assert main(["5", reads_file]) == 0
    captured = capsys.readouterr()
    assert captured.out == BIALLELIC_BLOCK
    assert "Blocks written: 1" in captured.err


def test_cli_include_all(reads_file, tmp_path):
    out = tmp_path / "blocks.fq"

    assert main(["5", reads_file, "--all", "--output", str(out)]) == 0

    lines = out.read_text().splitlines()
    assert "\n".join(lines[:4]) + "\n" == BIALLELIC_BLOCK
    assert len(lines) == 8
    assert lines[4] == "@Block2\tCT\t8\t12\t28"
    assert lines[5].count("CT") >= 8
    assert len(lines[5]) == len(lines[7]) == 12 + 16 + 12


def test_cli_min_threshold(reads_file, capsys):
    assert main(["5", reads_file, "--min_threshold", "7"]) == 0
    assert capsys.readouterr().out == ""


def test_cli_config_file(reads_file, tmp_path, capsys):
    config = tmp_path / "config.yaml"
    config.write_text("filter:\n  max_threshold: 5\n")

    assert main(["5", reads_file, "--config", str(config)]) == 0
    assert capsys.readouterr().out == ""


def test_cli_even_klength(reads_file, capsys):
    assert main(["6", reads_file]) == 0
    captured = capsys.readouterr()
    assert captured.out == BIALLELIC_BLOCK
    assert "Kmer length should be an odd integer, using 5" in captured.err


def test_cli_debug(reads_file, capsys):
    assert main(["5", reads_file, "--debug"]) == 0
    captured = capsys.readouterr()
    assert captured.out == BIALLELIC_BLOCK
    assert "Processing l1_c10_0" in captured.err


def test_cli_klength_too_large(reads_file, capsys):
    assert main(["40", reads_file]) == 1
    assert capsys.readouterr().out == ""


def test_cli_missing_arguments(capsys):
    assert main([]) == 1
    assert main(["5"]) == 1
    assert "usage" in capsys.readouterr().err


def test_cli_help():
    with pytest.raises(SystemExit) as exc:
        main(["-h"])
    assert exc.value.code == 0


def test_cli_missing_file(tmp_path):
    assert main(["5", str(tmp_path / "missing.fq")]) == 1


def test_cli_malformed_header(tmp_path, capsys):
    path = tmp_path / "bad.fq"
    path.write_text("@r1 CA 10 12\nACGT\n+\nIIII\n")

    assert main(["5", str(path)]) == 1
    assert "Error in parsing read name" in capsys.readouterr().err


def test_cli_short_reads_are_skipped(reads_file, capsys):
    assert main(["13", reads_file, "--all"]) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Skipped (flanks out of bounds): 10" in captured.err


if __name__ == "__main__":
    import sys
    sys.exit(pytest.main([__file__, "-v"]))
