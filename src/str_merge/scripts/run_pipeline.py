"""
Command-line interface for str-merge.
"""

import sys
import argparse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="str-merge",
        description="Merge reads that support the same STR",
        usage="%(prog)s [options] klength reads.str.fq",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Merge with 21-mer flank keys, polymorphic blocks only
  %(prog)s 21 reads.str.fq > blocks.fq

  # Keep monomorphic blocks as well, and require more support
  %(prog)s 21 reads.str.fq --all --min_threshold 8

  # Per-read diagnostics on stderr
  %(prog)s 21 reads.str.fq --debug
        """
    )

    parser.add_argument(
        'klength',
        nargs='?',
        help='Flank k-mer length (odd integer)'
    )

    parser.add_argument(
        'reads',
        nargs='?',
        help='STR-annotated FASTQ file'
    )

    parser.add_argument(
        '--min_threshold', '--min-threshold',
        dest='min_threshold',
        type=int,
        help='Discard blocks that include < min_threshold reads (default 4)'
    )

    parser.add_argument(
        '--max_threshold', '--max-threshold',
        dest='max_threshold',
        type=int,
        help='Discard blocks that include > max_threshold reads (default 10000)'
    )

    parser.add_argument(
        '--progress',
        type=int,
        help='Print progress every so many sequences (default 1000000)'
    )

    parser.add_argument(
        '--all',
        action='store_true',
        help='Include non-polymorphic blocks'
    )

    parser.add_argument(
        '--large',
        action='store_true',
        help='Allow k-mer lengths up to 63'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Write blocks to this file instead of stdout'
    )

    # Configuration
    parser.add_argument(
        '--config',
        type=str,
        help='Path to configuration YAML file'
    )

    parser.add_argument(
        '--version',
        action='store_true',
        help='Show version information'
    )

    # Debug
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Print per-read diagnostics'
    )

    return parser


def main(argv=None) -> int:
    parser = build_parser()

    # Parse the arguments - this will handle --help automatically and exit
    args = parser.parse_args(argv)

    if args.version:
        from str_merge import __version__
        print(f"str-merge {__version__}")
        return 0

    if args.klength is None or args.reads is None:
        parser.print_usage(sys.stderr)
        return 1

    # Build config_overrides based on arguments
    config_overrides = {}

    if args.min_threshold is not None:
        config_overrides.setdefault('filter', {})['min_threshold'] = args.min_threshold

    if args.max_threshold is not None:
        config_overrides.setdefault('filter', {})['max_threshold'] = args.max_threshold

    if args.all:
        config_overrides.setdefault('filter', {})['include_all'] = True

    if args.progress is not None:
        config_overrides.setdefault('progress', {})['every'] = args.progress

    if args.debug:
        config_overrides.setdefault('debug', {})['log_level'] = 'DEBUG'

    from str_merge.pipeline.main_pipeline import main as pipeline_main

    try:
        return pipeline_main(
            args.reads,
            args.klength,
            config_path=args.config,
            overrides=config_overrides,
            output=args.output,
            large=args.large,
        )
    except Exception as e:
        print(f"str-merge failed: {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
