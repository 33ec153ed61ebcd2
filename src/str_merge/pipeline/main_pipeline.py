import sys
import logging
from pathlib import Path
from typing import Dict, Any, Optional, TextIO

from ..config.config_loader import load_config, apply_overrides, MergeConfig
from ..core.block_store import (
    BlockStore,
    MERGED_FORWARD,
    MERGED_REVERSE,
    NEW_BLOCK,
    SKIPPED,
)
from ..core.emitter import write_blocks
from ..diagnostics.performance import MergeStats, PerformanceMonitor
from ..diagnostics.validation import validate_inputs
from ..io.fastq_reader import read_str_reads
from ..io.file_handler import open_output, get_file_size


def setup_logging(config: Dict[str, Any]) -> logging.Logger:
    """Setup logging configuration. Records go to stderr, stdout carries output."""
    debug = config.get('debug', {})
    log_level_str = debug.get('log_level', 'INFO')
    log_level = getattr(logging, str(log_level_str).upper(), logging.INFO)

    logger = logging.getLogger('str_merge')
    logger.setLevel(log_level)

    # Remove existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    log_file = debug.get('log_file')
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger


def merge_str_reads(
    reads_path: str,
    klength: int,
    config: MergeConfig,
    handle: TextIO,
    monitor: Optional[PerformanceMonitor] = None
) -> MergeStats:
    """
    Merge every read of an annotated FASTQ file and write the blocks.

    Args:
        reads_path: Annotated FASTQ path
        klength: Flank k-mer length (already validated)
        config: Merge settings
        handle: Destination for the emitted records
        monitor: Optional monitor sampled at progress checkpoints

    Returns:
        MergeStats for the run
    """
    logger = logging.getLogger('str_merge')
    store = BlockStore(klength, config)
    stats = MergeStats()

    for read in read_str_reads(reads_path):
        if config.debug:
            logger.debug(f"Processing {read.name}")
        elif stats.reads_processed % config.progress_every == 0:
            message = f"Processing read number {stats.reads_processed + 1}: {read.name}"
            if monitor is not None and config.report_memory:
                message += f" ({monitor.sample():.1f} MB)"
            logger.info(message)

        stats.record(store.add_read(read))

        if config.debug:
            logger.debug("-" * 47)

    logger.info(f"Processed {stats.reads_processed} reads.")
    logger.info(f"Kept {store.num_blocks} blocks under {len(store)} flank keys")

    stats.blocks_emitted = write_blocks(store, config, handle)
    return stats


def log_summary(logger: logging.Logger, stats: MergeStats,
                monitor: Optional[PerformanceMonitor] = None) -> None:
    logger.info(f"Merged (forward): {stats.count(MERGED_FORWARD)}")
    logger.info(f"Merged (reverse): {stats.count(MERGED_REVERSE)}")
    logger.info(f"New blocks: {stats.count(NEW_BLOCK)}")
    if stats.count(SKIPPED):
        logger.info(f"Skipped (flanks out of bounds): {stats.count(SKIPPED)}")
    logger.info(f"Blocks written: {stats.blocks_emitted}")
    if monitor is not None:
        summary = monitor.summary()
        logger.info(f"Elapsed: {summary['total_time_s']:.2f}s, "
                    f"peak memory: {summary['peak_memory_mb']:.1f} MB")


def main(
    reads_path: str,
    klength,
    config_path: Optional[str] = None,
    overrides: Optional[Dict] = None,
    output: Optional[str] = None,
    large: bool = False
) -> int:
    """Main pipeline entry point. Returns a process exit code."""
    # Load configuration
    try:
        config = load_config(config_path)
        config = apply_overrides(config, overrides)
    except Exception as e:
        print(f"ERROR loading configuration: {e}", file=sys.stderr)
        return 1

    # Setup logging
    logger = setup_logging(config)
    logger.info(f"Configuration loaded from {config.get('_source', 'default')}")

    valid, errors, warnings, klength = validate_inputs(reads_path, klength, large, config)
    for warning in warnings:
        logger.warning(warning)
    if not valid:
        for error in errors:
            logger.error(error)
        return 1

    try:
        merge_config = MergeConfig.from_dict(config)
    except (ValueError, KeyError, TypeError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    logger.info(f"Merging STR reads from {reads_path} ({get_file_size(reads_path)}), "
                f"klength {klength}")

    monitor = PerformanceMonitor()
    monitor.start()
    try:
        with open_output(output) as handle:
            stats = merge_str_reads(reads_path, klength, merge_config, handle, monitor)
    except Exception as e:
        logger.error(f"Pipeline failed with error: {e}", exc_info=True)
        return 1
    monitor.stop()

    log_summary(logger, stats, monitor)
    return 0


# Alias for convenience
run_pipeline = main
