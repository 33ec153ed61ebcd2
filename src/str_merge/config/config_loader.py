"""
Configuration loader for str-merge.
"""

import copy
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default_config.yaml"

REQUIRED_SECTIONS = ('kmer', 'merge', 'filter', 'progress', 'debug')


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Sections missing from a user file are filled in from the packaged
    defaults, key by key.

    Args:
        config_path: Path to a YAML file, or None for the packaged defaults

    Returns:
        Configuration dictionary
    """
    with open(DEFAULT_CONFIG_PATH, 'r') as f:
        config = yaml.safe_load(f)

    if config_path is None:
        config['_source'] = str(DEFAULT_CONFIG_PATH.resolve())
        return config

    config_path = Path(config_path)
    try:
        with open(config_path, 'r') as f:
            user_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")

    if user_config is None:
        user_config = {}
    if not isinstance(user_config, dict):
        raise ValueError(f"Invalid YAML format in {config_path}")

    config = apply_overrides(config, user_config)
    config['_source'] = str(config_path.resolve())
    return config


def apply_overrides(config: Dict[str, Any], overrides: Optional[Dict]) -> Dict[str, Any]:
    """Merge overrides into a copy of config, one section at a time."""
    merged = copy.deepcopy(config)
    if not overrides:
        return merged

    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def _single_char(value, name: str) -> str:
    value = str(value)
    if len(value) != 1:
        raise ValueError(f"{name} must be a single character, got {value!r}")
    return value


@dataclass(frozen=True)
class MergeConfig:
    """Settings threaded through the aligner, merger and emitter."""
    pid_threshold: float = 90.0
    max_gaps: int = 2
    quality_floor: str = '5'
    filler: str = '!'
    min_threshold: int = 4
    max_threshold: int = 10000
    include_all: bool = False
    max_alleles: int = 3
    progress_every: int = 1000000
    report_memory: bool = True
    debug: bool = False

    def __post_init__(self):
        if not 0.0 <= self.pid_threshold <= 100.0:
            raise ValueError(f"pid_threshold must be within [0, 100], got {self.pid_threshold}")
        if self.max_gaps < 0:
            raise ValueError(f"max_gaps must be >= 0, got {self.max_gaps}")
        if self.min_threshold < 0 or self.max_threshold < 0:
            raise ValueError("min_threshold and max_threshold must be >= 0")
        if self.max_alleles < 3:
            raise ValueError(f"max_alleles must be >= 3, got {self.max_alleles}")
        if self.progress_every < 1:
            raise ValueError(f"progress interval must be >= 1, got {self.progress_every}")
        _single_char(self.quality_floor, 'quality_floor')
        _single_char(self.filler, 'filler')

    def accepts(self, result) -> bool:
        """True if a flank alignment is good enough to merge on."""
        pid = result.percent_identity
        if pid is None:
            return False
        return result.gaps <= self.max_gaps and pid >= self.pid_threshold

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "MergeConfig":
        """Build from a configuration dictionary as returned by load_config."""
        for section in REQUIRED_SECTIONS:
            if not isinstance(config.get(section), dict):
                raise ValueError(f"Configuration section '{section}' is missing or not a mapping")

        merge = config['merge']
        filt = config['filter']
        progress = config['progress']
        debug = config['debug']

        return cls(
            pid_threshold=float(merge['pid_threshold']),
            max_gaps=int(merge['max_gaps']),
            quality_floor=_single_char(merge['quality_floor'], 'quality_floor'),
            filler=_single_char(merge['filler'], 'filler'),
            min_threshold=int(filt['min_threshold']),
            max_threshold=int(filt['max_threshold']),
            include_all=bool(filt['include_all']),
            max_alleles=int(filt['max_alleles']),
            progress_every=int(progress['every']),
            report_memory=bool(progress.get('report_memory', True)),
            debug=str(debug.get('log_level', 'INFO')).upper() == 'DEBUG',
        )


__all__ = [
    'DEFAULT_CONFIG_PATH',
    'load_config',
    'apply_overrides',
    'MergeConfig',
]
