from .config_loader import (
    DEFAULT_CONFIG_PATH,
    load_config,
    apply_overrides,
    MergeConfig
)

__all__ = [
    'DEFAULT_CONFIG_PATH',
    'load_config',
    'apply_overrides',
    'MergeConfig',
]
