"""Configuration management for fixlens."""

from .schema import (
    FixlensConfig,
    OutputConfig,
    LOG_LEVELS,
    load_config,
    generate_default_config,
)

__all__ = [
    'FixlensConfig',
    'OutputConfig',
    'LOG_LEVELS',
    'load_config',
    'generate_default_config',
]
