"""Error taxonomy for fixlens."""

from .errors import ErrorCode, DecodeIssue, SchemaLoadError, ERROR_METADATA

__all__ = [
    'ErrorCode',
    'DecodeIssue',
    'SchemaLoadError',
    'ERROR_METADATA',
]
