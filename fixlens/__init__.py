"""
fixlens - Dictionary-driven annotation of FIX protocol log lines.

This package provides:
- dictionary: Versioned schema dictionaries and their readers
- decode: Tokenizer, resolver and formatter
- config: YAML configuration with environment variable support
- core: Structured error codes
- cli: Command-line interface
"""

__version__ = "1.0.0"

from .core import ErrorCode, DecodeIssue, SchemaLoadError
from .dictionary import (
    EnumValue,
    Field,
    Dictionary,
    DictionaryStore,
    lookup,
    load_store_from_paths,
)
from .decode import (
    RawPair,
    ResolvedField,
    detect_delimiter,
    tokenize,
    decode,
    format_field,
    format_message,
    decode_line,
)
from .config import FixlensConfig, load_config

__all__ = [
    # Version
    '__version__',
    # Core
    'ErrorCode',
    'DecodeIssue',
    'SchemaLoadError',
    # Dictionary
    'EnumValue',
    'Field',
    'Dictionary',
    'DictionaryStore',
    'lookup',
    'load_store_from_paths',
    # Decode
    'RawPair',
    'ResolvedField',
    'detect_delimiter',
    'tokenize',
    'decode',
    'format_field',
    'format_message',
    'decode_line',
    # Config
    'FixlensConfig',
    'load_config',
]
