"""
Schema dictionaries.

Dictionaries index field and enum definitions of one protocol version;
DictionaryStore holds one Dictionary per version identifier.
"""

from .schema import (
    EnumValue,
    Field,
    Dictionary,
    DictionaryStore,
    build_dictionary,
    lookup,
)
from .loader import read_schema_file, load_store_from_paths

__all__ = [
    'EnumValue',
    'Field',
    'Dictionary',
    'DictionaryStore',
    'build_dictionary',
    'lookup',
    'read_schema_file',
    'load_store_from_paths',
]
