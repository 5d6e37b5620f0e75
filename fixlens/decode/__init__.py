"""
Decoding pipeline.

    line -> tokenize -> decode (against a DictionaryStore) -> format_message

Usage:
    for text in decode_line("8=FIX.4.4|35=D|54=1|", store):
        print(text)
"""

from typing import List

from ..dictionary.schema import DictionaryStore
from .tokenizer import SOH, PIPE, DELIMITERS, RawPair, detect_delimiter, tokenize, scan
from .resolver import (
    VERSION_TAG,
    ResolvedField,
    resolve_version,
    resolve_field,
    resolve_value_name,
    decode,
    collect_issues,
)
from .formatter import format_field, format_message


def decode_line(line: str, store: DictionaryStore) -> List[str]:
    """Decode one log line into formatted field lines ([] for non-messages)."""
    return format_message(decode(tokenize(line), store))


__all__ = [
    'SOH',
    'PIPE',
    'DELIMITERS',
    'RawPair',
    'detect_delimiter',
    'tokenize',
    'scan',
    'VERSION_TAG',
    'ResolvedField',
    'resolve_version',
    'resolve_field',
    'resolve_value_name',
    'decode',
    'collect_issues',
    'format_field',
    'format_message',
    'decode_line',
]
