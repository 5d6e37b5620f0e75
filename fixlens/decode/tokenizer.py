"""
Line tokenizer.

Splits one raw log line into ordered (tag, value) pairs. Logs usually carry
either the SOH control character or a pipe substituted for readability;
SOH wins when both are present.
"""

import logging
from typing import List, NamedTuple, Optional, Tuple

from ..core.errors import DecodeIssue, ErrorCode

logger = logging.getLogger(__name__)


SOH = '\x01'
PIPE = '|'

# Checked in order, first hit wins
DELIMITERS = (SOH, PIPE)


class RawPair(NamedTuple):
    """One tag=value token, in source order."""
    tag: str
    value: str


def detect_delimiter(line: str) -> Optional[str]:
    """Return the first supported delimiter present in the line, or None."""
    for delimiter in DELIMITERS:
        if delimiter in line:
            return delimiter
    return None


def scan(line: str) -> Tuple[List[RawPair], List[DecodeIssue]]:
    """
    Tokenize a line and report what was skipped.

    Returns:
        (pairs, issues) where issues lists the missing delimiter or each
        dropped segment
    """
    line = line.rstrip('\r\n')
    delimiter = detect_delimiter(line)

    if delimiter is None:
        return [], [DecodeIssue(code=ErrorCode.E2004_NO_DELIMITER_DETECTED)]

    pairs: List[RawPair] = []
    issues: List[DecodeIssue] = []

    for segment in line.split(delimiter):
        if not segment:
            continue

        tag, sep, value = segment.partition('=')
        if not sep:
            logger.debug("Skipping malformed segment %r", segment)
            issues.append(DecodeIssue(
                code=ErrorCode.E2005_MALFORMED_TOKEN,
                context={'segment': segment},
            ))
            continue

        pairs.append(RawPair(tag, value))

    return pairs, issues


def tokenize(line: str) -> List[RawPair]:
    """
    Split a line into RawPairs.

    A line without a supported delimiter is not a message and yields [].
    Segments without '=' are dropped.
    """
    pairs, _ = scan(line)
    return pairs
