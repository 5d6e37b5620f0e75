"""
Error codes for fixlens.

Structured codes for the recoverable conditions met while loading
dictionaries and decoding lines. None of them abort a decode; they are
reported as DecodeIssue values for diagnostics.

Format: E{category}{number}
- E1xxx: Schema errors
- E2xxx: Decode errors
- E3xxx: Configuration errors
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class ErrorCode(Enum):
    """Structured error codes."""

    # E1xxx: Schema errors
    E1001_SCHEMA_UNAVAILABLE = "E1001"

    # E2xxx: Decode errors
    E2001_UNKNOWN_VERSION = "E2001"
    E2002_UNKNOWN_FIELD = "E2002"
    E2003_UNKNOWN_ENUM_VALUE = "E2003"
    E2004_NO_DELIMITER_DETECTED = "E2004"
    E2005_MALFORMED_TOKEN = "E2005"

    # E3xxx: Configuration errors
    E3001_INVALID_CONFIG = "E3001"


# Error code metadata
ERROR_METADATA = {
    ErrorCode.E1001_SCHEMA_UNAVAILABLE: {
        'severity': 'warning',
        'message': 'Schema source could not be loaded',
        'recoverable': True,
    },
    ErrorCode.E2001_UNKNOWN_VERSION: {
        'severity': 'info',
        'message': 'No dictionary loaded for protocol version',
        'recoverable': True,
    },
    ErrorCode.E2002_UNKNOWN_FIELD: {
        'severity': 'info',
        'message': 'Tag not defined in dictionary',
        'recoverable': True,
    },
    ErrorCode.E2003_UNKNOWN_ENUM_VALUE: {
        'severity': 'info',
        'message': 'Value not defined for coded field',
        'recoverable': True,
    },
    ErrorCode.E2004_NO_DELIMITER_DETECTED: {
        'severity': 'info',
        'message': 'No field delimiter found in line',
        'recoverable': True,
    },
    ErrorCode.E2005_MALFORMED_TOKEN: {
        'severity': 'info',
        'message': "Segment without '=' skipped",
        'recoverable': True,
    },
    ErrorCode.E3001_INVALID_CONFIG: {
        'severity': 'error',
        'message': 'Invalid configuration',
        'recoverable': False,
    },
}


@dataclass(frozen=True)
class DecodeIssue:
    """
    Structured issue with context.

    Example:
        issue = DecodeIssue(
            code=ErrorCode.E2002_UNKNOWN_FIELD,
            context={'tag': '9999', 'version': 'FIX.4.4'},
        )
    """
    code: ErrorCode
    context: Optional[dict] = None

    @property
    def severity(self) -> str:
        return ERROR_METADATA.get(self.code, {}).get('severity', 'error')

    @property
    def message(self) -> str:
        base_msg = ERROR_METADATA.get(self.code, {}).get('message', 'Unknown error')
        if self.context:
            return f"{base_msg}: {self.context}"
        return base_msg

    @property
    def recoverable(self) -> bool:
        return ERROR_METADATA.get(self.code, {}).get('recoverable', False)

    def to_dict(self) -> dict:
        return {
            'code': self.code.value,
            'severity': self.severity,
            'message': self.message,
            'recoverable': self.recoverable,
            'context': self.context,
        }


class SchemaLoadError(Exception):
    """A schema source is unreadable or malformed."""

    def __init__(self, message: str, version: Optional[str] = None):
        super().__init__(message)
        self.version = version

    def to_issue(self) -> DecodeIssue:
        return DecodeIssue(
            code=ErrorCode.E1001_SCHEMA_UNAVAILABLE,
            context={'version': self.version, 'reason': str(self)},
        )
