"""
Tag and value resolution.

The BeginString (tag 8) of a message selects the dictionary; every pair is
then resolved independently against it. Lookups that miss leave the name
empty instead of failing, so decode() always returns one ResolvedField per
input pair, in input order.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.errors import DecodeIssue, ErrorCode
from ..dictionary.schema import Dictionary, DictionaryStore, Field
from .tokenizer import RawPair


# BeginString carries the protocol version
VERSION_TAG = '8'


@dataclass(frozen=True)
class ResolvedField:
    """A tag/value pair with the names found for it, if any."""
    tag: str
    value: str
    tag_name: Optional[str] = None
    value_name: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.tag_name is not None

    def to_dict(self) -> dict:
        return {
            'tag': self.tag,
            'tag_name': self.tag_name,
            'value': self.value,
            'value_name': self.value_name,
        }


def resolve_version(pairs: Sequence[RawPair]) -> Optional[str]:
    """Value of the first BeginString pair, or None."""
    for pair in pairs:
        if pair.tag == VERSION_TAG:
            return pair.value
    return None


def resolve_field(dictionary: Optional[Dictionary], tag: str) -> Optional[Field]:
    if dictionary is None:
        return None
    return dictionary.get(tag)


def resolve_value_name(fld: Optional[Field], raw_value: str) -> Optional[str]:
    """
    Enum description of raw_value within fld.

    Free-form fields never resolve, even when another field defines the
    same value.
    """
    if fld is None or not fld.is_coded:
        return None
    return fld.describe(raw_value)


def decode(pairs: Sequence[RawPair], store: DictionaryStore) -> List[ResolvedField]:
    """Resolve every pair against the dictionary selected by the message version."""
    dictionary = store.lookup(resolve_version(pairs))

    resolved = []
    for tag, value in pairs:
        fld = resolve_field(dictionary, tag)
        resolved.append(ResolvedField(
            tag=tag,
            value=value,
            tag_name=fld.name if fld is not None else None,
            value_name=resolve_value_name(fld, value),
        ))
    return resolved


def collect_issues(pairs: Sequence[RawPair], store: DictionaryStore) -> List[DecodeIssue]:
    """
    Explain why names are missing from decode() output.

    Reports an unknown version once; otherwise one issue per unknown tag and
    per unknown value of a coded field.
    """
    version = resolve_version(pairs)
    dictionary = store.lookup(version)

    if dictionary is None:
        context = {'version': version}
        if version in store.unavailable:
            context['reason'] = store.unavailable[version].context.get('reason')
        return [DecodeIssue(code=ErrorCode.E2001_UNKNOWN_VERSION, context=context)]

    issues = []
    for tag, value in pairs:
        fld = dictionary.get(tag)
        if fld is None:
            issues.append(DecodeIssue(
                code=ErrorCode.E2002_UNKNOWN_FIELD,
                context={'tag': tag, 'version': version},
            ))
        elif fld.is_coded and fld.describe(value) is None:
            issues.append(DecodeIssue(
                code=ErrorCode.E2003_UNKNOWN_ENUM_VALUE,
                context={'tag': tag, 'field': fld.name, 'value': value},
            ))
    return issues
