"""
Indexed schema dictionaries.

A Dictionary holds the field definitions of one protocol version, indexed by
tag number. Each Field indexes its coded values by value string, so tag and
enum lookups are single dict hits instead of schema tree scans.

DictionaryStore maps a protocol version identifier (the BeginString value,
e.g. "FIX.4.4") to its Dictionary. It is built once and never mutated.

Example:
    store = DictionaryStore.load({
        'FIX.4.4': etree.parse('FIX44.xml').getroot(),
    })
    side = store.lookup('FIX.4.4').get('54')
    side.describe('2')  # "SELL"
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple, Union

from ..core.errors import DecodeIssue, SchemaLoadError

logger = logging.getLogger(__name__)


# Structured schema input: an XML element (lxml or ElementTree), a mapping,
# or a zero-argument callable producing either one.
SchemaSource = Union[Any, Mapping, Callable[[], Any]]


@dataclass(frozen=True)
class EnumValue:
    """One coded value of a field and its human readable description."""
    value: str
    description: str


@dataclass(frozen=True)
class Field:
    """
    Schema field definition.

    Attributes:
        number: Tag number as it appears on the wire ("54")
        name: Field name ("Side")
        enums: Coded values in schema order; empty for free-form fields
        data_type: Schema data type ("CHAR", "PRICE", ...), display only
    """
    number: str
    name: str
    enums: Tuple[EnumValue, ...] = ()
    data_type: Optional[str] = None
    _descriptions: Mapping = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        descriptions: Dict[str, str] = {}
        for enum in self.enums:
            # First definition wins when a schema repeats a value
            descriptions.setdefault(enum.value, enum.description)
        object.__setattr__(self, 'enums', tuple(self.enums))
        object.__setattr__(self, '_descriptions', MappingProxyType(descriptions))

    @property
    def is_coded(self) -> bool:
        """True when the field has an enumerated value list."""
        return bool(self.enums)

    def describe(self, value: str) -> Optional[str]:
        """Description for a coded value, or None."""
        return self._descriptions.get(value)


class Dictionary(Mapping):
    """
    Field definitions of one protocol version, keyed by tag number.

    Read-only: the index is built in __init__ and exposed through the
    Mapping interface only.
    """

    def __init__(self, version: str, fields: Iterable[Field]):
        self.version = version
        index: Dict[str, Field] = {}
        names: Dict[str, Field] = {}
        for fld in fields:
            if fld.number in index:
                raise SchemaLoadError(
                    f"Duplicate field number {fld.number} "
                    f"({index[fld.number].name}, {fld.name})",
                    version=version,
                )
            index[fld.number] = fld
            names.setdefault(fld.name, fld)
        self._fields = MappingProxyType(index)
        self._names = MappingProxyType(names)

    def __getitem__(self, number: str) -> Field:
        return self._fields[number]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Dictionary(version={self.version!r}, fields={len(self)})"

    def field_by_name(self, name: str) -> Optional[Field]:
        """Reverse lookup by field name."""
        return self._names.get(name)

    @classmethod
    def from_tree(cls, version: str, root: Any) -> 'Dictionary':
        """
        Build from a QuickFIX-style XML tree.

        Expects <field number=".." name=".." type=".."> elements under a
        <fields> node, each with optional <value enum=".." description=".."/>
        children. Field references inside <messages>/<components> carry no
        number and are not part of the fields section, so they are ignored.

        Raises:
            SchemaLoadError: On missing attributes or duplicate numbers
        """
        if hasattr(root, 'getroot'):
            root = root.getroot()

        if root.tag == 'fields':
            nodes = root.findall('field')
        else:
            nodes = root.findall('.//fields/field')

        fields = []
        for node in nodes:
            number = (node.get('number') or '').strip()
            name = (node.get('name') or '').strip()
            if not number or not name:
                raise SchemaLoadError(
                    f"Field definition missing number or name: "
                    f"number={number!r} name={name!r}",
                    version=version,
                )

            enums = []
            for value_node in node.findall('value'):
                value = value_node.get('enum')
                if value is None:
                    raise SchemaLoadError(
                        f"Value without enum attribute in field {name}",
                        version=version,
                    )
                enums.append(EnumValue(
                    value=value,
                    description=value_node.get('description') or value,
                ))

            fields.append(Field(
                number=number,
                name=name,
                enums=tuple(enums),
                data_type=node.get('type'),
            ))

        return cls(version, fields)

    @classmethod
    def from_mapping(cls, version: str, data: Mapping) -> 'Dictionary':
        """
        Build from structured data (parsed YAML or JSON).

        Accepted shapes:
            {'fields': [{'number': 54, 'name': 'Side',
                         'values': [{'enum': '1', 'description': 'BUY'}]}]}
            {'fields': {'54': {'name': 'Side', 'enum': {'1': 'BUY'}}}}
            {'54': {'name': 'Side', 'enum': {'1': 'BUY'}}}

        Raises:
            SchemaLoadError: On unexpected shapes or missing names
        """
        entries = data.get('fields', data) if isinstance(data, Mapping) else data

        if isinstance(entries, Mapping):
            items = [
                dict(meta, number=number) if isinstance(meta, Mapping)
                else {'number': number, 'name': meta}
                for number, meta in entries.items()
            ]
        elif isinstance(entries, (list, tuple)):
            items = list(entries)
        else:
            raise SchemaLoadError(
                f"Unsupported schema layout: {type(entries).__name__}",
                version=version,
            )

        fields = []
        for item in items:
            if not isinstance(item, Mapping):
                raise SchemaLoadError(
                    f"Field entry must be a mapping, got {type(item).__name__}",
                    version=version,
                )
            number = _text(item.get('number'))
            name = _text(item.get('name'))
            if not number or not name:
                raise SchemaLoadError(
                    f"Field definition missing number or name: {dict(item)}",
                    version=version,
                )
            fields.append(Field(
                number=number,
                name=name,
                enums=_enums_from_mapping(version, name, item),
                data_type=item.get('type'),
            ))

        return cls(version, fields)


def _text(raw: Any) -> str:
    return '' if raw is None else str(raw).strip()


def _enums_from_mapping(version: str, name: str, item: Mapping) -> Tuple[EnumValue, ...]:
    values = item.get('values')
    if values is None:
        values = item.get('enum')
    if values is None:
        values = {}

    if not isinstance(values, (Mapping, list, tuple)):
        raise SchemaLoadError(
            f"Values of field {name} must be a mapping or list, got {type(values).__name__}",
            version=version,
        )

    if isinstance(values, Mapping):
        return tuple(
            EnumValue(value=str(value), description=str(desc))
            for value, desc in values.items()
        )

    enums = []
    for entry in values:
        if not isinstance(entry, Mapping) or entry.get('enum') is None:
            raise SchemaLoadError(
                f"Value without enum in field {name}: {entry!r}",
                version=version,
            )
        value = str(entry['enum'])
        enums.append(EnumValue(
            value=value,
            description=str(entry.get('description') or value),
        ))
    return tuple(enums)


def build_dictionary(version: str, source: SchemaSource) -> Dictionary:
    """
    Build a Dictionary from any supported schema source.

    Raises:
        SchemaLoadError: If the source cannot be read or is malformed
    """
    if callable(source) and not hasattr(source, 'findall'):
        try:
            source = source()
        except OSError as e:
            raise SchemaLoadError(str(e), version=version) from e
        except SchemaLoadError as e:
            if e.version is None:
                e.version = version
            raise

    if isinstance(source, Dictionary):
        return source
    if isinstance(source, (Mapping, list, tuple)):
        return Dictionary.from_mapping(version, source)
    if hasattr(source, 'findall') or hasattr(source, 'getroot'):
        return Dictionary.from_tree(version, source)

    raise SchemaLoadError(
        f"Unsupported schema source: {type(source).__name__}",
        version=version,
    )


class DictionaryStore:
    """
    Dictionaries keyed by protocol version identifier.

    Built once, read-only afterwards; safe to share between threads.
    Versions whose source failed to load are absent and listed in
    `unavailable` with the reason.
    """

    def __init__(
        self,
        dictionaries: Optional[Mapping] = None,
        unavailable: Optional[Mapping] = None,
    ):
        self._dictionaries = MappingProxyType(dict(dictionaries or {}))
        self.unavailable = MappingProxyType(dict(unavailable or {}))

    @classmethod
    def load(cls, sources: Mapping) -> 'DictionaryStore':
        """
        Build a store from version -> schema source.

        A source that fails to load only drops its own version.
        """
        dictionaries: Dict[str, Dictionary] = {}
        unavailable: Dict[str, DecodeIssue] = {}

        for version, source in sources.items():
            try:
                dictionary = build_dictionary(version, source)
            except SchemaLoadError as e:
                if e.version is None:
                    e.version = version
                logger.warning("Schema for %s unavailable: %s", version, e)
                unavailable[version] = e.to_issue()
                continue

            dictionaries[version] = dictionary
            logger.info("Loaded %s: %d fields", version, len(dictionary))

        return cls(dictionaries, unavailable)

    def lookup(self, version: Optional[str]) -> Optional[Dictionary]:
        """Exact-match lookup; None when the version is not loaded."""
        if version is None:
            return None
        return self._dictionaries.get(version)

    @property
    def versions(self) -> Tuple[str, ...]:
        return tuple(self._dictionaries)

    def __contains__(self, version: object) -> bool:
        return version in self._dictionaries

    def __len__(self) -> int:
        return len(self._dictionaries)

    def __repr__(self) -> str:
        return (
            f"DictionaryStore(versions={list(self._dictionaries)}, "
            f"unavailable={list(self.unavailable)})"
        )


def lookup(store: DictionaryStore, version: Optional[str]) -> Optional[Dictionary]:
    """Module-level form of DictionaryStore.lookup."""
    return store.lookup(version)
