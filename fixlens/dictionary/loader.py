"""
Schema file readers.

Turns schema documents on disk into the structured sources that
DictionaryStore.load consumes:
- .xml: QuickFIX data dictionary, parsed with lxml
- .yml/.yaml: field table in YAML
- .json: field table in JSON

Example:
    store = load_store_from_paths({
        'FIX.4.2': 'spec/FIX42.xml',
        'FIX.4.4': 'spec/FIX44.xml',
    })
"""

import json
import logging
from functools import partial
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from lxml import etree

from ..core.errors import SchemaLoadError
from .schema import DictionaryStore

logger = logging.getLogger(__name__)


XML_SUFFIXES = {'.xml'}
YAML_SUFFIXES = {'.yml', '.yaml'}
JSON_SUFFIXES = {'.json'}


def read_schema_file(path: Union[Path, str]) -> Any:
    """
    Read and parse one schema document.

    Returns:
        lxml root element for XML, parsed mapping for YAML/JSON

    Raises:
        SchemaLoadError: Missing file, unknown suffix or parse failure
    """
    path = Path(path)

    if not path.exists():
        raise SchemaLoadError(f"Schema not found: {path}")

    suffix = path.suffix.lower()
    logger.debug("Reading schema %s", path)

    try:
        if suffix in XML_SUFFIXES:
            parser = etree.XMLParser(remove_comments=True, resolve_entities=False)
            return etree.parse(str(path), parser).getroot()

        if suffix in YAML_SUFFIXES:
            # BaseLoader keeps every scalar a string: Y/N and 010 are codes
            with open(path, encoding='utf-8') as f:
                data = yaml.load(f, Loader=yaml.BaseLoader)
        elif suffix in JSON_SUFFIXES:
            with open(path, encoding='utf-8') as f:
                data = json.load(f)
        else:
            raise SchemaLoadError(f"Unsupported schema format: {path.suffix or path.name}")

    except etree.XMLSyntaxError as e:
        raise SchemaLoadError(f"Invalid XML in {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML in {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaLoadError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, (dict, list)):
        raise SchemaLoadError(f"Schema {path} does not contain a field table")
    return data


def load_store_from_paths(
    paths: Mapping[str, Union[Path, str]],
    base_dir: Optional[Path] = None,
) -> DictionaryStore:
    """
    Build a DictionaryStore from version -> schema file path.

    Relative paths are resolved against base_dir when given. Files are
    read lazily by the store so a bad file only drops its own version.
    """
    sources = {}
    for version, raw_path in paths.items():
        path = Path(raw_path).expanduser()
        if base_dir is not None and not path.is_absolute():
            path = Path(base_dir).expanduser() / path
        sources[version] = partial(read_schema_file, path)

    return DictionaryStore.load(sources)
