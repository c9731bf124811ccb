"""
Static English -> Chinese ingredient dictionary.

Loaded once from ``api/rules/<DICTIONARY_FILE>`` when the module is
imported. The JSON file's declaration order is the iteration order used by
partial matching, so keep more specific entries in the order they should win.
"""

from types import MappingProxyType
from typing import Mapping

from api import config
from api.modules.translate.errors import DictionaryError


def normalize_term(term: str) -> str:
    """Lowercase and trim an ingredient name for lookup and cache keys."""
    return term.lower().strip()


def load_dictionary(filename: str = config.DICTIONARY_FILE) -> Mapping[str, str]:
    """Read a dictionary rule file into a read-only mapping.

    Keys are normalized; entries with a blank key or a non-string/blank value
    are skipped. A key repeated after normalization keeps its first position
    and takes the later value.

    Raises:
        DictionaryError: the file is missing, is not a JSON object, or has no
            usable entries
    """
    try:
        raw = config.load_rule(filename, required=True)
    except (OSError, ValueError) as ex:
        raise DictionaryError(f"cannot load ingredient dictionary {filename}: {ex}") from ex
    if not isinstance(raw, dict):
        raise DictionaryError(f"ingredient dictionary {filename} must be a JSON object")

    entries: dict[str, str] = {}
    for english, chinese in raw.items():
        key = normalize_term(english)
        if not key or not isinstance(chinese, str) or not chinese.strip():
            continue
        entries[key] = chinese.strip()
    if not entries:
        raise DictionaryError(f"ingredient dictionary {filename} has no entries")
    return MappingProxyType(entries)


COMMON_TRANSLATIONS = load_dictionary()
