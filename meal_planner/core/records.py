"""JSON encoding of the persisted planner records.

Decoders raise MalformedStoreData; load_record() turns that (and a missing
key) into an empty default so callers never see a parse fault.
"""

import json
from typing import Callable, Optional, TypeVar

from meal_planner.core.errors import MalformedStoreData
from meal_planner.db.store import KeyValueStore
from meal_planner.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def decode_string_list(key: str, raw: str) -> list[str]:
    """Decode a JSON array of strings."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedStoreData(key, f"invalid JSON ({e})") from e
    if not isinstance(data, list):
        raise MalformedStoreData(key, f"expected a list, got {type(data).__name__}")
    if not all(isinstance(item, str) for item in data):
        raise MalformedStoreData(key, "list contains non-string entries")
    return data


def decode_string_map(key: str, raw: str) -> dict[str, str]:
    """Decode a JSON object whose values are strings."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedStoreData(key, f"invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise MalformedStoreData(key, f"expected an object, got {type(data).__name__}")
    if not all(isinstance(value, str) for value in data.values()):
        raise MalformedStoreData(key, "object contains non-string values")
    return data


def load_record(
    store: KeyValueStore,
    key: str,
    decode: Callable[[str, str], T],
    default: Callable[[], T],
) -> T:
    """Read and decode one record; absent or malformed records yield default()."""
    raw: Optional[str] = store.get(key)
    if raw is None:
        return default()
    try:
        return decode(key, raw)
    except MalformedStoreData as e:
        logger.warning(f"Ignoring malformed store record {e}")
        return default()


def encode(value) -> str:
    return json.dumps(value, ensure_ascii=False)
