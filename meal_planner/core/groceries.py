"""Custom grocery items — free-standing list entries not tied to any meal.

Kept in insertion order without duplicates; display order comes from the
shopping list partitioner, not from here.
"""

from meal_planner.core.records import decode_string_list, encode, load_record
from meal_planner.db.store import CUSTOM_ITEMS_KEY, KeyValueStore
from meal_planner.logging_config import get_logger

logger = get_logger(__name__)


class CustomGroceryState:
    def __init__(self, store: KeyValueStore, items: list[str] = None):
        self.store = store
        self._items: list[str] = []
        for item in items or []:
            if item not in self._items:
                self._items.append(item)

    @classmethod
    def load(cls, store: KeyValueStore) -> "CustomGroceryState":
        return cls(store, load_record(store, CUSTOM_ITEMS_KEY, decode_string_list, list))

    def add_item(self, name: str) -> bool:
        """Append a trimmed item name. Blank names and duplicates are ignored.

        Returns True if the item was added.
        """
        value = (name or "").strip()
        if not value or value in self._items:
            return False
        self._items.append(value)
        self._save()
        logger.debug(f"Added grocery item {value!r}")
        return True

    def remove_item(self, name: str) -> bool:
        """Remove an item if present. Returns True if something was removed."""
        removed = name in self._items
        if removed:
            self._items.remove(name)
            logger.debug(f"Removed grocery item {name!r}")
        self._save()
        return removed

    def list_items(self) -> list[str]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._items

    def __iter__(self):
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def _save(self) -> None:
        self.store.set(CUSTOM_ITEMS_KEY, encode(self._items))
