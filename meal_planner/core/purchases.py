"""Purchase tracking — which grocery item names are checked off.

Membership is the only signal.  Names that no longer appear on the grocery
list are kept as-is and simply never render.
"""

from meal_planner.core.records import decode_string_list, encode, load_record
from meal_planner.db.store import PURCHASED_KEY, KeyValueStore
from meal_planner.logging_config import get_logger

logger = get_logger(__name__)


class PurchaseState:
    def __init__(self, store: KeyValueStore, names: list[str] = None):
        self.store = store
        self._names: set[str] = set(names or [])

    @classmethod
    def load(cls, store: KeyValueStore) -> "PurchaseState":
        return cls(store, load_record(store, PURCHASED_KEY, decode_string_list, list))

    def mark_purchased(self, name: str) -> None:
        self._names.add(name)
        self._save()

    def mark_unpurchased(self, name: str) -> None:
        self._names.discard(name)
        self._save()

    def is_purchased(self, name: str) -> bool:
        return name in self._names

    def toggle(self, name: str) -> bool:
        """Flip the purchased flag for name and return the new flag."""
        if name in self._names:
            self.mark_unpurchased(name)
            purchased = False
        else:
            self.mark_purchased(name)
            purchased = True
        logger.debug(f"Marked {name!r} {'purchased' if purchased else 'unpurchased'}")
        return purchased

    def names(self) -> frozenset[str]:
        return frozenset(self._names)

    def clear(self) -> None:
        self._names.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def _save(self) -> None:
        self.store.set(PURCHASED_KEY, encode(sorted(self._names)))
