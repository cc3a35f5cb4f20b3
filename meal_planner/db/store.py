"""Key-value record storage for planner state.

The planner only needs three operations over string keys: get, set and
remove.  SqliteStore keeps records in the kv_store table; MemoryStore is a
dict-backed stand-in used by tests and scratch sessions.

Known keys:
    planRecords         — JSON object of "{day}-{slot}" -> meal name and
                          "{day}-{slot}-ingredients" -> raw ingredient text.
    customGroceryItems  — JSON array of manually added grocery item names.
    purchasedItems      — JSON array of item names marked purchased.
"""

from pathlib import Path
from typing import Optional, Protocol

from meal_planner.db.database import get_connection

PLAN_KEY = "planRecords"
CUSTOM_ITEMS_KEY = "customGroceryItems"
PURCHASED_KEY = "purchasedItems"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class SqliteStore:
    """Store backed by the kv_store table of the planner database.

    db_path defaults to the active DB path (see database.get_db_path) at call time.
    """

    def __init__(self, db_path: Path = None):
        self.db_path = db_path

    def get(self, key: str) -> Optional[str]:
        """Return the value for a key, or None if not found."""
        conn = get_connection(self.db_path)
        try:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        """Insert or update a key-value pair (upsert)."""
        conn = get_connection(self.db_path)
        try:
            conn.execute(
                "INSERT INTO kv_store (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()

    def remove(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
        conn = get_connection(self.db_path)
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()


class MemoryStore:
    """In-process store; `data` is exposed so tests can seed or inspect raw records."""

    def __init__(self, data: dict[str, str] = None):
        self.data = dict(data or {})
        self.writes: list[str] = []

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes.append(key)

    def remove(self, key: str) -> None:
        self.data.pop(key, None)
        self.writes.append(key)
