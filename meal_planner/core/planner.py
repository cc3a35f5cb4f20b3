"""Planner — the single owner of plan, custom-item and purchase state.

One Planner is created per store at application start.  Its methods are
the user intents of the UI; each mutates one or more states, and each state
writes its own record once per call.  The grocery list is recomputed from
scratch on every read.

Sync route handlers run in a thread pool, so every method holds the
planner's lock: intents apply one at a time and reads never see a
half-applied intent.
"""

import threading
from typing import Optional

from meal_planner.core import shopping_list
from meal_planner.core.groceries import CustomGroceryState
from meal_planner.core.meal_plan import PlanState
from meal_planner.core.purchases import PurchaseState
from meal_planner.db.models import GroceryList, MealRecord, MealSlotKey
from meal_planner.db.store import CUSTOM_ITEMS_KEY, PLAN_KEY, PURCHASED_KEY, KeyValueStore
from meal_planner.logging_config import get_logger

logger = get_logger(__name__)


class Planner:
    def __init__(self, store: KeyValueStore):
        self.store = store
        self._lock = threading.RLock()
        self.plan = PlanState.load(store)
        self.groceries = CustomGroceryState.load(store)
        self.purchases = PurchaseState.load(store)
        logger.info(
            f"Loaded planner state: {len(self.plan)} meals, "
            f"{len(self.groceries)} custom items, {len(self.purchases)} purchased"
        )

    # ── Meals ─────────────────────────────────────────────────────────────────

    def get_meal(self, key: MealSlotKey) -> Optional[MealRecord]:
        with self._lock:
            return self.plan.get_meal(key)

    def week_grid(self) -> dict[str, dict[str, Optional[MealRecord]]]:
        with self._lock:
            return self.plan.week_grid()

    def save_meal(self, key: MealSlotKey, name: str, ingredients_raw: str = "") -> MealRecord:
        """Raises ValidationError for a blank name."""
        with self._lock:
            return self.plan.set_meal(key, name, ingredients_raw)

    def remove_meal(self, key: MealSlotKey) -> None:
        with self._lock:
            self.plan.remove_meal(key)

    # ── Grocery list ──────────────────────────────────────────────────────────

    def add_grocery_item(self, name: str) -> bool:
        with self._lock:
            return self.groceries.add_item(name)

    def remove_grocery_item(self, name: str) -> None:
        """Drop a row from the grocery list.

        Removes the matching custom item and always clears the purchased flag,
        so re-adding the same name starts unpurchased.  Ingredient-sourced
        names stay listed while a meal still uses them.
        """
        with self._lock:
            self.groceries.remove_item(name)
            self.purchases.mark_unpurchased(name)

    def toggle_purchased(self, name: str) -> bool:
        with self._lock:
            return self.purchases.toggle(name)

    def aggregate(self) -> dict[str, int]:
        with self._lock:
            return shopping_list.aggregate(self.plan, self.groceries)

    def grocery_list(self) -> Optional[GroceryList]:
        """Current grocery list, or None when there is nothing on it."""
        with self._lock:
            return shopping_list.partition(self.aggregate(), self.purchases)

    def export_text(self) -> str:
        return shopping_list.format_grocery_list(self.grocery_list())

    # ── Reset ─────────────────────────────────────────────────────────────────

    def clear_all(self) -> None:
        """Forget all meals, custom items and purchases, and delete their records."""
        with self._lock:
            self.plan.clear()
            self.groceries.clear()
            self.purchases.clear()
            for key in (PLAN_KEY, CUSTOM_ITEMS_KEY, PURCHASED_KEY):
                self.store.remove(key)
        logger.info("Cleared all meals, groceries and purchase history")
