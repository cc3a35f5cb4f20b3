"""Weekly meal planning — assign a named meal to each day + meal-slot cell.

The plan is a sparse grid: only cells with an assigned meal have a record.
The whole grid is persisted as one "planRecords" blob on every change:
"{day}-{slot}" holds the meal name and "{day}-{slot}-ingredients" holds the
raw ingredient text (only when it lists at least one ingredient).
"""

from typing import Iterator, Optional

from meal_planner.core.errors import ValidationError
from meal_planner.core.records import decode_string_map, encode, load_record
from meal_planner.db.models import DAYS, MEAL_SLOTS, MealRecord, MealSlotKey, parse_ingredients
from meal_planner.db.store import PLAN_KEY, KeyValueStore
from meal_planner.logging_config import get_logger

logger = get_logger(__name__)

_INGREDIENTS_SUFFIX = "-ingredients"


class PlanState:
    """The meal assigned to each cell of the weekly grid."""

    def __init__(self, store: KeyValueStore, meals: dict[MealSlotKey, MealRecord] = None):
        self.store = store
        self._meals: dict[MealSlotKey, MealRecord] = dict(meals or {})

    @classmethod
    def load(cls, store: KeyValueStore) -> "PlanState":
        raw = load_record(store, PLAN_KEY, decode_string_map, dict)
        return cls(store, records_to_meals(raw))

    def get_meal(self, key: MealSlotKey) -> Optional[MealRecord]:
        return self._meals.get(key)

    def set_meal(self, key: MealSlotKey, name: str, ingredients_raw: str = "") -> MealRecord:
        """Insert or overwrite the meal at key.

        Raises ValidationError (leaving the plan untouched) if name is blank.
        Ingredient text is kept trimmed, and only if it lists something.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Please enter a meal name!")
        text = (ingredients_raw or "").strip()
        record = MealRecord(name=name, ingredients_raw=text if parse_ingredients(text) else "")
        self._meals[key] = record
        self._save()
        logger.debug(f"Saved meal {name!r} at {key.storage_key}")
        return record

    def remove_meal(self, key: MealSlotKey) -> None:
        """Delete the meal at key. Removing an empty cell is a no-op (still persisted)."""
        removed = self._meals.pop(key, None)
        self._save()
        if removed:
            logger.debug(f"Removed meal {removed.name!r} at {key.storage_key}")

    def active_meals(self) -> Iterator[tuple[MealSlotKey, MealRecord]]:
        for key, record in self._meals.items():
            if record.is_active:
                yield key, record

    def week_grid(self) -> dict[str, dict[str, Optional[MealRecord]]]:
        """Returns the full grid as {day: {slot: MealRecord or None}}."""
        return {
            day: {slot: self._meals.get(MealSlotKey(day, slot)) for slot in MEAL_SLOTS}
            for day in DAYS
        }

    def clear(self) -> None:
        """Forget every meal in memory. Clearing the stored record is the caller's job."""
        self._meals.clear()

    def __len__(self) -> int:
        return len(self._meals)

    def _save(self) -> None:
        self.store.set(PLAN_KEY, encode(meals_to_records(self._meals)))


def meals_to_records(meals: dict[MealSlotKey, MealRecord]) -> dict[str, str]:
    records: dict[str, str] = {}
    for key, record in meals.items():
        records[key.storage_key] = record.name
        if record.ingredients_raw:
            records[key.ingredients_key] = record.ingredients_raw
    return records


def records_to_meals(records: dict[str, str]) -> dict[MealSlotKey, MealRecord]:
    """Rebuild meals from stored records.

    Unknown cell keys and blank names are skipped; ingredient text whose meal
    name is missing is orphaned data and is dropped.
    """
    meals: dict[MealSlotKey, MealRecord] = {}
    for storage_key, value in records.items():
        if storage_key.endswith(_INGREDIENTS_SUFFIX):
            continue
        try:
            key = MealSlotKey.parse(storage_key)
        except ValueError:
            logger.warning(f"Skipping unknown plan record {storage_key!r}")
            continue
        name = value.strip()
        if not name:
            continue
        meals[key] = MealRecord(name=name, ingredients_raw=records.get(key.ingredients_key, ""))
    return meals
