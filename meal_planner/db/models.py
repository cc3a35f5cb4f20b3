"""Dataclass models for planner state and the derived grocery view.

MealSlotKey and MealRecord are persisted (via core/meal_plan.py); the
grocery classes are derived on every read and never stored.
"""

from dataclasses import dataclass, field
from typing import Optional

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
MEAL_SLOTS = ["Breakfast", "Lunch", "Dinner", "Snack"]


@dataclass(frozen=True)
class MealSlotKey:
    """A single cell in the weekly grid: one day + one meal slot.

    Stored as the string "{day}-{slot}", e.g. "Monday-Dinner".
    """

    day: str
    slot: str

    def __post_init__(self):
        if self.day not in DAYS:
            raise ValueError(f"Unknown day: {self.day!r}")
        if self.slot not in MEAL_SLOTS:
            raise ValueError(f"Unknown meal slot: {self.slot!r}")

    @property
    def storage_key(self) -> str:
        return f"{self.day}-{self.slot}"

    @property
    def ingredients_key(self) -> str:
        return f"{self.storage_key}-ingredients"

    @classmethod
    def parse(cls, value: str) -> "MealSlotKey":
        """Parse "Monday-Dinner" into a key. Raises ValueError for anything else."""
        day, sep, slot = value.partition("-")
        if not sep:
            raise ValueError(f"Not a meal slot key: {value!r}")
        return cls(day, slot)


@dataclass
class MealRecord:
    """A meal assigned to a cell.

    ingredients_raw is newline-separated free text as the user typed it;
    the parsed list is recomputed on demand and never stored.
    """

    name: str
    ingredients_raw: str = ""

    @property
    def ingredients(self) -> list[str]:
        return parse_ingredients(self.ingredients_raw)

    @property
    def is_active(self) -> bool:
        return bool(self.name)


def parse_ingredients(text: Optional[str]) -> list[str]:
    """Split ingredient text into trimmed, non-empty lines."""
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]


@dataclass(frozen=True)
class GroceryLine:
    """One row of the grocery list as displayed."""

    name: str
    count: int
    purchased: bool = False

    @property
    def label(self) -> str:
        return f"{self.count}x {self.name}" if self.count > 1 else self.name


@dataclass(frozen=True)
class GroceryList:
    """Partitioned grocery list: unpurchased rows, then purchased rows.

    Never empty; an empty aggregation is represented by None instead.
    """

    unpurchased: tuple[GroceryLine, ...] = ()
    purchased: tuple[GroceryLine, ...] = ()
    lines: tuple[GroceryLine, ...] = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "lines", self.unpurchased + self.purchased)

    def __len__(self) -> int:
        return len(self.lines)
