"""Grocery list generation — count meal ingredients and custom items, then order for display.

aggregate() folds every active meal's ingredient lines and every custom item
into {item_name: count}.  partition() splits that by purchase state and sorts
each half; it returns None when there is nothing to show.  Both are pure and
safe to call after any mutation.
"""

import unicodedata
from collections import defaultdict
from typing import Container, Iterable, Optional

from meal_planner.core.meal_plan import PlanState
from meal_planner.db.models import GroceryLine, GroceryList

EMPTY_MESSAGE = "No items yet."


def aggregate(plan: PlanState, custom_items: Iterable[str]) -> dict[str, int]:
    """
    Count grocery items across all planned meals plus custom items.
    Returns {item_name: count}; a name repeated within one meal counts each time.
    """
    counts: dict[str, int] = defaultdict(int)
    for _key, record in plan.active_meals():
        for item in record.ingredients:
            counts[item] += 1
    for item in custom_items:
        counts[item] += 1
    return dict(counts)


def _char_weight(ch: str) -> tuple[int, str]:
    """Primary weight of one character: whitespace, punctuation, symbols, digits, then letters."""
    if ch.isspace():
        return 0, ch
    category = unicodedata.category(ch)
    if category.startswith("P"):
        return 1, ch
    if category.startswith("S"):
        return 2, ch
    if category.startswith("N"):
        return 3, ch
    return 4, ch


def collation_key(name: str) -> tuple:
    """Sort key approximating locale collation (ICU root order), not a full implementation.

    Primary: base characters, ignoring accents and case, with whitespace,
    punctuation and symbols ahead of digits and digits ahead of letters.
    Then accents, then lowercase before uppercase, then the raw string so the
    order is total.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    primary = tuple(_char_weight(ch) for ch in base.casefold())
    return primary, decomposed.casefold(), name.swapcase(), name


def partition(counts: dict[str, int], purchased: Container[str]) -> Optional[GroceryList]:
    """Split aggregated items into unpurchased and purchased rows, each sorted by name.

    Returns None for an empty aggregation so callers can show an empty-state
    message instead of an empty list.
    """
    if not counts:
        return None

    unbought: list[GroceryLine] = []
    bought: list[GroceryLine] = []
    for name, count in counts.items():
        if name in purchased:
            bought.append(GroceryLine(name, count, purchased=True))
        else:
            unbought.append(GroceryLine(name, count, purchased=False))

    unbought.sort(key=lambda line: collation_key(line.name))
    bought.sort(key=lambda line: collation_key(line.name))
    return GroceryList(unpurchased=tuple(unbought), purchased=tuple(bought))


def format_grocery_list(grocery_list: Optional[GroceryList]) -> str:
    """Format the grocery list as plain text for export/clipboard."""
    if grocery_list is None:
        return EMPTY_MESSAGE

    lines = []
    if grocery_list.unpurchased:
        lines.append("=== To buy ===")
        lines.extend(f"  [ ] {line.label}" for line in grocery_list.unpurchased)
        lines.append("")
    if grocery_list.purchased:
        lines.append("=== Purchased ===")
        lines.extend(f"  [x] {line.label}" for line in grocery_list.purchased)
        lines.append("")

    lines.append(f"{len(grocery_list.purchased)} of {len(grocery_list)} items purchased")
    return "\n".join(lines).strip()
