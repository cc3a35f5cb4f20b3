import json
import re

import pytest

from meal_planner.core.groceries import CustomGroceryState
from meal_planner.core.meal_plan import PlanState
from meal_planner.core.shopping_list import (
    EMPTY_MESSAGE,
    aggregate,
    collation_key,
    format_grocery_list,
    partition,
)
from meal_planner.db.models import GroceryLine, MealSlotKey
from meal_planner.db.store import MemoryStore


@pytest.fixture
def plan():
    return PlanState(MemoryStore())


@pytest.fixture
def custom():
    return CustomGroceryState(MemoryStore())


# ── Aggregation ────────────────────────────────────────────────────────────────

def test_aggregate_counts_repeated_ingredients(plan, custom):
    plan.set_meal(MealSlotKey("Monday", "Dinner"), "Adobo", "Soy sauce\nVinegar\nSoy sauce")
    assert aggregate(plan, custom) == {"Soy sauce": 2, "Vinegar": 1}


def test_aggregate_sums_across_meals_and_custom_items(plan, custom):
    plan.set_meal(MealSlotKey("Monday", "Dinner"), "Adobo", "Garlic\nRice")
    plan.set_meal(MealSlotKey("Tuesday", "Lunch"), "Fried rice", "Rice\nEgg\n")
    plan.set_meal(MealSlotKey("Wednesday", "Snack"), "Chips")
    custom.add_item("Rice")
    custom.add_item("Milk")

    assert aggregate(plan, custom) == {"Garlic": 1, "Rice": 3, "Egg": 1, "Milk": 1}


def test_aggregate_is_case_sensitive(plan, custom):
    plan.set_meal(MealSlotKey("Monday", "Lunch"), "Salad", "tomato\nTomato")
    assert aggregate(plan, custom) == {"tomato": 1, "Tomato": 1}


def test_removing_meal_removes_its_contributions(plan, custom):
    key = MealSlotKey("Monday", "Dinner")
    plan.set_meal(key, "Adobo", "Soy sauce\nVinegar\nSoy sauce")
    custom.add_item("Rice")
    plan.remove_meal(key)

    assert aggregate(plan, custom) == {"Rice": 1}


def test_aggregate_empty(plan, custom):
    assert aggregate(plan, custom) == {}
    assert aggregate(plan, []) == {}


# ── Partitioning ───────────────────────────────────────────────────────────────

def test_partition_empty_returns_none():
    assert partition({}, set()) is None


def test_partition_splits_and_sorts_each_group():
    counts = {"Soy sauce": 2, "Vinegar": 1, "Rice": 1, "Apples": 3}
    result = partition(counts, {"Vinegar", "Apples", "Not listed"})

    assert [line.name for line in result.unpurchased] == ["Rice", "Soy sauce"]
    assert [line.name for line in result.purchased] == ["Apples", "Vinegar"]
    assert [line.name for line in result.lines] == ["Rice", "Soy sauce", "Apples", "Vinegar"]
    assert len(result) == 4
    assert result.lines[1] == GroceryLine("Soy sauce", 2, purchased=False)


def test_partition_every_name_appears_exactly_once():
    counts = {name: 1 for name in ["b", "A", "c", "D", "e"]}
    result = partition(counts, {"c", "A"})
    names = [line.name for line in result.lines]

    assert sorted(names) == sorted(counts)
    assert all(not line.purchased for line in result.unpurchased)
    assert all(line.purchased for line in result.purchased)


def test_sort_ignores_case_and_accents():
    result = partition({"banana": 1, "Apple": 1, "éclair": 1, "Date": 1, "cherry": 1}, set())
    assert [line.name for line in result.lines] == ["Apple", "banana", "cherry", "Date", "éclair"]


def test_collation_puts_lowercase_first_on_ties():
    assert sorted(["Rice", "rice"], key=collation_key) == ["rice", "Rice"]


def test_punctuation_and_digits_sort_before_letters():
    names = ["banana", "~apple", "apple", "7up", "_x", "Apples"]
    assert sorted(names, key=collation_key) == ["_x", "~apple", "7up", "apple", "Apples", "banana"]


def test_grocery_line_label():
    assert GroceryLine("Soy sauce", 2).label == "2x Soy sauce"
    assert GroceryLine("Rice", 1).label == "Rice"


# ── Export ─────────────────────────────────────────────────────────────────────

def test_format_grocery_list():
    text = format_grocery_list(partition({"Soy sauce": 2, "Vinegar": 1, "Rice": 1}, {"Vinegar"}))
    assert text.splitlines() == [
        "=== To buy ===",
        "  [ ] Rice",
        "  [ ] 2x Soy sauce",
        "",
        "=== Purchased ===",
        "  [x] Vinegar",
        "",
        "1 of 3 items purchased",
    ]


def test_format_grocery_list_empty():
    assert format_grocery_list(None) == EMPTY_MESSAGE


# ── Routes ─────────────────────────────────────────────────────────────────────

def test_shopping_list_empty(fresh_plan):
    resp = fresh_plan.get("/shopping/list")
    assert resp.status_code == 200
    assert "No items yet." in resp.text


def test_shopping_add_toggle_remove(fresh_plan):
    resp = fresh_plan.post("/shopping/items", data={"name": "  Rice "})
    assert resp.status_code == 200
    assert "Rice" in resp.text
    assert "checked" not in resp.text

    resp = fresh_plan.post("/shopping/toggle", data={"name": "Rice"})
    assert "checked" in resp.text
    assert 'swap:400ms' in resp.text

    resp = fresh_plan.post("/shopping/items/remove", data={"name": "Rice"})
    assert "No items yet." in resp.text

    resp = fresh_plan.post("/shopping/items", data={"name": "Rice"})
    assert "Rice" in resp.text
    assert "checked" not in resp.text


def test_shopping_purchased_items_render_last(fresh_plan):
    fresh_plan.post("/meal-plan/set", data={
        "day": "Monday", "slot": "Dinner", "name": "Adobo",
        "ingredients": "Soy sauce\nVinegar\nSoy sauce",
    })
    fresh_plan.post("/shopping/items", data={"name": "Rice"})
    resp = fresh_plan.post("/shopping/toggle", data={"name": "Vinegar"})

    text = resp.text
    assert text.index("Rice") < text.index("2x Soy sauce") < text.index("Vinegar")


def test_shopping_export(fresh_plan):
    fresh_plan.post("/shopping/items", data={"name": "Rice"})
    resp = fresh_plan.get("/shopping/export")
    assert resp.status_code == 200
    assert "text/plain" in resp.headers["content-type"]
    assert "[ ] Rice" in resp.text


def test_shopping_export_empty(fresh_plan):
    resp = fresh_plan.get("/shopping/export")
    assert resp.text == "No items yet."


def _toggle_values(html: str) -> list[dict]:
    """The form values each rendered checkbox sends to /shopping/toggle."""
    return [
        json.loads(raw)
        for raw in re.findall(r'hx-post="/shopping/toggle"\s+hx-vals=\'([^\']*)\'', html)
    ]


def test_shopping_checkbox_unchecks_purchased_item(fresh_plan):
    fresh_plan.post("/shopping/items", data={"name": "Rice"})
    resp = fresh_plan.post("/shopping/toggle", data={"name": "Rice"})
    assert "checked" in resp.text

    # An unchecked checkbox contributes nothing itself; only hx-vals is posted
    values = _toggle_values(resp.text)
    assert values == [{"name": "Rice"}]

    resp = fresh_plan.post("/shopping/toggle", data=values[0])
    assert resp.status_code == 200
    assert "checked" not in resp.text
    assert _toggle_values(resp.text) == [{"name": "Rice"}]
