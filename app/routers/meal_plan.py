from pathlib import Path

from fastapi import APIRouter, Depends, Request, Form
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from meal_planner.config import purchase_animation_ms
from meal_planner.core.errors import ValidationError
from meal_planner.core.planner import Planner
from meal_planner.db.models import DAYS, MEAL_SLOTS
from app.dependencies import get_planner, slot_key

router = APIRouter(prefix="/meal-plan", tags=["meal_plan"])
templates = Jinja2Templates(directory=Path(__file__).parent.parent / "templates")

# Tells the grocery panel to re-fetch itself after plan changes
GROCERIES_CHANGED = {"HX-Trigger": "groceries-changed"}


def _grid_context(planner: Planner) -> dict:
    return {
        "days": DAYS,
        "slots": MEAL_SLOTS,
        "week_grid": planner.week_grid(),
    }


def _grid_response(request: Request, planner: Planner):
    # Sent out-of-band so the editor panel it replaces ends up empty (closed)
    return templates.TemplateResponse(
        request, "partials/meal_grid.html", {"oob": True, **_grid_context(planner)},
        headers=GROCERIES_CHANGED,
    )


# ── Page & grid ────────────────────────────────────────────────────────────────

@router.get("", response_class=HTMLResponse)
def meal_plan_page(request: Request, planner: Planner = Depends(get_planner)):
    return templates.TemplateResponse(request, "meal_plan.html", {
        "grocery_list": planner.grocery_list(),
        "animation_ms": purchase_animation_ms(),
        **_grid_context(planner),
    })


@router.get("/grid", response_class=HTMLResponse)
def meal_plan_grid(request: Request, planner: Planner = Depends(get_planner)):
    return templates.TemplateResponse(request, "partials/meal_grid.html", _grid_context(planner))


# ── Meal editor ────────────────────────────────────────────────────────────────

@router.get("/pick/{day}/{slot}", response_class=HTMLResponse)
def meal_picker(request: Request, day: str, slot: str, planner: Planner = Depends(get_planner)):
    key = slot_key(day, slot)
    current = planner.get_meal(key)
    return templates.TemplateResponse(request, "partials/meal_picker.html", {
        "key": key,
        "current": current,
        "name": current.name if current else "",
        "ingredients": current.ingredients_raw if current else "",
    })


# ── Set / clear ────────────────────────────────────────────────────────────────

@router.post("/set", response_class=HTMLResponse)
def meal_set(
    request: Request,
    day: str = Form(...),
    slot: str = Form(...),
    name: str = Form(""),
    ingredients: str = Form(""),
    planner: Planner = Depends(get_planner),
):
    key = slot_key(day, slot)
    try:
        planner.save_meal(key, name, ingredients)
    except ValidationError as e:
        current = planner.get_meal(key)
        return templates.TemplateResponse(request, "partials/meal_picker.html", {
            "key": key,
            "current": current,
            "name": name,
            "ingredients": ingredients,
            "error": str(e),
        })
    return _grid_response(request, planner)


@router.post("/clear", response_class=HTMLResponse)
def meal_clear(
    request: Request,
    day: str = Form(...),
    slot: str = Form(...),
    planner: Planner = Depends(get_planner),
):
    planner.remove_meal(slot_key(day, slot))
    return _grid_response(request, planner)


@router.post("/clear-all", response_class=HTMLResponse)
def meal_clear_all(request: Request, planner: Planner = Depends(get_planner)):
    planner.clear_all()
    return _grid_response(request, planner)
