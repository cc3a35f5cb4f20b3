from pathlib import Path

from fastapi import APIRouter, Depends, Request, Form
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from meal_planner.config import purchase_animation_ms
from meal_planner.core.planner import Planner
from app.dependencies import get_planner

router = APIRouter(prefix="/shopping", tags=["shopping"])
templates = Jinja2Templates(directory=Path(__file__).parent.parent / "templates")


def _list_response(request: Request, planner: Planner):
    return templates.TemplateResponse(request, "partials/grocery_list.html", {
        "grocery_list": planner.grocery_list(),
        "animation_ms": purchase_animation_ms(),
    })


@router.get("/list", response_class=HTMLResponse)
def shopping_list(request: Request, planner: Planner = Depends(get_planner)):
    return _list_response(request, planner)


@router.post("/items", response_class=HTMLResponse)
def shopping_add_item(request: Request, name: str = Form(""), planner: Planner = Depends(get_planner)):
    planner.add_grocery_item(name)
    return _list_response(request, planner)


@router.post("/items/remove", response_class=HTMLResponse)
def shopping_remove_item(request: Request, name: str = Form(...), planner: Planner = Depends(get_planner)):
    planner.remove_grocery_item(name)
    return _list_response(request, planner)


@router.post("/toggle", response_class=HTMLResponse)
def shopping_toggle(request: Request, name: str = Form(...), planner: Planner = Depends(get_planner)):
    planner.toggle_purchased(name)
    return _list_response(request, planner)


@router.get("/export")
def shopping_export(planner: Planner = Depends(get_planner)):
    return PlainTextResponse(planner.export_text(), headers={
        "Content-Disposition": "attachment; filename=grocery_list.txt",
    })
