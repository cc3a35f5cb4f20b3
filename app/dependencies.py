from fastapi import HTTPException, Request
from itsdangerous import BadSignature, URLSafeTimedSerializer

from meal_planner.config import secret_key
from meal_planner.core.planner import Planner
from meal_planner.db.models import MealSlotKey

SESSION_COOKIE = "mp_session"
SESSION_MAX_AGE = 60 * 60 * 24 * 7  # 7 days


def _get_signer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key())


def create_session_token() -> str:
    return _get_signer().dumps("ok")


def verify_session_token(token: str) -> bool:
    try:
        _get_signer().loads(token, max_age=SESSION_MAX_AGE)
        return True
    except BadSignature:
        return False


# Paths that don't require auth
_PUBLIC_PREFIXES = ("/login", "/static")


def is_public(path: str) -> bool:
    return any(path.startswith(p) for p in _PUBLIC_PREFIXES)


def get_planner(request: Request) -> Planner:
    """The application-wide planner created in the lifespan handler."""
    return request.app.state.planner


def slot_key(day: str, slot: str) -> MealSlotKey:
    """Build a MealSlotKey from request values, 404 for unknown cells."""
    try:
        return MealSlotKey(day, slot)
    except ValueError:
        raise HTTPException(status_code=404, detail="Unknown meal slot")
