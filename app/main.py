import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from meal_planner.config import log_json, log_level
from meal_planner.core.planner import Planner
from meal_planner.db.database import init_db
from meal_planner.db.store import SqliteStore
from meal_planner.logging_config import configure_logging, request_id_ctx
from app.dependencies import verify_session_token, is_public, SESSION_COOKIE
from app.routers import auth, meal_plan, shopping


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(log_level(), json_format=log_json())
    init_db()
    app.state.planner = Planner(SqliteStore())
    yield


app = FastAPI(lifespan=lifespan)

app.mount("/static", StaticFiles(directory=Path(__file__).parent / "static"), name="static")


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    if not is_public(request.url.path):
        token = request.cookies.get(SESSION_COOKIE)
        if not token or not verify_session_token(token):
            return RedirectResponse(url="/login", status_code=302)
    return await call_next(request)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    token = request_id_ctx.set(request.headers.get("X-Request-ID") or uuid.uuid4().hex)
    try:
        return await call_next(request)
    finally:
        request_id_ctx.reset(token)


app.include_router(auth.router)
app.include_router(meal_plan.router)
app.include_router(shopping.router)
