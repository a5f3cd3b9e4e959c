# liftlog/main.py
import os
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from liftlog.routers.workouts import router as workouts_router
from liftlog.routers.workout_exercises import router as workout_exercises_router
from liftlog.routers.workout_sets import router as sets_router
from liftlog.routers.exercises import router as exercises_router
from liftlog.db import SessionLocal  # for healthz DB check
from liftlog.deps.auth import get_current_user_id, oauth2_scheme
from liftlog.errors import Unauthorized, ValidationFailed
from liftlog.routers.common import respond
from liftlog.schemas.result import ActionResult

log = logging.getLogger("uvicorn")

app = FastAPI(
    title="Liftlog API",
    openapi_tags=[
        {"name": "workouts", "description": "Workout sessions of the signed-in user"},
        {"name": "workout exercises", "description": "Ordered exercises within a workout"},
        {"name": "sets", "description": "Weight/reps sets per workout exercise"},
        {"name": "exercises", "description": "Shared exercise library"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
ALLOW_ORIGINS = os.getenv("ALLOW_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.exception_handler(RequestValidationError)
async def request_validation_failed(request: Request, exc: RequestValidationError):
    # FastAPI rejects malformed paths and bodies before any action runs; answer in the
    # same shape, and keep "no identity" ahead of "bad input" as the actions do
    if get_current_user_id(await oauth2_scheme(request)) is None:
        denied = Unauthorized()
        return respond(ActionResult.fail(denied.message, code=denied.code))
    failed = ValidationFailed.from_error_list(exc.errors(), drop_source=True)
    return respond(ActionResult.fail(failed.message, code=failed.code, field_errors=failed.field_errors))

@app.get("/")
def root():
    return {"ok": True, "name": "Liftlog API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": os.getenv("API_VERSION", "dev")}

# Routers
app.include_router(workouts_router)
app.include_router(workout_exercises_router)
app.include_router(sets_router)
app.include_router(exercises_router)
