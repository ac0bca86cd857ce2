# taskmanager/main.py

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmanager.config import Settings, load_settings
from taskmanager.database import init_db, make_engine, make_session_factory
from taskmanager.schemas.task_schema import HealthRead
from taskmanager.task.task_router import router as task_router
from taskmanager.task.task_service import TaskService
from taskmanager.task.task_store import TaskStore

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request body"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    # ---------------- DATABASE ----------------
    engine = make_engine(settings.database_url, echo=settings.sql_echo)
    store = TaskStore(make_session_factory(engine))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # StartupError propagates and the server refuses to start
        init_db(engine)
        logger.info("TaskStore ready, live tasks=%s", store.count_live())
        yield
        engine.dispose()

    app = FastAPI(title="Task Manager API", lifespan=lifespan)
    app.state.settings = settings
    app.state.task_service = TaskService(store)

    # ---------------- CORS ----------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type"],
        expose_headers=["Content-Length"],
        max_age=12 * 60 * 60,
    )

    # ---------------- ERRORS ----------------
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _describe_validation_error(exc)})

    # ---------------- ROUTERS ----------------
    api = APIRouter(prefix="/api")

    @api.get("/health", response_model=HealthRead)
    def health_check():
        return {"status": "healthy", "message": "API is operational"}

    api.include_router(task_router)
    app.include_router(api)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    from taskmanager.logging_setup import setup_logging

    settings = app.state.settings
    setup_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
