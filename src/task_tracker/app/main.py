from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable, Optional
import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.templating import Jinja2Templates

from task_tracker import settings
from task_tracker.app.routes import config, probes, tasks
from task_tracker.app.middleware.access_log import AccessLogMiddleware
from task_tracker.domain.errors import TaskTrackerError
from task_tracker.infra.db.stores import TaskStore, build_store
from task_tracker.observability.logging import setup_logging
from task_tracker.services.task_service import TaskService

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
logger = logging.getLogger("task_tracker.system")


def _init_store(store_factory: Callable[[], TaskStore]) -> Optional[TaskStore]:
    # A store that can't be built leaves the app up but "not ready".
    try:
        return store_factory()
    except Exception as e:
        logger.exception("store.init.failed", extra={"category": "system", "event": "store.init.failed", "error": str(e)})
        return None


def create_app(
    store_factory: Callable[[], TaskStore] = build_store,
    *,
    configure_logging: bool = True,
) -> FastAPI:
    if configure_logging:
        setup_logging()

    store = _init_store(store_factory)
    svc = TaskService(store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if store is not None:
            try:
                await store.open()
                logger.info("store.ready", extra={"category": "system", "event": "store.ready", "store": type(store).__name__})
            except Exception as e:
                logger.exception("store.open.failed", extra={"category": "system", "event": "store.open.failed", "error": str(e)})
        yield
        if store is not None:
            await store.close()

    app = FastAPI(title="Task Tracker", lifespan=lifespan)
    app.state.task_service = svc
    app.add_middleware(AccessLogMiddleware)

    @app.exception_handler(TaskTrackerError)
    async def _task_tracker_error(request: Request, exc: TaskTrackerError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    # Static files (CSS/JS)
    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    # Routers
    app.include_router(probes.router)
    app.include_router(tasks.router)
    app.include_router(config.router)

    # Pages
    @app.get("/", response_class=HTMLResponse)
    def home(request: Request):
        return templates.TemplateResponse(request, "index.html", {"config": settings.ui_config()})

    return app
