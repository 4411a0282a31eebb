import json
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import HTMLResponse

from task_service.config import Settings, get_settings
from task_service.dashboard import render_dashboard
from task_service.dependencies import AccessLogDep, SettingsDep, StoreDep
from task_service.errors import MalformedBodyError, TaskValidationError, register_error_handlers
from task_service.metrics import record_task_created, record_validation_failure
from task_service.middleware import ApiKeyMiddleware, MetricsMiddleware
from task_service.models.requests import TaskCreate
from task_service.responses import ApiJSONResponse
from task_service.services.access_log import AccessLog, FileAccessLog
from task_service.services.statistics import aggregate
from task_service.services.store import TaskStore
from task_service.services.validation import validate_task
from task_service.telemetry import instrument_fastapi, setup_telemetry


logger = logging.getLogger(__name__)

settings = get_settings()
logging.basicConfig(level=settings.log_level)

setup_telemetry(
    service_name=settings.service_name,
    otlp_endpoint=settings.otlp_endpoint,
    environment=settings.scout_environment,
    disabled=settings.otel_sdk_disabled,
)

router = APIRouter()


async def read_json_object(request: Request) -> dict[str, Any]:
    """Read the whole request body and parse it as a JSON object."""
    body = await request.body()
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError) as exc:
        raise MalformedBodyError(str(exc)) from exc
    if not isinstance(payload, dict):
        raise MalformedBodyError("request body must be a JSON object")
    return payload


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def dashboard(app_settings: SettingsDep) -> HTMLResponse:
    api_key = app_settings.api_key if app_settings.dashboard_embed_api_key else None
    return HTMLResponse(render_dashboard(api_key))


@router.get("/api/tasks")
async def list_tasks(
    request: Request, store: StoreDep, access_log: AccessLogDep
) -> ApiJSONResponse:
    tasks = store.list_all()
    access_log.log_operation(request.method, request.url.path, "list tasks")
    return ApiJSONResponse([task.model_dump(mode="json", by_alias=True) for task in tasks])


@router.post("/api/tasks", status_code=201)
async def create_task(
    request: Request, store: StoreDep, access_log: AccessLogDep
) -> ApiJSONResponse:
    payload = await read_json_object(request)

    errors = validate_task(payload)
    if errors:
        record_validation_failure(len(errors))
        raise TaskValidationError(errors)

    task = store.create(
        TaskCreate.from_payload(payload),
        before_commit=lambda _: access_log.log_operation(
            request.method, request.url.path, "create task"
        ),
    )
    record_task_created(task.priority)
    logger.info("Created task id=%s priority=%s", task.id, task.priority)
    return ApiJSONResponse(task.model_dump(mode="json", by_alias=True), status_code=201)


@router.get("/api/statistics")
async def statistics(
    request: Request, store: StoreDep, access_log: AccessLogDep
) -> ApiJSONResponse:
    result = aggregate(store.list_all())
    access_log.log_operation(request.method, request.url.path, "view statistics")
    return ApiJSONResponse(result.model_dump(mode="json", by_alias=True))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    logger.info(
        "Task service ready tasks=%d access_log=%s",
        len(app.state.store),
        getattr(app.state.access_log, "path", type(app.state.access_log).__name__),
    )
    yield
    logger.info("Task service stopped")


def create_app(
    app_settings: Settings | None = None,
    store: TaskStore | None = None,
    access_log: AccessLog | None = None,
) -> FastAPI:
    """Build the application around explicitly owned collaborators."""
    if app_settings is None:
        app_settings = settings
    if store is None:
        store = TaskStore.seeded() if app_settings.seed_tasks else TaskStore()
    if access_log is None:
        access_log = FileAccessLog(app_settings.log_file)

    # Routes are fixed; no generated docs endpoints
    app = FastAPI(
        title="Task Service",
        lifespan=lifespan,
        default_response_class=ApiJSONResponse,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = app_settings
    app.state.store = store
    app.state.access_log = access_log

    app.include_router(router)
    register_error_handlers(app)

    # Last added runs first: metrics wrap the auth check
    app.add_middleware(ApiKeyMiddleware, api_key=app_settings.api_key)
    app.add_middleware(MetricsMiddleware)
    instrument_fastapi(app)
    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "task_service.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
