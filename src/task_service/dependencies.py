from typing import Annotated

from fastapi import Depends, Request

from task_service.config import Settings
from task_service.services.access_log import AccessLog
from task_service.services.store import TaskStore


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> TaskStore:
    return request.app.state.store


def get_access_log(request: Request) -> AccessLog:
    return request.app.state.access_log


SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
StoreDep = Annotated[TaskStore, Depends(get_store)]
AccessLogDep = Annotated[AccessLog, Depends(get_access_log)]
