"""Domain counters for task operations."""

from opentelemetry import metrics


_meter: metrics.Meter | None = None
_tasks_created: metrics.Counter | None = None
_validation_failures: metrics.Counter | None = None
_auth_failures: metrics.Counter | None = None


def _init_metrics() -> None:
    global _meter, _tasks_created, _validation_failures, _auth_failures
    if _meter is None:
        _meter = metrics.get_meter("task_service")
        _tasks_created = _meter.create_counter(
            name="tasks.created",
            description="Tasks added to the store",
            unit="{task}",
        )
        _validation_failures = _meter.create_counter(
            name="tasks.validation_failures",
            description="Create requests rejected by validation",
            unit="{request}",
        )
        _auth_failures = _meter.create_counter(
            name="api.auth_failures",
            description="API requests rejected for a missing or wrong key",
            unit="{request}",
        )


def record_task_created(priority: str) -> None:
    _init_metrics()
    assert _tasks_created is not None
    _tasks_created.add(1, {"task.priority": priority})


def record_validation_failure(error_count: int) -> None:
    _init_metrics()
    assert _validation_failures is not None
    _validation_failures.add(1, {"validation.error_count": error_count})


def record_auth_failure(method: str) -> None:
    _init_metrics()
    assert _auth_failures is not None
    _auth_failures.add(1, {"http.request.method": method})
