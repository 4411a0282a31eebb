"""In-memory task store."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from task_service.models.requests import TaskCreate
from task_service.models.responses import Task


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC)


class TaskStore:
    """Ordered, process-lifetime collection of tasks.

    The store is the only owner of the task list and of the id counter.
    Ids start at 1, grow by one per created task and are never reused.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock
        self._tasks: list[Task] = []
        self._next_id = 1

    @classmethod
    def seeded(cls, clock: Callable[[], datetime] = utcnow) -> "TaskStore":
        store = cls(clock=clock)
        store.create(
            TaskCreate(
                title="Learn the task API",
                description="Practice with the HTTP server",
                priority="high",
            )
        )
        return store

    def __len__(self) -> int:
        return len(self._tasks)

    def list_all(self) -> list[Task]:
        return list(self._tasks)

    def create(
        self, data: TaskCreate, before_commit: Callable[[Task], None] | None = None
    ) -> Task:
        """Add a task built from ``data`` and return it.

        ``before_commit`` runs once the record is built but before it is
        appended; if it raises, the store is left unchanged. The id is
        consumed either way so ids are never reused.
        """
        task = Task(
            id=self._next_id,
            title=data.title,
            description=data.description,
            priority=data.priority,
            completed=False,
            created_at=self._clock(),
        )
        self._next_id += 1
        if before_commit is not None:
            before_commit(task)
        self._tasks.append(task)
        logger.debug("Stored task id=%s priority=%s", task.id, task.priority)
        return task
