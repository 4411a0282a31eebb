from collections import Counter
from collections.abc import Iterable

from task_service.models.responses import Statistics, Task, format_timestamp


def aggregate(tasks: Iterable[Task]) -> Statistics:
    """Count tasks per priority and completed tasks per creation day."""
    by_priority: Counter[str] = Counter()
    completed_by_day: Counter[str] = Counter()

    for task in tasks:
        by_priority[task.priority] += 1
        if task.completed:
            day = format_timestamp(task.created_at).split("T")[0]
            completed_by_day[day] += 1

    return Statistics(
        count_by_priority=dict(by_priority),
        completed_by_day=dict(completed_by_day),
    )
