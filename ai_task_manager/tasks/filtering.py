"""
AI Task Manager - Task Filtering and Sorting

Pure derivation of the task list view from the canonical collection.
No I/O happens here; callers recompute the whole view whenever the
collection, filter, sort or search query changes.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from ai_task_manager.tasks.enums import FILTER_ALL, SortDirection, SortField, TaskPriority, TaskStatus
from ai_task_manager.tasks.models import Task


PRIORITY_ORDER = {
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


@dataclass(frozen=True)
class TaskFilter:
    """Filter specification; FILTER_ALL leaves a dimension unconstrained."""

    status: str = FILTER_ALL
    priority: str = FILTER_ALL
    category: str = FILTER_ALL


@dataclass(frozen=True)
class TaskSort:
    field: SortField = SortField.CREATED_AT
    direction: SortDirection = SortDirection.DESC


@dataclass(frozen=True)
class TaskStats:
    total: int
    pending: int
    completed: int
    overdue: int


def duration_bucket(estimated_duration: Optional[str]) -> int:
    """
    Coarse ordinal for a free-text duration.

    unset: 0, minutes: 1, hours: 2, days: 3. The field is free text, so this
    is approximate: the first unit found in that order wins.
    """
    if not estimated_duration:
        return 0
    text = estimated_duration.lower()
    if "minute" in text:
        return 1
    if "hour" in text:
        return 2
    if "day" in text:
        return 3
    return 0


def matches_search(task: Task, query: str) -> bool:
    """Case-insensitive substring match on title, category or any tag."""
    needle = (query or "").strip().lower()
    if not needle:
        return True
    if needle in task.title.lower():
        return True
    if needle in (task.category or "").lower():
        return True
    return any(needle in tag.lower() for tag in task.tags)


def _value_matches(actual: str, wanted: str) -> bool:
    return wanted == FILTER_ALL or actual == wanted


def filter_tasks(tasks: Iterable[Task], task_filter: TaskFilter, query: str = "") -> List[Task]:
    """Search, then status, priority and category filters. All must pass."""
    results = []
    for task in tasks:
        if not matches_search(task, query):
            continue
        if not _value_matches(task.status.value, task_filter.status):
            continue
        if not _value_matches(task.priority.value, task_filter.priority):
            continue
        if not _value_matches(task.category, task_filter.category):
            continue
        results.append(task)
    return results


def _sort_value(task: Task, field: SortField):
    if field == SortField.DUE_DATE:
        return task.due_date or ""
    if field == SortField.PRIORITY:
        return PRIORITY_ORDER[task.priority]
    if field == SortField.URGENCY:
        return task.urgency
    if field == SortField.CREATED_AT:
        return task.created_at
    return duration_bucket(task.estimated_duration)


def sort_tasks(tasks: Iterable[Task], task_sort: TaskSort) -> List[Task]:
    """
    Totally ordered view of tasks.

    Completed tasks always follow non-completed ones; direction applies to
    the selected field only. Missing due dates stay last in their group in
    both directions. Remaining ties are broken by id.
    """
    # Stable passes, least significant key first
    ordered = sorted(tasks, key=lambda t: t.id)
    ordered.sort(
        key=lambda t: _sort_value(t, task_sort.field),
        reverse=task_sort.direction == SortDirection.DESC,
    )
    if task_sort.field == SortField.DUE_DATE:
        ordered.sort(key=lambda t: t.due_date is None)
    ordered.sort(key=lambda t: t.is_completed)
    return ordered


def apply_filters_and_sort(
    tasks: Iterable[Task],
    task_filter: TaskFilter,
    task_sort: TaskSort,
    query: str = "",
) -> List[Task]:
    return sort_tasks(filter_tasks(tasks, task_filter, query), task_sort)


def compute_task_stats(tasks: Iterable[Task], today: date) -> TaskStats:
    """Counts over the canonical collection; overdue = open with a past due date."""
    tasks = list(tasks)
    today_iso = today.isoformat()
    return TaskStats(
        total=len(tasks),
        pending=sum(1 for t in tasks if t.status == TaskStatus.PENDING),
        completed=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
        overdue=sum(
            1 for t in tasks
            if not t.is_completed and t.due_date is not None and t.due_date < today_iso
        ),
    )
