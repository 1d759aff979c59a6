"""
AI Task Manager - Task Store

Per-owner state container holding the canonical task collection, the active
filter, sort and search query, and the derived view.

Every mutation entry point ends in `_apply_filters_and_sort`, the only place
`filtered_tasks` is written.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from ai_task_manager.tasks.filtering import (
    TaskFilter,
    TaskSort,
    TaskStats,
    apply_filters_and_sort,
    compute_task_stats,
)
from ai_task_manager.tasks.models import Task
from ai_task_manager.tasks.schemas import TaskCreateRequest, TaskUpdateRequest
from ai_task_manager.tasks.service import TaskService

logger = logging.getLogger(__name__)


class TaskStore:
    """State container for one owner's tasks."""

    def __init__(
        self,
        owner_id: str,
        service: TaskService,
        task_filter: Optional[TaskFilter] = None,
        task_sort: Optional[TaskSort] = None,
        search_query: str = "",
    ):
        self.owner_id = owner_id
        self.service = service
        self.tasks: List[Task] = []
        self.filter = task_filter or TaskFilter()
        self.sort = task_sort or TaskSort()
        self.search_query = search_query
        self.filtered_tasks: List[Task] = []

    def _apply_filters_and_sort(self) -> None:
        self.filtered_tasks = apply_filters_and_sort(
            self.tasks, self.filter, self.sort, self.search_query
        )

    def _find(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)

    def _replace(self, task: Task) -> None:
        self.tasks = [task if t.id == task.id else t for t in self.tasks]

    async def fetch_tasks(self) -> List[Task]:
        """
        Load the canonical collection from the repository.

        Raises:
            PersistenceError: Fetch failures are reported to the caller
        """
        self.tasks = await self.service.list_tasks(self.owner_id)
        logger.debug(f"Fetched {len(self.tasks)} tasks for {self.owner_id}")
        self._apply_filters_and_sort()
        return self.filtered_tasks

    async def add_task(self, text: Optional[str], current_date: Optional[str] = None) -> Task:
        """Create a task from natural-language input."""
        task = await self.service.add_task(self.owner_id, text, current_date)
        self.tasks.insert(0, task)
        self._apply_filters_and_sort()
        return task

    async def create_task(self, request: TaskCreateRequest) -> Task:
        task = await self.service.create_task(self.owner_id, request)
        self.tasks.insert(0, task)
        self._apply_filters_and_sort()
        return task

    async def update_task(self, task_id: str, request: TaskUpdateRequest) -> Optional[Task]:
        current = self._find(task_id)
        if current is None:
            return None
        task = await self.service.update_task(task_id, self.owner_id, request, current=current)
        if task is not None:
            self._replace(task)
        self._apply_filters_and_sort()
        return task

    async def toggle_task(self, task_id: str) -> Optional[Task]:
        current = self._find(task_id)
        if current is None:
            return None
        task = await self.service.toggle_task_status(task_id, self.owner_id, current=current)
        if task is not None:
            self._replace(task)
        self._apply_filters_and_sort()
        return task

    async def delete_task(self, task_id: str) -> bool:
        if self._find(task_id) is None:
            return False
        deleted = await self.service.delete_task(task_id, self.owner_id)
        if deleted:
            self.tasks = [t for t in self.tasks if t.id != task_id]
        self._apply_filters_and_sort()
        return deleted

    def set_filter(self, **changes: str) -> None:
        """Update one or more of status, priority and category."""
        self.filter = replace(self.filter, **changes)
        self._apply_filters_and_sort()

    def set_sort(self, task_sort: TaskSort) -> None:
        self.sort = task_sort
        self._apply_filters_and_sort()

    def set_search_query(self, query: str) -> None:
        self.search_query = query or ""
        self._apply_filters_and_sort()

    def stats(self) -> TaskStats:
        """Counts over the canonical collection as of the service clock's date."""
        return compute_task_stats(self.tasks, self.service.today())
