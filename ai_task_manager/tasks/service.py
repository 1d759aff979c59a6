"""
AI Task Manager - Task Service

Business logic for task operations: natural-language creation through the
analysis pipeline, structured CRUD, status toggles and the per-owner limit.

Store writes are fire-and-continue. When the repository fails on create,
update, toggle or delete, the failure is logged and the operation completes
with the in-memory task.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from ai_task_manager.config import settings
from ai_task_manager.errors import InputValidationError, PersistenceError, TaskLimitReachedError
from ai_task_manager.analysis.schemas import ProcessedTask
from ai_task_manager.analysis.service import TaskAnalysisService
from ai_task_manager.tasks.enums import TaskStatus
from ai_task_manager.tasks.models import Task, LIST_FIELDS, TEXT_FIELDS
from ai_task_manager.tasks.repository import TaskRepositoryInterface
from ai_task_manager.tasks.schemas import TaskCreateRequest, TaskUpdateRequest

logger = logging.getLogger(__name__)

# Fields an explicit null in an update request leaves untouched
_NON_NULLABLE_FIELDS = (
    "title",
    "status",
    "priority",
    "category",
    "urgency",
    "importance",
    "complexity",
    "tags",
)


class TaskService:
    """Service layer for task business logic."""

    def __init__(
        self,
        repository: TaskRepositoryInterface,
        analysis_service: TaskAnalysisService,
        clock: Optional[Callable[[], datetime]] = None,
        max_tasks: Optional[int] = None,
    ):
        """
        Initialize the task service.

        Args:
            repository: Task repository implementation
            analysis_service: Pipeline used for natural-language creation
            clock: Optional clock function for testing (returns current datetime)
            max_tasks: Per-owner task limit, 0 disables it (default from settings)
        """
        self.repository = repository
        self.analysis_service = analysis_service
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self.max_tasks = settings.MAX_TASKS_PER_USER if max_tasks is None else max_tasks

    def _now(self) -> datetime:
        """Get current time using the configured clock."""
        return self._clock()

    def today(self) -> date:
        return self._now().date()

    async def _check_task_limit(self, owner_id: str) -> None:
        """Raise TaskLimitReachedError when the owner is at the limit."""
        if self.max_tasks <= 0:
            return
        try:
            count = await self.repository.count_by_owner(owner_id)
        except PersistenceError as e:
            logger.warning(f"Could not count tasks for {owner_id}, skipping limit check: {e}")
            return
        if count >= self.max_tasks:
            logger.info(f"Owner {owner_id} reached the task limit ({self.max_tasks})")
            raise TaskLimitReachedError(self.max_tasks)

    async def _persist_new(self, task: Task) -> Task:
        try:
            await self.repository.create(task)
        except PersistenceError as e:
            logger.warning(f"Task {task.id} kept in memory only: {e}")
        return task

    @staticmethod
    def task_from_processed(owner_id: str, processed: ProcessedTask) -> Task:
        """Build a pending task from a pipeline result."""
        analysis = processed.analysis
        fields = {name: list(getattr(analysis, name)) for name in LIST_FIELDS}
        fields.update({name: getattr(analysis, name) for name in TEXT_FIELDS})
        return Task.create(
            owner_id=owner_id,
            title=processed.professional_title or processed.translated_text,
            priority=analysis.priority,
            category=analysis.category,
            due_date=analysis.due_date,
            urgency=analysis.urgency,
            importance=analysis.importance,
            complexity=analysis.complexity,
            confidence=analysis.confidence,
            time_sensitivity=analysis.time_sensitivity,
            work_context=analysis.work_context,
            energy_level=analysis.energy_level,
            social_context=analysis.social_context,
            original_text=processed.original_text,
            source_language=processed.source_language,
            was_translated=processed.was_translated,
            **fields,
        )

    async def add_task(
        self,
        owner_id: str,
        text: Optional[str],
        current_date: Optional[str] = None,
    ) -> Task:
        """
        Analyze natural-language input and persist the resulting task.

        Raises:
            InputValidationError: If text is empty
            TaskLimitReachedError: If the owner is at the task limit
        """
        if text is None or not text.strip():
            raise InputValidationError("Input is required")
        await self._check_task_limit(owner_id)
        processed = await self.analysis_service.process(text, current_date)
        task = self.task_from_processed(owner_id, processed)
        logger.info(f"Created task {task.id} from natural language input for {owner_id}")
        return await self._persist_new(task)

    async def create_task(self, owner_id: str, request: TaskCreateRequest) -> Task:
        """Create a task from structured input."""
        await self._check_task_limit(owner_id)
        task = Task.create(
            owner_id=owner_id,
            title=request.title,
            status=request.status,
            priority=request.priority,
            category=request.category,
            due_date=request.due_date,
            urgency=request.urgency,
            importance=request.importance,
            complexity=request.complexity,
            tags=list(request.tags),
            estimated_duration=request.estimated_duration,
            context=request.context,
        )
        return await self._persist_new(task)

    async def get_task(self, task_id: str, owner_id: str) -> Optional[Task]:
        """Get a task by ID, scoped to owner."""
        return await self.repository.get_by_id(task_id, owner_id)

    async def list_tasks(self, owner_id: str) -> List[Task]:
        """
        List the owner's canonical collection, newest first.

        Raises:
            PersistenceError: The initial fetch is user-visible
        """
        return await self.repository.list_by_owner(owner_id)

    def _apply_locally(self, current: Task, updates: dict) -> Task:
        doc = current.to_dict()
        doc.update(updates)
        doc["updated_at"] = self._now()
        return Task.from_dict(doc)

    async def _write_updates(
        self,
        task_id: str,
        owner_id: str,
        updates: dict,
        current: Optional[Task],
    ) -> Optional[Task]:
        try:
            return await self.repository.update(task_id, owner_id, dict(updates))
        except PersistenceError as e:
            if current is None:
                raise
            logger.warning(f"Update of task {task_id} kept in memory only: {e}")
            return self._apply_locally(current, updates)

    async def update_task(
        self,
        task_id: str,
        owner_id: str,
        request: TaskUpdateRequest,
        current: Optional[Task] = None,
    ) -> Optional[Task]:
        """
        Update a task, scoped to owner.

        Only fields present in the request are written. Enum values are
        stored by value. `current` is the caller's in-memory copy, used when
        the store write fails.
        """
        updates = {}
        for name, value in request.model_dump(exclude_unset=True).items():
            if name in _NON_NULLABLE_FIELDS and value is None:
                continue
            updates[name] = getattr(value, "value", value)

        if not updates:
            return current or await self.get_task(task_id, owner_id)

        return await self._write_updates(task_id, owner_id, updates, current)

    async def toggle_task_status(
        self,
        task_id: str,
        owner_id: str,
        current: Optional[Task] = None,
    ) -> Optional[Task]:
        """Flip a task between pending and completed."""
        if current is None:
            current = await self.get_task(task_id, owner_id)
            if current is None:
                return None

        next_status = TaskStatus.PENDING if current.is_completed else TaskStatus.COMPLETED
        logger.debug(f"Toggling task {task_id} to {next_status.value}")
        return await self._write_updates(
            task_id, owner_id, {"status": next_status.value}, current
        )

    async def delete_task(self, task_id: str, owner_id: str) -> bool:
        """Delete a task, scoped to owner."""
        try:
            return await self.repository.delete(task_id, owner_id)
        except PersistenceError as e:
            logger.warning(f"Delete of task {task_id} not persisted: {e}")
            return True

    async def count_tasks(self, owner_id: str) -> int:
        """Count total tasks for owner."""
        return await self.repository.count_by_owner(owner_id)
