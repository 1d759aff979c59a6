"""
AI Task Manager - Task Router

Task endpoints: filtered listing, stats, structured and natural-language
creation, partial updates, status toggles and deletion.
All endpoints are scoped to the calling owner.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, status, Depends, Query

from ai_task_manager.config import settings
from ai_task_manager.database import database
from ai_task_manager.dependencies import CurrentOwner
from ai_task_manager.errors import InputValidationError, PersistenceError, TaskLimitReachedError
from ai_task_manager.analysis.router import get_analysis_service
from ai_task_manager.analysis.schemas import ProcessTaskRequest
from ai_task_manager.analysis.service import TaskAnalysisService
from ai_task_manager.tasks.enums import FILTER_ALL, SortDirection, SortField
from ai_task_manager.tasks.filtering import TaskFilter, TaskSort
from ai_task_manager.tasks.repository import (
    InMemoryTaskRepository,
    TaskRepository,
    TaskRepositoryInterface,
)
from ai_task_manager.tasks.schemas import (
    TaskCreateRequest,
    TaskUpdateRequest,
    TaskResponse,
    TaskListResponse,
    TaskStatsResponse,
    TaskDeleteResponse,
)
from ai_task_manager.tasks.service import TaskService
from ai_task_manager.tasks.store import TaskStore

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/tasks", tags=["Tasks"])

# Process-wide store used when USE_IN_MEMORY_STORE is enabled
_memory_repository = InMemoryTaskRepository()


async def get_task_repository() -> TaskRepositoryInterface:
    """Dependency to get task repository instance."""
    if settings.USE_IN_MEMORY_STORE:
        return _memory_repository
    return TaskRepository(database.get_database())


async def get_task_service(
    repository: Annotated[TaskRepositoryInterface, Depends(get_task_repository)],
    analysis_service: Annotated[TaskAnalysisService, Depends(get_analysis_service)],
) -> TaskService:
    """Dependency to get task service instance."""
    return TaskService(repository, analysis_service)


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Task not found",
    )


def _unavailable(e: PersistenceError) -> HTTPException:
    logger.error(f"Task store unavailable: {e}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Task store unavailable",
    )


async def _load_store(owner_id: str, service: TaskService) -> TaskStore:
    store = TaskStore(owner_id, service)
    try:
        await store.fetch_tasks()
    except PersistenceError as e:
        raise _unavailable(e)
    return store


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List tasks",
)
async def list_tasks(
    owner_id: CurrentOwner,
    service: Annotated[TaskService, Depends(get_task_service)],
    status_filter: str = Query(default=FILTER_ALL, alias="status", description="pending, completed or all"),
    priority: str = Query(default=FILTER_ALL, description="low, medium, high or all"),
    category: str = Query(default=FILTER_ALL, description="Exact category or all"),
    search: str = Query(default="", description="Matches title, category or tags"),
    sort: SortField = Query(default=SortField.CREATED_AT, description="Sort field"),
    direction: SortDirection = Query(default=SortDirection.DESC, description="Sort direction"),
) -> TaskListResponse:
    """
    Filtered and sorted view of the owner's tasks.

    Completed tasks always come after open ones. `total` counts the whole
    collection, not just the returned view.
    """
    store = TaskStore(
        owner_id,
        service,
        task_filter=TaskFilter(status=status_filter, priority=priority, category=category),
        task_sort=TaskSort(field=sort, direction=direction),
        search_query=search,
    )
    try:
        await store.fetch_tasks()
    except PersistenceError as e:
        raise _unavailable(e)
    return TaskListResponse(
        tasks=[TaskResponse.from_task(t) for t in store.filtered_tasks],
        total=len(store.tasks),
    )


@router.get(
    "/stats",
    response_model=TaskStatsResponse,
    summary="Task counts",
)
async def task_stats(
    owner_id: CurrentOwner,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskStatsResponse:
    """Total, pending, completed and overdue counts for the owner."""
    store = await _load_store(owner_id, service)
    stats = store.stats()
    return TaskStatsResponse(
        total=stats.total,
        pending=stats.pending,
        completed=stats.completed,
        overdue=stats.overdue,
    )


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    request: TaskCreateRequest,
    owner_id: CurrentOwner,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """Create a task from structured fields."""
    try:
        task = await service.create_task(owner_id, request)
    except TaskLimitReachedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    return TaskResponse.from_task(task)


@router.post(
    "/natural",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task from natural language",
)
async def create_task_from_text(
    request: ProcessTaskRequest,
    owner_id: CurrentOwner,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Analyze free-form input and persist the resulting task.

    The input may be in any supported language; the stored title is the
    professional English title.
    """
    try:
        task = await service.add_task(owner_id, request.input, request.current_date)
    except InputValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except TaskLimitReachedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    return TaskResponse.from_task(task)


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a task by ID",
)
async def get_task(
    task_id: str,
    owner_id: CurrentOwner,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Get a specific task by ID.

    Returns 404 if the task doesn't exist or belongs to another owner.
    """
    try:
        task = await service.get_task(task_id, owner_id)
    except PersistenceError as e:
        raise _unavailable(e)
    if task is None:
        raise _not_found()
    return TaskResponse.from_task(task)


@router.patch(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update a task",
)
async def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    owner_id: CurrentOwner,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Update a task by ID.

    Only provided fields will be updated.
    """
    store = await _load_store(owner_id, service)
    task = await store.update_task(task_id, request)
    if task is None:
        raise _not_found()
    return TaskResponse.from_task(task)


@router.post(
    "/{task_id}/toggle",
    response_model=TaskResponse,
    summary="Toggle task completion",
)
async def toggle_task(
    task_id: str,
    owner_id: CurrentOwner,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """Flip a task between pending and completed."""
    store = await _load_store(owner_id, service)
    task = await store.toggle_task(task_id)
    if task is None:
        raise _not_found()
    return TaskResponse.from_task(task)


@router.delete(
    "/{task_id}",
    response_model=TaskDeleteResponse,
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    owner_id: CurrentOwner,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskDeleteResponse:
    """
    Delete a task by ID.

    Returns 404 if the task doesn't exist or belongs to another owner.
    """
    store = await _load_store(owner_id, service)
    if not await store.delete_task(task_id):
        raise _not_found()
    return TaskDeleteResponse(message="Task deleted successfully", id=task_id)
