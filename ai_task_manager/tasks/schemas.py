"""
AI Task Manager - Task Schemas

Pydantic models for task API requests and responses.
"""

from datetime import date, datetime
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator

from ai_task_manager.tasks.enums import (
    TaskStatus,
    TaskPriority,
    Complexity,
    TimeSensitivity,
    WorkContext,
    EnergyLevel,
    SocialContext,
)
from ai_task_manager.tasks.models import Task


def _validate_due_date(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value.strip()).isoformat()
    except ValueError:
        raise ValueError("due_date must be a valid YYYY-MM-DD date")


class TaskCreateRequest(BaseModel):
    """Request model for creating a task from structured input."""

    title: str = Field(min_length=1, max_length=500, description="Task title")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Task status")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    category: str = Field(default="General", min_length=1, max_length=100, description="Task category")
    due_date: Optional[str] = Field(default=None, description="Due date (YYYY-MM-DD)")
    urgency: int = Field(default=5, ge=1, le=10)
    importance: int = Field(default=5, ge=1, le=10)
    complexity: Complexity = Complexity.MODERATE
    tags: List[str] = Field(default_factory=list)
    estimated_duration: Optional[str] = Field(default=None, max_length=100)
    context: Optional[str] = Field(default=None, max_length=5000)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate title is not just whitespace."""
        if not v.strip():
            raise ValueError("Title cannot be empty or whitespace only")
        return v.strip()

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v: Optional[str]) -> Optional[str]:
        return _validate_due_date(v)


class TaskUpdateRequest(BaseModel):
    """Request model for updating a task."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=500, description="Task title")
    status: Optional[TaskStatus] = Field(default=None, description="Task status")
    priority: Optional[TaskPriority] = Field(default=None, description="Task priority")
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    due_date: Optional[str] = Field(default=None, description="Due date (YYYY-MM-DD)")
    urgency: Optional[int] = Field(default=None, ge=1, le=10)
    importance: Optional[int] = Field(default=None, ge=1, le=10)
    complexity: Optional[Complexity] = None
    tags: Optional[List[str]] = None
    estimated_duration: Optional[str] = Field(default=None, max_length=100)
    context: Optional[str] = Field(default=None, max_length=5000)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty or whitespace only")
        return v.strip() if v is not None else None

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v: Optional[str]) -> Optional[str]:
        return _validate_due_date(v)


class TaskResponse(BaseModel):
    """Response model for a single task."""

    id: str = Field(description="Task ID")
    owner_id: str = Field(description="Owner user ID")
    title: str = Field(description="Task title")
    status: TaskStatus
    priority: TaskPriority
    category: str
    due_date: Optional[str] = None
    urgency: int
    importance: int
    complexity: Complexity
    tags: List[str]
    estimated_duration: Optional[str] = None
    subtasks: List[str]
    context: Optional[str] = None
    emotional_context: Optional[str] = None
    location_context: Optional[str] = None
    suggested_actions: List[str]
    blockers: List[str]
    success_criteria: List[str]
    tools_needed: List[str]
    reasoning: List[str]
    confidence: int
    time_sensitivity: TimeSensitivity
    work_context: WorkContext
    energy_level: EnergyLevel
    social_context: SocialContext
    original_text: Optional[str] = None
    source_language: str
    was_translated: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        data = task.to_dict()
        data["id"] = data.pop("_id")
        return cls.model_validate(data)


class TaskListResponse(BaseModel):
    """Response model for the filtered and sorted task view."""

    tasks: List[TaskResponse] = Field(description="Filtered and sorted tasks")
    total: int = Field(description="Number of tasks in the owner's full collection")


class TaskStatsResponse(BaseModel):
    total: int
    pending: int
    completed: int
    overdue: int


class TaskDeleteResponse(BaseModel):
    """Response model for task deletion."""

    message: str = Field(description="Success message")
    id: str = Field(description="Deleted task ID")
