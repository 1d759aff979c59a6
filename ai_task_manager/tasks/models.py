"""
AI Task Manager - Task Models

Internal task model for database operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional
import uuid

from ai_task_manager.tasks.enums import (
    TaskStatus,
    TaskPriority,
    Complexity,
    TimeSensitivity,
    WorkContext,
    EnergyLevel,
    SocialContext,
)


def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """MongoDB returns naive UTC datetimes; make them timezone-aware."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Analysis-bearing fields copied verbatim between Task, AIAnalysis and documents
LIST_FIELDS = (
    "tags",
    "subtasks",
    "suggested_actions",
    "blockers",
    "success_criteria",
    "tools_needed",
    "reasoning",
)
TEXT_FIELDS = (
    "estimated_duration",
    "context",
    "emotional_context",
    "location_context",
)


@dataclass
class Task:
    """Task entity for database storage."""

    id: str
    owner_id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    category: str = "General"
    due_date: Optional[str] = None
    urgency: int = 5
    importance: int = 5
    complexity: Complexity = Complexity.MODERATE
    tags: List[str] = field(default_factory=list)
    estimated_duration: Optional[str] = None
    subtasks: List[str] = field(default_factory=list)
    context: Optional[str] = None
    emotional_context: Optional[str] = None
    location_context: Optional[str] = None
    suggested_actions: List[str] = field(default_factory=list)
    blockers: List[str] = field(default_factory=list)
    success_criteria: List[str] = field(default_factory=list)
    tools_needed: List[str] = field(default_factory=list)
    reasoning: List[str] = field(default_factory=list)
    confidence: int = 80
    time_sensitivity: TimeSensitivity = TimeSensitivity.FLEXIBLE
    work_context: WorkContext = WorkContext.PERSONAL
    energy_level: EnergyLevel = EnergyLevel.MEDIUM
    social_context: SocialContext = SocialContext.SOLO
    original_text: Optional[str] = None
    source_language: str = "en"
    was_translated: bool = False
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    @classmethod
    def create(
        cls,
        owner_id: str,
        title: str,
        status: TaskStatus = TaskStatus.PENDING,
        priority: TaskPriority = TaskPriority.MEDIUM,
        **fields: Any,
    ) -> "Task":
        """Create a new task with generated ID."""
        if not title or not title.strip():
            raise ValueError("Task title cannot be empty")
        now = _utcnow()
        return cls(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            title=title.strip(),
            status=status,
            priority=priority,
            created_at=now,
            updated_at=now,
            **fields,
        )

    def to_dict(self) -> dict:
        """Convert task to dictionary for MongoDB storage."""
        doc = {
            "_id": self.id,
            "owner_id": self.owner_id,
            "title": self.title,
            "status": self.status.value,
            "priority": self.priority.value,
            "category": self.category,
            "due_date": self.due_date,
            "urgency": self.urgency,
            "importance": self.importance,
            "complexity": self.complexity.value,
            "confidence": self.confidence,
            "time_sensitivity": self.time_sensitivity.value,
            "work_context": self.work_context.value,
            "energy_level": self.energy_level.value,
            "social_context": self.social_context.value,
            "original_text": self.original_text,
            "source_language": self.source_language,
            "was_translated": self.was_translated,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        for name in LIST_FIELDS:
            doc[name] = list(getattr(self, name))
        for name in TEXT_FIELDS:
            doc[name] = getattr(self, name)
        return doc

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """
        Create task from MongoDB document.

        Legacy documents (status "in_progress", "dueDate", "user_id") are
        read into the canonical schema.
        """
        owner_id = data.get("owner_id") or data.get("user_id") or data.get("userId")
        due_date = data.get("due_date", data.get("dueDate"))
        return cls(
            id=str(data["_id"]),
            owner_id=owner_id,
            title=data["title"],
            status=TaskStatus.from_stored(data["status"]),
            priority=TaskPriority(data.get("priority") or "medium"),
            category=data.get("category") or "General",
            due_date=due_date or None,
            urgency=data.get("urgency", 5),
            importance=data.get("importance", 5),
            complexity=Complexity(data.get("complexity") or "moderate"),
            confidence=data.get("confidence", 80),
            time_sensitivity=TimeSensitivity(data.get("time_sensitivity") or "flexible"),
            work_context=WorkContext(data.get("work_context") or "personal"),
            energy_level=EnergyLevel(data.get("energy_level") or "medium"),
            social_context=SocialContext(data.get("social_context") or "solo"),
            original_text=data.get("original_text"),
            source_language=data.get("source_language") or "en",
            was_translated=bool(data.get("was_translated", False)),
            created_at=_as_utc(data["created_at"]),
            updated_at=_as_utc(data.get("updated_at") or data["created_at"]),
            **{name: list(data.get(name) or []) for name in LIST_FIELDS},
            **{name: data.get(name) for name in TEXT_FIELDS},
        )
