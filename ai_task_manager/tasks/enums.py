"""
AI Task Manager - Task Enums

Enums for task-related fields and for the task list view.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task status values."""
    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def from_stored(cls, value: str) -> "TaskStatus":
        """
        Read a stored status, mapping the legacy three-state schema.

        Documents written by the older CRUD variant may carry "in_progress";
        that state is not part of the canonical schema and reads as pending.
        """
        if value == "in_progress":
            return cls.PENDING
        return cls(value)


class TaskPriority(str, Enum):
    """Task priority levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Complexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class TimeSensitivity(str, Enum):
    FLEXIBLE = "flexible"
    SOON = "soon"
    URGENT = "urgent"


class WorkContext(str, Enum):
    PERSONAL = "personal"
    PROFESSIONAL = "professional"


class EnergyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SocialContext(str, Enum):
    SOLO = "solo"
    COLLABORATIVE = "collaborative"
    TEAM = "team"


class SortField(str, Enum):
    """Fields the task list view can be sorted by."""
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    URGENCY = "urgency"
    CREATED_AT = "created_at"
    ESTIMATED_DURATION = "estimatedDuration"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Wildcard filter value: no constraint on that dimension
FILTER_ALL = "all"
