"""
AI Task Manager - Analysis Schemas

Pydantic models for the task-analysis pipeline.
Wire format keeps the camelCase keys of the process-task contract.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from ai_task_manager.tasks.enums import (
    TaskPriority,
    Complexity,
    TimeSensitivity,
    WorkContext,
    EnergyLevel,
    SocialContext,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LanguageDetectionResult(CamelModel):
    language: str = Field(default="en", description="Two-letter language code")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    needs_translation: bool = False


class TranslationResult(CamelModel):
    translated_text: str
    source_language: str
    target_language: str
    confidence: float = Field(ge=0.0, le=1.0)
    original_text: str


class MultilingualResult(CamelModel):
    original_text: str
    translated_text: str
    professional_title: str
    source_language: str = "en"
    was_translated: bool = False
    translation_confidence: float = Field(default=0.0, ge=0.0, le=1.0)


_ENUM_FIELDS = {
    "priority": TaskPriority,
    "complexity": Complexity,
    "time_sensitivity": TimeSensitivity,
    "work_context": WorkContext,
    "energy_level": EnergyLevel,
    "social_context": SocialContext,
}
_RANGES = {
    "urgency": (1, 10),
    "importance": (1, 10),
    "confidence": (0, 100),
}


class AIAnalysis(CamelModel):
    """
    Structured annotation set derived from natural-language task input.

    Missing keys take their defaults here; invalid enum values fall back to
    the default and numbers are clamped, so downstream code never sees an
    unvalidated payload.
    """

    title: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    category: str = "General"
    due_date: Optional[str] = Field(default=None, alias="due_date")
    urgency: int = 5
    importance: int = 5
    complexity: Complexity = Complexity.MODERATE
    tags: List[str] = Field(default_factory=list)
    estimated_duration: Optional[str] = None
    subtasks: List[str] = Field(default_factory=list)
    context: Optional[str] = None
    suggested_actions: List[str] = Field(default_factory=list)
    confidence: int = 80
    reasoning: List[str] = Field(default_factory=list)
    time_sensitivity: TimeSensitivity = TimeSensitivity.FLEXIBLE
    emotional_context: Optional[str] = None
    work_context: WorkContext = WorkContext.PERSONAL
    energy_level: EnergyLevel = EnergyLevel.MEDIUM
    social_context: SocialContext = SocialContext.SOLO
    location_context: Optional[str] = None
    tools_needed: List[str] = Field(default_factory=list)
    blockers: List[str] = Field(default_factory=list)
    success_criteria: List[str] = Field(default_factory=list)

    @field_validator(*_ENUM_FIELDS, mode="before")
    @classmethod
    def _enum_or_default(cls, value: Any, info: ValidationInfo) -> Any:
        enum_type = _ENUM_FIELDS[info.field_name]
        if isinstance(value, Enum):
            value = value.value
        if isinstance(value, str) and value.strip().lower() in {m.value for m in enum_type}:
            return value.strip().lower()
        return cls.model_fields[info.field_name].default

    @field_validator(*_RANGES, mode="before")
    @classmethod
    def _clamp(cls, value: Any, info: ValidationInfo) -> int:
        low, high = _RANGES[info.field_name]
        if isinstance(value, bool):
            return cls.model_fields[info.field_name].default
        try:
            number = int(round(float(value)))
        except (TypeError, ValueError, OverflowError):
            return cls.model_fields[info.field_name].default
        return max(low, min(high, number))

    @field_validator(
        "tags",
        "subtasks",
        "suggested_actions",
        "reasoning",
        "tools_needed",
        "blockers",
        "success_criteria",
        mode="before",
    )
    @classmethod
    def _string_list(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            return []
        return [str(item).strip() for item in value if item is not None and str(item).strip()]

    @field_validator(
        "estimated_duration",
        "context",
        "emotional_context",
        "location_context",
        "due_date",
        mode="before",
    )
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        if not text or text.lower() in ("null", "none"):
            return None
        return text

    @field_validator("title", mode="before")
    @classmethod
    def _title_text(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("category", mode="before")
    @classmethod
    def _category_text(cls, value: Any) -> str:
        text = "" if value is None else str(value).strip()
        return text or "General"


class ProcessTaskRequest(CamelModel):
    """Request body for natural-language task processing."""

    input: Optional[str] = Field(default=None, description="Free-form task description")
    current_date: Optional[str] = Field(
        default=None,
        description="Caller's 'today' as YYYY-MM-DD; grounds all relative dates",
    )


class ProcessedTask(CamelModel):
    """Result of the full pipeline: language bundle, analysis and final title."""

    success: bool = True
    original_text: str
    translated_text: str
    professional_title: str
    source_language: str
    was_translated: bool
    translation_confidence: float
    analysis: AIAnalysis


class ErrorResponse(BaseModel):
    error: str
