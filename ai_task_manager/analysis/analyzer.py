"""
AI Task Manager - Task Analyzer

Derives the structured annotation set for a task from normalized English
text and a caller-supplied reference date.

The extraction backend has no reliable clock, so "today" is always injected
into the prompt and every returned due date is checked against it.
"""

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Optional

from ai_task_manager.config import settings
from ai_task_manager.errors import TaskManagerError
from ai_task_manager.llm.backend import CompletionBackend, CompletionOptions, parse_json_object
from ai_task_manager.analysis.constants import FALLBACK_SUGGESTED_ACTIONS
from ai_task_manager.analysis.schemas import AIAnalysis
from ai_task_manager.tasks.enums import TaskPriority

logger = logging.getLogger(__name__)


ANALYSIS_SCHEMA = """{
  "title": "string (the task title)",
  "priority": "low|medium|high",
  "category": "string (e.g., Work & Meetings, Health & Wellness, Family & Relationships, Learning & Development, Shopping & Errands, Finance & Money, Home & Maintenance, Entertainment & Leisure, Technology, etc.)",
  "due_date": "YYYY-MM-DD or null",
  "urgency": "number 1-10",
  "importance": "number 1-10",
  "complexity": "simple|moderate|complex",
  "tags": ["array", "of", "relevant", "tags"],
  "estimatedDuration": "string or null (e.g., '30 minutes', '1-2 hours', '2-4 hours')",
  "subtasks": ["array", "of", "specific", "subtasks"],
  "context": "string (brief context description)",
  "suggestedActions": ["array", "of", "actionable", "steps"],
  "confidence": "number 1-100",
  "reasoning": ["array", "of", "reasoning", "points"],
  "timeSensitivity": "flexible|soon|urgent",
  "emotionalContext": "string or null (emotional aspects)",
  "workContext": "personal|professional",
  "energyLevel": "low|medium|high",
  "socialContext": "solo|collaborative|team",
  "locationContext": "string or null (where task should be done)",
  "toolsNeeded": ["array", "of", "required", "tools"],
  "blockers": ["array", "of", "potential", "obstacles"],
  "successCriteria": ["array", "of", "success", "metrics"]
}"""


def build_analysis_prompt(reference_date: date) -> str:
    today = reference_date.isoformat()
    year, month, day = reference_date.year, reference_date.month, reference_date.day
    next_month = 1 if month == 12 else month + 1
    return f"""You are an expert task analysis AI with advanced natural language understanding. Analyze the given task and provide a comprehensive analysis in the following JSON format.

IMPORTANT DATE CONTEXT:
- Today's date: {today}
- Current year: {year}
- Current month: {month}
- Current day: {day}

CRITICAL: All due dates must be in the future relative to today ({today}). Never use dates from previous years. Always calculate dates forward from the current date.

{ANALYSIS_SCHEMA}

ANALYSIS GUIDELINES:
- Analyze the task based on its content and context, not just keywords
- Consider the user's emotional state for analysis but focus on the core task
- Generate 5-10 specific, actionable suggested actions
- Identify 3-5 potential blockers
- Define 3-5 clear success criteria
- Detect work vs personal context, energy requirements and social aspects

DATE CALCULATION RULES (using current date: {today}):
- Urgent tasks: due 1-2 days from today
- Regular tasks: due 3-7 days from today
- Low priority tasks: due 1-2 weeks from today
- "tomorrow" = next day from today
- "next week" = 7 days from today
- "this weekend" = next Saturday/Sunday
- "end of week" = next Friday
- "this month" = a date between {today} and the end of {year}-{month:02d}
- "next month" = a date in month {next_month}
- Use YYYY-MM-DD format for all dates
- If there is no time reference, use the priority-based rules

Return only the JSON object."""


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse YYYY-MM-DD (or an ISO datetime) into a date; None if invalid."""
    if not value:
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def is_implausible_due_date(due: date, reference_date: date) -> bool:
    is_past = due < reference_date
    is_wrong_year = due.year < reference_date.year
    is_wrong_month = due.year == reference_date.year and due.month < reference_date.month
    is_too_far = due.year > reference_date.year + 1
    return is_past or is_wrong_year or is_wrong_month or is_too_far


def replacement_due_date(reference_date: date, priority: TaskPriority) -> date:
    """
    Priority-based due date used to replace an implausible one.

    Stays inside the reference month when the offset allows it, otherwise
    rolls to the first day of the following month.
    """
    if priority == TaskPriority.HIGH:
        offset = 2
    elif priority == TaskPriority.LOW:
        offset = 14
    else:
        offset = 7

    last_day = calendar.monthrange(reference_date.year, reference_date.month)[1]
    if last_day - reference_date.day >= offset:
        return reference_date + timedelta(days=offset)
    if reference_date.month == 12:
        return date(reference_date.year + 1, 1, 1)
    return date(reference_date.year, reference_date.month + 1, 1)


def repair_due_date(
    due_date: Optional[str],
    reference_date: date,
    priority: TaskPriority,
) -> Optional[str]:
    """Return a due date guaranteed to be a valid date on or after reference_date."""
    if due_date is None:
        return None

    parsed = parse_iso_date(due_date)
    if parsed is not None and not is_implausible_due_date(parsed, reference_date):
        return parsed.isoformat()

    repaired = replacement_due_date(reference_date, priority).isoformat()
    logger.info(f"Repaired implausible due date {due_date!r} -> {repaired} (reference {reference_date})")
    return repaired


class TaskAnalyzer:
    """Structured task analysis with a deterministic fallback."""

    def __init__(self, backend: CompletionBackend, model: Optional[str] = None):
        self.backend = backend
        self.options = CompletionOptions(
            model=model or settings.ANALYSIS_MODEL,
            max_tokens=3000,
            temperature=0.2,
        )

    async def analyze(self, text: str, reference_date: date) -> AIAnalysis:
        """
        Analyze task text. Always returns a usable analysis.

        Backend failures of any kind select the fallback analysis; a failure
        inside the fallback selects the minimal default.
        """
        try:
            return await self._analyze_with_backend(text, reference_date)
        except TaskManagerError as e:
            raw = getattr(e, "raw", None)
            if raw is not None:
                logger.warning(f"Unparseable analysis output, using fallback analysis: {raw!r}")
            else:
                logger.warning(f"Analysis backend failed, using fallback analysis: {e}")
        except Exception as e:
            logger.warning(f"Unexpected analysis error, using fallback analysis: {e}", exc_info=True)

        try:
            return self.fallback_analysis(text, reference_date)
        except Exception as e:
            logger.error(f"Fallback analysis failed, using minimal default: {e}", exc_info=True)
            return self.default_analysis(text)

    async def _analyze_with_backend(self, text: str, reference_date: date) -> AIAnalysis:
        content = await self.backend.complete(
            build_analysis_prompt(reference_date),
            f'Analyze this task: "{text}"',
            self.options,
        )
        analysis = AIAnalysis.model_validate(parse_json_object(content))
        updates = {
            "due_date": repair_due_date(analysis.due_date, reference_date, analysis.priority),
        }
        if not analysis.title:
            updates["title"] = text
        logger.debug(f"Analysis complete: priority={analysis.priority.value}, category={analysis.category}")
        return analysis.model_copy(update=updates)

    @staticmethod
    def fallback_analysis(text: str, reference_date: date) -> AIAnalysis:
        return AIAnalysis(
            title=text,
            priority=TaskPriority.MEDIUM,
            category="General",
            due_date=(reference_date + timedelta(days=3)).isoformat(),
            urgency=5,
            importance=5,
            context="Basic task analysis - AI analysis unavailable",
            suggested_actions=list(FALLBACK_SUGGESTED_ACTIONS),
            confidence=30,
            reasoning=["Fallback analysis used - AI analysis unavailable"],
            blockers=["AI analysis unavailable"],
            success_criteria=["Task completed successfully"],
        )

    @staticmethod
    def default_analysis(text: str) -> AIAnalysis:
        return AIAnalysis(title=text, confidence=50)
