"""
AI Task Manager - Professional Title Redaction

Turns raw, often emotional input into a concise task title for storage.
"""

import json
import logging
from typing import Optional

from ai_task_manager.config import settings
from ai_task_manager.errors import TaskManagerError
from ai_task_manager.llm.backend import CompletionBackend, CompletionOptions
from ai_task_manager.analysis.constants import MAX_TITLE_LENGTH
from ai_task_manager.analysis.schemas import AIAnalysis

logger = logging.getLogger(__name__)


REDACTION_SYSTEM_PROMPT = f"""You are a professional task management assistant. Your job is to create a clean, professional task title for database storage based on the user's input and AI analysis.

IMPORTANT GUIDELINES:
- Create a professional, concise task title (max {MAX_TITLE_LENGTH} characters)
- Remove emotional language (stressed, bored, frustrated, etc.) but preserve the core task
- Remove personal context that's not relevant to the task itself
- Focus on the actionable task, not the emotional state
- Preserve all important details, deadlines, and context
- Return only the professional task title, no explanations

Examples:
- "I'm stressed about the project deadline" -> "Complete project by deadline"
- "I need to call mom this weekend" -> "Call mom this weekend"
- "Buy groceries because I'm out of food" -> "Buy groceries"
- "Schedule meeting with team tomorrow" -> "Schedule team meeting tomorrow\""""


def clean_title(raw: str) -> str:
    """Strip wrapping quotes and cap the title length."""
    title = raw.strip()
    if title.lower().startswith("title:"):
        title = title[len("title:"):].strip()
    while len(title) >= 2 and title[0] == title[-1] and title[0] in "\"'`":
        title = title[1:-1].strip()
    if len(title) > MAX_TITLE_LENGTH:
        title = title[:MAX_TITLE_LENGTH].rstrip()
    return title


class TitleRedactor:
    def __init__(self, backend: CompletionBackend, model: Optional[str] = None):
        self.backend = backend
        self.options = CompletionOptions(
            model=model or settings.REDACTION_MODEL,
            max_tokens=200,
            temperature=0.1,
        )

    async def redact(self, original_text: str, translated_text: str, analysis: AIAnalysis) -> str:
        """Professional title for the task; falls back to the input text."""
        fallback = translated_text or original_text
        try:
            title = clean_title(await self._redact_with_backend(original_text, translated_text, analysis))
        except TaskManagerError as e:
            logger.warning(f"Title redaction backend failed, using input text: {e}")
            return fallback
        except Exception as e:
            logger.warning(f"Unexpected title redaction error, using input text: {e}", exc_info=True)
            return fallback

        if not title:
            logger.warning("Empty professional title from backend, using input text")
            return fallback
        return title

    async def _redact_with_backend(self, original_text: str, translated_text: str, analysis: AIAnalysis) -> str:
        analysis_json = json.dumps(analysis.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)
        user = (
            f'Original text: "{original_text}"\n'
            f'Translated text: "{translated_text}"\n'
            f"AI Analysis: {analysis_json}\n\n"
            "Create a professional task title for database storage."
        )
        return await self.backend.complete(REDACTION_SYSTEM_PROMPT, user, self.options)
