"""
AI Task Manager - Task Analysis Service

Runs one natural-language submission through the whole pipeline:
multilingual normalization -> structured analysis -> professional title.
Stages run strictly in sequence.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Optional

from ai_task_manager.errors import InputValidationError
from ai_task_manager.llm.backend import CompletionBackend
from ai_task_manager.analysis.analyzer import TaskAnalyzer, parse_iso_date
from ai_task_manager.analysis.language import LanguageDetector
from ai_task_manager.analysis.multilingual import MultilingualPipeline
from ai_task_manager.analysis.redactor import TitleRedactor
from ai_task_manager.analysis.schemas import ProcessedTask
from ai_task_manager.analysis.translation import FallbackTranslationStrategy, Translator

logger = logging.getLogger(__name__)


class TaskAnalysisService:
    """Service layer for the task-analysis pipeline."""

    def __init__(
        self,
        backend: CompletionBackend,
        clock: Optional[Callable[[], datetime]] = None,
        translation_fallback: Optional[FallbackTranslationStrategy] = None,
    ):
        """
        Initialize the analysis service.

        Args:
            backend: Completion backend shared by every AI stage
            clock: Optional clock function for testing (returns current datetime)
            translation_fallback: Optional replacement for the phrase-table fallback
        """
        self.multilingual = MultilingualPipeline(
            LanguageDetector(backend),
            Translator(backend, fallback=translation_fallback),
        )
        self.analyzer = TaskAnalyzer(backend)
        self.redactor = TitleRedactor(backend)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def resolve_reference_date(self, current_date: Optional[str]) -> date:
        """Caller-supplied 'today', or the service clock's date when absent or invalid."""
        parsed = parse_iso_date(current_date)
        if parsed is None:
            if current_date:
                logger.warning(f"Ignoring unparseable currentDate {current_date!r}")
            return self._clock().date()
        return parsed

    async def process(self, text: Optional[str], current_date: Optional[str] = None) -> ProcessedTask:
        """
        Process a natural-language task description.

        Raises:
            InputValidationError: If text is empty; no backend call is made
        """
        if text is None or not text.strip():
            raise InputValidationError("Input is required")

        text = text.strip()
        reference_date = self.resolve_reference_date(current_date)
        logger.info(f"Processing task input ({len(text)} chars, reference date {reference_date})")

        language = await self.multilingual.process(text)
        analysis = await self.analyzer.analyze(language.translated_text, reference_date)
        professional_title = await self.redactor.redact(
            language.original_text,
            language.translated_text,
            analysis,
        )
        logger.debug(f"Professional title: {professional_title!r}")

        return ProcessedTask(
            original_text=language.original_text,
            translated_text=language.translated_text,
            professional_title=professional_title,
            source_language=language.source_language,
            was_translated=language.was_translated,
            translation_confidence=language.translation_confidence,
            analysis=analysis,
        )
