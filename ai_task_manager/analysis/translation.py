"""
AI Task Manager - Translation

Normalizes non-English task text to English. When the completion backend
cannot be used, a swappable fallback strategy answers instead; the default
strategy is a fixed phrase table plus substring rules.
"""

import logging
from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence, Tuple

from ai_task_manager.config import settings
from ai_task_manager.errors import MalformedBackendOutputError, TaskManagerError
from ai_task_manager.llm.backend import CompletionBackend, CompletionOptions
from ai_task_manager.analysis.constants import (
    ENGLISH,
    PHRASE_TABLE,
    SUBSTRING_RULES,
    TABLE_MATCH_CONFIDENCE,
    UNMATCHED_CONFIDENCE,
    BACKEND_TRANSLATION_CONFIDENCE,
)
from ai_task_manager.analysis.language import get_language_name
from ai_task_manager.analysis.schemas import TranslationResult

logger = logging.getLogger(__name__)


def build_translation_prompt(source_language: str, target_language: str) -> str:
    source = get_language_name(source_language)
    target = get_language_name(target_language)
    return f"""You are a professional translator specializing in task management and productivity contexts. Translate the following text from {source} ({source_language}) to {target} ({target_language}).

IMPORTANT GUIDELINES:
- Preserve the original meaning and intent completely
- Maintain the urgency and priority level of the task
- Keep all important details and context
- Handle mixed languages (like Spanglish) by translating to proper {target}
- Return only the translated text, no explanations or additional text
- Ensure the translation is natural and professional in {target}"""


class FallbackTranslationStrategy(ABC):
    """Backend-independent translation used when the backend fails."""

    @abstractmethod
    def translate(self, text: str, source_language: str, target_language: str) -> Tuple[str, float]:
        """Return (translated_text, confidence)."""
        pass


class PhraseTableStrategy(FallbackTranslationStrategy):
    """
    Exact phrase lookup, then ordered substring rules.

    Quality is bounded by the table: unmatched text comes back unchanged
    with low confidence.
    """

    def __init__(
        self,
        phrases: Mapping[str, str] = PHRASE_TABLE,
        rules: Sequence[Tuple[Sequence[str], str]] = SUBSTRING_RULES,
    ):
        self.phrases = {key.lower(): value for key, value in phrases.items()}
        self.rules = rules

    def lookup(self, text: str) -> Optional[str]:
        lowered = text.strip().lower()
        exact = self.phrases.get(lowered)
        if exact is not None:
            return exact
        for fragments, translation in self.rules:
            if all(fragment in lowered for fragment in fragments):
                return translation
        return None

    def translate(self, text: str, source_language: str, target_language: str) -> Tuple[str, float]:
        match = self.lookup(text)
        if match is None:
            return text, UNMATCHED_CONFIDENCE
        return match, TABLE_MATCH_CONFIDENCE


class Translator:
    """Translates task text between languages, English by default."""

    def __init__(
        self,
        backend: CompletionBackend,
        fallback: Optional[FallbackTranslationStrategy] = None,
        model: Optional[str] = None,
    ):
        self.backend = backend
        self.fallback = fallback or PhraseTableStrategy()
        self.options = CompletionOptions(
            model=model or settings.TRANSLATION_MODEL,
            max_tokens=1000,
            temperature=0.1,
        )

    async def translate(
        self,
        text: str,
        source_language: str,
        target_language: str = ENGLISH,
    ) -> TranslationResult:
        if source_language == target_language:
            return self._result(text, text, source_language, target_language, 1.0)

        try:
            translated = await self._translate_with_backend(text, source_language, target_language)
            return self._result(
                translated, text, source_language, target_language, BACKEND_TRANSLATION_CONFIDENCE
            )
        except TaskManagerError as e:
            logger.warning(f"Translation backend failed, using fallback table: {e}")
        except Exception as e:
            logger.warning(f"Unexpected translation error, using fallback table: {e}", exc_info=True)

        try:
            translated, confidence = self.fallback.translate(text, source_language, target_language)
        except Exception as e:
            logger.error(f"Fallback translation failed: {e}", exc_info=True)
            return self._result(text, text, source_language, target_language, 0.0)

        if confidence <= UNMATCHED_CONFIDENCE:
            logger.info(f"No fallback translation for {source_language} text; passing it through")
        return self._result(translated, text, source_language, target_language, confidence)

    async def _translate_with_backend(self, text: str, source_language: str, target_language: str) -> str:
        content = await self.backend.complete(
            build_translation_prompt(source_language, target_language),
            text,
            self.options,
        )
        translated = (content or "").strip()
        if not translated:
            raise MalformedBackendOutputError("Empty translation", raw=content)
        return translated

    @staticmethod
    def _result(
        translated_text: str,
        original_text: str,
        source_language: str,
        target_language: str,
        confidence: float,
    ) -> TranslationResult:
        return TranslationResult(
            translated_text=translated_text,
            source_language=source_language,
            target_language=target_language,
            confidence=confidence,
            original_text=original_text,
        )
