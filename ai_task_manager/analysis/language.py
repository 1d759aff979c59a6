"""
AI Task Manager - Language Detection

Classifies the language of task input. The completion backend is tried
first; any failure falls back to marker-word scoring.
"""

import logging
import re
from typing import Iterable, Optional

from ai_task_manager.config import settings
from ai_task_manager.errors import MalformedBackendOutputError, TaskManagerError
from ai_task_manager.llm.backend import CompletionBackend, CompletionOptions, parse_json_object
from ai_task_manager.analysis.constants import (
    ENGLISH,
    SUPPORTED_LANGUAGES,
    SPANISH_MARKERS,
    FALLBACK_DETECTION_LANGUAGE,
    FALLBACK_DETECTION_MIN_MATCHES,
)
from ai_task_manager.analysis.schemas import LanguageDetectionResult

logger = logging.getLogger(__name__)


DETECTION_SYSTEM_PROMPT = """You are a language detection expert. Analyze the given text and determine its language. Return a JSON response with the following format:

{
  "language": "language_code (e.g., 'en', 'es', 'fr', 'de', 'it', 'pt')",
  "confidence": "number between 0 and 1"
}

Guidelines:
- Detect the primary language of the text
- Return language codes: 'en' for English, 'es' for Spanish, 'fr' for French, 'de' for German, 'it' for Italian, 'pt' for Portuguese
- Set confidence between 0 and 1 (1 being most confident)
- Return only the JSON object"""


def get_language_name(language_code: str) -> str:
    """English name for a supported language code."""
    return SUPPORTED_LANGUAGES.get((language_code or "").lower(), "Unknown")


def count_marker_matches(text: str, markers: Iterable[str] = SPANISH_MARKERS) -> int:
    """Count marker words or phrases present in text as whole words."""
    lowered = text.lower()
    matches = 0
    for marker in markers:
        if re.search(rf"(?<!\w){re.escape(marker)}(?!\w)", lowered):
            matches += 1
    return matches


def _normalize_code(value: object) -> Optional[str]:
    if not isinstance(value, str):
        return None
    code = value.strip().lower()
    # Accept regional variants such as "es-MX"
    code = re.split(r"[-_]", code)[0]
    if not re.fullmatch(r"[a-z]{2}", code):
        return None
    return code


_NAME_TO_CODE = {name.lower(): code for code, name in SUPPORTED_LANGUAGES.items()}


def _language_code(value: object) -> Optional[str]:
    """Language code from a backend answer, which may be a code or an English name."""
    if isinstance(value, str) and value.strip().lower() in _NAME_TO_CODE:
        return _NAME_TO_CODE[value.strip().lower()]
    return _normalize_code(value)


def _clamp_confidence(value: object, default: float = 0.5) -> float:
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return max(0.0, min(1.0, number))


class LanguageDetector:
    """Detects the language of free-form task text."""

    def __init__(self, backend: CompletionBackend, model: Optional[str] = None):
        self.backend = backend
        self.options = CompletionOptions(
            model=model or settings.DETECTION_MODEL,
            max_tokens=100,
            temperature=0.1,
        )

    async def detect(self, text: str) -> LanguageDetectionResult:
        """
        Detect the language of text.

        Blank input returns English with zero confidence, meaning no real
        evaluation took place. Never raises for backend problems.
        """
        if not text or not text.strip():
            return LanguageDetectionResult(language=ENGLISH, confidence=0.0, needs_translation=False)

        try:
            return await self._detect_with_backend(text)
        except TaskManagerError as e:
            raw = getattr(e, "raw", None)
            if raw is not None:
                logger.warning(f"Unparseable language detection output, using pattern detection: {raw!r}")
            else:
                logger.warning(f"Language detection backend failed, using pattern detection: {e}")
        except Exception as e:
            logger.warning(f"Unexpected language detection error, using pattern detection: {e}", exc_info=True)

        return self.detect_offline(text)

    async def _detect_with_backend(self, text: str) -> LanguageDetectionResult:
        content = await self.backend.complete(
            DETECTION_SYSTEM_PROMPT,
            f'Detect the language of this text: "{text}"',
            self.options,
        )
        data = parse_json_object(content)
        language = _language_code(data.get("language"))
        if language is None:
            raise MalformedBackendOutputError(
                f"Unrecognized language in detection output: {data.get('language')!r}",
                raw=content,
            )
        confidence = _clamp_confidence(data.get("confidence"))
        logger.debug(f"Backend detected {language} ({confidence:.2f})")
        return LanguageDetectionResult(
            language=language,
            confidence=confidence,
            needs_translation=language != ENGLISH,
        )

    @staticmethod
    def detect_offline(text: str) -> LanguageDetectionResult:
        """Marker-word detection used when the backend is unavailable."""
        matches = count_marker_matches(text)
        if matches >= FALLBACK_DETECTION_MIN_MATCHES:
            return LanguageDetectionResult(
                language=FALLBACK_DETECTION_LANGUAGE,
                confidence=min(0.9, 0.5 + 0.1 * matches),
                needs_translation=True,
            )
        return LanguageDetectionResult(language=ENGLISH, confidence=0.3, needs_translation=False)
