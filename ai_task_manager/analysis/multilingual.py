"""
AI Task Manager - Multilingual Pipeline

Detect -> translate. The professional title produced here is a placeholder
equal to the translated text; the real redaction runs once the analysis
is available.
"""

import logging

from ai_task_manager.analysis.constants import ENGLISH
from ai_task_manager.analysis.language import LanguageDetector, get_language_name
from ai_task_manager.analysis.schemas import MultilingualResult
from ai_task_manager.analysis.translation import Translator

logger = logging.getLogger(__name__)


class MultilingualPipeline:
    def __init__(self, detector: LanguageDetector, translator: Translator):
        self.detector = detector
        self.translator = translator

    async def process(self, text: str) -> MultilingualResult:
        """Normalize text to English. Any internal failure passes the text through."""
        try:
            detection = await self.detector.detect(text)

            translated_text = text
            was_translated = False
            translation_confidence = 1.0

            if detection.needs_translation:
                translation = await self.translator.translate(text, detection.language, ENGLISH)
                translated_text = translation.translated_text
                was_translated = True
                translation_confidence = translation.confidence
                logger.info(
                    f"Translated {get_language_name(detection.language)} input "
                    f"(confidence {translation_confidence:.2f})"
                )

            return MultilingualResult(
                original_text=text,
                translated_text=translated_text,
                professional_title=translated_text,
                source_language=detection.language,
                was_translated=was_translated,
                translation_confidence=translation_confidence,
            )
        except Exception as e:
            logger.error(f"Multilingual processing failed, passing input through: {e}", exc_info=True)
            return MultilingualResult(
                original_text=text,
                translated_text=text,
                professional_title=text,
                source_language=ENGLISH,
                was_translated=False,
                translation_confidence=0.0,
            )
