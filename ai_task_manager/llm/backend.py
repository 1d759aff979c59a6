"""
AI Task Manager - Completion Backend

Single abstract capability used by every AI-driven stage:
complete(system instructions, user content, options) -> text.
"""

import asyncio
import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

import openai
from openai import AsyncOpenAI

from ai_task_manager.config import settings
from ai_task_manager.errors import (
    BackendCallError,
    BackendUnavailableError,
    MalformedBackendOutputError,
)

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


@dataclass(frozen=True)
class CompletionOptions:
    """Opaque tuning knobs forwarded to the backend."""

    model: str
    max_tokens: int = 500
    temperature: float = 0.1
    timeout: Optional[float] = None


class CompletionBackend(ABC):
    """
    Abstract completion backend.

    Implementations raise BackendUnavailableError when not configured and
    BackendCallError when the call itself fails.
    """

    @abstractmethod
    async def complete(self, system: str, user: str, options: CompletionOptions) -> str:
        pass


class OpenAICompletionBackend(CompletionBackend):
    """Completion backend on top of the OpenAI chat completions API."""

    def __init__(self, api_key: Optional[str] = None, enabled: Optional[bool] = None):
        api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        enabled = settings.USE_LLM if enabled is None else enabled
        self._client: Optional[AsyncOpenAI] = None

        if enabled and api_key:
            self._client = AsyncOpenAI(api_key=api_key)
            logger.info("OpenAI completion backend initialized")
        else:
            logger.info("OpenAI completion backend disabled (no API key or USE_LLM=false)")

    @property
    def available(self) -> bool:
        return self._client is not None

    async def complete(self, system: str, user: str, options: CompletionOptions) -> str:
        if self._client is None:
            raise BackendUnavailableError("OpenAI backend is not configured")

        timeout = options.timeout if options.timeout is not None else settings.LLM_TIMEOUT
        try:
            response = await self._client.chat.completions.create(
                model=options.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                max_tokens=options.max_tokens,
                temperature=options.temperature,
                timeout=timeout,
            )
        except (openai.OpenAIError, asyncio.TimeoutError) as e:
            raise BackendCallError(f"OpenAI call failed: {e}") from e

        if not response.choices:
            raise MalformedBackendOutputError("OpenAI returned no choices")

        content = (response.choices[0].message.content or "").strip()
        if not content:
            raise MalformedBackendOutputError("OpenAI returned an empty completion", raw=content)
        return content


def parse_json_object(content: str) -> Dict[str, Any]:
    """
    Extract a JSON object from model output.

    Accepts bare JSON, JSON wrapped in a markdown fence, or JSON embedded
    in surrounding prose. Raises MalformedBackendOutputError otherwise.
    """
    text = (content or "").strip()
    fence = _FENCE_PATTERN.match(text)
    if fence:
        text = fence.group(1).strip()

    candidates = [text]
    start, end = text.find("{"), text.rfind("}")
    if 0 <= start < end:
        candidates.append(text[start:end + 1])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    raise MalformedBackendOutputError("Backend output is not a JSON object", raw=content)


_backend: Optional[CompletionBackend] = None


def get_completion_backend() -> CompletionBackend:
    """Dependency returning the process-wide completion backend."""
    global _backend
    if _backend is None:
        _backend = OpenAICompletionBackend()
    return _backend
