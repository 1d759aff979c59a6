"""
AI Task Manager - Completion Backend Package
"""

from ai_task_manager.llm.backend import (
    CompletionBackend,
    CompletionOptions,
    OpenAICompletionBackend,
    get_completion_backend,
    parse_json_object,
)

__all__ = [
    "CompletionBackend",
    "CompletionOptions",
    "OpenAICompletionBackend",
    "get_completion_backend",
    "parse_json_object",
]
