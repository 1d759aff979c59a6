"""
AI Task Manager - Analysis Module

Language detection, translation, structured analysis and title redaction.
"""

from ai_task_manager.analysis.router import router as analysis_router
from ai_task_manager.analysis.service import TaskAnalysisService

__all__ = ["analysis_router", "TaskAnalysisService"]
