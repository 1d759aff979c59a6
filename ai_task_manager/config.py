"""
AI Task Manager - Configuration Module

This module handles application configuration via environment variables.
"""

import os
from typing import Optional


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "AI Task Manager"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # MongoDB
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "ai_task_manager")
    # Keep tasks in process memory instead of MongoDB (local demos)
    USE_IN_MEMORY_STORE: bool = os.getenv("USE_IN_MEMORY_STORE", "false").lower() == "true"

    # CORS - Allowed origins for client requests
    # Multiple origins can be comma-separated
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ]

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Completion backend
    OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY", None)
    USE_LLM: bool = os.getenv("USE_LLM", "true").lower() == "true"
    MODEL_NAME: str = os.getenv("MODEL_NAME", "gpt-4o-mini")
    DETECTION_MODEL: str = os.getenv("DETECTION_MODEL", MODEL_NAME)
    TRANSLATION_MODEL: str = os.getenv("TRANSLATION_MODEL", MODEL_NAME)
    ANALYSIS_MODEL: str = os.getenv("ANALYSIS_MODEL", MODEL_NAME)
    REDACTION_MODEL: str = os.getenv("REDACTION_MODEL", MODEL_NAME)
    LLM_TIMEOUT: float = float(os.getenv("LLM_TIMEOUT", "30.0"))

    # Tasks
    # 0 disables the per-owner limit
    MAX_TASKS_PER_USER: int = int(os.getenv("MAX_TASKS_PER_USER", "50"))
    DEFAULT_OWNER_ID: str = os.getenv("DEFAULT_OWNER_ID", "demo-user-id")


settings = Settings()
