"""
AI Task Manager - Main Application

Natural-language task analysis and task management API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ai_task_manager.config import settings
from ai_task_manager.database import database
from ai_task_manager.llm.backend import get_completion_backend
from ai_task_manager.analysis import analysis_router
from ai_task_manager.tasks.router import router as tasks_router

import logging

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    if not get_completion_backend().available:
        logger.warning("No completion backend configured; AI stages will use fallbacks")

    if settings.USE_IN_MEMORY_STORE:
        logger.info("Using in-memory task store")
    else:
        await database.connect()

    yield

    await database.disconnect()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Task manager that turns natural-language input into structured tasks",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# Multiple origins via comma-separated CORS_ORIGINS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-User-Id"],
)


@app.get("/", tags=["Root"])
async def root() -> dict:
    """Root endpoint with service information."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


app.include_router(analysis_router)
app.include_router(tasks_router)
