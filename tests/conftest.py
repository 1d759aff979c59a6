"""
AI Task Manager - Test Configuration

Shared fixtures for CI-safe testing without MongoDB or a live model.
"""

import pytest
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from fastapi.testclient import TestClient

from ai_task_manager.main import app
from ai_task_manager.errors import BackendCallError, BackendUnavailableError, PersistenceError
from ai_task_manager.llm.backend import CompletionBackend, CompletionOptions, get_completion_backend
from ai_task_manager.analysis.service import TaskAnalysisService
from ai_task_manager.tasks.models import Task
from ai_task_manager.tasks.repository import InMemoryTaskRepository
from ai_task_manager.tasks.router import get_task_repository
from ai_task_manager.tasks.service import TaskService


class ScriptedBackend(CompletionBackend):
    """
    Completion backend driven by a handler callable.

    The handler receives (system, user, options) and returns the completion
    text or raises. Every call is recorded.
    """

    def __init__(self, handler: Callable[[str, str, CompletionOptions], str]):
        self.handler = handler
        self.calls: List[Tuple[str, str, CompletionOptions]] = []

    async def complete(self, system: str, user: str, options: CompletionOptions) -> str:
        self.calls.append((system, user, options))
        return self.handler(system, user, options)


def _raise_call_error(system, user, options):
    raise BackendCallError("model overloaded")


class UnavailableBackend(CompletionBackend):
    """Backend with no credentials configured."""

    def __init__(self):
        self.calls = 0

    async def complete(self, system: str, user: str, options: CompletionOptions) -> str:
        self.calls += 1
        raise BackendUnavailableError("OpenAI backend is not configured")


class FailingTaskRepository(InMemoryTaskRepository):
    """In-memory repository whose selected operations fail like a store outage."""

    def __init__(self, failing: Tuple[str, ...] = ()):
        super().__init__()
        self.failing = set(failing)

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.failing:
            raise PersistenceError(f"{operation} failed: connection refused")

    async def create(self, task):
        self._maybe_fail("create")
        return await super().create(task)

    async def list_by_owner(self, owner_id):
        self._maybe_fail("list")
        return await super().list_by_owner(owner_id)

    async def update(self, task_id, owner_id, updates):
        self._maybe_fail("update")
        return await super().update(task_id, owner_id, updates)

    async def delete(self, task_id, owner_id):
        self._maybe_fail("delete")
        return await super().delete(task_id, owner_id)

    async def count_by_owner(self, owner_id):
        self._maybe_fail("count")
        return await super().count_by_owner(owner_id)


# Time control fixtures for deterministic date handling
class FrozenClock:
    """A clock that returns a fixed time for deterministic testing."""

    def __init__(self, frozen_time: datetime):
        self._frozen_time = frozen_time

    def __call__(self) -> datetime:
        return self._frozen_time


@pytest.fixture
def frozen_now() -> datetime:
    """A fixed 'now' time for testing."""
    return datetime(2025, 6, 10, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def frozen_clock(frozen_now) -> FrozenClock:
    return FrozenClock(frozen_now)


@pytest.fixture
def failing_backend() -> ScriptedBackend:
    """Backend that throws for every call."""
    return ScriptedBackend(_raise_call_error)


@pytest.fixture
def unavailable_backend() -> UnavailableBackend:
    return UnavailableBackend()


@pytest.fixture
def task_repository() -> InMemoryTaskRepository:
    """Provide a fresh in-memory task repository for each test."""
    return InMemoryTaskRepository()


@pytest.fixture
def analysis_service(failing_backend, frozen_clock) -> TaskAnalysisService:
    return TaskAnalysisService(failing_backend, clock=frozen_clock)


@pytest.fixture
def task_service(task_repository, analysis_service, frozen_clock) -> TaskService:
    return TaskService(task_repository, analysis_service, clock=frozen_clock, max_tasks=50)


@pytest.fixture
def app_backend(failing_backend) -> CompletionBackend:
    """Backend injected into the app; override in a test module to script it."""
    return failing_backend


@pytest.fixture
def client(task_repository, app_backend):
    """Create test client with in-memory repository and a scripted backend."""

    async def override_get_task_repository():
        return task_repository

    def override_get_completion_backend():
        return app_backend

    app.dependency_overrides[get_task_repository] = override_get_task_repository
    app.dependency_overrides[get_completion_backend] = override_get_completion_backend

    yield TestClient(app)
    # Clean up override after test
    app.dependency_overrides.clear()


@pytest.fixture
def make_task():
    """Factory building a Task directly, bypassing the pipeline."""

    def _make(
        title: str = "Task",
        owner_id: str = "owner-1",
        task_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
        **fields,
    ) -> Task:
        task = Task.create(owner_id=owner_id, title=title, **fields)
        if task_id is not None:
            task.id = task_id
        if created_at is not None:
            task.created_at = created_at
            task.updated_at = created_at
        return task

    return _make


@pytest.fixture
def make_backend():
    """Factory for ScriptedBackend instances."""
    return ScriptedBackend


@pytest.fixture
def make_failing_repository():
    """Factory for repositories that fail on the named operations."""
    return FailingTaskRepository
