"""
AI Task Manager - Task Repository

Repository pattern for task data access.
Includes MongoDB implementation for runtime and an in-memory one for tests
and local demos.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from ai_task_manager.errors import PersistenceError
from ai_task_manager.tasks.models import Task


class TaskRepositoryInterface(ABC):
    """
    Abstract interface for task repository.

    Enables swapping implementations (MongoDB for runtime, in-memory for tests).
    All operations are scoped by owner_id to enforce ownership isolation.
    Implementations raise PersistenceError for store failures.
    """

    @abstractmethod
    async def create(self, task: Task) -> Task:
        pass

    @abstractmethod
    async def get_by_id(self, task_id: str, owner_id: str) -> Optional[Task]:
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> List[Task]:
        """List tasks for owner, newest first."""
        pass

    @abstractmethod
    async def update(self, task_id: str, owner_id: str, updates: dict) -> Optional[Task]:
        pass

    @abstractmethod
    async def delete(self, task_id: str, owner_id: str) -> bool:
        pass

    @abstractmethod
    async def count_by_owner(self, owner_id: str) -> int:
        pass


class TaskRepository(TaskRepositoryInterface):
    """
    MongoDB implementation of the task repository.

    All queries are scoped by owner_id to enforce ownership isolation.
    """

    COLLECTION_NAME = "tasks"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def create(self, task: Task) -> Task:
        try:
            await self.collection.insert_one(task.to_dict())
        except PyMongoError as e:
            raise PersistenceError(f"Failed to insert task {task.id}: {e}") from e
        return task

    async def get_by_id(self, task_id: str, owner_id: str) -> Optional[Task]:
        try:
            doc = await self.collection.find_one({"_id": task_id, "owner_id": owner_id})
        except PyMongoError as e:
            raise PersistenceError(f"Failed to read task {task_id}: {e}") from e
        if doc is None:
            return None
        return Task.from_dict(doc)

    async def list_by_owner(self, owner_id: str) -> List[Task]:
        tasks: List[Task] = []
        try:
            cursor = self.collection.find({"owner_id": owner_id}).sort("created_at", -1)
            async for doc in cursor:
                tasks.append(Task.from_dict(doc))
        except PyMongoError as e:
            raise PersistenceError(f"Failed to list tasks: {e}") from e
        return tasks

    async def update(self, task_id: str, owner_id: str, updates: dict) -> Optional[Task]:
        updates["updated_at"] = datetime.now(timezone.utc)

        try:
            result = await self.collection.find_one_and_update(
                {"_id": task_id, "owner_id": owner_id},
                {"$set": updates},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise PersistenceError(f"Failed to update task {task_id}: {e}") from e
        if result is None:
            return None
        return Task.from_dict(result)

    async def delete(self, task_id: str, owner_id: str) -> bool:
        try:
            result = await self.collection.delete_one({"_id": task_id, "owner_id": owner_id})
        except PyMongoError as e:
            raise PersistenceError(f"Failed to delete task {task_id}: {e}") from e
        return result.deleted_count > 0

    async def count_by_owner(self, owner_id: str) -> int:
        try:
            return await self.collection.count_documents({"owner_id": owner_id})
        except PyMongoError as e:
            raise PersistenceError(f"Failed to count tasks: {e}") from e


class InMemoryTaskRepository(TaskRepositoryInterface):
    """
    In-memory implementation for CI-safe testing and local demos.
    """

    def __init__(self):
        self._tasks: dict[str, Task] = {}

    async def create(self, task: Task) -> Task:
        self._tasks[task.id] = task
        return task

    async def get_by_id(self, task_id: str, owner_id: str) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is None or task.owner_id != owner_id:
            return None
        return task

    async def list_by_owner(self, owner_id: str) -> List[Task]:
        results = [task for task in self._tasks.values() if task.owner_id == owner_id]
        results.sort(key=lambda t: t.created_at, reverse=True)
        return results

    async def update(self, task_id: str, owner_id: str, updates: dict) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is None or task.owner_id != owner_id:
            return None

        # Updates carry stored (document) values, same as the MongoDB $set
        doc = task.to_dict()
        doc.update(updates)
        doc["updated_at"] = datetime.now(timezone.utc)
        updated = Task.from_dict(doc)
        self._tasks[task_id] = updated
        return updated

    async def delete(self, task_id: str, owner_id: str) -> bool:
        task = self._tasks.get(task_id)
        if task is None or task.owner_id != owner_id:
            return False
        del self._tasks[task_id]
        return True

    async def count_by_owner(self, owner_id: str) -> int:
        return sum(1 for t in self._tasks.values() if t.owner_id == owner_id)
