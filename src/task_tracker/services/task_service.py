import logging
from typing import List, Optional

from task_tracker.domain.errors import ConnectivityError, ReadError, StoreNotConfigured, WriteError
from task_tracker.domain.task_models import Task, TaskCreate
from task_tracker.infra.db.stores import TaskStore

logger = logging.getLogger("task_tracker.tasks")


class TaskService:
    def __init__(self, store: Optional[TaskStore]):
        self.store = store

    def require_store(self) -> TaskStore:
        if self.store is None:
            raise StoreNotConfigured()
        return self.store

    async def check_ready(self) -> None:
        """Raises StoreNotConfigured or ConnectivityError when the store can't serve requests."""
        store = self.require_store()
        try:
            await store.probe_connectivity()
        except ConnectivityError as e:
            logger.error("ready.failed", extra={"category": "probe", "event": "ready.failed", "error": e.message})
            raise

    async def create_task(self, data: TaskCreate) -> Task:
        store = self.require_store()
        try:
            task = await store.insert_task(data.title, data.description)
        except WriteError as e:
            logger.error("task.create.failed", extra={"category": "tasks", "event": "task.create.failed", "error": e.message})
            raise
        logger.info(
            "task.create",
            extra={"category": "tasks", "event": "task.create", "taskId": task.task_id, "title": task.title},
        )
        return task

    async def list_tasks(self) -> List[Task]:
        store = self.require_store()
        try:
            tasks = await store.list_tasks()
        except ReadError as e:
            logger.error("tasks.list.failed", extra={"category": "tasks", "event": "tasks.list.failed", "error": e.message})
            raise
        logger.info("tasks.list", extra={"category": "tasks", "event": "tasks.list", "count": len(tasks)})
        return tasks
