from __future__ import annotations
from typing import Dict, List

from pydantic import ValidationError as ModelValidationError

from task_tracker.domain.errors import ReadError
from task_tracker.domain.task_models import Task, TaskCreate, newest_first


class InMemoryTaskStore:
    """
    Process-local store for tests and demos (TASK_STORE=memory).
    Same contract as the DynamoDB store, nothing survives a restart.
    """
    def __init__(self):
        self._items: Dict[str, dict] = {}

    async def open(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def probe_connectivity(self) -> None:
        pass

    async def insert_task(self, title: str, description: str) -> Task:
        task = Task.new(TaskCreate(title=title, description=description))
        self._items[task.task_id] = task.to_item()
        return task

    async def list_tasks(self) -> List[Task]:
        try:
            tasks = [Task.model_validate(item) for item in self._items.values()]
        except ModelValidationError as e:
            raise ReadError(f"Failed to retrieve tasks: {e}") from e
        return newest_first(tasks)
