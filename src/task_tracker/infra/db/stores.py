from __future__ import annotations
from typing import List, Protocol

from task_tracker import settings
from task_tracker.domain.errors import ConfigurationError
from task_tracker.domain.task_models import Task


class TaskStore(Protocol):
    async def open(self) -> None: ...

    async def close(self) -> None: ...

    async def probe_connectivity(self) -> None: ...

    async def insert_task(self, title: str, description: str) -> Task: ...

    async def list_tasks(self) -> List[Task]: ...


def build_store(backend: str | None = None) -> TaskStore:
    backend = backend or settings.store_backend()

    if backend == "dynamodb":
        from task_tracker.infra.db.task_store_dynamodb import DynamoTaskStore

        return DynamoTaskStore(settings.table_name(), settings.aws_region())
    if backend == "sqlite":
        from task_tracker.infra.db.task_store_sqlite import SQLiteTaskStore

        return SQLiteTaskStore(settings.db_path())
    if backend == "memory":
        from task_tracker.infra.db.task_store_memory import InMemoryTaskStore

        return InMemoryTaskStore()

    raise ConfigurationError(f"Unknown TASK_STORE backend: {backend!r}")
