from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from task_tracker.domain.task_models import AppConfig, Task

logger = logging.getLogger(__name__)


class ClientError(Exception):
    """A request the page would surface to the user."""


class TaskTrackerAPI:
    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def fetch_tasks(self) -> List[Task]:
        resp = await self.http.get("/api/tasks")
        if resp.is_error:
            raise ClientError(f"Failed to fetch tasks: {resp.reason_phrase}")
        data = resp.json()
        return [Task.model_validate(t) for t in data.get("tasks") or []]

    async def create_task(self, title: str, description: str) -> Task:
        resp = await self.http.post("/api/tasks", json={"title": title, "description": description})
        if resp.is_error:
            try:
                error = resp.json().get("error")
            except ValueError:
                error = None
            raise ClientError(error or "Failed to create task")
        return Task.model_validate(resp.json()["task"])

    async def fetch_config(self) -> Optional[AppConfig]:
        """None on any failure; callers keep whatever config they had."""
        try:
            resp = await self.http.get("/api/config")
            resp.raise_for_status()
            return AppConfig.model_validate(resp.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("config fetch failed: %s", e)
            return None
